import pytest
from bson.errors import InvalidId
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import ExpiredSignatureError, JWTError
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from api.error_handlers import map_exception, register_error_handlers
from config.settings import settings
from exceptions import (
    DuplicateKeyError,
    InvalidCredentialsError,
    InvalidIdError,
    InvalidOrExpiredTokenError,
    MissingTokenError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc, expected_status, expected_message",
    [
        (DuplicateKeyError("email"), 400, "email already exists. Please use a different email."),
        (ValidationError("name is required"), 400, "name is required"),
        (InvalidIdError("abc"), 400, "Invalid ID format"),
        (InvalidOrExpiredTokenError(), 401, "Invalid token"),
        (InvalidOrExpiredTokenError(expired=True), 401, "Token expired"),
        (InvalidCredentialsError(), 401, "Invalid email or password"),
        (MissingTokenError("Refresh token is required"), 401, "Refresh token is required"),
        (NotFoundError("User"), 404, "User not found"),
        (RuntimeError("db exploded"), 500, "Internal Server Error"),
    ],
)
def test_map_exception_table(exc, expected_status, expected_message):
    status_code, message, _ = map_exception(exc)
    assert status_code == expected_status
    assert message == expected_message


def test_store_duplicate_key_uses_key_pattern_field():
    exc = MongoDuplicateKeyError("E11000 duplicate key", 11000, {"keyPattern": {"username": 1}})
    assert map_exception(exc)[:2] == (400, "username already exists. Please use a different username.")


def test_bson_invalid_id_maps_to_invalid_id_format():
    assert map_exception(InvalidId("bad"))[:2] == (400, "Invalid ID format")


def test_jose_errors_map_to_token_messages():
    assert map_exception(ExpiredSignatureError("expired"))[:2] == (401, "Token expired")
    assert map_exception(JWTError("bad signature"))[:2] == (401, "Invalid token")


class Item(BaseModel):
    name: str


@pytest.fixture
def probe_client():
    probe = FastAPI()
    register_error_handlers(probe)

    @probe.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    @probe.get("/missing")
    async def missing():
        raise NotFoundError("Widget")

    @probe.post("/items")
    async def items(item: Item):
        return item

    return TestClient(probe, raise_server_exceptions=False)


def test_unclassified_error_hides_message(probe_client):
    response = probe_client.get("/boom")
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Internal Server Error"


def test_stack_included_outside_production(probe_client, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    body = probe_client.get("/boom").json()
    assert "RuntimeError" in body["stack"]


def test_stack_never_included_in_production(probe_client, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    for path in ("/boom", "/missing"):
        assert "stack" not in probe_client.get(path).json()


def test_domain_error_envelope(probe_client):
    response = probe_client.get("/missing")
    assert response.status_code == 404
    assert response.json()["message"] == "Widget not found"


def test_request_validation_is_400_with_field_errors(probe_client):
    response = probe_client.post("/items", json={})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "name"


def test_unknown_route_is_404_envelope(probe_client):
    response = probe_client.get("/nowhere")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Route /nowhere not found"
