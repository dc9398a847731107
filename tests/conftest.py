import asyncio
import os

# Must be set before config.settings is imported anywhere.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app import app
from config.database import get_database
from services.auth_service import create_email_index
from services.user_mode_service import create_user_mode_indexes

TEST_DB = "mindjournal_test"


def _make_db():
    db = AsyncMongoMockClient()[TEST_DB]

    async def _indexes():
        await create_email_index(db)
        await create_user_mode_indexes(db)

    # Private loop so the one pytest-asyncio manages is left untouched
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_indexes())
    finally:
        loop.close()
    return db


@pytest.fixture
def db():
    """In-memory database with the production indexes."""
    return _make_db()


@pytest.fixture
def client(db):
    """TestClient wired to the in-memory database; lifespan is not run."""
    app.dependency_overrides[get_database] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def signup_payload():
    return {
        "name": "Alice",
        "email": "alice@example.com",
        "password": "secret123",
        "profileImage": "https://img.example.com/alice.png",
    }


@pytest.fixture
def registered(client, signup_payload):
    """Sign up the default user and return the response data."""
    response = client.post("/api/auth/signup", json=signup_payload)
    assert response.status_code == 201
    return response.json()["data"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
