import pytest
from bson import ObjectId

from config.database import USERS_COLLECTION
from exceptions import (
    DuplicateKeyError,
    InvalidCredentialsError,
    InvalidIdError,
    InvalidOrExpiredTokenError,
    MissingTokenError,
    NotFoundError,
)
from models.user import SignupRequest, UpdateProfileRequest
from services import auth_service
from services.token_service import verify_access_token, verify_refresh_token


@pytest.fixture
def new_user():
    return SignupRequest(name="Bob", email="bob@example.com", password="hunter22")


def test_password_hash_round_trip():
    hashed = auth_service.hash_password("hunter22")
    assert hashed != "hunter22"
    assert auth_service.verify_password("hunter22", hashed)
    assert not auth_service.verify_password("hunter23", hashed)


async def test_signup_stores_only_the_hash(db, new_user):
    data = await auth_service.signup(db, new_user)
    stored = await db[USERS_COLLECTION].find_one({"email": "bob@example.com"})
    assert "password" not in stored
    assert "passwordHash" in stored
    assert auth_service.verify_password("hunter22", stored[auth_service.PASSWORD_FIELD])
    assert data.user.id == str(stored["_id"])
    assert data.user.profile_image is None


async def test_signup_tokens_carry_the_new_identity(db, new_user):
    data = await auth_service.signup(db, new_user)
    for claim in (verify_access_token(data.access_token), verify_refresh_token(data.refresh_token)):
        assert claim.user_id == data.user.id
        assert claim.email == "bob@example.com"


async def test_signup_rejects_existing_email(db, new_user):
    await auth_service.signup(db, new_user)
    with pytest.raises(DuplicateKeyError) as exc_info:
        await auth_service.signup(db, new_user)
    assert exc_info.value.message == "email already exists. Please use a different email."


async def test_login_failures_are_indistinguishable(db, new_user):
    await auth_service.signup(db, new_user)
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await auth_service.login(db, "bob@example.com", "not-it")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        await auth_service.login(db, "nobody@example.com", "hunter22")
    assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"


async def test_login_returns_safe_projection(db, new_user):
    await auth_service.signup(db, new_user)
    data = await auth_service.login(db, "bob@example.com", "hunter22")
    assert "password" not in data.user.model_dump()
    assert auth_service.PASSWORD_FIELD not in data.user.model_dump()


async def test_refresh_requires_a_token(db):
    with pytest.raises(MissingTokenError):
        await auth_service.refresh_access_token(db, None)
    with pytest.raises(MissingTokenError):
        await auth_service.refresh_access_token(db, "")


async def test_refresh_rejects_access_tokens(db, new_user):
    data = await auth_service.signup(db, new_user)
    with pytest.raises(InvalidOrExpiredTokenError):
        await auth_service.refresh_access_token(db, data.access_token)


async def test_refresh_uses_current_stored_email(db, new_user):
    data = await auth_service.signup(db, new_user)
    await auth_service.update_profile(db, data.user.id, UpdateProfileRequest(email="robert@example.com"))

    access_token = await auth_service.refresh_access_token(db, data.refresh_token)
    assert verify_access_token(access_token).email == "robert@example.com"


async def test_refresh_for_deleted_user_is_not_found(db, new_user):
    data = await auth_service.signup(db, new_user)
    await db[USERS_COLLECTION].delete_one({"_id": ObjectId(data.user.id)})
    with pytest.raises(NotFoundError) as exc_info:
        await auth_service.refresh_access_token(db, data.refresh_token)
    assert exc_info.value.message == "User not found"


async def test_get_current_user_with_malformed_id(db):
    with pytest.raises(InvalidIdError):
        await auth_service.get_current_user(db, "not-an-object-id")


async def test_update_profile_omitted_image_is_kept(db):
    data = await auth_service.signup(
        db, SignupRequest(name="Bob", email="bob@example.com", password="hunter22", profile_image="a.png")
    )
    user = await auth_service.update_profile(db, data.user.id, UpdateProfileRequest(name="Bobby"))
    assert user.name == "Bobby"
    assert user.profile_image == "a.png"


async def test_update_profile_null_image_clears_it(db):
    data = await auth_service.signup(
        db, SignupRequest(name="Bob", email="bob@example.com", password="hunter22", profile_image="a.png")
    )
    changes = UpdateProfileRequest.model_validate({"profileImage": None})
    user = await auth_service.update_profile(db, data.user.id, changes)
    assert user.profile_image is None
    assert user.name == "Bob"


async def test_update_profile_to_taken_email(db, new_user):
    await auth_service.signup(db, new_user)
    other = await auth_service.signup(db, SignupRequest(name="Eve", email="eve@example.com", password="hunter22"))
    with pytest.raises(DuplicateKeyError) as exc_info:
        await auth_service.update_profile(db, other.user.id, UpdateProfileRequest(email="bob@example.com"))
    assert exc_info.value.field == "email"


async def test_update_profile_unknown_user(db):
    with pytest.raises(NotFoundError):
        await auth_service.update_profile(db, str(ObjectId()), UpdateProfileRequest(name="Ghost"))


async def test_update_profile_without_changes_returns_user(db, new_user):
    data = await auth_service.signup(db, new_user)
    user = await auth_service.update_profile(db, data.user.id, UpdateProfileRequest())
    assert user == data.user
