"""Authentication service for password hashing, user storage and session flows."""

import logging
from datetime import datetime, timezone
from typing import Optional

import bcrypt
from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from config.database import USERS_COLLECTION
from config.logging_utils import log_debug, log_success
from config.settings import settings
from exceptions import (
    DuplicateKeyError,
    InvalidCredentialsError,
    InvalidIdError,
    MissingTokenError,
    NotFoundError,
)
from models.user import (
    AuthData,
    SignupRequest,
    TokenPayload,
    UpdateProfileRequest,
    UserResponse,
)
from services.token_service import create_access_token, create_token_pair, verify_refresh_token

logger = logging.getLogger(__name__)

# Stored documents keep the hash under this key; it is projected away on reads.
PASSWORD_FIELD = "passwordHash"
SAFE_PROJECTION = {PASSWORD_FIELD: 0}


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')
    hashed_bytes = hashed_password.encode('utf-8')
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        # bcrypt rejects over-long passwords and malformed hashes
        return False


def to_object_id(user_id: str) -> ObjectId:
    """Parse a user identifier, raising InvalidIdError when malformed."""
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError) as e:
        raise InvalidIdError(user_id) from e


def _duplicate_field(error: MongoDuplicateKeyError) -> str:
    key_pattern = (error.details or {}).get("keyPattern") or {}
    if key_pattern:
        return next(iter(key_pattern))
    # Only unique index on the users collection
    return "email"


def _claim_for(user: dict) -> TokenPayload:
    return TokenPayload(user_id=str(user["_id"]), email=user["email"])


async def get_user_by_email(db: AsyncIOMotorDatabase, email: str, with_password: bool = False) -> Optional[dict]:
    """Get a user from database by email."""
    projection = None if with_password else SAFE_PROJECTION
    return await db[USERS_COLLECTION].find_one({"email": email}, projection)


async def get_user_by_id(db: AsyncIOMotorDatabase, user_id: str) -> Optional[dict]:
    """Get a user from database by ID, without the password hash."""
    return await db[USERS_COLLECTION].find_one({"_id": to_object_id(user_id)}, SAFE_PROJECTION)


async def create_user(db: AsyncIOMotorDatabase, user_data: SignupRequest) -> dict:
    """Insert a new user and return the stored document without its password hash."""
    now = datetime.now(timezone.utc)
    user_doc = {
        "name": user_data.name,
        "email": user_data.email,
        PASSWORD_FIELD: hash_password(user_data.password),
        "profileImage": user_data.profile_image or None,
        "createdAt": now,
        "updatedAt": now,
    }

    try:
        result = await db[USERS_COLLECTION].insert_one(user_doc)
    except MongoDuplicateKeyError as e:
        raise DuplicateKeyError(_duplicate_field(e)) from e

    user_doc["_id"] = result.inserted_id
    user_doc.pop(PASSWORD_FIELD)
    return user_doc


async def signup(db: AsyncIOMotorDatabase, user_data: SignupRequest) -> AuthData:
    """
    Register a user and issue their first token pair.

    Raises:
        DuplicateKeyError: the email is already registered
    """
    if await get_user_by_email(db, user_data.email):
        raise DuplicateKeyError("email")

    user = await create_user(db, user_data)
    access_token, refresh_token = create_token_pair(_claim_for(user))
    log_success(f"User created: {user['_id']}", prefix="AUTH")

    return AuthData(
        user=UserResponse.from_document(user),
        access_token=access_token,
        refresh_token=refresh_token,
    )


async def authenticate_user(db: AsyncIOMotorDatabase, email: str, password: str) -> Optional[dict]:
    """Authenticate a user with email and password."""
    user = await get_user_by_email(db, email, with_password=True)
    if not user:
        return None
    if not verify_password(password, user[PASSWORD_FIELD]):
        return None
    user.pop(PASSWORD_FIELD)
    return user


async def login(db: AsyncIOMotorDatabase, email: str, password: str) -> AuthData:
    """
    Log a user in and issue a token pair.

    Raises:
        InvalidCredentialsError: unknown email or wrong password, indistinguishably
    """
    user = await authenticate_user(db, email, password)
    if not user:
        log_debug("Rejected login attempt", prefix="AUTH")
        raise InvalidCredentialsError()

    access_token, refresh_token = create_token_pair(_claim_for(user))
    return AuthData(
        user=UserResponse.from_document(user),
        access_token=access_token,
        refresh_token=refresh_token,
    )


async def refresh_access_token(db: AsyncIOMotorDatabase, refresh_token: Optional[str]) -> str:
    """
    Exchange a refresh token for a new access token.

    The refresh token itself is not rotated. The new claim is built from the
    stored user, so an email change since issuance is picked up.

    Raises:
        MissingTokenError: no refresh token supplied
        InvalidOrExpiredTokenError: verification failed
        NotFoundError: the user behind the claim no longer exists
    """
    if not refresh_token:
        raise MissingTokenError("Refresh token is required")

    claim = verify_refresh_token(refresh_token)
    user = await get_user_by_id(db, claim.user_id)
    if not user:
        raise NotFoundError("User")

    return create_access_token(_claim_for(user))


async def get_current_user(db: AsyncIOMotorDatabase, user_id: str) -> UserResponse:
    """Resolve an authenticated identity to its safe user projection."""
    user = await get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User")
    return UserResponse.from_document(user)


async def update_profile(db: AsyncIOMotorDatabase, user_id: str, changes: UpdateProfileRequest) -> UserResponse:
    """
    Apply a partial profile update.

    `name` and `email` are skipped when left out or null; empty strings never
    get here because the request schema rejects them. `profile_image` is
    applied whenever the caller sent the key, including an explicit null that
    clears it.

    Raises:
        DuplicateKeyError: the new email belongs to another user
        NotFoundError: the user does not exist
    """
    object_id = to_object_id(user_id)
    update_data = {}
    if changes.name:
        update_data["name"] = changes.name
    if changes.email:
        update_data["email"] = changes.email
    if "profile_image" in changes.model_fields_set:
        update_data["profileImage"] = changes.profile_image

    collection = db[USERS_COLLECTION]
    if not update_data:
        user = await collection.find_one({"_id": object_id}, SAFE_PROJECTION)
    else:
        update_data["updatedAt"] = datetime.now(timezone.utc)
        try:
            user = await collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update_data},
                projection=SAFE_PROJECTION,
                return_document=ReturnDocument.AFTER,
            )
        except MongoDuplicateKeyError as e:
            raise DuplicateKeyError(_duplicate_field(e)) from e

    if not user:
        raise NotFoundError("User")

    log_debug(f"Profile updated for {user_id}: {sorted(update_data)}", prefix="AUTH")
    return UserResponse.from_document(user)


async def create_email_index(db: AsyncIOMotorDatabase) -> bool:
    """Create unique index on email field for fast lookups."""
    try:
        await db[USERS_COLLECTION].create_index("email", unique=True)
        return True
    except MongoDuplicateKeyError as e:
        logger.warning(f"Could not create email index: {e}")
        return False
