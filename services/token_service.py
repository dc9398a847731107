"""JWT issuance and verification for access and refresh tokens."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from config.settings import settings
from exceptions import InvalidOrExpiredTokenError
from models.user import TokenPayload


def _encode(claim: TokenPayload, secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = claim.model_dump(by_alias=True)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, secret, algorithm=settings.JWT_ALGORITHM)


def _decode(token: str, secret: str) -> TokenPayload:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise InvalidOrExpiredTokenError(expired=True) from e
    except JWTError as e:
        raise InvalidOrExpiredTokenError() from e

    user_id = payload.get("userId")
    email = payload.get("email")
    if not isinstance(user_id, str) or not isinstance(email, str):
        raise InvalidOrExpiredTokenError()
    return TokenPayload(user_id=user_id, email=email)


def create_access_token(claim: TokenPayload, expires_delta: Optional[timedelta] = None) -> str:
    """Create a short-lived access token signed with the access secret."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(claim, settings.JWT_SECRET, expires_delta)


def create_refresh_token(claim: TokenPayload, expires_delta: Optional[timedelta] = None) -> str:
    """Create a long-lived refresh token signed with the refresh secret."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode(claim, settings.JWT_REFRESH_SECRET, expires_delta)


def verify_access_token(token: str) -> TokenPayload:
    """
    Verify an access token and return its claim.

    Raises:
        InvalidOrExpiredTokenError: bad signature, wrong secret, or elapsed expiry
    """
    return _decode(token, settings.JWT_SECRET)


def verify_refresh_token(token: str) -> TokenPayload:
    """
    Verify a refresh token and return its claim.

    Raises:
        InvalidOrExpiredTokenError: bad signature, wrong secret, or elapsed expiry
    """
    return _decode(token, settings.JWT_REFRESH_SECRET)


def create_token_pair(claim: TokenPayload) -> tuple[str, str]:
    """Issue an (access, refresh) token pair for the same claim."""
    return create_access_token(claim), create_refresh_token(claim)
