"""API dependencies for authentication and authorization."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional

from exceptions import MissingTokenError
from models.user import TokenPayload
from services.token_service import verify_access_token


bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_from_request(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[str]:
    """Extract the bearer token from the Authorization header."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return None


async def get_current_claim(token: Optional[str] = Depends(get_token_from_request)) -> TokenPayload:
    """
    Verify the access token and return its claim.

    Raises:
        MissingTokenError: no bearer token on the request
        InvalidOrExpiredTokenError: the token failed verification
    """
    if not token:
        raise MissingTokenError("Access token is required")
    return verify_access_token(token)
