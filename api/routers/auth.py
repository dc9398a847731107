"""Authentication router for signup, login, token refresh and profile management."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.dependencies import get_current_claim
from config.database import get_database
from models.responses import ApiResponse
from models.user import (
    AccessTokenData,
    AuthData,
    LoginRequest,
    RefreshRequest,
    SignupRequest,
    TokenPayload,
    UpdateProfileRequest,
    UserData,
)
from services import auth_service


router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/signup", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
async def signup(user_data: SignupRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Register a new user account and return a token pair."""
    data = await auth_service.signup(db, user_data)
    return ApiResponse(message="User created successfully", data=data)


@router.post("/login", response_model=ApiResponse[AuthData])
async def login(credentials: LoginRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Authenticate user and return a token pair."""
    data = await auth_service.login(db, credentials.email, credentials.password)
    return ApiResponse(message="Login successful", data=data)


@router.post("/refresh", response_model=ApiResponse[AccessTokenData])
async def refresh(body: Optional[RefreshRequest] = None, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Exchange a refresh token for a new access token."""
    access_token = await auth_service.refresh_access_token(db, body.refresh_token if body else None)
    return ApiResponse(
        message="Token refreshed successfully",
        data=AccessTokenData(access_token=access_token),
    )


@router.get("/me", response_model=ApiResponse[UserData])
async def get_me(
    claim: TokenPayload = Depends(get_current_claim),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Get current authenticated user information."""
    user = await auth_service.get_current_user(db, claim.user_id)
    return ApiResponse(message="User fetched successfully", data=UserData(user=user))


@router.put("/profile", response_model=ApiResponse[UserData])
async def update_profile(
    changes: UpdateProfileRequest,
    claim: TokenPayload = Depends(get_current_claim),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Partially update the authenticated user's profile."""
    user = await auth_service.update_profile(db, claim.user_id, changes)
    return ApiResponse(message="Profile updated successfully", data=UserData(user=user))


@router.post("/logout", response_model=ApiResponse)
async def logout(claim: TokenPayload = Depends(get_current_claim)):
    """
    Acknowledge logout.

    Tokens are stateless and stay valid until they expire; the client is
    expected to discard them.
    """
    return ApiResponse(message="Logout successful")
