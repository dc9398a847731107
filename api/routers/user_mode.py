"""
User Mode API Router

Create and list mood journal entries for a user identifier.
"""

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from config.database import get_database
from models.responses import ApiResponse
from models.user_mode import UserModeCreate, UserModeResponse
from services import user_mode_service


router = APIRouter(prefix="/api/user-mode", tags=["User Mode"])


@router.post("/create", response_model=ApiResponse[UserModeResponse], status_code=status.HTTP_201_CREATED)
async def create_user_mode(entry: UserModeCreate, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Store a mood journal entry."""
    user_mode = await user_mode_service.create_user_mode(db, entry)
    return ApiResponse(message="User mode created successfully", data=user_mode)


@router.get("/get/{user_id}", response_model=ApiResponse[list[UserModeResponse]])
async def get_user_modes(user_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """List every mood entry stored for a user id; empty when there are none."""
    user_modes = await user_mode_service.get_user_modes(db, user_id)
    return ApiResponse(message="User mode fetched successfully", data=user_modes)
