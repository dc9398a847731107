"""Mood journal ("user mode") storage."""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from config.database import USER_MODES_COLLECTION
from config.logging_utils import log_debug
from models.user_mode import UserModeCreate, UserModeResponse


async def create_user_mode(db: AsyncIOMotorDatabase, entry: UserModeCreate) -> UserModeResponse:
    """
    Store a mood entry with a server-assigned date.

    The user id is stored as given; it is not checked against the users
    collection.
    """
    doc = {
        "userId": entry.user_id,
        "overallMood": entry.overall_mood,
        "journalEntry": entry.journal_entry,
        "feelings": list(entry.feelings),
        "sleepHours": entry.sleep_hours,
        "date": datetime.now(timezone.utc),
    }
    result = await db[USER_MODES_COLLECTION].insert_one(doc)
    doc["_id"] = result.inserted_id
    log_debug(f"Created user mode {result.inserted_id} for {entry.user_id}", prefix="USER_MODE")
    return UserModeResponse.from_document(doc)


async def get_user_modes(db: AsyncIOMotorDatabase, user_id: str) -> list[UserModeResponse]:
    """All entries stored for `user_id`, in natural storage order."""
    cursor = db[USER_MODES_COLLECTION].find({"userId": user_id})
    docs = await cursor.to_list(length=None)
    return [UserModeResponse.from_document(doc) for doc in docs]


async def create_user_mode_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for the user modes collection."""
    await db[USER_MODES_COLLECTION].create_index([("userId", 1)])
