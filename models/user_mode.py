"""
User Mode Models

Defines schemas for mood journal entries ("user modes").
"""

from datetime import datetime
from pydantic import Field, field_validator

from models.user import CamelModel


class UserModeCreate(CamelModel):
    """Schema for creating a mood journal entry."""

    user_id: str = Field(..., min_length=1, description="Owner identifier, not checked against users")
    overall_mood: str = Field(..., min_length=1, description="Overall mood label")
    journal_entry: str = Field(..., min_length=1, description="Free-text journal entry")
    feelings: list[str] = Field(..., description="Feeling tags, may be empty")
    sleep_hours: str = Field(..., min_length=1, description="Hours slept, stored as text")

    @field_validator("sleep_hours", mode="before")
    @classmethod
    def stringify_sleep_hours(cls, v):
        """Accept numeric sleep hours and keep them as text."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class UserModeResponse(CamelModel):
    """Schema for a stored mood journal entry."""

    id: str
    user_id: str
    overall_mood: str
    journal_entry: str
    feelings: list[str]
    sleep_hours: str
    date: datetime

    @classmethod
    def from_document(cls, doc: dict) -> "UserModeResponse":
        return cls(
            id=str(doc["_id"]),
            user_id=doc["userId"],
            overall_mood=doc["overallMood"],
            journal_entry=doc["journalEntry"],
            feelings=doc["feelings"],
            sleep_hours=doc["sleepHours"],
            date=doc["date"],
        )
