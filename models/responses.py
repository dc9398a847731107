"""
API Response Models
===================

Uniform `{success, message, data?, errors?}` envelope shared by every route.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for successful responses."""

    success: bool = Field(default=True, description="Whether the request succeeded")
    message: str = Field(default="", description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Route-specific payload")


class ErrorResponse(BaseModel):
    """Envelope for failed responses."""

    success: bool = False
    message: str
    errors: Optional[list[Any]] = None
    stack: Optional[str] = Field(default=None, description="Failure trace, non-production only")
