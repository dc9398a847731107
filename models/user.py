"""User models for authentication and database storage."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional


BCRYPT_MAX_PASSWORD_BYTES = 72


class CamelModel(BaseModel):
    """Base schema that speaks camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelModel):
    """Schema for user registration."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    profile_image: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        """bcrypt only hashes the first 72 bytes, so longer passwords are refused."""
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(CamelModel):
    """Schema for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    """Schema for refresh token exchange."""
    refresh_token: Optional[str] = None


class UpdateProfileRequest(CamelModel):
    """
    Schema for partial profile updates.

    `profile_image` may be sent as null to clear it; leaving the key out
    keeps the stored value. Use `model_fields_set` to tell the two apart.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    profile_image: Optional[str] = None


class UserResponse(CamelModel):
    """Schema for user response (without sensitive data)."""
    id: str
    name: str
    email: str
    profile_image: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict) -> "UserResponse":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            profile_image=doc.get("profileImage"),
        )


class AuthData(CamelModel):
    """Payload returned by signup and login."""
    user: UserResponse
    access_token: str
    refresh_token: str


class AccessTokenData(CamelModel):
    """Payload returned by refresh."""
    access_token: str


class UserData(CamelModel):
    """Payload wrapping a single user."""
    user: UserResponse


class TokenPayload(CamelModel):
    """Claim embedded in access and refresh tokens."""
    user_id: str
    email: str
