"""
Application Exceptions
======================

Closed error taxonomy for the service. Every failure that should reach the
caller with a specific status is raised as one of these, with its kind
chosen where it is raised:

    AppError (base)
    ├── ValidationError          400
    ├── DuplicateKeyError        400
    ├── InvalidIdError           400
    ├── InvalidCredentialsError  401
    ├── MissingTokenError        401
    ├── InvalidOrExpiredTokenError 401
    └── NotFoundError            404

Anything else is unclassified and becomes a 500 in the error handlers.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of failure the error handlers know how to map."""

    VALIDATION = "validation"
    DUPLICATE_KEY = "duplicate_key"
    INVALID_ID = "invalid_id"
    INVALID_CREDENTIALS = "invalid_credentials"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"
    NOT_FOUND = "not_found"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.DUPLICATE_KEY: 400,
    ErrorKind.INVALID_ID: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.MISSING_TOKEN: 401,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.TOKEN_EXPIRED: 401,
    ErrorKind.NOT_FOUND: 404,
}


class AppError(Exception):
    """
    Base exception for all service errors.

    Attributes:
        kind: Which member of the taxonomy this is
        message: Human-readable error description, sent to the caller
        errors: Optional per-field details (validation failures)
    """

    kind: ErrorKind

    def __init__(self, message: str, errors: Optional[list] = None):
        self.message = message
        self.errors = errors
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(AppError):
    """Raised when input fails schema validation."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str = "Validation failed", errors: Optional[list] = None):
        super().__init__(message, errors)


class DuplicateKeyError(AppError):
    """Raised when a write would violate a unique field."""

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} already exists. Please use a different {field}.")


class InvalidIdError(AppError):
    """Raised when an identifier is not a valid ObjectId."""

    kind = ErrorKind.INVALID_ID

    def __init__(self, value: str = ""):
        self.value = value
        super().__init__("Invalid ID format")


class InvalidCredentialsError(AppError):
    """Raised for an unknown email or a wrong password, indistinguishably."""

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self):
        super().__init__("Invalid email or password")


class MissingTokenError(AppError):
    """Raised when a required token was not supplied."""

    kind = ErrorKind.MISSING_TOKEN

    def __init__(self, message: str = "Token is required"):
        super().__init__(message)


class InvalidOrExpiredTokenError(AppError):
    """Raised when a token fails signature or expiry verification."""

    def __init__(self, expired: bool = False):
        self.expired = expired
        self.kind = ErrorKind.TOKEN_EXPIRED if expired else ErrorKind.INVALID_TOKEN
        super().__init__("Token expired" if expired else "Invalid token")


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")
