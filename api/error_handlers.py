"""
Error Handlers
==============

The only place internal failures become wire responses. Domain errors carry
their kind from where they were raised; store and token errors that escaped
unconverted are classified here by type.
"""

import logging
import traceback
from typing import Optional

from bson.errors import InvalidId
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from jose import ExpiredSignatureError, JWTError
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from exceptions import (
    AppError,
    DuplicateKeyError,
    InvalidIdError,
    InvalidOrExpiredTokenError,
    ValidationError,
)
from models.responses import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def classify(exc: Exception) -> Optional[AppError]:
    """Translate a known store or token exception into the error taxonomy."""
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, MongoDuplicateKeyError):
        key_pattern = (exc.details or {}).get("keyPattern") or {}
        return DuplicateKeyError(next(iter(key_pattern), "field"))
    if isinstance(exc, InvalidId):
        return InvalidIdError()
    if isinstance(exc, ExpiredSignatureError):
        return InvalidOrExpiredTokenError(expired=True)
    if isinstance(exc, JWTError):
        return InvalidOrExpiredTokenError()
    return None


def map_exception(exc: Exception) -> tuple[int, str, Optional[list]]:
    """
    Map any exception to (status_code, message, errors).

    Unclassified exceptions become a 500 with a generic message so internal
    details never reach the caller through `message`.
    """
    error = classify(exc)
    if error is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, None
    return error.status_code, error.message, error.errors


def _stack_for(exc: Exception) -> Optional[str]:
    if settings.is_production or exc.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response(
    request: Request,
    exc: Exception,
    status_code: int,
    message: str,
    errors: Optional[list] = None,
) -> JSONResponse:
    """Log the failure and render the error envelope."""
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {status_code}: {exc!r}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {message}")

    body = ErrorResponse(message=message, errors=errors or None, stack=_stack_for(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def mapped_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle taxonomy errors and the store/token errors that map onto them."""
    status_code, message, errors = map_exception(exc)
    return error_response(request, exc, status_code, message, errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report schema failures as 400 with one entry per offending field."""
    errors = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        })
    error = ValidationError(errors=errors)
    return error_response(request, exc, error.status_code, error.message, error.errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown routes, wrong methods) in the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return error_response(request, exc, exc.status_code, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything no other handler claimed."""
    return await mapped_error_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    for exc_class in (AppError, MongoDuplicateKeyError, InvalidId, JWTError):
        app.add_exception_handler(exc_class, mapped_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
