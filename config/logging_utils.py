"""
Debug Logging Utilities

Provides conditional logging based on DEBUG environment variable.
"""

import logging
from config.settings import settings


_debug_logger = logging.getLogger("debug")
_debug_handler = logging.StreamHandler()
_debug_handler.setFormatter(
    logging.Formatter('[%(asctime)s] [%(levelname)s] %(message)s', datefmt='%H:%M:%S')
)
_debug_logger.addHandler(_debug_handler)
_debug_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.WARNING)


def _format(message: str, args: tuple, prefix: str) -> str:
    formatted_message = f"[{prefix}] {message}" if prefix else message
    if args:
        formatted_message = formatted_message % args
    return formatted_message


def log_debug(message: str, *args, prefix: str = "") -> None:
    """
    Log a debug message only if DEBUG is set to True in settings.

    Args:
        message: The message to log
        *args: Additional arguments to format into the message
        prefix: Optional prefix for categorizing logs (e.g., "AUTH", "USER_MODE")
    """
    if not settings.DEBUG:
        return

    _debug_logger.debug(_format(message, args, prefix))


def log_success(message: str, prefix: str = "") -> None:
    """
    Log a success message with a checkmark.

    Args:
        message: The success message
        prefix: Optional prefix for categorizing logs
    """
    if not settings.DEBUG:
        return

    _debug_logger.info(_format(f"✓ {message}", (), prefix))


def log_error(message: str, prefix: str = "") -> None:
    """
    Log an error message with an X mark.

    Unlike the other helpers this is not gated on DEBUG.

    Args:
        message: The error message
        prefix: Optional prefix for categorizing logs
    """
    _debug_logger.error(_format(f"✗ {message}", (), prefix))
