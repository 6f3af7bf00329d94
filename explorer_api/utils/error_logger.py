"""Centralized error logging for the Explorer API.

Errors are logged through structlog with key/value context. Application
errors also carry their error code and details.
"""

from typing import Optional

import structlog

from explorer_api.utils.errors import ExplorerAPIError

logger = structlog.get_logger("api.errors")


def log_error(
    error: Exception,
    context: Optional[str] = None,
    exc_info: bool = True,
    level: str = "error",
    **kwargs
) -> Exception:
    """Log an error with optional context.

    Args:
        error: The exception to log
        context: Prefix for the log message, usually the failed operation
        exc_info: Whether to attach the traceback
        level: Log method to use
        **kwargs: Extra key/value fields for the event

    Returns:
        The original exception, so callers can ``raise log_error(e)``
    """
    if isinstance(error, ExplorerAPIError):
        kwargs.setdefault("error_code", error.code.value)
        if error.details:
            kwargs.setdefault("details", error.details)

    event = f"{context}: {error}" if context else str(error)
    log_method = getattr(logger, level, logger.error)
    log_method(event, error_type=type(error).__name__, exc_info=error if exc_info else None, **kwargs)
    return error
