"""Reusable decorators for the API.

This module provides the error handling wrapper shared by every route handler.
"""

import functools
from typing import Any, Callable, TypeVar, cast

from starlette.responses import JSONResponse

from explorer_api.utils.error_logger import log_error
from explorer_api.utils.errors import (
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
    ValidationError,
)

# Type variable for the decorated function
F = TypeVar('F', bound=Callable[..., Any])


def handle_api_errors(error_message: str) -> Callable[[F], F]:
    """Decorator factory to map exceptions raised by a route handler to HTTP responses.

    Validation failures become HTTP 400 ``{"error": <message>}`` and are
    logged as warnings. Anything else is logged with context and becomes
    HTTP 500 ``{"error": error_message, "message": <exception text>}``.

    Args:
        error_message: Operation specific text reported on server faults

    Returns:
        The decorator
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ValidationError as e:
                log_error(e, context=func.__name__, exc_info=False, level="warning")
                return JSONResponse({"error": e.message}, status_code=HTTP_400_BAD_REQUEST)
            except Exception as e:
                log_error(e, context=error_message, handler=func.__name__)
                return JSONResponse(
                    {"error": error_message, "message": str(e)},
                    status_code=HTTP_500_INTERNAL_SERVER_ERROR
                )

        return cast(F, wrapper)

    return decorator
