"""Logging configuration for the Explorer API server."""

import logging
import sys
import time
import uuid
from typing import Optional

import structlog

# Default log format
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "INFO", json_logs: bool = False,
                      log_format: Optional[str] = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render structlog events as JSON instead of key=value
        log_format: Log format string for stdlib records
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=log_format or DEFAULT_LOG_FORMAT,
        stream=sys.stdout,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Set third-party loggers to a higher level to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger
    """
    return logging.getLogger(name)


class RequestIdMiddleware:
    """ASGI middleware that tags each HTTP request with a request ID."""

    def __init__(self, app):
        self.app = app
        self.logger = structlog.get_logger("middleware")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        scope["request_id"] = request_id

        path = scope.get("path", "unknown")
        method = scope.get("method", "unknown")
        self.logger.info("Request received", request_id=request_id, method=method, path=path)

        start_time = time.perf_counter()

        async def wrapped_send(message):
            if message["type"] == "http.response.start":
                duration = (time.perf_counter() - start_time) * 1000
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode("latin-1")))
                message["headers"] = headers
                self.logger.info(
                    "Response sent",
                    request_id=request_id,
                    status=message.get("status", 0),
                    duration_ms=round(duration, 2),
                    method=method,
                    path=path,
                )
            await send(message)

        await self.app(scope, receive, wrapped_send)
