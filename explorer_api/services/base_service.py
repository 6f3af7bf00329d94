"""
Base service class for Explorer API services.

Services share a named logger and a timing helper for remote round trips.
"""

import logging
import time
from typing import Any, Optional

from explorer_api.logging_config import get_logger


class BaseService:
    """
    Base service class with common functionality.

    Services never retry: a failed remote call propagates to the caller.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the base service.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or get_logger(f"explorer_api.services.{self.__class__.__name__}")

    def log_with_context(self, level: str, message: str, **context: Any) -> None:
        """Log a message with key=value context appended."""
        if context:
            details = " ".join(f"{key}={value}" for key, value in context.items())
            message = f"{message} [{details}]"
        getattr(self.logger, level, self.logger.info)(message)

    def log_timing(self, operation_name: str) -> "TimingContextManager":
        """
        Create a context manager to log timing information.

        Args:
            operation_name: Name of the operation

        Returns:
            Timing context manager
        """
        return TimingContextManager(operation_name, self.logger)


class TimingContextManager:
    """Async context manager that logs how long an operation took."""

    def __init__(self, operation_name: str, logger: logging.Logger):
        self.operation_name = operation_name
        self.logger = logger
        self.start_time = 0.0
        self.elapsed_ms = 0.0

    async def __aenter__(self) -> "TimingContextManager":
        self.start_time = time.perf_counter()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000
        if exc_val is not None:
            self.logger.error(
                f"{self.operation_name} failed after {self.elapsed_ms:.0f}ms: {str(exc_val)}"
            )
        else:
            self.logger.debug(f"{self.operation_name} completed in {self.elapsed_ms:.0f}ms")
