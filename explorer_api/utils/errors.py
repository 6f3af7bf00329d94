"""
Error handling utilities for the Explorer API.

This module defines the application's exception classes. Every failure that
crosses a component boundary is one of these, so route handlers can map
them to HTTP responses without inspecting arbitrary exception types.
"""

from enum import Enum
from typing import Any, Dict, Optional

HTTP_400_BAD_REQUEST = 400
HTTP_500_INTERNAL_SERVER_ERROR = 500


class ErrorCode(str, Enum):
    """Error codes for the Explorer API."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ADDRESS = "INVALID_ADDRESS"

    # Remote dependency errors
    RPC_ERROR = "RPC_ERROR"
    RPC_CONNECTION_ERROR = "RPC_CONNECTION_ERROR"
    DEPENDENCY_ERROR = "DEPENDENCY_ERROR"

    # Data errors
    DECODE_ERROR = "DECODE_ERROR"


class ExplorerAPIError(Exception):
    """Base exception for all Explorer API errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize a new Explorer API error.

        Args:
            message: Error message
            code: Error code
            status_code: HTTP status code
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details
        }


class ValidationError(ExplorerAPIError):
    """Exception for request validation errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=HTTP_400_BAD_REQUEST,
            details=details
        )


class InvalidPublicKeyError(ValidationError):
    """Exception raised when an invalid public key is provided."""

    def __init__(self, pubkey: Any, message: Optional[str] = None):
        super().__init__(message or f"Invalid public key: {pubkey}", details={"pubkey": pubkey})
        self.code = ErrorCode.INVALID_ADDRESS
        self.pubkey = pubkey


class RpcError(ExplorerAPIError):
    """Exception raised when a JSON-RPC request fails.

    ``message`` is the remote error message, verbatim.
    """

    def __init__(
        self,
        message: str,
        rpc_code: Optional[int] = None,
        data: Any = None,
        method: Optional[str] = None,
        code: ErrorCode = ErrorCode.RPC_ERROR
    ):
        details: Dict[str, Any] = {}
        if method:
            details["method"] = method
        if rpc_code is not None:
            details["rpc_code"] = rpc_code
        if data is not None:
            details["data"] = data
        super().__init__(message=message, code=code, details=details)
        self.rpc_code = rpc_code
        self.data = data
        self.method = method


class RpcConnectionError(RpcError):
    """Exception for transport-level RPC failures (timeouts, refused connections, bad HTTP)."""

    def __init__(self, message: str, method: Optional[str] = None):
        super().__init__(message, method=method, code=ErrorCode.RPC_CONNECTION_ERROR)


class DecodeError(ExplorerAPIError):
    """Exception raised when an encoded payload cannot be decoded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code=ErrorCode.DECODE_ERROR, details=details)


class DependencyError(ExplorerAPIError):
    """Exception raised when the database or cache round trip fails."""

    def __init__(self, message: str, service: str):
        super().__init__(message=message, code=ErrorCode.DEPENDENCY_ERROR,
                         details={"service": service})
        self.service = service
