"""Connection health and security check models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ConnectionStatus(str, Enum):
    """State of one dependency at the time it was checked."""

    CONNECTED = "connected"
    ERROR = "error"
    DISABLED = "disabled"
    WARNING = "warning"


class CheckStatus(str, Enum):
    """Outcome of one configuration audit."""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class ConnectionTestResult(BaseModel):
    """One dependency's health at a point in time."""

    service: str = Field(..., description="Name of the dependency")
    status: ConnectionStatus
    message: str
    latency: Optional[int] = Field(None, description="Round trip time in milliseconds")
    security_warnings: Optional[List[str]] = Field(None, alias="securityWarnings")

    model_config = {"populate_by_name": True}


class SecurityCheckResult(BaseModel):
    """One static configuration audit finding."""

    check: str
    status: CheckStatus
    message: str
    recommendation: Optional[str] = None


class HealthReport(BaseModel):
    """Connection results and security checks, stamped with the time they were produced."""

    connections: List[ConnectionTestResult]
    security: List[SecurityCheckResult]
    timestamp: str = Field(..., description="ISO-8601 UTC time of report generation")
