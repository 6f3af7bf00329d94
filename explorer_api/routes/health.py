"""Connection health API routes.

This module exposes the dependency health checks and configuration audit.
"""

from typing import List

from fastapi import APIRouter, Depends

from explorer_api.dependencies import get_health_service
from explorer_api.models.health import ConnectionTestResult, HealthReport, SecurityCheckResult
from explorer_api.services.health_service import ConnectionHealthService
from explorer_api.utils.decorators import handle_api_errors

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get(
    "/connections",
    response_model=List[ConnectionTestResult],
    response_model_exclude_none=True,
    summary="Test backend connections",
    description="Tests the Bitcoin Core RPC, database and Redis connections in turn."
)
@handle_api_errors("Failed to test connections")
async def get_connection_health(
    service: ConnectionHealthService = Depends(get_health_service)
):
    return await service.test_all_connections()


@router.get(
    "/security",
    response_model=List[SecurityCheckResult],
    response_model_exclude_none=True,
    summary="Run security checks",
    description="Audits the configuration for default credentials and other insecure settings."
)
@handle_api_errors("Failed to run security checks")
async def get_security_checks(
    service: ConnectionHealthService = Depends(get_health_service)
):
    return service.run_security_checks()


@router.get(
    "/full",
    response_model=HealthReport,
    response_model_exclude_none=True,
    summary="Full health report",
    description="Connection results and security checks with the time the report was generated."
)
@handle_api_errors("Failed to generate full health report")
async def get_full_health_report(
    service: ConnectionHealthService = Depends(get_health_service)
):
    """Get a full health and security report.

    Args:
        service: The connection health service

    Returns:
        Connections, security checks and a timestamp
    """
    return await service.get_full_report()
