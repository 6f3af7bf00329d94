"""Connection health service for the Explorer API.

Probes the explorer's backend dependencies (Bitcoin Core RPC, the database
and the Redis cache) one round trip each, and audits the configuration for
insecure defaults.
"""

import time
from datetime import datetime, timezone
from typing import List, Optional

from explorer_api.cache import RedisCache
from explorer_api.clients.bitcoin_rpc import BitcoinCoreClient
from explorer_api.config import AppConfig
from explorer_api.constants import (
    API_KEY_PLACEHOLDER,
    BITCOIN_CORE_SERVICE,
    DATABASE_SERVICE,
    DEFAULT_CREDENTIAL,
    DEFAULT_HTTP_PORT,
    REDIS_SERVICE,
)
from explorer_api.db import DatabaseClient
from explorer_api.models.health import (
    CheckStatus,
    ConnectionStatus,
    ConnectionTestResult,
    HealthReport,
    SecurityCheckResult,
)
from explorer_api.services.base_service import BaseService

CREDENTIALS_RECOMMENDATION = "Change to secure credentials in the explorer configuration"


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.perf_counter() - start) * 1000))


def _is_default_credentials(username: str, password: str) -> bool:
    return username == DEFAULT_CREDENTIAL and password == DEFAULT_CREDENTIAL


def _credentials_check(check: str, username: str, password: str) -> SecurityCheckResult:
    if _is_default_credentials(username, password):
        return SecurityCheckResult(
            check=check,
            status=CheckStatus.WARNING,
            message=f"Using default credentials ({DEFAULT_CREDENTIAL}/{DEFAULT_CREDENTIAL})",
            recommendation=CREDENTIALS_RECOMMENDATION,
        )
    return SecurityCheckResult(
        check=check,
        status=CheckStatus.PASS,
        message="Custom credentials configured",
    )


class ConnectionHealthService(BaseService):
    """Service for dependency health checks and configuration audits."""

    def __init__(
        self,
        config: AppConfig,
        bitcoin_client: BitcoinCoreClient,
        database: DatabaseClient,
        cache: RedisCache
    ):
        """Initialize the health service.

        Args:
            config: Application configuration
            bitcoin_client: Bitcoin Core RPC client
            database: Database client
            cache: Redis cache connection
        """
        super().__init__()
        self.config = config
        self.bitcoin_client = bitcoin_client
        self.database = database
        self.cache = cache

    async def test_bitcoin_core_connection(self) -> ConnectionTestResult:
        """Check the node with one ``getblockchaininfo`` call.

        A response without a numeric block height is an error even though
        the call itself succeeded.
        """
        start = time.perf_counter()
        try:
            info = await self.bitcoin_client.get_blockchain_info()
        except Exception as e:
            self.logger.warning(f"Bitcoin Core connection test failed: {str(e)}")
            return ConnectionTestResult(
                service=BITCOIN_CORE_SERVICE,
                status=ConnectionStatus.ERROR,
                message=f"Connection failed: {str(e)}",
                latency=_elapsed_ms(start),
            )

        latency = _elapsed_ms(start)
        blocks = info.get("blocks") if isinstance(info, dict) else None
        if isinstance(blocks, int) and not isinstance(blocks, bool):
            return ConnectionTestResult(
                service=BITCOIN_CORE_SERVICE,
                status=ConnectionStatus.CONNECTED,
                message=f"Connected successfully. Chain: {info.get('chain')}, Blocks: {blocks}",
                latency=latency,
            )
        return ConnectionTestResult(
            service=BITCOIN_CORE_SERVICE,
            status=ConnectionStatus.ERROR,
            message="Unexpected response from Bitcoin Core",
            latency=latency,
        )

    async def test_database_connection(self) -> ConnectionTestResult:
        """Run a liveness query, unless the database is disabled."""
        if not self.config.database.enabled:
            return ConnectionTestResult(
                service=DATABASE_SERVICE,
                status=ConnectionStatus.DISABLED,
                message="Database is disabled in configuration",
            )

        start = time.perf_counter()
        try:
            await self.database.query("SELECT 1 AS test")
        except Exception as e:
            self.logger.warning(f"Database connection test failed: {str(e)}")
            return ConnectionTestResult(
                service=DATABASE_SERVICE,
                status=ConnectionStatus.ERROR,
                message=f"Connection failed: {str(e)}",
                latency=_elapsed_ms(start),
            )

        return ConnectionTestResult(
            service=DATABASE_SERVICE,
            status=ConnectionStatus.CONNECTED,
            message="Connected successfully",
            latency=_elapsed_ms(start),
        )

    async def test_redis_connection(self) -> ConnectionTestResult:
        """Report the cache's connected flag, unless Redis is disabled.

        No round trip is made; the flag is the one recorded at connect time.
        """
        if not self.config.redis.enabled:
            return ConnectionTestResult(
                service=REDIS_SERVICE,
                status=ConnectionStatus.DISABLED,
                message="Redis is disabled in configuration",
            )

        start = time.perf_counter()
        try:
            connected = self.cache.is_connected()
        except Exception as e:
            return ConnectionTestResult(
                service=REDIS_SERVICE,
                status=ConnectionStatus.ERROR,
                message=f"Connection check failed: {str(e)}",
                latency=_elapsed_ms(start),
            )

        if connected:
            return ConnectionTestResult(
                service=REDIS_SERVICE,
                status=ConnectionStatus.CONNECTED,
                message="Connected successfully",
                latency=_elapsed_ms(start),
            )
        return ConnectionTestResult(
            service=REDIS_SERVICE,
            status=ConnectionStatus.ERROR,
            message="Redis client is not connected",
            latency=_elapsed_ms(start),
        )

    def run_security_checks(self) -> List[SecurityCheckResult]:
        """Audit the configuration for insecure defaults. No I/O."""
        config = self.config
        results: List[SecurityCheckResult] = [
            _credentials_check(
                "Bitcoin Core RPC Credentials",
                config.core_rpc.username,
                config.core_rpc.password,
            )
        ]

        if config.database.enabled:
            results.append(_credentials_check(
                "Database Credentials",
                config.database.username,
                config.database.password,
            ))

        if config.backend.kind == "electrum":
            if config.electrum.tls_enabled:
                results.append(SecurityCheckResult(
                    check="Electrum TLS",
                    status=CheckStatus.PASS,
                    message="TLS is enabled for Electrum connection",
                ))
            else:
                results.append(SecurityCheckResult(
                    check="Electrum TLS",
                    status=CheckStatus.WARNING,
                    message="TLS is disabled for Electrum connection",
                    recommendation="Enable TLS in the explorer configuration for secure communication",
                ))

        if config.fiat_price.enabled:
            api_key = config.fiat_price.api_key
            if not api_key or API_KEY_PLACEHOLDER in api_key:
                results.append(SecurityCheckResult(
                    check="FreeCurrency API Key",
                    status=CheckStatus.WARNING,
                    message="API key not configured or using default placeholder",
                    recommendation="Configure a valid API key from freecurrencyapi.com",
                ))
            else:
                results.append(SecurityCheckResult(
                    check="FreeCurrency API Key",
                    status=CheckStatus.PASS,
                    message="API key is configured (key is never exposed in API responses)",
                ))

        results.append(SecurityCheckResult(
            check="CORS Configuration",
            status=CheckStatus.WARNING,
            message="API allows all origins (Access-Control-Allow-Origin: *)",
            recommendation=(
                "This is intentional for a public blockchain explorer. "
                "For private instances, restrict access with IP whitelisting or a VPN"
            ),
        ))

        port = config.server.port
        results.append(SecurityCheckResult(
            check="HTTP Port",
            status=CheckStatus.PASS,
            message=f"Using default port {DEFAULT_HTTP_PORT}" if port == DEFAULT_HTTP_PORT
            else f"Using custom port {port}",
        ))

        return results

    async def test_all_connections(self) -> List[ConnectionTestResult]:
        """Run the connection tests in order: node, database, cache."""
        return [
            await self.test_bitcoin_core_connection(),
            await self.test_database_connection(),
            await self.test_redis_connection(),
        ]

    async def get_full_report(self, now: Optional[datetime] = None) -> HealthReport:
        """Connection results and security checks, with a UTC timestamp."""
        connections = await self.test_all_connections()
        security = self.run_security_checks()
        generated_at = now or datetime.now(timezone.utc)
        return HealthReport(
            connections=connections,
            security=security,
            timestamp=generated_at.isoformat().replace("+00:00", "Z"),
        )
