"""Pydantic models for the Explorer API."""

from explorer_api.models.health import (
    CheckStatus,
    ConnectionStatus,
    ConnectionTestResult,
    HealthReport,
    SecurityCheckResult,
)
from explorer_api.models.wallet import (
    FeeSummary,
    LiquidityPoolPosition,
    TokenAccountRecord,
    TransactionFees,
    TransactionRecord,
    WalletInfo,
    WalletStatistics,
    WalletSummary,
)

__all__ = [
    "CheckStatus",
    "ConnectionStatus",
    "ConnectionTestResult",
    "HealthReport",
    "SecurityCheckResult",
    "FeeSummary",
    "LiquidityPoolPosition",
    "TokenAccountRecord",
    "TransactionFees",
    "TransactionRecord",
    "WalletInfo",
    "WalletStatistics",
    "WalletSummary",
]
