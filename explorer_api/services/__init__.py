"""Domain services for the Explorer API."""

from explorer_api.services.health_service import ConnectionHealthService
from explorer_api.services.transaction_service import TransactionService
from explorer_api.services.wallet_service import WalletService

__all__ = ["ConnectionHealthService", "TransactionService", "WalletService"]
