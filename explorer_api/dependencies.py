"""
Dependency injection for the Explorer API.

Every shared client is constructed once in ``build_container`` and handed to
the services that need it. FastAPI dependencies read the container from the
application state.
"""

import logging
from dataclasses import dataclass

from fastapi import Request

from explorer_api.cache import RedisCache
from explorer_api.clients.bitcoin_rpc import BitcoinCoreClient
from explorer_api.clients.solana_rpc import SolanaRpcClient
from explorer_api.config import AppConfig
from explorer_api.db import DatabaseClient
from explorer_api.services.health_service import ConnectionHealthService
from explorer_api.services.transaction_service import TransactionService
from explorer_api.services.wallet_service import WalletService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Shared clients and the services built on them."""

    config: AppConfig
    solana_client: SolanaRpcClient
    bitcoin_client: BitcoinCoreClient
    database: DatabaseClient
    cache: RedisCache
    wallet_service: WalletService
    transaction_service: TransactionService
    health_service: ConnectionHealthService

    async def close(self) -> None:
        """Release HTTP clients, the database engine and the Redis connection."""
        await self.solana_client.close()
        await self.bitcoin_client.close()
        await self.database.close()
        await self.cache.close()
        logger.info("Service container closed")


def build_container(config: AppConfig) -> ServiceContainer:
    """
    Construct every client and service once.

    Args:
        config: The application configuration

    Returns:
        The populated container
    """
    logger.info("Initializing service container")

    solana_client = SolanaRpcClient(config.solana)
    bitcoin_client = BitcoinCoreClient(config.core_rpc)
    database = DatabaseClient(config.database)
    cache = RedisCache(config.redis)

    return ServiceContainer(
        config=config,
        solana_client=solana_client,
        bitcoin_client=bitcoin_client,
        database=database,
        cache=cache,
        wallet_service=WalletService(solana_client),
        transaction_service=TransactionService(solana_client),
        health_service=ConnectionHealthService(config, bitcoin_client, database, cache),
    )


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency returning the application's container."""
    return request.app.state.container


def get_wallet_service(request: Request) -> WalletService:
    return get_container(request).wallet_service


def get_transaction_service(request: Request) -> TransactionService:
    return get_container(request).transaction_service


def get_health_service(request: Request) -> ConnectionHealthService:
    return get_container(request).health_service
