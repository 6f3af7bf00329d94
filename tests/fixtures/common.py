"""Common test fixtures for Explorer API tests.

This module provides fixtures that can be reused across different test modules.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from solders.hash import Hash
from solders.keypair import Keypair

from explorer_api.app import create_application
from explorer_api.cache import RedisCache
from explorer_api.clients.bitcoin_rpc import BitcoinCoreClient
from explorer_api.clients.solana_rpc import SolanaRpcClient
from explorer_api.config import AppConfig
from explorer_api.constants import MEMO_PROGRAM_ID, SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID
from explorer_api.db import DatabaseClient
from explorer_api.dependencies import ServiceContainer
from explorer_api.services.health_service import ConnectionHealthService
from explorer_api.services.transaction_service import TransactionService
from explorer_api.services.wallet_service import WalletService

# Deterministic keys so failures are reproducible
WALLET_KEYPAIR = Keypair.from_seed(bytes([7] * 32))
RECIPIENT_KEYPAIR = Keypair.from_seed(bytes([9] * 32))
WALLET_ADDRESS = str(WALLET_KEYPAIR.pubkey())
RECIPIENT_ADDRESS = str(RECIPIENT_KEYPAIR.pubkey())
TOKEN_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
TOKEN_ACCOUNT = str(Keypair.from_seed(bytes([11] * 32)).pubkey())
BLOCKHASH = str(Hash.new_unique())

SIGNATURES = [str(WALLET_KEYPAIR.sign_message(f"tx-{i}".encode())) for i in range(3)]


def make_transaction(signature, fee=5000, err=None, account_keys=None, instructions=None, slot=250000000):
    """Build a ``getTransaction`` (jsonParsed) result."""
    if account_keys is None:
        account_keys = [
            {"pubkey": WALLET_ADDRESS, "signer": True, "writable": True},
            {"pubkey": SYSTEM_PROGRAM_ID, "signer": False, "writable": False},
        ]
    return {
        "slot": slot,
        "blockTime": 1700000000,
        "meta": {"fee": fee, "err": err},
        "transaction": {
            "signatures": [signature],
            "message": {
                "accountKeys": account_keys,
                "instructions": instructions or [],
            },
        },
    }


def make_signature_entry(signature, slot=250000000, err=None):
    """Build one ``getSignaturesForAddress`` entry."""
    return {
        "signature": signature,
        "slot": slot,
        "blockTime": 1700000000,
        "err": err,
        "memo": None,
        "confirmationStatus": "finalized",
    }


@pytest.fixture
def app_config():
    """Create a default application configuration."""
    return AppConfig()


@pytest.fixture
def mock_solana_client():
    """Create a mock Solana RPC client."""
    client = AsyncMock(spec=SolanaRpcClient)

    # Common mock responses
    client.get_balance.return_value = 1000000000  # 1 SOL in lamports
    client.get_token_accounts_by_owner.return_value = []
    client.get_signatures_for_address.return_value = []
    client.get_transaction.return_value = None
    client.get_latest_blockhash.return_value = {
        "blockhash": BLOCKHASH,
        "lastValidBlockHeight": 200000000,
    }
    client.get_signature_status.return_value = None

    return client


@pytest.fixture
def mock_bitcoin_client():
    """Create a mock Bitcoin Core RPC client."""
    client = AsyncMock(spec=BitcoinCoreClient)
    client.get_blockchain_info.return_value = {"chain": "main", "blocks": 820000}
    return client


@pytest.fixture
def mock_database():
    """Create a mock database client."""
    database = AsyncMock(spec=DatabaseClient)
    database.query.return_value = [(1,)]
    return database


@pytest.fixture
def mock_cache():
    """Create a mock Redis cache."""
    cache = MagicMock(spec=RedisCache)
    cache.is_connected.return_value = True
    return cache


@pytest.fixture
def wallet_service(mock_solana_client):
    """Create a WalletService with a mock client."""
    return WalletService(mock_solana_client)


@pytest.fixture
def transaction_service(mock_solana_client):
    """Create a TransactionService with a mock client."""
    return TransactionService(mock_solana_client)


@pytest.fixture
def health_service(app_config, mock_bitcoin_client, mock_database, mock_cache):
    """Create a ConnectionHealthService with mock dependencies."""
    return ConnectionHealthService(app_config, mock_bitcoin_client, mock_database, mock_cache)


@pytest.fixture
def service_container(app_config, mock_solana_client, mock_bitcoin_client, mock_database,
                      mock_cache, wallet_service, transaction_service, health_service):
    """Create a service container wired with mocks."""
    return ServiceContainer(
        config=app_config,
        solana_client=mock_solana_client,
        bitcoin_client=mock_bitcoin_client,
        database=mock_database,
        cache=mock_cache,
        wallet_service=wallet_service,
        transaction_service=transaction_service,
        health_service=health_service,
    )


@pytest.fixture
def test_client(service_container):
    """Create a TestClient for an application using the mock container."""
    app = create_application(container=service_container)
    with TestClient(app) as client:
        yield client


# Test data fixtures
@pytest.fixture
def sample_transaction_data():
    """Sample parsed transaction with a memo."""
    return make_transaction(
        SIGNATURES[0],
        instructions=[
            {"program": "spl-memo", "programId": MEMO_PROGRAM_ID, "parsed": "hello explorer"},
        ],
    )


@pytest.fixture
def sample_token_accounts():
    """Sample ``getTokenAccountsByOwner`` value."""
    return [
        {
            "pubkey": TOKEN_ACCOUNT,
            "account": {
                "owner": TOKEN_PROGRAM_ID,
                "data": {
                    "program": "spl-token",
                    "parsed": {
                        "type": "account",
                        "info": {
                            "mint": TOKEN_MINT,
                            "owner": WALLET_ADDRESS,
                            "tokenAmount": {
                                "amount": "1500000",
                                "decimals": 6,
                                "uiAmount": 1.5,
                                "uiAmountString": "1.5",
                            },
                        },
                    },
                },
            },
        }
    ]
