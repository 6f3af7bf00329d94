"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    app_config,
    mock_solana_client,
    mock_bitcoin_client,
    mock_database,
    mock_cache,
    wallet_service,
    transaction_service,
    health_service,
    service_container,
    test_client,
    sample_transaction_data,
    sample_token_accounts,
)
