"""Constants used throughout the Explorer API application.

This module defines common constants to avoid duplication and ensure consistency.
"""

# Solana program IDs
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
MEMO_PROGRAM_ID = "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr"
MEMO_V1_PROGRAM_ID = "Memo1UhkJRfHyvLMcVucJwxXeuD728EqVDDwQDxFMNo"

MEMO_PROGRAM_IDS = frozenset({MEMO_PROGRAM_ID, MEMO_V1_PROGRAM_ID})
MEMO_PROGRAM_NAME = "spl-memo"

# Unit conversion
LAMPORTS_PER_SOL = 1_000_000_000

# Sizes of decoded base58 values
PUBKEY_LENGTH = 32
SIGNATURE_LENGTH = 64

# Public RPC endpoints by network name
SOLANA_NETWORK_URLS = {
    "mainnet": "https://api.mainnet-beta.solana.com",
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "devnet": "https://api.devnet.solana.com",
}

# Wallet query defaults
DEFAULT_HISTORY_LIMIT = 20
DEFAULT_FEES_LIMIT = 50
SUMMARY_FEES_LIMIT = 100

# Shipped defaults that the security checks flag
DEFAULT_CREDENTIAL = "mempool"
DEFAULT_HTTP_PORT = 8999
API_KEY_PLACEHOLDER = "your-api-key"

# Service names reported by the connection health checks
BITCOIN_CORE_SERVICE = "Bitcoin Core RPC"
DATABASE_SERVICE = "Database (MariaDB)"
REDIS_SERVICE = "Redis Cache"
