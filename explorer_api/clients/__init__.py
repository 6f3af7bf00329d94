"""JSON-RPC client modules for the Explorer API.

This package provides the clients used to reach the Solana node and the
Bitcoin Core node.
"""

from explorer_api.clients.base_client import JsonRpcHttpClient, unwrap_envelope
from explorer_api.clients.bitcoin_rpc import BitcoinCoreClient
from explorer_api.clients.solana_rpc import SolanaRpcClient

__all__ = [
    'JsonRpcHttpClient',
    'unwrap_envelope',
    'BitcoinCoreClient',
    'SolanaRpcClient',
]
