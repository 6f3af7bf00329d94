"""Bitcoin Core JSON-RPC client.

Only what the connection health checks need.
"""

from typing import Any, Dict, Optional

import httpx

from explorer_api.clients.base_client import JsonRpcHttpClient
from explorer_api.config import CoreRpcConfig


class BitcoinCoreClient(JsonRpcHttpClient):
    """Client for a Bitcoin Core node's JSON-RPC interface (basic auth)."""

    jsonrpc_version = "1.0"

    def __init__(self, config: CoreRpcConfig, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(
            config.url,
            timeout=config.timeout,
            auth=httpx.BasicAuth(config.username, config.password),
            http_client=http_client,
        )
        self.config = config

    async def get_blockchain_info(self) -> Dict[str, Any]:
        """Get chain name, block height and sync state."""
        return await self.call("getblockchaininfo")
