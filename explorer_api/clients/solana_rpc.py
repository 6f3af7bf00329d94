"""Solana JSON-RPC client.

This module provides the single point through which the application talks to
a Solana node.
"""

# Standard library imports
import base64
from typing import Any, Dict, List, Optional

# Third-party library imports
import httpx

# Internal imports
from explorer_api.clients.base_client import JsonRpcHttpClient
from explorer_api.config import SolanaConfig
from explorer_api.logging_config import get_logger

logger = get_logger(__name__)


class SolanaRpcClient(JsonRpcHttpClient):
    """Typed client for the Solana JSON-RPC methods the explorer uses."""

    def __init__(self, config: SolanaConfig, http_client: Optional[httpx.AsyncClient] = None):
        """Initialize the Solana client.

        Args:
            config: Solana configuration
            http_client: Optional pre-built HTTP client
        """
        super().__init__(config.rpc_url, timeout=config.timeout, http_client=http_client)
        self.config = config
        logger.info(f"Solana RPC client initialized with endpoint {config.rpc_url.split('?')[0]}")

    async def get_balance(self, address: str) -> int:
        """Get account balance in lamports."""
        result = await self.call("getBalance", [address, {"commitment": self.config.commitment}])
        return result["value"]

    async def get_token_accounts_by_owner(
        self,
        owner: str,
        program_id: str,
        encoding: str = "jsonParsed"
    ) -> List[Dict[str, Any]]:
        """Get the token accounts held by ``owner`` under ``program_id``."""
        result = await self.call(
            "getTokenAccountsByOwner",
            [owner, {"programId": program_id}, {"encoding": encoding, "commitment": self.config.commitment}],
        )
        return result["value"]

    async def get_signatures_for_address(self, address: str, limit: int = 20) -> List[Dict[str, Any]]:
        """Get recent transaction signatures for an address, newest first."""
        return await self.call(
            "getSignaturesForAddress",
            [address, {"limit": limit, "commitment": self.config.commitment}],
        )

    async def get_transaction(self, signature: str) -> Optional[Dict[str, Any]]:
        """Get parsed transaction details, or None if the node does not know it."""
        return await self.call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": self.config.commitment,
                },
            ],
        )

    async def get_latest_blockhash(self) -> Dict[str, Any]:
        """Get the latest blockhash and its last valid block height."""
        result = await self.call("getLatestBlockhash", [{"commitment": self.config.commitment}])
        return result["value"]

    async def send_raw_transaction(self, raw_transaction: bytes) -> str:
        """Broadcast a serialized transaction and return its signature."""
        encoded = base64.b64encode(raw_transaction).decode("ascii")
        return await self.call(
            "sendTransaction",
            [encoded, {"encoding": "base64", "preflightCommitment": self.config.commitment}],
        )

    async def get_signature_status(self, signature: str) -> Optional[Dict[str, Any]]:
        """Get the confirmation status of one signature, or None if unknown."""
        result = await self.call(
            "getSignatureStatuses",
            [[signature], {"searchTransactionHistory": True}],
        )
        statuses = result.get("value") or [None]
        return statuses[0]
