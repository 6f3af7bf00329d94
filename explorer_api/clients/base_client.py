"""Base JSON-RPC client for the Explorer API.

This module provides the core functionality for making JSON-RPC requests over
HTTP. Each call is one best-effort round trip: there are no retries and
nothing is cached.
"""

# Standard library imports
import itertools
from typing import Any, Dict, List, Optional

# Third-party library imports
import httpx

# Internal imports
from explorer_api.logging_config import get_logger
from explorer_api.utils.errors import RpcConnectionError, RpcError

logger = get_logger(__name__)


def unwrap_envelope(body: Any, method: str) -> Any:
    """Extract ``result`` from a JSON-RPC response body.

    Raises:
        RpcError: If the body carries an ``error`` member
        RpcConnectionError: If the body is not a JSON-RPC response
    """
    if not isinstance(body, dict):
        raise RpcConnectionError(f"Malformed JSON-RPC response for {method}", method=method)

    error = body.get("error")
    if error:
        if isinstance(error, dict):
            raise RpcError(
                error.get("message", "Unknown error"),
                rpc_code=error.get("code"),
                data=error.get("data"),
                method=method,
            )
        raise RpcError(str(error), method=method)

    if "result" not in body:
        raise RpcConnectionError(f"JSON-RPC response for {method} has no result", method=method)
    return body["result"]


class JsonRpcHttpClient:
    """Shared JSON-RPC-over-HTTP plumbing.

    Subclasses decide the envelope version and any authentication.
    """

    jsonrpc_version = "2.0"

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        auth: Optional[httpx.Auth] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            url: JSON-RPC endpoint
            timeout: Request timeout in seconds
            auth: Optional HTTP authentication
            http_client: Optional pre-built HTTP client (owned by the caller)
        """
        self.url = url
        self.timeout = timeout
        self.auth = auth
        self.headers = {"Content-Type": "application/json"}
        self._http_client = http_client
        self._owns_client = http_client is None
        self._ids = itertools.count(1)

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The shared HTTP client, created on first use."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            )
        return self._http_client

    def build_payload(self, method: str, params: List[Any]) -> Dict[str, Any]:
        """Build the JSON-RPC request envelope."""
        return {
            "jsonrpc": self.jsonrpc_version,
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

    async def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a JSON-RPC request and return its ``result``.

        Args:
            method: The RPC method to call
            params: The parameters to pass to the method

        Returns:
            The ``result`` member of the response

        Raises:
            RpcError: If the node returns a JSON-RPC error (message kept verbatim)
            RpcConnectionError: On timeouts, connection failures, non-2xx
                responses without a JSON-RPC error body, or non-JSON bodies
        """
        payload = self.build_payload(method, params or [])
        request_kwargs: Dict[str, Any] = {"headers": self.headers, "json": payload}
        if self.auth is not None:
            request_kwargs["auth"] = self.auth

        try:
            response = await self.http_client.post(self.url, **request_kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"RPC call {method} timed out: {str(e)}")
            raise RpcConnectionError(f"Request to {method} timed out", method=method) from e
        except httpx.HTTPError as e:
            logger.error(f"RPC call {method} failed: {str(e)}")
            raise RpcConnectionError(f"Request to {method} failed: {str(e)}", method=method) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error and not (isinstance(body, dict) and body.get("error")):
            logger.error(f"RPC call {method} returned HTTP {response.status_code}")
            raise RpcConnectionError(
                f"HTTP {response.status_code} from RPC endpoint for {method}", method=method
            )

        if body is None:
            raise RpcConnectionError(f"Non-JSON response from RPC endpoint for {method}", method=method)

        try:
            return unwrap_envelope(body, method)
        except RpcError as e:
            logger.error(f"RPC call {method} returned an error: {e.message}")
            raise

    async def close(self) -> None:
        """Close the client and release resources."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

