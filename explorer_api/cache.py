"""
Redis cache connection for the explorer.

The explorer caches through Redis elsewhere; this layer only owns the
connection and remembers whether it came up.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from explorer_api.config import RedisConfig
from explorer_api.logging_config import get_logger

logger = get_logger(__name__)


class RedisCache:
    """Redis connection with a cached connected flag."""

    def __init__(self, config: RedisConfig):
        self.config = config
        self._client: Optional[redis.Redis] = None
        self._connected = False

    async def connect(self) -> bool:
        """Connect and ping once, recording the outcome.

        Failures are logged and leave the cache marked as disconnected.
        """
        if self._client is None:
            self._client = redis.from_url(self.config.url)
        try:
            await self._client.ping()
            self._connected = True
            logger.info("Redis connection established")
        except (RedisError, OSError) as e:
            self._connected = False
            logger.warning(f"Redis connection failed: {str(e)}")
        return self._connected

    def is_connected(self) -> bool:
        """Return the last known connection state (no round trip)."""
        return self._connected

    async def close(self) -> None:
        """Close the connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._connected = False
