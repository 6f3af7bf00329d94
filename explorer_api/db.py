"""Async SQLAlchemy engine handling for the explorer database.

The API layer only needs a liveness query; persistence itself belongs to the
rest of the explorer.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from explorer_api.config import DatabaseConfig
from explorer_api.constants import DATABASE_SERVICE
from explorer_api.logging_config import get_logger
from explorer_api.utils.errors import DependencyError

logger = get_logger(__name__)


class DatabaseClient:
    """Lazily connected handle on the explorer database."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._engine: Optional[AsyncEngine] = None

    def get_engine(self) -> AsyncEngine:
        """Create the engine on first use."""
        if self._engine is None:
            self._engine = create_async_engine(
                self.config.url,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
            logger.info(f"Database engine created for {self.config.host}:{self.config.port}")
        return self._engine

    async def query(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Run a text statement and return its rows.

        Raises:
            DependencyError: If the database cannot be reached or the statement fails
        """
        try:
            async with self.get_engine().connect() as conn:
                result = await conn.execute(text(sql), params or {})
                return list(result.fetchall())
        except (SQLAlchemyError, OSError) as e:
            raise DependencyError(str(e), service=DATABASE_SERVICE) from e

    async def close(self) -> None:
        """Dispose of the engine and its pool."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
