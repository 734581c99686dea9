"""Ties the database pool to the ASGI lifespan."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Fills the pool to min_size at startup and drains it at shutdown."""

    def __init__(self, pool: AsyncConnectionPool, open_timeout: float = 30.0) -> None:
        self._pool = pool
        self._open_timeout = open_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        # Startup fails if the database is unreachable within open_timeout.
        await self._pool.open(wait=True, timeout=self._open_timeout)
        logger.info(
            "Database pool ready (min=%d max=%d)", self._pool.min_size, self._pool.max_size
        )

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool closed")
