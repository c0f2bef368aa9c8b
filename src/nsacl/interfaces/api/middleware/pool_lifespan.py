"""Pool lifespan middleware - opens the database pool on startup, closes it on shutdown."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """ASGI lifespan hooks for the connection pool.

    Startup waits for the pool's minimum connections, so a service that cannot
    reach its database fails at boot instead of on the first grant write.
    """

    def __init__(self, pool: AsyncConnectionPool, open_timeout: float = 30.0) -> None:
        self._pool = pool
        self._open_timeout = open_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=True, timeout=self._open_timeout)
        logger.info("db.pool.open", extra={"max_size": self._pool.max_size})

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("db.pool.closed")
