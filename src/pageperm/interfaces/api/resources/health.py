"""Health check endpoints."""

import logging

import falcon.asgi
from psycopg import Error as PsycopgError

from pageperm.infrastructure.persistence.postgres.connection import ping

logger = logging.getLogger(__name__)


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, pool=None) -> None:
        self._pool = pool

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (database)."""
        if self._pool is not None:
            try:
                ok = await ping(self._pool)
            except PsycopgError as e:
                logger.warning("Readiness check failed: %s", e)
                ok = False
            if not ok:
                resp.media = {"status": "unavailable"}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
