"""
Tenistas API — Health Check Route
===================================

What:  Health check endpoint for monitoring and container probes.
Why:   Load balancers and Docker need a cheap way to ask "can you serve?".
How:   For the database backend, executes SELECT 1; the in-memory backend
       is always reachable.

Status levels:
    - healthy:   Backing store reachable (HTTP 200)
    - unhealthy: Backing store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response
from sqlalchemy import text

from tenistas import __version__
from tenistas.database import engine
from tenistas.schemas.raqueta import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    backend = request.app.state.repository_backend
    storage_status = "connected"
    overall = "healthy"

    if backend == "database":
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            storage_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: database unreachable: %s", str(e))

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        repository_backend=backend,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
