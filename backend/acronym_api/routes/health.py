"""
Acronym API: Health Check Route
==================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Pings MongoDB with the same per-request store the API routes use.

Status levels:
    - healthy:   MongoDB answered the ping (HTTP 200)
    - unhealthy: MongoDB unreachable (HTTP 200, flagged in the body)
"""

import logging
import time

from fastapi import APIRouter, Depends

from acronym_api import __version__
from acronym_api.database import AcronymStore, get_acronym_store
from acronym_api.schemas.acronym import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: AcronymStore = Depends(get_acronym_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: MongoDB unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
