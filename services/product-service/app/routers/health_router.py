"""
Health check router.

Provides liveness and readiness probes.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from ..config import settings
from ..core.redis_manager import redis_health_check

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    service: str = settings.SERVICE_NAME
    version: str = "1.0.0"


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict
    timestamp: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint - returns 200 if service is running",
)
async def health_check():
    """
    Basic health check.

    Always returns 200 OK if the service is running.
    Used by load balancers and orchestrators for liveness probes.
    """
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Check if service is ready to accept traffic (Redis reachable)",
)
async def readiness_check(request: Request, response: Response):
    """
    Readiness check.

    Returns 200 if Redis answers PING, 503 otherwise.
    """
    client = getattr(request.app.state, "redis_client", None)
    redis_ok = client is not None and await redis_health_check(client)

    checks = {"redis": "healthy" if redis_ok else "unavailable"}
    if not redis_ok:
        logger.warning("Readiness check failed: Redis unavailable")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        ready=redis_ok, checks=checks, timestamp=datetime.now(timezone.utc).isoformat()
    )
