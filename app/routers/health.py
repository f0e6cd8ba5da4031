# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.config import settings
from app.dependencies import get_repository
from core.repositories.base import PromoRepository

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    storage_backend: str
    database: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version="1.0.0",
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(
    repository: Annotated[PromoRepository, Depends(get_repository)],
):
    """
    Readiness check endpoint.

    Runs a cheap query against the configured storage backend.
    """
    try:
        repository.list_clients()
        database = "healthy"
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        database = f"unhealthy: {str(e)[:100]}"

    return ReadinessResponse(
        status="ready" if database == "healthy" else "not_ready",
        storage_backend=settings.STORAGE_BACKEND,
        database=database,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
