# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import KVDep
from lib.kv import RedisKVStore
from lib.utils import utc_now_iso

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
    store: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    kv: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(kv: KVDep):
    """
    Health check endpoint.

    Returns basic health status and which store backs the API
    ("redis" or "memory").
    """
    return HealthResponse(
        status="healthy",
        timestamp=utc_now_iso(),
        environment=settings.ENVIRONMENT,
        version="1.0.0",
        store="redis" if isinstance(kv, RedisKVStore) else "memory",
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(kv: KVDep):
    """
    Readiness check endpoint.

    Pings the key-value store.
    """
    try:
        kv_status = "healthy" if kv.ping() else "unhealthy"
    except Exception as e:
        kv_status = f"unhealthy: {str(e)[:50]}"

    return ReadinessResponse(
        status="ready" if kv_status == "healthy" else "degraded",
        kv=kv_status,
        timestamp=utc_now_iso(),
    )
