# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings

router = APIRouter()

VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    email: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
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
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Checks database connectivity and the email configuration. Email
    reports "simulated" when sending is disabled, which still counts as
    ready.
    """
    from lib.email import verify_email_config
    from lib.supabase_client import SupabaseClient

    checks = ChecksResponse(database="unknown", email="unknown")

    # Check database
    try:
        SupabaseClient.ping()
        checks.database = "healthy"
    except Exception as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    # Check email
    email = verify_email_config()
    if email["configured"]:
        checks.email = "healthy"
    elif "error" in email:
        checks.email = f"unhealthy: {str(email['error'])[:50]}"
    else:
        checks.email = "simulated"

    all_healthy = checks.database == "healthy" and not checks.email.startswith("unhealthy")

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
