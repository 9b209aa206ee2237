"""Health and test endpoints. None of them touch the upstream API."""

from datetime import datetime, timezone

from fastapi import APIRouter

from app import __version__
from app.models import HealthStatus, PingStatus, ServiceStatus
from app.utils.cors import CORSRoute
from config import settings

router = APIRouter(route_class=CORSRoute, tags=["Health"])


@router.get("/", response_model=ServiceStatus)
async def root() -> ServiceStatus:
    """Root endpoint - service status with the current UTC time."""
    return ServiceStatus(
        status="Figma Claude Proxy Server is running!",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        usage="POST to /proxy with x-api-key header",
        note="Free Render.com instance may have cold starts",
    )


@router.get("/test", response_model=PingStatus)
async def test_endpoint() -> PingStatus:
    return PingStatus(message="Test endpoint working", status="OK")


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Health check endpoint for monitoring and load balancer probes."""
    return HealthStatus(
        status="healthy",
        version=__version__,
        environment=settings.environment,
    )
