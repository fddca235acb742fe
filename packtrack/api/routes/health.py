"""Health check endpoints."""

from fastapi import APIRouter

from packtrack import __version__
from packtrack.api.deps import Service
from packtrack.config import settings
from packtrack.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check.

    Returns 200 if the service is running.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready(service: Service) -> HealthResponse:
    """Readiness check.

    Reports whether records have been loaded and whether a remote store
    is configured. Running without a store (sample data) is not a failure.
    """
    checks = {
        "records_loaded": service.loaded,
        "store_configured": service.store.configured,
    }

    return HealthResponse(
        status="healthy" if service.loaded else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@router.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )
