"""API routes module."""

from packtrack.api.routes.dashboard import router as dashboard_router
from packtrack.api.routes.health import router as health_router
from packtrack.api.routes.records import router as records_router

__all__ = ["dashboard_router", "health_router", "records_router"]
