"""FastAPI application entry point.

PackTrack service: packing records, dashboard aggregates, CSV import and
export on top of a spreadsheet-backed record store.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from packtrack import __version__
from packtrack.api.routes.dashboard import router as dashboard_router
from packtrack.api.routes.health import router as health_router
from packtrack.api.routes.records import router as records_router
from packtrack.config import settings
from packtrack.infra.logging import get_logger, setup_logging
from packtrack.models.catalog import get_catalog
from packtrack.schemas.common import ErrorResponse
from packtrack.services.packing_service import get_packing_service
from packtrack.services.store_client import get_store_client

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Load the package catalog (invalid overrides abort startup)
    - Load records from the store, or sample data without a store

    Shutdown:
    - Close the store HTTP client
    """
    logger.info(
        "PackTrack starting",
        environment=settings.environment,
        store_configured=settings.store_configured,
    )

    catalog = get_catalog()
    logger.info("Package catalog ready", keys=len(catalog.keys))

    service = get_packing_service()
    records = await service.load()
    logger.info("Initial records loaded", source=service.source, records=len(records))

    yield

    logger.info("PackTrack shutting down")
    await get_store_client().close()
    logger.info("Cleanup complete")


app = FastAPI(
    title="PackTrack",
    description="Packing record tracker and dashboard service",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "dev" else None,
    redoc_url=None,
)

# CORS middleware (mainly for local development)
if settings.environment == "dev":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log mutating requests with their outcome."""
    response = await call_next(request)

    if request.method != "GET":
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with a structured error response."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            error_type=type(exc).__name__,
        ).model_dump(),
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(records_router, prefix="/records", tags=["Records"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": "PackTrack",
        "version": __version__,
        "environment": settings.environment,
    }
