"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from networth.config.settings import get_settings
from networth.config.logging_config import setup_logging
from networth.api.routers import dashboard_router, analysis_router
from networth.core.exceptions import AppError
from networth.repositories.sqlalchemy import reset_database
from networth.services import ResultCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    yield
    # Shutdown
    reset_database()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Consolidated investment portfolio valuation",
    version=settings.app_version,
    lifespan=lifespan,
)

# One cache per application instance; dependencies read it from app.state
app.state.result_cache = ResultCache()

# Include routers
app.include_router(dashboard_router)
app.include_router(analysis_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unexpected failures as a structured error, never a partial payload."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": "Internal server error"},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
