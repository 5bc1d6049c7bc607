"""API routers package."""

from networth.api.routers.dashboard import router as dashboard_router
from networth.api.routers.analysis import router as analysis_router

__all__ = [
    "dashboard_router",
    "analysis_router",
]
