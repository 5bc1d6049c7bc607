"""Service layer - business logic orchestration."""

from networth.services.result_cache import ResultCache, CacheStatus
from networth.services.dashboard_service import DashboardService
from networth.services.analysis_service import AnalysisService

__all__ = [
    "ResultCache",
    "CacheStatus",
    "DashboardService",
    "AnalysisService",
]
