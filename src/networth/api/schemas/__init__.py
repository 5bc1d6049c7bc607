"""Pydantic schemas for API responses."""

from networth.api.schemas.dashboard import (
    DashboardRowResponse,
    DashboardSummaryResponse,
    DashboardResponse,
    InvalidateResponse,
)
from networth.api.schemas.analysis import (
    AccountPerformanceResponse,
    StockPerformanceResponse,
    AnalysisDashboardResponse,
    ActivePositionResponse,
    ClosedPositionResponse,
    AnalysisSummaryResponse,
    FreeStocksResponse,
)

__all__ = [
    "DashboardRowResponse",
    "DashboardSummaryResponse",
    "DashboardResponse",
    "InvalidateResponse",
    "AccountPerformanceResponse",
    "StockPerformanceResponse",
    "AnalysisDashboardResponse",
    "ActivePositionResponse",
    "ClosedPositionResponse",
    "AnalysisSummaryResponse",
    "FreeStocksResponse",
]
