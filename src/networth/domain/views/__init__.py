"""View models for service outputs."""

from networth.domain.views.dashboard import (
    Holding,
    AssetResult,
    DashboardRow,
    DashboardSummary,
    Dashboard,
)
from networth.domain.views.analysis import (
    AccountPerformance,
    StockPerformance,
    AnalysisDashboard,
    ActivePosition,
    ClosedPosition,
    AnalysisSummary,
    FreeStocksView,
)

__all__ = [
    "Holding",
    "AssetResult",
    "DashboardRow",
    "DashboardSummary",
    "Dashboard",
    "AccountPerformance",
    "StockPerformance",
    "AnalysisDashboard",
    "ActivePosition",
    "ClosedPosition",
    "AnalysisSummary",
    "FreeStocksView",
]
