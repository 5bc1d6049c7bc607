"""Consolidated portfolio dashboard endpoints."""

from fastapi import APIRouter, Depends, Response

from networth.api.deps import get_dashboard_service
from networth.api.schemas import (
    DashboardResponse,
    DashboardRowResponse,
    DashboardSummaryResponse,
    InvalidateResponse,
)
from networth.domain.views import Dashboard
from networth.services import DashboardService
from networth.services.dashboard_service import DASHBOARD_CACHE_KEY

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

CACHE_HEADER = "X-Cache"


def to_response(dashboard: Dashboard) -> DashboardResponse:
    """Convert the dashboard view into its wire schema."""
    summary = dashboard.summary
    return DashboardResponse(
        rows=[
            DashboardRowResponse(
                asset_class=row.asset_class.value,
                label=row.label,
                market_value=float(row.market_value),
                invested_value=float(row.invested_value),
                simple_profit=float(row.simple_profit),
                simple_profit_percent=float(row.simple_profit_percent),
                market_allocation=float(row.market_allocation),
                invested_allocation=float(row.invested_allocation),
                annualized_return=row.annualized_return,
            )
            for row in dashboard.rows
        ],
        summary=DashboardSummaryResponse(
            total_market_value=float(summary.total_market_value),
            total_invested_value=float(summary.total_invested_value),
            total_profit=float(summary.total_profit),
            profit_percent=float(summary.profit_percent),
            annualized_return=summary.annualized_return,
            anomaly_count=summary.anomaly_count,
        ),
        timestamp=dashboard.timestamp,
    )


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    response: Response,
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """
    Return per-asset-class rows and portfolio totals.

    The X-Cache header reports whether the payload came from cache (HIT)
    or was computed for this request (MISS).
    """
    dashboard, status = service.get_dashboard()
    response.headers[CACHE_HEADER] = status.value
    return to_response(dashboard)


@router.post("/invalidate", response_model=InvalidateResponse)
def invalidate_dashboard(
    service: DashboardService = Depends(get_dashboard_service),
) -> InvalidateResponse:
    """Drop the cached dashboard so the next read recomputes it."""
    service.invalidate()
    return InvalidateResponse(status="invalidated", key=DASHBOARD_CACHE_KEY)
