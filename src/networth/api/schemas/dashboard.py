"""Pydantic schemas for the dashboard endpoint."""

from typing import Optional

from pydantic import BaseModel


class DashboardRowResponse(BaseModel):
    """One asset-class row of the dashboard."""

    asset_class: str
    label: str
    market_value: float
    invested_value: float
    simple_profit: float
    simple_profit_percent: float
    market_allocation: float
    invested_allocation: float
    annualized_return: float


class DashboardSummaryResponse(BaseModel):
    """Whole-portfolio totals."""

    total_market_value: float
    total_invested_value: float
    total_profit: float
    profit_percent: float
    annualized_return: float
    anomaly_count: int


class DashboardResponse(BaseModel):
    """Response for GET /dashboard."""

    rows: list[DashboardRowResponse]
    summary: DashboardSummaryResponse
    timestamp: str


class InvalidateResponse(BaseModel):
    """Response for cache invalidation."""

    status: str
    key: Optional[str] = None
