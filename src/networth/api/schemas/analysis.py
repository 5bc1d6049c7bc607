"""Pydantic schemas for analysis endpoints."""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class AccountPerformanceResponse(BaseModel):
    """Open equity held in one account."""

    account_name: str
    invested: float
    market_value: float
    profit: float
    profit_percent: float


class StockPerformanceResponse(BaseModel):
    """Open position in one stock."""

    name: str
    account_name: Optional[str] = None
    quantity: float
    avg_price: float
    invested: float
    market_value: float
    profit: float
    profit_percent: float


class AnalysisDashboardResponse(BaseModel):
    """Response for GET /analysis/dashboard."""

    account_wise: list[AccountPerformanceResponse]
    top_gainers: list[StockPerformanceResponse]
    top_losers: list[StockPerformanceResponse]
    total_stocks: int
    open_positions: list[StockPerformanceResponse]


class ActivePositionResponse(BaseModel):
    """Open holding with FIFO cost basis."""

    name: str
    account_name: str
    account_type: str = ""
    quantity: float
    buy_price: float
    buy_date: Optional[date] = None
    invested_amount: float
    market_value: float
    unrealized_gain: float
    sector: str = ""
    category: str = ""


class ClosedPositionResponse(BaseModel):
    """Realized slice of a sale."""

    name: str
    account_name: str
    quantity: float
    buy_price: float
    buy_date: Optional[date] = None
    sell_price: float
    sell_date: Optional[date] = None
    invested_amount: float
    sale_amount: float
    realized_gain: float


class AnalysisSummaryResponse(BaseModel):
    """Response for GET /analysis/summary."""

    equity_active: list[ActivePositionResponse]
    equity_closed: list[ClosedPositionResponse]
    mf_active: list[ActivePositionResponse]
    mf_closed: list[ClosedPositionResponse]


class FreeStocksResponse(BaseModel):
    """Response for GET /analysis/free-stocks."""

    free_stocks: list[StockPerformanceResponse]
    regular_stocks: list[StockPerformanceResponse]
