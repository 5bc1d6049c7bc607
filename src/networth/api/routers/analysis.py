"""Equity and mutual-fund analysis endpoints."""

from fastapi import APIRouter, Depends, Response

from networth.api.deps import get_analysis_service
from networth.api.routers.dashboard import CACHE_HEADER
from networth.api.schemas import (
    AccountPerformanceResponse,
    ActivePositionResponse,
    AnalysisDashboardResponse,
    AnalysisSummaryResponse,
    ClosedPositionResponse,
    FreeStocksResponse,
    StockPerformanceResponse,
)
from networth.domain.views import ActivePosition, ClosedPosition, StockPerformance
from networth.services import AnalysisService

router = APIRouter(prefix="/analysis", tags=["analysis"])


def _stock(stock: StockPerformance) -> StockPerformanceResponse:
    return StockPerformanceResponse(
        name=stock.name,
        account_name=stock.account,
        quantity=float(stock.quantity),
        avg_price=float(stock.average_price),
        invested=float(stock.invested),
        market_value=float(stock.market_value),
        profit=float(stock.profit),
        profit_percent=float(stock.profit_percent),
    )


def _active(position: ActivePosition) -> ActivePositionResponse:
    return ActivePositionResponse(
        name=position.name,
        account_name=position.account,
        account_type=position.account_type,
        quantity=float(position.quantity),
        buy_price=float(position.average_cost),
        buy_date=position.first_buy_date,
        invested_amount=float(position.invested),
        market_value=float(position.market_value),
        unrealized_gain=float(position.unrealized_gain),
        sector=position.sector,
        category=position.category,
    )


def _closed(position: ClosedPosition) -> ClosedPositionResponse:
    return ClosedPositionResponse(
        name=position.name,
        account_name=position.account,
        quantity=float(position.quantity),
        buy_price=float(position.buy_price),
        buy_date=position.buy_date,
        sell_price=float(position.sell_price),
        sell_date=position.sell_date,
        invested_amount=float(position.invested),
        sale_amount=float(position.sale_amount),
        realized_gain=float(position.realized_gain),
    )


@router.get("/dashboard", response_model=AnalysisDashboardResponse)
def get_analysis_dashboard(
    response: Response,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AnalysisDashboardResponse:
    """Account-wise open equity, top gainers and losers."""
    view, status = analysis.cached("dashboard", analysis.dashboard)
    response.headers[CACHE_HEADER] = status.value
    return AnalysisDashboardResponse(
        account_wise=[
            AccountPerformanceResponse(
                account_name=a.account,
                invested=float(a.invested),
                market_value=float(a.market_value),
                profit=float(a.profit),
                profit_percent=float(a.profit_percent),
            )
            for a in view.account_wise
        ],
        top_gainers=[_stock(s) for s in view.top_gainers],
        top_losers=[_stock(s) for s in view.top_losers],
        total_stocks=view.total_stocks,
        open_positions=[_stock(s) for s in view.open_positions],
    )


@router.get("/summary", response_model=AnalysisSummaryResponse)
def get_analysis_summary(
    response: Response,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AnalysisSummaryResponse:
    """Active and closed positions for equity and mutual funds."""
    view, status = analysis.cached("summary", analysis.summary)
    response.headers[CACHE_HEADER] = status.value
    return AnalysisSummaryResponse(
        equity_active=[_active(p) for p in view.equity_active],
        equity_closed=[_closed(p) for p in view.equity_closed],
        mf_active=[_active(p) for p in view.mf_active],
        mf_closed=[_closed(p) for p in view.mf_closed],
    )


@router.get("/free-stocks", response_model=FreeStocksResponse)
def get_free_stocks(
    response: Response,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> FreeStocksResponse:
    """Open positions split into free-share and regular accounts."""
    view, status = analysis.cached("free-stocks", analysis.free_stocks)
    response.headers[CACHE_HEADER] = status.value
    return FreeStocksResponse(
        free_stocks=[_stock(s) for s in view.free_stocks],
        regular_stocks=[_stock(s) for s in view.regular_stocks],
    )
