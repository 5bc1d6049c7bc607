"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from networth.config.settings import get_settings
from networth.repositories.protocols import TransactionSource
from networth.repositories.sqlalchemy import SqlAlchemyTransactionSource, get_engine
from networth.services import AnalysisService, DashboardService, ResultCache


def get_transaction_source() -> TransactionSource:
    """Provide the read-only transaction store."""
    return SqlAlchemyTransactionSource(get_engine())


def get_result_cache(request: Request) -> ResultCache:
    """Provide the cache owned by the running application."""
    return request.app.state.result_cache


def get_dashboard_service(
    source: TransactionSource = Depends(get_transaction_source),
    cache: ResultCache = Depends(get_result_cache),
) -> DashboardService:
    """Provide DashboardService instance."""
    settings = get_settings()
    return DashboardService(
        source=source,
        cache=cache,
        max_workers=settings.aggregation_workers,
        cache_ttl_minutes=settings.dashboard_cache_ttl_minutes,
    )


def get_analysis_service(
    source: TransactionSource = Depends(get_transaction_source),
    cache: ResultCache = Depends(get_result_cache),
) -> AnalysisService:
    """Provide AnalysisService instance."""
    return AnalysisService(
        source=source,
        cache=cache,
        cache_ttl_minutes=get_settings().dashboard_cache_ttl_minutes,
    )
