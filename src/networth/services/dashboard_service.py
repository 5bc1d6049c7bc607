"""Portfolio orchestrator: fans out to aggregators and builds the dashboard."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from decimal import Decimal
from typing import Callable, Mapping, Optional

from networth.core.timezone import now_local, to_iso
from networth.domain.models import ASSET_CLASS_ROSTER, AssetClass
from networth.domain.views import (
    AssetResult,
    Dashboard,
    DashboardRow,
    DashboardSummary,
)
from networth.engine import solve_xirr
from networth.repositories.protocols import TransactionSource
from networth.repositories.row_parser import LedgerSnapshot, load_snapshot
from networth.services.aggregators import AGGREGATORS, AssetAggregator
from networth.services.result_cache import CacheStatus, ResultCache

logger = logging.getLogger(__name__)

DASHBOARD_CACHE_KEY = "dashboard"


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100, or 0 when whole is 0."""
    if whole == 0:
        return Decimal("0")
    return part / whole * 100


def build_rows(results: Mapping[AssetClass, AssetResult]) -> list[DashboardRow]:
    """
    One row per roster class, in roster order.

    Classes missing from results get a zero row. Allocations are shares of
    the portfolio totals, so across rows they sum to 100 (or are all 0 for
    an empty portfolio).
    """
    ordered = [results.get(ac) or AssetResult.empty(ac) for ac in ASSET_CLASS_ROSTER]
    total_market = sum((r.market_value for r in ordered), Decimal("0"))
    total_invested = sum((r.invested for r in ordered), Decimal("0"))

    rows = []
    for result in ordered:
        profit = result.market_value - result.invested
        rows.append(
            DashboardRow(
                asset_class=result.asset_class,
                label=result.asset_class.label,
                market_value=result.market_value,
                invested_value=result.invested,
                simple_profit=profit,
                simple_profit_percent=(
                    profit / result.invested * 100 if result.invested > 0 else Decimal("0")
                ),
                market_allocation=_percent(result.market_value, total_market),
                invested_allocation=_percent(result.invested, total_invested),
                annualized_return=result.annualized_return,
            )
        )
    return rows


def build_summary(
    rows: list[DashboardRow],
    results: Mapping[AssetClass, AssetResult],
) -> DashboardSummary:
    """Portfolio totals summed across rows, plus a whole-portfolio XIRR."""
    total_market = sum((row.market_value for row in rows), Decimal("0"))
    total_invested = sum((row.invested_value for row in rows), Decimal("0"))
    total_profit = total_market - total_invested
    cashflows = [cf for result in results.values() for cf in result.cashflows]
    try:
        portfolio_return = solve_xirr(cashflows)
    except (ArithmeticError, ValueError):
        logger.exception("Portfolio XIRR failed; reporting 0")
        portfolio_return = 0.0
    return DashboardSummary(
        total_market_value=total_market,
        total_invested_value=total_invested,
        total_profit=total_profit,
        profit_percent=(
            total_profit / total_invested * 100 if total_invested > 0 else Decimal("0")
        ),
        annualized_return=portfolio_return,
        anomaly_count=sum(len(result.shortfalls) for result in results.values()),
    )


class DashboardService:
    """
    Computes the consolidated portfolio dashboard.

    Reads one snapshot of the store, runs every asset aggregator on a thread
    pool and merges their results. The only state kept between calls is in
    the injected ResultCache.
    """

    def __init__(
        self,
        source: TransactionSource,
        cache: Optional[ResultCache] = None,
        aggregators: Optional[Mapping[AssetClass, AssetAggregator]] = None,
        max_workers: int = 8,
        cache_ttl_minutes: float = 5,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._source = source
        self._cache = cache or ResultCache()
        self._aggregators = dict(aggregators if aggregators is not None else AGGREGATORS)
        self._max_workers = max(1, min(max_workers, len(ASSET_CLASS_ROSTER)))
        self._cache_ttl_minutes = cache_ttl_minutes
        self._clock = clock or now_local

    def aggregate(self, snapshot: LedgerSnapshot) -> dict[AssetClass, AssetResult]:
        """
        Run every registered aggregator against the snapshot.

        A failing aggregator is logged and its class falls back to a zero
        result; the other classes are unaffected. Classes whose store tables
        could not be read are not aggregated and also get a zero result.
        """
        runnable = []
        for asset_class in ASSET_CLASS_ROSTER:
            if asset_class not in self._aggregators:
                continue
            error = snapshot.read_error(asset_class)
            if error is not None:
                logger.warning(
                    "Store unreadable for %s; using zero row: %s", asset_class.value, error.message
                )
                continue
            runnable.append(asset_class)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                asset_class: executor.submit(self._aggregators[asset_class].aggregate, snapshot)
                for asset_class in runnable
            }
            results: dict[AssetClass, AssetResult] = {}
            for asset_class in ASSET_CLASS_ROSTER:
                future = futures.get(asset_class)
                if future is None:
                    results[asset_class] = AssetResult.empty(asset_class)
                    continue
                try:
                    results[asset_class] = future.result()
                except Exception:
                    logger.exception("Aggregation failed for %s; using zero row", asset_class.value)
                    results[asset_class] = AssetResult.empty(asset_class)
        return results

    def compute_dashboard(self) -> Dashboard:
        """
        Compute the dashboard from scratch, bypassing the cache.

        Only a store that cannot be read at all is fatal for the request;
        unreadable tables zero the classes valued from them.
        """
        started = self._clock()
        snapshot = load_snapshot(self._source, started.date())
        results = self.aggregate(snapshot)
        rows = build_rows(results)
        summary = build_summary(rows, results)
        if summary.anomaly_count:
            logger.warning("Dashboard computed with %d clamped sales", summary.anomaly_count)
        return Dashboard(rows=rows, summary=summary, timestamp=to_iso(started))

    def get_dashboard(self) -> tuple[Dashboard, CacheStatus]:
        """Return the dashboard, from cache while it is fresh."""
        return self._cache.get_or_compute(
            DASHBOARD_CACHE_KEY,
            self._cache_ttl_minutes,
            self.compute_dashboard,
        )

    def invalidate(self) -> None:
        """Force the next get_dashboard() to recompute."""
        self._cache.invalidate(DASHBOARD_CACHE_KEY)
