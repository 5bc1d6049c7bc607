"""Analysis service for equity and mutual-fund breakdowns."""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from networth.core.timezone import now_local
from networth.domain.models import AssetClass, ClosedLot, Position, UnitTransaction
from networth.domain.views import (
    AccountPerformance,
    ActivePosition,
    AnalysisDashboard,
    AnalysisSummary,
    ClosedPosition,
    FreeStocksView,
    StockPerformance,
)
from networth.engine import LotLedger
from networth.repositories.protocols import TransactionSource
from networth.repositories.row_parser import LedgerSnapshot, load_snapshot
from networth.services.result_cache import CacheStatus, ResultCache

EQUITY_CLASSES = (AssetClass.STOCK, AssetClass.ETF)
TOP_MOVERS = 5


def _is_free_account(account: str) -> bool:
    return "free" in account.lower()


class AnalysisService:
    """
    Service for equity analytics and reporting.

    Every figure comes from FIFO lots replayed per (asset, account), the
    same ledger the dashboard uses, so the two views always agree.
    """

    def __init__(
        self,
        source: TransactionSource,
        cache: Optional[ResultCache] = None,
        cache_ttl_minutes: float = 5,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._source = source
        self._cache = cache or ResultCache()
        self._cache_ttl_minutes = cache_ttl_minutes
        self._clock = clock or now_local

    def dashboard(self) -> AnalysisDashboard:
        """
        Account-wise open equity plus top gainers and losers.

        Accounts with nothing open are omitted. Stocks held in several
        accounts are combined by name for the movers lists.
        """
        snapshot = self._snapshot(*EQUITY_CLASSES)
        positions = self._equity_positions(snapshot)

        by_account: dict[str, AccountPerformance] = {}
        by_name: dict[str, StockPerformance] = {}
        for position in positions:
            account = by_account.setdefault(
                position.account,
                AccountPerformance(position.account, Decimal("0"), Decimal("0")),
            )
            account.invested += position.invested
            account.market_value += position.market_value

            stock = by_name.setdefault(
                position.asset,
                StockPerformance(position.asset, Decimal("0"), Decimal("0"), Decimal("0")),
            )
            stock.invested += position.invested
            stock.market_value += position.market_value
            stock.quantity += position.quantity

        stocks = list(by_name.values())
        gainers = sorted((s for s in stocks if s.profit > 0), key=lambda s: s.profit, reverse=True)
        losers = sorted((s for s in stocks if s.profit < 0), key=lambda s: s.profit)

        return AnalysisDashboard(
            account_wise=[
                a for a in by_account.values() if a.invested > 0 or a.market_value > 0
            ],
            top_gainers=gainers[:TOP_MOVERS],
            top_losers=losers[:TOP_MOVERS],
            open_positions=stocks,
        )

    def summary(self) -> AnalysisSummary:
        """Active and closed positions for equity and mutual funds."""
        snapshot = self._snapshot(*EQUITY_CLASSES, AssetClass.MUTUAL_FUND)
        summary = AnalysisSummary()

        for asset_class in EQUITY_CLASSES:
            active, closed = self._replay(snapshot, asset_class)
            summary.equity_active.extend(active)
            summary.equity_closed.extend(closed)

        summary.mf_active, summary.mf_closed = self._replay(snapshot, AssetClass.MUTUAL_FUND)
        return summary

    def free_stocks(self) -> FreeStocksView:
        """Open positions per (stock, account), split by free-share accounts."""
        view = FreeStocksView()
        for position in self._equity_positions(self._snapshot(*EQUITY_CLASSES)):
            stock = StockPerformance(
                name=position.asset,
                invested=position.invested,
                market_value=position.market_value,
                quantity=position.quantity,
                account=position.account,
            )
            if _is_free_account(position.account):
                view.free_stocks.append(stock)
            else:
                view.regular_stocks.append(stock)
        return view

    def cached(self, name: str, compute: Callable[[], object]) -> tuple[object, CacheStatus]:
        """Serve one of the analysis views through the shared result cache."""
        return self._cache.get_or_compute(
            f"analysis:{name}", self._cache_ttl_minutes, compute
        )

    def _snapshot(self, *asset_classes: AssetClass) -> LedgerSnapshot:
        """Load a snapshot, failing if any table the view reads was unreadable."""
        snapshot = load_snapshot(self._source, self._clock().date())
        snapshot.raise_for(*asset_classes)
        return snapshot

    @staticmethod
    def _equity_positions(snapshot: LedgerSnapshot) -> list[Position]:
        positions: list[Position] = []
        for asset_class in EQUITY_CLASSES:
            ledger = LotLedger()
            positions.extend(
                ledger.apply(
                    snapshot.unit_transactions(asset_class),
                    snapshot.prices.for_class(asset_class),
                )
            )
        return positions

    @staticmethod
    def _replay(
        snapshot: LedgerSnapshot,
        asset_class: AssetClass,
    ) -> tuple[list[ActivePosition], list[ClosedPosition]]:
        transactions = snapshot.unit_transactions(asset_class)
        ledger = LotLedger()
        positions = ledger.apply(transactions, snapshot.prices.for_class(asset_class))

        # Descriptive tags come from the first row recorded for each key
        first_rows: dict[tuple[str, str], UnitTransaction] = {}
        for txn in transactions:
            first_rows.setdefault((txn.asset, txn.account), txn)

        active = []
        for position in positions:
            tags = first_rows[(position.asset, position.account)]
            active.append(
                ActivePosition(
                    name=position.asset,
                    account=position.account,
                    quantity=position.quantity,
                    average_cost=position.average_cost,
                    first_buy_date=position.first_acquired_on,
                    invested=position.invested,
                    market_value=position.market_value,
                    account_type=tags.account_type,
                    sector=tags.sector,
                    category=tags.category,
                )
            )
        return active, [_closed_position(lot) for lot in ledger.closed_lots]


def _closed_position(lot: ClosedLot) -> ClosedPosition:
    return ClosedPosition(
        name=lot.asset,
        account=lot.account,
        quantity=lot.quantity,
        buy_price=lot.unit_cost,
        buy_date=lot.acquired_on,
        sell_price=lot.sale_price,
        sell_date=lot.sold_on,
    )
