"""View models for stock and fund analysis outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


def _percent(gain: Decimal, base: Decimal) -> Decimal:
    return gain / base * 100 if base > 0 else Decimal("0")


@dataclass
class AccountPerformance:
    """Open equity (stocks and ETFs) held in one account."""

    account: str
    invested: Decimal
    market_value: Decimal

    @property
    def profit(self) -> Decimal:
        return self.market_value - self.invested

    @property
    def profit_percent(self) -> Decimal:
        return _percent(self.profit, self.invested)


@dataclass
class StockPerformance:
    """Open position in one stock, optionally scoped to an account."""

    name: str
    invested: Decimal
    market_value: Decimal
    quantity: Decimal
    account: Optional[str] = None

    @property
    def profit(self) -> Decimal:
        return self.market_value - self.invested

    @property
    def profit_percent(self) -> Decimal:
        return _percent(self.profit, self.invested)

    @property
    def average_price(self) -> Decimal:
        return self.invested / self.quantity if self.quantity > 0 else Decimal("0")


@dataclass
class AnalysisDashboard:
    """Account-wise equity breakdown with top movers."""

    account_wise: list[AccountPerformance] = field(default_factory=list)
    top_gainers: list[StockPerformance] = field(default_factory=list)
    top_losers: list[StockPerformance] = field(default_factory=list)
    open_positions: list[StockPerformance] = field(default_factory=list)

    @property
    def total_stocks(self) -> int:
        return len(self.open_positions)


@dataclass
class ActivePosition:
    """Open holding with cost basis from remaining FIFO lots."""

    name: str
    account: str
    quantity: Decimal
    average_cost: Decimal
    first_buy_date: Optional[date]
    invested: Decimal
    market_value: Decimal
    account_type: str = ""
    sector: str = ""
    category: str = ""

    @property
    def unrealized_gain(self) -> Decimal:
        return self.market_value - self.invested


@dataclass
class ClosedPosition:
    """Realized slice matched against one buy lot."""

    name: str
    account: str
    quantity: Decimal
    buy_price: Decimal
    buy_date: Optional[date]
    sell_price: Decimal
    sell_date: Optional[date]

    @property
    def invested(self) -> Decimal:
        return self.quantity * self.buy_price

    @property
    def sale_amount(self) -> Decimal:
        return self.quantity * self.sell_price

    @property
    def realized_gain(self) -> Decimal:
        return self.sale_amount - self.invested


@dataclass
class AnalysisSummary:
    """Active and closed positions for equity and mutual funds."""

    equity_active: list[ActivePosition] = field(default_factory=list)
    equity_closed: list[ClosedPosition] = field(default_factory=list)
    mf_active: list[ActivePosition] = field(default_factory=list)
    mf_closed: list[ClosedPosition] = field(default_factory=list)


@dataclass
class FreeStocksView:
    """Open stock positions split by whether the account is a free-share account."""

    free_stocks: list[StockPerformance] = field(default_factory=list)
    regular_stocks: list[StockPerformance] = field(default_factory=list)
