"""View models for aggregation and dashboard outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from networth.domain.models import AssetClass, Cashflow, SaleShortfall


@dataclass
class Holding:
    """One line of an asset-class breakdown."""

    name: str
    account: str
    invested: Decimal
    market_value: Decimal
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    interest: Optional[Decimal] = None
    account_type: str = ""


@dataclass
class AssetResult:
    """
    Normalized output of one asset aggregator.

    Classes with nothing to compute still return an instance with zeros,
    never None.
    """

    asset_class: AssetClass
    invested: Decimal = field(default_factory=lambda: Decimal("0"))
    market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    holdings: list[Holding] = field(default_factory=list)
    realized_gain: Decimal = field(default_factory=lambda: Decimal("0"))
    cashflows: list[Cashflow] = field(default_factory=list)
    annualized_return: float = 0.0
    shortfalls: list[SaleShortfall] = field(default_factory=list)

    @classmethod
    def empty(cls, asset_class: AssetClass) -> "AssetResult":
        return cls(asset_class=asset_class)


@dataclass
class DashboardRow:
    """Dashboard line for one asset class."""

    asset_class: AssetClass
    label: str
    market_value: Decimal
    invested_value: Decimal
    simple_profit: Decimal
    simple_profit_percent: Decimal
    market_allocation: Decimal
    invested_allocation: Decimal
    annualized_return: float = 0.0


@dataclass
class DashboardSummary:
    """Whole-portfolio totals."""

    total_market_value: Decimal
    total_invested_value: Decimal
    total_profit: Decimal
    profit_percent: Decimal
    annualized_return: float = 0.0
    anomaly_count: int = 0


@dataclass
class Dashboard:
    """Computed dashboard payload handed to the HTTP layer."""

    rows: list[DashboardRow]
    summary: DashboardSummary
    timestamp: str
