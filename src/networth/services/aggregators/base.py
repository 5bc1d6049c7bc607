"""Aggregator strategy interface and shared helpers."""

import logging
from decimal import Decimal
from typing import Iterable, Protocol

from networth.core.numbers import EPSILON
from networth.domain.models import AssetClass, Cashflow, UnitTransaction
from networth.domain.views import AssetResult
from networth.engine import solve_xirr
from networth.repositories.row_parser import LedgerSnapshot

logger = logging.getLogger(__name__)


class AssetAggregator(Protocol):
    """
    Values one asset class from a ledger snapshot.

    Implementations are pure: they read only their slice of the snapshot and
    keep no state between calls, so they can run concurrently.
    """

    asset_class: AssetClass

    def aggregate(self, snapshot: LedgerSnapshot) -> AssetResult:
        """Return invested capital, market value and holdings for the class."""
        ...


def unit_cashflows(transactions: Iterable[UnitTransaction]) -> list[Cashflow]:
    """Purchases as outflows at cost, sales as inflows at the realized price."""
    flows = []
    for txn in transactions:
        if abs(txn.quantity) <= EPSILON:
            continue
        if txn.is_sale:
            amount = abs(txn.quantity) * txn.realized_price
            flows.append(Cashflow(on=txn.effective_date, amount=float(amount)))
        elif txn.is_purchase:
            amount = txn.quantity * txn.price
            flows.append(Cashflow(on=txn.effective_date, amount=-float(amount)))
    return flows


def with_terminal_value(
    flows: list[Cashflow],
    snapshot: LedgerSnapshot,
    value: Decimal,
) -> list[Cashflow]:
    """Append the current valuation as a final inflow on the snapshot date."""
    if value > 0:
        return [*flows, Cashflow(on=snapshot.as_of, amount=float(value))]
    return list(flows)


def annualized_return(asset_class: AssetClass, flows: list[Cashflow]) -> float:
    """XIRR of the flows, or 0 if the solver fails; never fails the valuation."""
    try:
        return solve_xirr(flows)
    except (ArithmeticError, ValueError):
        logger.exception("XIRR failed for %s; reporting 0", asset_class.value)
        return 0.0
