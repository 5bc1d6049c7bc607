"""Lot-ledger models: open lots, derived positions and realized slices."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class Lot:
    """
    Open acquisition slice held in a FIFO queue.

    Quantity is reduced in place by sales; the lot is dropped once it is
    at or below EPSILON and is never re-created.
    """

    quantity: Decimal
    unit_cost: Decimal
    acquired_on: Optional[date] = None
    sequence: int = 0

    @property
    def cost(self) -> Decimal:
        return self.quantity * self.unit_cost


@dataclass
class Position:
    """Aggregate of open lots for one (asset, account) pair. Derived, not persisted."""

    asset: str
    account: str
    quantity: Decimal
    invested: Decimal
    price: Decimal
    market_value: Decimal
    first_acquired_on: Optional[date] = None
    lot_count: int = 0

    @property
    def average_cost(self) -> Decimal:
        if self.quantity == 0:
            return Decimal("0")
        return self.invested / self.quantity

    @property
    def unrealized_gain(self) -> Decimal:
        return self.market_value - self.invested


@dataclass
class ClosedLot:
    """Slice of a lot consumed by a sale."""

    asset: str
    account: str
    quantity: Decimal
    unit_cost: Decimal
    sale_price: Decimal
    acquired_on: Optional[date] = None
    sold_on: Optional[date] = None

    @property
    def invested(self) -> Decimal:
        return self.quantity * self.unit_cost

    @property
    def proceeds(self) -> Decimal:
        return self.quantity * self.sale_price

    @property
    def realized_gain(self) -> Decimal:
        return self.proceeds - self.invested


@dataclass
class SaleShortfall:
    """Sale quantity that found no open lot to consume."""

    asset: str
    account: str
    unmatched_quantity: Decimal
    sold_on: Optional[date] = None
