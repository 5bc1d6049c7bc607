"""Domain models package."""

from networth.domain.models.enums import (
    AssetClass,
    TransactionKind,
    ASSET_CLASS_ROSTER,
)
from networth.domain.models.transaction import (
    UnitTransaction,
    CashTransaction,
    BalanceEntry,
)
from networth.domain.models.lot import Lot, Position, ClosedLot, SaleShortfall
from networth.domain.models.cashflow import Cashflow

__all__ = [
    "AssetClass",
    "TransactionKind",
    "ASSET_CLASS_ROSTER",
    "UnitTransaction",
    "CashTransaction",
    "BalanceEntry",
    "Lot",
    "Position",
    "ClosedLot",
    "SaleShortfall",
    "Cashflow",
]
