"""Domain layer - pure business models with no external dependencies."""

from networth.domain.models import (
    AssetClass,
    TransactionKind,
    ASSET_CLASS_ROSTER,
    UnitTransaction,
    CashTransaction,
    BalanceEntry,
    Lot,
    Position,
    ClosedLot,
    SaleShortfall,
    Cashflow,
)

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
