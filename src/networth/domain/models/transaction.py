"""Typed ledger transactions produced by the row parser."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from networth.domain.models.enums import TransactionKind


@dataclass(frozen=True)
class UnitTransaction:
    """
    Trade in a unit-priced asset (stock, ETF, fund units, NPS scheme units).

    - quantity keeps the sign it was recorded with; a negative quantity is a sale
    - price is the unit cost for buys (or NAV for fund/scheme rows)
    - sale_price is the realized price for sells when the ledger records it
    """

    asset: str
    account: str
    kind: TransactionKind
    quantity: Decimal
    price: Decimal
    effective_date: Optional[date] = None
    sequence: int = 0
    sale_price: Optional[Decimal] = None
    account_type: str = ""
    sector: str = ""
    category: str = ""

    @property
    def is_sale(self) -> bool:
        """Return True if this row consumes open lots."""
        return self.quantity < 0 or self.kind == TransactionKind.SELL

    @property
    def is_purchase(self) -> bool:
        """Return True if this row opens a new lot."""
        return self.kind == TransactionKind.BUY and self.quantity > 0

    @property
    def realized_price(self) -> Decimal:
        """Price used to value units leaving the ledger."""
        return self.sale_price if self.sale_price is not None else self.price


@dataclass(frozen=True)
class CashTransaction:
    """Cash movement in an interest-bearing account (EPF, PPF)."""

    account: str
    kind: TransactionKind
    amount: Decimal
    effective_date: Optional[date] = None
    sequence: int = 0


@dataclass(frozen=True)
class BalanceEntry:
    """Reported balance of a bank savings or demat cash account."""

    account: str
    bank: str
    account_type: str
    amount: Decimal
    effective_date: Optional[date] = None
    sequence: int = 0

    @property
    def group_key(self) -> tuple[str, str, str]:
        return (self.account, self.bank, self.account_type)
