"""Running-balance tracker for interest-bearing, cash-only accounts."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from networth.domain.models import CashTransaction, TransactionKind
from networth.engine.ordering import chronological


@dataclass
class AccumulatorState:
    """Principal and credited interest of one account."""

    invested: Decimal = field(default_factory=lambda: Decimal("0"))
    interest: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def total(self) -> Decimal:
        return self.invested + self.interest


class Accumulator:
    """
    Applies provident-fund style bookkeeping.

    Contributions grow principal, interest credits grow the interest bucket,
    and withdrawals drain interest before principal. Neither bucket goes
    below zero, even when withdrawals are inconsistent with history.
    """

    _PRINCIPAL_KINDS = (TransactionKind.DEPOSIT, TransactionKind.BUY)
    _WITHDRAWAL_KINDS = (TransactionKind.WITHDRAWAL, TransactionKind.SELL)

    def apply(self, transactions: Iterable[CashTransaction]) -> AccumulatorState:
        state = AccumulatorState()
        for txn in chronological(transactions):
            amount = txn.amount
            if txn.kind in self._PRINCIPAL_KINDS:
                state.invested += amount
            elif txn.kind == TransactionKind.INTEREST:
                state.interest += amount
            elif txn.kind in self._WITHDRAWAL_KINDS:
                self._withdraw(state, abs(amount))
        state.invested = max(state.invested, Decimal("0"))
        state.interest = max(state.interest, Decimal("0"))
        return state

    @staticmethod
    def _withdraw(state: AccumulatorState, amount: Decimal) -> None:
        from_interest = min(amount, max(state.interest, Decimal("0")))
        state.interest -= from_interest
        remaining = amount - from_interest
        state.invested = max(state.invested - remaining, Decimal("0"))
