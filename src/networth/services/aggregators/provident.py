"""Aggregators for EPF and PPF, backed by the interest accumulator."""

from collections import defaultdict
from typing import Iterable

from networth.domain.models import AssetClass, CashTransaction, Cashflow, TransactionKind
from networth.domain.views import AssetResult, Holding
from networth.engine import Accumulator, AccumulatorState
from networth.repositories.row_parser import LedgerSnapshot
from networth.services.aggregators.base import annualized_return, with_terminal_value


def _cash_cashflows(transactions: Iterable[CashTransaction]) -> list[Cashflow]:
    flows = []
    for txn in transactions:
        if txn.kind in (TransactionKind.DEPOSIT, TransactionKind.BUY):
            flows.append(Cashflow(on=txn.effective_date, amount=-float(txn.amount)))
        elif txn.kind in (TransactionKind.WITHDRAWAL, TransactionKind.SELL):
            flows.append(Cashflow(on=txn.effective_date, amount=float(abs(txn.amount))))
    return flows


def _holding(name: str, account: str, state: AccumulatorState) -> Holding:
    return Holding(
        name=name,
        account=account,
        invested=state.invested,
        market_value=state.total,
        interest=state.interest,
    )


class EpfAggregator:
    """
    Employee provident fund, tracked as a single pot.

    Withdrawals draw on interest credited to any employer's contributions,
    so the whole ledger runs through one accumulator.
    """

    asset_class = AssetClass.EPF

    def aggregate(self, snapshot: LedgerSnapshot) -> AssetResult:
        if not snapshot.epf:
            return AssetResult.empty(self.asset_class)
        state = Accumulator().apply(snapshot.epf)
        cashflows = with_terminal_value(_cash_cashflows(snapshot.epf), snapshot, state.total)
        return AssetResult(
            asset_class=self.asset_class,
            invested=state.invested,
            market_value=state.total,
            holdings=[_holding("EPF", "", state)],
            cashflows=cashflows,
            annualized_return=annualized_return(self.asset_class, cashflows),
        )


class PpfAggregator:
    """Public provident fund, one accumulator per account."""

    asset_class = AssetClass.PPF

    def aggregate(self, snapshot: LedgerSnapshot) -> AssetResult:
        by_account: dict[str, list[CashTransaction]] = defaultdict(list)
        for txn in snapshot.ppf:
            by_account[txn.account].append(txn)

        result = AssetResult.empty(self.asset_class)
        accumulator = Accumulator()
        for account, transactions in by_account.items():
            state = accumulator.apply(transactions)
            result.invested += state.invested
            result.market_value += state.total
            result.holdings.append(_holding("PPF", account, state))

        result.cashflows = with_terminal_value(
            _cash_cashflows(snapshot.ppf), snapshot, result.market_value
        )
        result.annualized_return = annualized_return(self.asset_class, result.cashflows)
        return result
