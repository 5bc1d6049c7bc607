"""Aggregators for unit-priced classes, backed by the FIFO lot ledger."""

from decimal import Decimal

from networth.domain.models import AssetClass
from networth.domain.views import AssetResult, Holding
from networth.engine import LotLedger
from networth.repositories.row_parser import LedgerSnapshot
from networth.services.aggregators.base import (
    annualized_return,
    unit_cashflows,
    with_terminal_value,
)


class LotAggregator:
    """
    Values a unit-priced class from its open FIFO lots.

    Rows are grouped by (asset, account); invested capital is the cost of
    the lots still open, market value is open units at the current price.
    """

    asset_class: AssetClass

    def aggregate(self, snapshot: LedgerSnapshot) -> AssetResult:
        transactions = snapshot.unit_transactions(self.asset_class)
        ledger = LotLedger()
        positions = ledger.apply(transactions, snapshot.prices.for_class(self.asset_class))

        invested = sum((p.invested for p in positions), Decimal("0"))
        market_value = sum((p.market_value for p in positions), Decimal("0"))
        cashflows = with_terminal_value(unit_cashflows(transactions), snapshot, market_value)

        return AssetResult(
            asset_class=self.asset_class,
            invested=invested,
            market_value=market_value,
            holdings=[
                Holding(
                    name=p.asset,
                    account=p.account,
                    invested=p.invested,
                    market_value=p.market_value,
                    quantity=p.quantity,
                    price=p.price,
                )
                for p in positions
            ],
            realized_gain=sum(
                (lot.realized_gain for lot in ledger.closed_lots), Decimal("0")
            ),
            cashflows=cashflows,
            annualized_return=annualized_return(self.asset_class, cashflows),
            shortfalls=list(ledger.shortfalls),
        )


class StockAggregator(LotAggregator):
    asset_class = AssetClass.STOCK


class EtfAggregator(LotAggregator):
    asset_class = AssetClass.ETF


class MutualFundAggregator(LotAggregator):
    asset_class = AssetClass.MUTUAL_FUND


class NpsAggregator(LotAggregator):
    """NPS scheme units priced at the scheme's latest NAV."""

    asset_class = AssetClass.NPS
