"""Per-asset-class aggregators and their static registry."""

from networth.domain.models import AssetClass
from networth.services.aggregators.base import AssetAggregator, unit_cashflows
from networth.services.aggregators.lots import (
    LotAggregator,
    StockAggregator,
    EtfAggregator,
    MutualFundAggregator,
    NpsAggregator,
)
from networth.services.aggregators.provident import EpfAggregator, PpfAggregator
from networth.services.aggregators.bank import BankAggregator
from networth.services.aggregators.fixed_deposit import FixedDepositAggregator

AGGREGATORS: dict[AssetClass, AssetAggregator] = {
    aggregator.asset_class: aggregator
    for aggregator in (
        StockAggregator(),
        EtfAggregator(),
        MutualFundAggregator(),
        NpsAggregator(),
        EpfAggregator(),
        PpfAggregator(),
        BankAggregator(),
        FixedDepositAggregator(),
    )
}

__all__ = [
    "AGGREGATORS",
    "AssetAggregator",
    "unit_cashflows",
    "LotAggregator",
    "StockAggregator",
    "EtfAggregator",
    "MutualFundAggregator",
    "NpsAggregator",
    "EpfAggregator",
    "PpfAggregator",
    "BankAggregator",
    "FixedDepositAggregator",
]
