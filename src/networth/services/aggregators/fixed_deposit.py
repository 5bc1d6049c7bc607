"""Aggregator for fixed deposits."""

from networth.domain.models import AssetClass
from networth.domain.views import AssetResult
from networth.repositories.row_parser import LedgerSnapshot


class FixedDepositAggregator:
    """Fixed deposits have no transaction table yet; always a zero row."""

    asset_class = AssetClass.FIXED_DEPOSIT

    def aggregate(self, snapshot: LedgerSnapshot) -> AssetResult:
        return AssetResult.empty(self.asset_class)
