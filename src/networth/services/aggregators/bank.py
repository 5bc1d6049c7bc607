"""Aggregator for bank savings and demat cash balances."""

from collections import defaultdict
from decimal import Decimal

from networth.domain.models import AssetClass, BalanceEntry
from networth.domain.views import AssetResult, Holding
from networth.repositories.row_parser import LedgerSnapshot

BALANCE_ACCOUNT_TYPES = ("savings", "demat")


class BankAggregator:
    """
    Latest-month snapshot of bank balances.

    Finds the most recent calendar month present across all savings and
    demat entries, then sums only the entries dated in that month, per
    (account, bank, account type) group. Older months are discarded; a
    group with no entry in that month contributes nothing.
    """

    asset_class = AssetClass.BANK

    def aggregate(self, snapshot: LedgerSnapshot) -> AssetResult:
        entries = [
            entry
            for entry in snapshot.bank
            if entry.account_type in BALANCE_ACCOUNT_TYPES and entry.effective_date
        ]
        if not entries:
            return AssetResult.empty(self.asset_class)

        latest = max((e.effective_date.year, e.effective_date.month) for e in entries)

        groups: dict[tuple[str, str, str], list[BalanceEntry]] = defaultdict(list)
        for entry in entries:
            groups[entry.group_key].append(entry)

        result = AssetResult.empty(self.asset_class)
        for (account, bank, account_type), group in groups.items():
            in_month = [
                e for e in group
                if (e.effective_date.year, e.effective_date.month) == latest
            ]
            if not in_month:
                continue
            amount = sum((e.amount for e in in_month), Decimal("0"))
            result.holdings.append(
                Holding(
                    name=bank,
                    account=account,
                    invested=amount,
                    market_value=amount,
                    account_type=account_type,
                )
            )
            result.invested += amount
            result.market_value += amount
        return result
