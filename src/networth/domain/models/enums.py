"""Enumerations for domain models."""

from enum import Enum
from typing import Optional


class AssetClass(str, Enum):
    """Asset classes reported on the dashboard, in display order."""

    STOCK = "STOCK"
    ETF = "ETF"
    MUTUAL_FUND = "MUTUAL_FUND"
    NPS = "NPS"  # Retirement scheme, unit priced at NAV
    EPF = "EPF"  # Provident fund
    PPF = "PPF"  # Public provident fund (savings)
    BANK = "BANK"
    FIXED_DEPOSIT = "FIXED_DEPOSIT"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    AssetClass.STOCK: "Stocks",
    AssetClass.ETF: "ETFs",
    AssetClass.MUTUAL_FUND: "Mutual Funds",
    AssetClass.NPS: "NPS",
    AssetClass.EPF: "EPF",
    AssetClass.PPF: "PPF",
    AssetClass.BANK: "Bank",
    AssetClass.FIXED_DEPOSIT: "Fixed Deposits",
}

# Fixed dashboard roster; every dashboard has exactly these rows in this order
ASSET_CLASS_ROSTER: tuple[AssetClass, ...] = tuple(AssetClass)


class TransactionKind(str, Enum):
    """Normalized ledger event kinds."""

    BUY = "BUY"
    SELL = "SELL"
    DEPOSIT = "DEPOSIT"
    INTEREST = "INTEREST"
    WITHDRAWAL = "WITHDRAWAL"
    OTHER = "OTHER"

    @classmethod
    def parse(
        cls,
        raw: Optional[str],
        cash: bool = False,
        default: "Optional[TransactionKind]" = None,
    ) -> "TransactionKind":
        """
        Map a free-form transaction type onto a kind by keyword.

        Unit-priced ledgers read outflows as SELL and inflows as BUY; cash
        ledgers read them as WITHDRAWAL and DEPOSIT. In cash ledgers an
        outflow keyword outranks "interest", so "Interest Withdrawal" is a
        WITHDRAWAL; elsewhere "interest" outranks everything.
        """
        lowered = (raw or "").strip().lower()
        fallback = default or cls.OTHER
        if not lowered:
            return fallback
        is_outflow = any(keyword in lowered for keyword in _OUTFLOW_KEYWORDS)
        if cash and is_outflow:
            return cls.WITHDRAWAL
        if "interest" in lowered:
            return cls.INTEREST
        if is_outflow:
            return cls.SELL
        if any(keyword in lowered for keyword in _INFLOW_KEYWORDS):
            return cls.DEPOSIT if cash else cls.BUY
        return fallback


_OUTFLOW_KEYWORDS = (
    "sell",
    "redeem",
    "redemption",
    "switch out",
    "switch-out",
    "withdraw",
    "exit",
)

_INFLOW_KEYWORDS = (
    "buy",
    "purchase",
    "sip",
    "contribution",
    "switch in",
    "switch-in",
    "deposit",
)
