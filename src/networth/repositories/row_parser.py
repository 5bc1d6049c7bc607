"""
Parsing of raw store rows into typed ledger transactions.

This is the only place that knows the store's column names. Numeric fields
go through to_decimal (malformed -> 0) and date fields through parse_date
(malformed -> None), so aggregation code only ever sees typed values.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from networth.core.exceptions import DataSourceError
from networth.core.numbers import to_decimal
from networth.core.timezone import parse_date
from networth.domain.models import (
    AssetClass,
    TransactionKind,
    UnitTransaction,
    CashTransaction,
    BalanceEntry,
)
from networth.repositories import tables
from networth.repositories.protocols import Row, TransactionSource

logger = logging.getLogger(__name__)

# Store tables each asset class is valued from
CLASS_TABLES: dict[AssetClass, tuple[str, ...]] = {
    AssetClass.STOCK: (tables.STOCK_TRANSACTIONS, tables.STOCK_MASTER),
    AssetClass.ETF: (tables.STOCK_TRANSACTIONS, tables.STOCK_MASTER),
    AssetClass.MUTUAL_FUND: (tables.MF_TRANSACTIONS, tables.FUND_MASTER),
    AssetClass.NPS: (tables.NPS_TRANSACTIONS, tables.NPS_FUND_MASTER),
    AssetClass.EPF: (tables.EPF_TRANSACTIONS,),
    AssetClass.PPF: (tables.PPF_TRANSACTIONS,),
    AssetClass.BANK: (tables.BANK_TRANSACTIONS,),
    AssetClass.FIXED_DEPOSIT: (),
}


def _text(row: Row, *fields: str, default: str = "") -> str:
    """First non-empty field value, stripped."""
    for name in fields:
        value = row.get(name)
        if value is not None and str(value).strip():
            return str(value).strip()
    return default


def _first_date(row: Row, *fields: str) -> Optional[date]:
    for name in fields:
        parsed = parse_date(row.get(name))
        if parsed is not None:
            return parsed
    return None


def _first_number(row: Row, *fields: str) -> Decimal:
    for name in fields:
        if row.get(name) not in (None, ""):
            return to_decimal(row.get(name))
    return Decimal("0")


@dataclass
class PriceBook:
    """Current prices per asset identifier. Missing entries price at zero."""

    stocks: dict[str, Decimal] = field(default_factory=dict)
    funds: dict[str, Decimal] = field(default_factory=dict)
    nps_schemes: dict[str, Decimal] = field(default_factory=dict)

    def for_class(self, asset_class: AssetClass) -> dict[str, Decimal]:
        if asset_class in (AssetClass.STOCK, AssetClass.ETF):
            return self.stocks
        if asset_class == AssetClass.MUTUAL_FUND:
            return self.funds
        if asset_class == AssetClass.NPS:
            return self.nps_schemes
        return {}


@dataclass
class LedgerSnapshot:
    """Typed, class-partitioned view of the whole store at one point in time."""

    as_of: date
    units: dict[AssetClass, list[UnitTransaction]] = field(default_factory=dict)
    epf: list[CashTransaction] = field(default_factory=list)
    ppf: list[CashTransaction] = field(default_factory=list)
    bank: list[BalanceEntry] = field(default_factory=list)
    prices: PriceBook = field(default_factory=PriceBook)
    read_errors: dict[str, DataSourceError] = field(default_factory=dict)

    def unit_transactions(self, asset_class: AssetClass) -> list[UnitTransaction]:
        return self.units.get(asset_class, [])

    def read_error(self, asset_class: AssetClass) -> Optional[DataSourceError]:
        """The error from the first unreadable table the class depends on, if any."""
        for table in CLASS_TABLES.get(asset_class, ()):
            if table in self.read_errors:
                return self.read_errors[table]
        return None

    def raise_for(self, *asset_classes: AssetClass) -> None:
        """Re-raise the read error behind any of the given classes."""
        for asset_class in asset_classes:
            error = self.read_error(asset_class)
            if error is not None:
                raise error


def parse_stock_rows(rows: Iterable[Row]) -> dict[AssetClass, list[UnitTransaction]]:
    """
    Parse stock_transactions rows, splitting ETFs from stocks.

    A row is a sale when it carries a sell_date, a negative quantity or a
    sale-type transaction_type. Sales take effect on their sell_date.
    """
    parsed: dict[AssetClass, list[UnitTransaction]] = {
        AssetClass.STOCK: [],
        AssetClass.ETF: [],
    }
    for sequence, row in enumerate(rows):
        name = _text(row, "stock_name", "symbol")
        if not name:
            continue
        account_type = _text(row, "account_type")
        quantity = to_decimal(row.get("quantity"))
        sell_date = parse_date(row.get("sell_date"))
        kind = TransactionKind.parse(row.get("transaction_type"), default=TransactionKind.BUY)
        if sell_date is not None:
            kind = TransactionKind.SELL

        if kind == TransactionKind.SELL or quantity < 0:
            effective = sell_date or _first_date(row, "date", "buy_date")
            sale_price = _first_number(row, "sell_price", "buy_price")
        else:
            effective = _first_date(row, "buy_date", "date")
            sale_price = None

        asset_class = AssetClass.ETF if account_type.upper() == "ETF" else AssetClass.STOCK
        parsed[asset_class].append(
            UnitTransaction(
                asset=name,
                account=_text(row, "account_name", default="UNKNOWN"),
                kind=kind,
                quantity=quantity,
                price=to_decimal(row.get("buy_price")),
                effective_date=effective,
                sequence=sequence,
                sale_price=sale_price,
                account_type=account_type,
                sector=_text(row, "sector"),
                category=_text(row, "category"),
            )
        )
    return parsed


def parse_fund_rows(rows: Iterable[Row]) -> list[UnitTransaction]:
    """Parse mf_transactions rows. Rows of unknown type count as purchases."""
    parsed = []
    for sequence, row in enumerate(rows):
        name = _text(row, "fund_short_name", "scheme_name")
        if not name:
            continue
        parsed.append(
            UnitTransaction(
                asset=name,
                account=_text(row, "account_name", default="UNKNOWN"),
                kind=TransactionKind.parse(
                    row.get("transaction_type"), default=TransactionKind.BUY
                ),
                quantity=_first_number(row, "units", "quantity"),
                price=_first_number(row, "nav", "buy_price"),
                effective_date=_first_date(row, "date", "buy_date", "sell_date"),
                sequence=sequence,
                category=_text(row, "category"),
            )
        )
    return parsed


def parse_nps_rows(rows: Iterable[Row]) -> list[UnitTransaction]:
    """Parse nps_transactions rows. Rows of unknown type are ignored by the ledger."""
    parsed = []
    for sequence, row in enumerate(rows):
        scheme = _text(row, "scheme_name")
        if not scheme:
            continue
        parsed.append(
            UnitTransaction(
                asset=scheme,
                account=_text(row, "account_name"),
                kind=TransactionKind.parse(row.get("transaction_type")),
                quantity=to_decimal(row.get("units")),
                price=to_decimal(row.get("nav")),
                effective_date=_first_date(row, "date", "txn_date", "created_at"),
                sequence=sequence,
            )
        )
    return parsed


def parse_epf_rows(rows: Iterable[Row]) -> list[CashTransaction]:
    """
    Parse epf_transactions rows.

    The amount is the sum of employee, employer and pension shares; rows
    summing to zero or less carry no information and are skipped.
    """
    parsed = []
    for sequence, row in enumerate(rows):
        amount = (
            to_decimal(row.get("employee_share"))
            + to_decimal(row.get("employer_share"))
            + to_decimal(row.get("pension_share"))
        )
        if amount <= 0:
            continue
        parsed.append(
            CashTransaction(
                account=_text(row, "company_name", "account_name", default="EPF"),
                kind=TransactionKind.parse(
                    row.get("invest_type"), cash=True, default=TransactionKind.DEPOSIT
                ),
                amount=amount,
                effective_date=_first_date(row, "date", "txn_date", "wage_month"),
                sequence=sequence,
            )
        )
    return parsed


def parse_ppf_rows(rows: Iterable[Row]) -> list[CashTransaction]:
    """Parse ppf_transactions rows."""
    return [
        CashTransaction(
            account=_text(row, "account_name", default="unknown"),
            kind=TransactionKind.parse(row.get("transaction_type"), cash=True),
            amount=to_decimal(row.get("amount")),
            effective_date=_first_date(row, "txn_date", "date"),
            sequence=sequence,
        )
        for sequence, row in enumerate(rows)
    ]


def parse_bank_rows(rows: Iterable[Row]) -> list[BalanceEntry]:
    """Parse bank_transactions rows. Account type is normalised to lower case."""
    return [
        BalanceEntry(
            account=_text(row, "account_name"),
            bank=_text(row, "bank_name"),
            account_type=_text(row, "account_type").lower(),
            amount=to_decimal(row.get("amount")),
            effective_date=_first_date(row, "txn_date", "date"),
            sequence=sequence,
        )
        for sequence, row in enumerate(rows)
    ]


def parse_price_rows(rows: Iterable[Row], name_field: str, *price_fields: str) -> dict[str, Decimal]:
    """Build an identifier -> current price map from a master table."""
    prices: dict[str, Decimal] = {}
    for row in rows:
        name = _text(row, name_field)
        if name:
            prices[name] = _first_number(row, *price_fields)
    return prices


def load_snapshot(source: TransactionSource, as_of: date) -> LedgerSnapshot:
    """
    Read every table from the source and parse it into a LedgerSnapshot.

    A table that cannot be read is parsed as empty and its error recorded in
    read_errors, so only the classes valued from it are affected. When no
    table can be read the store is unavailable and the first error is raised.
    """
    rows: dict[str, Any] = {}
    read_errors: dict[str, DataSourceError] = {}
    for table in tables.ALL_TABLES:
        try:
            rows[table] = source.fetch_rows(table)
        except DataSourceError as exc:
            logger.warning("Skipping unreadable table %s: %s", table, exc.message)
            read_errors[table] = exc
            rows[table] = []
    if len(read_errors) == len(tables.ALL_TABLES):
        raise read_errors[tables.ALL_TABLES[0]]

    units = parse_stock_rows(rows[tables.STOCK_TRANSACTIONS])
    units[AssetClass.MUTUAL_FUND] = parse_fund_rows(rows[tables.MF_TRANSACTIONS])
    units[AssetClass.NPS] = parse_nps_rows(rows[tables.NPS_TRANSACTIONS])

    return LedgerSnapshot(
        as_of=as_of,
        units=units,
        epf=parse_epf_rows(rows[tables.EPF_TRANSACTIONS]),
        ppf=parse_ppf_rows(rows[tables.PPF_TRANSACTIONS]),
        bank=parse_bank_rows(rows[tables.BANK_TRANSACTIONS]),
        prices=PriceBook(
            stocks=parse_price_rows(rows[tables.STOCK_MASTER], "stock_name", "cmp"),
            funds=parse_price_rows(rows[tables.FUND_MASTER], "fund_short_name", "cmp"),
            nps_schemes=parse_price_rows(rows[tables.NPS_FUND_MASTER], "scheme_name", "nav", "cmp"),
        ),
        read_errors=read_errors,
    )
