"""
Unit tests for row parsing and numeric/date coercion.

Tests cover:
- to_decimal on malformed input
- parse_date on mixed formats
- Transaction kind keyword matching
- Per-table row parsing
- Snapshot loading through a source
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from networth.core.exceptions import DataSourceError
from networth.core.numbers import to_decimal
from networth.core.timezone import parse_date
from networth.domain.models import AssetClass, TransactionKind
from networth.repositories import tables
from networth.repositories.row_parser import (
    load_snapshot,
    parse_bank_rows,
    parse_epf_rows,
    parse_fund_rows,
    parse_nps_rows,
    parse_ppf_rows,
    parse_price_rows,
    parse_stock_rows,
)

from tests.conftest import (
    PartiallyFailingSource,
    bank_row,
    epf_row,
    mf_row,
    nps_row,
    ppf_row,
    stock_row,
)


# =============================================================================
# COERCION TESTS
# =============================================================================


class TestToDecimal:
    """Malformed numbers become zero instead of raising."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1,234.50", Decimal("1234.50")),
            ("₹ 99", Decimal("99")),
            (" -12.5 ", Decimal("-12.5")),
            (42, Decimal("42")),
            (2.5, Decimal("2.5")),
            (Decimal("7"), Decimal("7")),
        ],
    )
    def test_parses_loose_numbers(self, raw, expected):
        assert to_decimal(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [None, "", "abc", "1.2.3", "--", True, float("nan"), float("inf"), Decimal("NaN")],
    )
    def test_malformed_values_are_zero(self, raw):
        assert to_decimal(raw) == Decimal("0")


class TestParseDate:
    """Dates parse leniently and never raise."""

    def test_iso_string(self):
        assert parse_date("2024-03-31") == date(2024, 3, 31)

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2024, 1, 2)) == date(2024, 1, 2)
        assert parse_date(datetime(2024, 1, 2, 23, 0)) == date(2024, 1, 2)

    @pytest.mark.parametrize("raw", [None, "", "   ", "not a date"])
    def test_unparseable_values_are_none(self, raw):
        assert parse_date(raw) is None


class TestTransactionKindParse:
    """Free-form transaction types map onto kinds by keyword."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("SIP", TransactionKind.BUY),
            ("Purchase", TransactionKind.BUY),
            ("Switch In", TransactionKind.BUY),
            ("Redeem", TransactionKind.SELL),
            ("Switch-Out", TransactionKind.SELL),
            ("Interest Credit", TransactionKind.INTEREST),
        ],
    )
    def test_unit_ledger_keywords(self, raw, expected):
        assert TransactionKind.parse(raw) == expected

    def test_cash_ledgers_read_deposits_and_withdrawals(self):
        assert TransactionKind.parse("Deposit", cash=True) == TransactionKind.DEPOSIT
        assert TransactionKind.parse("Partial Withdrawal", cash=True) == TransactionKind.WITHDRAWAL

    def test_cash_withdrawal_wins_over_interest(self):
        """
        GIVEN a type mentioning both interest and withdrawal
        WHEN parsed for a cash ledger
        THEN it is WITHDRAWAL
        """
        assert TransactionKind.parse("Interest Withdrawal", cash=True) == TransactionKind.WITHDRAWAL
        assert TransactionKind.parse("Interest Credit", cash=True) == TransactionKind.INTEREST

    def test_unit_interest_wins_over_outflow(self):
        assert TransactionKind.parse("interest redeemed") == TransactionKind.INTEREST

    def test_unknown_type_uses_default(self):
        assert TransactionKind.parse("bonus") == TransactionKind.OTHER
        assert TransactionKind.parse(None, default=TransactionKind.BUY) == TransactionKind.BUY


# =============================================================================
# TABLE PARSER TESTS
# =============================================================================


class TestParseStockRows:
    """stock_transactions rows split into STOCK and ETF."""

    def test_etf_account_type_goes_to_etf(self):
        parsed = parse_stock_rows([
            stock_row("INFY", "1", "100", "2023-01-01"),
            stock_row("NIFTYBEES", "1", "200", "2023-01-01", account_type="etf"),
        ])

        assert [t.asset for t in parsed[AssetClass.STOCK]] == ["INFY"]
        assert [t.asset for t in parsed[AssetClass.ETF]] == ["NIFTYBEES"]

    def test_sell_date_makes_a_sale_effective_on_sell_date(self):
        """
        GIVEN a row with buy and sell dates
        WHEN parsed
        THEN it is a SELL dated on sell_date priced at sell_price
        """
        parsed = parse_stock_rows([
            stock_row("INFY", "10", "100", "2023-01-10", sell_date="2023-06-01", sell_price="150"),
        ])

        txn = parsed[AssetClass.STOCK][0]
        assert txn.kind == TransactionKind.SELL
        assert txn.effective_date == date(2023, 6, 1)
        assert txn.realized_price == Decimal("150")

    def test_sale_without_sell_price_falls_back_to_buy_price(self):
        parsed = parse_stock_rows([
            stock_row("INFY", "10", "100", "2023-01-10", sell_date="2023-06-01"),
        ])

        assert parsed[AssetClass.STOCK][0].realized_price == Decimal("100")

    def test_missing_account_and_name(self):
        """
        GIVEN one row without an account and one without a stock name
        WHEN parsed
        THEN the account defaults to UNKNOWN and the nameless row is dropped
        """
        parsed = parse_stock_rows([
            stock_row("INFY", "1", "100", "2023-01-01", account_name=None),
            stock_row("", "1", "100", "2023-01-01"),
        ])

        assert len(parsed[AssetClass.STOCK]) == 1
        assert parsed[AssetClass.STOCK][0].account == "UNKNOWN"

    def test_malformed_quantity_is_zero(self):
        parsed = parse_stock_rows([stock_row("INFY", "ten", "100", "2023-01-01")])

        assert parsed[AssetClass.STOCK][0].quantity == Decimal("0")

    def test_sequence_follows_input_order(self):
        parsed = parse_stock_rows([
            stock_row("A", "1", "1", "2023-01-01"),
            stock_row("B", "1", "1", "2023-01-01", account_type="ETF"),
            stock_row("C", "1", "1", "2023-01-01"),
        ])

        assert [t.sequence for t in parsed[AssetClass.STOCK]] == [0, 2]
        assert [t.sequence for t in parsed[AssetClass.ETF]] == [1]


class TestParseFundAndNpsRows:
    """Fund and scheme rows become unit transactions."""

    def test_fund_rows_read_kind_units_and_nav(self):
        parsed = parse_fund_rows([
            mf_row("FUNDX", "SIP", "100", "10", "2023-01-01"),
            mf_row("FUNDX", "Redeem", "50", "15", "2023-09-01"),
        ])

        assert [t.kind for t in parsed] == [TransactionKind.BUY, TransactionKind.SELL]
        assert parsed[0].quantity == Decimal("100")
        assert parsed[1].price == Decimal("15")

    def test_fund_rows_of_unknown_type_are_purchases(self):
        parsed = parse_fund_rows([mf_row("FUNDX", "", "1", "10", "2023-01-01")])

        assert parsed[0].kind == TransactionKind.BUY

    def test_fund_rows_fall_back_to_quantity_and_buy_price(self):
        parsed = parse_fund_rows([
            {"fund_short_name": "FUNDX", "quantity": "3", "buy_price": "7", "buy_date": "2023-02-01"},
        ])

        assert parsed[0].quantity == Decimal("3")
        assert parsed[0].price == Decimal("7")
        assert parsed[0].effective_date == date(2023, 2, 1)

    def test_nps_rows_without_scheme_are_dropped(self):
        parsed = parse_nps_rows([
            nps_row("SCHEME-E", "Contribution", "10", "30", "2023-01-31"),
            nps_row("", "Contribution", "10", "30", "2023-01-31"),
        ])

        assert len(parsed) == 1
        assert parsed[0].kind == TransactionKind.BUY

    def test_nps_rows_of_unknown_type_are_other(self):
        parsed = parse_nps_rows([nps_row("SCHEME-E", "Switch fee", "1", "30", "2023-01-31")])

        assert parsed[0].kind == TransactionKind.OTHER


class TestParseCashRows:
    """EPF, PPF and bank rows."""

    def test_epf_amount_sums_all_shares(self):
        parsed = parse_epf_rows([epf_row("Contribution", "1000", "500", "250", "2023-01-31")])

        assert parsed[0].amount == Decimal("1750")
        assert parsed[0].kind == TransactionKind.DEPOSIT
        assert parsed[0].account == "Acme"

    def test_epf_rows_with_no_amount_are_skipped(self):
        parsed = parse_epf_rows([epf_row("Contribution", "0", "", None, "2023-01-31")])

        assert parsed == []

    def test_ppf_rows(self):
        parsed = parse_ppf_rows([
            ppf_row("interest", "800", "2024-03-31"),
            ppf_row("withdrawal", "300", "2024-04-15", account=None),
        ])

        assert parsed[0].kind == TransactionKind.INTEREST
        assert parsed[1].kind == TransactionKind.WITHDRAWAL
        assert parsed[1].account == "unknown"

    def test_bank_account_type_is_lower_cased(self):
        parsed = parse_bank_rows([bank_row("Salary", "HDFC", "Savings", "1,000", "2024-04-30")])

        assert parsed[0].account_type == "savings"
        assert parsed[0].amount == Decimal("1000")
        assert parsed[0].group_key == ("Salary", "HDFC", "savings")

    def test_price_rows_use_first_present_field(self):
        prices = parse_price_rows(
            [{"scheme_name": "S1", "nav": None, "cmp": "12.5"}, {"scheme_name": "", "nav": "1"}],
            "scheme_name",
            "nav",
            "cmp",
        )

        assert prices == {"S1": Decimal("12.5")}


# =============================================================================
# SNAPSHOT TESTS
# =============================================================================


class TestLoadSnapshot:
    """load_snapshot() reads every table once and records unreadable ones."""

    def test_snapshot_partitions_sample_portfolio(self, memory_source):
        snapshot = load_snapshot(memory_source, date(2024, 6, 15))

        assert snapshot.as_of == date(2024, 6, 15)
        assert len(snapshot.unit_transactions(AssetClass.STOCK)) == 4
        assert len(snapshot.unit_transactions(AssetClass.ETF)) == 1
        assert len(snapshot.unit_transactions(AssetClass.MUTUAL_FUND)) == 3
        assert len(snapshot.unit_transactions(AssetClass.NPS)) == 1
        assert len(snapshot.epf) == 2
        assert len(snapshot.ppf) == 3
        assert len(snapshot.bank) == 4
        assert snapshot.prices.for_class(AssetClass.ETF)["NIFTYBEES"] == Decimal("220")
        assert snapshot.prices.for_class(AssetClass.NPS)["SCHEME-E"] == Decimal("40")
        assert snapshot.prices.for_class(AssetClass.BANK) == {}

    def test_empty_source_gives_empty_snapshot(self, empty_source):
        snapshot = load_snapshot(empty_source, date(2024, 6, 15))

        assert snapshot.unit_transactions(AssetClass.STOCK) == []
        assert snapshot.epf == []

    def test_source_errors_propagate(self, failing_source):
        with pytest.raises(DataSourceError) as exc_info:
            load_snapshot(failing_source, date(2024, 6, 15))

        assert exc_info.value.code == "DATA_SOURCE_ERROR"

    def test_unreadable_table_is_recorded_not_raised(self, memory_source):
        """
        GIVEN a store where bank_transactions cannot be read
        WHEN a snapshot is loaded
        THEN bank is empty, the error is kept and only BANK reports it
        """
        source = PartiallyFailingSource(memory_source, tables.BANK_TRANSACTIONS)

        snapshot = load_snapshot(source, date(2024, 6, 15))

        assert snapshot.bank == []
        assert set(snapshot.read_errors) == {tables.BANK_TRANSACTIONS}
        assert snapshot.read_error(AssetClass.BANK).table == tables.BANK_TRANSACTIONS
        assert snapshot.read_error(AssetClass.STOCK) is None
        assert len(snapshot.unit_transactions(AssetClass.STOCK)) == 4

    def test_raise_for_reraises_dependent_class_errors(self, memory_source):
        source = PartiallyFailingSource(memory_source, tables.FUND_MASTER)
        snapshot = load_snapshot(source, date(2024, 6, 15))

        snapshot.raise_for(AssetClass.STOCK, AssetClass.EPF)
        with pytest.raises(DataSourceError):
            snapshot.raise_for(AssetClass.MUTUAL_FUND)
