"""
Pytest configuration and fixtures for portfolio valuation tests.

This module provides:
- Row factories for every store table
- Typed transaction helpers for engine tests
- A controllable clock for cache and dashboard timing
- In-memory and SQLite-backed transaction sources
- Service fixtures and a FastAPI test client
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from fastapi.testclient import TestClient

from networth.api.deps import get_transaction_source
from networth.config.settings import reset_settings
from networth.core.exceptions import DataSourceError
from networth.core.timezone import get_local_tz
from networth.domain.models import (
    CashTransaction,
    TransactionKind,
    UnitTransaction,
)
from networth.main import app
from networth.repositories import InMemoryTransactionSource
from networth.repositories.sqlalchemy import create_store_schema
from networth.services import AnalysisService, DashboardService, ResultCache


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings():
    """Every test starts from default settings."""
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# TIME HELPERS
# =============================================================================


def local_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
) -> datetime:
    """Create a localized datetime in the reporting timezone."""
    return get_local_tz().localize(datetime(year, month, day, hour, minute))


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now = self.now + timedelta(minutes=minutes)


@pytest.fixture
def clock() -> FixedClock:
    """Clock fixed at 2024-06-15 10:00 local time."""
    return FixedClock(local_datetime(2024, 6, 15))


# =============================================================================
# TYPED TRANSACTION HELPERS
# =============================================================================


def buy(
    quantity: str,
    price: str,
    on: Optional[date],
    asset: str = "INFY",
    account: str = "Zerodha",
    sequence: int = 0,
) -> UnitTransaction:
    """Helper to create a purchase."""
    return UnitTransaction(
        asset=asset,
        account=account,
        kind=TransactionKind.BUY,
        quantity=Decimal(quantity),
        price=Decimal(price),
        effective_date=on,
        sequence=sequence,
    )


def sell(
    quantity: str,
    on: Optional[date],
    price: str = "0",
    asset: str = "INFY",
    account: str = "Zerodha",
    sequence: int = 0,
) -> UnitTransaction:
    """Helper to create a sale."""
    return UnitTransaction(
        asset=asset,
        account=account,
        kind=TransactionKind.SELL,
        quantity=Decimal(quantity),
        price=Decimal(price),
        effective_date=on,
        sequence=sequence,
    )


def cash(
    kind: TransactionKind,
    amount: str,
    on: Optional[date],
    account: str = "PPF-1",
    sequence: int = 0,
) -> CashTransaction:
    """Helper to create a provident-fund cash movement."""
    return CashTransaction(
        account=account,
        kind=kind,
        amount=Decimal(amount),
        effective_date=on,
        sequence=sequence,
    )


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


# =============================================================================
# ROW FACTORIES
# =============================================================================


def stock_row(
    stock_name: str,
    quantity: Any,
    buy_price: Any,
    buy_date: str,
    account_name: str = "Zerodha",
    account_type: str = "Stock",
    sell_date: Optional[str] = None,
    sell_price: Any = None,
    **extra: Any,
) -> dict:
    """Row shaped like stock_transactions."""
    return {
        "stock_name": stock_name,
        "account_name": account_name,
        "account_type": account_type,
        "quantity": quantity,
        "buy_price": buy_price,
        "buy_date": buy_date,
        "sell_date": sell_date,
        "sell_price": sell_price,
        **extra,
    }


def mf_row(fund: str, transaction_type: str, units: Any, nav: Any, on: str, account: str = "Coin") -> dict:
    """Row shaped like mf_transactions."""
    return {
        "fund_short_name": fund,
        "account_name": account,
        "transaction_type": transaction_type,
        "units": units,
        "nav": nav,
        "date": on,
    }


def nps_row(scheme: str, transaction_type: str, units: Any, nav: Any, on: str, account: str = "PRAN-1") -> dict:
    """Row shaped like nps_transactions."""
    return {
        "scheme_name": scheme,
        "account_name": account,
        "transaction_type": transaction_type,
        "units": units,
        "nav": nav,
        "date": on,
    }


def epf_row(invest_type: str, employee: Any, employer: Any, pension: Any, on: str, company: str = "Acme") -> dict:
    """Row shaped like epf_transactions."""
    return {
        "company_name": company,
        "invest_type": invest_type,
        "employee_share": employee,
        "employer_share": employer,
        "pension_share": pension,
        "date": on,
    }


def ppf_row(transaction_type: str, amount: Any, on: str, account: str = "SBI PPF") -> dict:
    """Row shaped like ppf_transactions."""
    return {
        "account_name": account,
        "transaction_type": transaction_type,
        "amount": amount,
        "txn_date": on,
    }


def bank_row(account: str, bank: str, account_type: str, amount: Any, on: str) -> dict:
    """Row shaped like bank_transactions."""
    return {
        "account_name": account,
        "bank_name": bank,
        "account_type": account_type,
        "amount": amount,
        "txn_date": on,
    }


# =============================================================================
# SAMPLE PORTFOLIO
# =============================================================================
#
# Expected per class (invested / market value):
#   STOCK          600 /  6650   INFY 5 @ 120 (cmp 130), TCS 2 free shares (cmp 3000)
#   ETF          20000 / 22000   NIFTYBEES 100 @ 200 (cmp 220)
#   MUTUAL_FUND   1700 /  3000   FUNDX 50 @ 10 + 100 @ 12 (cmp 20)
#   NPS           3000 /  4000   SCHEME-E 100 @ 30 (nav 40)
#   EPF           1500 /  1700   contributions 1500, interest 200
#   PPF          10000 / 10500   deposit 10000, interest 800, withdrawal 300
#   BANK         65000 / 65000   April 2024 savings 60000 + demat 5000
#   FIXED_DEPOSIT    0 /     0
#   TOTAL       101800 / 112850

SAMPLE_TOTAL_INVESTED = Decimal("101800")
SAMPLE_TOTAL_MARKET = Decimal("112850")


def sample_tables() -> dict[str, list[dict]]:
    """Raw store tables for a portfolio touching every asset class."""
    return {
        "stock_transactions": [
            stock_row("INFY", "10", "100", "2023-01-10", sector="IT", category="Large Cap"),
            stock_row("INFY", "5", "120", "2023-03-10", sector="IT", category="Large Cap"),
            stock_row(
                "INFY", "10", "100", "2023-01-10",
                sell_date="2023-06-01", sell_price="150",
                sector="IT", category="Large Cap",
            ),
            stock_row("TCS", "2", "0", "2023-02-01", account_name="Free Shares"),
            stock_row("NIFTYBEES", "100", "200", "2023-01-05", account_type="ETF"),
        ],
        "stock_master": [
            {"stock_name": "INFY", "cmp": "130"},
            {"stock_name": "TCS", "cmp": "3000"},
            {"stock_name": "NIFTYBEES", "cmp": "220"},
        ],
        "mf_transactions": [
            mf_row("FUNDX", "SIP", "100", "10", "2023-01-01"),
            mf_row("FUNDX", "SIP", "100", "12", "2023-06-01"),
            mf_row("FUNDX", "Redeem", "50", "15", "2023-09-01"),
        ],
        "fund_master": [{"fund_short_name": "FUNDX", "cmp": "20"}],
        "nps_transactions": [
            nps_row("SCHEME-E", "Contribution", "100", "30", "2023-01-31"),
        ],
        "nps_fund_master": [{"scheme_name": "SCHEME-E", "nav": "40"}],
        "epf_transactions": [
            epf_row("Contribution", "1000", "500", "0", "2023-01-31"),
            epf_row("Interest", "200", "0", "0", "2023-03-31"),
        ],
        "ppf_transactions": [
            ppf_row("deposit", "10000", "2023-04-01"),
            ppf_row("interest", "800", "2024-03-31"),
            ppf_row("withdrawal", "300", "2024-04-15"),
        ],
        "bank_transactions": [
            bank_row("Salary", "HDFC", "savings", "50000", "2024-03-31"),
            bank_row("Salary", "HDFC", "savings", "60000", "2024-04-30"),
            bank_row("Trading", "Zerodha", "demat", "5000", "2024-04-30"),
            bank_row("Old", "SBI", "savings", "9999", "2024-02-29"),
        ],
    }


# =============================================================================
# SOURCE FIXTURES
# =============================================================================


class FailingTransactionSource:
    """Transaction source whose store is unreachable."""

    def __init__(self) -> None:
        self.calls = 0

    def fetch_rows(self, table: str) -> list[dict]:
        self.calls += 1
        raise DataSourceError(table, "connection refused")


class PartiallyFailingSource:
    """Wraps a source; reads of the named tables fail as if locked."""

    def __init__(self, inner, *failing_tables: str) -> None:
        self.inner = inner
        self.failing_tables = set(failing_tables)

    def fetch_rows(self, table: str) -> list[dict]:
        if table in self.failing_tables:
            raise DataSourceError(table, "locked")
        return self.inner.fetch_rows(table)


@pytest.fixture
def memory_source() -> InMemoryTransactionSource:
    """In-memory store holding the sample portfolio."""
    return InMemoryTransactionSource(sample_tables())


@pytest.fixture
def empty_source() -> InMemoryTransactionSource:
    """In-memory store with no rows at all."""
    return InMemoryTransactionSource()


@pytest.fixture
def failing_source() -> FailingTransactionSource:
    """Store that raises on every read."""
    return FailingTransactionSource()


@pytest.fixture
def sqlite_engine():
    """Shared in-memory SQLite engine with the store schema created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_store_schema(engine)
    yield engine
    engine.dispose()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def result_cache(clock) -> ResultCache:
    """Fresh cache driven by the fixed clock."""
    return ResultCache(clock=clock)


@pytest.fixture
def dashboard_service(memory_source, result_cache, clock) -> DashboardService:
    """DashboardService over the sample portfolio."""
    return DashboardService(
        source=memory_source,
        cache=result_cache,
        cache_ttl_minutes=5,
        clock=clock,
    )


@pytest.fixture
def analysis_service(memory_source, result_cache, clock) -> AnalysisService:
    """AnalysisService over the sample portfolio."""
    return AnalysisService(
        source=memory_source,
        cache=result_cache,
        cache_ttl_minutes=5,
        clock=clock,
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(memory_source) -> TestClient:
    """FastAPI test client reading the sample portfolio with a fresh cache."""
    app.dependency_overrides[get_transaction_source] = lambda: memory_source
    app.state.result_cache = ResultCache()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
