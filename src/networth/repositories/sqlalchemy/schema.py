"""Table definitions of the transaction store, for seeding and tests."""

from sqlalchemy import (
    Column,
    Date,
    Engine,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
)

from networth.repositories import tables

metadata = MetaData()

stock_transactions = Table(
    tables.STOCK_TRANSACTIONS,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("stock_name", String(255), nullable=False),
    Column("account_name", String(255)),
    Column("account_type", String(50)),
    Column("quantity", Numeric(18, 4)),
    Column("buy_price", Numeric(18, 4)),
    Column("buy_date", Date),
    Column("sell_price", Numeric(18, 4)),
    Column("sell_date", Date),
    Column("sector", String(100)),
    Column("category", String(100)),
)

stock_master = Table(
    tables.STOCK_MASTER,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("stock_name", String(255), nullable=False, unique=True),
    Column("cmp", Numeric(18, 2)),
    Column("lcp", Numeric(18, 2)),
)

mf_transactions = Table(
    tables.MF_TRANSACTIONS,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("fund_short_name", String(255), nullable=False),
    Column("account_name", String(255)),
    Column("transaction_type", String(50)),
    Column("units", Numeric(18, 4)),
    Column("nav", Numeric(18, 4)),
    Column("date", Date),
    Column("category", String(100)),
)

fund_master = Table(
    tables.FUND_MASTER,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("fund_short_name", String(255), nullable=False, unique=True),
    Column("cmp", Numeric(18, 4)),
    Column("lcp", Numeric(18, 4)),
)

nps_transactions = Table(
    tables.NPS_TRANSACTIONS,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("scheme_name", String(255), nullable=False),
    Column("account_name", String(255)),
    Column("transaction_type", String(50)),
    Column("units", Numeric(18, 4)),
    Column("nav", Numeric(18, 4)),
    Column("date", Date),
)

nps_fund_master = Table(
    tables.NPS_FUND_MASTER,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("scheme_name", String(255), nullable=False, unique=True),
    Column("nav", Numeric(18, 4)),
)

epf_transactions = Table(
    tables.EPF_TRANSACTIONS,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("company_name", String(255)),
    Column("invest_type", String(50)),
    Column("employee_share", Numeric(18, 2)),
    Column("employer_share", Numeric(18, 2)),
    Column("pension_share", Numeric(18, 2)),
    Column("date", Date),
)

ppf_transactions = Table(
    tables.PPF_TRANSACTIONS,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("account_name", String(255)),
    Column("transaction_type", String(50)),
    Column("amount", Numeric(18, 2)),
    Column("txn_date", Date),
)

bank_transactions = Table(
    tables.BANK_TRANSACTIONS,
    metadata,
    Column("id", Integer, primary_key=True),
    Column("account_name", String(255)),
    Column("bank_name", String(255)),
    Column("account_type", String(50)),
    Column("amount", Numeric(18, 2)),
    Column("txn_date", Date),
)


def create_store_schema(engine: Engine) -> None:
    """Create every store table that does not exist yet."""
    metadata.create_all(bind=engine)
