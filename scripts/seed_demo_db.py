#!/usr/bin/env python3
"""
Seed a demo transaction store.

Creates every store table in the configured database (NETWORTH_DATABASE_URL,
default ./networth.db) and fills it with a small, realistic ledger covering
all asset classes. Existing rows are left alone unless --reset is given.
"""

import argparse
from datetime import date
from decimal import Decimal

from sqlalchemy import delete

from networth.config.settings import get_settings
from networth.repositories.sqlalchemy import build_engine, create_store_schema, metadata

DEMO_ROWS = {
    "stock_transactions": [
        dict(stock_name="INFY", account_name="Zerodha", account_type="Stock", quantity=Decimal("20"),
             buy_price=Decimal("1400"), buy_date=date(2022, 4, 11), sector="IT", category="Large Cap"),
        dict(stock_name="INFY", account_name="Zerodha", account_type="Stock", quantity=Decimal("10"),
             buy_price=Decimal("1550"), buy_date=date(2023, 1, 9), sector="IT", category="Large Cap"),
        dict(stock_name="INFY", account_name="Zerodha", account_type="Stock", quantity=Decimal("15"),
             buy_price=Decimal("1400"), buy_date=date(2022, 4, 11), sell_price=Decimal("1700"),
             sell_date=date(2024, 2, 5), sector="IT", category="Large Cap"),
        dict(stock_name="TATAMOTORS", account_name="Groww", account_type="Stock", quantity=Decimal("50"),
             buy_price=Decimal("420"), buy_date=date(2021, 11, 2), sector="Auto", category="Large Cap"),
        dict(stock_name="ITC", account_name="Free Shares", account_type="Stock", quantity=Decimal("5"),
             buy_price=Decimal("0"), buy_date=date(2023, 6, 30), sector="FMCG", category="Large Cap"),
        dict(stock_name="NIFTYBEES", account_name="Zerodha", account_type="ETF", quantity=Decimal("100"),
             buy_price=Decimal("190"), buy_date=date(2022, 8, 1), category="Index"),
    ],
    "stock_master": [
        dict(stock_name="INFY", cmp=Decimal("1850")),
        dict(stock_name="TATAMOTORS", cmp=Decimal("980")),
        dict(stock_name="ITC", cmp=Decimal("450")),
        dict(stock_name="NIFTYBEES", cmp=Decimal("265")),
    ],
    "mf_transactions": [
        dict(fund_short_name="PPFAS Flexi", account_name="Coin", transaction_type="SIP",
             units=Decimal("120.5"), nav=Decimal("49.8"), date=date(2022, 5, 5)),
        dict(fund_short_name="PPFAS Flexi", account_name="Coin", transaction_type="SIP",
             units=Decimal("98.2"), nav=Decimal("61.1"), date=date(2023, 5, 5)),
        dict(fund_short_name="PPFAS Flexi", account_name="Coin", transaction_type="Redeem",
             units=Decimal("50"), nav=Decimal("72.4"), date=date(2024, 3, 1)),
    ],
    "fund_master": [dict(fund_short_name="PPFAS Flexi", cmp=Decimal("78.3"))],
    "nps_transactions": [
        dict(scheme_name="SBI Tier I E", account_name="PRAN-1", transaction_type="Contribution",
             units=Decimal("310.2"), nav=Decimal("38.1"), date=date(2022, 3, 31)),
        dict(scheme_name="SBI Tier I E", account_name="PRAN-1", transaction_type="Contribution",
             units=Decimal("260.7"), nav=Decimal("45.2"), date=date(2023, 3, 31)),
    ],
    "nps_fund_master": [dict(scheme_name="SBI Tier I E", nav=Decimal("52.6"))],
    "epf_transactions": [
        dict(company_name="Acme", invest_type="Contribution", employee_share=Decimal("90000"),
             employer_share=Decimal("30000"), pension_share=Decimal("15000"), date=date(2023, 3, 31)),
        dict(company_name="Acme", invest_type="Interest", employee_share=Decimal("9800"),
             employer_share=Decimal("0"), pension_share=Decimal("0"), date=date(2023, 4, 30)),
    ],
    "ppf_transactions": [
        dict(account_name="SBI PPF", transaction_type="deposit", amount=Decimal("150000"), txn_date=date(2022, 4, 1)),
        dict(account_name="SBI PPF", transaction_type="interest", amount=Decimal("10650"), txn_date=date(2023, 3, 31)),
        dict(account_name="SBI PPF", transaction_type="deposit", amount=Decimal("150000"), txn_date=date(2023, 4, 1)),
    ],
    "bank_transactions": [
        dict(account_name="Salary", bank_name="HDFC", account_type="savings", amount=Decimal("82000"), txn_date=date(2024, 4, 30)),
        dict(account_name="Salary", bank_name="HDFC", account_type="savings", amount=Decimal("95000"), txn_date=date(2024, 5, 31)),
        dict(account_name="Trading", bank_name="Zerodha", account_type="demat", amount=Decimal("12000"), txn_date=date(2024, 5, 31)),
    ],
}


def seed(reset: bool = False) -> None:
    """Create the schema and insert the demo rows."""
    settings = get_settings()
    engine = build_engine(settings.database_url)
    create_store_schema(engine)

    with engine.begin() as conn:
        for name, rows in DEMO_ROWS.items():
            table = metadata.tables[name]
            if reset:
                conn.execute(delete(table))
            # Rows carry different optional columns, so insert them one by one
            for row in rows:
                conn.execute(table.insert().values(**row))
            print(f"✓ {name}: {len(rows)} rows")

    engine.dispose()
    print(f"\nSeeded {settings.database_url}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="Delete existing rows first")
    args = parser.parse_args()
    seed(reset=args.reset)


if __name__ == "__main__":
    main()
