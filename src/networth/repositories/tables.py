"""Logical table names exposed by the transaction store."""

STOCK_TRANSACTIONS = "stock_transactions"
STOCK_MASTER = "stock_master"
MF_TRANSACTIONS = "mf_transactions"
FUND_MASTER = "fund_master"
NPS_TRANSACTIONS = "nps_transactions"
NPS_FUND_MASTER = "nps_fund_master"
EPF_TRANSACTIONS = "epf_transactions"
PPF_TRANSACTIONS = "ppf_transactions"
BANK_TRANSACTIONS = "bank_transactions"

ALL_TABLES: tuple[str, ...] = (
    STOCK_TRANSACTIONS,
    STOCK_MASTER,
    MF_TRANSACTIONS,
    FUND_MASTER,
    NPS_TRANSACTIONS,
    NPS_FUND_MASTER,
    EPF_TRANSACTIONS,
    PPF_TRANSACTIONS,
    BANK_TRANSACTIONS,
)
