"""Transaction store protocol."""

from typing import Any, Protocol

Row = dict[str, Any]


class TransactionSource(Protocol):
    """Read-only access to ledger and price-master tables."""

    def fetch_rows(self, table: str) -> list[Row]:
        """
        Return every row of a logical table as a flat mapping.

        Rows come back in ingestion order. A table the store does not have
        yields an empty list; an unreachable store raises DataSourceError.
        """
        ...
