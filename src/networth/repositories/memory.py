"""In-memory transaction source for fixtures and tests."""

import copy
from typing import Mapping, Optional

from networth.repositories.protocols import Row


class InMemoryTransactionSource:
    """Serves row sets from a dict of table name -> rows."""

    def __init__(self, tables: Optional[Mapping[str, list[Row]]] = None):
        self._tables: dict[str, list[Row]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }

    def fetch_rows(self, table: str) -> list[Row]:
        """Return a deep copy so callers can never alter the stored rows."""
        return copy.deepcopy(self._tables.get(table, []))

    def set_rows(self, table: str, rows: list[Row]) -> None:
        """Replace a table's rows (used to simulate new ledger entries)."""
        self._tables[table] = [dict(row) for row in rows]
