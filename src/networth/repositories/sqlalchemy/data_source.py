"""SQLAlchemy implementation of TransactionSource."""

import logging

from sqlalchemy import Engine, MetaData, Table, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from networth.core.exceptions import DataSourceError
from networth.repositories.protocols import Row

logger = logging.getLogger(__name__)


class SqlAlchemyTransactionSource:
    """
    Reads ledger tables through SQLAlchemy Core reflection.

    No ORM models: the store's column set is a fixed contract with the
    writer, and this side only ever selects.
    """

    def __init__(self, engine: Engine):
        self._engine = engine

    def fetch_rows(self, table: str) -> list[Row]:
        """Select all rows of a table, ordered by primary key when it has one."""
        try:
            with self._engine.connect() as conn:
                if not inspect(conn).has_table(table):
                    logger.debug("Table %s not present; treating as empty", table)
                    return []
                reflected = Table(table, MetaData(), autoload_with=conn)
                stmt = select(reflected)
                if reflected.primary_key.columns:
                    stmt = stmt.order_by(*reflected.primary_key.columns)
                return [dict(row) for row in conn.execute(stmt).mappings()]
        except SQLAlchemyError as exc:
            logger.error("Failed to read %s: %s", table, exc)
            raise DataSourceError(table, str(exc)) from exc
