"""SQLAlchemy repository implementations."""

from networth.repositories.sqlalchemy.database import (
    build_engine,
    get_engine,
    reset_database,
)
from networth.repositories.sqlalchemy.data_source import SqlAlchemyTransactionSource
from networth.repositories.sqlalchemy.schema import metadata, create_store_schema

__all__ = [
    "build_engine",
    "get_engine",
    "reset_database",
    "SqlAlchemyTransactionSource",
    "metadata",
    "create_store_schema",
]
