"""Repository protocol definitions (interfaces)."""

from networth.repositories.protocols.data_source import TransactionSource, Row

__all__ = [
    "TransactionSource",
    "Row",
]
