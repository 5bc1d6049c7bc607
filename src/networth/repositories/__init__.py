"""Data access: the read-only transaction store and its row parser."""

from networth.repositories.protocols import TransactionSource, Row
from networth.repositories.memory import InMemoryTransactionSource

__all__ = [
    "TransactionSource",
    "Row",
    "InMemoryTransactionSource",
]
