"""Deterministic chronological ordering for ledger replay."""

from datetime import date
from typing import Iterable, Protocol, TypeVar, Optional


class _Dated(Protocol):
    effective_date: Optional[date]
    sequence: int


T = TypeVar("T", bound=_Dated)


def chronological(items: Iterable[T]) -> list[T]:
    """
    Sort ledger rows by effective date, oldest first.

    Same-day rows keep ingestion order (sequence). Undated rows go last.
    """
    return sorted(
        items,
        key=lambda item: (
            item.effective_date is None,
            item.effective_date or date.min,
            item.sequence,
        ),
    )
