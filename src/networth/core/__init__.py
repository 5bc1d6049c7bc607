"""Core utilities and shared functionality."""

from networth.core.timezone import (
    now_local,
    parse_date,
    to_iso,
    get_local_tz,
)
from networth.core.numbers import to_decimal, EPSILON
from networth.core.exceptions import (
    AppError,
    DataSourceError,
)

__all__ = [
    "now_local",
    "parse_date",
    "to_iso",
    "get_local_tz",
    "to_decimal",
    "EPSILON",
    "AppError",
    "DataSourceError",
]
