"""Timezone and date parsing utilities."""

from datetime import date, datetime
from typing import Any, Optional

import pytz
from dateutil import parser as date_parser

from networth.config.settings import get_settings


def get_local_tz() -> pytz.BaseTzInfo:
    """Return the configured reporting timezone."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the reporting timezone."""
    return datetime.now(get_local_tz())


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the reporting timezone."""
    tz = get_local_tz()
    if dt.tzinfo is None:
        # Assume naive datetime is already local
        return tz.localize(dt)
    return dt.astimezone(tz)


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a ledger date field into a calendar date.

    Accepts date/datetime objects and free-form strings. Unparseable or empty
    values return None rather than raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local(value).date() if value.tzinfo else value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError, TypeError):
        return None
    return to_local(parsed).date() if parsed.tzinfo else parsed.date()


def to_iso(dt: datetime) -> str:
    """Render a datetime as an ISO-8601 string."""
    return dt.isoformat()
