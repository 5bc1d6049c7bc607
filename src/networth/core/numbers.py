"""Defensive numeric coercion for loosely typed ledger rows."""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

# Quantities at or below this are treated as fully consumed
EPSILON = Decimal("1e-8")

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a raw field into a Decimal.

    Strips currency symbols, thousands separators and whitespace. Anything
    that still fails to parse (or is not finite) becomes Decimal("0").
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else Decimal("0")

    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        return Decimal("0")
    try:
        result = Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")
    return result if result.is_finite() else Decimal("0")
