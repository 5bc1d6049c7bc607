"""Dated cashflow fed to the XIRR solver."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Cashflow:
    """
    Signed amount on a date.

    Sign convention: money invested is negative, money realized or the
    current valuation is positive.
    """

    on: Optional[date]
    amount: float
