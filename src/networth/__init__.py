"""Consolidated investment portfolio valuation."""

__version__ = "0.1.0"
