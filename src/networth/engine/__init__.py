"""Computation engine: FIFO lots, interest accumulation, XIRR."""

from networth.engine.ordering import chronological
from networth.engine.lot_ledger import LotLedger
from networth.engine.accumulator import Accumulator, AccumulatorState
from networth.engine.xirr import solve_xirr

__all__ = [
    "chronological",
    "LotLedger",
    "Accumulator",
    "AccumulatorState",
    "solve_xirr",
]
