"""FIFO lot ledger shared by all unit-priced asset classes."""

import logging
from collections import deque
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from networth.core.numbers import EPSILON
from networth.domain.models import (
    UnitTransaction,
    Lot,
    Position,
    ClosedLot,
    SaleShortfall,
)
from networth.engine.ordering import chronological

logger = logging.getLogger(__name__)

LotKey = tuple[str, str]


class LotLedger:
    """
    Replays unit transactions into FIFO lot queues.

    Each call to apply() starts from empty queues, so one ledger instance
    never leaks state between evaluations. After apply(), closed_lots holds
    every realized slice and shortfalls every sale that exceeded the open
    quantity.

    Over-sales are clamped: the open lots are emptied and the excess is
    recorded as a SaleShortfall rather than raised. Bonus issues and splits
    are not modelled, so such rows show up here.
    """

    def __init__(self) -> None:
        self._queues: dict[LotKey, deque[Lot]] = {}
        self.closed_lots: list[ClosedLot] = []
        self.shortfalls: list[SaleShortfall] = []

    def apply(
        self,
        transactions: Iterable[UnitTransaction],
        prices: Optional[Mapping[str, Decimal]] = None,
    ) -> list[Position]:
        """
        Replay transactions and return open positions.

        Positions come back in order of first appearance of their
        (asset, account) key; keys with no open lots are omitted. A missing
        price values the position at zero.
        """
        self._queues = {}
        self.closed_lots = []
        self.shortfalls = []

        for txn in chronological(transactions):
            if abs(txn.quantity) <= EPSILON:
                continue
            queue = self._queues.setdefault((txn.asset, txn.account), deque())
            if txn.is_sale:
                self._consume(queue, txn)
            elif txn.is_purchase:
                queue.append(
                    Lot(
                        quantity=txn.quantity,
                        unit_cost=txn.price,
                        acquired_on=txn.effective_date,
                        sequence=txn.sequence,
                    )
                )

        prices = prices or {}
        return [
            self._position(key, queue, prices)
            for key, queue in self._queues.items()
            if queue
        ]

    def open_lots(self, asset: str, account: str = "") -> list[Lot]:
        """Return a copy of the open lot queue for a key, oldest first."""
        queue = self._queues.get((asset, account), ())
        return [
            Lot(
                quantity=lot.quantity,
                unit_cost=lot.unit_cost,
                acquired_on=lot.acquired_on,
                sequence=lot.sequence,
            )
            for lot in queue
        ]

    @property
    def shortfall_count(self) -> int:
        return len(self.shortfalls)

    def _consume(self, queue: deque[Lot], txn: UnitTransaction) -> None:
        remaining = abs(txn.quantity)
        while remaining > EPSILON and queue:
            lot = queue[0]
            consumed = min(remaining, lot.quantity)
            lot.quantity -= consumed
            remaining -= consumed
            self.closed_lots.append(
                ClosedLot(
                    asset=txn.asset,
                    account=txn.account,
                    quantity=consumed,
                    unit_cost=lot.unit_cost,
                    sale_price=txn.realized_price,
                    acquired_on=lot.acquired_on,
                    sold_on=txn.effective_date,
                )
            )
            if lot.quantity <= EPSILON:
                queue.popleft()

        if remaining > EPSILON:
            logger.warning(
                "Sale of %s %s in %r exceeds open quantity by %s; clamped",
                abs(txn.quantity),
                txn.asset,
                txn.account,
                remaining,
            )
            self.shortfalls.append(
                SaleShortfall(
                    asset=txn.asset,
                    account=txn.account,
                    unmatched_quantity=remaining,
                    sold_on=txn.effective_date,
                )
            )

    @staticmethod
    def _position(
        key: LotKey,
        queue: deque[Lot],
        prices: Mapping[str, Decimal],
    ) -> Position:
        asset, account = key
        quantity = sum((lot.quantity for lot in queue), Decimal("0"))
        invested = sum((max(lot.cost, Decimal("0")) for lot in queue), Decimal("0"))
        price = prices.get(asset) or Decimal("0")
        return Position(
            asset=asset,
            account=account,
            quantity=quantity,
            invested=invested,
            price=price,
            market_value=quantity * price,
            first_acquired_on=queue[0].acquired_on,
            lot_count=len(queue),
        )
