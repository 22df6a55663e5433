"""In-memory order store and its aggregate views."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from itertools import count
from typing import Iterator
from uuid import uuid4

from primor_pos.cart import money
from primor_pos.errors import DuplicateOrderError
from primor_pos.models import Order, OrderStatus

logger = logging.getLogger(__name__)

# Revenue is realized only when the order has left the counter.
REVENUE_STATUSES = frozenset({OrderStatus.DELIVERED})


class OrderIdentity:
    """Single source of order ids and human-facing order numbers."""

    def __init__(self, start: int = 1) -> None:
        self._numbers = count(start)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid4().hex}"

    def next_number(self) -> str:
        return f"{next(self._numbers):03d}"


class OrderStore:
    """Submitted orders, most recent first."""

    def __init__(self) -> None:
        self._orders: list[Order] = []
        self._by_id: dict[str, Order] = {}
        self.identity = OrderIdentity()

    def __iter__(self) -> Iterator[Order]:
        return iter(list(self._orders))

    def __len__(self) -> int:
        return len(self._orders)

    def append(self, order: Order) -> None:
        if order.id in self._by_id:
            raise DuplicateOrderError(f"Order {order.id} already exists")
        self._orders.insert(0, order)
        self._by_id[order.id] = order
        logger.info(
            "order_append id=%s number=%s items=%d total=%s",
            order.id,
            order.order_number,
            len(order.items),
            order.total,
        )

    def get(self, order_id: str) -> Order | None:
        return self._by_id.get(order_id)

    def update_status(self, order_id: str, status: OrderStatus, updated_at: datetime) -> bool:
        order = self._by_id.get(order_id)
        if order is None:
            return False
        order.status = status
        order.updated_at = updated_at
        return True

    def by_status(self, status: OrderStatus) -> list[Order]:
        return [order for order in self._orders if order.status == status]

    def active(self) -> list[Order]:
        """Orders still on the kitchen board."""
        return [order for order in self._orders if not order.status.is_terminal]

    def revenue(self) -> Decimal:
        return sum((order.total for order in self._orders if order.status in REVENUE_STATUSES), Decimal("0"))

    def order_count(self) -> int:
        return len(self._orders)

    def average_ticket(self) -> Decimal:
        total_orders = self.order_count()
        if total_orders == 0:
            return Decimal("0")
        return money(self.revenue() / total_orders)
