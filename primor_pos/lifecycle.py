"""
Order lifecycle state machine.

Status flow:
    RECEIVED -> PREPARING -> READY -> DELIVERED
    any non-terminal status -> CANCELLED

The first arrival at DELIVERED deducts every recipe ingredient of every
item from inventory. Deduction happens at most once per order.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from primor_pos.data import Catalog
from primor_pos.errors import InvalidTransitionError
from primor_pos.inventory import Inventory
from primor_pos.models import Order, OrderStatus
from primor_pos.orders import OrderStore

logger = logging.getLogger(__name__)

FORWARD_TRANSITIONS: dict[OrderStatus, OrderStatus] = {
    OrderStatus.RECEIVED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DELIVERED,
}

_TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_status(current: OrderStatus) -> OrderStatus | None:
    """The single forward step from ``current``, if any."""
    return FORWARD_TRANSITIONS.get(current)


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    if current.is_terminal:
        return False
    if target == OrderStatus.CANCELLED:
        return True
    return FORWARD_TRANSITIONS.get(current) == target


class LifecycleEngine:
    """Applies status transitions to stored orders and their stock side effects."""

    def __init__(
        self,
        orders: OrderStore,
        inventory: Inventory,
        catalog: Catalog,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.orders = orders
        self.inventory = inventory
        self.catalog = catalog
        self.clock = clock
        self._deducted: set[str] = set()

    def has_deducted(self, order_id: str) -> bool:
        return order_id in self._deducted

    def transition(self, order_id: str, target: OrderStatus) -> bool:
        """
        Move an order to ``target``.

        Returns False when no order has ``order_id``. Re-applying the
        current status only refreshes ``updated_at``. Any other move not in
        the lifecycle raises InvalidTransitionError.
        """
        order = self.orders.get(order_id)
        if order is None:
            logger.info("transition_miss id=%s target=%s", order_id, target.value)
            return False

        previous = order.status
        if target != previous and not can_transition(previous, target):
            raise InvalidTransitionError(order_id, previous.value, target.value)

        if target == OrderStatus.DELIVERED and previous != OrderStatus.DELIVERED:
            self._deduct_stock(order)

        self.orders.update_status(order_id, target, self._next_stamp(order))
        logger.info("transition id=%s %s -> %s", order_id, previous.value, target.value)
        return True

    def _next_stamp(self, order: Order) -> datetime:
        now = self.clock()
        if now <= order.updated_at:
            return order.updated_at + _TICK
        return now

    def _deduct_stock(self, order: Order) -> None:
        if order.id in self._deducted:
            return
        self._deducted.add(order.id)

        for item in order.items:
            product = self.catalog.product(item.product_id)
            if product is None:
                logger.warning("deduct_skip order=%s product=%s reason=not_in_catalog", order.id, item.product_id)
                continue
            for entry in product.recipe:
                if entry.ingredient_id not in self.inventory:
                    logger.warning(
                        "deduct_skip order=%s ingredient=%s reason=unknown_ingredient", order.id, entry.ingredient_id
                    )
                    continue
                self.inventory.deduct(entry.ingredient_id, entry.quantity * item.quantity)
