"""Application state and the controller the screens talk to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable

from primor_pos.cart import Cart, ComplementSelection, build_order, compute_order_total
from primor_pos.data import Catalog, build_ingredients
from primor_pos.errors import EmptyCartError
from primor_pos.inventory import Inventory
from primor_pos.lifecycle import LifecycleEngine, utc_now
from primor_pos.models import (
    ComplementGroup,
    DashboardSnapshot,
    FulfillmentType,
    Order,
    OrderStatus,
    PaymentMethod,
    Product,
)
from primor_pos.orders import OrderStore

logger = logging.getLogger(__name__)

ORDER_ID_PREFIXES: dict[FulfillmentType, str] = {
    FulfillmentType.DINE_IN: "PDV",
    FulfillmentType.PICKUP: "W",
    FulfillmentType.DELIVERY: "WEB",
}


@dataclass
class AppState:
    """Everything the running terminal shares: catalog, stock, orders."""

    catalog: Catalog
    inventory: Inventory
    orders: OrderStore
    engine: LifecycleEngine

    @classmethod
    def seeded(cls, clock: Callable[[], datetime] = utc_now) -> AppState:
        catalog = Catalog.seeded()
        inventory = Inventory(build_ingredients())
        orders = OrderStore()
        engine = LifecycleEngine(orders, inventory, catalog, clock=clock)
        return cls(catalog=catalog, inventory=inventory, orders=orders, engine=engine)


class PosController:
    """Owns one AppState and exposes the operations the surfaces need."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    @property
    def catalog(self) -> Catalog:
        return self.state.catalog

    @property
    def inventory(self) -> Inventory:
        return self.state.inventory

    @property
    def orders(self) -> OrderStore:
        return self.state.orders

    def submit_order(self, order: Order) -> None:
        self.state.orders.append(order)

    def set_order_status(self, order_id: str, status: OrderStatus) -> bool:
        return self.state.engine.transition(order_id, status)

    def compute_cart_total(self, cart: Cart) -> Decimal:
        return compute_order_total(cart)

    def adjust_stock(self, ingredient_id: str, delta: Decimal) -> None:
        self.state.inventory.adjust(ingredient_id, delta)

    def open_selection(self, product: Product) -> ComplementSelection:
        return ComplementSelection(product, self.state.catalog.groups_for(product))

    def checkout(
        self,
        cart: Cart,
        *,
        customer_name: str,
        payment_method: PaymentMethod,
        fulfillment: FulfillmentType,
    ) -> Order:
        """Turn the cart into a RECEIVED order, submit it and empty the cart."""
        if cart.is_empty:
            raise EmptyCartError()
        identity = self.state.orders.identity
        order = build_order(
            cart,
            order_id=identity.next_id(ORDER_ID_PREFIXES[fulfillment]),
            order_number=identity.next_number(),
            customer_name=customer_name,
            payment_method=payment_method,
            fulfillment=fulfillment,
            now=self.state.engine.clock(),
        )
        self.submit_order(order)
        cart.clear()
        logger.info(
            "checkout number=%s customer=%r payment=%s fulfillment=%s",
            order.order_number,
            order.customer_name,
            payment_method.value,
            fulfillment.value,
        )
        return order

    def add_product(self, product: Product) -> None:
        self.state.catalog.add_product(product)

    def delete_product(self, product_id: str) -> bool:
        return self.state.catalog.delete_product(product_id)

    def add_complement_group(self, group: ComplementGroup) -> None:
        self.state.catalog.add_complement_group(group)

    def delete_complement_group(self, group_id: str) -> bool:
        return self.state.catalog.delete_complement_group(group_id)

    def dashboard(self) -> DashboardSnapshot:
        orders = self.state.orders
        low = self.state.inventory.low_stock()
        return DashboardSnapshot(
            revenue=orders.revenue(),
            order_count=orders.order_count(),
            average_ticket=orders.average_ticket(),
            low_stock_count=len(low),
            low_stock_ids=[ingredient.id for ingredient in low],
        )
