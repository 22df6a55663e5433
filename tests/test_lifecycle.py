from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from primor_pos.cart import Cart
from primor_pos.errors import InvalidTransitionError
from primor_pos.lifecycle import can_transition, next_status
from primor_pos.models import FulfillmentType, Order, OrderItem, OrderStatus, PaymentMethod

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _order(order_id: str = "PDV-1", product_id: str = "p1", quantity: int = 2) -> Order:
    item = OrderItem(
        product_id=product_id,
        name="Coxinha Suprema",
        quantity=quantity,
        unit_price=Decimal("8.50"),
        total_price=Decimal("8.50") * quantity,
    )
    return Order(
        id=order_id,
        order_number="001",
        customer_name="Balcão",
        items=(item,),
        subtotal=item.total_price,
        tax=Decimal("0.00"),
        total=item.total_price,
        status=OrderStatus.RECEIVED,
        payment_method=PaymentMethod.CASH,
        fulfillment=FulfillmentType.DINE_IN,
        created_at=T0,
        updated_at=T0,
    )


class TestTransitionTable:
    def test_forward_chain(self):
        assert next_status(OrderStatus.RECEIVED) == OrderStatus.PREPARING
        assert next_status(OrderStatus.PREPARING) == OrderStatus.READY
        assert next_status(OrderStatus.READY) == OrderStatus.DELIVERED
        assert next_status(OrderStatus.DELIVERED) is None

    def test_terminal_statuses_are_final(self):
        assert not can_transition(OrderStatus.DELIVERED, OrderStatus.CANCELLED)
        assert not can_transition(OrderStatus.CANCELLED, OrderStatus.RECEIVED)

    def test_skipping_a_step_is_not_allowed(self):
        assert not can_transition(OrderStatus.RECEIVED, OrderStatus.READY)
        assert can_transition(OrderStatus.PREPARING, OrderStatus.CANCELLED)


class TestDelivery:
    def test_jumping_to_delivered_is_rejected_without_deduction(self, state):
        state.orders.append(_order())

        with pytest.raises(InvalidTransitionError):
            state.engine.transition("PDV-1", OrderStatus.DELIVERED)

        assert state.inventory.stock_of("i1") == Decimal("50")
        assert not state.engine.has_deducted("PDV-1")

    def test_walking_to_delivered_deducts_once(self, state):
        state.orders.append(_order())
        for status in (OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED):
            state.engine.transition("PDV-1", status)

        assert state.inventory.stock_of("i1") == Decimal("49.8")
        assert state.inventory.stock_of("i2") == Decimal("29.9")

        state.engine.transition("PDV-1", OrderStatus.DELIVERED)

        assert state.inventory.stock_of("i1") == Decimal("49.8")
        assert state.inventory.stock_of("i2") == Decimal("29.9")
        assert state.engine.has_deducted("PDV-1")

    def test_non_delivery_statuses_leave_stock_alone(self, state):
        state.orders.append(_order())
        state.engine.transition("PDV-1", OrderStatus.PREPARING)
        state.engine.transition("PDV-1", OrderStatus.CANCELLED)

        assert state.inventory.stock_of("i1") == Decimal("50")
        assert not state.engine.has_deducted("PDV-1")

    def test_delivery_goes_through_when_stock_runs_out(self, controller):
        cart = Cart()
        cart.add_item(controller.catalog.product("p2"))
        order = controller.checkout(
            cart,
            customer_name="Mesa 2",
            payment_method=PaymentMethod.PIX,
            fulfillment=FulfillmentType.DINE_IN,
        )
        controller.adjust_stock("i4", Decimal("-500"))

        for status in (OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED):
            assert controller.set_order_status(order.id, status) is True

        assert controller.orders.get(order.id).status == OrderStatus.DELIVERED
        assert controller.inventory.stock_of("i4") == Decimal("-1")
        assert [ingredient.id for ingredient in controller.inventory.over_committed()] == ["i4"]

    def test_deleted_product_is_skipped(self, state):
        state.orders.append(_order())
        state.catalog.delete_product("p1")
        for status in (OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED):
            state.engine.transition("PDV-1", status)

        assert state.orders.get("PDV-1").status == OrderStatus.DELIVERED
        assert state.inventory.stock_of("i1") == Decimal("50")


class TestTransitions:
    def test_updated_at_strictly_increases_with_frozen_clock(self, state):
        state.orders.append(_order())
        stamps = [state.orders.get("PDV-1").updated_at]
        for status in (OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED):
            state.engine.transition("PDV-1", status)
            stamps.append(state.orders.get("PDV-1").updated_at)

        assert all(later > earlier for earlier, later in zip(stamps, stamps[1:]))

    def test_updated_at_follows_the_clock(self, state, clock):
        state.orders.append(_order())
        clock.advance(minutes=3)

        state.engine.transition("PDV-1", OrderStatus.PREPARING)

        assert state.orders.get("PDV-1").updated_at == clock.now

    def test_invalid_transition_raises(self, state):
        state.orders.append(_order())

        with pytest.raises(InvalidTransitionError) as exc_info:
            state.engine.transition("PDV-1", OrderStatus.READY)

        assert exc_info.value.current == "RECEIVED"
        assert state.orders.get("PDV-1").status == OrderStatus.RECEIVED

    def test_cancelled_order_cannot_be_revived(self, state):
        state.orders.append(_order())
        state.engine.transition("PDV-1", OrderStatus.CANCELLED)

        with pytest.raises(InvalidTransitionError):
            state.engine.transition("PDV-1", OrderStatus.PREPARING)

    def test_unknown_order_returns_false(self, state):
        assert state.engine.transition("nope", OrderStatus.PREPARING) is False

    def test_same_status_only_touches_timestamp(self, state):
        state.orders.append(_order())
        before = state.orders.get("PDV-1").updated_at

        assert state.engine.transition("PDV-1", OrderStatus.RECEIVED) is True

        order = state.orders.get("PDV-1")
        assert order.status == OrderStatus.RECEIVED
        assert order.updated_at > before
