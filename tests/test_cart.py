from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from primor_pos.cart import Cart, ComplementSelection, build_order, compute_order_total, line_key
from primor_pos.data import Catalog
from primor_pos.errors import EmptyCartError, IncompleteSelectionError, ValidationError
from primor_pos.models import (
    Category,
    ComplementGroup,
    ComplementItem,
    FulfillmentType,
    OrderStatus,
    PaymentMethod,
    Product,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.seeded()


def _selection(catalog: Catalog, product_id: str) -> ComplementSelection:
    product = catalog.product(product_id)
    return ComplementSelection(product, catalog.groups_for(product))


def _item(catalog: Catalog, group_id: str, item_id: str):
    group = catalog.group(group_id)
    return group, next(item for item in group.items if item.id == item_id)


class TestComplementToggle:
    def test_single_choice_replaces_previous(self, catalog):
        selection = _selection(catalog, "p5")
        group, juice = _item(catalog, "g2", "g2-1")
        _, soda = _item(catalog, "g2", "g2-2")

        assert selection.toggle(group, juice)
        assert selection.toggle(group, soda)

        assert [item.id for item in selection.selected("g2")] == ["g2-2"]

    def test_multi_choice_ignores_beyond_max(self, catalog):
        selection = _selection(catalog, "p1")
        group, first = _item(catalog, "g1", "g1-1")
        _, second = _item(catalog, "g1", "g1-2")
        _, third = _item(catalog, "g1", "g1-3")

        selection.toggle(group, first)
        selection.toggle(group, second)
        changed = selection.toggle(group, third)

        assert changed is False
        assert [item.id for item in selection.selected("g1")] == ["g1-1", "g1-2"]

    def test_reselecting_single_choice_item_deselects_it(self, catalog):
        selection = _selection(catalog, "p5")
        group, juice = _item(catalog, "g2", "g2-1")

        selection.toggle(group, juice)
        assert selection.toggle(group, juice) is True

        assert selection.selected("g2") == []

    def test_toggle_selected_item_removes_it(self, catalog):
        selection = _selection(catalog, "p1")
        group, item = _item(catalog, "g1", "g1-1")

        selection.toggle(group, item)
        selection.toggle(group, item)

        assert selection.selected("g1") == []


class TestComplementValidation:
    def test_required_group_below_min_raises(self, catalog):
        selection = _selection(catalog, "p5")
        group, coxinha = _item(catalog, "g3", "g3-1")
        drink_group, juice = _item(catalog, "g2", "g2-1")
        selection.toggle(group, coxinha)
        selection.toggle(drink_group, juice)

        with pytest.raises(IncompleteSelectionError) as exc_info:
            selection.validate()

        assert exc_info.value.group_name == "Salgados do Combo"
        assert exc_info.value.min_choices == 2
        assert exc_info.value.selected == 1

    def test_required_group_at_min_passes(self, catalog):
        selection = _selection(catalog, "p5")
        for group_id, item_id in (("g3", "g3-1"), ("g3", "g3-3"), ("g2", "g2-2")):
            selection.toggle(*_item(catalog, group_id, item_id))

        selection.validate()

        assert selection.unit_price() == Decimal("26.40")
        assert [group.group_name for group in selection.selected_complements()] == [
            "Salgados do Combo",
            "Bebida do Combo",
        ]

    def test_optional_group_may_stay_empty(self, catalog):
        selection = _selection(catalog, "p1")

        selection.validate()

        assert selection.selected_complements() == ()
        assert selection.unit_price() == Decimal("8.50")


class TestPricing:
    def test_unit_price_adds_selected_complements(self, catalog):
        selection = _selection(catalog, "p1")
        group, catupiry = _item(catalog, "g1", "g1-1")
        _, garlic = _item(catalog, "g1", "g1-2")
        selection.toggle(group, catupiry)
        selection.toggle(group, garlic)

        assert selection.unit_price() == Decimal("11.50")

    def test_order_total_is_sum_of_lines(self, catalog):
        cart = Cart()
        cart.add_item(catalog.product("p3"))
        cart.add_item(catalog.product("p3"))
        cart.add_item(catalog.product("p4"))

        assert compute_order_total(cart) == Decimal("24.80")


class TestCart:
    def test_identical_items_merge_into_one_line(self, catalog):
        cart = Cart()
        product = catalog.product("p6")

        cart.add_item(product)
        cart.add_item(product)

        assert len(cart) == 1
        assert cart.item_count == 2

    def test_different_complements_make_separate_lines(self, catalog):
        cart = Cart()
        plain = _selection(catalog, "p1")
        sauced = _selection(catalog, "p1")
        group, item = _item(catalog, "g1", "g1-3")
        sauced.toggle(group, item)

        cart.add_item(catalog.product("p1"), plain)
        cart.add_item(catalog.product("p1"), sauced)

        assert len(cart) == 2

    def test_customizable_product_needs_selection(self, catalog):
        cart = Cart()

        with pytest.raises(ValidationError):
            cart.add_item(catalog.product("p5"))

        assert cart.is_empty

    def test_add_then_remove_restores_quantity_and_total(self, catalog):
        cart = Cart()
        product = catalog.product("p3")
        cart.add_item(catalog.product("p4"))
        cart.add_item(product)
        key = line_key(product, ())
        before = compute_order_total(cart)

        cart.increment(key)
        assert compute_order_total(cart) == before + product.price
        cart.remove_one(key)

        assert cart.quantity_of(key) == 1
        assert compute_order_total(cart) == before
        cart.remove_one(key)
        assert cart.is_empty

    def test_remove_unknown_line_is_noop(self):
        cart = Cart()

        assert cart.remove_one(("missing", frozenset())) is False


class TestBuildOrder:
    def test_empty_cart_rejected(self):
        with pytest.raises(EmptyCartError):
            build_order(
                Cart(),
                order_id="PDV-x",
                order_number="001",
                customer_name="Balcão",
                payment_method=PaymentMethod.CASH,
                fulfillment=FulfillmentType.DINE_IN,
                now=NOW,
            )

    def test_order_snapshots_cart_lines(self, catalog):
        cart = Cart()
        cart.add_item(catalog.product("p3"))
        cart.add_item(catalog.product("p3"))

        order = build_order(
            cart,
            order_id="PDV-x",
            order_number="001",
            customer_name="Balcão",
            payment_method=PaymentMethod.CASH,
            fulfillment=FulfillmentType.DINE_IN,
            now=NOW,
        )

        assert order.status == OrderStatus.RECEIVED
        assert order.created_at == order.updated_at == NOW
        assert order.total == Decimal("15.80")
        assert order.items[0].quantity == 2
        assert order.items[0].total_price == Decimal("15.80")


class TestLineIdentity:
    def test_groups_sharing_a_name_keep_separate_lines(self):
        sauce = ComplementItem(id="x1", name="Alho", price=Decimal("1.00"))
        first = ComplementGroup(id="ga", name="Molho", min_choices=0, max_choices=1, items=(sauce,))
        second = ComplementGroup(id="gb", name="Molho", min_choices=0, max_choices=1, items=(sauce,))
        product = Product(
            id="px",
            name="Pastel",
            description="",
            price=Decimal("7.00"),
            category=Category.FRITOS,
            complement_group_ids=("ga", "gb"),
        )
        cart = Cart()

        in_first = ComplementSelection(product, (first, second))
        in_first.toggle(first, sauce)
        in_second = ComplementSelection(product, (first, second))
        in_second.toggle(second, sauce)
        cart.add_item(product, in_first)
        cart.add_item(product, in_second)

        assert len(cart) == 2
        assert [line.selected_complements[0].group_id for line in cart.lines] == ["ga", "gb"]
