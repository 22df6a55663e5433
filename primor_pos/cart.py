"""Cart building, complement selection and pricing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from primor_pos.errors import EmptyCartError, IncompleteSelectionError, ValidationError
from primor_pos.models import (
    ComplementGroup,
    ComplementItem,
    FulfillmentType,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    Product,
    SelectedComplements,
)

CENTS = Decimal("0.01")

CartKey = tuple[str, frozenset[tuple[str, str]]]


def money(value: Decimal) -> Decimal:
    """Round to currency precision."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_unit_price(product: Product, selections: Iterable[SelectedComplements] = ()) -> Decimal:
    """Base price plus every selected complement item across all groups."""
    extra = sum((item.price for group in selections for item in group.items), Decimal("0"))
    return product.price + extra


class ComplementSelection:
    """Complement choices for one product while the customer customizes it."""

    def __init__(self, product: Product, groups: Iterable[ComplementGroup]) -> None:
        self.product = product
        self.groups = list(groups)
        self._selected: dict[str, list[ComplementItem]] = {group.id: [] for group in self.groups}

    def selected(self, group_id: str) -> list[ComplementItem]:
        return list(self._selected.get(group_id, []))

    def is_selected(self, group: ComplementGroup, item: ComplementItem) -> bool:
        return any(chosen.id == item.id for chosen in self._selected.get(group.id, []))

    def toggle(self, group: ComplementGroup, item: ComplementItem) -> bool:
        """
        Toggle ``item`` within ``group`` and report whether anything changed.

        Selected items are removed. A full single-choice group swaps its
        choice; a multi-choice group below its maximum appends; a full
        multi-choice group ignores the request.
        """
        current = self._selected.setdefault(group.id, [])
        if self.is_selected(group, item):
            self._selected[group.id] = [chosen for chosen in current if chosen.id != item.id]
            return True
        if group.is_single_choice and len(current) >= group.max_choices:
            self._selected[group.id] = [item]
            return True
        if len(current) < group.max_choices:
            current.append(item)
            return True
        return False

    def validate(self) -> None:
        for group in self.groups:
            count = len(self._selected.get(group.id, []))
            if count < group.min_choices:
                raise IncompleteSelectionError(group.name, group.min_choices, count)

    def selected_complements(self) -> tuple[SelectedComplements, ...]:
        """Per-group snapshots in the product's group order, skipping empty groups."""
        return tuple(
            SelectedComplements(group_id=group.id, group_name=group.name, items=tuple(self._selected[group.id]))
            for group in self.groups
            if self._selected.get(group.id)
        )

    def unit_price(self) -> Decimal:
        return compute_unit_price(self.product, self.selected_complements())


@dataclass
class CartLine:
    product: Product
    quantity: int
    unit_price: Decimal
    selected_complements: tuple[SelectedComplements, ...] = ()

    @property
    def key(self) -> CartKey:
        return line_key(self.product, self.selected_complements)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


def line_key(product: Product, selections: Iterable[SelectedComplements]) -> CartKey:
    return (product.id, frozenset((group.group_id, item.id) for group in selections for item in group.items))


class Cart:
    """Transient product-to-quantity mapping for one checkout."""

    def __init__(self) -> None:
        self._lines: dict[CartKey, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def quantity_of(self, key: CartKey) -> int:
        line = self._lines.get(key)
        return line.quantity if line is not None else 0

    def add_item(self, product: Product, selection: ComplementSelection | None = None) -> CartLine:
        """Add one unit, merging with an identical line when one exists."""
        if selection is None:
            if product.needs_customization:
                raise ValidationError(f"{product.name} needs its options chosen before it can be added")
            selections: tuple[SelectedComplements, ...] = ()
        else:
            if selection.product.id != product.id:
                raise ValueError(f"Selection belongs to {selection.product.id}, not {product.id}")
            selection.validate()
            selections = selection.selected_complements()

        key = line_key(product, selections)
        line = self._lines.get(key)
        if line is not None:
            line.quantity += 1
            return line

        line = CartLine(
            product=product,
            quantity=1,
            unit_price=compute_unit_price(product, selections),
            selected_complements=selections,
        )
        self._lines[key] = line
        return line

    def increment(self, key: CartKey) -> bool:
        """Add one more unit to an existing line."""
        line = self._lines.get(key)
        if line is None:
            return False
        line.quantity += 1
        return True

    def remove_one(self, key: CartKey) -> bool:
        line = self._lines.get(key)
        if line is None:
            return False
        if line.quantity > 1:
            line.quantity -= 1
        else:
            del self._lines[key]
        return True

    def clear(self) -> None:
        self._lines.clear()


def compute_order_total(cart: Cart) -> Decimal:
    """Sum of unit price times quantity over every cart line."""
    return money(sum((line.line_total for line in cart.lines), Decimal("0")))


def build_order(
    cart: Cart,
    *,
    order_id: str,
    order_number: str,
    customer_name: str,
    payment_method: PaymentMethod,
    fulfillment: FulfillmentType,
    now: datetime,
) -> Order:
    """Snapshot the cart into a RECEIVED order."""
    if cart.is_empty:
        raise EmptyCartError()

    items = tuple(
        OrderItem(
            product_id=line.product.id,
            name=line.product.name,
            quantity=line.quantity,
            unit_price=money(line.unit_price),
            total_price=money(line.line_total),
            selected_complements=line.selected_complements,
        )
        for line in cart.lines
    )
    subtotal = compute_order_total(cart)
    tax = Decimal("0.00")
    return Order(
        id=order_id,
        order_number=order_number,
        customer_name=customer_name,
        items=items,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        status=OrderStatus.RECEIVED,
        payment_method=payment_method,
        fulfillment=fulfillment,
        created_at=now,
        updated_at=now,
    )
