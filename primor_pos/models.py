"""Domain models for primor-pos."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from primor_pos.errors import CatalogError


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    CASHIER = "CASHIER"
    KITCHEN = "KITCHEN"
    CUSTOMER = "CUSTOMER"


class OrderStatus(str, Enum):
    RECEIVED = "RECEIVED"
    PREPARING = "PREPARING"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class PaymentMethod(str, Enum):
    PIX = "PIX"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    CASH = "CASH"


class FulfillmentType(str, Enum):
    DELIVERY = "DELIVERY"
    PICKUP = "PICKUP"
    DINE_IN = "DINE_IN"


class Category(str, Enum):
    FRITOS = "FRITOS"
    ASSADOS = "ASSADOS"
    COMBOS = "COMBOS"
    BEBIDAS = "BEBIDAS"
    SOBREMESAS = "SOBREMESAS"


class Unit(str, Enum):
    KG = "KG"
    LT = "LT"
    UN = "UN"


@dataclass
class Ingredient:
    """A stocked ingredient. Stock may go negative after deductions."""

    id: str
    name: str
    unit: Unit
    current_stock: Decimal
    min_stock: Decimal
    cost_price: Decimal


@dataclass(frozen=True)
class ComplementItem:
    id: str
    name: str
    price: Decimal


@dataclass(frozen=True)
class ComplementGroup:
    """A named option set with min/max selection counts."""

    id: str
    name: str
    min_choices: int
    max_choices: int
    items: tuple[ComplementItem, ...] = ()

    def __post_init__(self) -> None:
        if self.min_choices < 0:
            raise CatalogError(f"Group {self.name!r}: min_choices must not be negative")
        if self.min_choices > self.max_choices:
            raise CatalogError(
                f"Group {self.name!r}: min_choices ({self.min_choices}) exceeds max_choices ({self.max_choices})"
            )
        if self.max_choices > len(self.items):
            raise CatalogError(
                f"Group {self.name!r}: max_choices ({self.max_choices}) exceeds item count ({len(self.items)})"
            )

    @property
    def is_single_choice(self) -> bool:
        return self.max_choices == 1

    @property
    def is_required(self) -> bool:
        return self.min_choices > 0


@dataclass(frozen=True)
class RecipeEntry:
    """Quantity of one ingredient consumed per unit of a product."""

    ingredient_id: str
    quantity: Decimal


@dataclass(frozen=True)
class Product:
    """An orderable catalog product."""

    id: str
    name: str
    description: str
    price: Decimal
    category: Category
    image: str = ""
    recipe: tuple[RecipeEntry, ...] = ()
    complement_group_ids: tuple[str, ...] = ()
    combo_items: tuple[str, ...] = ()

    @property
    def needs_customization(self) -> bool:
        return bool(self.complement_group_ids)


@dataclass(frozen=True)
class SelectedComplements:
    """Snapshot of the items chosen within one complement group."""

    group_id: str
    group_name: str
    items: tuple[ComplementItem, ...]


@dataclass(frozen=True)
class OrderItem:
    """A line copied from the cart at order time; never re-reads the product."""

    product_id: str
    name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    selected_complements: tuple[SelectedComplements, ...] = ()


@dataclass
class Order:
    """A submitted order. Only ``status`` and ``updated_at`` change after creation."""

    id: str
    order_number: str
    customer_name: str
    items: tuple[OrderItem, ...]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    status: OrderStatus
    payment_method: PaymentMethod
    fulfillment: FulfillmentType
    created_at: datetime
    updated_at: datetime

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class User:
    id: str
    username: str
    role: UserRole
    name: str


@dataclass
class DashboardSnapshot:
    """KPI values shown on the admin dashboard."""

    revenue: Decimal
    order_count: int
    average_ticket: Decimal
    low_stock_count: int
    low_stock_ids: list[str] = field(default_factory=list)
