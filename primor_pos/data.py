"""Catalog data: typed builders over the seed constants and the product catalog."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Iterator

from primor_pos.constant import (
    COMPLEMENT_GROUPS as _COMPLEMENT_GROUPS_RAW,
    INGREDIENTS as _INGREDIENTS_RAW,
    PRODUCTS as _PRODUCTS_RAW,
    SYSTEM_USERS as _SYSTEM_USERS_RAW,
)
from primor_pos.errors import CatalogError
from primor_pos.models import (
    Category,
    ComplementGroup,
    ComplementItem,
    Ingredient,
    Product,
    RecipeEntry,
    Unit,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)

SYSTEM_USERS: tuple[User, ...] = tuple(
    User(id=raw["id"], username=raw["username"], role=UserRole(raw["role"]), name=raw["name"])
    for raw in _SYSTEM_USERS_RAW
)


def find_user(username: str) -> User | None:
    """Resolve a login name against the hardcoded system users."""
    wanted = username.strip().lower()
    for user in SYSTEM_USERS:
        if user.username == wanted:
            return user
    return None


def guest_user(role: UserRole) -> User:
    """Return the system user for a role, or a guest stand-in when none exists."""
    for user in SYSTEM_USERS:
        if user.role == role:
            return user
    return User(id="temp", username="guest", role=role, name=f"Guest {role.value}")


def build_ingredients() -> list[Ingredient]:
    """Fresh mutable copies of the seeded ingredients."""
    return [
        Ingredient(
            id=raw["id"],
            name=raw["name"],
            unit=Unit(raw["unit"]),
            current_stock=Decimal(raw["current_stock"]),
            min_stock=Decimal(raw["min_stock"]),
            cost_price=Decimal(raw["cost_price"]),
        )
        for raw in _INGREDIENTS_RAW
    ]


def build_complement_groups() -> list[ComplementGroup]:
    return [
        ComplementGroup(
            id=str(raw["id"]),
            name=str(raw["name"]),
            min_choices=int(raw["min_choices"]),  # type: ignore[arg-type]
            max_choices=int(raw["max_choices"]),  # type: ignore[arg-type]
            items=tuple(
                ComplementItem(id=item["id"], name=item["name"], price=Decimal(item["price"]))
                for item in raw["items"]  # type: ignore[union-attr]
            ),
        )
        for raw in _COMPLEMENT_GROUPS_RAW
    ]


def build_products() -> list[Product]:
    return [
        Product(
            id=str(raw["id"]),
            name=str(raw["name"]),
            description=str(raw["description"]),
            price=Decimal(str(raw["price"])),
            category=Category(raw["category"]),
            image=str(raw.get("image", "")),
            recipe=tuple(
                RecipeEntry(ingredient_id=ingredient_id, quantity=Decimal(quantity))
                for ingredient_id, quantity in raw.get("recipe", [])  # type: ignore[union-attr]
            ),
            complement_group_ids=tuple(raw.get("complement_group_ids", [])),  # type: ignore[arg-type]
            combo_items=tuple(raw.get("combo_items", [])),  # type: ignore[arg-type]
        )
        for raw in _PRODUCTS_RAW
    ]


class Catalog:
    """Orderable products and their complement groups, keyed by id in insertion order."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        complement_groups: Iterable[ComplementGroup] = (),
    ) -> None:
        self._products: dict[str, Product] = {}
        self._groups: dict[str, ComplementGroup] = {}
        for group in complement_groups:
            self.add_complement_group(group)
        for product in products:
            self.add_product(product)

    @classmethod
    def seeded(cls) -> Catalog:
        return cls(build_products(), build_complement_groups())

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> list[Product]:
        return list(self._products.values())

    def categories(self) -> list[Category]:
        """Categories in first-seen product order."""
        seen: list[Category] = []
        for product in self._products.values():
            if product.category not in seen:
                seen.append(product.category)
        return seen

    def by_category(self, category: Category | None) -> list[Product]:
        if category is None:
            return self.products
        return [product for product in self._products.values() if product.category == category]

    def product(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def group(self, group_id: str) -> ComplementGroup | None:
        return self._groups.get(group_id)

    def groups_for(self, product: Product) -> list[ComplementGroup]:
        """Resolve a product's weak group references, dropping ones that no longer exist."""
        return [self._groups[group_id] for group_id in product.complement_group_ids if group_id in self._groups]

    def add_product(self, product: Product) -> None:
        if product.id in self._products:
            raise CatalogError(f"Product {product.id} already exists")
        self._products[product.id] = product
        logger.info("catalog_add_product id=%s name=%r", product.id, product.name)

    def delete_product(self, product_id: str) -> bool:
        """Remove a product. Orders already placed keep their snapshots."""
        removed = self._products.pop(product_id, None)
        if removed is None:
            return False
        logger.info("catalog_delete_product id=%s", product_id)
        return True

    def add_complement_group(self, group: ComplementGroup) -> None:
        if group.id in self._groups:
            raise CatalogError(f"Complement group {group.id} already exists")
        self._groups[group.id] = group
        logger.info("catalog_add_group id=%s name=%r", group.id, group.name)

    def delete_complement_group(self, group_id: str) -> bool:
        """Remove a group. Products keep the dangling id; ``groups_for`` skips it."""
        removed = self._groups.pop(group_id, None)
        if removed is None:
            return False
        logger.info("catalog_delete_group id=%s", group_id)
        return True
