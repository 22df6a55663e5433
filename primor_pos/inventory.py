"""Ingredient stock tracking."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Iterator

from primor_pos.errors import UnknownIngredientError
from primor_pos.models import Ingredient

logger = logging.getLogger(__name__)


def is_low(ingredient: Ingredient) -> bool:
    """Display-level warning: stock at or below its minimum."""
    return ingredient.current_stock <= ingredient.min_stock


class Inventory:
    """
    Current stock per ingredient.

    Deductions never clamp at zero. A negative stock level means the kitchen
    delivered more than the books say it had; it is reported through
    ``over_committed`` and never blocks an order.
    """

    def __init__(self, ingredients: Iterable[Ingredient] = ()) -> None:
        self._ingredients: dict[str, Ingredient] = {ingredient.id: ingredient for ingredient in ingredients}

    def __iter__(self) -> Iterator[Ingredient]:
        return iter(self._ingredients.values())

    def __len__(self) -> int:
        return len(self._ingredients)

    def __contains__(self, ingredient_id: object) -> bool:
        return ingredient_id in self._ingredients

    def get(self, ingredient_id: str) -> Ingredient | None:
        return self._ingredients.get(ingredient_id)

    def stock_of(self, ingredient_id: str) -> Decimal:
        ingredient = self._ingredients.get(ingredient_id)
        if ingredient is None:
            raise UnknownIngredientError(ingredient_id)
        return ingredient.current_stock

    def deduct(self, ingredient_id: str, amount: Decimal) -> None:
        """Decrement stock unconditionally."""
        ingredient = self._ingredients.get(ingredient_id)
        if ingredient is None:
            raise UnknownIngredientError(ingredient_id)
        was_low = is_low(ingredient)
        ingredient.current_stock -= amount
        logger.info(
            "stock_deduct ingredient=%s amount=%s remaining=%s", ingredient_id, amount, ingredient.current_stock
        )
        if not was_low and is_low(ingredient):
            logger.info(
                "stock_low ingredient=%s remaining=%s min=%s",
                ingredient_id,
                ingredient.current_stock,
                ingredient.min_stock,
            )

    def adjust(self, ingredient_id: str, delta: Decimal) -> None:
        """Manual admin correction; positive restocks, negative writes off."""
        ingredient = self._ingredients.get(ingredient_id)
        if ingredient is None:
            raise UnknownIngredientError(ingredient_id)
        ingredient.current_stock += delta
        logger.info(
            "stock_adjust ingredient=%s delta=%s remaining=%s", ingredient_id, delta, ingredient.current_stock
        )

    def low_stock(self) -> list[Ingredient]:
        return [ingredient for ingredient in self._ingredients.values() if is_low(ingredient)]

    def over_committed(self) -> list[Ingredient]:
        return [ingredient for ingredient in self._ingredients.values() if ingredient.current_stock < 0]
