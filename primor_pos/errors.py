"""Exception types raised by the order core."""

from __future__ import annotations


class PrimorError(Exception):
    """Base class for business-rule errors."""


class ValidationError(PrimorError, ValueError):
    """User-facing input problem; the user corrects input and resubmits."""


class IncompleteSelectionError(ValidationError):
    """A required complement group has fewer selections than its minimum."""

    def __init__(self, group_name: str, min_choices: int, selected: int):
        self.group_name = group_name
        self.min_choices = min_choices
        self.selected = selected
        super().__init__(f'Select at least {min_choices} option(s) in "{group_name}" ({selected} selected)')


class EmptyCartError(ValidationError):
    """Checkout attempted with nothing in the cart."""

    def __init__(self) -> None:
        super().__init__("Cart is empty")


class CatalogError(ValidationError):
    """Invalid catalog definition (group bounds, duplicate ids)."""


class InvalidTransitionError(PrimorError):
    """Order status change not allowed by the lifecycle."""

    def __init__(self, order_id: str, current: str, target: str):
        self.order_id = order_id
        self.current = current
        self.target = target
        super().__init__(f"Order {order_id}: cannot move from {current} to {target}")


class DuplicateOrderError(PrimorError):
    """An order with the same id is already stored."""


class UnknownIngredientError(PrimorError, KeyError):
    """Stock operation against an ingredient that does not exist."""

    def __str__(self) -> str:
        return f"Unknown ingredient: {self.args[0]}"
