"""Rendering helpers shared by the screens."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from rich.text import Text

from primor_pos.config import CURRENCY_SYMBOL, URGENCY_CRITICAL_MINUTES, URGENCY_WARN_MINUTES
from primor_pos.inventory import is_low
from primor_pos.models import Category, Ingredient, Order, OrderItem, OrderStatus, PaymentMethod

PAYMENT_LABELS: dict[PaymentMethod, str] = {
    PaymentMethod.PIX: "PIX",
    PaymentMethod.CREDIT_CARD: "CARTÃO CRÉDITO",
    PaymentMethod.DEBIT_CARD: "CARTÃO DÉBITO",
    PaymentMethod.CASH: "DINHEIRO",
}

STATUS_LABELS: dict[OrderStatus, str] = {
    OrderStatus.RECEIVED: "RECEBIDO",
    OrderStatus.PREPARING: "PREPARANDO",
    OrderStatus.READY: "PRONTO",
    OrderStatus.DELIVERED: "ENTREGUE",
    OrderStatus.CANCELLED: "CANCELADO",
}


def format_money(value: Decimal) -> str:
    return f"{CURRENCY_SYMBOL} {value:.2f}"


def badge_style(category: Category) -> str:
    """Return a consistent badge style for category tags."""
    if category == Category.FRITOS:
        return "bold #ffffff on #b23a48"
    if category == Category.COMBOS:
        return "bold #272727 on #ffc72c"
    if category == Category.BEBIDAS:
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def status_style(status: OrderStatus) -> str:
    if status == OrderStatus.DELIVERED:
        return "bold #0b1f0f on #5fbf72"
    if status == OrderStatus.CANCELLED:
        return "bold #ffffff on #b23a48"
    return "bold #272727 on #ffc72c"


def status_badge(status: OrderStatus) -> Text:
    return Text(f" {STATUS_LABELS[status]} ", style=status_style(status))


def urgency_style(order: Order, now: datetime) -> str:
    """Card header style by age: calm, warning, then critical."""
    minutes = (now - order.created_at).total_seconds() / 60
    if minutes > URGENCY_CRITICAL_MINUTES:
        return "bold #ffffff on #d62828"
    if minutes > URGENCY_WARN_MINUTES:
        return "bold #ffffff on #f77f00"
    return "bold #ffc72c on #272727"


def age_minutes(order: Order, now: datetime) -> int:
    return int((now - order.created_at).total_seconds() // 60)


def format_order_item(item: OrderItem) -> Text:
    """Render ``2x NAME`` followed by complement tags on an indented line."""
    text = Text()
    text.append(f"{item.quantity}x", style="bold #ffffff on #b23a48")
    text.append(f" {item.name.upper()}")
    complements = [complement.name for group in item.selected_complements for complement in group.items]
    if complements:
        text.append("\n      ")
        for idx, name in enumerate(complements):
            if idx > 0:
                text.append(" ")
            text.append(f"[+ {name}]", style="white")
    return text


def stock_bar(ingredient: Ingredient, width: int = 20) -> Text:
    """Stock level against twice the minimum, as a horizontal bar."""
    scale = ingredient.min_stock * 2
    if scale <= 0:
        ratio = 1.0 if ingredient.current_stock > 0 else 0.0
    else:
        ratio = float(ingredient.current_stock / scale)
    filled = max(0, min(width, int(round(ratio * width))))
    style = "#d62828" if is_low(ingredient) else "#5fbf72"
    text = Text()
    text.append("█" * filled, style=style)
    text.append("░" * (width - filled), style="dim")
    return text


def format_ingredient_row(ingredient: Ingredient) -> Text:
    text = Text()
    text.append(f"{ingredient.name:<18}")
    text.append_text(stock_bar(ingredient))
    stock_style = "bold #d62828" if is_low(ingredient) else ""
    text.append(
        f" {ingredient.current_stock:.2f} {ingredient.unit.value} / Mín {ingredient.min_stock} {ingredient.unit.value}",
        style=stock_style,
    )
    if ingredient.current_stock < 0:
        text.append("  SEM LASTRO", style="bold #ffffff on #d62828")
    elif is_low(ingredient):
        text.append("  BAIXO", style="bold #d62828")
    return text


def window_bounds(total: int, rows: int, selected: int | None) -> tuple[int, int]:
    """Slice bounds that keep ``selected`` centered in a scrolling list."""
    if total <= 0:
        return (0, 0)

    rows = max(1, rows)
    if total <= rows:
        return (0, total)

    if selected is None:
        start = 0
    else:
        half = rows // 2
        start = selected - half
        start = max(0, start)
        start = min(start, total - rows)

    return (start, start + rows)
