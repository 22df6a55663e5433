"""Kitchen display: active orders by status column."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Header, Static

from primor_pos.errors import InvalidTransitionError
from primor_pos.lifecycle import next_status
from primor_pos.models import Order, OrderStatus
from primor_pos.rendering import STATUS_LABELS, age_minutes, format_order_item, urgency_style
from primor_pos.state import PosController

logger = logging.getLogger(__name__)

BOARD_COLUMNS = (OrderStatus.RECEIVED, OrderStatus.PREPARING, OrderStatus.READY)

ACTION_LABELS: dict[OrderStatus, str] = {
    OrderStatus.RECEIVED: "Enter: Iniciar Preparo",
    OrderStatus.PREPARING: "Enter: Item Pronto",
    OrderStatus.READY: "Enter: Entregar Pedido",
}


class KitchenScreen(Screen[None]):
    """Production board; Enter moves the selected order one step forward."""

    CSS = """
    #board {
        height: 1fr;
    }

    .board-column {
        width: 1fr;
        border: round $secondary;
        padding: 0 1;
    }

    .board-column.-active {
        border: heavy $accent;
    }

    .column-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .column-body {
        height: 1fr;
    }

    #kitchen-status {
        height: auto;
        border: heavy $secondary;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("left", "move_column(-1)", "Previous column"),
        ("right", "move_column(1)", "Next column"),
        ("h", "move_column(-1)", "Previous column"),
        ("l", "move_column(1)", "Next column"),
        ("up", "move_card(-1)", "Previous order"),
        ("down", "move_card(1)", "Next order"),
        ("k", "move_card(-1)", "Previous order"),
        ("j", "move_card(1)", "Next order"),
        ("enter", "advance", "Advance"),
        ("c", "cancel_order", "Cancel"),
    ]

    def __init__(self, controller: PosController) -> None:
        super().__init__()
        self.controller = controller
        self.column_index = 0
        self.card_index = 0
        self.status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="board"):
            for status in BOARD_COLUMNS:
                with Vertical(id=f"column-{status.value.lower()}", classes="board-column"):
                    yield Static(classes="column-title")
                    yield Static(classes="column-body")
        yield Static(id="kitchen-status")

    def on_mount(self) -> None:
        self.set_interval(30, self._refresh_board)
        self._refresh_board()

    def on_screen_resume(self) -> None:
        self._refresh_board()

    def column_orders(self, status: OrderStatus) -> list[Order]:
        """Oldest first, so the order waiting longest sits on top."""
        return sorted(self.controller.orders.by_status(status), key=lambda order: order.created_at)

    def selected_order(self) -> Order | None:
        orders = self.column_orders(BOARD_COLUMNS[self.column_index])
        if not orders:
            return None
        return orders[min(self.card_index, len(orders) - 1)]

    def action_move_column(self, delta: int) -> None:
        self.column_index = (self.column_index + delta) % len(BOARD_COLUMNS)
        self.card_index = 0
        self._refresh_board()

    def action_move_card(self, delta: int) -> None:
        orders = self.column_orders(BOARD_COLUMNS[self.column_index])
        if not orders:
            return
        self.card_index = (self.card_index + delta) % len(orders)
        self._refresh_board()

    def action_advance(self) -> None:
        order = self.selected_order()
        if order is None:
            return
        target = next_status(order.status)
        if target is None:
            return
        self._apply(order, target)

    def action_cancel_order(self) -> None:
        order = self.selected_order()
        if order is None:
            return
        self._apply(order, OrderStatus.CANCELLED)

    def _apply(self, order: Order, target: OrderStatus) -> None:
        try:
            found = self.controller.set_order_status(order.id, target)
        except InvalidTransitionError as exc:
            logger.warning("kitchen_transition_rejected %s", exc)
            self.status = str(exc)
            self._refresh_board()
            return
        if not found:
            self.status = f"Pedido #{order.order_number} não encontrado"
        else:
            self.status = f"Pedido #{order.order_number}: {STATUS_LABELS[target]}"
        self._refresh_board()

    def _render_card(self, order: Order, selected: bool) -> Text:
        now = self.controller.state.engine.clock()
        text = Text()
        text.append("➤ " if selected else "  ")
        text.append(f" #{order.order_number} ", style=urgency_style(order, now))
        text.append(f" {order.customer_name}  {order.item_count} it  {age_minutes(order, now)}m", style="dim")
        for item in order.items:
            text.append("\n    ")
            text.append_text(format_order_item(item))
        return text

    def _refresh_board(self) -> None:
        try:
            status_widget = self.query_one("#kitchen-status", Static)
        except NoMatches:
            return

        for col_idx, status in enumerate(BOARD_COLUMNS):
            column = self.query_one(f"#column-{status.value.lower()}", Vertical)
            column.set_class(col_idx == self.column_index, "-active")
            orders = self.column_orders(status)
            column.query_one(".column-title", Static).update(f"{STATUS_LABELS[status]} ({len(orders)})")

            if col_idx == self.column_index and orders and self.card_index >= len(orders):
                self.card_index = len(orders) - 1

            body = Text()
            if not orders:
                body.append("(vazio)", style="dim")
            for idx, order in enumerate(orders):
                if idx > 0:
                    body.append("\n\n")
                body.append_text(self._render_card(order, col_idx == self.column_index and idx == self.card_index))
            column.query_one(".column-body", Static).update(body)

        text = Text()
        text.append(ACTION_LABELS[BOARD_COLUMNS[self.column_index]])
        text.append("   ←/→ coluna, ↑/↓ pedido, C cancelar", style="dim")
        text.append(f"   Ativos: {len(self.controller.orders.active())}", style="dim")
        if self.status:
            text.append(f"\n{self.status}")
        status_widget.update(text)
