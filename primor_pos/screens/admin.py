"""Admin backoffice: dashboard, products, stock and order history tabs."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Header, Static

from primor_pos.rendering import (
    PAYMENT_LABELS,
    badge_style,
    format_ingredient_row,
    format_money,
    status_badge,
    window_bounds,
)
from primor_pos.state import PosController

TABS = ("PAINEL", "PRODUTOS", "ESTOQUE", "FINANCEIRO")

STOCK_STEP = Decimal("1")


class AdminScreen(Screen[None]):
    """Tabbed backoffice. Number keys switch tabs."""

    CSS = """
    #tab-bar {
        height: 1;
        margin-bottom: 1;
    }

    #admin-body {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    #admin-status {
        height: auto;
        border: heavy $secondary;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("1", "show_tab(0)", "Painel"),
        ("2", "show_tab(1)", "Produtos"),
        ("3", "show_tab(2)", "Estoque"),
        ("4", "show_tab(3)", "Financeiro"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("j", "move_cursor(1)", "Next"),
        ("d", "delete_product", "Delete product"),
    ]

    def __init__(self, controller: PosController) -> None:
        super().__init__()
        self.controller = controller
        self.tab_index = 0
        self.cursor_index = 0
        self.status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            yield Static(id="tab-bar")
            yield Static(id="admin-body")
            yield Static(id="admin-status")

    def on_mount(self) -> None:
        self._refresh_all()

    def on_screen_resume(self) -> None:
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if self.tab_index != 2:
            return
        if event.character == "+":
            self._adjust_selected(STOCK_STEP)
            event.stop()
        elif event.character == "-":
            self._adjust_selected(-STOCK_STEP)
            event.stop()

    def action_show_tab(self, index: int) -> None:
        self.tab_index = index
        self.cursor_index = 0
        self.status = ""
        self._refresh_all()

    def action_move_cursor(self, delta: int) -> None:
        total = self._row_count()
        if total == 0:
            return
        self.cursor_index = (self.cursor_index + delta) % total
        self._refresh_all()

    def action_delete_product(self) -> None:
        if self.tab_index != 1:
            return
        products = self.controller.catalog.products
        if not products:
            return
        product = products[min(self.cursor_index, len(products) - 1)]
        self.controller.delete_product(product.id)
        self.status = f"Produto removido: {product.name}"
        self.cursor_index = max(0, min(self.cursor_index, len(products) - 2))
        self._refresh_all()

    def _adjust_selected(self, delta: Decimal) -> None:
        ingredients = list(self.controller.inventory)
        if not ingredients:
            return
        ingredient = ingredients[min(self.cursor_index, len(ingredients) - 1)]
        self.controller.adjust_stock(ingredient.id, delta)
        self.status = f"{ingredient.name}: {ingredient.current_stock:.2f} {ingredient.unit.value}"
        self._refresh_all()

    def _row_count(self) -> int:
        if self.tab_index == 1:
            return len(self.controller.catalog)
        if self.tab_index == 2:
            return len(self.controller.inventory)
        if self.tab_index == 3:
            return len(self.controller.orders)
        return 0

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 12
        return max(1, height)

    def _refresh_all(self) -> None:
        try:
            tab_bar = self.query_one("#tab-bar", Static)
            body = self.query_one("#admin-body", Static)
            status_widget = self.query_one("#admin-status", Static)
        except NoMatches:
            return

        tabs = Text()
        for idx, label in enumerate(TABS):
            if idx > 0:
                tabs.append(" ")
            style = "bold #272727 on #ffc72c" if idx == self.tab_index else "dim"
            tabs.append(f" {idx + 1} {label} ", style=style)
        tab_bar.update(tabs)

        renderers = (self._render_dashboard, self._render_products, self._render_stock, self._render_orders)
        body.update(renderers[self.tab_index](self._visible_rows(body)))

        help_text = {
            1: "↑/↓ produto, D remover",
            2: "↑/↓ insumo, +/- ajustar estoque",
        }.get(self.tab_index, "1-4 trocar aba")
        status = Text(help_text, style="dim")
        if self.status:
            status.append(f"\n{self.status}", style="")
        status_widget.update(status)

    def _render_dashboard(self, rows: int) -> Text:
        snapshot = self.controller.dashboard()
        text = Text()
        kpis = [
            ("Receita Realizada", format_money(snapshot.revenue), "#5fbf72"),
            ("Volume de Pedidos", str(snapshot.order_count), "#2f6db5"),
            ("Ticket Médio", format_money(snapshot.average_ticket), "#9b5de5"),
            ("Ruptura de Estoque", str(snapshot.low_stock_count), "#d62828"),
        ]
        for label, value, color in kpis:
            text.append(f"{label:<20}", style="dim")
            text.append(f"{value}\n", style=f"bold {color}")
        text.append("\nMonitor de Inventário\n", style="bold")
        for ingredient in self.controller.inventory:
            text.append_text(format_ingredient_row(ingredient))
            text.append("\n")
        return text

    def _render_products(self, rows: int) -> Text:
        products = self.controller.catalog.products
        if not products:
            return Text("Nenhum produto", style="dim")
        start, end = window_bounds(len(products), rows, self.cursor_index)
        text = Text()
        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            product = products[idx]
            text.append("➤ " if idx == self.cursor_index else "  ")
            text.append(f" {product.category.value} ", style=badge_style(product.category))
            text.append(f" {product.name}  {format_money(product.price)}")
            if product.combo_items:
                text.append(f"  ({', '.join(product.combo_items[:2])})", style="dim")
            groups = self.controller.catalog.groups_for(product)
            if groups:
                text.append(f"  [{', '.join(group.name for group in groups)}]", style="#ffc72c")
        return text

    def _render_stock(self, rows: int) -> Text:
        ingredients = list(self.controller.inventory)
        start, end = window_bounds(len(ingredients), rows, self.cursor_index)
        text = Text()
        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            text.append("➤ " if idx == self.cursor_index else "  ")
            text.append_text(format_ingredient_row(ingredients[idx]))
        return text

    def _render_orders(self, rows: int) -> Text:
        orders = list(self.controller.orders)
        if not orders:
            return Text("Nenhuma venda registrada", style="dim")
        start, end = window_bounds(len(orders), rows, self.cursor_index)
        text = Text()
        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            order = orders[idx]
            text.append("➤ " if idx == self.cursor_index else "  ")
            text.append(f"#{order.order_number} ", style="bold")
            text.append(f"{order.customer_name:<18} {PAYMENT_LABELS[order.payment_method]:<15} ")
            text.append(f"{format_money(order.total):>12} ")
            text.append_text(status_badge(order.status))
        return text
