"""Shared product-list + cart layout for the storefront and the cashier terminal."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Header, Static

from primor_pos.cart import Cart, CartLine, ComplementSelection
from primor_pos.errors import ValidationError
from primor_pos.models import Order, Product
from primor_pos.rendering import badge_style, format_money, window_bounds
from primor_pos.screens.complements_modal import ComplementsModal
from primor_pos.state import PosController

logger = logging.getLogger(__name__)


class CartScreen(Screen[None]):
    """Product list on the left, running cart on the right."""

    CSS = """
    #main-layout {
        height: 1fr;
    }

    #products-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #filter-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #products-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #checkout-bar {
        height: auto;
        border: heavy $secondary;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("up", "move_product(-1)", "Previous product"),
        ("down", "move_product(1)", "Next product"),
        ("enter", "add_selected", "Add item"),
        ("j", "move_line(1)", "Next cart line"),
        ("k", "move_line(-1)", "Previous cart line"),
        ("x", "clear_cart", "Clear cart"),
        Binding("ctrl+s", "checkout", "Checkout", priority=True),
    ]

    pane_title = "Produtos"
    help_text = "↑/↓ product, Enter add, J/K line, +/- qty, X clear, Ctrl+S checkout"

    def __init__(self, controller: PosController) -> None:
        super().__init__()
        self.controller = controller
        self.cart = Cart()
        self.product_index = 0
        self.line_index: int | None = None
        self.status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="products-pane"):
                yield Static(self.pane_title, classes="pane-title")
                yield Static(id="filter-bar")
                yield Static(id="products-list")
            with Vertical(id="cart-pane"):
                yield Static("Itens do Pedido", classes="pane-title")
                yield Static("(nenhum item)", id="cart-list")
                yield Static(id="checkout-bar")

    def on_mount(self) -> None:
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if event.character == "-":
            self._remove_one_from_selected_line()
            event.stop()
            return
        if event.character == "+":
            self._add_one_to_selected_line()
            event.stop()

    def visible_products(self) -> list[Product]:
        return self.controller.catalog.products

    def submit_cart(self) -> Order:
        raise NotImplementedError

    def filter_bar_text(self) -> Text:
        return Text(self.help_text)

    def checkout_lines(self) -> Text:
        text = Text()
        text.append("Total a Pagar  ")
        text.append(format_money(self.controller.compute_cart_total(self.cart)), style="bold")
        if self.status:
            text.append(f"\n{self.status}")
        return text

    def action_move_product(self, delta: int) -> None:
        products = self.visible_products()
        if not products:
            self.product_index = 0
        else:
            self.product_index = (self.product_index + delta) % len(products)
        self._refresh_products()

    def action_move_line(self, delta: int) -> None:
        lines = self.cart.lines
        if not lines:
            return
        if self.line_index is None:
            self.line_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.line_index = (self.line_index + delta) % len(lines)
        self._refresh_cart()

    def action_add_selected(self) -> None:
        products = self.visible_products()
        if not products:
            return
        product = products[min(self.product_index, len(products) - 1)]
        if product.needs_customization:
            selection = self.controller.open_selection(product)
            self.app.push_screen(ComplementsModal(selection), self._on_customized)
            return
        self._add(product, None)

    def action_clear_cart(self) -> None:
        self.cart.clear()
        self.line_index = None
        self._refresh_cart()

    def action_checkout(self) -> None:
        if self.cart.is_empty:
            self.status = "Nada para enviar"
            self._refresh_cart()
            return
        order = self.submit_cart()
        self.line_index = None
        self.on_submitted(order)
        self._refresh_all()

    def on_submitted(self, order: Order) -> None:
        self.status = f"Pedido #{order.order_number} enviado para a cozinha"

    def _on_customized(self, selection: ComplementSelection | None) -> None:
        if selection is None:
            return
        self._add(selection.product, selection)

    def _add(self, product: Product, selection: ComplementSelection | None) -> None:
        try:
            line = self.cart.add_item(product, selection)
        except ValidationError as exc:
            self.status = str(exc)
            self._refresh_cart()
            return
        self.status = ""
        self.line_index = self.cart.lines.index(line)
        self._refresh_cart()

    def _selected_line(self) -> CartLine | None:
        lines = self.cart.lines
        if self.line_index is None or not (0 <= self.line_index < len(lines)):
            return None
        return lines[self.line_index]

    def _add_one_to_selected_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return
        self.cart.increment(line.key)
        self._refresh_cart()

    def _remove_one_from_selected_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return
        self.cart.remove_one(line.key)
        if self.cart.is_empty:
            self.line_index = None
        elif self.line_index is not None:
            self.line_index = min(self.line_index, len(self.cart) - 1)
        self._refresh_cart()

    def _refresh_all(self) -> None:
        self._refresh_products()
        self._refresh_cart()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _refresh_products(self) -> None:
        try:
            products_widget = self.query_one("#products-list", Static)
            filter_widget = self.query_one("#filter-bar", Static)
        except NoMatches:
            return
        filter_widget.update(self.filter_bar_text())

        products = self.visible_products()
        if not products:
            products_widget.update("Nenhum produto")
            return
        if self.product_index >= len(products):
            self.product_index = 0

        start, end = window_bounds(len(products), self._visible_rows(products_widget), self.product_index)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            product = products[idx]
            pointer = "➤ " if idx == self.product_index else "  "
            lines.append(pointer)
            lines.append(f" {product.category.value[:3]} ", style=badge_style(product.category))
            lines.append(f" {product.name}  ")
            lines.append(format_money(product.price), style="bold #b23a48")
            if product.needs_customization:
                lines.append("  ⚙", style="dim")
        if end < len(products):
            lines.append("\n⋮", style="dim")
        products_widget.update(lines)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
            checkout_widget = self.query_one("#checkout-bar", Static)
        except NoMatches:
            return
        checkout_widget.update(self.checkout_lines())

        lines = self.cart.lines
        if not lines:
            self.line_index = None
            cart_widget.update("(nenhum item)")
            return

        start, end = window_bounds(len(lines), self._visible_rows(cart_widget), self.line_index)
        text = Text()
        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            line = lines[idx]
            pointer = "➤ " if idx == self.line_index else "  "
            text.append(pointer)
            text.append(f"{line.quantity}x", style="bold #ffffff on #b23a48")
            text.append(f" {line.product.name}  ")
            text.append(format_money(line.line_total), style="bold")
            for group in line.selected_complements:
                for complement in group.items:
                    text.append(f"\n      + {complement.name}", style="dim")
        cart_widget.update(text)
