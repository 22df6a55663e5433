"""Cashier terminal (PDV): counter sales with payment choice and kitchen ticket."""

from __future__ import annotations

import logging

from rich.text import Text

from primor_pos.config import PRINTER_ENABLED
from primor_pos.models import Category, FulfillmentType, Order, PaymentMethod, Product
from primor_pos.printer import check_printer_dependencies, print_order_ticket
from primor_pos.rendering import PAYMENT_LABELS, badge_style
from primor_pos.screens.cart_screen import CartScreen
from primor_pos.screens.prompt_modal import TextPromptModal
from primor_pos.state import PosController

logger = logging.getLogger(__name__)

COUNTER_CUSTOMER = "Balcão"

PAYMENT_CYCLE = [PaymentMethod.PIX, PaymentMethod.CREDIT_CARD, PaymentMethod.DEBIT_CARD, PaymentMethod.CASH]


class CashierScreen(CartScreen):
    """Counter terminal: category filter, payment method, customer name, ticket print."""

    BINDINGS = CartScreen.BINDINGS + [
        ("left", "cycle_category(-1)", "Previous category"),
        ("right", "cycle_category(1)", "Next category"),
        ("p", "cycle_payment", "Payment method"),
        ("n", "edit_customer", "Customer name"),
    ]

    pane_title = "PDV"
    help_text = "←/→ categoria, ↑/↓ produto, Enter add, J/K linha, +/- qtd, P pagamento, N cliente, Ctrl+S concluir"

    def __init__(self, controller: PosController) -> None:
        super().__init__(controller)
        self.category: Category | None = None
        self.payment = PaymentMethod.PIX
        self.customer_name = ""
        self.printer_ready = False

    def on_mount(self) -> None:
        if PRINTER_ENABLED:
            self.printer_ready, msg = check_printer_dependencies()
            self.status = msg
            logger.info("cashier_mount printer_status=%r", msg)

    def visible_products(self) -> list[Product]:
        return self.controller.catalog.by_category(self.category)

    def filter_bar_text(self) -> Text:
        text = Text()
        choices: list[Category | None] = [None, *self.controller.catalog.categories()]
        for idx, category in enumerate(choices):
            if idx > 0:
                text.append(" ")
            label = "TODOS" if category is None else category.value
            if category == self.category:
                style = badge_style(category) if category is not None else "bold #272727 on #ffc72c"
                text.append(f" {label} ", style=style)
            else:
                text.append(f" {label} ", style="dim")
        text.append(f"\n{self.help_text}", style="dim")
        return text

    def checkout_lines(self) -> Text:
        text = Text()
        text.append("Cliente: ")
        text.append(self.customer_name or COUNTER_CUSTOMER, style="bold")
        text.append("   Pagamento: ")
        text.append(PAYMENT_LABELS[self.payment], style="bold #ffc72c")
        text.append("\n")
        text.append_text(super().checkout_lines())
        return text

    def action_cycle_category(self, delta: int) -> None:
        choices: list[Category | None] = [None, *self.controller.catalog.categories()]
        idx = choices.index(self.category) if self.category in choices else 0
        self.category = choices[(idx + delta) % len(choices)]
        self.product_index = 0
        self._refresh_products()

    def action_cycle_payment(self) -> None:
        idx = PAYMENT_CYCLE.index(self.payment)
        self.payment = PAYMENT_CYCLE[(idx + 1) % len(PAYMENT_CYCLE)]
        self._refresh_cart()

    def action_edit_customer(self) -> None:
        self.app.push_screen(TextPromptModal("Nome do Cliente / Mesa", self.customer_name), self._on_customer_name)

    def _on_customer_name(self, value: str | None) -> None:
        if value is None:
            return
        self.customer_name = value
        self._refresh_cart()

    def submit_cart(self) -> Order:
        order = self.controller.checkout(
            self.cart,
            customer_name=self.customer_name or COUNTER_CUSTOMER,
            payment_method=self.payment,
            fulfillment=FulfillmentType.DINE_IN,
        )
        self.customer_name = ""
        return order

    def on_submitted(self, order: Order) -> None:
        if not self.printer_ready:
            self.status = f"Pedido #{order.order_number} enviado para a cozinha"
            return
        try:
            print_order_ticket(order)
        except Exception as exc:
            logger.error("ticket_print_failed number=%s error=%r", order.order_number, exc)
            self.status = f"Pedido #{order.order_number} enviado, mas a impressão falhou: {exc}"
            return
        self.status = f"Pedido #{order.order_number} enviado + impresso"
