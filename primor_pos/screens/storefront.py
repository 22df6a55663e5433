"""Customer storefront: browse, customize, pay by PIX and pick up."""

from __future__ import annotations

from primor_pos.models import FulfillmentType, Order, PaymentMethod
from primor_pos.screens.cart_screen import CartScreen

DIGITAL_CUSTOMER = "Cliente Digital"


class StorefrontScreen(CartScreen):
    pane_title = "Cardápio"
    help_text = "↑/↓ produto, Enter add/personalizar, J/K linha, +/- qtd, X limpar, Ctrl+S finalizar"

    def submit_cart(self) -> Order:
        return self.controller.checkout(
            self.cart,
            customer_name=DIGITAL_CUSTOMER,
            payment_method=PaymentMethod.PIX,
            fulfillment=FulfillmentType.PICKUP,
        )

    def on_submitted(self, order: Order) -> None:
        self.status = f"Pedido #{order.order_number} enviado! Acompanhe no balcão."
