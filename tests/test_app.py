from __future__ import annotations

from decimal import Decimal

import pytest

from primor_pos.data import find_user
from primor_pos.models import FulfillmentType, OrderStatus, PaymentMethod
from primor_pos.persistence import bootstrap_schema, load_current_user, save_current_user
from primor_pos.pos_app import PrimorApp
from primor_pos.screens import cashier
from primor_pos.screens.admin import AdminScreen
from primor_pos.screens.cashier import CashierScreen
from primor_pos.screens.complements_modal import ComplementsModal
from primor_pos.screens.kitchen import KitchenScreen
from primor_pos.screens.login import LoginScreen
from primor_pos.screens.storefront import StorefrontScreen


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    monkeypatch.setattr(cashier, "PRINTER_ENABLED", False)
    path = tmp_path / "primor.db"
    bootstrap_schema(path)
    return path


def _logged_in(db_path, username: str) -> None:
    save_current_user(find_user(username), db_path)


async def test_login_routes_to_role_screen(controller, db_path):
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        assert isinstance(app.screen, LoginScreen)

        await pilot.press("c", "a", "i", "x", "a", "1", "enter")
        await pilot.pause()

        assert isinstance(app.screen, CashierScreen)
    assert load_current_user(db_path).username == "caixa1"


async def test_unknown_user_stays_on_login(controller, db_path):
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        await pilot.press("b", "o", "b", "enter")
        await pilot.pause()

        assert isinstance(app.screen, LoginScreen)
        assert app.screen.error.startswith("Usuário não encontrado")
    assert load_current_user(db_path) is None


async def test_stored_session_skips_login(controller, db_path):
    _logged_in(db_path, "admin")
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        await pilot.pause()

        assert isinstance(app.screen, AdminScreen)


async def test_logout_clears_session(controller, db_path):
    _logged_in(db_path, "admin")
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        await pilot.press("ctrl+l")
        await pilot.pause()

        assert isinstance(app.screen, LoginScreen)
        assert app.user is None
    assert load_current_user(db_path) is None


async def test_role_switch_keeps_stored_session(controller, db_path):
    _logged_in(db_path, "admin")
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        await pilot.press("f3")
        await pilot.pause()

        assert isinstance(app.screen, KitchenScreen)
    assert load_current_user(db_path).username == "admin"


async def test_cashier_checkout_reaches_kitchen(controller, db_path):
    _logged_in(db_path, "caixa1")
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        # third product in the unfiltered list is Kibe com Queijo
        await pilot.press("down", "down", "enter", "plus", "ctrl+s")
        await pilot.pause()

        orders = list(controller.orders)
        assert len(orders) == 1
        order = orders[0]
        assert order.fulfillment == FulfillmentType.DINE_IN
        assert order.customer_name == cashier.COUNTER_CUSTOMER
        assert order.payment_method == PaymentMethod.PIX
        assert order.items[0].product_id == "p3"
        assert order.items[0].quantity == 2
        assert app.screen.cart.is_empty

        await pilot.press("f3")
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()

        assert controller.orders.get(order.id).status == OrderStatus.PREPARING


async def test_storefront_customizes_before_adding(controller, db_path):
    _logged_in(db_path, "caixa1")
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        await pilot.press("f1")
        await pilot.pause()
        assert isinstance(app.screen, StorefrontScreen)

        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, ComplementsModal)

        # first option of Coxinha Suprema's sauce group
        await pilot.press("enter", "ctrl+s")
        await pilot.pause()
        assert isinstance(app.screen, StorefrontScreen)

        await pilot.press("ctrl+s")
        await pilot.pause()

    order = list(controller.orders)[0]
    assert order.id.startswith("W-")
    assert order.total == Decimal("10.50")
    assert order.items[0].selected_complements[0].items[0].name == "Catupiry Extra"


async def test_required_group_blocks_modal_confirm(controller, db_path):
    _logged_in(db_path, "caixa1")
    app = PrimorApp(controller=controller, db_path=db_path)
    async with app.run_test() as pilot:
        # Combo Duplo Snack is the fifth product
        await pilot.press("down", "down", "down", "down", "enter")
        await pilot.pause()
        assert isinstance(app.screen, ComplementsModal)

        await pilot.press("enter", "ctrl+s")
        await pilot.pause()

        assert isinstance(app.screen, ComplementsModal)
        assert "Salgados do Combo" in app.screen.error

        await pilot.press("escape")
        await pilot.pause()

        assert isinstance(app.screen, CashierScreen)
        assert app.screen.cart.is_empty
