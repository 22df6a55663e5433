"""Main Textual app class and role dispatch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen, Screen

from primor_pos.data import guest_user
from primor_pos.models import User, UserRole
from primor_pos.persistence import bootstrap_schema, clear_current_user, load_current_user, save_current_user
from primor_pos.screens.admin import AdminScreen
from primor_pos.screens.cashier import CashierScreen
from primor_pos.screens.kitchen import KitchenScreen
from primor_pos.screens.login import LoginScreen
from primor_pos.screens.storefront import StorefrontScreen
from primor_pos.state import AppState, PosController

logger = logging.getLogger(__name__)

ROLE_SCREENS: dict[UserRole, Callable[[PosController], Screen]] = {
    UserRole.CUSTOMER: StorefrontScreen,
    UserRole.CASHIER: CashierScreen,
    UserRole.KITCHEN: KitchenScreen,
    UserRole.ADMIN: AdminScreen,
}


class PrimorApp(App):
    """Point-of-sale terminal: one screen per role over shared order state."""

    TITLE = "PRIMOR OS"

    BINDINGS = [
        Binding("ctrl+l", "logout", "Logout", priority=True),
        ("f1", "switch_role('CUSTOMER')", "Loja"),
        ("f2", "switch_role('CASHIER')", "Caixa"),
        ("f3", "switch_role('KITCHEN')", "Cozinha"),
        ("f4", "switch_role('ADMIN')", "Admin"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, controller: PosController | None = None, db_path: str | Path | None = None) -> None:
        super().__init__()
        self.controller = controller if controller is not None else PosController(AppState.seeded())
        self.db_path = db_path
        self.user: User | None = None
        self._screen_pushed = False

    def on_mount(self) -> None:
        bootstrap_schema(self.db_path)
        user = load_current_user(self.db_path)
        logger.info("app_mount restored_user=%s", user.username if user else None)
        if user is None:
            self._show(LoginScreen(on_login=self.login))
        else:
            self._enter(user)

    def login(self, user: User) -> None:
        save_current_user(user, self.db_path)
        self._enter(user)

    def action_logout(self) -> None:
        if self.user is None or isinstance(self.screen, ModalScreen):
            return
        clear_current_user(self.db_path)
        logger.info("logout username=%s", self.user.username)
        self.user = None
        self.sub_title = ""
        self._show(LoginScreen(on_login=self.login))

    def action_switch_role(self, role_name: str) -> None:
        """Demo switcher: jump to another role without touching the stored session."""
        if self.user is None or isinstance(self.screen, ModalScreen):
            return
        self._enter(guest_user(UserRole(role_name)))

    def _enter(self, user: User) -> None:
        self.user = user
        self.sub_title = f"{user.role.value} · {user.name}"
        logger.info("enter_role username=%s role=%s", user.username, user.role.value)
        self._show(ROLE_SCREENS[user.role](self.controller))

    def _show(self, screen: Screen) -> None:
        if self._screen_pushed:
            self.switch_screen(screen)
        else:
            self._screen_pushed = True
            self.push_screen(screen)
