"""Login screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Static

from primor_pos.data import SYSTEM_USERS, find_user
from primor_pos.models import User


class LoginScreen(Screen[None]):
    """Type a system username and press Enter. Passwords are not checked."""

    CSS = """
    LoginScreen {
        align: center middle;
    }

    #login-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #login-title {
        text-style: bold italic;
        color: #ffc72c;
        margin-bottom: 1;
    }

    #login-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #login-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #login-help {
        color: #dddddd;
    }
    """

    def __init__(self, on_login: Callable[[User], None]) -> None:
        super().__init__()
        self.on_login = on_login
        self.value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="login-dialog"):
            yield Static("PRIMOR OS", id="login-title")
            yield Static(id="login-value")
            yield Static(id="login-error")
            users = ", ".join(user.username for user in SYSTEM_USERS)
            yield Static(Text(f"Usuários: {users}. Enter entrar. Esc limpar."), id="login-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.value = ""
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character and (event.character.isalnum() or event.character in "._-"):
            if len(self.value) < 32:
                self.value += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def _confirm(self) -> None:
        if not self.value:
            self.error = "Digite seu usuário."
            self._refresh_content()
            return

        user = find_user(self.value)
        if user is None:
            self.error = "Usuário não encontrado. Use: admin, caixa1 ou cozinha1"
            self._refresh_content()
            return

        self.on_login(user)

    def _refresh_content(self) -> None:
        self.query_one("#login-value", Static).update(Text(f"Usuário: {self.value}|"))
        self.query_one("#login-error", Static).update(Text(self.error))
