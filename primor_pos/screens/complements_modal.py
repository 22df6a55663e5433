"""Complement selection modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from primor_pos.cart import ComplementSelection
from primor_pos.errors import IncompleteSelectionError
from primor_pos.models import ComplementGroup, ComplementItem
from primor_pos.rendering import format_money


class ComplementsModal(ModalScreen[ComplementSelection | None]):
    """Centered modal to toggle a product's complement items before adding it."""

    BINDINGS = [
        ("escape", "close", "Cancel"),
        ("ctrl+c", "close", "Cancel"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        Binding("ctrl+s", "confirm", "Add to cart", priority=True),
    ]

    CSS = """
    ComplementsModal {
        align: center middle;
        background: $background 60%;
    }

    #complements-dialog {
        width: 68;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #complements-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #complements-body {
        margin-bottom: 1;
        color: white;
    }

    #complements-error {
        color: #ffb3b3;
    }

    #complements-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, selection: ComplementSelection) -> None:
        super().__init__()
        self.selection = selection
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="complements-dialog"):
            yield Static(Text(self.selection.product.name.upper()), id="complements-title")
            yield Static(id="complements-body")
            yield Static(id="complements-error")
            yield Static("J/K/↑/↓ move, Enter toggle, Ctrl+S add to cart, Esc cancel", id="complements-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        rows = self._rows()
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        rows = self._rows()
        if not rows:
            return
        group, item = rows[self.cursor_index]
        if self.selection.toggle(group, item):
            self.error = ""
        else:
            self.error = f'"{group.name}" allows at most {group.max_choices}'
        self._refresh_content()

    def action_confirm(self) -> None:
        try:
            self.selection.validate()
        except IncompleteSelectionError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss(self.selection)

    def _rows(self) -> list[tuple[ComplementGroup, ComplementItem]]:
        return [(group, item) for group in self.selection.groups for item in group.items]

    def _group_caption(self, group: ComplementGroup) -> str:
        chosen = len(self.selection.selected(group.id))
        if group.is_required:
            return f"{group.name.upper()}  Obrigatório ({chosen}/{group.max_choices})"
        return f"{group.name.upper()}  Opcional (Máx {group.max_choices})"

    def _refresh_content(self) -> None:
        body = self.query_one("#complements-body", Static)
        error_widget = self.query_one("#complements-error", Static)

        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = max(0, len(rows) - 1)

        content = Text(style="white")
        current_group_id: str | None = None
        for idx, (group, item) in enumerate(rows):
            if group.id != current_group_id:
                if current_group_id is not None:
                    content.append("\n")
                content.append(self._group_caption(group), style="bold #ffc72c")
                current_group_id = group.id
            content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            is_checked = self.selection.is_selected(group, item)
            checked = "[x]" if is_checked else "[ ]"
            item_style = "bold white" if is_checked else "white"
            content.append(f"{pointer}{checked} {item.name}", style=item_style)
            if item.price > 0:
                content.append(f"  + {format_money(item.price)}", style="dim")

        content.append("\n\n")
        content.append(f"Total: {format_money(self.selection.unit_price())}", style="bold")
        body.update(content)
        error_widget.update(Text(self.error))
