"""Modal screen widgets for Notebook TUI."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, ScrollableContainer, Vertical
from textual.events import Click
from textual.screen import ModalScreen
from textual.widgets import Button, Static

SHORTCUTS_TEXT = """\
              Keyboard Shortcuts
──────────────────────────────────────────────

 NOTES ───────────────────────────────────────
  Ctrl+N           New note
  Ctrl+D           Delete the active note
  Delete           Delete the highlighted note (list)
  Enter            Open the highlighted note (list)
  Ctrl+S           Save (notes save automatically)
  Ctrl+E           Export preview to HTML

 NAVIGATION ──────────────────────────────────
  Tab              Cycle focus
  Escape           Close dialog
  F1               This help
  Ctrl+Q           Quit

        Press F1 or Esc to close\
"""


def _clicked_outside(screen: ModalScreen, event: Click, dialog_id: str) -> bool:
    dialog = screen.query_one(f"#{dialog_id}")
    return (event.screen_x, event.screen_y) not in dialog.region


class ShortcutOverlay(ModalScreen[None]):
    """Key reference.  F1, Escape or a click beside the panel closes it."""

    BINDINGS = [
        Binding("escape,f1", "close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with ScrollableContainer(id="shortcut-modal"):
            yield Static(SHORTCUTS_TEXT, id="shortcut-content")

    def action_close(self) -> None:
        self.dismiss(None)

    def on_click(self, event: Click) -> None:
        if _clicked_outside(self, event, "shortcut-modal"):
            self.dismiss(None)


class DeleteConfirmScreen(ModalScreen[bool]):
    """Ask before deleting a note.  Dismisses with True to delete."""

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, title: str) -> None:
        super().__init__()
        self._note_title = title

    def compose(self) -> ComposeResult:
        with Vertical(id="delete-modal"):
            yield Static("Delete note?", id="delete-heading")
            yield Static(self._message(), id="delete-message")
            with Horizontal(id="delete-buttons"):
                yield Button("Cancel", id="cancel-delete")
                yield Button("Delete", id="confirm-delete", variant="error")

    def on_mount(self) -> None:
        self.query_one("#cancel-delete", Button).focus()

    def set_note_title(self, title: str) -> None:
        """Point the prompt at a different note (last request wins)."""
        self._note_title = title
        self.query_one("#delete-message", Static).update(self._message())

    def _message(self) -> Text:
        message = Text("“")
        message.append(self._note_title, style="bold")
        message.append("” will be permanently deleted.")
        return message

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm-delete")

    def action_cancel(self) -> None:
        self.dismiss(False)

    def on_click(self, event: Click) -> None:
        if _clicked_outside(self, event, "delete-modal"):
            self.dismiss(False)
