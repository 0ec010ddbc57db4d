"""Main Notebook TUI application."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.markdown import Markdown as RichMarkdown
from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Input, OptionList, Static, TextArea

from .constants import EMPTY_PREVIEW_TEXT, STORAGE_FILE_NAME
from .core import (
    DeletionWorkflow,
    Document,
    DocumentStore,
    SessionController,
)
from .features.export import write_export
from .log import logger
from .persistence import (
    DocumentPersistence,
    JsonFileKeyValueStore,
    KeyValueStore,
    PersistenceError,
)
from .preferences import Preferences, load_preferences
from .rendering import RenderingBridge
from .theme import TEXTUAL_THEMES, textual_theme
from .widgets import DeleteConfirmScreen, DocumentList, ShortcutOverlay

_NOTEBOOK_CSS = """\
#main-container {
    height: 1fr;
}
#sidebar {
    width: 32;
    border-right: solid $panel;
    background: $surface;
}
#sidebar-title {
    text-style: bold;
    color: $primary;
    padding: 0 1;
}
#new-doc-btn {
    width: 100%;
    margin: 0 1;
}
#search-input {
    margin: 0 0 1 0;
}
#doc-list {
    height: 1fr;
    border: none;
}
#editor-pane {
    width: 1fr;
}
#doc-title {
    text-style: bold;
}
#editor-split {
    height: 1fr;
}
#editor {
    width: 1fr;
    height: 1fr;
}
#preview-pane {
    width: 1fr;
    height: 1fr;
    border-left: solid $panel;
    padding: 0 1;
}
DeleteConfirmScreen, ShortcutOverlay {
    align: center middle;
}
#delete-modal {
    width: 56;
    height: auto;
    padding: 1 2;
    border: thick $error;
    background: $surface;
}
#delete-heading {
    text-style: bold;
}
#delete-message {
    margin: 1 0;
}
#delete-buttons {
    height: auto;
    align-horizontal: right;
}
#delete-buttons Button {
    margin-left: 1;
}
#shortcut-modal {
    width: 52;
    height: 80%;
    border: round $primary;
    background: $surface;
}
"""

_MODAL_BLOCKED_ACTIONS = frozenset(
    {"new_document", "delete_document", "export_preview", "show_shortcuts"}
)


class NotebookApp(App):
    """The Notebook - a markdown notebook with live preview."""

    CSS = _NOTEBOOK_CSS
    TITLE = "The Notebook"

    BINDINGS = [
        Binding("ctrl+n", "new_document", "New", show=True, priority=True),
        Binding("ctrl+s", "save", "Save", show=False, priority=True),
        Binding("ctrl+d", "delete_document", "Delete", show=True, priority=True),
        Binding("ctrl+e", "export_preview", "Export", show=True, priority=True),
        Binding("f1", "show_shortcuts", "Keys", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        prefs: Preferences | None = None,
        *,
        kv: KeyValueStore | None = None,
        data_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self._prefs = prefs or load_preferences()
        self.data_dir = data_dir or self._prefs.data_dir
        if kv is None:
            kv = JsonFileKeyValueStore(self.data_dir / STORAGE_FILE_NAME)

        self.store = DocumentStore(DocumentPersistence(kv), on_error=self._on_persist_error)
        self.bridge = RenderingBridge()
        editor_prefs = self._prefs.editor
        self.session = SessionController(
            self.store,
            self.bridge,
            self,
            set_timer=self.set_timer,
            title_debounce_ms=editor_prefs.title_debounce_ms,
            content_debounce_ms=editor_prefs.content_debounce_ms,
            search_debounce_ms=editor_prefs.search_debounce_ms,
        )
        # The dialog dismisses itself, so only the prompt needs wiring.
        self.deletion = DeletionWorkflow(self.session, on_prompt=self._prompt_delete)

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        with Horizontal(id="main-container"):
            with Vertical(id="sidebar"):
                yield Static("📓 The Notebook", id="sidebar-title")
                yield Button("+ New", id="new-doc-btn", variant="primary")
                yield Input(placeholder="Search notes…", id="search-input")
                yield DocumentList(id="doc-list")
            with Vertical(id="editor-pane"):
                yield Input(placeholder="Untitled", id="doc-title")
                with Horizontal(id="editor-split"):
                    yield TextArea(
                        "",
                        id="editor",
                        soft_wrap=True,
                        show_line_numbers=False,
                        tab_behavior="indent",
                    )
                    with VerticalScroll(id="preview-pane"):
                        yield Static(id="preview")
        yield Footer()

    def on_mount(self) -> None:
        for theme in TEXTUAL_THEMES.values():
            self.register_theme(theme)
        self.theme = textual_theme(self._prefs.theme_name).name

        self.session.start()
        self.query_one("#editor", TextArea).focus()

    async def action_quit(self) -> None:
        self.session.close()
        self.exit()

    # ── SessionView ─────────────────────────────────────────────

    def show_document(self, document: Document) -> None:
        with self.prevent(Input.Changed, TextArea.Changed):
            self.query_one("#doc-title", Input).value = document.title
            self.query_one("#editor", TextArea).load_text(document.content)

    def clear_document(self) -> None:
        with self.prevent(Input.Changed, TextArea.Changed):
            self.query_one("#doc-title", Input).value = ""
            self.query_one("#editor", TextArea).load_text("")

    def show_preview(self, html: str, text: str) -> None:
        # The terminal can't show HTML; the rendered fragment is kept for export.
        preview = self.query_one("#preview", Static)
        if text.strip():
            preview.update(RichMarkdown(text, code_theme=self._prefs.preview.code_style))
        else:
            preview.update(Text(EMPTY_PREVIEW_TEXT, style="dim italic"))

    def show_documents(
        self, documents: Sequence[Document], active_id: str | None, query: str
    ) -> None:
        self.query_one("#doc-list", DocumentList).set_documents(documents, active_id, query)

    # ── Input events ────────────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "doc-title":
            self.session.on_title_changed(event.value)
        elif event.input.id == "search-input":
            self.session.on_search_changed(event.value)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "editor":
            self.session.on_content_changed(event.text_area.text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "new-doc-btn":
            self.action_new_document()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id == "doc-list" and event.option.id is not None:
            self.session.select_document(event.option.id)

    def on_document_list_delete_requested(self, event: DocumentList.DeleteRequested) -> None:
        document = self.store.get(event.doc_id)
        if document is not None:
            self.deletion.request_delete(document)

    # ── Actions ─────────────────────────────────────────────────

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action in _MODAL_BLOCKED_ACTIONS and isinstance(self.screen, ModalScreen):
            return False
        return True

    def action_new_document(self) -> None:
        # The session drops its filter; the search box follows.
        with self.prevent(Input.Changed):
            self.query_one("#search-input", Input).value = ""
        self.session.new_document()
        self.query_one("#doc-title", Input).focus()

    def action_save(self) -> None:
        # Writes already happen on every edit; this only swallows the key.
        self.notify("Notes are saved automatically.", timeout=2)

    def action_delete_document(self) -> None:
        document = self.session.active_document
        if document is None:
            self.notify("No note selected.", severity="warning", timeout=2)
            return
        self.deletion.request_delete(document)

    def action_export_preview(self) -> None:
        document = self.session.active_document
        if document is None:
            self.notify("No note selected.", severity="warning", timeout=2)
            return
        self.session.flush()
        try:
            path = write_export(
                document,
                self.bridge,
                self.data_dir / "exports",
                style=self._prefs.preview.code_style,
            )
        except OSError as exc:
            logger.debug("export failed", exc_info=True)
            self.notify(escape(f"Export failed: {exc}"), severity="error")
            return
        self.notify(escape(f"Exported to {path}"), timeout=4)

    def action_show_shortcuts(self) -> None:
        self.push_screen(ShortcutOverlay())

    # ── Deletion prompt ─────────────────────────────────────────

    def _prompt_delete(self, title: str) -> None:
        if isinstance(self.screen, DeleteConfirmScreen):
            self.screen.set_note_title(title)
            return
        self.push_screen(DeleteConfirmScreen(title), callback=self._on_delete_answer)

    def _on_delete_answer(self, confirmed: bool | None) -> None:
        if confirmed:
            self.deletion.confirm()
        else:
            self.deletion.cancel()

    # ── Errors ──────────────────────────────────────────────────

    def _on_persist_error(self, exc: PersistenceError) -> None:
        self.notify(escape(f"Could not save notes: {exc}"), severity="warning")


def run_app(prefs: Preferences | None = None, data_dir: Path | None = None) -> None:
    """Run the Notebook TUI."""
    app = NotebookApp(prefs, data_dir=data_dir)
    app.run()
