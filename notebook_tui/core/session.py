"""Editing-session state: the active note, debounced edits and the list filter.

:class:`SessionController` sits between the widget layer and the
:class:`~notebook_tui.core.store.DocumentStore`.  The widget layer feeds it
input events (``on_title_changed`` etc.) and implements :class:`SessionView`
to receive output requests.  The controller is unaware of Textual; timers
come from an injected factory (see :mod:`notebook_tui.core.debounce`).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..constants import (
    CONTENT_DEBOUNCE_MS,
    SEARCH_DEBOUNCE_MS,
    TITLE_DEBOUNCE_MS,
    WELCOME_CONTENT,
    WELCOME_TITLE,
)
from ..log import logger
from ..rendering import RenderingBridge
from .debounce import Debouncer, TimerFactory
from .document import Document
from .store import DocumentStore


class SessionView(Protocol):
    """Output requests the session makes of the widget layer."""

    def show_document(self, document: Document) -> None: ...

    def clear_document(self) -> None: ...

    def show_preview(self, html: str, text: str) -> None: ...

    def show_documents(
        self, documents: Sequence[Document], active_id: str | None, query: str
    ) -> None: ...


# Debounced edits remember which note they were typed into.
_Edit = tuple[str, str]


class SessionController:
    """Own the active-note selection and route edits to the store.

    Invariant: ``active_id`` is ``None`` or the id of a note currently in
    the store.  Debounced commits only ever land on the note that was
    active when the keystroke arrived, and only while it is still active.
    """

    def __init__(
        self,
        store: DocumentStore,
        bridge: RenderingBridge,
        view: SessionView,
        *,
        set_timer: TimerFactory,
        title_debounce_ms: int = TITLE_DEBOUNCE_MS,
        content_debounce_ms: int = CONTENT_DEBOUNCE_MS,
        search_debounce_ms: int = SEARCH_DEBOUNCE_MS,
    ) -> None:
        self.store = store
        self.bridge = bridge
        self.view = view
        self.active_id: str | None = None
        self.query = ""
        self.preview_html = bridge.render("")
        self._title_edits: Debouncer[_Edit] = Debouncer(
            title_debounce_ms, self._commit_title, set_timer, name="title"
        )
        self._content_edits: Debouncer[_Edit] = Debouncer(
            content_debounce_ms, self._commit_content, set_timer, name="content"
        )
        self._search: Debouncer[str] = Debouncer(
            search_debounce_ms, self._commit_search, set_timer, name="search"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Load notes, seed the welcome note on first run, pick the active note."""
        self.store.load()
        saved_id = self.store.persistence.load_active_id()

        if not len(self.store):
            welcome = self.store.create(WELCOME_TITLE, WELCOME_CONTENT)
            self.select_document(welcome.id)
            return

        self.refresh_list()
        if saved_id and saved_id in self.store:
            self.select_document(saved_id)
            return
        first = self.store.first()
        if first is not None:
            self.select_document(first.id)

    def flush(self) -> None:
        """Commit any pending title/content edit right away."""
        self._title_edits.flush()
        self._content_edits.flush()

    def close(self) -> None:
        self.flush()
        self._search.cancel()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def active_document(self) -> Document | None:
        if self.active_id is None:
            return None
        return self.store.get(self.active_id)

    def select_document(self, doc_id: str) -> bool:
        """Make *doc_id* the active note.  Unknown ids are ignored (False)."""
        doc = self.store.get(doc_id)
        if doc is None:
            logger.debug("select ignored: no note with id %s", doc_id)
            return False
        self.flush()
        self.active_id = doc_id
        self.store.save_active_id(doc_id)
        self.view.show_document(doc)
        self.refresh_preview(doc.content)
        self.refresh_list()
        return True

    def new_document(self) -> Document:
        """Create and select a blank note.

        Clears the search filter so the new note shows up in the list.
        """
        self.flush()
        self._search.cancel()
        self.query = ""
        doc = self.store.create()
        self.select_document(doc.id)
        return doc

    def delete_document(self, doc_id: str) -> bool:
        """Delete a note and repair the active selection if needed."""
        was_active = doc_id == self.active_id
        if was_active:
            # Edits to a note that is going away have nowhere to land.
            self._title_edits.cancel()
            self._content_edits.cancel()
        removed = self.store.delete(doc_id)
        if was_active:
            self.reassign_after_delete()
        self.refresh_list()
        return removed

    def reassign_after_delete(self) -> None:
        """Activate the first remaining note, or clear the editor."""
        first = self.store.first()
        if first is not None:
            self.select_document(first.id)
            return
        self.active_id = None
        self.store.save_active_id(None)
        self.view.clear_document()
        self.refresh_preview("")

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def on_title_changed(self, text: str) -> None:
        if self.active_id is None:
            logger.debug("title edit ignored: no active note")
            return
        self._title_edits.trigger((self.active_id, text))

    def on_content_changed(self, text: str) -> None:
        # The preview follows every keystroke; only the write is debounced.
        self.refresh_preview(text)
        if self.active_id is None:
            logger.debug("content edit ignored: no active note")
            return
        self._content_edits.trigger((self.active_id, text))

    def on_search_changed(self, query: str) -> None:
        self._search.trigger(query)

    # ------------------------------------------------------------------
    # Output requests
    # ------------------------------------------------------------------

    def refresh_preview(self, text: str) -> None:
        self.preview_html = self.bridge.render(text)
        self.view.show_preview(self.preview_html, text)

    def refresh_list(self) -> None:
        self.view.show_documents(self.store.filter(self.query), self.active_id, self.query)

    # ------------------------------------------------------------------
    # Debounced commits
    # ------------------------------------------------------------------

    def _is_current(self, doc_id: str) -> bool:
        if doc_id != self.active_id or doc_id not in self.store:
            logger.debug("edit for %s dropped: no longer the active note", doc_id)
            return False
        return True

    def _commit_title(self, edit: _Edit) -> None:
        doc_id, title = edit
        if self._is_current(doc_id):
            self.store.update(doc_id, title=title)
            self.refresh_list()

    def _commit_content(self, edit: _Edit) -> None:
        doc_id, content = edit
        if self._is_current(doc_id):
            self.store.update(doc_id, content=content)

    def _commit_search(self, query: str) -> None:
        self.query = query.strip()
        self.refresh_list()
