"""Two-step delete: request, then confirm or cancel."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from ..log import logger
from .document import Document

if TYPE_CHECKING:
    from .session import SessionController


class DeletionWorkflow:
    """``Idle`` <-> ``ConfirmPending(document)``.

    At most one note is pending; a second ``request_delete`` replaces the
    first.  *on_prompt* receives the pending note's display title so the
    view can ask for confirmation, *on_close* hides that prompt again.
    """

    def __init__(
        self,
        session: SessionController,
        *,
        on_prompt: Callable[[str], object] | None = None,
        on_close: Callable[[], object] | None = None,
    ) -> None:
        self.session = session
        self.on_prompt = on_prompt
        self.on_close = on_close
        self._pending: Document | None = None

    @property
    def pending(self) -> Document | None:
        return self._pending

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def request_delete(self, document: Document) -> None:
        if self._pending is not None and self._pending.id != document.id:
            logger.debug("pending delete of %s replaced by %s", self._pending.id, document.id)
        self._pending = document
        if self.on_prompt is not None:
            self.on_prompt(document.display_title)

    def confirm(self) -> Document | None:
        """Delete the pending note.  Returns it, or ``None`` when idle."""
        document = self._pending
        if document is None:
            return None
        self.session.delete_document(document.id)
        self._close()
        return document

    def cancel(self) -> None:
        self._close()

    # Clicking outside the prompt or pressing Escape.
    dismiss = cancel

    def _close(self) -> None:
        was_pending = self._pending is not None
        self._pending = None
        if was_pending and self.on_close is not None:
            self.on_close()
