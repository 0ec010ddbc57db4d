"""Sidebar list of notes."""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual.binding import Binding
from textual.message import Message
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from ..constants import EMPTY_LIST_TEXT, NO_MATCHES_TEXT
from ..core.document import Document, format_date


def _item_prompt(document: Document, active: bool) -> Text:
    # Text (not markup) so titles are shown literally.
    prompt = Text()
    prompt.append("● " if active else "  ", style="bold")
    prompt.append(document.display_title, style="bold" if active else "")
    prompt.append(f"\n  {format_date(document.updated_at)}", style="dim")
    return prompt


class DocumentList(OptionList):
    """Notes in collection order; the active note is marked and highlighted.

    Enter/click selects (``OptionList.OptionSelected``); Delete asks to
    delete the highlighted note (``DocumentList.DeleteRequested``).
    """

    BINDINGS = [
        Binding("delete", "request_delete", "Delete note", show=False),
    ]

    class DeleteRequested(Message):
        """The user asked to delete the note with ``doc_id``."""

        def __init__(self, doc_id: str) -> None:
            super().__init__()
            self.doc_id = doc_id

    def set_documents(
        self, documents: Sequence[Document], active_id: str | None, query: str = ""
    ) -> None:
        self.clear_options()
        if not documents:
            message = NO_MATCHES_TEXT if query else EMPTY_LIST_TEXT
            self.add_option(Option(message, disabled=True))
            return
        self.add_options(
            [Option(_item_prompt(doc, doc.id == active_id), id=doc.id) for doc in documents]
        )
        for index, doc in enumerate(documents):
            if doc.id == active_id:
                self.highlighted = index
                break

    def action_request_delete(self) -> None:
        if self.highlighted is None:
            return
        option = self.get_option_at_index(self.highlighted)
        if option.id is not None and not option.disabled:
            self.post_message(self.DeleteRequested(option.id))
