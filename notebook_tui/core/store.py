"""In-memory document collection with write-through persistence."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Callable

from ..constants import DEFAULT_TITLE
from ..log import logger
from ..persistence._base import PersistenceError
from .document import Document, generate_id, now_ms

if TYPE_CHECKING:
    from ..persistence.documents import DocumentPersistence

_UPDATABLE_FIELDS = frozenset({"title", "content"})


class DocumentStore:
    """Own the ordered document collection (newest first).

    Every mutation (``create``, ``update``, ``delete``) writes the whole
    collection through *persistence* before returning.  A failed write is
    logged and reported through *on_error*; the in-memory state is kept and
    the next successful write brings storage back in line.
    """

    def __init__(
        self,
        persistence: DocumentPersistence,
        *,
        on_error: Callable[[PersistenceError], object] | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.persistence = persistence
        self.on_error = on_error
        self._clock = clock
        self._documents: list[Document] = []

    # ------------------------------------------------------------------
    # Collection access
    # ------------------------------------------------------------------

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(tuple(self._documents))

    def __contains__(self, doc_id: object) -> bool:
        return self.get(doc_id) is not None  # type: ignore[arg-type]

    def first(self) -> Document | None:
        return self._documents[0] if self._documents else None

    def load(self) -> None:
        """Replace the in-memory collection with the persisted one."""
        self._documents = self.persistence.load_documents()
        logger.debug("loaded %d notes", len(self._documents))

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, title: str = DEFAULT_TITLE, content: str = "") -> Document:
        stamp = self._clock()
        doc = Document(
            id=generate_id(stamp),
            title=title,
            content=content,
            created_at=stamp,
            updated_at=stamp,
        )
        self._documents.insert(0, doc)
        self._persist()
        return doc

    def get(self, doc_id: str) -> Document | None:
        for doc in self._documents:
            if doc.id == doc_id:
                return doc
        return None

    def update(self, doc_id: str, **fields: str) -> Document | None:
        """Merge *fields* (``title`` and/or ``content``) into a document.

        Returns the updated document, or ``None`` when *doc_id* is unknown;
        in that case nothing changes and nothing is written.
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"cannot update field(s): {', '.join(sorted(unknown))}")
        doc = self.get(doc_id)
        if doc is None:
            logger.debug("update ignored: no note with id %s", doc_id)
            return None
        for name, value in fields.items():
            setattr(doc, name, value)
        doc.updated_at = self._clock()
        self._persist()
        return doc

    def delete(self, doc_id: str) -> bool:
        """Remove the document; persist either way.  Returns True if removed."""
        before = len(self._documents)
        self._documents = [doc for doc in self._documents if doc.id != doc_id]
        removed = len(self._documents) != before
        if not removed:
            logger.debug("delete of unknown note %s", doc_id)
        self._persist()
        return removed

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[Document]:
        """Documents whose title or content contains *query*, any case."""
        return [doc for doc in self._documents if doc.matches(query)]

    def filter(self, query: str) -> list[Document]:
        """Full collection for a blank query, ``search`` results otherwise."""
        query = query.strip()
        if not query:
            return list(self._documents)
        return self.search(query)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_active_id(self, doc_id: str | None) -> None:
        try:
            self.persistence.save_active_id(doc_id)
        except PersistenceError as exc:
            self._report(exc)

    def _persist(self) -> None:
        try:
            self.persistence.save_documents(self._documents)
        except PersistenceError as exc:
            self._report(exc)

    def _report(self, exc: PersistenceError) -> None:
        logger.warning("could not save notes: %s", exc)
        if self.on_error is not None:
            self.on_error(exc)
