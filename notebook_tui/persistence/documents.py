"""Document-collection persistence over a string key-value store."""

from __future__ import annotations

import json
from collections.abc import Iterable

from ..constants import ACTIVE_FILE_KEY, CORRUPT_SUFFIX, FILES_KEY
from ..core.document import Document
from ..log import logger
from ._base import KeyValueStore, PersistenceError


class DocumentPersistence:
    """Load/save the document collection and the active-document id.

    Layout: ``notebook_files`` holds a JSON array of document records,
    ``notebook_active_file`` holds the active id (``""`` when none).

    Reads never raise: unreadable or malformed data degrades to an empty
    collection (the raw value is preserved under ``notebook_files.corrupt``).
    Writes raise ``PersistenceError``.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    # -- collection -------------------------------------------------------------

    def load_documents(self) -> list[Document]:
        try:
            raw = self.kv.get(FILES_KEY)
        except (PersistenceError, OSError):
            logger.warning("could not read stored notes", exc_info=True)
            return []
        if not raw:
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("stored notes are not valid JSON")
            self._preserve_corrupt(raw)
            return []
        if not isinstance(records, list):
            logger.warning(
                "stored notes are a %s, expected a list", type(records).__name__
            )
            self._preserve_corrupt(raw)
            return []

        documents: list[Document] = []
        seen: set[str] = set()
        for index, record in enumerate(records):
            try:
                doc = Document.from_record(record)
            except ValueError as exc:
                logger.warning("skipping stored note #%d: %s", index, exc)
                continue
            if doc.id in seen:
                logger.warning("skipping duplicate stored note %s", doc.id)
                continue
            seen.add(doc.id)
            documents.append(doc)
        return documents

    def save_documents(self, documents: Iterable[Document]) -> None:
        payload = json.dumps(
            [doc.to_record() for doc in documents], ensure_ascii=False
        )
        self._set(FILES_KEY, payload)

    # -- active id ----------------------------------------------------------------

    def load_active_id(self) -> str | None:
        try:
            value = self.kv.get(ACTIVE_FILE_KEY)
        except (PersistenceError, OSError):
            logger.warning("could not read the active note id", exc_info=True)
            return None
        return value or None

    def save_active_id(self, doc_id: str | None) -> None:
        self._set(ACTIVE_FILE_KEY, doc_id or "")

    # -- helpers ----------------------------------------------------------------

    def _set(self, key: str, value: str) -> None:
        try:
            self.kv.set(key, value)
        except PersistenceError:
            raise
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"failed to write {key}: {exc}") from exc

    def _preserve_corrupt(self, raw: str) -> None:
        try:
            self.kv.set(FILES_KEY + CORRUPT_SUFFIX, raw)
        except (PersistenceError, OSError):
            logger.warning("could not back up corrupt notes", exc_info=True)
