"""Durable string-keyed key-value stores.

The document layer only needs ``get``/``set`` of strings; these classes
provide that over a JSON file (``JsonFileKeyValueStore``) or a dict
(``MemoryKeyValueStore``).
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from ..log import logger


class PersistenceError(Exception):
    """Raised when the durable medium cannot be written."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """In-process store; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileKeyValueStore:
    """Key-value entries kept in one JSON object file with atomic write.

    On-disk format: ``{key: string_value}``.  Every ``set`` rewrites the
    whole file through a temp file + rename, so a crash never leaves a
    half-written file behind.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # -- core I/O -------------------------------------------------------------

    def load_raw(self) -> dict[str, str]:
        """Read and parse the file, returning ``{}`` when missing.

        Raises ``PersistenceError`` when the file exists but can't be read
        or doesn't hold a JSON object.
        """
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} does not hold a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def save_raw(self, data: dict[str, str]) -> None:
        """Write *data* as pretty-printed JSON, creating parents as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                logger.debug("failed to remove temp file %s", tmp, exc_info=True)
            raise

    # -- KeyValueStore ----------------------------------------------------------

    def get(self, key: str) -> str | None:
        return self.load_raw().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self.load_raw()
        except PersistenceError:
            # Keep the unreadable file around instead of overwriting it.
            backup = self.path.with_name(self.path.name + ".bak")
            logger.warning("unreadable store %s moved to %s", self.path, backup)
            os.replace(self.path, backup)
            data = {}
        data[key] = value
        self.save_raw(data)
