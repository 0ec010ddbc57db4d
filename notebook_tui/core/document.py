"""The ``Document`` record and id generation."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..constants import DEFAULT_TITLE

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def now_ms() -> int:
    """Current time as integer milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("negative numbers have no base36 form here")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id(timestamp_ms: int | None = None) -> str:
    """Return a time-prefixed id with a random suffix.

    The prefix keeps ids roughly sortable by creation time; the 64-bit
    suffix makes collisions within the same millisecond negligible.
    """
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    return to_base36(timestamp_ms) + to_base36(secrets.randbits(64)).rjust(13, "0")


def format_date(timestamp_ms: int) -> str:
    """Format a ms timestamp for the document list, e.g. ``Oct 19, 2026``."""
    dt = datetime.fromtimestamp(timestamp_ms / 1000)
    return f"{dt:%b} {dt.day}, {dt.year}"


@dataclass
class Document:
    """A single note: title, markdown content and timestamps."""

    id: str
    title: str = DEFAULT_TITLE
    content: str = ""
    created_at: int = 0
    updated_at: int = 0

    @property
    def display_title(self) -> str:
        return self.title if self.title.strip() else DEFAULT_TITLE

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title or content."""
        needle = query.lower()
        return needle in self.title.lower() or needle in self.content.lower()

    def to_record(self) -> dict[str, Any]:
        """Serialize to the stored record layout (camelCase timestamps)."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_record(cls, record: Any) -> Document:
        """Build a document from a stored record.

        Raises ``ValueError`` when the record lacks a string id or carries
        fields of the wrong type.
        """
        if not isinstance(record, dict):
            raise ValueError(f"document record must be an object, got {type(record).__name__}")
        doc_id = record.get("id")
        if not isinstance(doc_id, str) or not doc_id:
            raise ValueError("document record has no id")
        title = record.get("title", "")
        content = record.get("content", "")
        if not isinstance(title, str) or not isinstance(content, str):
            raise ValueError(f"document {doc_id} has non-text title or content")
        created = record.get("createdAt", 0)
        updated = record.get("updatedAt", created)
        if isinstance(created, bool) or not isinstance(created, (int, float)):
            raise ValueError(f"document {doc_id} has a bad createdAt")
        if isinstance(updated, bool) or not isinstance(updated, (int, float)):
            raise ValueError(f"document {doc_id} has a bad updatedAt")
        return cls(
            id=doc_id,
            title=title,
            content=content,
            created_at=int(created),
            updated_at=int(updated),
        )
