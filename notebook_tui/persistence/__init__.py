"""Persistence layer – the key-value medium and the document adapter on top."""

from ._base import (
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    PersistenceError,
)
from .documents import DocumentPersistence

__all__ = [
    "DocumentPersistence",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PersistenceError",
]
