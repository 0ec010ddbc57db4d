"""UI-independent core: documents, the store, the editing session."""

from .debounce import Debouncer, TimerFactory, TimerHandle, threading_timer
from .deletion import DeletionWorkflow
from .document import Document, format_date, generate_id, now_ms
from .session import SessionController, SessionView
from .store import DocumentStore

__all__ = [
    "Debouncer",
    "DeletionWorkflow",
    "Document",
    "DocumentStore",
    "SessionController",
    "SessionView",
    "TimerFactory",
    "TimerHandle",
    "format_date",
    "generate_id",
    "now_ms",
    "threading_timer",
]
