"""Shared test fixtures for the notebook-tui test suite."""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from pathlib import Path
from typing import Callable

import pytest

from notebook_tui.core import (
    DeletionWorkflow,
    Document,
    DocumentStore,
    SessionController,
)
from notebook_tui.persistence import DocumentPersistence, MemoryKeyValueStore
from notebook_tui.rendering import RenderingBridge


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep preferences and data out of the real home directory."""
    home = tmp_path / "notebook-home"
    monkeypatch.setenv("NOTEBOOK_HOME", str(home))
    return home


# -- Timers -------------------------------------------------------------------


class ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class ManualScheduler:
    """Timer factory driven by ``advance()`` instead of wall-clock time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def set_timer(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for t in self.timers if not t.stopped)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if not t.stopped and t.due <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = target


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


# -- View -----------------------------------------------------------------------


class RecordingView:
    """SessionView that remembers what it was asked to show."""

    def __init__(self) -> None:
        self.document: Document | None = None
        self.cleared = False
        self.preview_html = ""
        self.preview_text = ""
        self.previews: list[str] = []
        self.listed: list[str] = []
        self.list_active: str | None = None
        self.list_query = ""
        self.list_renders = 0

    def show_document(self, document: Document) -> None:
        self.document = document
        self.cleared = False

    def clear_document(self) -> None:
        self.document = None
        self.cleared = True

    def show_preview(self, html: str, text: str) -> None:
        self.preview_html = html
        self.preview_text = text
        self.previews.append(text)

    def show_documents(
        self, documents: Sequence[Document], active_id: str | None, query: str
    ) -> None:
        self.listed = [doc.id for doc in documents]
        self.list_active = active_id
        self.list_query = query
        self.list_renders += 1


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


# -- Store / session ------------------------------------------------------------


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def persistence(kv: MemoryKeyValueStore) -> DocumentPersistence:
    return DocumentPersistence(kv)


@pytest.fixture
def clock() -> Callable[[], int]:
    """Deterministic ms clock: every call is one millisecond later."""
    counter = itertools.count(1_700_000_000_000)
    return lambda: next(counter)


@pytest.fixture
def store(persistence: DocumentPersistence, clock: Callable[[], int]) -> DocumentStore:
    return DocumentStore(persistence, clock=clock)


@pytest.fixture
def bridge() -> RenderingBridge:
    return RenderingBridge()


@pytest.fixture
def session(
    store: DocumentStore,
    bridge: RenderingBridge,
    view: RecordingView,
    scheduler: ManualScheduler,
) -> SessionController:
    return SessionController(store, bridge, view, set_timer=scheduler.set_timer)


@pytest.fixture
def deletion(session: SessionController) -> DeletionWorkflow:
    return DeletionWorkflow(session)
