"""Tests for the two-step delete workflow."""

from __future__ import annotations

from notebook_tui.core import DeletionWorkflow


class TestDeletionWorkflow:
    def test_starts_idle(self, deletion):
        assert deletion.pending is None
        assert not deletion.is_pending

    def test_request_holds_target(self, deletion, store):
        doc = store.create("Plan")
        deletion.request_delete(doc)
        assert deletion.pending is doc
        assert len(store) == 1

    def test_last_request_wins(self, deletion, store):
        a = store.create("A")
        b = store.create("B")
        deletion.request_delete(a)
        deletion.request_delete(b)
        assert deletion.confirm() is b
        assert a.id in store
        assert b.id not in store
        assert deletion.pending is None

    def test_cancel_deletes_nothing(self, deletion, store):
        doc = store.create()
        deletion.request_delete(doc)
        deletion.cancel()
        assert deletion.pending is None
        assert doc.id in store

    def test_dismiss_is_cancel(self, deletion, store):
        doc = store.create()
        deletion.request_delete(doc)
        deletion.dismiss()
        assert not deletion.is_pending
        assert doc.id in store

    def test_confirm_when_idle(self, deletion, store):
        store.create()
        assert deletion.confirm() is None
        assert len(store) == 1

    def test_confirming_active_note_reassigns(self, deletion, session, store, view):
        older = store.create("older")
        active = store.create("active")
        session.select_document(active.id)
        deletion.request_delete(active)
        deletion.confirm()
        assert session.active_id == older.id
        assert view.document is older
        assert view.listed == [older.id]

    def test_confirming_last_note_clears(self, deletion, session, store, view):
        doc = store.create()
        session.select_document(doc.id)
        deletion.request_delete(doc)
        deletion.confirm()
        assert session.active_id is None
        assert view.cleared

    def test_confirm_of_already_deleted_note(self, deletion, session, store):
        doc = store.create()
        deletion.request_delete(doc)
        session.delete_document(doc.id)
        assert deletion.confirm() is doc
        assert len(store) == 0

    def test_prompt_and_close_callbacks(self, session, store):
        prompts: list[str] = []
        closes: list[bool] = []
        deletion = DeletionWorkflow(
            session, on_prompt=prompts.append, on_close=lambda: closes.append(True)
        )
        named = store.create("Groceries")
        blank = store.create("   ")

        deletion.request_delete(named)
        deletion.request_delete(blank)
        assert prompts == ["Groceries", "Untitled"]

        deletion.cancel()
        deletion.cancel()
        assert closes == [True]
