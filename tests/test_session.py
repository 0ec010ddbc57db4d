"""Tests for SessionController: selection, debounced edits, search, deletes."""

from __future__ import annotations

from notebook_tui.constants import (
    ACTIVE_FILE_KEY,
    EMPTY_PREVIEW_HTML,
    WELCOME_TITLE,
)
from notebook_tui.core import Document


def _spy_updates(store, monkeypatch) -> list[tuple[str, dict]]:
    calls: list[tuple[str, dict]] = []
    original = store.update

    def spy(doc_id, **fields):
        calls.append((doc_id, fields))
        return original(doc_id, **fields)

    monkeypatch.setattr(store, "update", spy)
    return calls


# -- bootstrap -------------------------------------------------------------------


class TestStart:
    def test_first_run_seeds_welcome_note(self, session, store, view, kv):
        session.start()
        assert len(store) == 1
        welcome = store.first()
        assert welcome.title == WELCOME_TITLE
        assert session.active_id == welcome.id
        assert view.document is welcome
        assert view.listed == [welcome.id]
        assert kv.data[ACTIVE_FILE_KEY] == welcome.id
        assert "<h1>" in view.preview_html

    def test_restores_saved_active_note(self, session, store, persistence):
        persistence.save_documents(
            [Document(id="a", title="A"), Document(id="b", title="B")]
        )
        persistence.save_active_id("b")
        session.start()
        assert session.active_id == "b"
        assert len(store) == 2

    def test_stale_active_id_falls_back_to_first(self, session, persistence):
        persistence.save_documents([Document(id="a"), Document(id="b")])
        persistence.save_active_id("gone")
        session.start()
        assert session.active_id == "a"

    def test_no_saved_id_selects_first(self, session, persistence, view):
        persistence.save_documents([Document(id="a"), Document(id="b")])
        session.start()
        assert session.active_id == "a"
        assert view.document.id == "a"


# -- selection -------------------------------------------------------------------


class TestSelect:
    def test_loads_document_and_preview(self, session, store, view, kv):
        doc = store.create("Plan", "**milk**")
        assert session.select_document(doc.id) is True
        assert session.active_id == doc.id
        assert kv.data[ACTIVE_FILE_KEY] == doc.id
        assert view.document is doc
        assert "<strong>milk</strong>" in view.preview_html
        assert view.list_active == doc.id

    def test_unknown_id_is_ignored(self, session, store, view):
        doc = store.create()
        session.select_document(doc.id)
        renders = view.list_renders
        assert session.select_document("missing") is False
        assert session.active_id == doc.id
        assert view.list_renders == renders

    def test_new_document_is_created_and_selected(self, session, store, view):
        old = store.create("old")
        session.select_document(old.id)
        doc = session.new_document()
        assert store.first() is doc
        assert session.active_id == doc.id
        assert view.document is doc
        assert view.listed[0] == doc.id


# -- debounced edits -------------------------------------------------------------


class TestEdits:
    def test_content_keystrokes_commit_once(self, session, store, scheduler, monkeypatch):
        doc = store.create()
        session.select_document(doc.id)
        calls = _spy_updates(store, monkeypatch)

        for text in ("H", "He", "Hel"):
            session.on_content_changed(text)
            scheduler.advance(0.05)
        scheduler.advance(0.5)

        assert calls == [(doc.id, {"content": "Hel"})]
        assert store.get(doc.id).content == "Hel"

    def test_preview_follows_every_keystroke(self, session, store, view, scheduler):
        doc = store.create()
        session.select_document(doc.id)
        session.on_content_changed("# H")
        assert view.preview_text == "# H"
        session.on_content_changed("# He")
        assert view.preview_text == "# He"
        assert "<h1>He</h1>" in view.preview_html
        # Nothing written yet.
        assert store.get(doc.id).content == ""

    def test_content_quiet_period_is_150ms(self, session, store, scheduler):
        doc = store.create()
        session.select_document(doc.id)
        session.on_content_changed("x")
        scheduler.advance(0.14)
        assert store.get(doc.id).content == ""
        scheduler.advance(0.02)
        assert store.get(doc.id).content == "x"

    def test_title_quiet_period_is_300ms_and_rerenders_list(
        self, session, store, view, scheduler
    ):
        doc = store.create()
        session.select_document(doc.id)
        renders = view.list_renders
        session.on_title_changed("Groceries")
        scheduler.advance(0.29)
        assert store.get(doc.id).title == "Untitled"
        scheduler.advance(0.02)
        assert store.get(doc.id).title == "Groceries"
        assert view.list_renders == renders + 1

    def test_edits_without_active_note_are_ignored(self, session, store, scheduler, view):
        store.create("untouched")
        session.on_title_changed("x")
        session.on_content_changed("y")
        assert scheduler.pending == 0
        scheduler.advance(1)
        assert store.first().title == "untouched"
        # The preview still reflects what was typed.
        assert view.preview_text == "y"

    def test_switching_notes_flushes_pending_edit_to_original(
        self, session, store, scheduler
    ):
        a = store.create("A")
        b = store.create("B")
        session.select_document(a.id)
        session.on_content_changed("typed into A")
        session.select_document(b.id)
        scheduler.advance(1)
        assert store.get(a.id).content == "typed into A"
        assert store.get(b.id).content == ""

    def test_close_flushes(self, session, store, scheduler):
        doc = store.create()
        session.select_document(doc.id)
        session.on_title_changed("Final")
        session.close()
        assert store.get(doc.id).title == "Final"
        assert scheduler.pending == 0


# -- search ----------------------------------------------------------------------


class TestSearch:
    def test_debounced_filter(self, session, store, view, scheduler):
        plan = store.create("Plan", "buy milk")
        notes = store.create("Notes", "PLAN ahead")
        other = store.create("Other", "")
        session.select_document(other.id)

        session.on_search_changed("pl")
        session.on_search_changed("plan")
        scheduler.advance(0.19)
        assert view.listed == [other.id, notes.id, plan.id]
        scheduler.advance(0.02)
        assert view.listed == [notes.id, plan.id]
        assert view.list_query == "plan"

    def test_blank_query_shows_everything(self, session, store, view, scheduler):
        a = store.create("a")
        b = store.create("b")
        session.on_search_changed("a")
        scheduler.advance(0.3)
        session.on_search_changed("   ")
        scheduler.advance(0.3)
        assert view.listed == [b.id, a.id]
        assert session.query == ""

    def test_query_survives_selection(self, session, store, view, scheduler):
        plan = store.create("Plan")
        other = store.create("Other")
        session.on_search_changed("plan")
        scheduler.advance(0.3)
        session.select_document(other.id)
        assert view.listed == [plan.id]

    def test_new_note_clears_the_filter(self, session, store, view, scheduler):
        plan = store.create("Plan")
        session.on_search_changed("plan")
        scheduler.advance(0.3)
        assert view.listed == [plan.id]

        doc = session.new_document()
        assert session.query == ""
        assert view.list_query == ""
        assert view.listed == [doc.id, plan.id]

    def test_new_note_drops_pending_search(self, session, store, view, scheduler):
        plan = store.create("Plan")
        session.on_search_changed("plan")
        doc = session.new_document()
        scheduler.advance(0.3)
        assert view.listed == [doc.id, plan.id]


# -- deletes ---------------------------------------------------------------------


class TestDelete:
    def test_deleting_active_selects_first_remaining(self, session, store, kv):
        older = store.create("older")
        newer = store.create("newer")
        session.select_document(newer.id)
        session.delete_document(newer.id)
        assert session.active_id == older.id
        assert kv.data[ACTIVE_FILE_KEY] == older.id

    def test_deleting_last_note_clears_editor(self, session, store, view, kv):
        doc = store.create()
        session.select_document(doc.id)
        session.delete_document(doc.id)
        assert session.active_id is None
        assert session.active_document is None
        assert view.cleared
        assert view.preview_html == EMPTY_PREVIEW_HTML
        assert kv.data[ACTIVE_FILE_KEY] == ""
        assert view.listed == []

    def test_deleting_other_note_keeps_selection(self, session, store, view):
        keep = store.create("keep")
        doomed = store.create("doomed")
        session.select_document(keep.id)
        session.delete_document(doomed.id)
        assert session.active_id == keep.id
        assert view.listed == [keep.id]

    def test_pending_edit_of_deleted_note_is_dropped(
        self, session, store, scheduler, monkeypatch
    ):
        older = store.create("older")
        doomed = store.create("doomed")
        session.select_document(doomed.id)
        session.on_content_changed("lost")
        calls = _spy_updates(store, monkeypatch)
        session.delete_document(doomed.id)
        scheduler.advance(1)
        assert calls == []
        assert store.get(older.id).content == ""
