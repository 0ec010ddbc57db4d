"""Tests for standalone HTML export."""

from __future__ import annotations

from pathlib import Path

from notebook_tui.core import Document
from notebook_tui.features.export import (
    code_css,
    export_filename,
    export_html,
    write_export,
)
from notebook_tui.rendering import RenderingBridge


def _doc(**overrides) -> Document:
    fields = dict(
        id="abc",
        title="Trip <plans>",
        content="# Day 1\n\n```python\nprint('hi')\n```\n",
        created_at=1_760_875_200_000,
        updated_at=1_760_875_200_000,
    )
    fields.update(overrides)
    return Document(**fields)


class TestFilename:
    def test_slug(self):
        assert export_filename(_doc(title="My Trip: Day 1")) == "my-trip-day-1.html"

    def test_blank_title_uses_display_title(self):
        assert export_filename(_doc(title="  ")) == "untitled.html"

    def test_unsluggable_title(self):
        assert export_filename(_doc(title="???")) == "note.html"


class TestExportHtml:
    def test_page_wraps_fragment(self):
        page = export_html(_doc(), "<h1>Day 1</h1>")
        assert page.startswith("<!DOCTYPE html>")
        assert "<h1>Day 1</h1>" in page
        assert "Oct 19, 2025" in page

    def test_title_is_escaped(self):
        page = export_html(_doc(), "<p>x</p>")
        assert "<title>Trip &lt;plans&gt;</title>" in page
        assert "Trip <plans>" not in page

    def test_code_css_scoped_to_highlighted_blocks(self):
        assert ".hljs" in code_css("monokai")

    def test_unknown_style_falls_back(self):
        assert ".hljs" in code_css("no-such-style")


class TestWriteExport:
    def test_directory_target(self, tmp_path: Path):
        path = write_export(_doc(), RenderingBridge(), tmp_path)
        assert path == tmp_path / "trip-plans.html"
        page = path.read_text(encoding="utf-8")
        assert 'class="hljs language-python"' in page

    def test_file_target_creates_parents(self, tmp_path: Path):
        target = tmp_path / "out" / "nested" / "page.html"
        path = write_export(_doc(), RenderingBridge(), target)
        assert path == target
        assert target.exists()

    def test_blank_note_exports_placeholder(self, tmp_path: Path):
        path = write_export(_doc(content=""), RenderingBridge(), tmp_path)
        assert "Start typing to see the preview..." in path.read_text(encoding="utf-8")
