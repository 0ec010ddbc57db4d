"""Standalone HTML export of a rendered note.

Pure functions: they take a document (and a rendered fragment) and
return strings.  File I/O lives in :func:`write_export`.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from pygments.formatters.html import HtmlFormatter
from pygments.util import ClassNotFound

from ..core.document import Document, format_date
from ..log import logger
from ..rendering import HIGHLIGHTED_CLASS, RenderingBridge, escape_title

_BASE_CSS = """\
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  max-width: 800px; margin: 0 auto; padding: 20px; background: #1e1e2e; color: #cdd6f4; }
.metadata { color: #6c7086; font-size: 0.85em; border-bottom: 1px solid #313244;
  padding-bottom: 1rem; margin-bottom: 2rem; }
.metadata span { margin-right: 1.5em; }
pre { background: #11111b; padding: 12px; border-radius: 4px; overflow-x: auto; }
code { font-family: 'JetBrains Mono', 'Fira Code', 'Cascadia Code', monospace; font-size: 0.9em; }
p code { background: #313244; padding: 2px 5px; border-radius: 3px; }
table { border-collapse: collapse; }
th, td { border: 1px solid #313244; padding: 4px 10px; }
blockquote { border-left: 3px solid #585b70; margin-left: 0; padding-left: 1em; color: #a6adc8; }
.empty-state { color: #6c7086; font-style: italic; }
h1 { color: #cba6f7; }
a { color: #89b4fa; }
"""


def code_css(style: str = "monokai") -> str:
    """Pygments CSS scoped to highlighted code blocks."""
    try:
        formatter = HtmlFormatter(style=style)
    except ClassNotFound:
        logger.warning("unknown pygments style %r, using default", style)
        formatter = HtmlFormatter()
    return formatter.get_style_defs(f".{HIGHLIGHTED_CLASS}")


def export_filename(document: Document) -> str:
    """A filesystem-safe ``<title>.html`` name for *document*."""
    stem = re.sub(r"[^\w\-]+", "-", document.display_title).strip("-").lower()
    return f"{stem or 'note'}.html"


def export_html(document: Document, fragment: str, *, style: str = "monokai") -> str:
    """Wrap a rendered *fragment* in a complete HTML page."""
    title = escape_title(document.display_title)
    created = format_date(document.created_at)
    updated = format_date(document.updated_at)
    return "\n".join(
        [
            "<!DOCTYPE html>",
            "<html lang='en'><head>",
            "<meta charset='utf-8'>",
            f"<title>{title}</title>",
            "<style>",
            _BASE_CSS,
            code_css(style),
            "</style>",
            "</head><body>",
            "<div class='metadata'>"
            f"<span><strong>Title:</strong> {title}</span>"
            f"<span><strong>Created:</strong> {created}</span>"
            f"<span><strong>Updated:</strong> {updated}</span>"
            "</div>",
            fragment,
            f"<p class='metadata' style='text-align:center; margin-top:32px;'>"
            f"Exported from Notebook TUI on {datetime.now():%Y-%m-%d %H:%M}</p>",
            "</body></html>",
        ]
    )


def write_export(
    document: Document,
    bridge: RenderingBridge,
    path: Path,
    *,
    style: str = "monokai",
) -> Path:
    """Render *document* and write the page to *path* (a file or directory)."""
    if path.is_dir():
        path = path / export_filename(document)
    page = export_html(document, bridge.render(document.content), style=style)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(page, encoding="utf-8")
    logger.info("exported note %s to %s", document.id, path)
    return path
