"""Entry point for the Notebook TUI CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .constants import LOG_FILE_NAME, STORAGE_FILE_NAME
from .core import DocumentStore, format_date
from .features.export import write_export
from .log import logger, setup_logging
from .persistence import DocumentPersistence, JsonFileKeyValueStore
from .preferences import load_preferences
from .rendering import RenderingBridge


def _open_store(data_dir: Path) -> DocumentStore:
    store = DocumentStore(
        DocumentPersistence(JsonFileKeyValueStore(data_dir / STORAGE_FILE_NAME))
    )
    store.load()
    return store


def _list_documents(data_dir: Path) -> int:
    store = _open_store(data_dir)
    if not len(store):
        print("No notes yet.")
        return 0
    active = store.persistence.load_active_id()
    for doc in store:
        marker = "*" if doc.id == active else " "
        print(f"{marker} {doc.id}  {format_date(doc.updated_at):>13}  {doc.display_title}")
    return 0


def _export_document(
    data_dir: Path, doc_id: str, output: Path | None, style: str
) -> int:
    store = _open_store(data_dir)
    if doc_id == "active":
        doc_id = store.persistence.load_active_id() or ""
    document = store.get(doc_id)
    if document is None:
        print(f"No note with id {doc_id!r}. Use --list to see ids.", file=sys.stderr)
        return 1
    target = output or Path.cwd()
    try:
        path = write_export(document, RenderingBridge(), target, style=style)
    except OSError as exc:
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1
    print(path)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Run Notebook TUI."""
    parser = argparse.ArgumentParser(description="The Notebook - markdown notes in your terminal")
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"notebook-tui {__version__}",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding notes (default: from preferences, ~/.notebook)",
    )
    parser.add_argument(
        "--log-level",
        help="Log level for the log file (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List notes and exit",
    )
    parser.add_argument(
        "--export",
        metavar="ID",
        help="Export a note ('active' for the active one) to HTML and exit",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="File or directory for --export (default: current directory)",
    )

    args = parser.parse_args(argv)

    prefs = load_preferences()
    if args.data_dir:
        prefs.data_dir = args.data_dir.expanduser()
    if args.log_level:
        prefs.log_level = args.log_level.upper()
    setup_logging(prefs.log_level, prefs.data_dir / LOG_FILE_NAME)

    if args.list:
        sys.exit(_list_documents(prefs.data_dir))
    if args.export:
        sys.exit(
            _export_document(
                prefs.data_dir, args.export, args.output, prefs.preview.code_style
            )
        )

    try:
        from .app import run_app

        run_app(prefs)
    except (KeyboardInterrupt, SystemExit):
        pass
    except Exception:
        logger.debug("Fatal error in notebook-tui", exc_info=True)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
