"""User preferences for Notebook TUI.

Loads settings from ~/.notebook/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import (
    CONTENT_DEBOUNCE_MS,
    PREFS_FILE_NAME,
    SEARCH_DEBOUNCE_MS,
    TITLE_DEBOUNCE_MS,
    notebook_home,
)
from .log import logger

THEME_NAMES = ("dark", "light")

_DEFAULT_YAML = """\
# Notebook TUI Preferences
# Delete this file to reset to defaults.

storage:
  data_dir: ""                 # where notes live (empty = ~/.notebook)

editor:
  title_debounce_ms: 300       # quiet period before a title edit is saved
  content_debounce_ms: 150     # quiet period before a content edit is saved
  search_debounce_ms: 200      # quiet period before the list is filtered

preview:
  code_style: "monokai"        # pygments style used in HTML exports

theme: "dark"                  # dark | light

logging:
  level: "WARNING"             # DEBUG, INFO, WARNING, ERROR
"""


@dataclass
class EditorPreferences:
    """Debounce quiet periods, in milliseconds."""

    title_debounce_ms: int = TITLE_DEBOUNCE_MS
    content_debounce_ms: int = CONTENT_DEBOUNCE_MS
    search_debounce_ms: int = SEARCH_DEBOUNCE_MS


@dataclass
class PreviewPreferences:
    code_style: str = "monokai"


@dataclass
class Preferences:
    """Top-level preferences."""

    data_dir: Path = field(default_factory=notebook_home)
    editor: EditorPreferences = field(default_factory=EditorPreferences)
    preview: PreviewPreferences = field(default_factory=PreviewPreferences)
    theme_name: str = "dark"
    log_level: str = "WARNING"


def prefs_path() -> Path:
    return notebook_home() / PREFS_FILE_NAME


def _non_negative_int(value: object, default: int) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if number >= 0 else default


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or prefs_path()
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError):
            logger.warning("invalid preferences file %s, using defaults", path)
            return prefs
        if not isinstance(data, dict):
            return prefs

        if isinstance(data.get("storage"), dict):
            data_dir = data["storage"].get("data_dir")
            if data_dir:
                prefs.data_dir = Path(str(data_dir)).expanduser()
        if isinstance(data.get("editor"), dict):
            edata = data["editor"]
            ed = prefs.editor
            ed.title_debounce_ms = _non_negative_int(
                edata.get("title_debounce_ms"), ed.title_debounce_ms
            )
            ed.content_debounce_ms = _non_negative_int(
                edata.get("content_debounce_ms"), ed.content_debounce_ms
            )
            ed.search_debounce_ms = _non_negative_int(
                edata.get("search_debounce_ms"), ed.search_debounce_ms
            )
        if isinstance(data.get("preview"), dict):
            style = data["preview"].get("code_style")
            if style:
                prefs.preview.code_style = str(style)
        theme = data.get("theme")
        if theme in THEME_NAMES:
            prefs.theme_name = theme
        if isinstance(data.get("logging"), dict):
            level = data["logging"].get("level")
            if level:
                prefs.log_level = str(level).upper()
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default preferences to %s", path)

    return prefs
