"""Module-level constants for Notebook TUI."""

from __future__ import annotations

import os
from pathlib import Path

# Durable key-value layout
FILES_KEY = "notebook_files"
ACTIVE_FILE_KEY = "notebook_active_file"
CORRUPT_SUFFIX = ".corrupt"

DEFAULT_TITLE = "Untitled"

# Debounce quiet periods (milliseconds)
TITLE_DEBOUNCE_MS = 300
CONTENT_DEBOUNCE_MS = 150
SEARCH_DEBOUNCE_MS = 200

EMPTY_PREVIEW_HTML = (
    '<div class="empty-state"><p>Start typing to see the preview...</p></div>'
)
EMPTY_PREVIEW_TEXT = "Start typing to see the preview..."
EMPTY_LIST_TEXT = "No notes yet. Press Ctrl+N to create one!"
NO_MATCHES_TEXT = "No notes match your search."

STORAGE_FILE_NAME = "storage.json"
LOG_FILE_NAME = "notebook.log"
PREFS_FILE_NAME = "preferences.yaml"


def notebook_home() -> Path:
    """Return the config/data directory (``$NOTEBOOK_HOME`` or ``~/.notebook``)."""
    env = os.environ.get("NOTEBOOK_HOME")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".notebook"


WELCOME_TITLE = "Welcome to The Notebook"

WELCOME_CONTENT = """\
# Welcome to The Notebook! 📓

This is your personal Markdown editor with **live preview** and **syntax highlighting**!

## Features

- ✨ Live Markdown preview
- 🎨 Syntax highlighting for code blocks
- 💾 Auto-save to local storage
- 🔍 Search through your notes
- 📤 Export any note to HTML

## Markdown Examples

### Text Formatting

**Bold text** and *italic text* and ~~strikethrough~~

### Lists

- Item 1
- Item 2
  - Nested item
- Item 3

1. First
2. Second
3. Third

### Links

[Visit Python](https://www.python.org)

### Blockquote

> This is a blockquote.
> It can span multiple lines.

### Code

Inline `code` looks like this.

### Code Blocks with Syntax Highlighting

```python
def hello_world():
    print("Hello, World!")
    return True

if __name__ == "__main__":
    hello_world()
```

```javascript
const greet = (name) => {
    console.log(`Hello, ${name}!`);
    return true;
};

greet("World");
```

```json
{
    "name": "The Notebook",
    "version": "1.0.0",
    "features": ["markdown", "syntax-highlighting", "auto-save"]
}
```

### Tables

| Feature | Status |
|---------|--------|
| Markdown | ✅ |
| Syntax Highlighting | ✅ |
| Auto-save | ✅ |

### Horizontal Rule

---

## Keyboard Shortcuts

- **Ctrl + N** - New note
- **Ctrl + S** - Save (auto-saves anyway!)
- **Ctrl + D** - Delete note
- **Ctrl + E** - Export preview to HTML
- **Escape** - Close dialog
- **F1** - All shortcuts

---

Happy writing! ✨
"""
