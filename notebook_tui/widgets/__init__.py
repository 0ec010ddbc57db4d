"""Textual widgets for the notebook UI."""

from .document_list import DocumentList
from .screens import DeleteConfirmScreen, ShortcutOverlay

__all__ = [
    "DeleteConfirmScreen",
    "DocumentList",
    "ShortcutOverlay",
]
