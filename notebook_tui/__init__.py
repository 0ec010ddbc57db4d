"""Notebook TUI - a terminal markdown notebook with live preview."""

__version__ = "0.1.0"
