"""Textual themes for Notebook TUI.

Keys match ``preferences.THEME_NAMES``.
"""

from textual.theme import Theme

TEXTUAL_THEMES: dict[str, Theme] = {
    "dark": Theme(
        name="notebook-dark",
        primary="#cba6f7",
        secondary="#89b4fa",
        accent="#f9e2af",
        background="#1e1e2e",
        surface="#181825",
        panel="#313244",
        success="#a6e3a1",
        warning="#fab387",
        error="#f38ba8",
        dark=True,
    ),
    "light": Theme(
        name="notebook-light",
        primary="#8839ef",
        secondary="#1e66f5",
        accent="#df8e1d",
        background="#eff1f5",
        surface="#e6e9ef",
        panel="#ccd0da",
        success="#40a02b",
        warning="#fe640b",
        error="#d20f39",
        dark=False,
    ),
}


def textual_theme(name: str) -> Theme:
    """Return the Textual theme for a preference name (dark when unknown)."""
    return TEXTUAL_THEMES.get(name, TEXTUAL_THEMES["dark"])
