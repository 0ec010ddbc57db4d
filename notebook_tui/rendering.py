"""Markdown preview rendering.

:class:`RenderingBridge` is the only thing the session talks to: it turns
note text into an HTML fragment, or the fixed placeholder for blank input.
The markdown converter and the syntax highlighter behind it are
replaceable capabilities (``Converter`` / ``Highlighter``); the defaults
use Python-Markdown and Pygments.
"""

from __future__ import annotations

import html
import re
from typing import Callable, Protocol

import markdown
from markdown.extensions import Extension
from markdown.postprocessors import Postprocessor
from pygments import highlight as pygments_highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from .constants import EMPTY_PREVIEW_HTML
from .log import logger

HIGHLIGHTED_CLASS = "hljs"
LANGUAGE_PREFIX = "language-"

# Python-Markdown emits code blocks as <pre><code class="language-x">…</code></pre>
# (class omitted for indented blocks and fences without a language).
_CODE_BLOCK_RE = re.compile(
    r'<pre><code(?: class="(?P<cls>[^"]*)")?>(?P<body>.*?)</code></pre>',
    re.DOTALL,
)

# (code, language or None) -> highlighted inner HTML, or None on failure
CodeHook = Callable[[str, "str | None"], "str | None"]


class Highlighter(Protocol):
    def highlight(self, code: str, language: str | None = None) -> str: ...


class Converter(Protocol):
    def convert(self, text: str) -> str: ...


class PygmentsHighlighter:
    """Highlight code into class-annotated ``<span>`` markup.

    A known *language* picks its lexer; an unknown or missing one falls
    back to Pygments' content-based guess.  Raises ``ClassNotFound`` when
    no lexer can be found at all.
    """

    def __init__(self) -> None:
        self._formatter = HtmlFormatter(nowrap=True)

    def highlight(self, code: str, language: str | None = None) -> str:
        lexer = None
        if language:
            try:
                lexer = get_lexer_by_name(language)
            except ClassNotFound:
                logger.debug("no lexer for %r, guessing", language)
        if lexer is None:
            lexer = guess_lexer(code)
        return pygments_highlight(code, lexer, self._formatter)


def _language_of(css_class: str | None) -> str | None:
    for name in (css_class or "").split():
        if name.startswith(LANGUAGE_PREFIX) and len(name) > len(LANGUAGE_PREFIX):
            return name[len(LANGUAGE_PREFIX) :]
    return None


def _highlight_blocks(html_text: str, hook: CodeHook, *, skip_marked: bool) -> str:
    """Run *hook* over every ``<pre><code>`` block in *html_text*.

    Blocks the hook highlights get the ``hljs`` class; blocks it fails on
    are left exactly as they were.
    """

    def replace(match: re.Match[str]) -> str:
        css_class = match.group("cls") or ""
        if skip_marked and HIGHLIGHTED_CLASS in css_class.split():
            return match.group(0)
        language = _language_of(css_class)
        code = html.unescape(match.group("body"))
        highlighted = hook(code, language)
        if highlighted is None:
            return match.group(0)
        classes = " ".join(
            [HIGHLIGHTED_CLASS] + [c for c in css_class.split() if c != HIGHLIGHTED_CLASS]
        )
        return f'<pre><code class="{classes}">{highlighted}</code></pre>'

    return _CODE_BLOCK_RE.sub(replace, html_text)


class _CodeBlockPostprocessor(Postprocessor):
    def __init__(self, md: markdown.Markdown, hook: CodeHook) -> None:
        super().__init__(md)
        self.hook = hook

    def run(self, text: str) -> str:
        return _highlight_blocks(text, self.hook, skip_marked=False)


class CodeBlockExtension(Extension):
    """Hand every rendered code block to *hook* for highlighting."""

    def __init__(self, hook: CodeHook, **kwargs) -> None:
        self.hook = hook
        super().__init__(**kwargs)

    def extendMarkdown(self, md: markdown.Markdown) -> None:  # noqa: N802
        # Priority 5: after raw-HTML placeholders (fenced blocks) are restored.
        md.postprocessors.register(
            _CodeBlockPostprocessor(md, self.hook), "notebook_code_blocks", 5
        )


class MarkdownConverter:
    """Python-Markdown with line breaks and GitHub-flavored extras.

    Fenced code, tables, ~~strikethrough~~ and bare-URL autolinks come
    from the standard extensions plus PyMdown Extensions.
    """

    EXTENSIONS = (
        "fenced_code",
        "tables",
        "nl2br",
        "sane_lists",
        "pymdownx.tilde",
        "pymdownx.magiclink",
    )
    # GFM has no ~subscript~; only ~~double tildes~~ mean anything.
    EXTENSION_CONFIGS = {"pymdownx.tilde": {"subscript": False}}

    def __init__(self, code_hook: CodeHook | None = None) -> None:
        extensions: list = list(self.EXTENSIONS)
        if code_hook is not None:
            extensions.append(CodeBlockExtension(code_hook))
        self._md = markdown.Markdown(
            extensions=extensions, extension_configs=self.EXTENSION_CONFIGS
        )

    def convert(self, text: str) -> str:
        return self._md.reset().convert(text)


class RenderingBridge:
    """Note text -> preview HTML.

    Blank input yields :data:`EMPTY_PREVIEW_HTML` without touching the
    converter.  Highlighting failures never escape: the code stays plain.
    """

    def __init__(
        self,
        converter: Converter | None = None,
        highlighter: Highlighter | None = None,
    ) -> None:
        self.highlighter = highlighter if highlighter is not None else PygmentsHighlighter()
        self.converter = (
            converter
            if converter is not None
            else MarkdownConverter(code_hook=self.highlight_code)
        )

    def render(self, text: str) -> str:
        if not text.strip():
            return EMPTY_PREVIEW_HTML
        rendered = self.converter.convert(text)
        # Second chance for blocks the converter left unhighlighted.
        return _highlight_blocks(
            rendered,
            lambda code, _language: self.highlight_code(code, None),
            skip_marked=True,
        )

    def highlight_code(self, code: str, language: str | None = None) -> str | None:
        """Highlight *code*, returning ``None`` instead of raising."""
        try:
            return self.highlighter.highlight(code, language)
        except Exception:
            logger.warning(
                "highlighting failed (language=%s), showing plain code",
                language,
                exc_info=True,
            )
            return None


def escape_title(title: str) -> str:
    """Escape a title for insertion into HTML as plain text."""
    return html.escape(title, quote=True)
