"""Source loading/saving, display-mode selection, and Pygments tokenization.

The display mode is chosen from the file-name suffix only. Token spans are
computed over the whole text so multi-line constructs (block comments,
strings) colour correctly when the view highlights one block at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.token import Text, Whitespace, _TokenType
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


class SyntaxMode(str, Enum):
    """Display modes offered by the code view."""

    PLAIN = "plain"
    JAVA = "java"
    XML = "xml"
    HTML = "html"
    JAVASCRIPT = "javascript"
    PYTHON = "python"


_SUFFIX_MODES: dict[str, SyntaxMode] = {
    ".java": SyntaxMode.JAVA,
    ".xml": SyntaxMode.XML,
    ".html": SyntaxMode.HTML,
    ".htm": SyntaxMode.HTML,
    ".js": SyntaxMode.JAVASCRIPT,
    ".py": SyntaxMode.PYTHON,
}

_MODE_LEXER_ALIASES: dict[SyntaxMode, str] = {
    SyntaxMode.JAVA: "java",
    SyntaxMode.XML: "xml",
    SyntaxMode.HTML: "html",
    SyntaxMode.JAVASCRIPT: "javascript",
    SyntaxMode.PYTHON: "python",
}


@dataclass(frozen=True)
class TokenSpan:
    """One highlighted run of text, in absolute character offsets."""

    offset: int
    length: int
    token_type: _TokenType


@dataclass(frozen=True)
class TokenFormat:
    """Resolved style attributes for one token type."""

    color: str | None = None
    background: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False


def read_text(path: Path) -> tuple[str, str]:
    """Read a whole file as text and report the encoding that decoded it.

    Attempts UTF-8, then latin-1 (which accepts any byte sequence). A BOM
    stays in the text as U+FEFF. Line endings are returned untranslated.
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        return data.decode("latin-1"), "latin-1"


def write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Overwrite ``path`` with ``text`` in ``encoding``, line endings verbatim.

    Raises ``UnicodeEncodeError`` before touching the file when ``text``
    cannot be represented in ``encoding``.
    """
    path.write_bytes(text.encode(encoding))


def syntax_mode_for_path(path: Path | str) -> SyntaxMode:
    """Pick a display mode from the (case-insensitive) file-name suffix."""
    suffix = Path(path).suffix.lower()
    return _SUFFIX_MODES.get(suffix, SyntaxMode.PLAIN)


@lru_cache(maxsize=None)
def _lexer_for_mode(mode: SyntaxMode):
    alias = _MODE_LEXER_ALIASES.get(mode)
    if alias is None:
        return None
    return get_lexer_by_name(alias)


def token_spans(source: str, mode: SyntaxMode) -> list[TokenSpan]:
    """Lex ``source`` for ``mode`` and return spans for every visible token.

    Plain mode, empty input, and plain-text/whitespace tokens yield nothing.
    """
    lexer = _lexer_for_mode(mode)
    if lexer is None or not source:
        return []

    spans: list[TokenSpan] = []
    for offset, token_type, value in lexer.get_tokens_unprocessed(source):
        if not value or token_type in Whitespace or token_type is Text:
            continue
        if not value.strip():
            continue
        spans.append(TokenSpan(offset=offset, length=len(value), token_type=token_type))
    return spans


def normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _hex(value: str) -> str | None:
    return f"#{value}" if value else None


@lru_cache(maxsize=4096)
def token_format(style: str, token_type: _TokenType) -> TokenFormat:
    """Resolve Pygments style attributes for ``token_type``."""
    style_cls = get_style_by_name(normalize_style(style))
    attrs = style_cls.style_for_token(token_type)
    return TokenFormat(
        color=_hex(attrs.get("color") or ""),
        background=_hex(attrs.get("bgcolor") or ""),
        bold=bool(attrs.get("bold")),
        italic=bool(attrs.get("italic")),
        underline=bool(attrs.get("underline")),
    )


def style_colors(style: str) -> tuple[str, str]:
    """Return ``(background, default_foreground)`` colours for a style."""
    style_cls = get_style_by_name(normalize_style(style))
    background = style_cls.background_color or "#ffffff"
    foreground = token_format(style, Text).color or "#000000"
    return background, foreground
