"""Public API surface for code-view text handling.

Groups file text I/O, suffix-based display modes, and Pygments
tokenization so UI modules can import from ``codepad.source_pane``.
"""

from __future__ import annotations

from .syntax import (
    DEFAULT_STYLE,
    SyntaxMode,
    TokenFormat,
    TokenSpan,
    normalize_style,
    read_text,
    style_colors,
    syntax_mode_for_path,
    token_format,
    token_spans,
    write_text,
)

__all__ = [
    "DEFAULT_STYLE",
    "SyntaxMode",
    "TokenFormat",
    "TokenSpan",
    "normalize_style",
    "read_text",
    "style_colors",
    "syntax_mode_for_path",
    "token_format",
    "token_spans",
    "write_text",
]
