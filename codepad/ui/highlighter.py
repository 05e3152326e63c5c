"""Pygments-backed ``QSyntaxHighlighter`` for the code view.

Qt highlights one block (line) at a time, but lexing per line breaks
multi-line tokens. The highlighter therefore lexes the whole document once
per edit and slices the resulting spans for each block.
"""

from __future__ import annotations

from bisect import bisect_right

from PySide6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat
from PySide6.QtWidgets import QPlainTextEdit

from ..source_pane import DEFAULT_STYLE, SyntaxMode, TokenSpan, normalize_style, token_format, token_spans

_NO_CARRY_STATE = -1


def _utf16_offset(text: str, index: int) -> int:
    """Convert a code-point index into ``text`` to a Qt (UTF-16) index."""
    prefix = text[:index]
    if prefix.isascii():
        return index
    return index + sum(1 for ch in prefix if ord(ch) > 0xFFFF)


class PygmentsHighlighter(QSyntaxHighlighter):
    """Colours the editor's document according to a ``SyntaxMode``."""

    def __init__(self, editor: QPlainTextEdit, style: str = DEFAULT_STYLE) -> None:
        # Attach the document after connecting our own change slot so span
        # invalidation runs before Qt re-highlights the edited blocks.
        super().__init__(editor)
        document = editor.document()
        document.contentsChange.connect(self._on_contents_change)

        self._style = normalize_style(style)
        self._mode = SyntaxMode.PLAIN
        self._formats: dict[object, QTextCharFormat] = {}
        self._spans: list[TokenSpan] = []
        self._span_starts: list[int] = []
        self._line_starts: list[int] = [0]
        self._dirty = True

        self.setDocument(document)

    @property
    def mode(self) -> SyntaxMode:
        return self._mode

    @property
    def style(self) -> str:
        return self._style

    def set_mode(self, mode: SyntaxMode) -> None:
        if mode == self._mode:
            return
        self._mode = mode
        self._dirty = True
        self.rehighlight()

    def set_style(self, style: str) -> None:
        self._style = normalize_style(style)
        self._formats.clear()
        self.rehighlight()

    def _on_contents_change(self, _position: int, _removed: int, _added: int) -> None:
        self._dirty = True

    def _ensure_spans(self) -> None:
        if not self._dirty:
            return
        source = self.document().toRawText().replace("\u2029", "\n")
        self._spans = token_spans(source, self._mode)
        self._span_starts = [span.offset for span in self._spans]
        starts = [0]
        for index, ch in enumerate(source):
            if ch == "\n":
                starts.append(index + 1)
        self._line_starts = starts
        self._dirty = False

    def _format_for(self, token_type) -> QTextCharFormat:
        fmt = self._formats.get(token_type)
        if fmt is not None:
            return fmt
        attrs = token_format(self._style, token_type)
        fmt = QTextCharFormat()
        if attrs.color:
            fmt.setForeground(QColor(attrs.color))
        if attrs.background:
            fmt.setBackground(QColor(attrs.background))
        if attrs.bold:
            fmt.setFontWeight(QFont.Weight.Bold)
        fmt.setFontItalic(attrs.italic)
        fmt.setFontUnderline(attrs.underline)
        self._formats[token_type] = fmt
        return fmt

    def highlightBlock(self, text: str) -> None:
        self._ensure_spans()
        if not self._spans:
            self.setCurrentBlockState(_NO_CARRY_STATE)
            return

        block_number = self.currentBlock().blockNumber()
        if block_number >= len(self._line_starts):
            return
        start = self._line_starts[block_number]
        end = start + len(text)

        index = max(0, bisect_right(self._span_starts, start) - 1)
        carry_state = _NO_CARRY_STATE
        while index < len(self._spans) and self._spans[index].offset <= end:
            span = self._spans[index]
            span_end = span.offset + span.length
            lo = max(span.offset, start)
            hi = min(span_end, end)
            if hi > lo:
                qt_lo = _utf16_offset(text, lo - start)
                qt_hi = _utf16_offset(text, hi - start)
                self.setFormat(qt_lo, qt_hi - qt_lo, self._format_for(span.token_type))
            if span.offset <= end < span_end:
                # Token continues into the next block; a changed state makes
                # Qt re-highlight the following line as well.
                carry_state = hash(span.token_type) & 0x7FFFFFFF
            index += 1
        self.setCurrentBlockState(carry_state)
