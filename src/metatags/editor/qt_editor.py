"""PySide6 text editor implementing :class:`~metatags.editor.surface.EditorSurface`.

Qt addresses text in UTF-16 code units while Python strings use code points;
offsets are converted at this boundary so the tag engine never sees Qt
positions.
"""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtGui import QColor, QFocusEvent, QTextCharFormat, QTextCursor, QTextFormat
from PySide6.QtWidgets import QTextEdit

from ..core.colors import Color
from .overlay import Hidden, HighlightColor, RangeAttribute
from .surface import SelectionSnapshot

LOGGER = logging.getLogger(__name__)

HIDDEN_PROPERTY = int(QTextFormat.Property.UserProperty) + 1
_PARAGRAPH_SEPARATOR = "\u2029"
_HIDDEN_POINT_SIZE = 1.0


def to_qt_offset(text: str, offset: int) -> int:
    """Convert a code-point offset in ``text`` to a UTF-16 position."""

    prefix = text[:offset]
    return len(prefix.encode("utf-16-le")) // 2


def from_qt_offset(text: str, position: int) -> int:
    """Convert a UTF-16 position in ``text`` to a code-point offset."""

    units = 0
    for index, char in enumerate(text):
        if units >= position:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)


def to_qcolor(color: Color | None) -> QColor:
    if color is None:
        return QColor(0, 0, 0, 0)
    return QColor(color.r, color.g, color.b, color.a)


def _hidden_format() -> QTextCharFormat:
    fmt = QTextCharFormat()
    fmt.setProperty(HIDDEN_PROPERTY, True)
    fmt.setForeground(QColor(0, 0, 0, 0))
    fmt.setFontPointSize(_HIDDEN_POINT_SIZE)
    return fmt


def _clear_hidden(fmt: QTextCharFormat) -> None:
    """Strip the properties set by :func:`_hidden_format` from ``fmt``."""

    fmt.clearProperty(HIDDEN_PROPERTY)
    fmt.clearProperty(int(QTextFormat.Property.ForegroundBrush))
    fmt.clearProperty(int(QTextFormat.Property.FontPointSize))


class TagTextEdit(QTextEdit):
    """Plain-text editing widget that understands hidden/highlighted ranges."""

    focusLost = Signal()

    def __init__(self, parent: Any | None = None) -> None:
        super().__init__(parent)
        self.setAcceptRichText(False)
        self.setObjectName("tagEditor")

    # ------------------------------------------------------------------
    # EditorSurface
    # ------------------------------------------------------------------
    def get_text(self) -> str:
        return self.toPlainText().rstrip("\0")

    def set_text(self, text: str) -> None:
        """Replace the whole buffer; character formatting is reset."""

        # QTextEdit.setPlainText re-applies the cursor format to the new text.
        self.document().setPlainText(text)
        self.moveCursor(QTextCursor.MoveOperation.Start)

    def get_selection(self) -> SelectionSnapshot:
        text = self.toPlainText()
        cursor = self.textCursor()
        start = from_qt_offset(text, cursor.selectionStart())
        end = from_qt_offset(text, cursor.selectionEnd())
        selected = cursor.selectedText().replace(_PARAGRAPH_SEPARATOR, "\n")
        return SelectionSnapshot(text=selected, start=start, end=end)

    def set_selection_text(self, text: str) -> None:
        cursor = self.textCursor()
        start = cursor.selectionStart()
        fmt = cursor.charFormat()
        if fmt.property(HIDDEN_PROPERTY):
            _clear_hidden(fmt)
        cursor.insertText(text, fmt)
        end = cursor.position()
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)
        self.setTextCursor(cursor)

    def set_range_attribute(self, start: int, end: int, attribute: RangeAttribute) -> None:
        text = self.toPlainText()
        cursor = QTextCursor(self.document())
        cursor.setPosition(to_qt_offset(text, start))
        cursor.setPosition(to_qt_offset(text, end), QTextCursor.MoveMode.KeepAnchor)
        if isinstance(attribute, Hidden):
            if attribute.value:
                cursor.mergeCharFormat(_hidden_format())
            else:
                self._reveal(cursor.selectionStart(), cursor.selectionEnd())
        elif isinstance(attribute, HighlightColor):
            fmt = QTextCharFormat()
            fmt.setBackground(to_qcolor(attribute.color))
            cursor.mergeCharFormat(fmt)
        else:
            raise TypeError(f"Unsupported range attribute: {attribute!r}")

    # ------------------------------------------------------------------
    # Inspection helpers
    # ------------------------------------------------------------------
    def select(self, start: int, end: int | None = None) -> None:
        text = self.toPlainText()
        cursor = self.textCursor()
        cursor.setPosition(to_qt_offset(text, start))
        if end is not None:
            cursor.setPosition(to_qt_offset(text, end), QTextCursor.MoveMode.KeepAnchor)
        self.setTextCursor(cursor)

    def char_format_at(self, offset: int) -> QTextCharFormat:
        """Return the format of the character starting at ``offset``."""

        text = self.toPlainText()
        cursor = QTextCursor(self.document())
        cursor.setPosition(to_qt_offset(text, offset) + 1)
        return cursor.charFormat()

    def is_hidden_at(self, offset: int) -> bool:
        return bool(self.char_format_at(offset).property(HIDDEN_PROPERTY))

    def highlight_at(self, offset: int) -> QColor:
        return self.char_format_at(offset).background().color()

    def _reveal(self, start: int, end: int) -> None:
        # mergeCharFormat cannot drop properties, so each character is rewritten.
        cursor = QTextCursor(self.document())
        for position in range(start, end):
            cursor.setPosition(position)
            cursor.setPosition(position + 1, QTextCursor.MoveMode.KeepAnchor)
            fmt = cursor.charFormat()
            if fmt.property(HIDDEN_PROPERTY):
                _clear_hidden(fmt)
                cursor.setCharFormat(fmt)

    # Qt callbacks -----------------------------------------------------
    def focusOutEvent(self, event: QFocusEvent) -> None:  # noqa: N802 - Qt override
        super().focusOutEvent(event)
        self.focusLost.emit()


__all__ = ["HIDDEN_PROPERTY", "TagTextEdit", "from_qt_offset", "to_qcolor", "to_qt_offset"]
