"""Headless editor keeping the buffer, selection and overlay in memory.

It implements :class:`~metatags.editor.surface.EditorSurface` without any
GUI toolkit, which makes it the editor used by tests and scripted callers.
"""

from __future__ import annotations

import logging
from typing import Callable

from .document_model import DocumentState, SelectionRange
from .overlay import AttributeOverlay, RangeAttribute
from .surface import SelectionSnapshot

LOGGER = logging.getLogger(__name__)

TextChangeListener = Callable[[str, DocumentState], None]


class MemoryEditor:
    """In-memory text buffer with a selection and an attribute overlay.

    Replacing the whole buffer with :meth:`set_text` drops the overlay, as
    rich-text controls reset formatting when their content is replaced.
    """

    def __init__(self, text: str = "") -> None:
        self._state = DocumentState(text=text)
        self._overlay = AttributeOverlay()
        self._text_listeners: list[TextChangeListener] = []

    # ------------------------------------------------------------------
    # EditorSurface
    # ------------------------------------------------------------------
    def get_text(self) -> str:
        return self._state.text.rstrip("\0")

    def set_text(self, text: str) -> None:
        if text == self._state.text:
            return
        self._state.update_text(text)
        self._overlay.clear()
        caret = min(self._state.selection.end, len(text))
        self._state.selection = SelectionRange(caret, caret)
        self._emit_text_changed()

    def get_selection(self) -> SelectionSnapshot:
        start, end = self._state.selection.as_tuple()
        return SelectionSnapshot(text=self._state.text[start:end], start=start, end=end)

    def set_selection_text(self, text: str) -> None:
        """Replace the selection with ``text`` and select the inserted text."""

        start, end = self._state.selection.as_tuple()
        current = self._state.text
        self._state.update_text(current[:start] + text + current[end:])
        self._state.selection = SelectionRange(start, start + len(text))
        self._emit_text_changed()

    def set_range_attribute(self, start: int, end: int, attribute: RangeAttribute) -> None:
        self._overlay.apply(start, end, attribute)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def select(self, start: int, end: int | None = None) -> None:
        """Select ``[start, end)``; ``end`` defaults to a caret at ``start``."""

        length = len(self._state.text)
        begin = max(0, min(int(start), length))
        finish = begin if end is None else max(0, min(int(end), length))
        if finish < begin:
            begin, finish = finish, begin
        self._state.selection = SelectionRange(begin, finish)

    def selection_range(self) -> SelectionRange:
        selection = self._state.selection
        return SelectionRange(selection.start, selection.end)

    @property
    def overlay(self) -> AttributeOverlay:
        return self._overlay

    @property
    def document(self) -> DocumentState:
        return self._state

    def add_text_listener(self, listener: TextChangeListener) -> None:
        self._text_listeners.append(listener)

    def remove_text_listener(self, listener: TextChangeListener) -> None:
        if listener in self._text_listeners:
            self._text_listeners.remove(listener)

    def _emit_text_changed(self) -> None:
        for listener in list(self._text_listeners):
            listener(self._state.text, self._state)


__all__ = ["MemoryEditor", "TextChangeListener"]
