"""Tag operations bound to a live editor."""

from __future__ import annotations

import logging
from typing import Any

from ..core.colors import Color
from ..editor.overlay import Hidden, HighlightColor, OverlayAdapter
from ..editor.surface import EditorSurface
from ..events import EventBus, TagAdded, TagHighlightChanged, TagRemoved, TagVisibilityChanged
from . import operations
from .operations import TagDetail

LOGGER = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT = Color.named("yellow")


class MetaTagManager:
    """Insert, remove, hide, highlight and inspect metatags in an editor.

    The manager holds no document state. Each call reads a fresh snapshot
    from the editor, locates the first matching tag, and either replaces the
    buffer in one step or sends a single range-attribute request. Calls are
    synchronous and must not be issued concurrently against one editor.
    """

    def __init__(self, editor: EditorSurface, *, event_bus: EventBus[Any] | None = None) -> None:
        self._editor = editor
        self._bus = event_bus
        self._overlay = OverlayAdapter(editor.set_range_attribute)

    @property
    def editor(self) -> EditorSurface:
        return self._editor

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------
    def add_tag(self, name: str) -> None:
        """Wrap the selection in ``<name>…</name>`` or insert ``<name/>`` at the caret.

        Raises:
            InvalidTagNameError: ``name`` is empty, blank or malformed.
            TagConflictError: the selection already contains the tag.
        """

        selection = self._editor.get_selection()
        markup = operations.add_tag(selection.text, name)
        self._editor.set_selection_text(markup)
        is_self_closing = not selection.text.rstrip("\0")
        LOGGER.debug("add_tag: inserted '%s' (self_closing=%s)", name, is_self_closing)
        self._publish(TagAdded(name=name, is_self_closing=is_self_closing))

    def remove_tag(self, name: str) -> bool:
        """Remove the first ``name`` tag, keeping its inner content."""

        result = operations.remove_tag(self._editor.get_text(), name)
        if not result.removed or result.span is None:
            return False
        self._editor.set_text(result.text)
        self._publish(TagRemoved(name=name, start=result.span.start, end=result.span.end))
        return True

    def hide_tag(self, name: str, is_hidden: bool) -> bool:
        """Hide (or show) the whole first ``name`` tag, delimiters included."""

        text = self._editor.get_text()
        span = operations.apply_to_first_tag(text, name, Hidden(is_hidden), self._overlay)
        if span is None:
            return False
        self._publish(TagVisibilityChanged(name=name, start=span.start, end=span.end, hidden=is_hidden))
        return True

    def hilite_tag(self, name: str, is_hilited: bool, color: Color | str | None = None) -> bool:
        """Highlight the whole first ``name`` tag, or clear its highlight."""

        resolved = Color.coerce(color) if color is not None else DEFAULT_HIGHLIGHT
        applied = resolved if is_hilited else None
        text = self._editor.get_text()
        span = operations.apply_to_first_tag(text, name, HighlightColor(applied), self._overlay)
        if span is None:
            return False
        self._publish(TagHighlightChanged(name=name, start=span.start, end=span.end, color=applied))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_tag_names(self) -> list[str]:
        return operations.list_tag_names(self._editor.get_text())

    def list_tag_details(self) -> list[TagDetail]:
        return operations.list_tag_details(self._editor.get_text())

    def is_tag_present(self, name: str) -> bool:
        return operations.is_tag_present(self._editor.get_text(), name)

    def get_tag_content(self, name: str) -> str:
        return operations.get_tag_content(self._editor.get_text(), name)

    def _publish(self, event: Any) -> None:
        if self._bus is not None:
            self._bus.publish(event)


__all__ = ["DEFAULT_HIGHLIGHT", "MetaTagManager"]
