"""Protocol describing the editor the tag engine operates on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .overlay import RangeAttribute


@dataclass(slots=True, frozen=True)
class SelectionSnapshot:
    """Read-only view of the active editor selection."""

    text: str
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return not self.text


class EditorSurface(Protocol):
    """Operations an editor must expose to :class:`~metatags.tags.manager.MetaTagManager`.

    ``get_text`` returns the buffer with any trailing NUL padding removed.
    ``set_selection_text`` replaces the current selection, or inserts at the
    caret when nothing is selected, and leaves the inserted text selected.
    """

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def get_selection(self) -> SelectionSnapshot:
        ...

    def set_selection_text(self, text: str) -> None:
        ...

    def set_range_attribute(self, start: int, end: int, attribute: RangeAttribute) -> None:
        ...


__all__ = ["EditorSurface", "SelectionSnapshot"]
