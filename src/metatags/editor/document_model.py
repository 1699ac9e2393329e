"""Dataclasses representing editor document state."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class SelectionRange:
    """Represents the current selection inside the editor."""

    start: int = 0
    end: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(slots=True)
class DocumentState:
    """Buffer text and selection held by an editor."""

    text: str = ""
    selection: SelectionRange = field(default_factory=SelectionRange)
    version_id: int = 1

    def update_text(self, new_text: str) -> None:
        """Replace the text and bump the version."""

        self.text = new_text
        self.version_id += 1


__all__ = ["DocumentState", "SelectionRange"]
