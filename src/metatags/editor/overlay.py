"""Range-attribute overlay types and the adapter that forwards them.

The overlay (which ranges are hidden or highlighted) belongs to the editor.
The tag engine only issues requests through :class:`OverlayAdapter`, which
clamps them to the buffer and forwards them to the editor's formatting
call. :class:`AttributeOverlay` is the in-memory store used by the headless
editor.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Union

from ..core.colors import Color
from ..core.ranges import TextRange

LOGGER = logging.getLogger(__name__)


class AttributeKind(enum.Enum):
    HIDDEN = "hidden"
    HIGHLIGHT = "highlight"


@dataclass(slots=True, frozen=True)
class Hidden:
    """Hide (``True``) or reveal (``False``) the characters of a range."""

    value: bool

    @property
    def kind(self) -> AttributeKind:
        return AttributeKind.HIDDEN


@dataclass(slots=True, frozen=True)
class HighlightColor:
    """Paint a range's background; ``None`` clears the highlight."""

    color: Color | None

    @property
    def kind(self) -> AttributeKind:
        return AttributeKind.HIGHLIGHT


RangeAttribute = Union[Hidden, HighlightColor]
RangeAttributeSink = Callable[[int, int, RangeAttribute], None]


class OverlayAdapter:
    """Translate ``(start, end, attribute)`` requests into editor calls."""

    def __init__(self, sink: RangeAttributeSink) -> None:
        self._sink = sink

    def apply(self, span: TextRange, attribute: RangeAttribute, *, buffer_length: int) -> TextRange | None:
        """Forward ``attribute`` for ``span`` after clamping to the buffer.

        Returns the range actually sent to the editor, or ``None`` when the
        clamped range is empty and nothing was sent.
        """

        clamped = span.clamp(upper=buffer_length)
        if clamped != span:
            LOGGER.warning(
                "OverlayAdapter.apply: clamped %s to %s (buffer length %d)",
                span.to_tuple(),
                clamped.to_tuple(),
                buffer_length,
            )
        if clamped.is_caret:
            LOGGER.debug("OverlayAdapter.apply: empty range, skipping %s", attribute)
            return None
        self._sink(clamped.start, clamped.end, attribute)
        LOGGER.debug(
            "OverlayAdapter.apply: %s over [%d, %d)", attribute, clamped.start, clamped.end
        )
        return clamped


@dataclass(slots=True, frozen=True)
class AttributeRun:
    start: int
    end: int
    value: object


class AttributeOverlay:
    """Non-overlapping attribute runs per :class:`AttributeKind`.

    Applying a value to a range overwrites whatever that range held before.
    ``Hidden(False)`` and ``HighlightColor(None)`` erase the range.
    """

    def __init__(self) -> None:
        self._runs: dict[AttributeKind, list[AttributeRun]] = {kind: [] for kind in AttributeKind}

    def apply(self, start: int, end: int, attribute: RangeAttribute) -> None:
        if isinstance(attribute, Hidden):
            value: object | None = True if attribute.value else None
        else:
            value = attribute.color
        self._runs[attribute.kind] = _assign(self._runs[attribute.kind], start, end, value)

    def runs(self, kind: AttributeKind) -> tuple[AttributeRun, ...]:
        return tuple(self._runs[kind])

    def hidden_ranges(self) -> tuple[tuple[int, int], ...]:
        return tuple((run.start, run.end) for run in self._runs[AttributeKind.HIDDEN])

    def highlight_ranges(self) -> tuple[tuple[int, int, Color], ...]:
        return tuple(
            (run.start, run.end, run.value)  # type: ignore[misc]
            for run in self._runs[AttributeKind.HIGHLIGHT]
        )

    def is_hidden(self, offset: int) -> bool:
        return self._value_at(AttributeKind.HIDDEN, offset) is not None

    def highlight_at(self, offset: int) -> Color | None:
        value = self._value_at(AttributeKind.HIGHLIGHT, offset)
        return value if isinstance(value, Color) else None

    def visible_text(self, text: str) -> str:
        """Return ``text`` with hidden ranges removed."""

        pieces: list[str] = []
        cursor = 0
        for start, end in self.hidden_ranges():
            pieces.append(text[cursor:start])
            cursor = max(cursor, end)
        pieces.append(text[cursor:])
        return "".join(pieces)

    def clear(self) -> None:
        for kind in AttributeKind:
            self._runs[kind] = []

    def _value_at(self, kind: AttributeKind, offset: int) -> object | None:
        for run in self._runs[kind]:
            if run.start <= offset < run.end:
                return run.value
        return None


def _assign(runs: list[AttributeRun], start: int, end: int, value: object | None) -> list[AttributeRun]:
    updated: list[AttributeRun] = []
    for run in runs:
        if run.end <= start or run.start >= end:
            updated.append(run)
            continue
        if run.start < start:
            updated.append(AttributeRun(run.start, start, run.value))
        if run.end > end:
            updated.append(AttributeRun(end, run.end, run.value))
    if value is not None and start < end:
        updated.append(AttributeRun(start, end, value))
    updated.sort(key=lambda run: run.start)

    merged: list[AttributeRun] = []
    for run in updated:
        if merged and merged[-1].end == run.start and merged[-1].value == run.value:
            merged[-1] = AttributeRun(merged[-1].start, run.end, run.value)
        else:
            merged.append(run)
    return merged


__all__ = [
    "AttributeKind",
    "AttributeOverlay",
    "AttributeRun",
    "Hidden",
    "HighlightColor",
    "OverlayAdapter",
    "RangeAttribute",
    "RangeAttributeSink",
]
