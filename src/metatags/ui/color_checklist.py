"""Model behind the colour-selector checklist widget."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from ..core.colors import Color
from ..events import ColorToggled, EventBus

__all__ = ["ColorChecklist", "ColorEntry", "next_palette_color"]

LOGGER = logging.getLogger(__name__)

ChangeListener = Callable[[Color, bool], None]


def next_palette_color(count: int) -> Color:
    """Return a deterministic new colour for the ``count``-th checkbox."""

    return Color(
        (60 * count + 40) % 256,
        (110 * count + 90) % 256,
        (170 * count + 140) % 256,
    )


@dataclass(slots=True)
class ColorEntry:
    color: Color
    checked: bool = False


class ColorChecklist:
    """Ordered set of colours, each with a checked flag.

    Listeners fire only when a user-level change flips a flag; rebuilding the
    list with :meth:`init` or :meth:`update` is silent.
    """

    def __init__(self, *, event_bus: EventBus[Any] | None = None) -> None:
        self._entries: list[ColorEntry] = []
        self._listeners: list[ChangeListener] = []
        self._bus = event_bus

    def __len__(self) -> int:
        return len(self._entries)

    def init(self, colors: Sequence[Color] | None, is_checked: Sequence[bool] | None) -> None:
        """Replace all checkboxes with ``colors`` and their checked states."""

        if colors is None:
            raise TypeError("colors is required")
        if is_checked is None:
            raise TypeError("is_checked is required")
        if len(colors) != len(is_checked):
            raise ValueError("Colors and isChecked must have the same length.")
        self._entries = [ColorEntry(Color.coerce(color), bool(flag)) for color, flag in zip(colors, is_checked)]
        LOGGER.debug("ColorChecklist.init: %d colours", len(self._entries))

    def update(self, colors: Sequence[Color] | None, is_checked: Sequence[bool] | None) -> None:
        self.init(colors, is_checked)

    def entries(self) -> tuple[ColorEntry, ...]:
        return tuple(ColorEntry(entry.color, entry.checked) for entry in self._entries)

    def get_checked_colors(self) -> list[Color]:
        return [entry.color for entry in self._entries if entry.checked]

    def get_current_state(self) -> tuple[list[Color], list[bool]]:
        """Return fresh ``(colors, checked)`` lists safe for the caller to mutate."""

        return [entry.color for entry in self._entries], [entry.checked for entry in self._entries]

    def set_checked(self, index: int, checked: bool) -> bool:
        """Set one checkbox; return ``True`` and notify when the flag changed."""

        entry = self._entries[index]
        checked = bool(checked)
        if entry.checked == checked:
            return False
        entry.checked = checked
        self._notify(index, entry)
        return True

    def toggle(self, index: int) -> bool:
        entry = self._entries[index]
        self.set_checked(index, not entry.checked)
        return entry.checked

    def add_color(self, color: Color | None = None, *, checked: bool = False) -> Color:
        """Append a checkbox; without ``color`` the next palette colour is used."""

        colors, flags = self.get_current_state()
        resolved = color if color is not None else next_palette_color(len(colors))
        colors.append(resolved)
        flags.append(checked)
        self.update(colors, flags)
        return resolved

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, index: int, entry: ColorEntry) -> None:
        for listener in list(self._listeners):
            listener(entry.color, entry.checked)
        if self._bus is not None:
            self._bus.publish(ColorToggled(index=index, color=entry.color, checked=entry.checked))
