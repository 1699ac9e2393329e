"""ARGB colour value type shared by highlighting and the colour checklist."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

__all__ = ["Color"]


@dataclass(slots=True, frozen=True)
class Color:
    """An 8-bit-per-channel colour with alpha."""

    r: int
    g: int
    b: int
    a: int = 255

    NAMED: ClassVar[Mapping[str, tuple[int, int, int, int]]] = {
        "transparent": (0, 0, 0, 0),
        "black": (0, 0, 0, 255),
        "white": (255, 255, 255, 255),
        "red": (255, 0, 0, 255),
        "green": (0, 128, 0, 255),
        "blue": (0, 0, 255, 255),
        "yellow": (255, 255, 0, 255),
        "goldenrod": (218, 165, 32, 255),
    }

    def __post_init__(self) -> None:
        for label in ("r", "g", "b", "a"):
            value = getattr(self, label)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"Color channel {label} must be an integer in [0, 255]")

    @property
    def is_transparent(self) -> bool:
        return self.a == 0

    def to_hex(self) -> str:
        """Return the colour as ``#AARRGGBB``."""

        return f"#{self.a:02X}{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_rgba(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB`` or ``#AARRGGBB`` (leading ``#`` optional)."""

        digits = value.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Unsupported colour literal: {value!r}")
        try:
            channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as exc:
            raise ValueError(f"Unsupported colour literal: {value!r}") from exc
        if len(channels) == 3:
            r, g, b = channels
            return cls(r, g, b)
        a, r, g, b = channels
        return cls(r, g, b, a)

    @classmethod
    def named(cls, name: str) -> Color:
        try:
            r, g, b, a = cls.NAMED[name.strip().lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown colour name: {name!r}") from exc
        return cls(r, g, b, a)

    @classmethod
    def coerce(cls, value: Any) -> Color:
        """Coerce a :class:`Color`, hex literal, colour name or RGB(A) tuple."""

        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            if value.strip().startswith("#"):
                return cls.from_hex(value)
            return cls.named(value)
        if isinstance(value, (tuple, list)) and len(value) in (3, 4):
            return cls(*(int(channel) for channel in value))
        raise TypeError(f"Cannot interpret {value!r} as a colour")
