"""Error types raised by tag insertion.

Lookup-style operations (remove, hide, highlight, content) never raise for a
missing tag; they report ``False`` or an empty result instead. Only
insertion fails loudly, since proceeding would corrupt the markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


class ErrorCode:
    """Constants for machine-readable error codes."""

    INVALID_TAG_NAME = "invalid_tag_name"
    TAG_CONFLICT = "tag_conflict"


@dataclass
class TagError(Exception):
    """Base exception class for tag engine errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    severity: ClassVar[str] = "error"

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


@dataclass
class InvalidTagNameError(TagError, ValueError):
    """Raised when a tag name is empty, blank or not a ``[A-Za-z0-9_-]`` token."""

    error_code: str = field(default=ErrorCode.INVALID_TAG_NAME)
    message: str = field(default="Metatag name must be provided.")
    details: dict[str, Any] = field(default_factory=dict)

    name: str | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.name is not None:
            result["name"] = self.name
        return result


@dataclass
class TagConflictError(TagError):
    """Raised when the text to wrap already contains the same tag."""

    error_code: str = field(default=ErrorCode.TAG_CONFLICT)
    message: str = field(default="Selected text already contains the same metatag.")
    details: dict[str, Any] = field(default_factory=dict)

    name: str | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.name is not None:
            result["name"] = self.name
        return result


__all__ = ["ErrorCode", "InvalidTagNameError", "TagConflictError", "TagError"]
