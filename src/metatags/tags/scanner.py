"""Literal-markup scanner for named inline metatags.

The scanner works on plain substring searches rather than a real markup
tokenizer. ``find_first_tag`` pairs an open tag with the *nearest* following
close tag, so a same-named tag nested inside another is paired with the
inner close. Callers rely on this first-match behaviour.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterator

from ..core.ranges import TextRange

__all__ = [
    "TAG_NAME_PATTERN",
    "TagKind",
    "TagSpan",
    "TagToken",
    "close_tag",
    "contains_tag",
    "find_first_tag",
    "is_valid_tag_name",
    "iter_tag_tokens",
    "list_tags",
    "open_tag",
    "self_closing_tag",
    "strip_markup",
]

TAG_NAME_PATTERN = r"[A-Za-z0-9_\-]+"
_TOKEN_RE = re.compile(rf"<(/?)({TAG_NAME_PATTERN})(/?)>")
_NAME_RE = re.compile(rf"{TAG_NAME_PATTERN}\Z")
_MARKUP_RE = re.compile(r"<[^>]+>")


class TagKind(enum.Enum):
    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self_closing"


@dataclass(slots=True, frozen=True)
class TagToken:
    """Single lexical occurrence of ``<name>``, ``</name>`` or ``<name/>``."""

    name: str
    kind: TagKind
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(slots=True, frozen=True)
class TagSpan:
    """Complete occurrence of a named tag located in a buffer.

    ``end`` is exclusive and points just past ``</name>`` (pairs) or
    ``<name/>`` (self-closing tags), so ``text[start:end]`` reproduces the
    matched markup exactly.
    """

    name: str
    start: int
    end: int
    is_self_closing: bool

    @property
    def range(self) -> TextRange:
        return TextRange(self.start, self.end)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def content_range(self) -> TextRange:
        """Offsets strictly between the open and close delimiters.

        Self-closing spans have no content and collapse to a caret at
        ``end``.
        """

        if self.is_self_closing:
            return TextRange(self.end, self.end)
        return TextRange(self.start + len(open_tag(self.name)), self.end - len(close_tag(self.name)))


def open_tag(name: str) -> str:
    return f"<{name}>"


def close_tag(name: str) -> str:
    return f"</{name}>"


def self_closing_tag(name: str) -> str:
    return f"<{name}/>"


def is_valid_tag_name(name: str) -> bool:
    """Return ``True`` when ``name`` is a non-empty ``[A-Za-z0-9_-]`` token."""

    return bool(name) and _NAME_RE.match(name) is not None


def find_first_tag(text: str, name: str) -> TagSpan | None:
    """Locate the earliest complete occurrence of tag ``name`` in ``text``.

    A self-closing ``<name/>`` wins when it starts strictly before the first
    ``<name>``. Otherwise the first ``<name>`` is paired with the first
    ``</name>`` found after it. Returns ``None`` when neither form resolves.
    """

    self_token = self_closing_tag(name)
    start_token = open_tag(name)
    end_token = close_tag(name)

    self_index = text.find(self_token)
    open_index = text.find(start_token)

    if self_index >= 0 and (open_index < 0 or self_index < open_index):
        return TagSpan(name, self_index, self_index + len(self_token), True)

    if open_index >= 0:
        close_index = text.find(end_token, open_index + len(start_token))
        if close_index >= 0:
            return TagSpan(name, open_index, close_index + len(end_token), False)

    return None


def contains_tag(fragment: str, name: str) -> bool:
    """Return ``True`` when ``fragment`` mentions any delimiter of ``name``."""

    return (
        open_tag(name) in fragment
        or self_closing_tag(name) in fragment
        or close_tag(name) in fragment
    )


def iter_tag_tokens(text: str) -> Iterator[TagToken]:
    """Yield every tag token in ``text`` from left to right."""

    for match in _TOKEN_RE.finditer(text):
        leading_slash, name, trailing_slash = match.groups()
        if leading_slash:
            kind = TagKind.CLOSE
        elif trailing_slash:
            kind = TagKind.SELF_CLOSING
        else:
            kind = TagKind.OPEN
        # "</name/>" is matched by the pattern too; it counts as a close.
        yield TagToken(name=name, kind=kind, offset=match.start(), length=match.end() - match.start())


def list_tags(text: str) -> list[str]:
    """Return the name of every tag token in order of appearance."""

    return [token.name for token in iter_tag_tokens(text)]


def strip_markup(fragment: str) -> str:
    """Remove every ``<...>`` token from ``fragment``."""

    return _MARKUP_RE.sub("", fragment)
