"""Pure text transforms built on the tag scanner.

Every function takes a full buffer snapshot and returns a derived value or
a replacement buffer. None of them keep state between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.colors import Color
from ..editor.overlay import (
    Hidden,
    HighlightColor,
    OverlayAdapter,
    RangeAttribute,
    RangeAttributeSink,
)
from .errors import InvalidTagNameError, TagConflictError
from .scanner import (
    TagKind,
    TagSpan,
    close_tag,
    contains_tag,
    find_first_tag,
    is_valid_tag_name,
    iter_tag_tokens,
    list_tags,
    open_tag,
    self_closing_tag,
    strip_markup,
)

__all__ = [
    "RemoveResult",
    "TagDetail",
    "add_tag",
    "apply_to_first_tag",
    "get_tag_content",
    "hide_tag",
    "hilite_tag",
    "is_tag_present",
    "list_tag_details",
    "list_tag_names",
    "remove_tag",
    "validate_tag_name",
]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RemoveResult:
    """Outcome of :func:`remove_tag`."""

    text: str
    removed: bool
    span: TagSpan | None = None


@dataclass(slots=True, frozen=True)
class TagDetail:
    """A tag occurrence as listed to the user.

    ``is_encapsulating`` is ``True`` for ``<name>`` openers and ``False`` for
    ``<name/>`` tokens. Close tokens are not reported.
    """

    name: str
    is_encapsulating: bool
    offset: int

    def describe(self) -> str:
        return f"{self.name} ({'encapsulating' if self.is_encapsulating else 'closed'})"


def validate_tag_name(name: str | None) -> str:
    """Return ``name`` unchanged or raise :class:`InvalidTagNameError`."""

    if name is None or not name.strip():
        raise InvalidTagNameError(name=name)
    if not is_valid_tag_name(name):
        raise InvalidTagNameError(
            message=f"Metatag name '{name}' may only contain letters, digits, '_' and '-'.",
            name=name,
        )
    return name


def add_tag(selection_text: str, name: str) -> str:
    """Return the markup that replaces ``selection_text`` when tagging it.

    An empty selection yields a self-closing ``<name/>`` token; otherwise the
    selection is wrapped as ``<name>selection</name>``.
    """

    validate_tag_name(name)
    trimmed = selection_text.rstrip("\0") if selection_text else ""
    if not trimmed:
        return self_closing_tag(name)
    if contains_tag(trimmed, name):
        raise TagConflictError(name=name, details={"selection_length": len(trimmed)})
    return f"{open_tag(name)}{trimmed}{close_tag(name)}"


def remove_tag(text: str, name: str) -> RemoveResult:
    """Remove the first occurrence of ``name``, keeping any wrapped content."""

    span = find_first_tag(text, name)
    if span is None:
        LOGGER.debug("remove_tag: no '%s' tag found", name)
        return RemoveResult(text=text, removed=False)
    inner = "" if span.is_self_closing else span.content_range.slice(text)
    updated = text[: span.start] + inner + text[span.end :]
    return RemoveResult(text=updated, removed=True, span=span)


def apply_to_first_tag(
    text: str, name: str, attribute: RangeAttribute, adapter: OverlayAdapter
) -> TagSpan | None:
    """Send ``attribute`` over the whole first occurrence of ``name``.

    The range covers the delimiters and the content together, for both
    self-closing and paired tags. Returns the located span, or ``None``.
    """

    span = find_first_tag(text, name)
    if span is None:
        LOGGER.debug("apply_to_first_tag: no '%s' tag found", name)
        return None
    adapter.apply(span.range, attribute, buffer_length=len(text))
    return span


def hide_tag(text: str, name: str, is_hidden: bool, sink: RangeAttributeSink) -> bool:
    """Hide or reveal the first occurrence of ``name``."""

    return apply_to_first_tag(text, name, Hidden(is_hidden), OverlayAdapter(sink)) is not None


def hilite_tag(
    text: str, name: str, is_hilited: bool, color: Color | None, sink: RangeAttributeSink
) -> bool:
    """Highlight the first occurrence of ``name``, or clear its highlight."""

    attribute = HighlightColor(color if is_hilited else None)
    return apply_to_first_tag(text, name, attribute, OverlayAdapter(sink)) is not None


def list_tag_names(text: str) -> list[str]:
    return list_tags(text)


def list_tag_details(text: str) -> list[TagDetail]:
    """Describe each self-closing and opening tag, in order of appearance."""

    details: list[TagDetail] = []
    for token in iter_tag_tokens(text):
        if token.kind is TagKind.CLOSE:
            continue
        details.append(
            TagDetail(
                name=token.name,
                is_encapsulating=token.kind is TagKind.OPEN,
                offset=token.offset,
            )
        )
    return details


def is_tag_present(text: str, name: str) -> bool:
    """Return ``True`` if ``text`` holds ``<name>`` or ``<name/>``.

    A lone ``</name>`` does not count, unlike :func:`contains_tag`.
    """

    return open_tag(name) in text or self_closing_tag(name) in text


def get_tag_content(text: str, name: str) -> str:
    """Return the first pair's inner text with all nested markup stripped."""

    span = find_first_tag(text, name)
    if span is None or span.is_self_closing:
        return ""
    return strip_markup(span.content_range.slice(text))
