"""Metatag scanning and tag-lifecycle operations."""

from .errors import ErrorCode, InvalidTagNameError, TagConflictError, TagError
from .manager import MetaTagManager
from .operations import RemoveResult, TagDetail
from .scanner import TagKind, TagSpan, TagToken, contains_tag, find_first_tag, list_tags

__all__ = [
    "ErrorCode",
    "InvalidTagNameError",
    "MetaTagManager",
    "RemoveResult",
    "TagConflictError",
    "TagDetail",
    "TagError",
    "TagKind",
    "TagSpan",
    "TagToken",
    "contains_tag",
    "find_first_tag",
    "list_tags",
]
