"""Named inline metatag editing toolkit."""

from .tags import (
    InvalidTagNameError,
    MetaTagManager,
    TagConflictError,
    TagDetail,
    TagError,
    TagKind,
    TagSpan,
    TagToken,
)

__all__ = [
    "InvalidTagNameError",
    "MetaTagManager",
    "TagConflictError",
    "TagDetail",
    "TagError",
    "TagKind",
    "TagSpan",
    "TagToken",
]

__version__ = "0.1.0"
