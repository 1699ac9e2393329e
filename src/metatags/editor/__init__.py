"""Editor-side collaborators: buffer surfaces and the attribute overlay."""

from .document_model import DocumentState, SelectionRange
from .memory_editor import MemoryEditor
from .overlay import (
    AttributeKind,
    AttributeOverlay,
    Hidden,
    HighlightColor,
    OverlayAdapter,
    RangeAttribute,
)
from .surface import EditorSurface, SelectionSnapshot

__all__ = [
    "AttributeKind",
    "AttributeOverlay",
    "DocumentState",
    "EditorSurface",
    "Hidden",
    "HighlightColor",
    "MemoryEditor",
    "OverlayAdapter",
    "RangeAttribute",
    "SelectionRange",
    "SelectionSnapshot",
]
