"""Core domain types shared by the tag engine and the editor layer."""

from .colors import Color
from .ranges import TextRange

__all__ = ["Color", "TextRange"]
