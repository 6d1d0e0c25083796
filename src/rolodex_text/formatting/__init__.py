"""Formatting utilities for styled text."""

from rolodex_text.formatting.ir import (
    PLAIN,
    RunStyle,
    Segment,
    StyleRun,
    StyledText,
    TextStyle,
)
from rolodex_text.formatting.parser import MarkdownParser

__all__ = [
    "PLAIN",
    "RunStyle",
    "Segment",
    "StyleRun",
    "StyledText",
    "TextStyle",
    "MarkdownParser",
]
