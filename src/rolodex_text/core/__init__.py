"""Core section extraction and spreadsheet automation logic."""

from rolodex_text.core.extractor import extract_section
from rolodex_text.core.sections import DEFAULT_SECTIONS, SectionSpec, load_sections
from rolodex_text.core.events import EditDispatcher, EditEvent
from rolodex_text.core.filler import (
    FillResult,
    FillStatus,
    SectionFiller,
    extract_sections,
)

__all__ = [
    "extract_section",
    "DEFAULT_SECTIONS",
    "SectionSpec",
    "load_sections",
    "EditDispatcher",
    "EditEvent",
    "FillResult",
    "FillStatus",
    "SectionFiller",
    "extract_sections",
]
