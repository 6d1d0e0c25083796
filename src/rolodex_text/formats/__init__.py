"""Workbook adapters and section report writers for Rolodex Text."""

from rolodex_text.formats.base import (
    ReportHandler,
    RolodexSource,
    SectionSink,
    SheetNotFoundError,
)
from rolodex_text.formats.txt_handler import TXTHandler
from rolodex_text.formats.docx_handler import DOCXHandler

__all__ = [
    "ReportHandler",
    "RolodexSource",
    "SectionSink",
    "SheetNotFoundError",
    "TXTHandler",
    "DOCXHandler",
]

# Map file extensions to report handlers
HANDLER_MAP: dict[str, type[ReportHandler]] = {
    ".txt": TXTHandler,
    ".md": TXTHandler,
    ".docx": DOCXHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())


def get_handler(extension: str) -> type[ReportHandler]:
    """Get the appropriate report handler class for a file extension."""
    ext = extension.lower()
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported report format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
