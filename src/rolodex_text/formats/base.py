"""Abstract base classes for lookup sources, placement sinks and reports."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from rolodex_text.formatting.ir import StyledText

if TYPE_CHECKING:
    from rolodex_text.core.sections import SectionSpec

SectionResult = tuple["SectionSpec", Optional[StyledText]]


class SheetNotFoundError(Exception):
    """A workbook does not contain the requested sheet."""

    pass


def normalize_key(value: object) -> str:
    """Normalize a lookup key for case-insensitive comparison."""
    if value is None:
        return ""
    return str(value).strip().upper()


class RolodexSource(ABC):
    """Lookup provider: styled text keyed by a search term."""

    @abstractmethod
    def find_row(self, term: str) -> Optional[int]:
        """Return the 1-based row holding ``term``, or None."""
        ...

    @abstractmethod
    def read_styled(self, row: int) -> Optional[StyledText]:
        """Return the styled text stored in ``row``, or None if empty."""
        ...

    def lookup(self, term: str) -> Optional[StyledText]:
        """Find ``term`` and return its styled text in one call."""
        row = self.find_row(term)
        if row is None:
            return None
        return self.read_styled(row)


class SectionSink(ABC):
    """Placement sink: cells that receive styled text."""

    @abstractmethod
    def value(self, cell: str) -> str:
        """Return the display value of ``cell`` ('' when empty)."""
        ...

    @abstractmethod
    def write(self, cell: str, styled: StyledText) -> None:
        """Write styled text into ``cell``."""
        ...

    @abstractmethod
    def write_value(self, cell: str, value: str) -> None:
        """Write a plain value into ``cell``."""
        ...

    @abstractmethod
    def clear(self, cell: str) -> None:
        """Clear the content of ``cell``."""
        ...


class ReportHandler(ABC):
    """Abstract base class for section report writers.

    Each handler renders the sections extracted from one rolodex
    entry into a standalone document.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.docx',))."""
        ...

    @abstractmethod
    def write(
        self,
        sections: Sequence[SectionResult],
        path: Path,
        title: str = "",
    ) -> None:
        """Write the extracted sections to a file.

        Args:
            sections: (SectionSpec, StyledText or None) pairs in order
            path: Path to write the output document
            title: Optional document title, usually the lookup term
        """
        ...
