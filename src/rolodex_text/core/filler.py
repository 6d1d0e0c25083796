"""Fill template cells with sections copied from a rolodex entry."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from rolodex_text.core.events import EditEvent
from rolodex_text.core.extractor import extract_section
from rolodex_text.core.sections import DEFAULT_SECTIONS, SectionSpec
from rolodex_text.formats.base import RolodexSource, SectionResult, SectionSink
from rolodex_text.formatting.ir import StyledText
from rolodex_text.logging import get_logger

logger = get_logger(__name__)


def extract_sections(
    styled: StyledText,
    sections: Sequence[SectionSpec] = DEFAULT_SECTIONS,
) -> list[SectionResult]:
    """Run the extractor for every section, in table order."""
    results: list[SectionResult] = []
    for spec in sections:
        logger.debug("Processing section: %s", spec.name)
        results.append((spec, extract_section(styled, spec.start, spec.stop)))
    return results


class FillStatus(Enum):
    """Outcome of a fill run."""

    FILLED = "filled"
    NO_TERM = "no_term"
    NOT_FOUND = "not_found"
    EMPTY_ENTRY = "empty_entry"
    CLEARED = "cleared"


@dataclass
class FillResult:
    """Summary of a fill run.

    Attributes:
        term: The lookup term as given
        status: Overall outcome
        row: Rolodex row the term was found in (if any)
        filled: Names of sections written to the template
        cleared: Names of sections whose target was cleared
    """

    term: str
    status: FillStatus
    row: Optional[int] = None
    filled: list[str] = field(default_factory=list)
    cleared: list[str] = field(default_factory=list)

    @property
    def filled_count(self) -> int:
        return len(self.filled)


class SectionFiller:
    """Copies every configured section of a rolodex entry into the template.

    For each section the extractor runs once against the entry's styled
    text; a found section is written to its target cell and a missing
    one clears it, so stale content from a previous entry never lingers.
    """

    def __init__(
        self,
        source: RolodexSource,
        sink: SectionSink,
        sections: Sequence[SectionSpec] = DEFAULT_SECTIONS,
    ) -> None:
        self.source = source
        self.sink = sink
        self.sections = tuple(sections)

    def extract_all(self, styled: StyledText) -> list[SectionResult]:
        """Run the extractor for every configured section."""
        return extract_sections(styled, self.sections)

    def clear_all(self, term: str = "") -> FillResult:
        """Clear every section target."""
        for spec in self.sections:
            self.sink.clear(spec.target)
        return FillResult(
            term=term,
            status=FillStatus.CLEARED,
            cleared=[spec.name for spec in self.sections],
        )

    def fill(self, term: str) -> FillResult:
        """Look up ``term`` and write its sections to the template.

        Args:
            term: The rolodex key to look up

        Returns:
            FillResult describing what was written and cleared
        """
        term = (term or "").strip()
        if not term:
            logger.info("No lookup term given, nothing to fill")
            return FillResult(term=term, status=FillStatus.NO_TERM)

        logger.info('Looking for "%s"', term)
        row = self.source.find_row(term)
        if row is None:
            logger.warning('"%s" not found in rolodex, clearing targets', term)
            result = self.clear_all(term)
            result.status = FillStatus.NOT_FOUND
            return result
        logger.info('Found "%s" at row %d', term, row)

        styled = self.source.read_styled(row)
        if styled is None or not styled.text.strip():
            logger.warning('No text found for "%s", clearing targets', term)
            result = self.clear_all(term)
            result.status = FillStatus.EMPTY_ENTRY
            result.row = row
            return result

        result = FillResult(term=term, status=FillStatus.FILLED, row=row)
        for spec, section in self.extract_all(styled):
            if section is not None:
                self.sink.write(spec.target, section)
                result.filled.append(spec.name)
                logger.info("Populated %s with section %s", spec.target, spec.name)
            else:
                self.sink.clear(spec.target)
                result.cleared.append(spec.name)
                logger.info(
                    "No content for section %s, cleared %s", spec.name, spec.target
                )

        return result

    def on_edit(
        self,
        event: EditEvent,
        sheet: str,
        key_cell: str,
    ) -> Optional[FillResult]:
        """React to an edit of the template's key cell.

        A new key fills the template; clearing the key clears every
        section. Edits anywhere else are ignored.
        """
        if event.sheet != sheet or event.cell != key_cell.upper():
            return None

        if event.is_cleared:
            logger.info("Key cleared from %s, clearing sections", key_cell)
            return self.clear_all()

        logger.info("Key changed in %s, filling sections", key_cell)
        return self.fill(event.value or "")
