"""Extraction of marked sections from styled text."""

import re
from typing import Optional, Union

from rolodex_text.formatting.ir import StyleRun, StyledText
from rolodex_text.logging import get_logger

logger = get_logger(__name__)

Pattern = Union[str, re.Pattern]

# A byte order mark pasted into a sheet is trimmed like whitespace
BOM = "\ufeff"


def _is_blank(char: str) -> bool:
    return char.isspace() or char == BOM


def _compile(pattern: Pattern) -> re.Pattern:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def extract_section(
    source: StyledText,
    start_pattern: Pattern,
    stop_pattern: Pattern,
) -> Optional[StyledText]:
    """Extract the styled text between two markers.

    The section begins right after the first match of ``start_pattern``
    in the whole text and ends right before the first match of
    ``stop_pattern`` in the text that follows it, or at the end of the
    text when the stop marker is missing. Whitespace at both ends of the
    section is trimmed. Style runs overlapping the section are clipped
    to it and shifted into its coordinates; styles and links are kept.

    Args:
        source: The styled text to search
        start_pattern: Regex for the marker that opens the section
        stop_pattern: Regex for the marker that closes the section

    Returns:
        A new StyledText for the section, or None when the start marker
        is missing or the section is empty after trimming
    """
    start_re = _compile(start_pattern)
    stop_re = _compile(stop_pattern)
    text = source.text

    logger.debug("Searching for start marker: %s", start_re.pattern)
    start_match = start_re.search(text)
    if not start_match:
        logger.debug("Start marker not found")
        return None

    start_idx = start_match.end()
    end_idx = len(text)

    logger.debug("Searching for stop marker: %s", stop_re.pattern)
    stop_match = stop_re.search(text[start_idx:])
    if stop_match:
        end_idx = start_idx + stop_match.start()
    else:
        logger.debug("Stop marker not found, section runs to end of text")

    while start_idx < end_idx and _is_blank(text[start_idx]):
        start_idx += 1
    while end_idx > start_idx and _is_blank(text[end_idx - 1]):
        end_idx -= 1

    if end_idx <= start_idx:
        logger.debug("Section is empty after trimming whitespace")
        return None

    logger.debug("Section slice is [%d, %d)", start_idx, end_idx)

    runs: list[StyleRun] = []
    for run in source.runs:
        overlap_start = max(run.start, start_idx)
        overlap_end = min(run.end, end_idx)
        if overlap_end > overlap_start:
            runs.append(
                StyleRun(
                    start=overlap_start - start_idx,
                    end=overlap_end - start_idx,
                    style=run.style,
                    link=run.link,
                )
            )

    return StyledText(text=text[start_idx:end_idx], runs=tuple(runs))
