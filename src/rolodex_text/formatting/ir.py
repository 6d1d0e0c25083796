"""Intermediate Representation for styled text.

This module defines the value types shared by every part of Rolodex Text:
the lookup provider builds them from workbook cells, the section extractor
slices them, and the placement sinks and report handlers render them. The
types are immutable; deriving a new StyledText never touches the source.
"""

from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Iterable, Iterator, Optional


class TextStyle(Flag):
    """Text styling flags (combinable with |)."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKETHROUGH = auto()


@dataclass(frozen=True)
class RunStyle:
    """Style descriptor attached to a run.

    Attributes:
        flags: Combined style flags
        font: Font family name (if set)
        size: Font size in points (if set)
        color: Hex RGB or ARGB colour string (if set)
    """

    flags: TextStyle = TextStyle.NONE
    font: Optional[str] = None
    size: Optional[float] = None
    color: Optional[str] = None

    @property
    def bold(self) -> bool:
        """Check if this style is bold."""
        return TextStyle.BOLD in self.flags

    @property
    def italic(self) -> bool:
        """Check if this style is italic."""
        return TextStyle.ITALIC in self.flags

    @property
    def underline(self) -> bool:
        return TextStyle.UNDERLINE in self.flags

    @property
    def strikethrough(self) -> bool:
        return TextStyle.STRIKETHROUGH in self.flags

    @property
    def is_plain(self) -> bool:
        """Check if this style carries no formatting at all."""
        return self == PLAIN


PLAIN = RunStyle()


@dataclass(frozen=True)
class StyleRun:
    """A half-open character range [start, end) with one style.

    Attributes:
        start: Offset of the first character in the run
        end: Offset one past the last character in the run
        style: The run's style descriptor
        link: Hyperlink target, or None
    """

    start: int
    end: int
    style: RunStyle = PLAIN
    link: Optional[str] = None

    def __len__(self) -> int:
        return self.end - self.start


Segment = tuple[str, Optional[RunStyle], Optional[str]]


@dataclass(frozen=True)
class StyledText:
    """Plain text paired with its style runs.

    Runs are sorted by start, never overlap and may leave gaps, which
    are unstyled text.

    Attributes:
        text: The plain text content
        runs: Style runs over ``text``
    """

    text: str
    runs: tuple[StyleRun, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        runs = tuple(self.runs)
        object.__setattr__(self, "runs", runs)

        previous_end = 0
        for run in runs:
            if not 0 <= run.start < run.end <= len(self.text):
                raise ValueError(
                    f"Run [{run.start}, {run.end}) is outside text of "
                    f"length {len(self.text)}"
                )
            if run.start < previous_end:
                raise ValueError(
                    f"Run [{run.start}, {run.end}) overlaps or precedes "
                    f"the previous run ending at {previous_end}"
                )
            previous_end = run.end

    @property
    def plain_text(self) -> str:
        """Get the plain text content without styling."""
        return self.text

    def segments(self) -> Iterator[Segment]:
        """Yield (text, style, link) pieces covering the whole text.

        Gaps between runs are yielded with a style and link of None.
        """
        pos = 0
        for run in self.runs:
            if run.start > pos:
                yield self.text[pos:run.start], None, None
            yield self.text[run.start:run.end], run.style, run.link
            pos = run.end
        if pos < len(self.text):
            yield self.text[pos:], None, None

    @classmethod
    def from_segments(cls, segments: Iterable[Segment]) -> "StyledText":
        """Build a StyledText from (text, style, link) pieces.

        Empty pieces are skipped. Pieces with neither a style nor a link
        become unstyled gaps.
        """
        parts: list[str] = []
        runs: list[StyleRun] = []
        pos = 0
        for text, style, link in segments:
            if not text:
                continue
            parts.append(text)
            if style is not None or link is not None:
                runs.append(
                    StyleRun(pos, pos + len(text), style or PLAIN, link)
                )
            pos += len(text)
        return cls(text="".join(parts), runs=tuple(runs))

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text
