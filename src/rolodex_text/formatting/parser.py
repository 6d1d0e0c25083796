"""Markdown parser for converting between markdown and styled text."""

import re
from typing import Optional

from rolodex_text.formatting.ir import (
    RunStyle,
    Segment,
    StyledText,
    TextStyle,
)


class MarkdownParser:
    """Parse inline markdown formatting into StyledText and back."""

    LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")

    # Order matters: check bold-italic first, then bold, then italic
    MARKERS: tuple[tuple[str, TextStyle], ...] = (
        ("***", TextStyle.BOLD | TextStyle.ITALIC),
        ("**", TextStyle.BOLD),
        ("~~", TextStyle.STRIKETHROUGH),
        ("*", TextStyle.ITALIC),
    )

    def parse(self, markdown_text: str) -> StyledText:
        """Convert markdown text to StyledText.

        Args:
            markdown_text: Text using ***, **, *, ~~ and [label](url) markup

        Returns:
            StyledText with one run per formatted or linked piece
        """
        return StyledText.from_segments(self._tokenize_markdown(markdown_text))

    def _tokenize_markdown(self, text: str) -> list[Segment]:
        """Tokenize markdown into (text, style, link) segments.

        Handles:
        - [label](url) links, whose label may itself carry markers
        - ***bold italic***, **bold**, ~~strike~~, *italic*
        - plain text
        """
        segments: list[Segment] = []
        pos = 0

        while pos < len(text):
            if text[pos] == "[":
                match = self.LINK_PATTERN.match(text, pos)
                if match:
                    for label, style, _ in self._tokenize_markdown(match.group(1)):
                        segments.append((label, style, match.group(2)))
                    pos = match.end()
                    continue

            marker_found = False
            for marker, flags in self.MARKERS:
                if not text.startswith(marker, pos):
                    continue
                if marker == "*" and text.startswith("**", pos):
                    continue
                end = self._find_closing(text, marker, pos + len(marker))
                if end == -1:
                    # No closing found, try a shorter marker
                    continue
                content = text[pos + len(marker):end]
                segments.append((content, RunStyle(flags=flags), None))
                pos = end + len(marker)
                marker_found = True
                break
            if marker_found:
                continue

            # Plain text - find next formatting marker
            next_marker = len(text)
            for marker in ("*", "~~", "["):
                idx = text.find(marker, pos + 1)
                if idx != -1 and idx < next_marker:
                    next_marker = idx

            segments.append((text[pos:next_marker], None, None))
            pos = next_marker

        return self._merge_plain(segments)

    @staticmethod
    def _find_closing(text: str, marker: str, start: int) -> int:
        """Find the closing marker, skipping '**' when looking for '*'."""
        if marker != "*":
            return text.find(marker, start)
        end = start
        while end < len(text):
            if text[end] == "*" and (end + 1 >= len(text) or text[end + 1] != "*"):
                return end
            if text.startswith("**", end):
                end += 2
                continue
            end += 1
        return -1

    @staticmethod
    def _merge_plain(segments: list[Segment]) -> list[Segment]:
        """Join adjacent unstyled segments into one."""
        merged: list[Segment] = []
        for seg in segments:
            if merged and seg[1] is None and seg[2] is None:
                prev = merged[-1]
                if prev[1] is None and prev[2] is None:
                    merged[-1] = (prev[0] + seg[0], None, None)
                    continue
            merged.append(seg)
        return merged

    def to_markdown(self, styled: Optional[StyledText]) -> str:
        """Convert StyledText back to markdown."""
        if styled is None:
            return ""

        parts: list[str] = []
        for text, style, link in styled.segments():
            if style is not None:
                if style.bold and style.italic:
                    text = f"***{text}***"
                elif style.bold:
                    text = f"**{text}**"
                elif style.italic:
                    text = f"*{text}*"
                if style.strikethrough:
                    text = f"~~{text}~~"
            if link:
                text = f"[{text}]({link})"
            parts.append(text)

        return "".join(parts)
