"""Plain text / markdown report handler."""

from pathlib import Path
from typing import Sequence

from rolodex_text.formats.base import ReportHandler, SectionResult
from rolodex_text.formatting.parser import MarkdownParser

EMPTY_SECTION = "_(no content)_"


class TXTHandler(ReportHandler):
    """Handler for plain text (.txt) and markdown (.md) reports.

    Formatting is kept via markdown-style syntax:
    - **bold** for bold text
    - *italic* for italic text
    - ~~strike~~ for struck-through text
    - [label](url) for links
    """

    def __init__(self) -> None:
        self.parser = MarkdownParser()

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt", ".md")

    def render(self, sections: Sequence[SectionResult], title: str = "") -> str:
        """Render the sections as a markdown document."""
        blocks: list[str] = []
        if title:
            blocks.append(f"# {title}")

        for spec, styled in sections:
            blocks.append(f"## {spec.name}")
            if styled is None:
                blocks.append(EMPTY_SECTION)
            else:
                blocks.append(self.parser.to_markdown(styled))

        # Join blocks with double newlines (paragraphs)
        return "\n\n".join(blocks) + "\n"

    def write(
        self,
        sections: Sequence[SectionResult],
        path: Path,
        title: str = "",
    ) -> None:
        path.write_text(self.render(sections, title), encoding="utf-8")
