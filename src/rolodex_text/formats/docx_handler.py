"""Microsoft Word (.docx) report handler."""

from pathlib import Path
from typing import Optional, Sequence

from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from rolodex_text.formats.base import ReportHandler, SectionResult
from rolodex_text.formatting.ir import RunStyle, StyledText

EMPTY_SECTION = "(no content)"
LINK_COLOR = "0563C1"  # Word's default hyperlink blue


def _rgb_hex(color: str) -> Optional[str]:
    """Return the RRGGBB part of an RGB or ARGB hex string."""
    color = color.strip().lstrip("#")
    if len(color) == 8:
        color = color[2:]
    if len(color) != 6:
        return None
    try:
        int(color, 16)
    except ValueError:
        return None
    return color.upper()


class DOCXHandler(ReportHandler):
    """Handler for Microsoft Word (.docx) reports.

    Uses python-docx with run-level formatting: bold, italic,
    underline, strikethrough, font name, size and colour. Links are
    emitted as real ``w:hyperlink`` elements.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".docx",)

    def write(
        self,
        sections: Sequence[SectionResult],
        path: Path,
        title: str = "",
    ) -> None:
        """Write one heading and one paragraph per section."""
        doc = Document()

        # Set default font
        style = doc.styles["Normal"]
        font = style.font
        font.name = "Calibri"
        font.size = Pt(11)

        if title:
            doc.add_heading(title, level=1)

        for spec, styled in sections:
            doc.add_heading(spec.name, level=2)
            para = doc.add_paragraph()
            if styled is None:
                run = para.add_run(EMPTY_SECTION)
                run.italic = True
            else:
                self._add_styled(para, styled)

        doc.save(path)

    def _add_styled(self, para, styled: StyledText) -> None:
        """Append the styled text to a paragraph, one run per segment."""
        for text, style, link in styled.segments():
            if link:
                self._add_hyperlink(para, text, style, link)
            else:
                run = para.add_run(text)
                if style is not None:
                    self._apply_style(run, style)

    def _apply_style(self, run, style: RunStyle) -> None:
        run.bold = style.bold or None
        run.italic = style.italic or None
        run.underline = style.underline or None
        if style.strikethrough:
            run.font.strike = True
        if style.font:
            run.font.name = style.font
        if style.size:
            run.font.size = Pt(style.size)
        if style.color:
            hex_color = _rgb_hex(style.color)
            if hex_color:
                run.font.color.rgb = RGBColor.from_string(hex_color)

    def _add_hyperlink(
        self, para, text: str, style: Optional[RunStyle], url: str
    ) -> None:
        """Add a hyperlink run, keeping the run's own formatting."""
        r_id = para.part.relate_to(url, RT.HYPERLINK, is_external=True)

        hyperlink = OxmlElement("w:hyperlink")
        hyperlink.set(qn("r:id"), r_id)

        # Build the run through python-docx so formatting uses the same code
        run = para.add_run(text)
        if style is not None:
            self._apply_style(run, style)
        if not (style and style.color):
            run.font.color.rgb = RGBColor.from_string(LINK_COLOR)
        if not (style and style.underline):
            run.underline = True

        # Move the run inside the hyperlink element
        para._p.remove(run._r)
        hyperlink.append(run._r)
        para._p.append(hyperlink)
