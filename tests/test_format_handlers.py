"""Tests for the DOCX report handler and the handler registry."""

import pytest
from pathlib import Path

from docx import Document as DocxDocument
from docx.opc.constants import RELATIONSHIP_TYPE as RT

from rolodex_text.core.filler import extract_sections
from rolodex_text.core.sections import DEFAULT_SECTIONS
from rolodex_text.formats import (
    HANDLER_MAP,
    DOCXHandler,
    TXTHandler,
    get_handler,
)
from rolodex_text.formats.docx_handler import EMPTY_SECTION, _rgb_hex
from rolodex_text.formatting.ir import RunStyle, StyledText, StyleRun, TextStyle


class TestGetHandler:
    """Tests for the extension registry."""

    @pytest.mark.parametrize(
        "extension, expected",
        [
            (".txt", TXTHandler),
            (".md", TXTHandler),
            (".docx", DOCXHandler),
            (".DOCX", DOCXHandler),
        ],
    )
    def test_known_extensions(self, extension, expected):
        assert get_handler(extension) is expected

    def test_unknown_extension(self):
        """Test that unsupported formats are rejected with a clear message."""
        with pytest.raises(ValueError, match="Unsupported report format: .pdf"):
            get_handler(".pdf")

    def test_handlers_declare_their_extensions(self):
        for ext, handler_cls in HANDLER_MAP.items():
            assert ext in handler_cls().supported_extensions


class TestRgbHex:
    """Tests for colour conversion."""

    @pytest.mark.parametrize(
        "color, expected",
        [("FFFF0000", "FF0000"), ("00ff00", "00FF00"), ("#0000FF", "0000FF")],
    )
    def test_valid(self, color, expected):
        assert _rgb_hex(color) == expected

    @pytest.mark.parametrize("color", ["red", "FFF", "GGGGGG"])
    def test_invalid(self, color):
        assert _rgb_hex(color) is None


class TestDOCXHandler:
    """Tests for the DOCX report handler."""

    @pytest.fixture
    def handler(self) -> DOCXHandler:
        return DOCXHandler()

    @pytest.fixture
    def report(self, handler, styled_entry: StyledText, tmp_path: Path):
        """Write a report for the sample entry and open it."""
        output_path = tmp_path / "springfield.docx"
        sections = extract_sections(styled_entry)
        handler.write(sections, output_path, title="Springfield")
        return DocxDocument(output_path)

    def test_headings(self, report):
        """Test the title heading and one heading per section."""
        headings = [
            (p.style.name, p.text)
            for p in report.paragraphs
            if p.style.name.startswith("Heading")
        ]

        assert headings[0] == ("Heading 1", "Springfield")
        assert headings[1:] == [("Heading 2", spec.name) for spec in DEFAULT_SECTIONS]

    def test_bold_run(self, report):
        """Test that run formatting is carried into Word runs."""
        appraiser = next(
            p for p in report.paragraphs if p.text.startswith("Call John")
        )

        runs = [(r.text, r.bold) for r in appraiser.runs]

        assert runs == [("Call ", None), ("John", True), (" at 555-1234.", None)]

    def test_hyperlink(self, report):
        """Test that a linked run becomes a real hyperlink."""
        taxes = next(p for p in report.paragraphs if "county site" in p.text)

        assert taxes.text == "Pay online at the county site."
        assert "w:hyperlink" in taxes._p.xml
        targets = [
            rel.target_ref
            for rel in report.part.rels.values()
            if rel.reltype == RT.HYPERLINK
        ]
        assert targets == ["https://county.example.gov/taxes"]

    def test_missing_section_placeholder(self, handler, tmp_path: Path):
        """Test the placeholder paragraph for an empty section."""
        output_path = tmp_path / "empty.docx"

        handler.write([(DEFAULT_SECTIONS[0], None)], output_path)

        doc = DocxDocument(output_path)
        (placeholder,) = [p for p in doc.paragraphs if p.text == EMPTY_SECTION]
        assert placeholder.runs[0].italic is True

    def test_font_attributes(self, handler, tmp_path: Path):
        """Test font name, size, colour and strikethrough."""
        style = RunStyle(
            flags=TextStyle.STRIKETHROUGH | TextStyle.UNDERLINE,
            font="Arial",
            size=14,
            color="FFFF0000",
        )
        styled = StyledText("Old fee", (StyleRun(0, 7, style),))
        output_path = tmp_path / "fonts.docx"

        handler.write([(DEFAULT_SECTIONS[1], styled)], output_path)

        doc = DocxDocument(output_path)
        (run,) = next(p for p in doc.paragraphs if p.text == "Old fee").runs
        assert run.font.strike is True
        assert run.underline is True
        assert run.font.name == "Arial"
        assert run.font.size.pt == 14
        assert str(run.font.color.rgb) == "FF0000"
