"""Excel (.xlsx) workbooks as rolodex source and template sink.

Uses openpyxl's rich text support: a cell holding a ``CellRichText``
is a list of plain strings and ``TextBlock`` objects, each block
carrying an ``InlineFont``. Blocks map to style runs, plain strings to
unstyled gaps. An xlsx cell has at most one hyperlink, so a cell-level
link is attached to every piece on read, and the first run link found
becomes the cell link on write.
"""

import copy
from pathlib import Path
from typing import Optional

from openpyxl import load_workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.cell.text import InlineFont
from openpyxl.utils.cell import coordinate_from_string

from rolodex_text.formats.base import (
    RolodexSource,
    SectionSink,
    SheetNotFoundError,
    normalize_key,
)
from rolodex_text.formatting.ir import RunStyle, Segment, StyledText, TextStyle
from rolodex_text.logging import get_logger

logger = get_logger(__name__)


def font_to_style(font: Optional[InlineFont]) -> RunStyle:
    """Convert an openpyxl InlineFont to a RunStyle."""
    if font is None:
        return RunStyle()

    flags = TextStyle.NONE
    if font.b:
        flags |= TextStyle.BOLD
    if font.i:
        flags |= TextStyle.ITALIC
    if font.u:
        flags |= TextStyle.UNDERLINE
    if font.strike:
        flags |= TextStyle.STRIKETHROUGH

    color = None
    if font.color is not None and font.color.type == "rgb":
        color = font.color.rgb

    return RunStyle(
        flags=flags,
        font=font.rFont,
        size=font.sz,
        color=color,
    )


def style_to_font(style: RunStyle) -> InlineFont:
    """Convert a RunStyle to an openpyxl InlineFont."""
    return InlineFont(
        rFont=style.font,
        sz=style.size,
        b=True if style.bold else None,
        i=True if style.italic else None,
        u="single" if style.underline else None,
        strike=True if style.strikethrough else None,
        color=style.color,
    )


def cell_to_styled(cell) -> Optional[StyledText]:
    """Read a worksheet cell as StyledText. Empty cells give None."""
    value = cell.value
    if value is None:
        return None

    link = cell.hyperlink.target if cell.hyperlink is not None else None
    pieces = value if isinstance(value, CellRichText) else [str(value)]

    segments: list[Segment] = []
    for piece in pieces:
        if isinstance(piece, TextBlock):
            segments.append((piece.text, font_to_style(piece.font), link))
        else:
            segments.append((str(piece), None, link))

    styled = StyledText.from_segments(segments)
    return styled if styled.text else None


def styled_to_cell_value(styled: StyledText):
    """Build the value to store in a cell: a CellRichText or a plain str."""
    parts: list = []
    for text, style, _ in styled.segments():
        if style is None or style.is_plain:
            parts.append(text)
        else:
            parts.append(TextBlock(style_to_font(style), text))

    if all(isinstance(part, str) for part in parts):
        return styled.text
    return CellRichText(parts)


def first_link(styled: StyledText) -> Optional[str]:
    for run in styled.runs:
        if run.link:
            return run.link
    return None


def _get_sheet(workbook, name: str, path: Path):
    if name not in workbook.sheetnames:
        raise SheetNotFoundError(
            f'Sheet "{name}" not found in {path}. '
            f"Available: {', '.join(workbook.sheetnames)}"
        )
    return workbook[name]


class XLSXRolodex(RolodexSource):
    """Rolodex stored in a worksheet: one key column, one rich text column."""

    def __init__(
        self,
        path: Path,
        tab: str,
        key_column: int = 1,
        text_column: int = 2,
    ) -> None:
        self.path = Path(path)
        self.workbook = load_workbook(self.path, rich_text=True, data_only=True)
        self.sheet = _get_sheet(self.workbook, tab, self.path)
        self.key_column = key_column
        self.text_column = text_column

    def find_row(self, term: str) -> Optional[int]:
        """Return the 1-based row whose key matches ``term`` case-insensitively."""
        wanted = normalize_key(term)
        if not wanted:
            return None

        rows = self.sheet.iter_rows(
            min_col=self.key_column,
            max_col=self.key_column,
            values_only=True,
        )
        for row_number, (key,) in enumerate(rows, start=1):
            if normalize_key(key) == wanted:
                return row_number
        return None

    def read_styled(self, row: int) -> Optional[StyledText]:
        cell = self.sheet.cell(row=row, column=self.text_column)
        return cell_to_styled(cell)


class XLSXTemplate(SectionSink):
    """Template worksheet whose cells receive the extracted sections."""

    def __init__(self, path: Path, sheet: str) -> None:
        self.path = Path(path)
        self.workbook = load_workbook(self.path, rich_text=True)
        self.sheet_name = sheet
        self.sheet = _get_sheet(self.workbook, sheet, self.path)

    def value(self, cell: str) -> str:
        value = self.sheet[cell].value
        if value is None:
            return ""
        return str(value)

    def sheet_view(self, sheet: str) -> "XLSXTemplate":
        """Return a template on another sheet of the same loaded workbook.

        Both share the workbook, so saving either one saves both.
        """
        view = copy.copy(self)
        view.sheet_name = sheet
        view.sheet = _get_sheet(self.workbook, sheet, self.path)
        return view

    def read_styled(self, cell: str) -> Optional[StyledText]:
        return cell_to_styled(self.sheet[cell])

    def write(self, cell: str, styled: StyledText) -> None:
        target = self.sheet[cell]
        target.value = styled_to_cell_value(styled)
        target.hyperlink = first_link(styled)
        logger.debug("Wrote %d characters to %s", len(styled), cell)

    def write_value(self, cell: str, value: str) -> None:
        self.sheet[cell].value = value

    def clear(self, cell: str) -> None:
        target = self.sheet[cell]
        target.value = None
        target.hyperlink = None

    def set_formula(self, cell: str, formula: str) -> None:
        self.sheet[cell].value = formula

    def set_row_height(self, row: int, height: float) -> None:
        self.sheet.row_dimensions[row].height = height

    def row_height(self, row: int) -> Optional[float]:
        return self.sheet.row_dimensions[row].height

    @staticmethod
    def row_of(cell: str) -> int:
        """Return the row number of an A1 address."""
        return coordinate_from_string(cell)[1]

    def save(self, path: Optional[Path] = None) -> Path:
        """Save the workbook, by default over the file it was loaded from."""
        out = Path(path) if path else self.path
        self.workbook.save(out)
        return out
