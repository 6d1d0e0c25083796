"""Pytest fixtures for Rolodex Text tests."""

import pytest
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.cell.text import InlineFont

from rolodex_text.config import reset_settings
from rolodex_text.formats.base import RolodexSource, SectionSink
from rolodex_text.formatting.ir import RunStyle, StyledText, StyleRun, TextStyle


ENTRY_TEXT = (
    "1. ▇ Appraiser: Call John at 555-1234. "
    "2. ▇ Taxes: Pay online at the county site. "
    "3. ▇ Utilities: Water is city-run. "
    "4. ▇ Permits: File at town hall. "
    "5. ▇ Code: Inspector visits Tuesdays. "
    "6. ▇ Special: Historic district rules apply. "
    "7. ▇ Contact Info: 555-0000"
)

BOLD = RunStyle(flags=TextStyle.BOLD)
COUNTY_URL = "https://county.example.gov/taxes"


class FakeRolodex(RolodexSource):
    """In-memory rolodex keyed by term."""

    def __init__(self, entries: dict[str, Optional[StyledText]]) -> None:
        self.keys = list(entries)
        self.entries = entries

    def find_row(self, term: str) -> Optional[int]:
        for i, key in enumerate(self.keys, start=1):
            if key.strip().upper() == term.strip().upper():
                return i
        return None

    def read_styled(self, row: int) -> Optional[StyledText]:
        return self.entries[self.keys[row - 1]]


class FakeSink(SectionSink):
    """In-memory sink recording cell contents."""

    def __init__(self) -> None:
        self.cells: dict[str, object] = {}
        self.cleared: list[str] = []

    def value(self, cell: str) -> str:
        value = self.cells.get(cell)
        return "" if value is None else str(value)

    def write(self, cell: str, styled: StyledText) -> None:
        self.cells[cell] = styled

    def write_value(self, cell: str, value: str) -> None:
        self.cells[cell] = value

    def clear(self, cell: str) -> None:
        self.cells.pop(cell, None)
        self.cleared.append(cell)


@pytest.fixture
def entry_text() -> str:
    """Plain text of a complete rolodex entry."""
    return ENTRY_TEXT


@pytest.fixture
def styled_entry() -> StyledText:
    """A complete rolodex entry with a bold name and a linked phrase."""
    john = ENTRY_TEXT.index("John")
    county = ENTRY_TEXT.index("county site")
    return StyledText(
        text=ENTRY_TEXT,
        runs=(
            StyleRun(john, john + len("John"), BOLD),
            StyleRun(county, county + len("county site"), link=COUNTY_URL),
        ),
    )


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def fake_rolodex(styled_entry: StyledText) -> FakeRolodex:
    """Rolodex with a complete, a partial and an empty entry."""
    partial = StyledText(
        text="1. ▇ Appraiser: Ask the clerk. 2. ▇ Taxes:   3. ▇ Utilities: None."
    )
    return FakeRolodex(
        {
            "Springfield": styled_entry,
            "Shelbyville": partial,
            "Ogdenville": None,
        }
    )


@pytest.fixture
def rolodex_path(tmp_path: Path) -> Path:
    """Create a rolodex workbook with rich text entries."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Rolodex"
    ws.append(["Municipality", "Instructions"])

    before, after = ENTRY_TEXT.split("John", 1)
    ws["A2"] = "  Springfield "
    ws["B2"] = CellRichText(
        [before, TextBlock(InlineFont(b=True, color="FFFF0000"), "John"), after]
    )

    ws["A3"] = "Shelbyville"
    ws["B3"] = "1. ▇ Appraiser: Ask the clerk. 2. ▇ Taxes: Call 555-9999."
    ws["B3"].hyperlink = "https://shelbyville.example.gov"

    ws["A4"] = "Ogdenville"

    path = tmp_path / "rolodex.xlsx"
    wb.save(path)
    return path


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    """Create a template workbook with a key cell and an input sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Template"
    ws["A3"] = "Municipality"
    ws["B14"] = "stale appraiser notes"

    inputs = wb.create_sheet("Input")
    inputs["A2"] = "C5"

    path = tmp_path / "template.xlsx"
    wb.save(path)
    return path


@pytest.fixture
def settings_env(monkeypatch, rolodex_path: Path, template_path: Path):
    """Point the settings at the test workbooks."""
    monkeypatch.setenv("ROLODEX_PATH", str(rolodex_path))
    monkeypatch.setenv("ROLODEX_TAB", "Rolodex")
    monkeypatch.setenv("ROLODEX_TEMPLATE_PATH", str(template_path))
    monkeypatch.setenv("ROLODEX_TEMPLATE_SHEET", "Template")
    monkeypatch.setenv("ROLODEX_TEMPLATE_KEY_CELL", "B3")
    reset_settings()
    yield
    reset_settings()
