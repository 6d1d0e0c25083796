"""Command-line interface for Rolodex Text."""

import re
from pathlib import Path
from typing import Optional

import typer
from openpyxl.utils.exceptions import CellCoordinatesException
from rich.console import Console
from rich.table import Table

from rolodex_text import __version__
from rolodex_text.config import Settings, get_settings, load_settings
from rolodex_text.core.events import EditDispatcher, EditEvent, EditHandlingError
from rolodex_text.core.extractor import extract_section
from rolodex_text.core.filler import (
    FillResult,
    FillStatus,
    SectionFiller,
    extract_sections,
)
from rolodex_text.core.images import ImagePlacer
from rolodex_text.core.sections import (
    DEFAULT_SECTIONS,
    SectionConfigError,
    SectionSpec,
    load_sections,
)
from rolodex_text.core.timestamp import TimestampRule
from rolodex_text.formats import SheetNotFoundError, get_handler
from rolodex_text.formats.xlsx_handler import XLSXRolodex, XLSXTemplate
from rolodex_text.formatting.parser import MarkdownParser
from rolodex_text.logging import get_logger, set_level

app = typer.Typer(
    name="rolodex-text",
    help="Copy marked sections of styled rolodex entries into a template workbook.",
    add_completion=False,
)
console = Console()
logger = get_logger(__name__)

state = {"verbose": False}

# Errors a user can fix by correcting input or configuration
USER_ERRORS = (
    OSError,
    SheetNotFoundError,
    SectionConfigError,
    EditHandlingError,
    CellCoordinatesException,
    ValueError,
    re.error,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Rolodex Text v{__version__}")
        raise typer.Exit()


def fail(error: Exception) -> None:
    """Report an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {error}")
    if state["verbose"]:
        console.print_exception()
    raise typer.Exit(1)


def section_table(settings: Settings) -> tuple[SectionSpec, ...]:
    """Return the configured section table."""
    if settings.sections_file:
        return load_sections(settings.sections_file)
    return DEFAULT_SECTIONS


def open_rolodex(settings: Settings) -> XLSXRolodex:
    return XLSXRolodex(
        settings.rolodex_path,
        settings.rolodex_tab,
        key_column=settings.rolodex_key_column,
        text_column=settings.rolodex_text_column,
    )


def open_template(settings: Settings) -> XLSXTemplate:
    return XLSXTemplate(settings.template_path, settings.template_sheet)


def print_result(result: FillResult) -> None:
    """Print a per-section summary of a fill run."""
    if result.status == FillStatus.NO_TERM:
        console.print("[yellow]No lookup term given.[/yellow] Nothing filled.")
        return
    if result.status == FillStatus.NOT_FOUND:
        console.print(
            f'[yellow]Not found in rolodex:[/yellow] "{result.term}". '
            "Cleared all sections."
        )
        return
    if result.status == FillStatus.EMPTY_ENTRY:
        console.print(
            f'[yellow]No text for[/yellow] "{result.term}". Cleared all sections.'
        )
        return
    if result.status == FillStatus.CLEARED:
        console.print("[green]Cleared[/green] all sections.")
        return

    table = Table(title=f'"{result.term}" (row {result.row})')
    table.add_column("Section")
    table.add_column("Result")
    for name in result.filled:
        table.add_row(name, "[green]filled[/green]")
    for name in result.cleared:
        table.add_row(name, "[yellow]cleared[/yellow]")
    console.print(table)


@app.callback()
def main(
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        help="Read settings from this .env file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Copy marked sections of styled rolodex entries into a template workbook.

    Examples:

        python rolodex.py fill "Springfield"

        python rolodex.py extract notes.md --section Taxes

        python rolodex.py export "Springfield" springfield.docx

        python rolodex.py edit Template B3 "Springfield"
    """
    state["verbose"] = verbose
    settings = load_settings(env_file) if env_file else get_settings()
    try:
        set_level("DEBUG" if verbose else settings.log_level)
    except ValueError as e:
        fail(e)


@app.command()
def fill(
    term: Optional[str] = typer.Argument(
        None,
        help="Rolodex key to look up (default: the template's key cell)",
    ),
) -> None:
    """Fill the template's section cells from a rolodex entry."""
    settings = get_settings()
    try:
        sections = section_table(settings)
        template = open_template(settings)
        lookup = term
        if lookup is None:
            lookup = template.value(settings.template_key_cell)
        if not lookup.strip():
            console.print(
                f"[yellow]Please select a key[/yellow] in cell "
                f"{settings.template_key_cell}."
            )
            raise typer.Exit(1)

        filler = SectionFiller(open_rolodex(settings), template, sections)
        result = filler.fill(lookup)
        template.save()
        logger.info("Saved %s", template.path)
    except USER_ERRORS as e:
        fail(e)

    print_result(result)
    if result.status != FillStatus.FILLED:
        raise typer.Exit(1)


@app.command()
def clear() -> None:
    """Clear every section cell in the template."""
    settings = get_settings()
    try:
        template = open_template(settings)
        filler = SectionFiller(
            open_rolodex(settings), template, section_table(settings)
        )
        result = filler.clear_all()
        template.save()
    except USER_ERRORS as e:
        fail(e)

    print_result(result)


@app.command()
def extract(
    path: Path = typer.Argument(
        ...,
        help="Markdown file holding the styled text",
        exists=True,
        dir_okay=False,
    ),
    start: Optional[str] = typer.Option(
        None, "--start", "-s", help="Regex for the start marker"
    ),
    stop: Optional[str] = typer.Option(
        None, "--stop", "-e", help="Regex for the stop marker"
    ),
    section: Optional[str] = typer.Option(
        None, "--section", help="Use the markers of a configured section"
    ),
) -> None:
    """Print the section of a markdown file between two markers."""
    settings = get_settings()
    parser = MarkdownParser()

    try:
        if section:
            specs = {spec.name.lower(): spec for spec in section_table(settings)}
            spec = specs.get(section.lower())
            if spec is None:
                raise ValueError(
                    f"Unknown section: {section}. "
                    f"Known: {', '.join(s.name for s in section_table(settings))}"
                )
            start_re, stop_re = spec.start, spec.stop
        elif start and stop:
            start_re, stop_re = start, stop
        else:
            raise ValueError("Give --section, or both --start and --stop")

        styled = parser.parse(path.read_text(encoding="utf-8"))
        result = extract_section(styled, start_re, stop_re)
    except USER_ERRORS as e:
        fail(e)

    if result is None:
        console.print("[yellow]No section found.[/yellow]")
        raise typer.Exit(1)
    typer.echo(parser.to_markdown(result))


@app.command()
def export(
    term: str = typer.Argument(..., help="Rolodex key to look up"),
    output: Path = typer.Argument(..., help="Report file (.docx, .txt or .md)"),
) -> None:
    """Write every section of a rolodex entry to a report document."""
    settings = get_settings()
    try:
        handler = get_handler(output.suffix)()
        rolodex = open_rolodex(settings)
        styled = rolodex.lookup(term)
        if styled is None:
            raise ValueError(f'No rolodex text found for "{term}"')

        sections = extract_sections(styled, section_table(settings))
        handler.write(sections, output, title=term.strip())
    except USER_ERRORS as e:
        fail(e)

    console.print(f"[green]Success:[/green] {output}")


@app.command()
def edit(
    sheet: str = typer.Argument(..., help="Edited sheet name"),
    cell: str = typer.Argument(..., help="Edited cell (A1 notation)"),
    value: Optional[str] = typer.Argument(None, help="New value (omit to clear)"),
    old: Optional[str] = typer.Option(
        None, "--old", help="Previous value (default: the cell's current value)"
    ),
    width: Optional[int] = typer.Option(
        None, "--width", min=1, help="Width in pixels of a pasted image"
    ),
    height: Optional[int] = typer.Option(
        None, "--height", min=1, help="Height in pixels of a pasted image"
    ),
) -> None:
    """Apply an edit to the template and run the edit handlers."""
    settings = get_settings()
    try:
        template = open_template(settings)
        if sheet not in template.workbook.sheetnames:
            raise SheetNotFoundError(f'Sheet "{sheet}" not found in {template.path}')

        address = EditEvent(sheet=sheet, cell=cell).cell
        target = template.workbook[sheet][address]
        previous = old
        if previous is None and target.value is not None:
            previous = str(target.value)
        event = EditEvent(sheet=sheet, cell=address, value=value, old_value=previous)
        target.value = value

        def section_fill(e: EditEvent) -> Optional[FillResult]:
            # The rolodex is only opened when the key cell changes
            if e.sheet != settings.template_sheet:
                return None
            if e.cell != settings.template_key_cell.upper():
                return None
            filler = SectionFiller(
                open_rolodex(settings), template, section_table(settings)
            )
            return filler.on_edit(
                e, settings.template_sheet, settings.template_key_cell
            )

        dispatcher = EditDispatcher()
        dispatcher.register(section_fill)
        if settings.timestamp_cells:
            rule = TimestampRule(
                settings.timestamp_cells,
                timezone=settings.timezone,
                fmt=settings.timestamp_format,
            )

            def timestamp(e: EditEvent):
                # Stamps land on the sheet that was edited
                return rule.on_edit(e, template.sheet_view(e.sheet))

            dispatcher.register(timestamp)

        if settings.image_input_sheet in template.workbook.sheetnames:
            inputs = template.sheet_view(settings.image_input_sheet)

            def measure(url: str) -> tuple[int, int]:
                if width is None or height is None:
                    raise ValueError("image size unknown, pass --width and --height")
                return width, height

            placer = ImagePlacer(
                template, measure=measure, max_width=settings.image_max_width
            )

            def target_for_row(row: int) -> Optional[str]:
                value = inputs.sheet.cell(
                    row=row, column=settings.image_target_column
                ).value
                return None if value is None else str(value)

            def image(e: EditEvent) -> Optional[str]:
                return placer.on_edit(
                    e,
                    settings.image_input_sheet,
                    settings.image_url_column,
                    target_for_row,
                )

            dispatcher.register(image)

        outcomes = dispatcher.dispatch(event)
        template.save()
        logger.info("Saved %s", template.path)
    except USER_ERRORS as e:
        fail(e)

    if not outcomes:
        console.print(f"Edit of {sheet}!{event.cell} triggered no action.")
    for name, outcome in outcomes:
        if isinstance(outcome, FillResult):
            print_result(outcome)
        else:
            console.print(f"[blue]{name}:[/blue] {getattr(outcome, 'value', outcome)}")


@app.command("place-image")
def place_image(
    url: str = typer.Argument(..., help="Image URL"),
    cell: str = typer.Argument(..., help="Template cell for the image (A1 notation)"),
    width: int = typer.Option(..., "--width", min=1, help="Image width in pixels"),
    height: int = typer.Option(..., "--height", min=1, help="Image height in pixels"),
    max_width: Optional[int] = typer.Option(
        None, "--max-width", min=1, help="Shrink wider images to this width"
    ),
) -> None:
    """Place an image formula in a template cell and fit its row."""
    settings = get_settings()
    try:
        template = open_template(settings)
        placer = ImagePlacer(
            template,
            measure=lambda _url: (width, height),
            max_width=max_width or settings.image_max_width,
        )
        fit = placer.place(url, cell.strip().upper())
        template.save()
    except USER_ERRORS as e:
        fail(e)

    if fit is None:
        console.print(f"[red]Error:[/red] could not place image in {cell}")
        raise typer.Exit(1)
    console.print(
        f"[green]Placed[/green] {fit.width}x{fit.height} image in {cell}, "
        f"row height {fit.row_height}"
    )


if __name__ == "__main__":
    app()
