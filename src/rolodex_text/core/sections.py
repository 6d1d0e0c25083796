"""Section table: which markers delimit each section and where it goes."""

import json
import re
from dataclasses import dataclass
from pathlib import Path

SECTION_BULLET = "▇"


class SectionConfigError(Exception):
    """The section table could not be loaded."""

    pass


@dataclass(frozen=True)
class SectionSpec:
    """One logical section of a rolodex entry.

    Attributes:
        name: Human readable section name
        start: Regex matching the marker that opens the section
        stop: Regex matching the marker that closes the section
        target: A1 address of the template cell receiving the section
    """

    name: str
    start: re.Pattern
    stop: re.Pattern
    target: str


def section_pattern(number: int, title: str) -> re.Pattern:
    """Build the marker regex for a numbered heading like '1. ▇ Appraiser:'."""
    return re.compile(
        rf"{number}\.\s*{SECTION_BULLET}\s*{re.escape(title)}:"
    )


def _numbered_sections(
    titles: list[str], targets: list[str], closing_title: str
) -> tuple[SectionSpec, ...]:
    specs: list[SectionSpec] = []
    followers = titles[1:] + [closing_title]
    for number, (title, follower, target) in enumerate(
        zip(titles, followers, targets), start=1
    ):
        specs.append(
            SectionSpec(
                name=title,
                start=section_pattern(number, title),
                stop=section_pattern(number + 1, follower),
                target=target,
            )
        )
    return tuple(specs)


DEFAULT_SECTIONS: tuple[SectionSpec, ...] = _numbered_sections(
    ["Appraiser", "Taxes", "Utilities", "Permits", "Code", "Special"],
    ["B14", "B22", "B30", "B43", "B68", "B93"],
    closing_title="Contact Info",
)


def load_sections(path: Path) -> tuple[SectionSpec, ...]:
    """Load a section table from a JSON file.

    The file holds a list of objects with ``name``, ``start``, ``stop``
    and ``target`` keys; ``start`` and ``stop`` are regexes.

    Raises:
        SectionConfigError: If the file is unreadable or malformed
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SectionConfigError(f"Cannot read sections file {path}: {e}") from e

    if not isinstance(raw, list) or not raw:
        raise SectionConfigError(
            f"Sections file {path} must contain a non-empty list"
        )

    specs: list[SectionSpec] = []
    for i, entry in enumerate(raw):
        try:
            specs.append(
                SectionSpec(
                    name=str(entry["name"]),
                    start=re.compile(entry["start"]),
                    stop=re.compile(entry["stop"]),
                    target=str(entry["target"]).strip().upper(),
                )
            )
        except (KeyError, TypeError) as e:
            raise SectionConfigError(
                f"Section #{i} in {path} is missing a field: {e}"
            ) from e
        except re.error as e:
            raise SectionConfigError(
                f"Section #{i} in {path} has an invalid pattern: {e}"
            ) from e

    return tuple(specs)
