"""Tests for the section table."""

import json

import pytest

from rolodex_text.core.sections import (
    DEFAULT_SECTIONS,
    SectionConfigError,
    load_sections,
    section_pattern,
)


class TestDefaultSections:
    """Tests for the built-in section table."""

    def test_names_and_targets(self):
        """Test the six numbered sections and their template cells."""
        assert [(s.name, s.target) for s in DEFAULT_SECTIONS] == [
            ("Appraiser", "B14"),
            ("Taxes", "B22"),
            ("Utilities", "B30"),
            ("Permits", "B43"),
            ("Code", "B68"),
            ("Special", "B93"),
        ]

    def test_each_stop_is_next_start(self):
        """Test that sections are delimited by the following heading."""
        for current, following in zip(DEFAULT_SECTIONS, DEFAULT_SECTIONS[1:]):
            assert current.stop.pattern == following.start.pattern

    def test_last_section_stops_at_contact_info(self):
        assert DEFAULT_SECTIONS[-1].stop.search("7. ▇ Contact Info: 555-0000")

    def test_all_markers_found_in_entry(self, entry_text: str):
        """Test that every start marker occurs in a complete entry."""
        for spec in DEFAULT_SECTIONS:
            assert spec.start.search(entry_text), spec.name


class TestSectionPattern:
    """Tests for marker regex construction."""

    @pytest.mark.parametrize(
        "heading",
        ["1. ▇ Appraiser:", "1.▇Appraiser:", "1.  ▇\tAppraiser:"],
    )
    def test_tolerates_spacing(self, heading: str):
        assert section_pattern(1, "Appraiser").search(heading)

    def test_requires_number_and_bullet(self):
        pattern = section_pattern(1, "Appraiser")

        assert not pattern.search("2. ▇ Appraiser:")
        assert not pattern.search("1. Appraiser:")

    def test_title_is_escaped(self):
        """Test that regex characters in a title match literally."""
        pattern = section_pattern(3, "Fees (misc.)")

        assert pattern.search("3. ▇ Fees (misc.):")
        assert not pattern.search("3. ▇ Fees misc:")


class TestLoadSections:
    """Tests for loading a section table from JSON."""

    def test_load_valid_file(self, tmp_path):
        """Test a well formed sections file."""
        path = tmp_path / "sections.json"
        path.write_text(
            json.dumps(
                [
                    {"name": "Notes", "start": "A:", "stop": "B:", "target": " c5 "},
                    {"name": "More", "start": "B:", "stop": "C:", "target": "C6"},
                ]
            ),
            encoding="utf-8",
        )

        specs = load_sections(path)

        assert [s.name for s in specs] == ["Notes", "More"]
        assert specs[0].target == "C5"
        assert specs[0].start.search("x A: y")

    def test_missing_file(self, tmp_path):
        with pytest.raises(SectionConfigError):
            load_sections(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "sections.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SectionConfigError):
            load_sections(path)

    def test_empty_list(self, tmp_path):
        """Test that an empty table is rejected."""
        path = tmp_path / "sections.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(SectionConfigError, match="non-empty list"):
            load_sections(path)

    def test_missing_field(self, tmp_path):
        """Test that an entry without a target is rejected."""
        path = tmp_path / "sections.json"
        path.write_text(
            json.dumps([{"name": "Notes", "start": "A:", "stop": "B:"}]),
            encoding="utf-8",
        )

        with pytest.raises(SectionConfigError, match="missing a field"):
            load_sections(path)

    def test_invalid_pattern(self, tmp_path):
        """Test that a broken regex is reported."""
        path = tmp_path / "sections.json"
        path.write_text(
            json.dumps([{"name": "Notes", "start": "(", "stop": "B:", "target": "C5"}]),
            encoding="utf-8",
        )

        with pytest.raises(SectionConfigError, match="invalid pattern"):
            load_sections(path)
