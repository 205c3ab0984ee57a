"""Tests for changelog parsing."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from mdchangelog import parser as changelog_parser
from mdchangelog.exceptions import StructureError
from mdchangelog.markdown import parse_markdown
from mdchangelog.parser import parse, parse_document, parsefile, tryparse, tryparsefile
from mdchangelog.schemas import Changelog

FIXTURES = Path(__file__).resolve().parent / "fixtures"

KEEP_A_CHANGELOG = """\
# Changelog

All notable changes to this project will be documented in this file.

## Unreleased

- Added a new feature

## 1.0.0 - 2024-12-25

- Initial release
"""


def _single_version(text: str):
    changelog = parse(text)
    assert len(changelog.versions) == 1
    return changelog.versions[0]


class TestParse:
    """Tests for parse on small documents."""

    def test_end_to_end(self) -> None:
        changelog = parse(KEEP_A_CHANGELOG)

        assert changelog.title == "Changelog"
        assert changelog.intro == "All notable changes to this project will be documented in this file."
        assert [v.version for v in changelog.versions] == ["Unreleased", "1.0.0"]
        unreleased, released = changelog.versions
        assert unreleased.date is None
        assert released.date == date(2024, 12, 25)
        assert unreleased.changes == ["Added a new feature"]
        assert released.changes == ["Initial release"]

    @pytest.mark.parametrize("text", ["", "Just text.\n", "- a bullet\n- another\n", "> quoted\n"])
    def test_no_headings(self, text: str) -> None:
        changelog = parse(text)

        assert changelog == Changelog()
        assert changelog.title is None
        assert changelog.intro is None
        assert changelog.versions == []

    def test_title_without_intro(self) -> None:
        changelog = parse("# Changelog\n\n## 1.0.0\n\n- change\n")

        assert changelog.title == "Changelog"
        assert changelog.intro is None

    def test_intro_is_first_paragraph(self) -> None:
        changelog = parse("# Changelog\n\n- a list\n\nFirst paragraph.\n\nSecond paragraph.\n")

        assert changelog.intro == "First paragraph."
        assert changelog.versions == []

    def test_versions_keep_document_order(self) -> None:
        text = "# Changelog\n\n## 1.0.0 - 2020-01-01\n\n## 2.0.0 - 2024-01-01\n\n## 0.1.0\n"

        names = [v.version for v in parse(text).versions]
        assert names == ["1.0.0", "2.0.0", "0.1.0"]

    def test_unparseable_date_stays_in_name(self) -> None:
        version = _single_version("# Changelog\n\n## [1.0.0] - invalid-date\n\n- change\n")

        assert version.version == "1.0.0 - invalid-date"
        assert version.date is None

    def test_bracketed_header_with_date(self) -> None:
        version = _single_version("# Changelog\n\n## [3.2.1] - 2023-05-17\n\n- change\n")

        assert version.version == "3.2.1"
        assert version.date == date(2023, 5, 17)

    def test_heading_without_name_is_skipped(self) -> None:
        changelog = parse("# Changelog\n\n## []\n\n- orphan\n\n## 1.0.0\n\n- change\n")

        assert [v.version for v in changelog.versions] == ["1.0.0"]

    def test_nested_headings_are_not_versions(self) -> None:
        changelog = parse("# Changelog\n\n## 1.0.0\n\n### Added\n\n#### Details\n\n- deep\n")

        assert [v.version for v in changelog.versions] == ["1.0.0"]


class TestChanges:
    """Tests for change extraction within a version."""

    def test_flat_bullets(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0\n\n- one\n- two\n- three\n")

        assert version.changes == ["one", "two", "three"]
        assert not version.is_sectioned

    def test_sections(self) -> None:
        version = _single_version(
            "# Changelog\n\n## 1.0.0\n\n### Added\n\n- new thing\n\n### Fixed\n\n- bug one\n- bug two\n"
        )

        assert version.changes == {"Added": ["new thing"], "Fixed": ["bug one", "bug two"]}
        assert list(version.changes) == ["Added", "Fixed"]
        assert version.is_sectioned

    def test_prose_is_single_change(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0\n\nFirst line of prose\nsecond line of prose\n")

        assert len(version.changes) == 1
        assert version.changes[0].startswith("First line of prose")
        assert version.changes[0].endswith("second line of prose")

    def test_general_section_for_unsectioned_items(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0\n\n- top level\n\n### Added\n\n- new\n")

        assert version.changes == {"Added": ["new"], "General": ["top level"]}
        assert list(version.changes) == ["Added", "General"]

    def test_general_name_collision(self) -> None:
        version = _single_version(
            "# Changelog\n\n## 1.0.0\n\n- top level\n\n### General\n\n- existing\n"
        )

        assert version.changes == {"General": ["existing"], "General_": ["top level"]}

    def test_repeated_general_collisions(self) -> None:
        version = _single_version(
            "# Changelog\n\n## 1.0.0\n\n- top\n\n### General\n\n- a\n\n### General_\n\n- b\n"
        )

        assert list(version.changes) == ["General", "General_", "General__"]
        assert version.changes["General__"] == ["top"]

    def test_no_changes_is_empty_flat_list(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0\n")

        assert version.changes == []
        assert not version.is_sectioned

    def test_empty_subsection(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0\n\n### Added\n")

        assert version.changes == {"Added": [""]}

    def test_inline_code_in_changes(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0\n\n- Fixed `parse()` on empty input\n")

        assert version.changes == ["Fixed `parse()` on empty input"]

    def test_nested_subsections_collect_deep_items(self) -> None:
        version = _single_version(
            "# Changelog\n\n## 1.0.0\n\n### Added\n\n#### API\n\n- new function\n"
        )

        assert version.changes == {"Added": ["new function"]}


class TestVersionUrl:
    """Tests for version URL detection."""

    def test_inline_link_in_heading(self) -> None:
        version = _single_version(
            "# Changelog\n\n## [1.0.0](https://example.com/releases/1.0.0) - 2024-12-25\n\n- change\n"
        )

        assert version.version == "1.0.0"
        assert version.url == "https://example.com/releases/1.0.0"
        assert version.date == date(2024, 12, 25)

    def test_reference_link_in_heading(self) -> None:
        version = _single_version(
            "# Changelog\n\n## [1.0.0] - 2024-12-25\n\n- change\n\n"
            "[1.0.0]: https://example.com/compare/v0.9.0...v1.0.0\n"
        )

        assert version.url == "https://example.com/compare/v0.9.0...v1.0.0"

    def test_link_must_mention_version(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0 [notes](https://example.com/notes)\n")

        assert version.url is None

    def test_links_below_heading_are_ignored(self) -> None:
        version = _single_version("# Changelog\n\n## 1.0.0\n\n- see [1.0.0](https://example.com/v1)\n")

        assert version.url is None


class TestModels:
    """Tests for the returned models."""

    def test_models_are_frozen(self) -> None:
        changelog = parse(KEEP_A_CHANGELOG)

        with pytest.raises(ValidationError):
            changelog.title = "Other"
        with pytest.raises(ValidationError):
            changelog.versions[0].version = "2.0.0"

    def test_json_dump(self) -> None:
        changelog = parse(KEEP_A_CHANGELOG)

        dumped = changelog.model_dump(mode="json")
        assert dumped["versions"][1] == {
            "version": "1.0.0",
            "url": None,
            "date": "2024-12-25",
            "changes": ["Initial release"],
        }


class TestFixtures:
    """Tests on sample changelogs with varied formatting."""

    @pytest.mark.parametrize("path", sorted((FIXTURES / "good").glob("*.md")), ids=lambda p: p.name)
    def test_good_changelogs(self, path: Path) -> None:
        changelog = parsefile(path)

        assert changelog.title == "Changelog"
        assert changelog.intro == "Intro"
        assert [v.version for v in changelog.versions] == ["Unreleased", "1.0.0"]
        unreleased, released = changelog.versions
        assert unreleased.date is None
        assert released.date == date(2024, 12, 25)
        assert unreleased.changes
        assert released.changes

    @pytest.mark.parametrize("path", sorted((FIXTURES / "bad").glob("*.md")), ids=lambda p: p.name)
    def test_bad_changelogs_do_not_raise(self, path: Path) -> None:
        changelog = parsefile(path)

        assert changelog.title == "Changelog"

    def test_keepachangelog_details(self) -> None:
        changelog = parsefile(FIXTURES / "good" / "keepachangelog.md")

        unreleased, released = changelog.versions
        assert unreleased.url == "https://github.com/example/project/compare/v1.0.0...HEAD"
        assert released.url == "https://github.com/example/project/releases/tag/v1.0.0"
        assert released.changes == {"Added": ["Initial release"], "Fixed": ["Crash on empty input"]}

    def test_odd_headers(self) -> None:
        changelog = parsefile(FIXTURES / "bad" / "odd_headers.md")

        names = [v.version for v in changelog.versions]
        assert "1.0.0 - invalid-date" in names
        assert "" not in names


class TestEntrypoints:
    """Tests for the parse entrypoints and error handling."""

    def test_parse_document(self) -> None:
        changelog = parse_document(parse_markdown(KEEP_A_CHANGELOG))

        assert changelog == parse(KEEP_A_CHANGELOG)

    def test_parsefile_accepts_str_path(self, write_changelog) -> None:
        path = write_changelog(KEEP_A_CHANGELOG)

        assert parsefile(str(path)).title == "Changelog"

    def test_tryparse_success(self) -> None:
        assert tryparse(KEEP_A_CHANGELOG) == parse(KEEP_A_CHANGELOG)

    def test_internal_errors_propagate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken(document):
            raise StructureError("broken tree")

        monkeypatch.setattr(changelog_parser, "build_heading_tree", broken)

        with pytest.raises(StructureError, match="broken tree"):
            parse(KEEP_A_CHANGELOG)

    def test_tryparse_returns_none_on_internal_error(
        self, monkeypatch: pytest.MonkeyPatch, write_changelog
    ) -> None:
        def broken(document):
            raise StructureError("broken tree")

        monkeypatch.setattr(changelog_parser, "build_heading_tree", broken)
        path = write_changelog(KEEP_A_CHANGELOG)

        assert tryparse(KEEP_A_CHANGELOG) is None
        assert tryparsefile(path) is None

    def test_tryparsefile_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            tryparsefile(tmp_path / "missing.md")
