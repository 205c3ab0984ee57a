"""mdchangelog: parse Markdown changelogs into structured versions."""

from mdchangelog.discovery import (
    FoundChangelog,
    find_changelog,
    find_version,
    latest_version,
    most_recent_date,
)
from mdchangelog.exceptions import ChangelogError, NormalizationError, StructureError
from mdchangelog.output_formatter import format_changelog, format_version
from mdchangelog.parser import parse, parse_document, parsefile, tryparse, tryparsefile
from mdchangelog.schemas import Changelog, VersionInfo

__all__ = [
    "Changelog",
    "ChangelogError",
    "FoundChangelog",
    "NormalizationError",
    "StructureError",
    "VersionInfo",
    "find_changelog",
    "find_version",
    "format_changelog",
    "format_version",
    "latest_version",
    "most_recent_date",
    "parse",
    "parse_document",
    "parsefile",
    "tryparse",
    "tryparsefile",
]
