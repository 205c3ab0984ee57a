"""Parse version headings into a name and an optional date."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable

from mdchangelog.config import MAX_NORMALIZE_ITERATIONS
from mdchangelog.exceptions import NormalizationError

_PREFIX = r"^(?:[Vv]ersion)?v?"  # "Version", "version", "v", "versionv", or nothing
_SPACE = r"\s*"
_NAME = _SPACE + r"(?P<name>.+?)" + _SPACE
_ISO_DATE = r"\d{4}-\d{2}-\d{2}"  # 2024-02-01
_MONTH_FIRST_DATE = r"\w+ \d{1,2},? \d{4}"  # Feb 1, 2024 / February 1 2024
_DAY_FIRST_DATE = r"\d{1,2} \w+,? \d{4}"  # 1 February 2024 / 1 Feb, 2024
_DATE = _SPACE + rf"(?P<date>{_ISO_DATE}|{_MONTH_FIRST_DATE}|{_DAY_FIRST_DATE})?" + _SPACE

HEADING_RE = re.compile(_PREFIX + _NAME + "-?" + _DATE + "$")

# Tried in order; the first format that parses wins.
DATE_FORMATS = (
    "%Y-%m-%d",
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %b %Y",
    "%d %b, %Y",
    "%d %B %Y",
    "%d %B, %Y",
)

_QUOTING_RE = re.compile(r"\[(.*)\]|\((.*)\)|`(.*)`")


@dataclass(frozen=True)
class VersionHeader:
    """Name and date parsed from a version heading."""

    name: str
    date: date | None = None


def find_date(text: str, date_formats: Iterable[str] = DATE_FORMATS) -> date | None:
    """Parse ``text`` with the first matching date format, or return None."""
    for date_format in date_formats:
        try:
            return datetime.strptime(text, date_format).date()
        except ValueError:
            continue
    return None


def replace_until_convergence(
    text: str,
    pattern: re.Pattern[str],
    repl: str | Callable[[re.Match[str]], str],
    *,
    max_iterations: int = MAX_NORMALIZE_ITERATIONS,
) -> str:
    """Apply ``pattern.sub`` repeatedly until the text stops changing.

    Raises:
        NormalizationError: If no fixed point is reached within ``max_iterations``.
    """
    for _ in range(max_iterations):
        new_text = pattern.sub(repl, text)
        if new_text == text:
            return text
        text = new_text
    raise NormalizationError(f"Text did not converge after {max_iterations} replacements: {text!r}")


def strip_quoting(text: str) -> str:
    """Remove surrounding ``[...]``, ``(...)`` and backtick quoting, layer by layer."""
    return replace_until_convergence(text, _QUOTING_RE, _unwrap)


def _unwrap(match: re.Match[str]) -> str:
    return match.group(match.lastindex or 0)


def parse_version_header(
    text: str,
    *,
    header_regex: re.Pattern[str] = HEADING_RE,
    date_formats: Iterable[str] = DATE_FORMATS,
) -> VersionHeader:
    """Extract a version name and optional date from heading text.

    Falls back to the whole normalized text as the name when the heading does
    not match. When the date part cannot be parsed the date is None. Text
    that was not recognized as a date stays part of the name
    (``"[1.0.0] - invalid-date"`` gives the name ``"1.0.0 - invalid-date"``),
    while a date-shaped fragment that fails every format is dropped from it
    (``"1.0.0 - January 45, 2024"`` gives the name ``"1.0.0"``).
    """
    header_text = strip_quoting(text.strip())
    match = header_regex.match(header_text)
    if match is None:
        return VersionHeader(name=header_text)

    raw_date = match.group("date")
    parsed_date = find_date(raw_date, date_formats) if raw_date is not None else None
    return VersionHeader(name=match.group("name") or header_text, date=parsed_date)
