"""Locate changelogs in package directories and look up versions in them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable

from mdchangelog.config import MDCHANGELOG_SEARCH_SUBDIRS
from mdchangelog.parser import tryparsefile
from mdchangelog.schemas import Changelog, VersionInfo

logger = logging.getLogger(__name__)

_CHANGELOG_STEMS = (
    "changelog",
    "news",
    "release_notes",
    "changes",
    "release notes",
    "history",
    "version_history",
    "version history",
)
_CHANGELOG_EXTENSIONS = (".md", "", ".txt")

# Lowercase changelog filenames, in order of preference.
CHANGELOG_NAMES = tuple(f"{stem}{ext}" for stem in _CHANGELOG_STEMS for ext in _CHANGELOG_EXTENSIONS)

_VERSION_DECORATION_RE = re.compile(r"[`v\[\]{}]")


@dataclass(frozen=True)
class FoundChangelog:
    """A changelog found on disk."""

    path: Path
    changelog: Changelog


def find_changelog(
    package_dir: str | Path,
    *,
    subdirs: Iterable[str] = MDCHANGELOG_SEARCH_SUBDIRS,
) -> FoundChangelog | None:
    """Find and parse the changelog of a package.

    Looks in ``package_dir`` and in each of its ``subdirs`` that exists, for any
    of ``CHANGELOG_NAMES`` (case-insensitive). When several changelogs are
    found, returns the one with the most recently dated version, or, if none
    has dates, the first one in order of preference.

    Args:
        package_dir: The package directory.
        subdirs: Subdirectories of ``package_dir`` to search as well.

    Returns:
        The path and parsed changelog, or None if no parseable changelog was found.

    Raises:
        NotADirectoryError: If ``package_dir`` is not a directory.
    """
    root = Path(package_dir)
    if not root.is_dir():
        raise NotADirectoryError(f"A directory must be passed: {root}")

    dirs = [root] + [root / subdir for subdir in subdirs if (root / subdir).is_dir()]
    candidates: list[FoundChangelog] = []
    for directory in dirs:
        # sorted, so that of names differing only by case, the uppercase one wins
        entries = sorted(entry for entry in directory.iterdir() if entry.is_file())
        for name in CHANGELOG_NAMES:
            path = next((entry for entry in entries if entry.name.lower() == name), None)
            if path is None:
                continue
            try:
                changelog = tryparsefile(path)
            except UnicodeDecodeError:
                logger.debug("Skipping changelog %s that is not valid UTF-8", path)
                continue
            if changelog is None:
                logger.debug("Skipping unparseable changelog %s", path)
                continue
            candidates.append(FoundChangelog(path=path, changelog=changelog))

    if not candidates:
        return None

    newest = max(candidates, key=lambda found: most_recent_date(found.changelog) or date.min)
    # without any dates, fall back to the filename order
    if most_recent_date(newest.changelog) is None:
        return candidates[0]
    logger.debug("Selected changelog %s out of %d candidates", newest.path, len(candidates))
    return newest


def most_recent_date(changelog: Changelog) -> date | None:
    """Return the latest release date in ``changelog``, if any version is dated."""
    dates = [version.date for version in changelog.versions if version.date is not None]
    return max(dates) if dates else None


def latest_version(changelog: Changelog) -> VersionInfo | None:
    """Return the most recently dated version, or the first one if none is dated.

    Version names are not assumed to be sortable, so undated changelogs rely
    on document order.
    """
    if not changelog.versions:
        return None
    newest = most_recent_date(changelog)
    if newest is None:
        return changelog.versions[0]
    return next(version for version in changelog.versions if version.date == newest)


def find_version(changelog: Changelog, version: object) -> VersionInfo | None:
    """Find the entry for ``version`` in ``changelog``.

    Tries an exact match on the version name, then a name containing
    ``version``, then the same containment check with backticks, brackets,
    braces and ``v`` characters removed from both sides.

    Returns:
        The matching ``VersionInfo``, or None.
    """
    query = str(version)
    stripped_query = _strip_decoration(query)
    matchers = (
        lambda name: name == query,
        lambda name: query in name,
        lambda name: stripped_query in _strip_decoration(name),
    )
    for matches in matchers:
        for info in changelog.versions:
            if info.version is not None and matches(info.version):
                return info
    return None


def _strip_decoration(text: str) -> str:
    return _VERSION_DECORATION_RE.sub("", text)
