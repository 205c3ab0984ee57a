"""Parse Markdown changelogs into ``Changelog`` objects.

Primarily tuned for Keep a Changelog style documents: a title as an H1
heading, then one H2 heading per version formatted like
``[1.1.0] - 2019-02-15`` (with or without a link on the version), each
followed by a bulleted list of changes, optionally grouped under H3
subsections. Other header and date styles are parsed on a best-effort basis.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mdchangelog.config import GENERAL_SECTION_NAME
from mdchangelog.exceptions import ChangelogError
from mdchangelog.extract import CHANGE_KINDS, bullets_to_list, text_content
from mdchangelog.headers import parse_version_header, strip_quoting
from mdchangelog.heading_tree import (
    HeadingTree,
    build_heading_tree,
    find_first_child,
    find_first_heading,
    iter_nodes,
    iter_subheadings,
)
from mdchangelog.markdown import MarkdownNode, NodeKind, parse_markdown
from mdchangelog.schemas import Changelog, Changes, VersionInfo

logger = logging.getLogger(__name__)


def parse(text: str) -> Changelog:
    """Parse a ``Changelog`` from a Markdown string.

    Raises:
        ChangelogError: On internal failures (see ``mdchangelog.exceptions``).
            Unconventional documents never raise; missing parts are None.
    """
    return parse_document(parse_markdown(text))


def parse_document(document: MarkdownNode) -> Changelog:
    """Parse a ``Changelog`` from a DOCUMENT node."""
    root = build_heading_tree(document)
    return build_changelog(root)


def tryparse(text: str) -> Changelog | None:
    """Parse a ``Changelog`` from a Markdown string, returning None on failure."""
    try:
        return parse(text)
    except ChangelogError:
        logger.debug("Error when parsing changelog, returning None", exc_info=True)
        return None


def parsefile(path: str | Path) -> Changelog:
    """Parse a ``Changelog`` from the file at ``path``."""
    return parse(Path(path).read_text(encoding="utf-8"))


def tryparsefile(path: str | Path) -> Changelog | None:
    """Parse a ``Changelog`` from the file at ``path``, returning None on failure.

    Errors reading the file are not caught.
    """
    return tryparse(Path(path).read_text(encoding="utf-8"))


def build_changelog(root: HeadingTree) -> Changelog:
    """Assemble a ``Changelog`` from a level-0 heading tree.

    The first heading is the title, and each heading directly below it is a
    version, kept in document order.
    """
    title_heading = find_first_heading(root)
    if title_heading is None:
        logger.debug("No headings found; returning an empty changelog")
        return Changelog()

    title = text_content(title_heading.heading_node)
    intro_node = find_first_child(title_heading, NodeKind.PARAGRAPH)
    intro = text_content(intro_node) if intro_node is not None else None

    versions: list[VersionInfo] = []
    for version_section in iter_subheadings(title_heading):
        version = _parse_version_section(version_section)
        if version is not None:
            versions.append(version)

    return Changelog(title=title, intro=intro, versions=versions)


def _parse_version_section(section: HeadingTree) -> VersionInfo | None:
    header = parse_version_header(text_content(section.heading_node))
    if not header.name:
        logger.debug("Skipping heading without a version name")
        return None

    url = _find_version_url(section.heading_node, header.name)

    sectioned: dict[str, list[str]] = {}
    consumed: set[MarkdownNode] = set()
    for subsection in iter_subheadings(section):
        items = list(iter_nodes(subsection, CHANGE_KINDS))
        consumed.update(items)
        sectioned[text_content(subsection.heading_node)] = bullets_to_list(items)

    # Changes that are not within a subsection
    remaining = [node for node in iter_nodes(section, CHANGE_KINDS) if node not in consumed]
    general = [change for change in bullets_to_list(remaining) if change]

    return VersionInfo(
        version=header.name,
        url=url,
        date=header.date,
        changes=_combine_changes(sectioned, general),
    )


def _find_version_url(heading_node: MarkdownNode, name: str) -> str | None:
    # Only links inside the heading itself are considered, not content below it.
    target = strip_quoting(name)
    for link in iter_nodes(heading_node, {NodeKind.LINK}):
        if target in strip_quoting(text_content(link)):
            return link.url
    return None


def _combine_changes(sectioned: dict[str, list[str]], general: list[str]) -> Changes:
    if not general:
        return sectioned if sectioned else []
    if not sectioned:
        return general

    key = GENERAL_SECTION_NAME
    while key in sectioned:
        key += "_"
    sectioned[key] = general
    return sectioned
