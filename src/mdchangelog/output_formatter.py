"""Format changelogs and versions as readable text."""

from __future__ import annotations

from mdchangelog.config import MDCHANGELOG_DISPLAY_VERSIONS
from mdchangelog.schemas import Changelog, VersionInfo

_ELLIPSIS = "⋮"


def format_version(info: VersionInfo, *, indent: int = 0, show_type: bool = True) -> str:
    """Render a version entry as a bulleted block."""
    pad = " " * indent
    lines: list[str] = []
    if show_type:
        lines.append(f"{pad}VersionInfo with")
        lines.append(f"{pad}- version: {info.version}")
    else:
        lines.append(f"{pad}- {info.version}")
        pad += "  "

    if info.url is not None:
        lines.append(f"{pad}- url: {info.url}")
    lines.append(f"{pad}- date: {info.date}")
    lines.extend(_render_changes(info, pad))
    return "\n".join(lines)


def format_changelog(changelog: Changelog, *, max_versions: int = MDCHANGELOG_DISPLAY_VERSIONS) -> str:
    """Render a changelog summary showing its first ``max_versions`` versions."""
    count = len(changelog.versions)
    plural = "" if count == 1 else "s"
    lines = [
        "Changelog with",
        f"- title: {changelog.title}",
        f"- intro: {changelog.intro}",
        f"- {count} version{plural}:",
    ]
    for version in changelog.versions[:max_versions]:
        lines.append(format_version(version, indent=2, show_type=False))
    if count > max_versions:
        lines.append(f"    {_ELLIPSIS}")
    return "\n".join(lines)


def _render_changes(info: VersionInfo, pad: str) -> list[str]:
    changes = info.changes
    if not changes:
        return [f"{pad}- and no documented changes"]

    lines = [f"{pad}- changes"]
    if isinstance(changes, dict):
        for section_name, bullets in changes.items():
            lines.append(f"{pad}  - {section_name}")
            lines.extend(f"{pad}    - {bullet}" for bullet in bullets)
    else:
        lines.extend(f"{pad}  - {bullet}" for bullet in changes)
    return lines
