"""Command-line interface for inspecting changelogs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from mdchangelog.config import MDCHANGELOG_DISPLAY_VERSIONS
from mdchangelog.discovery import find_changelog, find_version, latest_version
from mdchangelog.exceptions import ChangelogError
from mdchangelog.output_formatter import format_changelog, format_version
from mdchangelog.parser import parsefile
from mdchangelog.schemas import Changelog
from mdchangelog.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdchangelog",
        description="Parse a Markdown changelog and show its versions and changes.",
    )
    parser.add_argument("path", help="Changelog file, or a package directory to search for one")
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("--version", dest="version", help="Show only this version (e.g. 1.2.0)")
    selection.add_argument("--latest", action="store_true", help="Show only the most recent version")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument(
        "--max-versions",
        type=int,
        default=MDCHANGELOG_DISPLAY_VERSIONS,
        help="Number of versions shown in the text summary",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Show only warnings and errors")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        changelog = load_changelog(Path(args.path))
    except (ChangelogError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if changelog is None:
        print(f"Error: no parseable changelog found in {args.path}", file=sys.stderr)
        return 1

    if args.version is None and not args.latest:
        if args.json:
            print(changelog.model_dump_json(indent=2))
        else:
            print(format_changelog(changelog, max_versions=args.max_versions))
        return 0

    info = latest_version(changelog) if args.latest else find_version(changelog, args.version)
    if info is None:
        wanted = "any version" if args.latest else f"version {args.version}"
        print(f"Error: {wanted} not found in changelog", file=sys.stderr)
        return 1

    print(info.model_dump_json(indent=2) if args.json else format_version(info))
    return 0


def load_changelog(path: Path) -> Changelog | None:
    """Parse the changelog at ``path``, searching for one if it is a directory."""
    if path.is_dir():
        found = find_changelog(path)
        if found is None:
            return None
        logger.info("Using changelog %s", found.path)
        return found.changelog
    return parsefile(path)
