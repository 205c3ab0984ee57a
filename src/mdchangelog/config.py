"""Local configuration for mdchangelog."""

from __future__ import annotations

import os


DEFAULT_SEARCH_SUBDIRS = "docs/src"
DEFAULT_DISPLAY_VERSIONS = 5

# Upper bound on bracket/backtick stripping passes over a heading.
MAX_NORMALIZE_ITERATIONS = 1000
# Section holding unsectioned changes when a version also has subsections.
GENERAL_SECTION_NAME = "General"

# Subdirectories of a package searched for a changelog, besides the package root.
MDCHANGELOG_SEARCH_SUBDIRS = tuple(
    part for part in os.getenv("MDCHANGELOG_SEARCH_SUBDIRS", DEFAULT_SEARCH_SUBDIRS).split(":") if part
)
MDCHANGELOG_DISPLAY_VERSIONS = int(os.getenv("MDCHANGELOG_DISPLAY_VERSIONS", str(DEFAULT_DISPLAY_VERSIONS)))
