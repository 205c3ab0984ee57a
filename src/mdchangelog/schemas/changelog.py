"""Changelog models."""

from __future__ import annotations

import datetime
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

# Either a flat list of changes, or an ordered mapping of section name to changes.
Changes = Union[list[str], dict[str, list[str]]]


class VersionInfo(BaseModel):
    """The changelog entry for a single version.

    Attributes:
        version: Version number or name (e.g. "1.2.3" or "Unreleased").
        url: URL linked from the version heading, if any.
        date: Release date, if one could be parsed from the heading.
        changes: Changes as a flat list, or as an ordered mapping from section
            name to changes. When a version has both sections and unsectioned
            changes, the latter are stored under a "General" section (or
            "General_", "General__", ... if that name is taken).
    """

    model_config = ConfigDict(frozen=True)

    version: str | None = None
    url: str | None = None
    date: datetime.date | None = None
    changes: Changes = Field(default_factory=list)

    @property
    def is_sectioned(self) -> bool:
        """Whether the changes are grouped into named sections."""
        return isinstance(self.changes, dict)


class Changelog(BaseModel):
    """A simple in-memory view of a Markdown changelog.

    Not a round-trippable representation: formatting is discarded, keeping
    only what is needed to look up a version and its changes.

    Attributes:
        title: Text of the first heading in the document.
        intro: Text of the first paragraph under the title heading.
        versions: Version entries in document order.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    intro: str | None = None
    versions: list[VersionInfo] = Field(default_factory=list)
