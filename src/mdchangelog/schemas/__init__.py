"""Shared schemas for mdchangelog."""

from mdchangelog.schemas.changelog import Changelog, Changes, VersionInfo

__all__ = ["Changelog", "Changes", "VersionInfo"]
