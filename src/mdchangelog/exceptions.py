"""Custom exceptions for mdchangelog."""


class ChangelogError(Exception):
    """Base exception for mdchangelog operations."""


class StructureError(ChangelogError):
    """The Markdown tree violates an invariant of the heading tree."""


class NormalizationError(ChangelogError):
    """Heading text normalization did not reach a fixed point."""
