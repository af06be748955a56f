"""Exceptions raised while processing a notes directory.

Every error that aborts a run derives from :class:`BacklinkerError` and names
the note it was raised for, so the command line can report it directly.
I/O failures are not wrapped and propagate as :class:`OSError`.
"""

from __future__ import annotations


class BacklinkerError(Exception):
    """Base class for fatal processing errors."""

    def __init__(self, message: str, name: str | None = None) -> None:
        self.name = name
        super().__init__(f"{name}: {message}" if name else message)


class FrontmatterError(BacklinkerError):
    """An opening ``---`` delimiter was never closed."""


class MetadataError(BacklinkerError):
    """The frontmatter block is not a valid YAML mapping."""


class MetadataTypeError(BacklinkerError, TypeError):
    """A metadata value does not have the shape the caller asked for."""


class DateNameError(BacklinkerError):
    """A date-named note whose filename is not a real calendar date."""


class DuplicateNoteError(BacklinkerError):
    """Two notes on disk share the same canonical (case-insensitive) key."""


class ConfigError(BacklinkerError):
    """The configuration file is unreadable or holds an invalid value."""
