"""
Exception hierarchy for taboolint.

Everything raised here is fatal for a run: the CLI prints the message and
exits with status 1. Files the grammar cannot parse are not errors and never
show up here.
"""

from __future__ import annotations


class TaboolintError(Exception):
    """Base class for all taboolint errors."""


class TabooFileError(TaboolintError, OSError):
    """The banned-word list could not be opened or read."""


class SourceReadError(TaboolintError, OSError):
    """A source file could not be opened or read."""


class SourceDirectoryError(TaboolintError, OSError):
    """The default source directory could not be listed."""


class IdentifierDecodeError(TaboolintError, ValueError):
    """An identifier token is not valid UTF-8."""

    def __init__(self, path: str, start_byte: int, end_byte: int):
        self.path = path
        self.start_byte = start_byte
        self.end_byte = end_byte
        super().__init__(
            f"Identifier at bytes {start_byte}..{end_byte} of {path} is not valid UTF-8"
        )


class ConfigError(TaboolintError):
    """The configuration file is malformed."""
