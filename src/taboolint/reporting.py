"""
Diagnostic reporting.

Handles:
- BannedMatch dataclass
- One-time banner on standard output
- One diagnostic line per match on the diagnostic stream (stderr)
- Optional ANSI highlighting of the banned token
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from .extract import LineExcerpt
from .occurrences import IdentifierOccurrence

BANNER_LINES = (
    "ERROR: Banned identifiers found",
    "Found the following issues:",
)

# Bright red, bold
HIGHLIGHT = "\033[1;91m"
RESET = "\033[0m"

COLOR_MODES = ("auto", "always", "never")


@dataclass(frozen=True)
class BannedMatch:
    """A banned identifier found in a file."""
    path: str
    occurrence: IdentifierOccurrence
    excerpt: LineExcerpt

    @property
    def location(self) -> str:
        return f"{self.path}:{self.occurrence.start_row}:{self.occurrence.start_column}"

    def render(self, color: bool = False) -> str:
        matched = self.excerpt.matched
        if color:
            matched = f"{HIGHLIGHT}{matched}{RESET}"
        return f"({self.location}) {self.excerpt.prefix}{matched}{self.excerpt.suffix}"

    def __str__(self) -> str:
        return self.render(color=False)


def should_color(mode: str, stream: TextIO) -> bool:
    """Decide whether to highlight output written to ``stream``."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    if mode != "auto":
        raise ValueError(f"Unknown color mode: {mode!r} (expected one of {COLOR_MODES})")
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class DiagnosticReporter:
    """Writes the banner once and one line per banned identifier."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        color: str = "auto",
    ) -> None:
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.color = should_color(color, self.err)
        self.match_count = 0
        self.files_with_matches: list[str] = []
        self._files_seen: set[str] = set()

    @property
    def banner_shown(self) -> bool:
        return self.match_count > 0

    def report(self, match: BannedMatch) -> None:
        """Emit one match, preceded by the banner if it is the first."""
        if not self.banner_shown:
            for line in BANNER_LINES:
                print(line, file=self.out)
            self.out.flush()

        if match.path not in self._files_seen:
            self._files_seen.add(match.path)
            self.files_with_matches.append(match.path)
        self.match_count += 1

        print(match.render(color=self.color), file=self.err)

    def report_file(self, matches: list[BannedMatch]) -> None:
        """Emit every match of one file back to back."""
        for match in matches:
            self.report(match)
        self.err.flush()

    def summary(self) -> str:
        if not self.match_count:
            return "No banned identifiers found"
        return (
            f"{self.match_count} banned identifier(s) "
            f"in {len(self.files_with_matches)} file(s)"
        )
