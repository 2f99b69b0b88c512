"""
Banned identifier scanning.

Handles:
- Source file loading (read once, immutable bytes)
- Default source directory listing
- Membership matching of identifier occurrences against the banned set
- Run-wide verdict aggregation, sequential or one thread per file

Diagnostics come out in input file order, then in the order the occurrence
source emits identifiers. Scanning never stops at the first match.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Union

from .errors import SourceDirectoryError, SourceReadError
from .extract import extract_line
from .occurrences import HaskellOccurrenceSource, OccurrenceSource
from .reporting import BannedMatch, DiagnosticReporter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_source(path: PathLike) -> bytes:
    """Read a source file into an immutable buffer."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise SourceReadError(f"Error reading source file {path}: {e}") from e


def list_source_dir(directory: PathLike) -> list[Path]:
    """
    List every entry directly inside ``directory``, sorted by name.

    Nothing is filtered out: files the grammar cannot parse are skipped
    later, and entries that cannot be read as files (subdirectories, broken
    links) abort the run when the scanner reads them.
    """
    directory = Path(directory)
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise SourceDirectoryError(f"Failed to read {directory}/ directory: {e}") from e
    return entries


class BannedIdentifierScanner:
    """
    Checks source files for identifiers in a banned word set.

    The verdict (``seen_banned_word``) only ever goes from False to True and
    covers every file scanned by this instance.
    """

    def __init__(
        self,
        banned_words: Iterable[str],
        source: Optional[OccurrenceSource] = None,
        reporter: Optional[DiagnosticReporter] = None,
        jobs: int = 1,
    ) -> None:
        self.banned_words = frozenset(banned_words)
        self.source = source if source is not None else HaskellOccurrenceSource()
        self.reporter = reporter if reporter is not None else DiagnosticReporter()
        self.jobs = max(1, jobs)
        self.seen_banned_word = False
        self.files_scanned = 0
        self.files_skipped = 0
        self._lock = threading.Lock()

    def iter_matches(self, path: PathLike) -> Iterator[BannedMatch]:
        """Yield the banned identifiers of one file in emission order."""
        display = str(path)
        buffer = read_source(path)

        occurrences = self.source.occurrences(buffer, display)
        if occurrences is None:
            logger.debug("Skipping %s: could not be parsed", display)
            with self._lock:
                self.files_skipped += 1
            return
        with self._lock:
            self.files_scanned += 1

        for occ in occurrences:
            if occ.text not in self.banned_words:
                continue
            yield BannedMatch(
                path=display,
                occurrence=occ,
                excerpt=extract_line(buffer, occ.start_byte, occ.end_byte, occ.text),
            )

    def scan_file(self, path: PathLike) -> list[BannedMatch]:
        """Collect all banned identifiers of one file without reporting them."""
        return list(self.iter_matches(path))

    def _record(self, path: PathLike, count: int) -> None:
        if count:
            self.seen_banned_word = True
            logger.info("%s: %d banned identifier(s)", path, count)

    def scan(self, paths: Sequence[PathLike]) -> bool:
        """
        Scan ``paths`` in order and return True if any banned identifier was found.

        Raises:
            SourceReadError: a file could not be read. Aborts the whole run.
            IdentifierDecodeError: an identifier is not valid UTF-8.
        """
        logger.info("Scanning %d file(s) for %d banned word(s)", len(paths), len(self.banned_words))

        if self.jobs > 1 and len(paths) > 1:
            self._scan_parallel(paths)
        else:
            for path in paths:
                count = 0
                for match in self.iter_matches(path):
                    self.reporter.report(match)
                    count += 1
                self._record(path, count)

        logger.info(
            "Scanned %d file(s), skipped %d unparseable; %s",
            self.files_scanned,
            self.files_skipped,
            self.reporter.summary(),
        )
        return self.seen_banned_word

    def _scan_parallel(self, paths: Sequence[PathLike]) -> None:
        # map() hands results back in input order, so each file's buffer is
        # flushed whole and in order; the first failing file raises here.
        with ThreadPoolExecutor(max_workers=self.jobs, thread_name_prefix="taboolint") as pool:
            for path, matches in zip(paths, pool.map(self.scan_file, paths)):
                self.reporter.report_file(matches)
                self._record(path, len(matches))


def scan_paths(
    banned_words: Iterable[str],
    paths: Sequence[PathLike],
    source: Optional[OccurrenceSource] = None,
    reporter: Optional[DiagnosticReporter] = None,
    jobs: int = 1,
) -> bool:
    """Scan ``paths`` for ``banned_words`` and return the verdict."""
    scanner = BannedIdentifierScanner(banned_words, source=source, reporter=reporter, jobs=jobs)
    return scanner.scan(paths)
