"""
Pytest configuration and shared fixtures.
"""

import io
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taboolint.occurrences import IdentifierOccurrence, OccurrenceSource
from taboolint.reporting import DiagnosticReporter


# =============================================================================
# SYNTHETIC OCCURRENCES
# =============================================================================

def occurrence_of(buffer: bytes, text: str, nth: int = 0) -> IdentifierOccurrence:
    """Build the occurrence of the ``nth`` appearance of ``text`` in ``buffer``."""
    needle = text.encode("utf-8")
    start = -1
    for _ in range(nth + 1):
        start = buffer.index(needle, start + 1)
    line_start = max(buffer.rfind(b"\n", 0, start), buffer.rfind(b"\r", 0, start)) + 1
    row = buffer.count(b"\n", 0, start) + 1
    return IdentifierOccurrence(
        text=text,
        start_byte=start,
        end_byte=start + len(needle),
        start_row=row,
        start_column=start - line_start,
    )


class FakeOccurrenceSource(OccurrenceSource):
    """
    Replays occurrences keyed by path. Paths missing from the mapping are
    treated as unparseable.
    """

    def __init__(self, by_path: Optional[Dict[str, List[IdentifierOccurrence]]] = None):
        self.by_path = {}
        for path, occurrences in (by_path or {}).items():
            self.add(path, occurrences)

    def add(self, path, occurrences: List[IdentifierOccurrence]) -> None:
        self.by_path[Path(path).resolve()] = occurrences

    def occurrences(self, buffer, path="<buffer>"):
        found = self.by_path.get(Path(path).resolve())
        return list(found) if found is not None else None


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_source():
    return FakeOccurrenceSource()


@pytest.fixture
def streams():
    """(stdout, stderr) string buffers for a reporter."""
    return io.StringIO(), io.StringIO()


@pytest.fixture
def reporter(streams):
    out, err = streams
    return DiagnosticReporter(out=out, err=err, color="never")


@pytest.fixture
def write_file(tmp_path):
    """Write bytes or text to a file under tmp_path and return its path."""
    def _write(name: str, content) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path
    return _write
