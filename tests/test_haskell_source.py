"""
Tests for the tree-sitter backed Haskell occurrence source.
"""

import pytest

pytest.importorskip("tree_sitter")
pytest.importorskip("tree_sitter_haskell")

from taboolint.occurrences import HaskellOccurrenceSource, IdentifierOccurrence
from taboolint.reporting import DiagnosticReporter
from taboolint.scanner import scan_paths


SAMPLE = b"""module Sample where

import Data.Maybe (fromJust)

first :: [a] -> a
first xs = head xs

unsafe m = fromJust m
"""


@pytest.fixture(scope="module")
def haskell():
    return HaskellOccurrenceSource()


class TestHaskellOccurrences:

    def test_finds_variables(self, haskell):
        occs = list(haskell.occurrences(SAMPLE))
        texts = [o.text for o in occs]
        assert "head" in texts
        assert "xs" in texts
        assert "fromJust" in texts

    def test_positions_match_buffer(self, haskell):
        for occ in haskell.occurrences(SAMPLE):
            assert isinstance(occ, IdentifierOccurrence)
            assert SAMPLE[occ.start_byte:occ.end_byte].decode("utf-8") == occ.text
            assert occ.start_row >= 1
            assert occ.start_column >= 0

    def test_head_row_and_column(self, haskell):
        head = next(o for o in haskell.occurrences(SAMPLE) if o.text == "head")
        assert (head.start_row, head.start_column) == (6, 11)

    def test_emitted_in_source_order(self, haskell):
        starts = [o.start_byte for o in haskell.occurrences(SAMPLE)]
        assert starts == sorted(starts)

    def test_type_constructors_are_not_variables(self, haskell):
        texts = {o.text for o in haskell.occurrences(SAMPLE)}
        assert "Sample" not in texts
        assert "Maybe" not in texts

    def test_empty_buffer(self, haskell):
        assert list(haskell.occurrences(b"") or []) == []

    def test_non_haskell_bytes_do_not_raise(self, haskell):
        haskell.occurrences(b"\x00\x01\x02 {{{ ;;; \xff")


class TestEndToEnd:

    def test_reports_banned_identifier(self, tmp_path, capsys):
        path = tmp_path / "Sample.hs"
        path.write_bytes(SAMPLE)
        reporter = DiagnosticReporter(color="never")

        assert scan_paths({"head"}, [path], reporter=reporter) is True

        captured = capsys.readouterr()
        assert captured.out.startswith("ERROR: Banned identifiers found")
        assert f"({path}:6:11) first xs = head xs" in captured.err.splitlines()

    def test_no_substring_match(self, tmp_path, capsys):
        path = tmp_path / "Sample.hs"
        path.write_bytes(SAMPLE)
        reporter = DiagnosticReporter(color="never")

        assert scan_paths({"hea", "fromJ", "X"}, [path], reporter=reporter) is False
        assert capsys.readouterr().err == ""

    def test_parallel_scan(self, tmp_path, capsys):
        paths = []
        for i in range(4):
            path = tmp_path / f"M{i}.hs"
            path.write_bytes(SAMPLE)
            paths.append(path)
        reporter = DiagnosticReporter(color="never")

        assert scan_paths({"fromJust"}, paths, reporter=reporter, jobs=2) is True
        err = capsys.readouterr().err.splitlines()
        names = [str(p) for p in paths]
        order = [names.index(line[1:].split(":")[0]) for line in err]
        assert order == sorted(order)
        assert set(order) == {0, 1, 2, 3}
