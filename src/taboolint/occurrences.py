"""
Identifier occurrences and where they come from.

Handles:
- IdentifierOccurrence dataclass (text + byte span + row/column)
- OccurrenceSource interface: bytes in, occurrences out (None if unparseable)
- HaskellOccurrenceSource: tree-sitter backed implementation

The scanner only ever talks to OccurrenceSource, so it can be driven by
synthetic occurrence lists in tests without any grammar installed.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .errors import IdentifierDecodeError

logger = logging.getLogger(__name__)

# tree-sitter node category that holds variable names in the Haskell grammar
VARIABLE_QUERY = "(variable) @variable-name"
VARIABLE_CAPTURE = "variable-name"


@dataclass(frozen=True)
class IdentifierOccurrence:
    """A single identifier token found in a source buffer."""
    text: str
    start_byte: int
    end_byte: int
    start_row: int     # 1-based
    start_column: int  # 0-based, in bytes


class OccurrenceSource(ABC):
    """Turns the raw bytes of one file into identifier occurrences."""

    @abstractmethod
    def occurrences(
        self, buffer: bytes, path: str = "<buffer>"
    ) -> Optional[Iterable[IdentifierOccurrence]]:
        """
        Return the identifier occurrences of ``buffer`` in emission order.

        Returns None when no syntax tree can be built for the buffer; the
        caller skips the file in that case. ``path`` is only used in error
        messages.
        """


# =============================================================================
# tree-sitter Haskell source
# =============================================================================

class HaskellOccurrenceSource(OccurrenceSource):
    """
    Occurrence source backed by tree-sitter and the Haskell grammar.

    A tree-sitter Parser must not be shared between threads, so each thread
    lazily builds its own parser and query.
    """

    def __init__(self, query_source: str = VARIABLE_QUERY, capture: str = VARIABLE_CAPTURE):
        self.query_source = query_source
        self.capture = capture
        self._local = threading.local()

    def _tools(self):
        tools = getattr(self._local, "tools", None)
        if tools is None:
            from tree_sitter import Language, Parser, Query
            import tree_sitter_haskell

            language = Language(tree_sitter_haskell.language())
            tools = (Parser(language), Query(language, self.query_source))
            self._local.tools = tools
            logger.debug(
                "Built Haskell parser for thread %s", threading.current_thread().name
            )
        return tools

    def occurrences(
        self, buffer: bytes, path: str = "<buffer>"
    ) -> Optional[Iterable[IdentifierOccurrence]]:
        parser, query = self._tools()
        tree = parser.parse(buffer)
        if tree is None:
            return None
        return self._iter_captures(query, tree.root_node, buffer, path)

    def _iter_captures(self, query, root, buffer: bytes, path: str) -> Iterator[IdentifierOccurrence]:
        from tree_sitter import QueryCursor

        for _pattern, captures in QueryCursor(query).matches(root):
            for node in captures.get(self.capture, []):
                yield occurrence_from_node(node, buffer, path)


def occurrence_from_node(node, buffer: bytes, path: str = "<buffer>") -> IdentifierOccurrence:
    """
    Build an occurrence from a captured syntax node.

    The identifier text is decoded strictly: only the surrounding line
    context may be lossy.

    Raises:
        IdentifierDecodeError: the node's bytes are not valid UTF-8.
    """
    start, end = node.start_byte, node.end_byte
    try:
        text = buffer[start:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise IdentifierDecodeError(path, start, end) from e
    return IdentifierOccurrence(
        text=text,
        start_byte=start,
        end_byte=end,
        start_row=node.start_point.row + 1,
        start_column=node.start_point.column,
    )
