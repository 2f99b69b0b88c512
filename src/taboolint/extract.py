"""
Line context extraction from byte offsets.

Given a source buffer and the byte span of a token, find the physical line
that contains it and split that line into (prefix, matched, suffix). Both
'\\n' and '\\r' end a line, so CRLF, LF and bare CR files all work without
any decoding of the whole buffer.
"""

from __future__ import annotations

from dataclasses import dataclass

_NEWLINE = b"\n"
_CARRIAGE_RETURN = b"\r"


@dataclass(frozen=True)
class LineExcerpt:
    """The physical line around a match, split at the match boundaries."""
    prefix: str
    matched: str
    suffix: str

    @property
    def line(self) -> str:
        return f"{self.prefix}{self.matched}{self.suffix}"


def line_bounds(buffer: bytes, start_byte: int, end_byte: int) -> tuple[int, int]:
    """
    Return (line_start, line_end) of the physical line holding the span.

    line_start is one past the last line break before start_byte, or 0.
    line_end is the first line break at or after end_byte, or len(buffer).
    """
    start_byte = max(0, min(start_byte, len(buffer)))
    end_byte = max(start_byte, min(end_byte, len(buffer)))

    last_break = max(
        buffer.rfind(_NEWLINE, 0, start_byte),
        buffer.rfind(_CARRIAGE_RETURN, 0, start_byte),
    )
    line_start = last_break + 1  # -1 (not found) lands on 0

    breaks = [
        pos
        for pos in (buffer.find(_NEWLINE, end_byte), buffer.find(_CARRIAGE_RETURN, end_byte))
        if pos != -1
    ]
    line_end = min(breaks) if breaks else len(buffer)

    return line_start, line_end


def extract_line(buffer: bytes, start_byte: int, end_byte: int, matched: str) -> LineExcerpt:
    """
    Split the line around [start_byte, end_byte) into a LineExcerpt.

    Prefix and suffix are decoded lossily; invalid UTF-8 shows up as U+FFFD
    instead of failing the scan. ``matched`` is the token text as already
    decoded by the occurrence source.
    """
    line_start, line_end = line_bounds(buffer, start_byte, end_byte)
    return LineExcerpt(
        prefix=buffer[line_start:start_byte].decode("utf-8", errors="replace"),
        matched=matched,
        suffix=buffer[end_byte:line_end].decode("utf-8", errors="replace"),
    )
