"""
Banned word list loading.

The list is plain UTF-8 text with one word per line. Lines are stripped,
blank lines are dropped and duplicates collapse. There is no comment syntax
and no validation of the words themselves: whatever survives stripping is
matched verbatim against identifier text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .errors import TabooFileError

logger = logging.getLogger(__name__)


def parse_banned_words(text: str) -> frozenset[str]:
    """Build the banned word set from the contents of a word list."""
    return frozenset(
        word for word in (line.strip() for line in text.split("\n")) if word
    )


def load_banned_words(path: Union[str, Path]) -> frozenset[str]:
    """
    Load the banned word set from a file.

    Raises:
        TabooFileError: the file cannot be opened or read. No scanning
            should happen without a word list.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise TabooFileError(f"Error opening taboo file {path}: {e}") from e

    # Only \n separates words; a bare \r stays part of its line
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TabooFileError(f"Error reading taboo file {path}: {e}") from e

    words = parse_banned_words(text)
    logger.info("Loaded %d banned words from %s", len(words), path)
    return words
