"""
taboolint - banned identifier linter for Haskell sources.

Flags every identifier whose spelling exactly matches an entry of a
banned-word list and reports it with its location and source line.

Usage:
    taboolint taboo.txt                       # scan every file in src/
    taboolint taboo.txt src/Foo.hs src/Bar.hs
    python -m taboolint taboo.txt --jobs 4
"""

__version__ = "0.1.0"
__author__ = "taboolint contributors"

from taboolint.words import load_banned_words, parse_banned_words
from taboolint.scanner import BannedIdentifierScanner, scan_paths
