"""
CLI entry point for taboolint.

Usage:
    taboolint <taboo> [file ...]        Check files (default: every file in src/)

Exit status is 0 when no banned identifier was found, 1 when at least one was
found or the run failed (unreadable word list or source file).
"""

from __future__ import annotations

import argparse
import glob
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config import LintConfig, build_config
from .errors import TaboolintError
from .reporting import COLOR_MODES, DiagnosticReporter
from .scanner import BannedIdentifierScanner, list_source_dir
from .words import load_banned_words

logger = logging.getLogger(__name__)

_WILDCARD_CHARS = ("*", "?", "[")


def expand_file_args(files: Sequence[str]) -> list[str]:
    """
    Expand wildcard patterns in file arguments on Windows.

    POSIX shells already expand them; cmd.exe and PowerShell do not. A pattern
    that matches nothing is kept as given so that the read error names it.
    """
    if sys.platform != "win32":
        return list(files)

    expanded: list[str] = []
    for arg in files:
        if any(c in arg for c in _WILDCARD_CHARS):
            matches = sorted(glob.glob(arg))
            expanded.extend(matches or [arg])
        else:
            expanded.append(arg)
    return expanded


def resolve_paths(cfg: LintConfig) -> list[Path]:
    """Explicit files in the order given, else the default source directory."""
    if cfg.files:
        return list(cfg.files)
    paths = list_source_dir(cfg.source_dir)
    logger.info("No files given; scanning %d file(s) in %s", len(paths), cfg.source_dir)
    return paths


def run(cfg: LintConfig, reporter: Optional[DiagnosticReporter] = None) -> bool:
    """Load the word list, scan, and return True if a banned identifier was found."""
    banned_words = load_banned_words(cfg.taboo)
    paths = resolve_paths(cfg)
    reporter = reporter or DiagnosticReporter(color=cfg.color)

    scanner = BannedIdentifierScanner(banned_words, reporter=reporter, jobs=cfg.jobs)
    return scanner.scan(paths)


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taboolint",
        description="Flag banned identifier names in Haskell source files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    taboolint taboo.txt
    taboolint taboo.txt src/Main.hs src/Lib.hs
    taboolint taboo.txt --jobs 4 --color never
""",
    )
    parser.add_argument('--version', action='version', version=f'taboolint {__version__}')
    parser.add_argument('taboo', help='Location of banned words list')
    parser.add_argument('files', nargs='*', help='Files to check against (default: all files in the source directory)')
    parser.add_argument(
        '--source-dir',
        default=None,
        help='Directory scanned when no files are given (default: src)',
    )
    parser.add_argument(
        '--color',
        choices=COLOR_MODES,
        default=None,
        help='Highlight banned identifiers (default: auto)',
    )
    parser.add_argument(
        '-j', '--jobs',
        type=int,
        default=None,
        help='Number of files to scan in parallel (default: 1)',
    )
    parser.add_argument(
        '--config',
        default=None,
        metavar='PATH',
        help='YAML config file (default: ./taboolint.yaml, then ~/.taboolint/config.yaml)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Log progress to stderr (-vv for debug output)',
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    # Source lines may hold any Unicode; don't die on a cp1252 console
    if sys.platform == "win32":
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(errors="replace")  # type: ignore[union-attr]

    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        cfg = build_config(
            taboo=Path(args.taboo),
            files=tuple(Path(f) for f in expand_file_args(args.files)),
            config_path=Path(args.config) if args.config else None,
            overrides={
                "source_dir": args.source_dir,
                "color": args.color,
                "jobs": args.jobs,
            },
        )
        found = run(cfg)
    except TaboolintError as e:
        print(e, file=sys.stderr)
        return 1

    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main())
