"""
Command line entry point for the line diff engine.

This module handles:
- Command line argument parsing
- Logging configuration
- Loading settings and applying overrides
- Reading both documents and printing the rendered diff
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

import chardet

from linediff import __version__
from linediff.core.diff.formatters import SideBySideFormatter, UnifiedFormatter
from linediff.core.diff.text_diff import DiffError, LineDiffEngine, split_lines
from linediff.core.models import DiffResult, ViewMode
from linediff.services.settings import ComparisonSettings, SettingsManager

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "linediff"

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_TROUBLE = 2

DEFAULT_ENCODING = "utf-8"
ENCODING_CONFIDENCE = 0.7


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    left_path: str = ""
    right_path: str = ""
    ignore_whitespace: Optional[bool] = None
    ignore_case: Optional[bool] = None
    view_mode: Optional[ViewMode] = None
    width: Optional[int] = None
    max_cells: Optional[int] = None
    show_line_numbers: Optional[bool] = None
    stat_only: bool = False
    swap: bool = False
    config_file: Optional[str] = None
    encoding: Optional[str] = None
    log_level: str = "WARNING"


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True, stream: Optional[TextIO] = None):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Diff output goes to stdout, so log records go to stderr.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True, stream=sys.stderr))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Line-by-line text comparison",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt               Side-by-side comparison
  %(prog)s -u old.txt new.txt            Unified view
  %(prog)s -w -i old.txt new.txt         Ignore whitespace and case
  %(prog)s --stat old.txt new.txt        Only print the counts

Exit status is 0 if the inputs are the same, 1 if different, 2 if trouble.
        """
    )

    parser.add_argument('left', help='Original file')
    parser.add_argument('right', help='Modified file')

    # Comparison options
    parser.add_argument(
        '-w', '--ignore-whitespace',
        action='store_true',
        default=None,
        help='Collapse whitespace runs and trim lines before comparing'
    )
    parser.add_argument(
        '-i', '--ignore-case',
        action='store_true',
        default=None,
        help='Compare lines case-insensitively'
    )
    parser.add_argument(
        '--max-cells',
        type=int,
        default=None,
        help='Refuse inputs whose line counts multiply past this value (0 disables)'
    )
    parser.add_argument(
        '--swap',
        action='store_true',
        help='Swap the left and right inputs'
    )

    # Display options
    view_group = parser.add_mutually_exclusive_group()
    view_group.add_argument(
        '-s', '--split',
        action='store_const',
        const=ViewMode.SPLIT,
        dest='view_mode',
        help='Side-by-side view'
    )
    view_group.add_argument(
        '-u', '--unified',
        action='store_const',
        const=ViewMode.UNIFIED,
        dest='view_mode',
        help='Unified view'
    )
    parser.add_argument(
        '--width',
        type=int,
        default=None,
        help='Total width of the side-by-side view'
    )
    parser.add_argument(
        '--no-line-numbers',
        action='store_false',
        default=None,
        dest='show_line_numbers',
        help='Hide line numbers'
    )
    parser.add_argument(
        '--stat',
        action='store_true',
        help='Only print the summary counts'
    )
    parser.add_argument(
        '--encoding',
        default=None,
        help='Text encoding of both files (detected when omitted)'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {__version__}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs()
    result.left_path = parsed.left
    result.right_path = parsed.right
    result.ignore_whitespace = parsed.ignore_whitespace
    result.ignore_case = parsed.ignore_case
    result.view_mode = parsed.view_mode
    result.width = parsed.width
    result.max_cells = parsed.max_cells
    result.show_line_numbers = parsed.show_line_numbers
    result.stat_only = parsed.stat
    result.swap = parsed.swap
    result.config_file = parsed.config
    result.encoding = parsed.encoding
    result.log_level = 'DEBUG' if parsed.verbose else parsed.log_level

    return result


def apply_overrides(settings: ComparisonSettings, args: CommandLineArgs) -> ComparisonSettings:
    """Return a copy of settings with command line values applied."""
    overrides = {}

    if args.ignore_whitespace is not None:
        overrides['ignore_whitespace'] = args.ignore_whitespace
    if args.ignore_case is not None:
        overrides['ignore_case'] = args.ignore_case
    if args.view_mode is not None:
        overrides['view_mode'] = args.view_mode
    if args.width is not None:
        overrides['width'] = args.width
    if args.show_line_numbers is not None:
        overrides['show_line_numbers'] = args.show_line_numbers
    if args.max_cells is not None:
        overrides['max_table_cells'] = args.max_cells

    return replace(settings, **overrides)


# =============================================================================
# Output
# =============================================================================

def detect_encoding(content: bytes) -> str:
    """Guess the encoding of raw file content."""
    if not content:
        return DEFAULT_ENCODING

    result = chardet.detect(content)
    if result['confidence'] > ENCODING_CONFIDENCE and result['encoding']:
        encoding = result['encoding'].lower()
        # ASCII is a subset of UTF-8
        if encoding == 'ascii':
            return DEFAULT_ENCODING
        return encoding

    return DEFAULT_ENCODING


def read_text(path: str, encoding: Optional[str] = None) -> str:
    """Read a document, replacing undecodable bytes."""
    with open(path, 'rb') as f:
        content = f.read()

    if encoding is None:
        encoding = detect_encoding(content)
        logger.debug("Detected encoding %s for %s", encoding, path)
    return content.decode(encoding, errors='replace')


def render(result: DiffResult, settings: ComparisonSettings) -> Iterator[str]:
    """Render a result in the configured layout."""
    if settings.view_mode == ViewMode.UNIFIED:
        formatter = UnifiedFormatter(
            tab_size=settings.tab_size,
            show_line_numbers=settings.show_line_numbers
        )
    else:
        formatter = SideBySideFormatter(
            width=settings.width,
            tab_size=settings.tab_size,
            show_line_numbers=settings.show_line_numbers
        )
    yield from formatter.render(result)


def format_summary(result: DiffResult) -> str:
    return (
        f"{result.added_count} added, "
        f"{result.removed_count} removed, "
        f"{result.unchanged_count} unchanged"
    )


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """
    Command line main entry point.

    Returns:
        Exit code (0 identical, 1 different, 2 trouble)
    """
    out = stdout or sys.stdout
    args = parse_arguments(argv)

    setup_logging(args.log_level)

    config_path = Path(args.config_file) if args.config_file else None
    settings = apply_overrides(SettingsManager(config_path).settings.comparison, args)

    left_path, right_path = args.left_path, args.right_path
    if args.swap:
        left_path, right_path = right_path, left_path

    try:
        left_text = read_text(left_path, args.encoding)
        right_text = read_text(right_path, args.encoding)
    except (OSError, LookupError) as e:
        logger.error("Cannot read input: %s", e)
        return EXIT_TROUBLE

    engine = LineDiffEngine(settings.policy, max_cells=settings.max_table_cells)
    try:
        result = engine.compare(split_lines(left_text), split_lines(right_text))
    except DiffError as e:
        logger.error("%s", e)
        return EXIT_TROUBLE

    logger.info("Compared %s and %s: %s", left_path, right_path, result.statistics)

    if not args.stat_only:
        for line in render(result, settings):
            print(line, file=out)

    print(format_summary(result), file=out)

    return EXIT_IDENTICAL if result.is_identical else EXIT_DIFFERENT


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
