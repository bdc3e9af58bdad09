"""Command-line interface: ``smaps-csv -i smaps.txt -o smaps.csv``.

The CLI is a thin wrapper.  It turns flags into a ``ConvertConfig``,
opens the two files, and hands the streams to ``convert()``.  Conversion
is all-or-nothing: when it fails, the half-written output file is
removed so nothing downstream mistakes it for a result.

Exit status:
    - 0 — conversion succeeded.
    - 1 — conversion failed (I/O, format, or schema error).
    - 2 — invalid command-line usage.
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from smaps_csv.config import DEFAULT_DELIMITER, ConvertConfig
from smaps_csv.converter import ConversionResult, convert
from smaps_csv.errors import ConfigError, SmapsError
from smaps_csv.logging import Logger, LogLevel
from smaps_csv.reader import ENCODING, ENCODING_ERRORS, MAX_LINE_LENGTH
from smaps_csv.sink import CsvRowSink, validate_delimiter

PROG = "smaps-csv"

EXIT_OK = 0
EXIT_FAILURE = 1


def _delimiter(value: str) -> str:
    """Argparse type for ``-sep``."""
    try:
        return validate_delimiter(value)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _positive_int(value: str) -> int:
    """Argparse type for ``--max-line-length``."""
    try:
        number = int(value)
    except ValueError as e:
        msg = f"not an integer: {value!r}"
        raise argparse.ArgumentTypeError(msg) from e
    if number <= 0:
        msg = f"must be positive, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``smaps-csv`` command."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Convert a /proc/<pid>/smaps report into CSV, one row per region.",
    )
    parser.add_argument(
        "-i",
        dest="input_path",
        type=Path,
        required=True,
        help="input filename to parse (in /proc/<pid>/smaps format)",
    )
    parser.add_argument(
        "-o",
        dest="output_path",
        type=Path,
        required=True,
        help="output CSV filename",
    )
    parser.add_argument(
        "-sep",
        dest="delimiter",
        type=_delimiter,
        default=DEFAULT_DELIMITER,
        help="field separator (one character, default %(default)r)",
    )
    parser.add_argument(
        "--max-line-length",
        type=_positive_int,
        default=MAX_LINE_LENGTH,
        help="reject input lines longer than this many bytes (default %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="print the conversion log to stderr (-vv includes every region)",
    )
    return parser


def run(config: ConvertConfig, *, logger: Logger | None = None) -> ConversionResult:
    """Convert ``config.input_path`` into ``config.output_path``.

    Raises:
        SmapsError: If the conversion fails; the output file is removed.
        OSError: If either file cannot be opened, read, or written.

    """
    with (
        config.input_path.open("rb") as src,
        config.output_path.open("w", newline="", encoding=ENCODING, errors=ENCODING_ERRORS) as dst,
    ):
        try:
            sink = CsvRowSink(dst, delimiter=config.delimiter)
            return convert(src, sink, max_line_length=config.max_line_length, logger=logger)
        except (SmapsError, OSError):
            dst.close()
            config.output_path.unlink(missing_ok=True)
            raise


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run the conversion, and return the exit status."""
    args = build_parser().parse_args(argv)
    config = ConvertConfig(
        input_path=args.input_path,
        output_path=args.output_path,
        delimiter=args.delimiter,
        max_line_length=args.max_line_length,
    )
    logger = Logger()

    try:
        result = run(config, logger=logger)
    except (SmapsError, OSError) as e:
        status = EXIT_FAILURE
        print(f"{PROG}: error: {e}", file=sys.stderr)  # noqa: T201
    else:
        status = EXIT_OK
        logger.log(
            LogLevel.INFO,
            f"wrote {result.regions} regions to {config.output_path}",
            source="cli",
        )

    if args.verbose:
        min_level = LogLevel.DEBUG if args.verbose > 1 else LogLevel.INFO
        for entry in logger.filter(min_level=min_level):
            print(entry, file=sys.stderr)  # noqa: T201
    return status
