"""Row sinks — where converted rows go.

The converter only needs two operations from its output: write one row
of strings, and flush at the end.  Anything with that shape works, which
keeps the converter testable against an in-memory buffer.  ``CsvRowSink``
is the real implementation, delegating quoting and escaping to ``csv``.
"""

import csv
from collections.abc import Sequence
from typing import Protocol, TextIO

from smaps_csv.errors import ConfigError

QUOTE_CHAR = '"'


def validate_delimiter(delimiter: str) -> str:
    """Return *delimiter* if it is usable as a CSV separator.

    Raises:
        ConfigError: If it is not exactly one character, or is a line
            terminator or the quote character.

    """
    if len(delimiter) != 1:
        msg = f"delimiter must be one character, got {delimiter!r}"
        raise ConfigError(msg)
    if delimiter in "\r\n":
        msg = "delimiter cannot be a line terminator"
        raise ConfigError(msg)
    if delimiter == QUOTE_CHAR:
        msg = "delimiter cannot be the quote character '\"'"
        raise ConfigError(msg)
    return delimiter


class RowSink(Protocol):
    """Accept rows one at a time."""

    def writerow(self, row: Sequence[str]) -> None:
        """Write a single row."""
        ...

    def flush(self) -> None:
        """Push any buffered rows to the underlying stream."""
        ...


class CsvRowSink:
    """Write rows as delimited text to a text stream.

    The stream should be opened with ``newline=""`` when it is a file,
    as the ``csv`` module requires.
    """

    def __init__(self, stream: TextIO, *, delimiter: str = ",") -> None:
        """Create a sink writing to *stream*.

        Args:
            stream: Destination text stream.
            delimiter: Single character separating columns.

        Raises:
            ConfigError: If *delimiter* is not a usable separator.

        """
        self._stream = stream
        self._writer = csv.writer(
            stream,
            delimiter=validate_delimiter(delimiter),
            quotechar=QUOTE_CHAR,
            lineterminator="\n",
        )
        self._rows_written = 0

    @property
    def rows_written(self) -> int:
        """Return how many rows (header included) have been written."""
        return self._rows_written

    def writerow(self, row: Sequence[str]) -> None:
        """Write *row* as one delimited line."""
        self._writer.writerow(row)
        self._rows_written += 1

    def flush(self) -> None:
        """Flush the underlying stream."""
        self._stream.flush()
