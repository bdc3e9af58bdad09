"""Line reader — split a binary stream into bounded text lines.

``/proc/<pid>/smaps`` is plain text, but it arrives as bytes from a file,
a pipe, or a network body.  The reader pulls one line at a time so the
converter never holds more than a single line in memory, and it refuses
lines longer than a fixed cap: a well-formed smaps line is far shorter
than 256 bytes, so anything longer means the input is not smaps at all.

Lines are decoded as UTF-8 with ``surrogateescape``.  Pathnames are
arbitrary bytes on Linux; the escape handler lets an undecodable path
survive the trip to the output unchanged.
"""

from collections.abc import Iterator
from typing import BinaryIO

from smaps_csv.errors import LineTooLongError

MAX_LINE_LENGTH = 256
"""Maximum bytes per line, not counting the LF or CRLF terminator."""

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

_LF = b"\n"
_CR = b"\r"


class LineReader:
    """Iterate over the lines of a binary stream, once.

    Each yielded line has its ``\\n`` (and a preceding ``\\r``) removed.
    A final line without a terminator is still yielded.  End of stream
    simply ends the iteration; ``OSError`` from the stream propagates.
    The byte limit applies to the line content only, so a line is
    accepted or rejected the same way whether or not it is terminated.
    """

    def __init__(self, stream: BinaryIO, *, max_line_length: int = MAX_LINE_LENGTH) -> None:
        """Wrap *stream*, rejecting lines longer than *max_line_length* bytes."""
        self._stream = stream
        self._max_line_length = max_line_length
        self._line_no = 0

    @property
    def line_no(self) -> int:
        """Return the 1-based number of the last line yielded (0 before any)."""
        return self._line_no

    @property
    def max_line_length(self) -> int:
        """Return the per-line byte limit."""
        return self._max_line_length

    def __iter__(self) -> Iterator[str]:
        """Yield decoded lines until the stream is exhausted.

        Raises:
            LineTooLongError: If a line exceeds the byte limit.

        """
        limit = self._max_line_length
        while True:
            # Room for the content, a CRLF, and one byte to detect overflow.
            raw = self._stream.readline(limit + len(_CR + _LF) + 1)
            if not raw:
                return
            line = _strip_terminator(raw)
            if len(line) > limit:
                raise LineTooLongError(self._line_no + 1, limit)
            self._line_no += 1
            yield line.decode(ENCODING, ENCODING_ERRORS)


def _strip_terminator(raw: bytes) -> bytes:
    """Remove a trailing LF or CRLF."""
    if raw.endswith(_LF):
        raw = raw[:-1]
        if raw.endswith(_CR):
            raw = raw[:-1]
    return raw
