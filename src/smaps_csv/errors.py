"""Error taxonomy for the smaps converter.

Every failure is fatal: a conversion either completes or aborts, so the
hierarchy exists to let callers *report* errors uniformly, not recover:

- **ReadError** — the input stream could not be read as lines.
- **BadFormatError** — a line does not have the expected structure.
- **SchemaMismatchError** — a region reports different fields than the first.
- **ConfigError** — the run was configured with invalid options.

Clean end of stream is not an error; the reader simply stops.
"""


class SmapsError(Exception):
    """Raise when an smaps conversion fails.

    ``line_no`` names the input line the failure refers to, when known.
    """

    line_no: int | None = None


class ReadError(SmapsError):
    """Raise when the input cannot be split into lines."""


class LineTooLongError(ReadError):
    """Raise when a line exceeds the reader's maximum length."""

    def __init__(self, line_no: int, limit: int) -> None:
        """Record the offending line number and the configured limit."""
        self.line_no = line_no
        self.limit = limit
        super().__init__(f"line {line_no} exceeds the maximum length of {limit} bytes")


class BadFormatError(SmapsError):
    """Raise when a line is structurally malformed.

    The pure parsing functions don't know where a line came from, so
    ``line_no`` is ``None`` until the converter attaches it.
    """

    def __init__(self, message: str, *, line_no: int | None = None) -> None:
        """Create the error with an optional source line number."""
        self.message = message
        self.line_no = line_no
        super().__init__(self._render())

    def with_line(self, line_no: int) -> "BadFormatError":
        """Return a copy of this error located at *line_no*."""
        return BadFormatError(self.message, line_no=line_no)

    def _render(self) -> str:
        if self.line_no is None:
            return f"bad format: {self.message}"
        return f"bad format at line {self.line_no}: {self.message}"


class SchemaMismatchError(SmapsError):
    """Raise when a region's field names differ from the first region's."""

    def __init__(
        self,
        line_no: int,
        expected: tuple[str, ...],
        actual: tuple[str, ...],
    ) -> None:
        """Record where the mismatch happened and both field sequences.

        Args:
            line_no: Header line of the region whose fields disagree.
            expected: Field names reported by the first region.
            actual: Field names reported by the offending region.

        """
        self.line_no = line_no
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"field names mismatch between the first region and the region at line {line_no}\n"
            f"fields in first region: {list(expected)}\n"
            f"fields in region at line {line_no}: {list(actual)}"
        )


class ConfigError(SmapsError):
    """Raise when conversion options are invalid."""
