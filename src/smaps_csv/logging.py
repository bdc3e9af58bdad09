"""Conversion log — a structured record of what a run did.

A conversion is all-or-nothing, so when it fails the interesting
question is *where*: which line, which region, which fields.  The logger
keeps an append-only list of entries the converter produces along the
way, and the CLI prints them on request (``-v``).

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, line).
- **Logger** — an append-only log with filtering.

Nothing is written anywhere until a caller asks; the converter stays
free of I/O beyond its input stream and row sink.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The stage that generated the event (e.g. "converter").
        line_no: The input line the event refers to, if any.

    """

    level: LogLevel
    message: str
    source: str
    line_no: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message`` with an optional line suffix."""
        text = f"[{self.level.name}] {self.source}: {self.message}"
        if self.line_no is not None:
            text += f" (line {self.line_no})"
        return text


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        line_no: int | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Stage that generated the event.
            line_no: Input line the event refers to.

        """
        self._entries.append(
            LogEntry(level=level, message=message, source=source, line_no=line_no)
        )

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)
