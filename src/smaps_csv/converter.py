"""Mapping accumulator and schema guard — the conversion state machine.

The smaps format has no explicit record terminator: a region ends when
the next region header appears, or when the input runs out.  The
converter therefore holds exactly one in-progress ``Mapping`` and emits
it at each boundary:

    BEFORE_FIRST_REGION ──region──▶ ACCUMULATING_FIELDS ──end──▶ FINISHED
                                     │            ▲
                                     └─region/field┘

Emitting a mapping passes it through the schema guard.  The first
mapping defines the schema (its field names, in order) and triggers the
header row; every later mapping must report exactly the same names in
exactly the same order, or the run aborts with ``SchemaMismatchError``.
The kernel never varies fields between regions of one file, so a
mismatch means corrupt or concatenated input.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import BinaryIO

from smaps_csv.errors import BadFormatError, SchemaMismatchError, SmapsError
from smaps_csv.logging import Logger, LogLevel
from smaps_csv.mapping import Mapping, header_row
from smaps_csv.parser import LineKind, classify_line, parse_field, parse_region
from smaps_csv.reader import MAX_LINE_LENGTH, LineReader
from smaps_csv.sink import RowSink

_SOURCE = "converter"


class ConverterState(StrEnum):
    """Where the converter is in the input.

    - BEFORE_FIRST_REGION — no region header seen yet.
    - ACCUMULATING_FIELDS — collecting fields for the current region.
    - FINISHED — end of input handled; no more lines accepted.
    """

    BEFORE_FIRST_REGION = "before_first_region"
    ACCUMULATING_FIELDS = "accumulating_fields"
    FINISHED = "finished"


@dataclass(frozen=True)
class ConversionResult:
    """Summary of a completed conversion.

    Attributes:
        regions: Number of data rows written.
        schema: Field names of the first region (empty if there were none).
        lines: Number of input lines consumed.

    """

    regions: int
    schema: tuple[str, ...]
    lines: int


class SmapsConverter:
    """Turn a sequence of smaps lines into rows on a sink.

    Feed lines in order with ``feed()``, then call ``finish()`` once.
    """

    def __init__(self, sink: RowSink, *, logger: Logger | None = None) -> None:
        """Create a converter writing rows to *sink*.

        Args:
            sink: Destination for the header row and data rows.
            logger: Optional log receiving progress and error events.

        """
        self._sink = sink
        self._logger = logger
        self._state = ConverterState.BEFORE_FIRST_REGION
        self._current: Mapping | None = None
        self._schema: tuple[str, ...] | None = None
        self._regions = 0
        self._lines = 0

    @property
    def state(self) -> ConverterState:
        """Return the current state."""
        return self._state

    @property
    def schema(self) -> tuple[str, ...] | None:
        """Return the field names of the first region, once known."""
        return self._schema

    @property
    def regions_emitted(self) -> int:
        """Return how many data rows have been written so far."""
        return self._regions

    def feed(self, line: str, line_no: int) -> None:
        """Consume one input line.

        Args:
            line: The line with its terminator removed.
            line_no: The line's 1-based position in the input.

        Raises:
            BadFormatError: If the line is malformed or a field line
                appears before any region header.
            SchemaMismatchError: If this line starts a region and the
                previous region's fields disagree with the schema.

        """
        if self._state is ConverterState.FINISHED:
            msg = "converter already finished"
            raise SmapsError(msg)
        self._lines = line_no

        try:
            if classify_line(line) is LineKind.REGION:
                self._start_region(line, line_no)
            else:
                self._add_field(line, line_no)
        except BadFormatError as e:
            if e.line_no is not None:
                raise
            raise e.with_line(line_no) from e

    def finish(self) -> ConversionResult:
        """Emit the last region, flush the sink, and summarize the run."""
        if self._state is ConverterState.FINISHED:
            msg = "converter already finished"
            raise SmapsError(msg)
        if self._current is not None:
            self._emit(self._current)
            self._current = None
        self._sink.flush()
        self._state = ConverterState.FINISHED

        result = ConversionResult(
            regions=self._regions,
            schema=self._schema or (),
            lines=self._lines,
        )
        self._log(
            LogLevel.INFO,
            f"converted {result.regions} regions with {len(result.schema)} fields",
        )
        return result

    # -- Private helpers -------------------------------------------------------

    def _start_region(self, line: str, line_no: int) -> None:
        """Close the current mapping and open a new one for *line*."""
        region = parse_region(line)
        if self._current is not None:
            self._emit(self._current)
        self._current = Mapping(region=region, line_no=line_no)
        self._state = ConverterState.ACCUMULATING_FIELDS

    def _add_field(self, line: str, line_no: int) -> None:
        """Append the statistic on *line* to the current mapping."""
        name, value = parse_field(line)
        if self._current is None:
            msg = "field line before the first region header"
            raise BadFormatError(msg, line_no=line_no)
        self._current.append_field(name, value)

    def _emit(self, mapping: Mapping) -> None:
        """Check *mapping* against the schema and write it out."""
        names = mapping.field_names
        if self._schema is None:
            self._schema = names
            self._log(LogLevel.INFO, f"schema: {', '.join(names)}", line_no=mapping.line_no)
            self._sink.writerow(header_row(names))
        elif names != self._schema:
            raise SchemaMismatchError(mapping.line_no, self._schema, names)

        self._sink.writerow(mapping.row())
        self._regions += 1
        self._log(LogLevel.DEBUG, f"region {mapping.region}", line_no=mapping.line_no)

    def _log(self, level: LogLevel, message: str, *, line_no: int | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=_SOURCE, line_no=line_no)


def convert(
    stream: BinaryIO,
    sink: RowSink,
    *,
    max_line_length: int = MAX_LINE_LENGTH,
    logger: Logger | None = None,
) -> ConversionResult:
    """Convert an smaps byte stream into rows on *sink*.

    Args:
        stream: Readable binary stream in ``/proc/<pid>/smaps`` format.
        sink: Receives the header row, then one row per region.
        max_line_length: Per-line byte limit, terminator not counted.
        logger: Optional log receiving progress and error events.

    Returns:
        A summary of the conversion.

    Raises:
        SmapsError: On any read, format or schema failure.  Rows already
            written before the failure must be treated as invalid.

    """
    converter = SmapsConverter(sink, logger=logger)
    reader = LineReader(stream, max_line_length=max_line_length)
    try:
        for line in reader:
            converter.feed(line, reader.line_no)
        return converter.finish()
    except SmapsError as e:
        if logger is not None:
            logger.log(LogLevel.ERROR, str(e), source=_SOURCE, line_no=e.line_no)
        raise
