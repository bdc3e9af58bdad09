"""smaps-csv — convert ``/proc/<pid>/smaps`` reports into CSV tables.

The kernel prints one block per memory region: a header line describing
the region, followed by ``Name:   value`` statistic lines.  This package
streams that text and writes one CSV row per region.

Re-exports public symbols so callers can write::

    from smaps_csv import convert, CsvRowSink
"""

from smaps_csv.converter import ConversionResult, ConverterState, SmapsConverter, convert
from smaps_csv.errors import (
    BadFormatError,
    ConfigError,
    LineTooLongError,
    ReadError,
    SchemaMismatchError,
    SmapsError,
)
from smaps_csv.mapping import REGION_COLUMNS, Mapping, header_row
from smaps_csv.parser import LineKind, Region, classify_line, parse_field, parse_region
from smaps_csv.reader import MAX_LINE_LENGTH, LineReader
from smaps_csv.sink import CsvRowSink, RowSink

__all__ = [
    "MAX_LINE_LENGTH",
    "REGION_COLUMNS",
    "BadFormatError",
    "ConfigError",
    "ConversionResult",
    "ConverterState",
    "CsvRowSink",
    "LineKind",
    "LineReader",
    "LineTooLongError",
    "Mapping",
    "ReadError",
    "Region",
    "RowSink",
    "SchemaMismatchError",
    "SmapsConverter",
    "SmapsError",
    "classify_line",
    "convert",
    "header_row",
    "parse_field",
    "parse_region",
]
