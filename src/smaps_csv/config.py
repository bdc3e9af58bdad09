"""Run configuration — everything one conversion needs, in one value.

The CLI parses its flags into a ``ConvertConfig`` and hands it to
``smaps_csv.cli.run``; nothing is kept in module-level state, so two
conversions with different options can run side by side in one process.
"""

from dataclasses import dataclass
from pathlib import Path

from smaps_csv.errors import ConfigError
from smaps_csv.reader import MAX_LINE_LENGTH
from smaps_csv.sink import validate_delimiter

DEFAULT_DELIMITER = ","


@dataclass(frozen=True)
class ConvertConfig:
    """Options for converting one smaps file to CSV.

    Attributes:
        input_path: File in ``/proc/<pid>/smaps`` format.
        output_path: CSV file to create (overwritten if present).
        delimiter: Single-character column separator.
        max_line_length: Per-line byte limit for the input.

    """

    input_path: Path
    output_path: Path
    delimiter: str = DEFAULT_DELIMITER
    max_line_length: int = MAX_LINE_LENGTH

    def __post_init__(self) -> None:
        """Reject invalid options before any file is touched."""
        validate_delimiter(self.delimiter)
        if self.max_line_length <= 0:
            msg = f"max_line_length must be positive, got {self.max_line_length}"
            raise ConfigError(msg)
