"""Mapping records — one region plus the statistics printed under it.

The set of statistics differs between kernel versions (``Pss_Dirty``,
``THPeligible`` and friends come and go), so a mapping stores its fields
as an ordered list of ``(name, value)`` pairs rather than fixed
attributes.  The first mapping of a file decides the column layout; see
``smaps_csv.converter`` for how later mappings are checked against it.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from smaps_csv.parser import Region

REGION_COLUMNS: tuple[str, ...] = (
    "AddressStart",
    "AddressEnd",
    "Perms",
    "Offset",
    "Dev",
    "Inode",
    "Pathname",
)


def _empty_fields() -> list[tuple[str, str]]:
    """Return an empty field list (typed factory for dataclass fields)."""
    return []


@dataclass
class Mapping:
    """A region and its statistic fields, in the order they were read.

    Not frozen — fields are appended one line at a time until the next
    region header arrives.

    Attributes:
        region: The parsed header line.
        line_no: 1-based line number of the header line.
        fields: ``(name, value)`` pairs in encounter order.

    """

    region: Region
    line_no: int
    fields: list[tuple[str, str]] = field(default_factory=_empty_fields)

    def append_field(self, name: str, value: str) -> None:
        """Record one more statistic."""
        self.fields.append((name, value))

    @property
    def field_names(self) -> tuple[str, ...]:
        """Return the field names in encounter order."""
        return tuple(name for name, _ in self.fields)

    @property
    def field_values(self) -> tuple[str, ...]:
        """Return the field values in encounter order."""
        return tuple(value for _, value in self.fields)

    def row(self) -> list[str]:
        """Return the CSV data row: region columns, then field values."""
        return [*self.region.columns(), *self.field_values]


def header_row(schema: Sequence[str]) -> list[str]:
    """Return the CSV header row for the given field-name schema."""
    return [*REGION_COLUMNS, *schema]
