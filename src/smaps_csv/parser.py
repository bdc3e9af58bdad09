"""Line classification and parsing for the smaps text format.

Each region in ``/proc/<pid>/smaps`` starts with a header line in the
same layout as ``/proc/<pid>/maps``::

    7f3c2a000000-7f3c2a021000 rw-p 00000000 00:00 0          [heap]

and continues with one statistic per line::

    Size:                132 kB
    Rss:                   8 kB
    VmFlags: rd wr mr mw me ac sd

Telling the two apart needs no lookahead: a header always has a space
before its first colon (the colon lives inside the ``maj:min`` device
id), while a field name never contains a space.

All functions here are pure: they take one line (terminator already
removed) and either return parsed values or raise ``BadFormatError``.
Token contents are never validated.  Addresses, permissions and device
ids are passed through verbatim as opaque strings.
"""

from dataclasses import astuple, dataclass
from enum import StrEnum

from smaps_csv.errors import BadFormatError

VMFLAGS_FIELD = "VmFlags"
"""The one free-text field: its value is every flag on the line."""


class LineKind(StrEnum):
    """What a line of smaps output describes.

    - REGION — a region header (address range, perms, offset, dev, inode, path).
    - FIELD  — a ``Name: value`` statistic belonging to the current region.
    """

    REGION = "region"
    FIELD = "field"


@dataclass(frozen=True)
class Region:
    """One contiguous virtual-memory mapping, as described by its header line.

    Attributes:
        address_start: First address of the range (hex, as printed).
        address_end: One past the last address (hex, as printed).
        perms: Permission flags such as ``r-xp``.
        offset: Offset into the backing file (hex, as printed).
        dev: Device id as ``major:minor``.
        inode: Inode number on that device (``0`` for anonymous memory).
        pathname: Backing file or pseudo-path such as ``[stack]``; may be empty.

    """

    address_start: str
    address_end: str
    perms: str
    offset: str
    dev: str
    inode: str
    pathname: str

    def columns(self) -> tuple[str, ...]:
        """Return the seven attributes in output column order."""
        return astuple(self)

    def __str__(self) -> str:
        """Format as comma-separated columns."""
        return ",".join(self.columns())


def classify_line(line: str) -> LineKind:
    """Decide whether *line* is a region header or a field line.

    Raises:
        BadFormatError: If the line contains no colon at all.

    """
    colon = line.find(":")
    if colon == -1:
        msg = f"no colon found in line {line!r}"
        raise BadFormatError(msg)
    if " " in line[:colon]:
        return LineKind.REGION
    return LineKind.FIELD


def _cut(text: str, sep: str, what: str) -> tuple[str, str]:
    """Split *text* at the first *sep*, failing if it is absent."""
    head, found, rest = text.partition(sep)
    if not found:
        msg = f"missing {sep!r} after {what} in region line"
        raise BadFormatError(msg)
    return head, rest


def parse_region(line: str) -> Region:
    """Parse a region header line into its positional sub-fields.

    Fields are consumed left to right, each up to a single delimiter;
    the pathname is whatever remains, with surrounding whitespace removed
    (the kernel pads it into a column).

    Raises:
        BadFormatError: If any delimiter is missing.

    """
    address_start, rest = _cut(line, "-", "address start")
    address_end, rest = _cut(rest, " ", "address end")
    perms, rest = _cut(rest, " ", "permissions")
    offset, rest = _cut(rest, " ", "offset")
    dev, rest = _cut(rest, " ", "device")
    inode, rest = _cut(rest, " ", "inode")
    return Region(
        address_start=address_start,
        address_end=address_end,
        perms=perms,
        offset=offset,
        dev=dev,
        inode=inode,
        pathname=rest.strip(),
    )


def parse_field(line: str) -> tuple[str, str]:
    """Parse a field line into ``(name, value)``.

    The value has its leading spaces removed.  ``VmFlags`` keeps the whole
    remainder; every other field keeps only its first token, so a unit
    suffix like ``kB`` is dropped.  Whatever follows the first token is
    ignored, because newer kernels add unitless fields (``THPeligible``,
    ``ProtectionKey``) next to the ``kB`` ones.

    Raises:
        BadFormatError: If the line contains no colon.

    """
    name, found, rest = line.partition(":")
    if not found:
        msg = f"no colon found in field line {line!r}"
        raise BadFormatError(msg)
    value = rest.lstrip(" ")
    if name != VMFLAGS_FIELD:
        value = value.partition(" ")[0]
    return name, value
