# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF Image File Directory reader

This module decodes the header and Image File Directories (IFDs) of
classic TIFF files, including GeoTIFF files which reuse the same
directory layout with additional private tags.

Every tag value is decoded into a TagValue whose kind (scalar,
sequence, bytes or text) is decided by the field type and count
stored in the entry, never by inspecting the payload.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Any, Iterator, List, Optional, Set, Tuple

from tiffscan.exceptions import (
    InvalidHeaderError,
    OffsetOutOfRangeError,
    TruncatedDirectoryError,
)
from tiffscan.tiff_tags import get_tag_name
from tiffscan.tiff_types import (
    BYTES_TYPES,
    ENTRY_SIZE,
    INLINE_VALUE_SIZE,
    RATIONAL_TYPES,
    STRUCT_CODES,
    ByteOrder,
    TiffFieldType,
    field_size,
    field_type_name,
    to_field_type,
)

logger = logging.getLogger(__name__)

TIFF_MAGIC = 42
HEADER_SIZE = 8
DEFAULT_MAX_IFDS = 256


class ValueKind(Enum):
    """Shape of a decoded tag value"""
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    BYTES = "bytes"
    TEXT = "text"


@dataclass(frozen=True)
class TagValue:
    """
    Decoded value of a directory entry.

    ``data`` is an int/float/Fraction for SCALAR, a tuple of those for
    SEQUENCE, ``bytes`` for BYTES and ``str`` for TEXT.

    Values decoded from a file also keep the ``raw`` bytes they were
    read from, and for numeric values the struct ``endian`` prefix
    those bytes are in. Lossy decodes (replacement characters, float
    NaN payloads) re-encode from them.
    """
    kind: ValueKind
    data: Any
    raw: Optional[bytes] = field(default=None, compare=False, repr=False)
    endian: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def is_numeric(self) -> bool:
        return self.kind in (ValueKind.SCALAR, ValueKind.SEQUENCE)

    def __len__(self) -> int:
        if self.kind is ValueKind.SCALAR:
            return 1
        return len(self.data)


@dataclass(frozen=True)
class TiffHeader:
    """The 8-byte TIFF file header"""
    byte_order: ByteOrder
    magic: int
    first_ifd_offset: int

    @property
    def endian(self) -> str:
        """struct prefix for the file byte order"""
        return self.byte_order.struct_prefix


@dataclass(frozen=True)
class TagEntry:
    """
    One directory entry.

    ``field_type`` keeps the raw code so nonstandard vendor types
    survive decoding. ``value_offset`` is the absolute position the
    value was read from: the entry's own value field for inline
    values, the dereferenced offset otherwise.
    """
    tag_id: int
    field_type: int
    count: int
    value: TagValue
    value_offset: int
    is_inline: bool

    @property
    def name(self) -> Optional[str]:
        return get_tag_name(self.tag_id)

    @property
    def type_name(self) -> str:
        return field_type_name(self.field_type)

    @property
    def byte_length(self) -> int:
        return field_size(self.field_type) * self.count


@dataclass(frozen=True)
class IFD:
    """An Image File Directory: entries in stored order plus the link to the next IFD"""
    offset: int
    entries: Tuple[TagEntry, ...]
    next_ifd_offset: int

    @property
    def is_last(self) -> bool:
        return self.next_ifd_offset == 0

    def get(self, tag_id: int) -> Optional[TagEntry]:
        """Return the first entry with the given tag id, or None."""
        for entry in self.entries:
            if entry.tag_id == tag_id:
                return entry
        return None

    def __iter__(self) -> Iterator[TagEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class IFDReader:
    """
    Decoder for TIFF headers and IFDs over an in-memory buffer.

    The reader never modifies the buffer and keeps no state between
    calls, so one instance may be parsed repeatedly or from several
    threads.
    """

    def __init__(self, data: bytes):
        """
        Initialize the reader.

        Args:
            data: Complete TIFF file contents
        """
        self.data = bytes(data)

    def read_header(self) -> TiffHeader:
        """
        Decode the TIFF header.

        Returns:
            TiffHeader for the buffer

        Raises:
            InvalidHeaderError: If the buffer is too short, or the
                byte-order mark or magic number is wrong
        """
        if len(self.data) < HEADER_SIZE:
            raise InvalidHeaderError(
                f"Invalid TIFF file: {len(self.data)} bytes is shorter than the {HEADER_SIZE}-byte header"
            )

        if self.data[:2] == b'II':
            byte_order = ByteOrder.LITTLE
        elif self.data[:2] == b'MM':
            byte_order = ByteOrder.BIG
        else:
            raise InvalidHeaderError(f"Invalid TIFF file: bad byte order {self.data[:2]!r}")

        endian = byte_order.struct_prefix
        magic = struct.unpack(f'{endian}H', self.data[2:4])[0]
        if magic != TIFF_MAGIC:
            raise InvalidHeaderError(f"Invalid TIFF file: bad magic number {magic}")

        first_ifd_offset = struct.unpack(f'{endian}I', self.data[4:8])[0]
        return TiffHeader(byte_order=byte_order, magic=magic, first_ifd_offset=first_ifd_offset)

    def parse(self) -> Tuple[TiffHeader, IFD]:
        """
        Decode the header and the first IFD.

        Returns:
            Tuple of (header, first IFD)

        Raises:
            TiffParseError: On any malformed header or directory
        """
        header = self.read_header()
        ifd = self.read_ifd(header.first_ifd_offset, header.byte_order)
        return header, ifd

    def parse_all(self, max_ifds: int = DEFAULT_MAX_IFDS) -> Tuple[TiffHeader, List[IFD]]:
        """
        Decode the header and every IFD in the next-IFD chain.

        Args:
            max_ifds: Maximum number of directories to decode

        Returns:
            Tuple of (header, list of IFDs in chain order)
        """
        header = self.read_header()
        return header, list(self._walk(header, max_ifds))

    def iter_ifds(self, max_ifds: int = DEFAULT_MAX_IFDS) -> Iterator[IFD]:
        """
        Iterate over the IFD chain starting at the first IFD.

        Iteration stops at a next offset of 0, at an offset that was
        already visited, or after ``max_ifds`` directories.
        """
        header = self.read_header()
        return self._walk(header, max_ifds)

    def _walk(self, header: TiffHeader, max_ifds: int) -> Iterator[IFD]:
        visited: Set[int] = set()
        offset = header.first_ifd_offset
        while offset != 0 and len(visited) < max_ifds:
            if offset in visited:
                logger.debug("IFD chain loops back to offset %d, stopping", offset)
                return
            visited.add(offset)
            ifd = self.read_ifd(offset, header.byte_order)
            yield ifd
            offset = ifd.next_ifd_offset

    def read_ifd(self, offset: int, byte_order: ByteOrder) -> IFD:
        """
        Decode one IFD.

        Args:
            offset: Absolute offset of the IFD's entry count
            byte_order: Byte order from the file header

        Returns:
            Fully decoded IFD

        Raises:
            TruncatedDirectoryError: If the buffer ends inside the entry table
            OffsetOutOfRangeError: If an out-of-line value lies outside the buffer
        """
        endian = byte_order.struct_prefix

        if offset + 2 > len(self.data):
            raise TruncatedDirectoryError(
                f"IFD at offset {offset} lies beyond the end of the {len(self.data)}-byte buffer"
            )

        num_entries = struct.unpack(f'{endian}H', self.data[offset:offset + 2])[0]
        table_start = offset + 2
        table_end = table_start + num_entries * ENTRY_SIZE
        if table_end > len(self.data):
            raise TruncatedDirectoryError(
                f"IFD at offset {offset} declares {num_entries} entries "
                f"but the buffer ends at {len(self.data)}"
            )

        logger.debug("Decoding IFD at offset %d with %d entries", offset, num_entries)

        entries = []
        for entry_offset in range(table_start, table_end, ENTRY_SIZE):
            entries.append(self._read_entry(entry_offset, endian))

        # A file may end right after the entry table; treat that as the last IFD
        next_ifd_offset = 0
        remaining = len(self.data) - table_end
        if remaining >= 4:
            next_ifd_offset = struct.unpack(f'{endian}I', self.data[table_end:table_end + 4])[0]
        elif remaining > 0:
            raise TruncatedDirectoryError(
                f"IFD at offset {offset}: next-IFD offset cut short, "
                f"only {remaining} of 4 bytes present"
            )

        return IFD(offset=offset, entries=tuple(entries), next_ifd_offset=next_ifd_offset)

    def _read_entry(self, entry_offset: int, endian: str) -> TagEntry:
        tag_id, type_code, count = struct.unpack(
            f'{endian}HHI', self.data[entry_offset:entry_offset + 8]
        )
        value_field = entry_offset + 8
        byte_length = field_size(type_code) * count

        if byte_length <= INLINE_VALUE_SIZE:
            data_offset = value_field
            is_inline = True
        else:
            data_offset = struct.unpack(f'{endian}I', self.data[value_field:value_field + 4])[0]
            is_inline = False
            if data_offset + byte_length > len(self.data):
                raise OffsetOutOfRangeError(
                    f"Tag {tag_id}: value of {byte_length} bytes at offset {data_offset} "
                    f"exceeds the {len(self.data)}-byte buffer",
                    tag_id=tag_id,
                    offset=data_offset,
                    length=byte_length,
                    buffer_length=len(self.data),
                )

        raw = self.data[data_offset:data_offset + byte_length]
        value = decode_value(type_code, count, raw, endian)
        return TagEntry(
            tag_id=tag_id,
            field_type=type_code,
            count=count,
            value=value,
            value_offset=data_offset,
            is_inline=is_inline,
        )


def decode_value(type_code: int, count: int, raw: bytes, endian: str) -> TagValue:
    """
    Decode the raw bytes of one tag value.

    Args:
        type_code: Field type code from the entry
        count: Number of elements
        raw: Exactly size(type) * count bytes
        endian: struct byte order prefix

    Returns:
        TagValue shaped by the field type and count
    """
    field_type = to_field_type(type_code)

    raw = bytes(raw)

    # Nonstandard vendor types fall back to UNDEFINED
    if field_type is None or field_type in BYTES_TYPES:
        return TagValue(ValueKind.BYTES, raw, raw)

    if field_type == TiffFieldType.ASCII:
        text = raw.rstrip(b'\x00').decode('utf-8', errors='replace')
        return TagValue(ValueKind.TEXT, text, raw)

    code = STRUCT_CODES[field_type]
    if field_type in RATIONAL_TYPES:
        pairs = struct.unpack(f'{endian}{count * 2}{code}', raw)
        values = tuple(
            _rational(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)
        )
    else:
        values = struct.unpack(f'{endian}{count}{code}', raw)

    if count == 1:
        return TagValue(ValueKind.SCALAR, values[0], raw, endian)
    return TagValue(ValueKind.SEQUENCE, tuple(values), raw, endian)


def _rational(numerator: int, denominator: int) -> Any:
    # Keep zero-denominator rationals as raw pairs
    if denominator == 0:
        return (numerator, denominator)
    return Fraction(numerator, denominator)


def encode_inline_value(type_code: int, count: int, value: TagValue, byte_order: ByteOrder) -> bytes:
    """
    Pack an inline value back into its 4-byte entry field.

    Args:
        type_code: Field type code of the entry
        count: Element count of the entry
        value: Decoded value
        byte_order: Byte order to pack with

    Returns:
        The 4-byte value field, left-justified and zero padded

    Raises:
        ValueError: If the value does not fit in the entry field
    """
    byte_length = field_size(type_code) * count
    if byte_length > INLINE_VALUE_SIZE:
        raise ValueError(f"{byte_length}-byte value does not fit inline")

    field_type = to_field_type(type_code)
    endian = byte_order.struct_prefix

    if value.kind is ValueKind.BYTES:
        packed = value.data
    elif value.raw is not None and (value.kind is ValueKind.TEXT or value.endian == endian):
        packed = value.raw
    elif value.kind is ValueKind.TEXT:
        packed = value.data.encode('utf-8').ljust(count, b'\x00')
    else:
        items = (value.data,) if value.kind is ValueKind.SCALAR else value.data
        packed = struct.pack(f'{endian}{len(items)}{STRUCT_CODES[field_type]}', *items)

    if len(packed) != byte_length:
        raise ValueError(f"Encoded {len(packed)} bytes for a {byte_length}-byte value")
    return packed.ljust(INLINE_VALUE_SIZE, b'\x00')


def parse_tiff(data: bytes) -> Tuple[TiffHeader, IFD]:
    """
    Decode the header and first IFD of a TIFF buffer.

    Example:
        >>> header, ifd = parse_tiff(open('DJI_0081.TIF', 'rb').read())
        >>> [entry.tag_id for entry in ifd]
    """
    return IFDReader(data).parse()
