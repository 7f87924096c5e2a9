# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF field types

This module defines the field type codes used by TIFF directory
entries, their element sizes, and the struct codes used to unpack them.

Copyright 2025 DNAi inc.
"""

from enum import Enum, IntEnum
from typing import Optional


class ByteOrder(Enum):
    """Byte order declared by the first two bytes of a TIFF file"""
    LITTLE = "little"
    BIG = "big"

    @property
    def struct_prefix(self) -> str:
        """struct module prefix for this byte order"""
        return '<' if self is ByteOrder.LITTLE else '>'

    @property
    def marker(self) -> bytes:
        return b'II' if self is ByteOrder.LITTLE else b'MM'


class TiffFieldType(IntEnum):
    """TIFF 6.0 field types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12
    IFD = 13  # Offset to a sub-IFD, stored like LONG


# Field type sizes in bytes
FIELD_SIZES = {
    TiffFieldType.BYTE: 1,
    TiffFieldType.ASCII: 1,
    TiffFieldType.SHORT: 2,
    TiffFieldType.LONG: 4,
    TiffFieldType.RATIONAL: 8,
    TiffFieldType.SBYTE: 1,
    TiffFieldType.UNDEFINED: 1,
    TiffFieldType.SSHORT: 2,
    TiffFieldType.SLONG: 4,
    TiffFieldType.SRATIONAL: 8,
    TiffFieldType.FLOAT: 4,
    TiffFieldType.DOUBLE: 8,
    TiffFieldType.IFD: 4,
}

# struct codes for one element of each numeric type.
# Rationals are two elements (numerator, denominator) of this code.
STRUCT_CODES = {
    TiffFieldType.SHORT: 'H',
    TiffFieldType.LONG: 'I',
    TiffFieldType.RATIONAL: 'I',
    TiffFieldType.SBYTE: 'b',
    TiffFieldType.SSHORT: 'h',
    TiffFieldType.SLONG: 'i',
    TiffFieldType.SRATIONAL: 'i',
    TiffFieldType.FLOAT: 'f',
    TiffFieldType.DOUBLE: 'd',
    TiffFieldType.IFD: 'I',
}

RATIONAL_TYPES = frozenset({TiffFieldType.RATIONAL, TiffFieldType.SRATIONAL})

# Types whose values are kept as raw bytes
BYTES_TYPES = frozenset({TiffFieldType.BYTE, TiffFieldType.SBYTE, TiffFieldType.UNDEFINED})

# Size of a value the directory entry can hold without an offset
INLINE_VALUE_SIZE = 4

# Size of one directory entry record
ENTRY_SIZE = 12


def to_field_type(code: int) -> Optional[TiffFieldType]:
    """
    Map a raw field type code to TiffFieldType.

    Args:
        code: Field type code as stored in the directory entry

    Returns:
        The matching TiffFieldType, or None for nonstandard codes
    """
    try:
        return TiffFieldType(code)
    except ValueError:
        return None


def field_size(code: int) -> int:
    """
    Element size in bytes for a field type code.

    Unknown codes are treated like UNDEFINED (one byte per element).
    """
    field_type = to_field_type(code)
    if field_type is None:
        return 1
    return FIELD_SIZES[field_type]


def field_type_name(code: int) -> str:
    field_type = to_field_type(code)
    if field_type is None:
        return f"UNKNOWN({code})"
    return field_type.name
