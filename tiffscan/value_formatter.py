# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Value formatter for displaying decoded tags and findings.

Truncation here is for display only. Parsed values and finding text
are never shortened.

Copyright 2025 DNAi inc.
"""

import math
from fractions import Fraction
from typing import Any, Dict, List

from tiffscan.ifd_reader import IFD, TagEntry, TagValue, ValueKind
from tiffscan.metadata_scanner import Finding

LARGE_DATA = "[Large Data]"
DEFAULT_MAX_LENGTH = 20


def _format_number(value: Any) -> str:
    if isinstance(value, Fraction):
        if value.denominator == 1:
            return str(value.numerator)
        return f"{value.numerator}/{value.denominator}"
    if isinstance(value, tuple):
        # Zero-denominator rational kept as (numerator, denominator)
        return f"{value[0]}/{value[1]}"
    return str(value)


def format_value(value: TagValue, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Format a tag value for display.

    Args:
        value: Decoded tag value
        max_length: Sequences, byte blocks and text longer than this
            render as "[Large Data]"; 0 disables truncation

    Returns:
        Display string
    """
    if value.kind is ValueKind.SCALAR:
        return _format_number(value.data)

    if max_length and len(value) > max_length:
        return LARGE_DATA

    if value.kind is ValueKind.SEQUENCE:
        return ", ".join(_format_number(v) for v in value.data)
    if value.kind is ValueKind.BYTES:
        return value.data.hex(' ')
    return value.data


def format_entry(entry: TagEntry, max_length: int = DEFAULT_MAX_LENGTH, show_names: bool = False) -> str:
    """
    Format one entry as 'Tag <id>: <value>'.

    With ``show_names`` the tag name and field type follow the id.
    """
    label = f"Tag {entry.tag_id}"
    if show_names:
        label += f" ({entry.name or 'Unknown'}, {entry.type_name})"
    return f"{label}: {format_value(entry.value, max_length)}"


def format_ifd(ifd: IFD, max_length: int = DEFAULT_MAX_LENGTH, show_names: bool = False) -> str:
    return "\n".join(format_entry(entry, max_length, show_names) for entry in ifd.entries)


def format_finding(finding: Finding) -> str:
    """Format a finding as a 'FOUND' line followed by the full decoded text."""
    return f"FOUND {finding.marker} in Tag {finding.tag_id}\n{finding.text}"


def _json_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, Fraction):
        return _format_number(value)
    if isinstance(value, float) and not math.isfinite(value):
        # JSON has no NaN or Infinity literals
        return str(value)
    if isinstance(value, tuple):
        if len(value) == 2 and all(isinstance(v, int) for v in value) and value[1] == 0:
            return _format_number(value)
        return [_json_value(v) for v in value]
    if isinstance(value, list):
        return [_json_value(v) for v in value]
    return value


def entry_to_dict(entry: TagEntry) -> Dict[str, Any]:
    """
    Convert an entry to a JSON-serializable dictionary.

    Bytes become hex strings and rationals become 'n/d' strings.
    """
    return {
        'tag_id': entry.tag_id,
        'name': entry.name,
        'type': entry.type_name,
        'count': entry.count,
        'kind': entry.value.kind.value,
        'value': _json_value(entry.value.data),
    }


def result_to_dict(result) -> Dict[str, Any]:
    """
    Convert an InspectionResult to a JSON-serializable dictionary.
    """
    ifds: List[Dict[str, Any]] = [
        {
            'offset': ifd.offset,
            'next_ifd_offset': ifd.next_ifd_offset,
            'entries': [entry_to_dict(entry) for entry in ifd.entries],
        }
        for ifd in result.ifds
    ]
    output: Dict[str, Any] = {
        'path': str(result.path) if result.path is not None else None,
        'ifds': ifds,
        'findings': [
            {'tag_id': f.tag_id, 'marker': f.marker, 'text': f.text}
            for f in result.findings
        ],
    }
    if result.header is not None:
        output['byte_order'] = result.header.byte_order.value
        output['first_ifd_offset'] = result.header.first_ifd_offset
    if result.drone is not None:
        output['drone'] = {key: _json_value(v) for key, v in result.drone.to_dict().items()}
    if result.exif is not None:
        output['exif'] = result.exif
    if result.error is not None:
        output['error'] = result.error
    return output
