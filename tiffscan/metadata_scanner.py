# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Embedded metadata scanner

This module searches decoded TIFF tag values for markers of structured
payloads that the tags do not declare, such as XMP packets or vendor
key-value text stored in tags typed as opaque bytes.

Vendors routinely place XML or proprietary text in MakerNote-style
tags or in tags never reserved for metadata, so the scanner looks at
every textual or byte-valued entry regardless of its tag id. Matching
is a plain substring test, which means truncated or corrupted packets
still produce findings.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from tiffscan.ifd_reader import TagEntry, TagValue, ValueKind

logger = logging.getLogger(__name__)

XMP_META_MARKER = "xmp-meta"
OPTICAL_CENTER_MARKER = "vendor-optical-center"


@dataclass(frozen=True)
class Finding:
    """An entry whose value contains a known marker"""
    tag_id: int
    marker: str
    text: str


@dataclass(frozen=True)
class Marker:
    """
    A named substring to look for.

    ``applies_to`` lists the value kinds the marker is tested against.
    """
    name: str
    needle: str
    applies_to: FrozenSet[ValueKind]

    def matches(self, text: str) -> bool:
        return self.needle in text


class MarkerTable:
    """
    Ordered collection of markers.

    The first marker in table order that matches an entry names the
    finding for that entry.
    """

    def __init__(self, markers: Iterable[Marker] = ()):
        self.markers: Tuple[Marker, ...] = tuple(markers)

    def with_marker(self, marker: Marker) -> 'MarkerTable':
        """Return a new table with ``marker`` appended."""
        return MarkerTable(self.markers + (marker,))

    def for_kind(self, kind: ValueKind) -> List[Marker]:
        return [marker for marker in self.markers if kind in marker.applies_to]

    def __iter__(self) -> Iterator[Marker]:
        return iter(self.markers)

    def __len__(self) -> int:
        return len(self.markers)


DEFAULT_MARKERS = MarkerTable([
    Marker(XMP_META_MARKER, "<x:xmpmeta", frozenset({ValueKind.TEXT, ValueKind.BYTES})),
    Marker(OPTICAL_CENTER_MARKER, "RelativeOpticalCenter", frozenset({ValueKind.BYTES})),
])


def decode_text(value: TagValue) -> Optional[str]:
    """
    Get searchable text from a tag value.

    Text values are returned as-is. Byte values are decoded as UTF-8
    with invalid sequences replaced, so stray binary bytes only lower
    the chance of a match. Numeric values have no text.

    Returns:
        Decoded text, or None when the value cannot hold text
    """
    if value.kind is ValueKind.TEXT:
        return value.data
    if value.kind is ValueKind.BYTES:
        try:
            return bytes(value.data).decode('utf-8', errors='replace')
        except (TypeError, ValueError):
            return None
    return None


class EmbeddedMetadataScanner:
    """
    Scanner for markers embedded in tag values.

    The scanner only reads its input and has no failure modes: entries
    that cannot be decoded as text are skipped.
    """

    def __init__(self, markers: Optional[MarkerTable] = None):
        """
        Initialize the scanner.

        Args:
            markers: Marker table to test against (defaults to DEFAULT_MARKERS)
        """
        self.markers = markers if markers is not None else DEFAULT_MARKERS

    def iter_scan(self, entries: Iterable[TagEntry]) -> Iterator[Finding]:
        """
        Yield findings for ``entries`` in entry order.

        Each entry produces at most one finding.
        """
        for entry in entries:
            candidates = self.markers.for_kind(entry.value.kind)
            if not candidates:
                continue

            text = decode_text(entry.value)
            if text is None:
                continue

            for marker in candidates:
                if marker.matches(text):
                    logger.debug("Found %s in tag %d", marker.name, entry.tag_id)
                    yield Finding(tag_id=entry.tag_id, marker=marker.name, text=text)
                    break

    def scan(self, entries: Iterable[TagEntry]) -> List[Finding]:
        """
        Scan entries for embedded metadata.

        Args:
            entries: Tag entries, typically an IFD

        Returns:
            List of findings in entry order
        """
        return list(self.iter_scan(entries))


def scan_entries(entries: Iterable[TagEntry], markers: Optional[MarkerTable] = None) -> List[Finding]:
    """Scan entries with a scanner built from ``markers``."""
    return EmbeddedMetadataScanner(markers).scan(entries)
