"""
Shared fixtures for tiffscan tests.

TiffBuilder assembles small TIFF buffers with struct so each test can
describe exactly the directory it needs.
"""

from __future__ import annotations

import struct
from typing import List, Optional, Tuple

import pytest


class TiffBuilder:
    """
    Build a single-IFD TIFF buffer.

    Entries are (tag_id, field_type, count, payload). Payloads of up to
    four bytes are stored inline; longer payloads are appended after the
    directory and referenced by offset, unless ``offset`` overrides it.
    """

    def __init__(self, little_endian: bool = True):
        self.endian = '<' if little_endian else '>'
        self.entries: List[Tuple[int, int, int, bytes, Optional[int]]] = []
        self.next_ifd_offset = 0

    def add(self, tag_id: int, field_type: int, count: int, payload: bytes, offset: Optional[int] = None):
        self.entries.append((tag_id, field_type, count, payload, offset))
        return self

    def add_ascii(self, tag_id: int, text: str):
        payload = text.encode('utf-8') + b'\x00'
        return self.add(tag_id, 2, len(payload), payload)

    def add_undefined(self, tag_id: int, payload: bytes):
        return self.add(tag_id, 7, len(payload), payload)

    def add_short(self, tag_id: int, value: int):
        return self.add(tag_id, 3, 1, struct.pack(f'{self.endian}H', value))

    def build(self) -> bytes:
        order = b'II' if self.endian == '<' else b'MM'
        header = order + struct.pack(f'{self.endian}HI', 42, 8)
        directory_size = 2 + 12 * len(self.entries) + 4
        data_offset = 8 + directory_size

        directory = struct.pack(f'{self.endian}H', len(self.entries))
        extra = b''
        for tag_id, field_type, count, payload, offset in self.entries:
            directory += struct.pack(f'{self.endian}HHI', tag_id, field_type, count)
            if offset is not None:
                directory += struct.pack(f'{self.endian}I', offset)
            elif len(payload) <= 4:
                directory += payload.ljust(4, b'\x00')
            else:
                directory += struct.pack(f'{self.endian}I', data_offset + len(extra))
                extra += payload
        directory += struct.pack(f'{self.endian}I', self.next_ifd_offset)
        return header + directory + extra


@pytest.fixture
def tiff_builder():
    return TiffBuilder


@pytest.fixture
def minimal_tiff() -> bytes:
    """Little-endian header followed by an empty IFD."""
    return bytes([0x49, 0x49, 0x2A, 0x00, 0x08, 0, 0, 0]) + b'\x00\x00' + b'\x00\x00\x00\x00'


DJI_XMP = (
    '<x:xmpmeta xmlns:x="adobe:ns:meta/">'
    '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">'
    '<rdf:Description xmlns:drone-dji="http://www.dji.com/drone-dji/1.0/"'
    ' drone-dji:CaptureUUID="3f1c9e2a-0b7d-4c55-9d4e-8a6f0e7b1c22"'
    ' drone-dji:CalibratedOpticalCenterX="1296.000000"'
    ' drone-dji:CalibratedOpticalCenterY="974.000000"'
    ' drone-dji:RelativeOpticalCenterX="-3.5"'
    ' drone-dji:RelativeOpticalCenterY="2.25"'
    ' drone-dji:DewarpData="2022-06-08;2191.0,2191.0,10.5,-6.25,-0.02,0.01,0.0001,-0.0002,-0.003"'
    ' drone-dji:DewarpHMatrix="1,0,0,0,1,0,0,0,1"/>'
    '</rdf:RDF></x:xmpmeta>'
)


@pytest.fixture
def dji_xmp() -> str:
    return DJI_XMP
