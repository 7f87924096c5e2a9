# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
tiffscan - TIFF tag directory inspection

Decodes the Image File Directories of TIFF and GeoTIFF files and finds
metadata embedded in tag values, such as XMP packets and DJI camera
calibration data stored in tags typed as opaque bytes.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from tiffscan.exceptions import (
    TiffScanError,
    TiffParseError,
    InvalidHeaderError,
    TruncatedDirectoryError,
    OffsetOutOfRangeError,
    MetadataReadError,
)
from tiffscan.tiff_types import ByteOrder, TiffFieldType
from tiffscan.ifd_reader import (
    IFD,
    IFDReader,
    TagEntry,
    TagValue,
    TiffHeader,
    ValueKind,
    parse_tiff,
)
from tiffscan.metadata_scanner import (
    DEFAULT_MARKERS,
    EmbeddedMetadataScanner,
    Finding,
    Marker,
    MarkerTable,
    scan_entries,
)
from tiffscan.drone_metadata import DroneCalibration, extract_drone_calibration
from tiffscan.inspector import InspectionResult, ScanConfig, TiffInspector, inspect_bytes, inspect_file
from tiffscan.metadata_utils import batch_inspect, find_tiff_files

__all__ = [
    "TiffScanError",
    "TiffParseError",
    "InvalidHeaderError",
    "TruncatedDirectoryError",
    "OffsetOutOfRangeError",
    "MetadataReadError",
    "ByteOrder",
    "TiffFieldType",
    "IFD",
    "IFDReader",
    "TagEntry",
    "TagValue",
    "TiffHeader",
    "ValueKind",
    "parse_tiff",
    "DEFAULT_MARKERS",
    "EmbeddedMetadataScanner",
    "Finding",
    "Marker",
    "MarkerTable",
    "scan_entries",
    "DroneCalibration",
    "extract_drone_calibration",
    "InspectionResult",
    "ScanConfig",
    "TiffInspector",
    "inspect_bytes",
    "inspect_file",
    "batch_inspect",
    "find_tiff_files",
]
