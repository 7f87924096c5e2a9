# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF inspector

Ties the directory reader, the embedded metadata scanner and the
optional collaborators together for a single file.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from tiffscan.drone_metadata import DroneCalibration, extract_from_findings
from tiffscan.exceptions import MetadataReadError
from tiffscan.exif_reader import read_exif
from tiffscan.ifd_reader import DEFAULT_MAX_IFDS, IFD, IFDReader, TagEntry, TiffHeader
from tiffscan.metadata_scanner import DEFAULT_MARKERS, EmbeddedMetadataScanner, Finding, MarkerTable

logger = logging.getLogger(__name__)


@dataclass
class ScanConfig:
    """Options controlling what is decoded for each file"""
    all_ifds: bool = False
    max_ifds: int = DEFAULT_MAX_IFDS
    read_exif: bool = False
    extract_drone: bool = True
    markers: MarkerTable = DEFAULT_MARKERS


@dataclass
class InspectionResult:
    """Everything learned about one file"""
    path: Optional[Path]
    header: Optional[TiffHeader] = None
    ifds: List[IFD] = field(default_factory=list)
    findings: List[Finding] = field(default_factory=list)
    exif: Optional[Dict[str, str]] = None
    drone: Optional[DroneCalibration] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def entries(self) -> List[TagEntry]:
        """Entries of every decoded IFD, in chain order"""
        return [entry for ifd in self.ifds for entry in ifd.entries]


class TiffInspector:
    """
    Inspect one TIFF file.

    Example:
        >>> with TiffInspector('DJI_0081.TIF') as inspector:
        ...     result = inspector.inspect()
        ...     for finding in result.findings:
        ...         print(finding.marker, finding.tag_id)
    """

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        file_data: Optional[bytes] = None,
        config: Optional[ScanConfig] = None
    ):
        """
        Initialize the inspector.

        Args:
            file_path: Path to the TIFF file (if reading from file)
            file_data: TIFF file bytes (if reading from memory)
            config: Scan options (defaults to ScanConfig())
        """
        if file_path is None and file_data is None:
            raise ValueError("Either file_path or file_data must be provided")
        self.file_path = Path(file_path) if file_path is not None else None
        self.file_data = file_data
        self.config = config or ScanConfig()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Drop the buffer so large files are not kept alive by the inspector
        if self.file_path is not None:
            self.file_data = None

    def _load(self) -> bytes:
        if self.file_data is None:
            try:
                with open(self.file_path, 'rb') as f:
                    self.file_data = f.read()
            except OSError as e:
                raise MetadataReadError(f"Cannot read {self.file_path}: {str(e)}") from e
        return self.file_data

    def inspect(self) -> InspectionResult:
        """
        Decode and scan the file.

        Returns:
            InspectionResult for the file

        Raises:
            MetadataReadError: If the file cannot be read, or EXIF reading is enabled and fails
            TiffParseError: If the TIFF directory cannot be decoded
        """
        data = self._load()
        reader = IFDReader(data)

        if self.config.all_ifds:
            header, ifds = reader.parse_all(self.config.max_ifds)
        else:
            header, first_ifd = reader.parse()
            ifds = [first_ifd]

        result = InspectionResult(path=self.file_path, header=header, ifds=ifds)

        scanner = EmbeddedMetadataScanner(self.config.markers)
        for ifd in ifds:
            result.findings.extend(scanner.scan(ifd.entries))

        if self.config.extract_drone:
            result.drone = extract_from_findings(result.findings)

        if self.config.read_exif:
            result.exif = read_exif(data)

        logger.debug(
            "Inspected %s: %d IFD(s), %d finding(s)",
            self.file_path or '<memory>', len(ifds), len(result.findings)
        )
        return result


def inspect_file(file_path: Union[str, Path], config: Optional[ScanConfig] = None) -> InspectionResult:
    """Inspect a TIFF file on disk."""
    with TiffInspector(file_path, config=config) as inspector:
        return inspector.inspect()


def inspect_bytes(file_data: bytes, config: Optional[ScanConfig] = None) -> InspectionResult:
    """Inspect TIFF bytes already in memory."""
    return TiffInspector(file_data=file_data, config=config).inspect()
