# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
DJI drone camera calibration metadata

DJI cameras record per-image calibration data in the ``drone-dji``
XMP namespace. This module pulls those values out of the text of
scanner findings. The XMP is not parsed or validated as XML; each
property is located with a regular expression, both in attribute form
(``drone-dji:Name="value"``) and element form
(``<drone-dji:Name>value</drone-dji:Name>``).

Copyright 2025 DNAi inc.
"""

import re
from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Optional

from tiffscan.metadata_scanner import Finding

DJI_NAMESPACE_PREFIX = "drone-dji"

# Order of the numbers following the date in DewarpData
DEWARP_PARAMETER_NAMES = ("fx", "fy", "cx", "cy", "k1", "k2", "p1", "p2", "k3")


@dataclass
class DroneCalibration:
    """Calibration values found in DJI XMP"""
    capture_uuid: Optional[str] = None
    calibrated_optical_center_x: Optional[float] = None
    calibrated_optical_center_y: Optional[float] = None
    relative_optical_center_x: Optional[float] = None
    relative_optical_center_y: Optional[float] = None
    dewarp_date: Optional[str] = None
    dewarp: Optional[Dict[str, float]] = None
    homography: Optional[List[List[float]]] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def merge(self, other: 'DroneCalibration') -> None:
        """Fill fields that are still unset from ``other``."""
        for f in fields(self):
            if getattr(self, f.name) is None:
                setattr(self, f.name, getattr(other, f.name))

    def to_dict(self) -> Dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def get_dji_property(text: str, name: str) -> Optional[str]:
    """
    Find the raw value of a drone-dji property.

    Args:
        text: XMP or vendor text
        name: Property name without prefix, e.g. 'RelativeOpticalCenterX'

    Returns:
        The property value with surrounding whitespace removed, or None
    """
    qualified = re.escape(f"{DJI_NAMESPACE_PREFIX}:{name}")
    match = re.search(rf'{qualified}\s*=\s*"([^"]*)"', text)
    if match is None:
        match = re.search(rf'<{qualified}>([^<]*)</{qualified}>', text)
    if match is None:
        return None
    return match.group(1).strip()


def _float_property(text: str, name: str) -> Optional[float]:
    raw = get_dji_property(text, name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _parse_numbers(raw: str) -> Optional[List[float]]:
    try:
        return [float(part) for part in raw.split(',') if part.strip()]
    except ValueError:
        return None


def parse_dewarp_data(raw: str) -> Optional[Dict[str, float]]:
    """
    Parse a DewarpData value.

    The value has the form ``"<date>;fx,fy,cx,cy,k1,k2,p1,p2,k3"``.

    Returns:
        Mapping of parameter name to value, or None when fewer than
        nine numbers follow the ';'
    """
    _, sep, params = raw.partition(';')
    if not sep:
        return None
    values = _parse_numbers(params)
    if values is None or len(values) < len(DEWARP_PARAMETER_NAMES):
        return None
    return dict(zip(DEWARP_PARAMETER_NAMES, values))


def parse_homography(raw: str) -> Optional[List[List[float]]]:
    """Parse a DewarpHMatrix value of exactly nine numbers into a 3x3 matrix."""
    values = _parse_numbers(raw)
    if values is None or len(values) != 9:
        return None
    return [values[0:3], values[3:6], values[6:9]]


def extract_drone_calibration(text: str) -> DroneCalibration:
    """
    Extract DJI calibration properties from text.

    Missing or malformed properties are left as None; this function
    never raises on bad input.
    """
    calibration = DroneCalibration(
        capture_uuid=get_dji_property(text, 'CaptureUUID'),
        calibrated_optical_center_x=_float_property(text, 'CalibratedOpticalCenterX'),
        calibrated_optical_center_y=_float_property(text, 'CalibratedOpticalCenterY'),
        relative_optical_center_x=_float_property(text, 'RelativeOpticalCenterX'),
        relative_optical_center_y=_float_property(text, 'RelativeOpticalCenterY'),
    )

    dewarp_raw = get_dji_property(text, 'DewarpData')
    if dewarp_raw is not None:
        date, sep, _ = dewarp_raw.partition(';')
        if sep and date.strip():
            calibration.dewarp_date = date.strip()
        calibration.dewarp = parse_dewarp_data(dewarp_raw)

    matrix_raw = get_dji_property(text, 'DewarpHMatrix')
    if matrix_raw is not None:
        calibration.homography = parse_homography(matrix_raw)

    return calibration


def extract_from_findings(findings: Iterable[Finding]) -> Optional[DroneCalibration]:
    """
    Merge calibration values across findings.

    The first finding that carries a property wins.

    Returns:
        DroneCalibration, or None if no finding carries any DJI property
    """
    merged = DroneCalibration()
    for finding in findings:
        merged.merge(extract_drone_calibration(finding.text))
    if merged.is_empty:
        return None
    return merged
