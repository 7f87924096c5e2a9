"""
Tests for DJI calibration extraction.
"""

from __future__ import annotations

import pytest

from tiffscan.drone_metadata import (
    extract_drone_calibration,
    extract_from_findings,
    get_dji_property,
    parse_dewarp_data,
    parse_homography,
)
from tiffscan.metadata_scanner import Finding


class TestExtraction:
    """Test property extraction from XMP text."""

    def test_full_packet(self, dji_xmp):
        calibration = extract_drone_calibration(dji_xmp)
        assert calibration.capture_uuid == "3f1c9e2a-0b7d-4c55-9d4e-8a6f0e7b1c22"
        assert calibration.calibrated_optical_center_x == pytest.approx(1296.0)
        assert calibration.calibrated_optical_center_y == pytest.approx(974.0)
        assert calibration.relative_optical_center_x == pytest.approx(-3.5)
        assert calibration.relative_optical_center_y == pytest.approx(2.25)
        assert calibration.dewarp_date == "2022-06-08"
        assert calibration.dewarp["fx"] == pytest.approx(2191.0)
        assert calibration.dewarp["cy"] == pytest.approx(-6.25)
        assert calibration.dewarp["k3"] == pytest.approx(-0.003)
        assert calibration.homography == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]

    def test_element_form(self):
        text = "<drone-dji:RelativeOpticalCenterX> 12.5 </drone-dji:RelativeOpticalCenterX>"
        assert get_dji_property(text, "RelativeOpticalCenterX") == "12.5"
        assert extract_drone_calibration(text).relative_optical_center_x == pytest.approx(12.5)

    def test_missing_properties_are_none(self):
        calibration = extract_drone_calibration("no drone data here")
        assert calibration.is_empty

    def test_malformed_number_is_none(self):
        calibration = extract_drone_calibration('drone-dji:RelativeOpticalCenterX="abc"')
        assert calibration.relative_optical_center_x is None

    def test_prefix_must_match(self):
        assert get_dji_property('other:RelativeOpticalCenterX="1"', "RelativeOpticalCenterX") is None


class TestDewarp:
    """Test DewarpData and DewarpHMatrix parsing."""

    def test_too_few_parameters(self):
        assert parse_dewarp_data("2022-06-08;1,2,3") is None

    def test_missing_separator(self):
        assert parse_dewarp_data("1,2,3,4,5,6,7,8,9") is None

    def test_extra_parameters_ignored(self):
        result = parse_dewarp_data("d;1,2,3,4,5,6,7,8,9,10")
        assert result["k3"] == 9.0
        assert len(result) == 9

    def test_homography_needs_nine_values(self):
        assert parse_homography("1,0,0,0,1,0,0,0") is None
        assert parse_homography("1,0,0,0,1,0,0,0,x") is None

    def test_dewarp_without_date(self):
        calibration = extract_drone_calibration('drone-dji:DewarpData="1,2,3"')
        assert calibration.dewarp_date is None
        assert calibration.dewarp is None


class TestFromFindings:
    """Test merging across findings."""

    def test_first_value_wins(self):
        findings = [
            Finding(700, "xmp-meta", 'drone-dji:RelativeOpticalCenterX="1"'),
            Finding(900, "vendor-optical-center",
                    'drone-dji:RelativeOpticalCenterX="2" drone-dji:RelativeOpticalCenterY="3"'),
        ]
        calibration = extract_from_findings(findings)
        assert calibration.relative_optical_center_x == 1.0
        assert calibration.relative_optical_center_y == 3.0

    def test_no_properties(self):
        assert extract_from_findings([Finding(700, "xmp-meta", "<x:xmpmeta/>")]) is None
        assert extract_from_findings([]) is None
