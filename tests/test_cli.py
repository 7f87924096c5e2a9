"""
Tests for the command-line interface.
"""

from __future__ import annotations

import json

import pytest

from tiffscan.cli import main


@pytest.fixture
def sample_dir(tmp_path, tiff_builder, dji_xmp):
    data = (
        tiff_builder()
        .add_short(256, 640)
        .add_ascii(270, "A description longer than twenty characters")
        .add_undefined(700, dji_xmp.encode('utf-8'))
        .build()
    )
    (tmp_path / "DJI_0081.TIF").write_bytes(data)
    (tmp_path / "readme.txt").write_text("not a tiff")
    return tmp_path


def test_text_output(sample_dir, capsys):
    assert main([str(sample_dir)]) == 0
    out = capsys.readouterr().out
    assert f"File: {sample_dir / 'DJI_0081.TIF'}" in out
    assert "Tag 256: 640" in out
    assert "Tag 270: [Large Data]" in out
    assert "FOUND xmp-meta in Tag 700" in out
    assert "relative_optical_center_x: -3.5" in out
    assert "readme.txt" not in out


def test_names_and_no_truncation(sample_dir, capsys):
    main([str(sample_dir), "--names", "--max-length", "0", "--no-drone"])
    out = capsys.readouterr().out
    assert "Tag 270 (ImageDescription, ASCII): A description longer than twenty characters" in out
    assert "Drone calibration" not in out


def test_json_output(sample_dir, capsys):
    assert main(["-j", str(sample_dir)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output['summary']['findings'] == 1
    assert output['files'][0]['findings'][0]['tag_id'] == 700


def test_failure_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.tif"
    bad.write_bytes(b'MM\x00\x2b')
    assert main([str(bad)]) == 1
    assert "Error: Invalid TIFF file" in capsys.readouterr().out


def test_empty_directory(tmp_path, capsys):
    assert main([str(tmp_path)]) == 1
    assert "No TIFF files found" in capsys.readouterr().err


def test_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_negative_max_length_rejected(sample_dir, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([str(sample_dir), "--max-length", "-1"])
    assert exc_info.value.code == 2
    assert "--max-length" in capsys.readouterr().err


def test_repeated_path_reported_once(sample_dir, capsys):
    path = str(sample_dir / "DJI_0081.TIF")
    assert main(["-j", path, path, str(sample_dir)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert len(output['files']) == 1
    assert output['summary']['files'] == 1


def test_json_output_with_nan_float(tmp_path, tiff_builder, capsys):
    data = tiff_builder().add(50000, 11, 1, b'\x00\x00\xc0\x7f').build()
    path = tmp_path / "nan.tif"
    path.write_bytes(data)
    assert main(["-j", str(path)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output['files'][0]['ifds'][0]['entries'][0]['value'] == "nan"
