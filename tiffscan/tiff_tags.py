# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF tag definitions

Names for the tags commonly found in the first IFD of TIFF and
GeoTIFF files. Names are for display only; decoding never depends
on whether a tag id is known.

Copyright 2025 DNAi inc.
"""

from typing import Optional

TIFF_TAG_NAMES = {
    # ============================================================
    # Baseline and extended TIFF tags (0x00FE - 0x02BC)
    # ============================================================
    0x000B: "ProcessingSoftware",
    0x00FE: "SubfileType",
    0x00FF: "OldSubfileType",
    0x0100: "ImageWidth",
    0x0101: "ImageLength",
    0x0102: "BitsPerSample",
    0x0103: "Compression",
    0x0106: "PhotometricInterpretation",
    0x010D: "DocumentName",
    0x010E: "ImageDescription",
    0x010F: "Make",
    0x0110: "Model",
    0x0111: "StripOffsets",
    0x0112: "Orientation",
    0x0115: "SamplesPerPixel",
    0x0116: "RowsPerStrip",
    0x0117: "StripByteCounts",
    0x0118: "MinSampleValue",
    0x0119: "MaxSampleValue",
    0x011A: "XResolution",
    0x011B: "YResolution",
    0x011C: "PlanarConfiguration",
    0x011D: "PageName",
    0x0128: "ResolutionUnit",
    0x0129: "PageNumber",
    0x0131: "Software",
    0x0132: "DateTime",
    0x013B: "Artist",
    0x013C: "HostComputer",
    0x013D: "Predictor",
    0x0140: "ColorMap",
    0x0142: "TileWidth",
    0x0143: "TileLength",
    0x0144: "TileOffsets",
    0x0145: "TileByteCounts",
    0x014A: "SubIFDs",
    0x0152: "ExtraSamples",
    0x0153: "SampleFormat",
    0x0154: "SMinSampleValue",
    0x0155: "SMaxSampleValue",
    0x015B: "JPEGTables",
    0x0211: "YCbCrCoefficients",
    0x0212: "YCbCrSubSampling",
    0x0213: "YCbCrPositioning",
    0x0214: "ReferenceBlackWhite",
    0x02BC: "XMLPacket",

    # ============================================================
    # Private tags carried by IFD0 (0x8000 - 0xFFFF)
    # ============================================================
    0x8298: "Copyright",
    0x83BB: "IPTC-NAA",
    0x8649: "PhotoshopSettings",
    0x8769: "ExifIFD",
    0x8773: "ICC_Profile",
    0x8825: "GPSInfo",
    0x927C: "MakerNote",
    0x9286: "UserComment",
    0xA005: "InteroperabilityIFD",
    0xC612: "DNGVersion",

    # ============================================================
    # GeoTIFF tags
    # ============================================================
    0x830E: "ModelPixelScaleTag",
    0x8480: "IntergraphMatrixTag",
    0x8482: "ModelTiepointTag",
    0x85D8: "ModelTransformationTag",
    0x87AF: "GeoKeyDirectoryTag",
    0x87B0: "GeoDoubleParamsTag",
    0x87B1: "GeoAsciiParamsTag",
    0xA480: "GDAL_METADATA",
    0xA481: "GDAL_NODATA",
}

# Tag that holds an XMP packet by convention
XMP_TAG_ID = 0x02BC


def get_tag_name(tag_id: int) -> Optional[str]:
    """
    Look up the display name of a tag.

    Args:
        tag_id: Numeric tag id

    Returns:
        Tag name, or None if the tag is not in the table
    """
    return TIFF_TAG_NAMES.get(tag_id)
