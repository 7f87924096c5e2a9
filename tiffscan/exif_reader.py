# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Standard EXIF reader

Reads conventional EXIF fields (camera make and model, exposure, GPS)
from a TIFF buffer with the exifread library. The directory reader and
scanner do not depend on this module.

Copyright 2025 DNAi inc.
"""

import io
from typing import Dict

import exifread

from tiffscan.exceptions import MetadataReadError

# Binary blobs not worth rendering as text
SKIPPED_KEYS = frozenset({"JPEGThumbnail", "TIFFThumbnail", "EXIF MakerNote"})


def read_exif(file_data: bytes, details: bool = False) -> Dict[str, str]:
    """
    Read standard EXIF tags from file data.

    Args:
        file_data: Complete file contents
        details: Passed to exifread; True also decodes MakerNote tags

    Returns:
        Dictionary of exifread tag names (e.g. 'Image Make') to printable values

    Raises:
        MetadataReadError: If exifread fails on the data
    """
    try:
        tags = exifread.process_file(io.BytesIO(file_data), details=details)
    except Exception as e:
        raise MetadataReadError(f"Failed to read EXIF metadata: {str(e)}") from e

    return {
        name: str(tag)
        for name, tag in tags.items()
        if name not in SKIPPED_KEYS
    }
