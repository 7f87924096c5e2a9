# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for tiffscan

This module defines the exceptions raised while decoding TIFF
directories and while reading files for inspection.

Copyright 2025 DNAi inc.
"""

from typing import Optional


class TiffScanError(Exception):
    """
    Base exception for all tiffscan errors.

    All tiffscan exceptions inherit from this class, allowing
    catch-all error handling for any tiffscan-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class TiffParseError(TiffScanError):
    """
    Raised when a TIFF buffer cannot be decoded.

    A parse error is terminal for the parse call that raised it:
    no partial directory is ever returned alongside it.
    """
    pass


class InvalidHeaderError(TiffParseError):
    """
    Raised when the TIFF header is unusable.

    This exception is raised when:
    - The buffer is shorter than the 8-byte header
    - The byte-order mark is neither 'II' nor 'MM'
    - The magic number is not 42
    """
    pass


class TruncatedDirectoryError(TiffParseError):
    """
    Raised when the buffer ends inside an Image File Directory.

    This covers a missing entry count as well as an entry table
    shorter than the declared number of entries.
    """
    pass


class OffsetOutOfRangeError(TiffParseError):
    """
    Raised when an out-of-line tag value points outside the buffer.
    """
    def __init__(
        self,
        message: str = "",
        tag_id: Optional[int] = None,
        offset: Optional[int] = None,
        length: Optional[int] = None,
        buffer_length: Optional[int] = None
    ):
        self.tag_id = tag_id
        self.offset = offset
        self.length = length
        self.buffer_length = buffer_length
        super().__init__(message)


class MetadataReadError(TiffScanError):
    """
    Raised when metadata cannot be read from a file.

    This exception is raised when:
    - The file does not exist or cannot be opened
    - File permissions prevent reading
    - The standard EXIF reader fails on the file contents
    """
    pass
