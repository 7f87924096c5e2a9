# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata utility functions for batch operations.

This module finds TIFF files on disk and inspects many of them,
recording per-file failures instead of stopping the batch.

Copyright 2025 DNAi inc.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from tiffscan.exceptions import TiffScanError
from tiffscan.inspector import InspectionResult, ScanConfig, inspect_file

logger = logging.getLogger(__name__)

TIFF_EXTENSIONS = ('.tif', '.tiff')


def is_tiff_path(path: Union[str, Path], extensions: Sequence[str] = TIFF_EXTENSIONS) -> bool:
    """Check the file extension case-insensitively."""
    return Path(path).suffix.lower() in {ext.lower() for ext in extensions}


def find_tiff_files(
    directory: Union[str, Path],
    recursive: bool = False,
    extensions: Sequence[str] = TIFF_EXTENSIONS
) -> List[Path]:
    """
    List TIFF files in a directory.

    Args:
        directory: Directory to search
        recursive: If True, also search subdirectories
        extensions: Accepted extensions, compared case-insensitively

    Returns:
        Sorted list of matching file paths

    Example:
        >>> find_tiff_files('example/input')
        [PosixPath('example/input/DJI_0081.TIF'), ...]
    """
    root = Path(directory)
    candidates = root.rglob('*') if recursive else root.iterdir()
    return sorted(
        path for path in candidates
        if path.is_file() and is_tiff_path(path, extensions)
    )


def expand_paths(
    paths: Iterable[Union[str, Path]],
    recursive: bool = False,
    extensions: Sequence[str] = TIFF_EXTENSIONS
) -> List[Path]:
    """
    Expand directories into the TIFF files they contain.

    Paths that are not directories are passed through unchanged, even
    when they do not exist, so the batch can report them as failures.
    A file named more than once is listed once, at its first position.
    """
    expanded: List[Path] = []
    for item in paths:
        path = Path(item)
        if path.is_dir():
            expanded.extend(find_tiff_files(path, recursive, extensions))
        else:
            expanded.append(path)
    return list(dict.fromkeys(expanded))


def _inspect_one(
    path: Path,
    config: ScanConfig,
    error_handler: Optional[Callable[[Path, Exception], None]]
) -> InspectionResult:
    try:
        return inspect_file(path, config)
    except TiffScanError as e:
        logger.warning("Failed to inspect %s: %s", path, e)
        if error_handler:
            error_handler(path, e)
        return InspectionResult(path=path, error=str(e))


def batch_inspect(
    file_paths: Iterable[Union[str, Path]],
    config: Optional[ScanConfig] = None,
    error_handler: Optional[Callable[[Path, Exception], None]] = None,
    max_workers: int = 1
) -> Dict[Path, InspectionResult]:
    """
    Inspect multiple files.

    A file that cannot be read or decoded yields a result with
    ``error`` set; the remaining files are still processed. Repeated
    paths are inspected once.

    Args:
        file_paths: Files to inspect
        config: Scan options shared by every file
        error_handler: Optional callback function for handling errors (path, exception)
        max_workers: Number of worker threads; 1 inspects files sequentially

    Returns:
        Dictionary mapping file paths to results, in input order
    """
    config = config or ScanConfig()
    paths = list(dict.fromkeys(Path(p) for p in file_paths))

    if max_workers <= 1 or len(paths) <= 1:
        results = [_inspect_one(path, config, error_handler) for path in paths]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda p: _inspect_one(p, config, error_handler), paths))

    return dict(zip(paths, results))


def summarize(results: Dict[Path, InspectionResult]) -> Dict[str, object]:
    """
    Count files, failures and findings per marker.

    Returns:
        Dictionary with 'files', 'failed', 'findings' and 'markers' keys
    """
    markers: Counter = Counter()
    failed = 0
    for result in results.values():
        if not result.ok:
            failed += 1
        markers.update(finding.marker for finding in result.findings)
    return {
        'files': len(results),
        'failed': failed,
        'findings': sum(markers.values()),
        'markers': dict(markers),
    }
