# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for tiffscan

Lists the tag directory of TIFF files and reports metadata embedded
in their tag values.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tiffscan import __version__
from tiffscan.inspector import InspectionResult, ScanConfig
from tiffscan.metadata_utils import batch_inspect, expand_paths, summarize
from tiffscan.value_formatter import DEFAULT_MAX_LENGTH, format_entry, format_finding, result_to_dict


def format_result(result: InspectionResult, max_length: int = DEFAULT_MAX_LENGTH, show_names: bool = False) -> str:
    """
    Format one inspection result as text.

    Args:
        result: Result to format
        max_length: Display truncation threshold for tag values
        show_names: Include tag names and field types

    Returns:
        Multi-line text block
    """
    lines = [f"File: {result.path}"]
    if not result.ok:
        lines.append(f"Error: {result.error}")
        return "\n".join(lines)

    for index, ifd in enumerate(result.ifds):
        if len(result.ifds) > 1:
            lines.append(f"IFD{index} (offset {ifd.offset})")
        for entry in ifd.entries:
            lines.append(format_entry(entry, max_length, show_names))

    for finding in result.findings:
        lines.append(format_finding(finding))

    if result.drone is not None:
        lines.append("Drone calibration:")
        for key, value in result.drone.to_dict().items():
            if value is not None:
                lines.append(f"  {key}: {value}")

    if result.exif:
        lines.append("EXIF:")
        for key, value in sorted(result.exif.items()):
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiffscan",
        description="tiffscan - List TIFF tag directories and find embedded XMP and vendor metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Inspect one file
  tiffscan DJI_0081.TIF

  # Inspect every .tif/.tiff file in a directory, four at a time
  tiffscan -w 4 example/input

  # JSON output including standard EXIF fields
  tiffscan -j --exif DJI_0081.TIF
        """
    )
    parser.add_argument('files', nargs='+', help='File(s) or directory(ies) to process')
    parser.add_argument('-r', '--recurse', action='store_true', help='Recursively process directories')
    parser.add_argument('-j', '--json', action='store_true', help='Output results in JSON format')
    parser.add_argument('--all-ifds', action='store_true', help='Decode every IFD in the chain, not only the first')
    parser.add_argument('--exif', action='store_true', help='Also read standard EXIF fields')
    parser.add_argument('--no-drone', action='store_true', help='Skip DJI calibration extraction')
    parser.add_argument('--names', action='store_true', help='Show tag names and field types')
    parser.add_argument('--max-length', type=int, default=DEFAULT_MAX_LENGTH,
                        help='Show values longer than this as [Large Data] (0 shows everything)')
    parser.add_argument('-w', '--workers', type=int, default=1, help='Number of files to inspect in parallel')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        0 if every file was inspected, 1 if any file failed
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_length < 0:
        parser.error("--max-length must be 0 or greater")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = ScanConfig(
        all_ifds=args.all_ifds,
        read_exif=args.exif,
        extract_drone=not args.no_drone,
    )
    paths = expand_paths(args.files, recursive=args.recurse)
    if not paths:
        print("No TIFF files found", file=sys.stderr)
        return 1

    results = batch_inspect(paths, config, max_workers=args.workers)

    if args.json:
        output = {
            'files': [result_to_dict(result) for result in results.values()],
            'summary': summarize(results),
        }
        print(json.dumps(output, indent=2, ensure_ascii=False, allow_nan=False))
    else:
        blocks = [format_result(result, args.max_length, args.names) for result in results.values()]
        print("\n\n".join(blocks))

    return 0 if all(result.ok for result in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
