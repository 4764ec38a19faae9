# -*- coding: utf-8 -*-
"""Convert command for ISG files.

Supports bidirectional conversion between the ISG text format and JSON
using Pydantic's built-in serialization.
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from isg_lib.constants import ISG_ENCODING
from isg_lib.constants import JSON_ENCODING
from isg_lib.enums import FileExtension
from isg_lib.enums import FileFormat
from isg_lib.errors import ISGError
from isg_lib.format import format_isg
from isg_lib.interface import ISGInterface

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Error raised for invalid conversion operations."""


def detect_file_format(path: Path) -> FileFormat:
    """Detect the file format based on the file extension.

    Args:
        path: File path

    Returns:
        FileFormat.ISG or FileFormat.JSON

    Raises:
        ConversionError: If the extension is not supported
    """
    match f_ext := path.suffix.lower():
        case FileExtension.ISG.value:
            return FileFormat.ISG

        case FileExtension.JSON.value:
            return FileFormat.JSON

        case _:
            raise ConversionError(f"Unknown file extension: `{f_ext}`")


def _convert(
    input_path: Path,
    output_path: Path | None = None,
    target_format: FileFormat | str | None = None,
) -> str | None:
    """Convert a file between formats.

    Args:
        input_path: Input file path
        output_path: Output file path (None = return as string)
        target_format: Target format (FileFormat or string 'isg'/'json')

    Returns:
        Converted content as string if output_path is None,
        otherwise None (writes to file)

    Raises:
        ConversionError: If conversion is not valid
        FileNotFoundError: If input file doesn't exist
    """
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    source_format = detect_file_format(input_path)

    # Normalize target format to enum
    if isinstance(target_format, str):
        target_format = FileFormat(target_format)
    elif target_format is None:
        # Auto-determine: opposite of source
        target_format = (
            FileFormat.JSON if source_format == FileFormat.ISG else FileFormat.ISG
        )

    if source_format == target_format:
        raise ConversionError(
            f"Invalid conversion: {source_format.value} => {target_format.value}. "
            f"Source and target formats must be different."
        )

    if source_format == FileFormat.ISG:
        document = ISGInterface.load_isg(input_path)
        result = ISGInterface.to_json(document)
    else:
        document = ISGInterface.load_json(input_path)
        result = format_isg(document)

    logger.debug(
        "Converted %s: %s => %s",
        input_path,
        source_format.value,
        target_format.value,
    )

    if output_path is None:
        return result

    encoding = JSON_ENCODING if target_format == FileFormat.JSON else ISG_ENCODING
    with output_path.open(mode="w", encoding=encoding, newline="") as f:
        f.write(result)

    return None


def convert(args: list[str]) -> int:
    """Entry point for the convert command."""
    parser = argparse.ArgumentParser(
        prog="isg convert",
        description="Convert ISG files between native and JSON formats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  isg convert -i geoid.isg                     # Convert to JSON (stdout)
  isg convert -i geoid.isg -o geoid.json       # Convert to JSON file
  isg convert -i geoid.json -o geoid.isg       # Convert to ISG format
  isg convert -i geoid.json -f isg             # Convert to ISG (stdout)

Notes:
  - Source format is detected from the file extension (.isg or .json)
  - Target format is auto-detected if not specified (opposite of source)
  - Cannot convert isg -> isg or json -> json
""",
    )

    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Input file path (.isg or .json)",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[FileFormat.ISG.value, FileFormat.JSON.value],
        default=None,
        dest="target_format",
        help="Target format: 'isg' or 'json' (auto-detected if not specified)",
    )

    parsed_args = parser.parse_args(args)

    try:
        result = _convert(
            input_path=parsed_args.input_file,
            output_path=parsed_args.output_file,
            target_format=parsed_args.target_format,
        )
    except (ConversionError, FileNotFoundError, ISGError, ValidationError) as e:
        logger.error("Conversion failed: %s", e)  # noqa: TRY400
        return 1

    if result is not None:
        sys.stdout.write(result)

    return 0
