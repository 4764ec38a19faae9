# -*- coding: utf-8 -*-
"""Validate command for ISG files.

Parses each file (ISG or JSON) and checks it against the ISG 2.0
invariants. Prints one line per file; the exit code is 1 if any file fails.
"""

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError

from isg_lib.commands.convert import ConversionError
from isg_lib.commands.convert import detect_file_format
from isg_lib.enums import FileFormat
from isg_lib.errors import ISGError
from isg_lib.interface import ISGInterface
from isg_lib.validation import validate as validate_document

logger = logging.getLogger(__name__)


def _validate_file(path: Path) -> None:
    if detect_file_format(path) == FileFormat.ISG:
        document = ISGInterface.load_isg(path)
    else:
        document = ISGInterface.load_json(path)
    validate_document(document)


def validate(args: list[str]) -> int:
    """Entry point for the validate command."""
    parser = argparse.ArgumentParser(
        prog="isg validate",
        description="Check ISG (or JSON) files against the ISG 2.0 format",
    )
    parser.add_argument(
        "files",
        type=Path,
        nargs="+",
        help="Files to check (.isg or .json)",
    )

    parsed_args = parser.parse_args(args)

    status = 0
    for path in parsed_args.files:
        try:
            _validate_file(path)
        except (
            ConversionError,
            FileNotFoundError,
            ISGError,
            ValidationError,
        ) as e:
            print(f"{path}: {e}")  # noqa: T201
            logger.debug("Validation of %s failed", path, exc_info=True)
            status = 1
        else:
            print(f"{path}: ok")  # noqa: T201

    return status
