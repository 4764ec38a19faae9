# -*- coding: utf-8 -*-
"""Unified interface for ISG file I/O.

This module provides the primary entry point for reading and writing
ISG files and their JSON rendition:

1. The parser produces a dictionary (like loading JSON from disk)
2. The dictionary feeds the Pydantic models via ``model_validate()``
3. Models serialize to JSON via ``model_dump_json()``
4. The formatter converts models back to ISG text
"""

import logging
from pathlib import Path

from isg_lib.constants import ISG_ENCODING
from isg_lib.constants import JSON_ENCODING
from isg_lib.format import format_isg
from isg_lib.models import ISGDocument
from isg_lib.parser import ISGParser

logger = logging.getLogger(__name__)


class ISGInterface:
    """Unified interface for ISG file I/O.

    - Reading: File -> Parser -> Dictionary -> model_validate() -> Model
    - Writing: Model -> Formatter -> File

    Example:
        document = ISGInterface.load_isg(Path("geoid.isg"))
        print(document.header.model_name)

        ISGInterface.save_json(document, Path("geoid.json"))
    """

    # -------------------------------------------------------------------------
    # ISG Methods
    # -------------------------------------------------------------------------

    @classmethod
    def load_isg(
        cls,
        path: Path,
        *,
        encoding: str = ISG_ENCODING,
    ) -> ISGDocument:
        """Load an ISG file.

        Args:
            path: Path to the .isg file
            encoding: Character encoding

        Returns:
            The parsed document

        Raises:
            ISGParseError: If the file is not valid ISG 2.0
            FileNotFoundError: If the file doesn't exist
        """
        logger.info("Loading ISG file: %s", path)
        with path.open(encoding=encoding) as f:
            content = f.read()

        data = ISGParser().parse_string_to_dict(content)

        # Single model_validate() call
        return ISGDocument.model_validate(data)

    @classmethod
    def save_isg(
        cls,
        document: ISGDocument,
        path: Path,
        *,
        encoding: str = ISG_ENCODING,
    ) -> None:
        """Save a document as an ISG file.

        Args:
            document: The document to save
            path: Path to write to
            encoding: Character encoding

        Raises:
            ISGSerializationError: If a grid cell is absent and nodata is unset
        """
        content = format_isg(document)
        with path.open(mode="w", encoding=encoding, newline="") as f:
            f.write(content)
        logger.info("Saved ISG file: %s", path)

    # -------------------------------------------------------------------------
    # JSON Methods
    # -------------------------------------------------------------------------

    @classmethod
    def to_json(cls, document: ISGDocument, *, indent: int | None = 2) -> str:
        """Serialize a document to JSON.

        Coordinates are written as ``{"degree", "minutes", "second"}`` objects
        or bare numbers; enums as their ISG text. The data bounds and data
        section carry no variant tag.
        """
        return document.model_dump_json(indent=indent, by_alias=True)

    @classmethod
    def from_json(cls, json_str: str | bytes) -> ISGDocument:
        """Deserialize a document from JSON.

        The data variant is picked from ``header.data_format`` and the data
        bounds shape from its keys.
        """
        return ISGDocument.model_validate_json(json_str)

    @classmethod
    def save_json(cls, document: ISGDocument, path: Path) -> None:
        """Save a document as JSON.

        Uses Pydantic's built-in serialization.

        Args:
            document: Document to serialize
            path: Path to write JSON file
        """
        path.write_text(cls.to_json(document), encoding=JSON_ENCODING)
        logger.info("Saved JSON file: %s", path)

    @classmethod
    def load_json(cls, path: Path) -> ISGDocument:
        """Load a document from JSON.

        Args:
            path: Path to JSON file

        Returns:
            Deserialized document
        """
        logger.info("Loading JSON file: %s", path)
        return cls.from_json(path.read_text(encoding=JSON_ENCODING))
