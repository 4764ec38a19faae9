# -*- coding: utf-8 -*-
"""ISG Parser Library.

A Python library for parsing, validating and formatting geoid model files
in the ISG 2.0 text format of the International Service for the Geoid.

Usage:
    from isg_lib import parse, serialize, validate

    document = parse(text)
    print(document.header.model_name)
    for row in document.data:
        ...

    validate(document)
    assert serialize(document) == text

    # Or through files
    from isg_lib import ISGInterface
    document = ISGInterface.load_isg(Path("geoid.isg"))
    ISGInterface.save_json(document, Path("geoid.json"))
"""

__version__ = "0.1.0"

# Constants
from isg_lib.constants import ISG_ENCODING
from isg_lib.constants import ISG_FORMAT_VERSION
from isg_lib.constants import JSON_ENCODING

# Enums
from isg_lib.enums import CoordType
from isg_lib.enums import CoordUnits
from isg_lib.enums import DataFormat
from isg_lib.enums import DataOrdering
from isg_lib.enums import DataType
from isg_lib.enums import DataUnits
from isg_lib.enums import FileFormat
from isg_lib.enums import HeaderField
from isg_lib.enums import ModelType
from isg_lib.enums import TideSystem

# Errors
from isg_lib.errors import CoordOperationError
from isg_lib.errors import ISGError
from isg_lib.errors import ISGParseError
from isg_lib.errors import ISGSerializationError
from isg_lib.errors import ISGValidationError
from isg_lib.errors import SourceLocation

# Core operations
from isg_lib.format import serialize
from isg_lib.interface import ISGInterface

# Models
from isg_lib.models import Coord
from isg_lib.models import CreationDate
from isg_lib.models import DataBounds
from isg_lib.models import DecCoord
from isg_lib.models import DMSCoord
from isg_lib.models import GridData
from isg_lib.models import GridGeodeticBounds
from isg_lib.models import GridProjectedBounds
from isg_lib.models import Header
from isg_lib.models import ISGDocument
from isg_lib.models import SparseData
from isg_lib.models import SparseGeodeticBounds
from isg_lib.models import SparseProjectedBounds
from isg_lib.parser import ISGParser
from isg_lib.parser import parse
from isg_lib.validation import is_valid
from isg_lib.validation import validate

__all__ = [
    "ISG_ENCODING",
    "ISG_FORMAT_VERSION",
    "JSON_ENCODING",
    "Coord",
    "CoordOperationError",
    "CoordType",
    "CoordUnits",
    "CreationDate",
    "DMSCoord",
    "DataBounds",
    "DataFormat",
    "DataOrdering",
    "DataType",
    "DataUnits",
    "DecCoord",
    "FileFormat",
    "GridData",
    "GridGeodeticBounds",
    "GridProjectedBounds",
    "Header",
    "HeaderField",
    "ISGDocument",
    "ISGError",
    "ISGInterface",
    "ISGParseError",
    "ISGParser",
    "ISGSerializationError",
    "ISGValidationError",
    "ModelType",
    "SourceLocation",
    "SparseData",
    "SparseGeodeticBounds",
    "SparseProjectedBounds",
    "TideSystem",
    "is_valid",
    "parse",
    "serialize",
    "validate",
]
