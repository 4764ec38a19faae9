# -*- coding: utf-8 -*-
"""Constants used throughout the isg_lib library.

This module centralizes all constant values to ensure consistency
between the parser and the formatter. Both directions read their
markers, column widths and precisions from here.
"""

# -----------------------------------------------------------------------------
# File Encodings
# -----------------------------------------------------------------------------

#: Default encoding for ISG files
ISG_ENCODING = "utf-8"

#: Encoding used for JSON files
JSON_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Format Markers
# -----------------------------------------------------------------------------

#: Prefix of the line opening the header section
BEGIN_OF_HEAD = "begin_of_head"

#: Prefix of the line closing the header section
END_OF_HEAD = "end_of_head"

#: Full marker lines written by the formatter (the `=` padding is ignored on read)
BEGIN_OF_HEAD_LINE: str = BEGIN_OF_HEAD + " " + "=" * 48
END_OF_HEAD_LINE: str = END_OF_HEAD + " " + "=" * 50

#: Accepted header separators
COLON = ":"
EQUALS = "="
HEADER_SEPARATORS: tuple[str, str] = (COLON, EQUALS)

#: Placeholder meaning "field present, value absent"
PLACEHOLDER = "---"

#: The only supported value of the `ISG format` field
ISG_FORMAT_VERSION = "2.0"

#: Degree sign used by DMS coordinates
DEGREE_SIGN = "\N{DEGREE SIGN}"

# -----------------------------------------------------------------------------
# Formatting Constants
# -----------------------------------------------------------------------------

#: Width of the header label column (key is left-justified to this width)
LABEL_WIDTH: int = 15

#: Width of right-aligned header values (coordinates, nrows, ncols, ...)
VALUE_WIDTH: int = 11

#: Width of the degree part of a DMS coordinate
DMS_DEGREE_WIDTH: int = 4

#: Decimal places for coordinates in decimal degrees
DEGREE_PRECISION: int = 6

#: Decimal places for coordinates in meters or feet
LINEAR_PRECISION: int = 3

#: Width and decimal places of data values (grid cells, sparse values, nodata)
DATA_WIDTH: int = 10
DATA_PRECISION: int = 4

#: Number of columns of a sparse data row (coord, coord, value)
SPARSE_NCOLS: int = 3
