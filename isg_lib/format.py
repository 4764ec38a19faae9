# -*- coding: utf-8 -*-
"""Formatting (serialization) for ISG files.

This module converts an :class:`ISGDocument` back to ISG 2.0 text. The
output uses fixed column widths and precisions (see
:mod:`isg_lib.constants`) so that serializing, parsing and serializing
again yields identical text.

Formatting does not validate: run :func:`isg_lib.validation.validate`
first if the document was built by hand.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum

from isg_lib.constants import BEGIN_OF_HEAD_LINE
from isg_lib.constants import DATA_PRECISION
from isg_lib.constants import DATA_WIDTH
from isg_lib.constants import DEGREE_PRECISION
from isg_lib.constants import DEGREE_SIGN
from isg_lib.constants import DMS_DEGREE_WIDTH
from isg_lib.constants import END_OF_HEAD_LINE
from isg_lib.constants import LABEL_WIDTH
from isg_lib.constants import LINEAR_PRECISION
from isg_lib.constants import PLACEHOLDER
from isg_lib.constants import VALUE_WIDTH
from isg_lib.enums import CoordUnits
from isg_lib.enums import HeaderField
from isg_lib.errors import ISGSerializationError
from isg_lib.models import Coord
from isg_lib.models import CreationDate
from isg_lib.models import DMSCoord
from isg_lib.models import GridData
from isg_lib.models import Header
from isg_lib.models import ISGDocument
from isg_lib.models import SparseData


def _label(field: HeaderField) -> str:
    return f"{field.value:<{LABEL_WIDTH}}{field.separator} "


def _format_datum(value: float) -> str:
    return f"{value:{DATA_WIDTH}.{DATA_PRECISION}f}"


def _format_plain(value: float) -> str:
    """Shortest exact text without exponent, ``40`` for 40.0."""
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def format_coord(coord: Coord, coord_units: CoordUnits) -> str:
    """Format a coordinate for a header value or a sparse data cell.

    DMS coordinates are always written sexagesimal. Decimal coordinates
    use 6 places for ``deg`` and 3 for ``meters`` / ``feet``; under
    ``dms`` (an invalid document) the plain number is written, ``40``
    for 40.0.

    Args:
        coord: Coordinate to format
        coord_units: Active ``coord units``

    Returns:
        Right-aligned text, 11 characters for usual magnitudes
    """
    if isinstance(coord, DMSCoord):
        return (
            f"{coord.degree:>{DMS_DEGREE_WIDTH}}{DEGREE_SIGN}"
            f"{coord.minutes:02}'{coord.second:02}\""
        )

    match coord_units:
        case CoordUnits.DEG:
            return f"{coord.value:{VALUE_WIDTH}.{DEGREE_PRECISION}f}"
        case CoordUnits.METERS | CoordUnits.FEET:
            return f"{coord.value:{VALUE_WIDTH}.{LINEAR_PRECISION}f}"
        case _:
            return f"{_format_plain(coord.value):>{VALUE_WIDTH}}"


def format_creation_date(value: CreationDate) -> str:
    date = f"{value.day:02}/{value.month:02}/{value.year:04}"
    return f"{date:>{VALUE_WIDTH}}"


def _format_header_value(field: HeaderField, header: Header) -> str:
    value = getattr(header, field.attribute)
    if value is None:
        return PLACEHOLDER

    match field:
        case HeaderField.NROWS | HeaderField.NCOLS | HeaderField.ISG_FORMAT:
            return f"{value:>{VALUE_WIDTH}}"
        case HeaderField.NODATA:
            return " " + _format_datum(value)
        case HeaderField.CREATION_DATE:
            return format_creation_date(value)

    if isinstance(value, Enum):
        return value.value
    return value


def format_header(header: Header) -> str:
    """Format the header block, markers included.

    Keys are written in canonical order. Only the coordinate keys of the
    active data bounds shape appear; sparse shapes write their delta keys
    as ``---``.

    Args:
        header: Header to format

    Returns:
        Header text, one line per key, newline-terminated
    """
    bounds = header.data_bounds
    coords = dict(bounds.coordinates())

    lines = [BEGIN_OF_HEAD_LINE]
    for field in HeaderField:
        if field in bounds.layout:
            coord = coords.get(field)
            if coord is None:
                value = PLACEHOLDER
            else:
                value = format_coord(coord, header.coord_units)
        elif field.attribute in Header.model_fields:
            value = _format_header_value(field, header)
        else:
            # coordinate key of the other coordinate system
            continue
        lines.append(_label(field) + value)
    lines.append(END_OF_HEAD_LINE)

    return "".join(f"{line}\n" for line in lines)


def _format_grid_rows(data: GridData, nodata: float | None) -> Iterable[str]:
    for index, row in enumerate(data):
        cells = []
        for column, value in enumerate(row):
            if value is None:
                if nodata is None:
                    raise ISGSerializationError(
                        f"data (row: {index + 1}, column: {column + 1}) is absent, "
                        "but `nodata` is not set"
                    )
                value = nodata
            cells.append(_format_datum(value))
        yield " ".join(cells)


def _format_sparse_rows(data: SparseData, coord_units: CoordUnits) -> Iterable[str]:
    for a, b, value in data:
        yield (
            f"{format_coord(a, coord_units)} "
            f"{format_coord(b, coord_units)} "
            f"{_format_datum(value)}"
        )


def format_data(document: ISGDocument) -> str:
    """Format the data section.

    Grid cells holding None are written as ``nodata``.

    Raises:
        ISGSerializationError: If a grid cell is absent and ``nodata`` is unset
    """
    header = document.header
    if isinstance(document.data, GridData):
        rows = _format_grid_rows(document.data, header.nodata)
    else:
        rows = _format_sparse_rows(document.data, header.coord_units)
    return "".join(f"{row}\n" for row in rows)


def format_isg(document: ISGDocument) -> str:
    """Format a complete document as ISG text.

    The comment is written verbatim, followed by a newline if it lacks one.

    Args:
        document: Document to format

    Returns:
        ISG 2.0 text

    Raises:
        ISGSerializationError: If a grid cell is absent and ``nodata`` is unset
    """
    comment = document.comment
    if comment and not comment.endswith("\n"):
        comment += "\n"
    return comment + format_header(document.header) + format_data(document)


#: Alias matching :func:`isg_lib.parser.parse`
serialize = format_isg
