# -*- coding: utf-8 -*-
"""Value grammar of ISG header fields and data cells.

Every function takes the trimmed text of a token and either returns the
typed value or raises :class:`isg_lib.errors.ParseValueError` carrying the
offending text. ``FIELD_GRAMMAR`` maps each header key to its rule.
"""

import re
from collections.abc import Callable
from re import Pattern
from typing import Any

from pydantic import ValidationError

from isg_lib.constants import DEGREE_SIGN
from isg_lib.constants import PLACEHOLDER
from isg_lib.enums import CoordType
from isg_lib.enums import CoordUnits
from isg_lib.enums import DataFormat
from isg_lib.enums import DataOrdering
from isg_lib.enums import DataType
from isg_lib.enums import DataUnits
from isg_lib.enums import HeaderField
from isg_lib.enums import ModelType
from isg_lib.enums import TideSystem
from isg_lib.errors import ParseValueError
from isg_lib.models import Coord
from isg_lib.models import CreationDate
from isg_lib.models import DecCoord
from isg_lib.models import DMSCoord

# Decimal literal: no digit separators, no surrounding whitespace
DECIMAL: Pattern[str] = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)
UNSIGNED: Pattern[str] = re.compile(r"\+?\d+", re.ASCII)
DMS: Pattern[str] = re.compile(rf"([+-]?\d+){DEGREE_SIGN}(\d+)'(\d+)\"", re.ASCII)
DATE: Pattern[str] = re.compile(r"(\d+)/(\d+)/(\d+)", re.ASCII)


def optional(rule: Callable[[str], Any]) -> Callable[[str], Any]:
    """Wrap a rule so that the ``---`` placeholder parses to None."""

    def parse_optional(text: str) -> Any:
        if text == PLACEHOLDER:
            return None
        return rule(text)

    return parse_optional


def parse_textual(text: str) -> str | None:
    """Parse a free-text field (model name, ref frame, ...).

    Empty text is never meaningful; ``---`` means absent.
    """
    if not text:
        raise ParseValueError(text)
    if text == PLACEHOLDER:
        return None
    return text


def parse_decimal(text: str) -> float:
    if not DECIMAL.fullmatch(text):
        raise ParseValueError(text)
    return float(text)


def parse_unsigned(text: str) -> int:
    if not UNSIGNED.fullmatch(text):
        raise ParseValueError(text)
    return int(text)


def parse_coord(text: str) -> Coord:
    """Parse a coordinate.

    A decimal literal gives a :class:`DecCoord`; otherwise the text must be
    exactly ``<int>°<uint>'<uint>"``. Minutes and seconds must be 0..59.

    Args:
        text: Trimmed token text

    Returns:
        DecCoord or DMSCoord

    Raises:
        ParseValueError: If the text is neither form
    """
    if DECIMAL.fullmatch(text):
        return DecCoord(float(text))

    match = DMS.fullmatch(text)
    if not match:
        raise ParseValueError(text)

    degree, minutes, second = (int(part) for part in match.groups())
    if minutes > 59 or second > 59:
        raise ParseValueError(text)

    return DMSCoord(degree=degree, minutes=minutes, second=second)


def parse_creation_date(text: str) -> CreationDate:
    """Parse a ``day/month/year`` creation date."""
    match = DATE.fullmatch(text)
    if not match:
        raise ParseValueError(text)

    day, month, year = (int(part) for part in match.groups())
    try:
        return CreationDate(year=year, month=month, day=day)
    except ValidationError:
        raise ParseValueError(text) from None


def parse_isg_format(text: str) -> str:
    # The version literal is checked when the header is assembled
    if not text:
        raise ParseValueError(text)
    return text


#: Grammar rule of every header key
FIELD_GRAMMAR: dict[HeaderField, Callable[[str], Any]] = {
    HeaderField.MODEL_NAME: parse_textual,
    HeaderField.MODEL_YEAR: parse_textual,
    HeaderField.MODEL_TYPE: optional(ModelType.parse),
    HeaderField.DATA_TYPE: optional(DataType.parse),
    HeaderField.DATA_UNITS: optional(DataUnits.parse),
    HeaderField.DATA_FORMAT: DataFormat.parse,
    HeaderField.DATA_ORDERING: optional(DataOrdering.parse),
    HeaderField.REF_ELLIPSOID: parse_textual,
    HeaderField.REF_FRAME: parse_textual,
    HeaderField.HEIGHT_DATUM: parse_textual,
    HeaderField.TIDE_SYSTEM: optional(TideSystem.parse),
    HeaderField.COORD_TYPE: CoordType.parse,
    HeaderField.COORD_UNITS: CoordUnits.parse,
    HeaderField.MAP_PROJECTION: parse_textual,
    HeaderField.EPSG_CODE: parse_textual,
    HeaderField.LAT_MIN: optional(parse_coord),
    HeaderField.LAT_MAX: optional(parse_coord),
    HeaderField.NORTH_MIN: optional(parse_coord),
    HeaderField.NORTH_MAX: optional(parse_coord),
    HeaderField.LON_MIN: optional(parse_coord),
    HeaderField.LON_MAX: optional(parse_coord),
    HeaderField.EAST_MIN: optional(parse_coord),
    HeaderField.EAST_MAX: optional(parse_coord),
    HeaderField.DELTA_LAT: optional(parse_coord),
    HeaderField.DELTA_LON: optional(parse_coord),
    HeaderField.DELTA_NORTH: optional(parse_coord),
    HeaderField.DELTA_EAST: optional(parse_coord),
    HeaderField.NROWS: parse_unsigned,
    HeaderField.NCOLS: parse_unsigned,
    HeaderField.NODATA: optional(parse_decimal),
    HeaderField.CREATION_DATE: optional(parse_creation_date),
    HeaderField.ISG_FORMAT: parse_isg_format,
}
