# -*- coding: utf-8 -*-
"""Enumerations for the ISG file format.

Each vocabulary enum carries the exact ISG text as its value, so the same
table serves parsing (``ModelType.parse("gravimetric")``), formatting
(``member.value``) and JSON serialization.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from isg_lib.errors import ParseValueError

if TYPE_CHECKING:
    from isg_lib.models import Coord


class _ISGTextEnum(str, Enum):
    """Base for enums whose values are the literal ISG vocabulary."""

    @classmethod
    def parse(cls, text: str):
        """Parse an ISG header value by exact match.

        Args:
            text: Trimmed header value

        Returns:
            The matching member

        Raises:
            ParseValueError: If the text is not part of the vocabulary
        """
        try:
            return cls(text)
        except ValueError:
            raise ParseValueError(text) from None


class ModelType(_ISGTextEnum):
    """Method used to compute the model."""

    GRAVIMETRIC = "gravimetric"
    GEOMETRIC = "geometric"
    HYBRID = "hybrid"


class DataType(_ISGTextEnum):
    """Kind of surface stored in the file."""

    GEOID = "geoid"
    QUASI_GEOID = "quasi-geoid"


class DataUnits(_ISGTextEnum):
    """Unit of the data values."""

    METERS = "meters"
    FEET = "feet"


class DataFormat(_ISGTextEnum):
    """Layout of the data section.

    Attributes:
        GRID: Dense row-major grid of values
        SPARSE: List of (coord, coord, value) points
    """

    GRID = "grid"
    SPARSE = "sparse"


class DataOrdering(_ISGTextEnum):
    """Ordering of the data section."""

    N_TO_S_W_TO_E = "N-to-S, W-to-E"
    LAT_LON_N = "lat, lon, N"
    EAST_NORTH_N = "east, north, N"
    N = "N"
    ZETA = "zeta"


class TideSystem(_ISGTextEnum):
    TIDE_FREE = "tide-free"
    MEAN_TIDE = "mean-tide"
    ZERO_TIDE = "zero-tide"


class CoordType(_ISGTextEnum):
    """Coordinate system of the data bounds and sparse points.

    Attributes:
        GEODETIC: latitude / longitude
        PROJECTED: northing / easting
    """

    GEODETIC = "geodetic"
    PROJECTED = "projected"


class CoordUnits(_ISGTextEnum):
    """Unit of every coordinate in the file.

    ``dms`` requires sexagesimal coordinates; every other unit requires
    decimal coordinates.
    """

    DMS = "dms"
    DEG = "deg"
    METERS = "meters"
    FEET = "feet"

    def accepts(self, coord: Coord) -> bool:
        """Check whether a coordinate variant is legal under this unit.

        Args:
            coord: DMS or decimal coordinate

        Returns:
            True if the coordinate variant matches the unit
        """
        return coord.is_dms == (self is CoordUnits.DMS)


class HeaderField(str, Enum):
    """Header keys of an ISG 2.0 file, in canonical order.

    The value is the key as written in the file. The member name, lowercased,
    is the matching attribute of :class:`isg_lib.models.Header` (or of the
    data bounds model for coordinate fields).
    """

    MODEL_NAME = "model name"
    MODEL_YEAR = "model year"
    MODEL_TYPE = "model type"
    DATA_TYPE = "data type"
    DATA_UNITS = "data units"
    DATA_FORMAT = "data format"
    DATA_ORDERING = "data ordering"
    REF_ELLIPSOID = "ref ellipsoid"
    REF_FRAME = "ref frame"
    HEIGHT_DATUM = "height datum"
    TIDE_SYSTEM = "tide system"
    COORD_TYPE = "coord type"
    COORD_UNITS = "coord units"
    MAP_PROJECTION = "map projection"
    EPSG_CODE = "EPSG code"
    LAT_MIN = "lat min"
    LAT_MAX = "lat max"
    NORTH_MIN = "north min"
    NORTH_MAX = "north max"
    LON_MIN = "lon min"
    LON_MAX = "lon max"
    EAST_MIN = "east min"
    EAST_MAX = "east max"
    DELTA_LAT = "delta lat"
    DELTA_LON = "delta lon"
    DELTA_NORTH = "delta north"
    DELTA_EAST = "delta east"
    NROWS = "nrows"
    NCOLS = "ncols"
    NODATA = "nodata"
    CREATION_DATE = "creation date"
    ISG_FORMAT = "ISG format"

    @property
    def attribute(self) -> str:
        """Name of the model attribute holding this field."""
        return self.name.lower()

    @property
    def separator(self) -> str:
        """Separator written after the label by the formatter."""
        return ":" if self in _DESCRIPTIVE_FIELDS else "="

    @classmethod
    def lookup(cls, key: str) -> HeaderField | None:
        """Get the field for a header key, or None if the key is unknown."""
        try:
            return cls(key)
        except ValueError:
            return None


#: Fields written with a ``:`` separator; the remaining ones use ``=``
_DESCRIPTIVE_FIELDS: frozenset[HeaderField] = frozenset(
    [
        HeaderField.MODEL_NAME,
        HeaderField.MODEL_YEAR,
        HeaderField.MODEL_TYPE,
        HeaderField.DATA_TYPE,
        HeaderField.DATA_UNITS,
        HeaderField.DATA_FORMAT,
        HeaderField.DATA_ORDERING,
        HeaderField.REF_ELLIPSOID,
        HeaderField.REF_FRAME,
        HeaderField.HEIGHT_DATUM,
        HeaderField.TIDE_SYSTEM,
        HeaderField.COORD_TYPE,
        HeaderField.COORD_UNITS,
        HeaderField.MAP_PROJECTION,
        HeaderField.EPSG_CODE,
    ]
)

#: Coordinate fields per coordinate system, in canonical order
GEODETIC_FIELDS: tuple[HeaderField, ...] = (
    HeaderField.LAT_MIN,
    HeaderField.LAT_MAX,
    HeaderField.LON_MIN,
    HeaderField.LON_MAX,
    HeaderField.DELTA_LAT,
    HeaderField.DELTA_LON,
)
PROJECTED_FIELDS: tuple[HeaderField, ...] = (
    HeaderField.NORTH_MIN,
    HeaderField.NORTH_MAX,
    HeaderField.EAST_MIN,
    HeaderField.EAST_MAX,
    HeaderField.DELTA_NORTH,
    HeaderField.DELTA_EAST,
)
DELTA_FIELDS: frozenset[HeaderField] = frozenset(
    [
        HeaderField.DELTA_LAT,
        HeaderField.DELTA_LON,
        HeaderField.DELTA_NORTH,
        HeaderField.DELTA_EAST,
    ]
)


class DataAxis(str, Enum):
    """Direction of a data length error."""

    ROW = "row"
    COLUMN = "column"


class FileFormat(str, Enum):
    """File format types for conversion operations.

    Attributes:
        ISG: Native ISG text format
        JSON: JSON serialization format
    """

    ISG = "isg"
    JSON = "json"


class FileExtension(str, Enum):
    """File extensions for supported file formats (with dot)."""

    ISG = ".isg"
    JSON = ".json"
