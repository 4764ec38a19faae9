# -*- coding: utf-8 -*-
"""Data models for ISG documents.

This module contains the Pydantic models representing a parsed ISG file:
- DMSCoord / DecCoord: the two coordinate variants
- CreationDate: the `creation date` header value
- GridGeodeticBounds, GridProjectedBounds, SparseGeodeticBounds,
  SparseProjectedBounds: the four shapes of the data bounds
- Header: the header section
- GridData / SparseData: the data section
- ISGDocument: a complete ISG file

All models are frozen. Use ``model_copy(update=...)`` to replace fields.

Which coordinate variant is legal is decided by ``Header.coord_units``
(see :meth:`isg_lib.enums.CoordUnits.accepts`), not by the models.
"""

from __future__ import annotations

import calendar
import datetime
from typing import Annotated
from typing import Any
from typing import ClassVar
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import RootModel
from pydantic import model_validator

from isg_lib.constants import ISG_FORMAT_VERSION
from isg_lib.enums import GEODETIC_FIELDS
from isg_lib.enums import PROJECTED_FIELDS
from isg_lib.enums import CoordType
from isg_lib.enums import CoordUnits
from isg_lib.enums import DataFormat
from isg_lib.enums import DataOrdering
from isg_lib.enums import DataType
from isg_lib.enums import DataUnits
from isg_lib.enums import HeaderField
from isg_lib.enums import ModelType
from isg_lib.enums import TideSystem
from isg_lib.errors import CoordOperationError

# -----------------------------------------------------------------------------
# Coordinates
# -----------------------------------------------------------------------------


def _check_scalar(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    if value < 0:
        raise ValueError(f"coordinates can only be scaled by n >= 0, got {value}")
    return True


class DMSCoord(BaseModel):
    """Sexagesimal coordinate (degree, minutes, second).

    Minutes and seconds are unsigned; the sign lives on ``degree``.
    Carries and borrows in arithmetic treat minutes and seconds as
    magnitudes regardless of the sign of the degree.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_dms: ClassVar[bool] = True

    degree: int
    minutes: Annotated[int, Field(ge=0, le=59)]
    second: Annotated[int, Field(ge=0, le=59)]

    def to_degrees(self) -> float:
        """Convert to decimal degrees."""
        sign = -1 if self.degree < 0 else 1
        return self.degree + sign * (self.minutes / 60 + self.second / 3600)

    def __neg__(self) -> DMSCoord:
        return DMSCoord(degree=-self.degree, minutes=self.minutes, second=self.second)

    def __add__(self, other: object) -> DMSCoord:
        if isinstance(other, DecCoord):
            raise CoordOperationError("not supported ops: `DMSCoord` + `DecCoord`")
        if not isinstance(other, DMSCoord):
            return NotImplemented

        carry, second = divmod(self.second + other.second, 60)
        carry, minutes = divmod(self.minutes + other.minutes + carry, 60)
        return DMSCoord(
            degree=self.degree + other.degree + carry,
            minutes=minutes,
            second=second,
        )

    def __sub__(self, other: object) -> DMSCoord:
        if isinstance(other, DecCoord):
            raise CoordOperationError("not supported ops: `DMSCoord` - `DecCoord`")
        if not isinstance(other, DMSCoord):
            return NotImplemented

        second = self.second - other.second
        borrow = 0
        if second < 0:
            second += 60
            borrow = 1

        minutes = self.minutes - other.minutes - borrow
        borrow = 0
        if minutes < 0:
            minutes += 60
            borrow = 1

        return DMSCoord(
            degree=self.degree - other.degree - borrow,
            minutes=minutes,
            second=second,
        )

    def __mul__(self, other: object) -> DMSCoord:
        if not _check_scalar(other):
            return NotImplemented

        carry, second = divmod(self.second * other, 60)
        carry, minutes = divmod(self.minutes * other + carry, 60)
        if self.degree >= 0:
            degree = self.degree * other + carry
        else:
            degree = self.degree * other - carry
        return DMSCoord(degree=degree, minutes=minutes, second=second)

    __rmul__ = __mul__


class DecCoord(RootModel[float]):
    """Decimal coordinate (degrees, meters or feet depending on `coord units`)."""

    model_config = ConfigDict(frozen=True)

    is_dms: ClassVar[bool] = False

    @property
    def value(self) -> float:
        return self.root

    def __neg__(self) -> DecCoord:
        return DecCoord(-self.root)

    def __add__(self, other: object) -> DecCoord:
        if isinstance(other, DMSCoord):
            raise CoordOperationError("not supported ops: `DecCoord` + `DMSCoord`")
        if not isinstance(other, DecCoord):
            return NotImplemented
        return DecCoord(self.root + other.root)

    def __sub__(self, other: object) -> DecCoord:
        if isinstance(other, DMSCoord):
            raise CoordOperationError("not supported ops: `DecCoord` - `DMSCoord`")
        if not isinstance(other, DecCoord):
            return NotImplemented
        return DecCoord(self.root - other.root)

    def __mul__(self, other: object) -> DecCoord:
        if not _check_scalar(other):
            return NotImplemented
        return DecCoord(self.root * other)

    __rmul__ = __mul__


Coord = Union[DMSCoord, DecCoord]  # noqa: UP007


# -----------------------------------------------------------------------------
# Header values
# -----------------------------------------------------------------------------


class CreationDate(BaseModel):
    """Calendar date of the `creation date` field (written DD/MM/YYYY)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    year: Annotated[int, Field(ge=1, le=9999)]
    month: Annotated[int, Field(ge=1, le=12)]
    day: Annotated[int, Field(ge=1, le=31)]

    @model_validator(mode="after")
    def check_day_of_month(self) -> CreationDate:
        _, num_days = calendar.monthrange(self.year, self.month)
        if self.day > num_days:
            raise ValueError(
                f"day must be between 1 and {num_days} for month {self.month}: "
                f"{self.day}"
            )
        return self

    @classmethod
    def from_date(cls, value: datetime.date) -> CreationDate:
        return cls(year=value.year, month=value.month, day=value.day)

    def to_date(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)


class _DataBoundsBase(BaseModel):
    """Common behaviour of the four data bounds shapes.

    ``layout`` lists the header keys written for the shape, including the
    delta keys that sparse shapes render as placeholders.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    data_format: ClassVar[DataFormat]
    coord_type: ClassVar[CoordType]
    layout: ClassVar[tuple[HeaderField, ...]]

    @classmethod
    def fields_present(cls) -> tuple[HeaderField, ...]:
        """Header keys holding a coordinate in this shape."""
        return tuple(f for f in cls.layout if f.attribute in cls.model_fields)

    def coordinates(self) -> list[tuple[HeaderField, Coord]]:
        """Get the (header key, coordinate) pairs in canonical order."""
        return [(f, getattr(self, f.attribute)) for f in self.fields_present()]


class GridGeodeticBounds(_DataBoundsBase):
    data_format: ClassVar[DataFormat] = DataFormat.GRID
    coord_type: ClassVar[CoordType] = CoordType.GEODETIC
    layout: ClassVar[tuple[HeaderField, ...]] = GEODETIC_FIELDS

    lat_min: Coord
    lat_max: Coord
    lon_min: Coord
    lon_max: Coord
    delta_lat: Coord
    delta_lon: Coord


class GridProjectedBounds(_DataBoundsBase):
    data_format: ClassVar[DataFormat] = DataFormat.GRID
    coord_type: ClassVar[CoordType] = CoordType.PROJECTED
    layout: ClassVar[tuple[HeaderField, ...]] = PROJECTED_FIELDS

    north_min: Coord
    north_max: Coord
    east_min: Coord
    east_max: Coord
    delta_north: Coord
    delta_east: Coord


class SparseGeodeticBounds(_DataBoundsBase):
    data_format: ClassVar[DataFormat] = DataFormat.SPARSE
    coord_type: ClassVar[CoordType] = CoordType.GEODETIC
    layout: ClassVar[tuple[HeaderField, ...]] = GEODETIC_FIELDS

    lat_min: Coord
    lat_max: Coord
    lon_min: Coord
    lon_max: Coord


class SparseProjectedBounds(_DataBoundsBase):
    data_format: ClassVar[DataFormat] = DataFormat.SPARSE
    coord_type: ClassVar[CoordType] = CoordType.PROJECTED
    layout: ClassVar[tuple[HeaderField, ...]] = PROJECTED_FIELDS

    north_min: Coord
    north_max: Coord
    east_min: Coord
    east_max: Coord


DataBounds = Union[  # noqa: UP007
    GridGeodeticBounds,
    GridProjectedBounds,
    SparseGeodeticBounds,
    SparseProjectedBounds,
]

#: Data bounds shape for each (data format, coord type) pair
DATA_BOUNDS_TYPES: dict[tuple[DataFormat, CoordType], type[_DataBoundsBase]] = {
    (bounds.data_format, bounds.coord_type): bounds
    for bounds in (
        GridGeodeticBounds,
        GridProjectedBounds,
        SparseGeodeticBounds,
        SparseProjectedBounds,
    )
}


class Header(BaseModel):
    """Header section of an ISG file.

    Optional fields hold None when the file has the ``---`` placeholder.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        protected_namespaces=(),
    )

    model_name: str | None = None
    model_year: str | None = None
    model_type: ModelType | None = None
    data_type: DataType | None = None
    data_units: DataUnits | None = None
    data_format: DataFormat
    data_ordering: DataOrdering | None = None
    ref_ellipsoid: str | None = None
    ref_frame: str | None = None
    height_datum: str | None = None
    tide_system: TideSystem | None = None
    coord_type: CoordType
    coord_units: CoordUnits
    map_projection: str | None = None
    epsg_code: str | None = Field(default=None, alias="EPSG_code")
    data_bounds: DataBounds
    nrows: Annotated[int, Field(ge=0)]
    ncols: Annotated[int, Field(ge=0)]
    nodata: float | None = None
    creation_date: CreationDate | None = None
    isg_format: str = Field(default=ISG_FORMAT_VERSION, alias="ISG_format")


# -----------------------------------------------------------------------------
# Data section
# -----------------------------------------------------------------------------


class GridData(RootModel[list[list[Union[float, None]]]]):  # noqa: UP007
    """Row-major grid of values; None marks a `nodata` cell."""

    model_config = ConfigDict(frozen=True)

    def __iter__(self):
        return iter(self.root)

    def __getitem__(self, index: int) -> list[float | None]:
        return self.root[index]

    def __len__(self) -> int:
        return len(self.root)


class SparseData(RootModel[list[tuple[Coord, Coord, float]]]):
    """List of (coord, coord, value) points."""

    model_config = ConfigDict(frozen=True)

    def __iter__(self):
        return iter(self.root)

    def __getitem__(self, index: int) -> tuple[Coord, Coord, float]:
        return self.root[index]

    def __len__(self) -> int:
        return len(self.root)


Data = Union[GridData, SparseData]  # noqa: UP007


class ISGDocument(BaseModel):
    """A complete ISG file: comment preamble, header and data."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    comment: str = ""
    header: Header
    data: Data

    @model_validator(mode="before")
    @classmethod
    def select_data_variant(cls, values: Any) -> Any:
        """Pick GridData or SparseData from ``header.data_format``.

        Raw grid and sparse payloads can have the same JSON shape
        (e.g. ``[[1.0, 2.0, 3.0]]``), so the variant is never inferred from
        the data alone.
        """
        if not isinstance(values, dict):
            return values

        data = values.get("data")
        if data is None or isinstance(data, (GridData, SparseData)):
            return values

        header = values.get("header")
        if isinstance(header, Header):
            data_format = header.data_format
        elif isinstance(header, dict):
            data_format = header.get("data_format")
        else:
            return values

        if data_format is None:
            return values

        if DataFormat(data_format) is DataFormat.SPARSE:
            data = SparseData.model_validate(data)
        else:
            data = GridData.model_validate(data)
        return {**values, "data": data}

    @property
    def is_grid(self) -> bool:
        return isinstance(self.data, GridData)
