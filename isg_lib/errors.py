# -*- coding: utf-8 -*-
"""Error handling for ISG parsing, validation and formatting.

Parse errors carry a :class:`SourceLocation` (1-based line, byte column
span within that line) so that every message can be rebuilt
deterministically from the error's attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from isg_lib.enums import CoordType
    from isg_lib.enums import CoordUnits
    from isg_lib.enums import DataAxis
    from isg_lib.enums import DataFormat
    from isg_lib.enums import HeaderField


def _text(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class SourceLocation:
    """Tracks the source location of a token for error reporting.

    Attributes:
        line: Line number (1-based)
        start: Start byte offset within the line (None if not applicable)
        end: End byte offset within the line, exclusive
    """

    line: int
    start: int | None = None
    end: int | None = None

    def __str__(self) -> str:
        """Format as human-readable location string."""
        if self.start is None or self.end is None:
            return f"(line: {self.line})"
        return f"(line: {self.line}, column: {self.start} to {self.end})"


class ISGError(Exception):
    """Base class of every error raised by isg_lib."""


class ParseValueError(ValueError):
    """A literal does not match the grammar of the expected value.

    Attributes:
        value: The offending text
    """

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid value: `{value}`")


class CoordOperationError(ISGError, TypeError):
    """Arithmetic between a DMS and a decimal coordinate."""


class ISGSerializationError(ISGError):
    """A document cannot be rendered to the ISG text format."""


# -----------------------------------------------------------------------------
# Parse errors
# -----------------------------------------------------------------------------


class ISGParseError(ISGError):
    """Exception raised for ISG parsing errors.

    Attributes:
        message: Error message
        location: Source location where error occurred
    """

    def __init__(self, message: str, location: SourceLocation | None = None):
        self.message = message
        self.location = location
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        if self.location:
            return f"{self.message} {self.location}"
        return self.message


class MissingBeginOfHeadError(ISGParseError):
    def __init__(self) -> None:
        super().__init__("missing line starts with `begin_of_head`")


class MissingEndOfHeadError(ISGParseError):
    def __init__(self) -> None:
        super().__init__("missing line starts with `end_of_head`")


class MissingSeparatorError(ISGParseError):
    """A header line has neither ``:`` nor ``=``."""

    def __init__(self, line: int):
        super().__init__("missing separator", SourceLocation(line))


class UnknownHeaderKeyError(ISGParseError):
    def __init__(self, key: str, location: SourceLocation):
        self.key = key
        super().__init__(f"unknown header key: `{key}`", location)


class MissingHeaderKeyError(ISGParseError):
    def __init__(self, field: HeaderField):
        self.field = field
        super().__init__(f"missing header key: `{_text(field)}`")


class DuplicatedHeaderKeyError(ISGParseError):
    """The same header key appears twice; location is the second occurrence."""

    def __init__(self, field: HeaderField, location: SourceLocation):
        self.field = field
        super().__init__(f"duplicated header key: `{_text(field)}`", location)


class InvalidHeaderValueError(ISGParseError):
    """A header value is malformed or inconsistent with other fields.

    The grammar failure, when there is one, is chained as ``__cause__``.
    """

    def __init__(self, field: HeaderField, value: str, location: SourceLocation):
        self.field = field
        self.value = value
        super().__init__(
            f"unexpected value: `{value}` on `{_text(field)}`",
            location,
        )


class InvalidDataBoundsError(ISGParseError):
    """A data bounds key contradicts ``coord type`` or ``data format``.

    Attributes:
        field: The offending key
        reason_field: The field making the key illegal
        reason_value: The active value of ``reason_field``
    """

    def __init__(
        self,
        field: HeaderField,
        reason_field: HeaderField,
        reason_value: CoordType | DataFormat,
        location: SourceLocation,
    ):
        self.field = field
        self.reason_field = reason_field
        self.reason_value = reason_value
        super().__init__(
            f"invalid header key: `{_text(field)}`, "
            f"although `{_text(reason_field)}` is `{_text(reason_value)}`",
            location,
        )


class InvalidDataError(ISGParseError):
    def __init__(self, value: str, location: SourceLocation):
        self.value = value
        super().__init__(f"invalid data: `{value}`", location)


class TooLongDataError(ISGParseError):
    """More data rows than ``nrows``, or more cells than ``ncols``."""

    def __init__(
        self,
        axis: DataAxis,
        expected: int,
        location: SourceLocation | None = None,
    ):
        self.axis = axis
        self.expected = expected
        super().__init__(
            f"too long data {_text(axis)}, expected {expected} {_text(axis)}(s)",
            location,
        )


class TooShortDataError(ISGParseError):
    """Fewer data rows than ``nrows``, or fewer cells than ``ncols``."""

    def __init__(
        self,
        axis: DataAxis,
        expected: int,
        location: SourceLocation | None = None,
    ):
        self.axis = axis
        self.expected = expected
        super().__init__(
            f"too short data {_text(axis)}, expected {expected} {_text(axis)}(s)",
            location,
        )


# -----------------------------------------------------------------------------
# Validation errors
# -----------------------------------------------------------------------------


class ISGValidationError(ISGError):
    """An already-built document breaks an ISG invariant."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FormatVersionMismatchError(ISGValidationError):
    def __init__(self, found: str, expected: str):
        self.found = found
        self.expected = expected
        super().__init__(
            f"unsupported ISG format: `{found}`, expected `{expected}`"
        )


class DataBoundsMismatchError(ISGValidationError):
    """The data bounds variant does not match data format and coord type."""

    def __init__(self, data_format: DataFormat, coord_type: CoordType):
        self.data_format = data_format
        self.coord_type = coord_type
        super().__init__(
            f"data bounds does not match `data format` (`{_text(data_format)}`) "
            f"and `coord type` (`{_text(coord_type)}`)"
        )


class DataFormatMismatchError(ISGValidationError):
    """The data section is grid while `data format` is sparse, or vice versa."""

    def __init__(self, data_format: DataFormat):
        self.data_format = data_format
        super().__init__(
            f"data does not match `data format` (`{_text(data_format)}`)"
        )


class CoordUnitsMismatchError(ISGValidationError):
    """A coordinate variant does not match ``coord units``.

    Either ``field`` (header data bounds) or ``row``/``column`` (1-based
    position in sparse data) is set.
    """

    def __init__(
        self,
        coord_units: CoordUnits,
        *,
        field: HeaderField | None = None,
        row: int | None = None,
        column: int | None = None,
    ):
        self.coord_units = coord_units
        self.field = field
        self.row = row
        self.column = column
        if field is not None:
            where = f"`{_text(field)}`"
        else:
            where = f"data (row: {row}, column: {column})"
        super().__init__(
            f"coordinate of {where} does not match "
            f"`coord units` (`{_text(coord_units)}`)"
        )


class RowCountMismatchError(ISGValidationError):
    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(f"`nrows` is {expected}, but data has {found} row(s)")


class ColumnCountMismatchError(ISGValidationError):
    """Grid row length differs from ``ncols``, or sparse ``ncols`` is not 3.

    ``row`` is the 1-based grid row, None for the sparse case.
    """

    def __init__(self, expected: int, found: int, row: int | None = None):
        self.expected = expected
        self.found = found
        self.row = row
        if row is None:
            message = f"`ncols` must be {expected} for sparse data, got {found}"
        else:
            message = (
                f"`ncols` is {expected}, but data row {row} has {found} column(s)"
            )
        super().__init__(message)
