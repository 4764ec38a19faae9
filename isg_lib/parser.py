# -*- coding: utf-8 -*-
"""Parser for ISG files.

Architecture: the token stream (:mod:`isg_lib.tokens`) is folded into a
dictionary (like loading JSON) which is then fed to the Pydantic models via
a single ``model_validate()`` call. The parser stops at the first problem
and raises an :class:`isg_lib.errors.ISGParseError`; nothing is recovered.

Header assembly keeps a presence table with one entry per key. A key that
is missing and a key whose value is ``---`` are different states until the
header is finalized.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from isg_lib.constants import ISG_FORMAT_VERSION
from isg_lib.constants import PLACEHOLDER
from isg_lib.constants import SPARSE_NCOLS
from isg_lib.enums import DELTA_FIELDS
from isg_lib.enums import GEODETIC_FIELDS
from isg_lib.enums import PROJECTED_FIELDS
from isg_lib.enums import CoordType
from isg_lib.enums import CoordUnits
from isg_lib.enums import DataAxis
from isg_lib.enums import DataFormat
from isg_lib.enums import HeaderField
from isg_lib.errors import DuplicatedHeaderKeyError
from isg_lib.errors import InvalidDataBoundsError
from isg_lib.errors import InvalidDataError
from isg_lib.errors import InvalidHeaderValueError
from isg_lib.errors import MissingEndOfHeadError
from isg_lib.errors import MissingHeaderKeyError
from isg_lib.errors import ParseValueError
from isg_lib.errors import SourceLocation
from isg_lib.errors import TooLongDataError
from isg_lib.errors import TooShortDataError
from isg_lib.errors import UnknownHeaderKeyError
from isg_lib.grammar import FIELD_GRAMMAR
from isg_lib.grammar import parse_coord
from isg_lib.grammar import parse_decimal
from isg_lib.models import DATA_BOUNDS_TYPES
from isg_lib.models import Coord
from isg_lib.models import ISGDocument
from isg_lib.tokens import CommentToken
from isg_lib.tokens import DataRowToken
from isg_lib.tokens import EndOfHeadToken
from isg_lib.tokens import HeaderToken
from isg_lib.tokens import TextSpan
from isg_lib.tokens import Token
from isg_lib.tokens import tokenize

logger = logging.getLogger(__name__)

_BOUNDS_FIELDS = frozenset(GEODETIC_FIELDS) | frozenset(PROJECTED_FIELDS)


@dataclass
class _HeaderEntry:
    token: HeaderToken
    parsed: bool = False
    value: Any = None


class _HeaderStore:
    """Presence table folding header tokens into header values.

    Keys are checked (known, not duplicated) as tokens arrive. Values are
    parsed only when finalization reaches their field, so the format
    version, the three layout fields and the data bounds are resolved
    before any other value is looked at.
    """

    def __init__(self) -> None:
        self.entries: dict[HeaderField, _HeaderEntry] = {}

    def add(self, token: HeaderToken) -> None:
        field = HeaderField.lookup(token.key.text)
        if field is None:
            raise UnknownHeaderKeyError(token.key.text, token.key.location)
        if field in self.entries:
            raise DuplicatedHeaderKeyError(field, token.key.location)
        self.entries[field] = _HeaderEntry(token=token)

    @staticmethod
    def _parse(field: HeaderField, entry: _HeaderEntry) -> Any:
        if not entry.parsed:
            value = entry.token.value
            try:
                entry.value = FIELD_GRAMMAR[field](value.text)
            except ParseValueError as e:
                raise InvalidHeaderValueError(field, value.text, value.location) from e
            entry.parsed = True
        return entry.value

    def _require(self, field: HeaderField) -> _HeaderEntry:
        entry = self.entries.get(field)
        if entry is None:
            raise MissingHeaderKeyError(field)
        return entry

    def _value(self, field: HeaderField) -> Any:
        return self._parse(field, self._require(field))

    @staticmethod
    def _reject(entry: _HeaderEntry, field: HeaderField) -> InvalidHeaderValueError:
        value = entry.token.value
        return InvalidHeaderValueError(field, value.text, value.location)

    def _forbid(
        self,
        field: HeaderField,
        reason_field: HeaderField,
        reason_value: CoordType | DataFormat,
    ) -> None:
        # anything but the placeholder counts as a value, parseable or not
        entry = self.entries.get(field)
        if entry is not None and entry.token.value.text != PLACEHOLDER:
            raise InvalidDataBoundsError(
                field,
                reason_field,
                reason_value,
                SourceLocation(entry.token.line),
            )

    def _resolve_data_bounds(
        self,
        data_format: DataFormat,
        coord_type: CoordType,
        coord_units: CoordUnits,
    ) -> dict[str, Coord]:
        """Collect the coordinates of the data bounds shape.

        Keys of the other coordinate system must be absent (or ``---``).
        Sparse data must not carry a delta. Every coordinate must be of the
        variant required by ``coord units``.
        """
        if coord_type is CoordType.GEODETIC:
            own_fields, other_fields = GEODETIC_FIELDS, PROJECTED_FIELDS
        else:
            own_fields, other_fields = PROJECTED_FIELDS, GEODETIC_FIELDS

        for field in other_fields:
            self._forbid(field, HeaderField.COORD_TYPE, coord_type)

        coords: dict[str, Coord] = {}
        for field in own_fields:
            if data_format is DataFormat.SPARSE and field in DELTA_FIELDS:
                self._forbid(field, HeaderField.DATA_FORMAT, data_format)
                continue

            entry = self._require(field)
            value = self._parse(field, entry)
            if value is None or not coord_units.accepts(value):
                raise self._reject(entry, field)
            coords[field.attribute] = value

        return coords

    def to_dict(self) -> dict[str, Any]:
        """Finalize the header into a dictionary for ``Header.model_validate``.

        Resolution order: ``ISG format``, then ``data format``,
        ``coord type`` and ``coord units``, then the data bounds, then every
        other key in canonical order.

        Raises:
            InvalidHeaderValueError: For malformed or inconsistent values
            MissingHeaderKeyError: For absent keys
            InvalidDataBoundsError: For keys contradicting the coordinate system
        """
        isg_format = self._require(HeaderField.ISG_FORMAT)
        if self._parse(HeaderField.ISG_FORMAT, isg_format) != ISG_FORMAT_VERSION:
            raise self._reject(isg_format, HeaderField.ISG_FORMAT)

        data_format: DataFormat = self._value(HeaderField.DATA_FORMAT)
        coord_type: CoordType = self._value(HeaderField.COORD_TYPE)
        coord_units: CoordUnits = self._value(HeaderField.COORD_UNITS)

        bounds = self._resolve_data_bounds(data_format, coord_type, coord_units)

        header: dict[str, Any] = {}
        for field in HeaderField:
            if field in _BOUNDS_FIELDS:
                continue
            header[field.attribute] = self._value(field)

        if data_format is DataFormat.SPARSE and header["ncols"] != SPARSE_NCOLS:
            raise self._reject(self.entries[HeaderField.NCOLS], HeaderField.NCOLS)

        header["data_bounds"] = DATA_BOUNDS_TYPES[(data_format, coord_type)](
            **bounds
        )
        return header


class ISGParser:
    """Parser for ISG text.

    The parser produces dictionaries (like loading JSON from disk) that are
    fed to :class:`ISGDocument` via a single ``model_validate()`` call.

    Example:
        document = ISGParser().parse_string(text)
    """

    def parse_string_to_dict(self, text: str) -> dict[str, Any]:
        """Parse ISG text to a dictionary.

        Args:
            text: Complete ISG document

        Returns:
            Dictionary with "comment", "header" and "data" keys

        Raises:
            ISGParseError: On the first syntax or consistency error
        """
        tokens = tokenize(text)

        comment = self._parse_preamble(tokens)
        header = self._parse_header(tokens)
        logger.debug(
            "Parsed ISG header: %s %s data, %d x %d",
            header["coord_type"].value,
            header["data_format"].value,
            header["nrows"],
            header["ncols"],
        )

        if header["data_format"] is DataFormat.GRID:
            data = self._parse_grid(tokens, header)
        else:
            data = self._parse_sparse(tokens, header)

        return {"comment": comment, "header": header, "data": data}

    def parse_string(self, text: str) -> ISGDocument:
        """Parse ISG text into a document.

        Args:
            text: Complete ISG document

        Returns:
            The parsed document
        """
        return ISGDocument.model_validate(self.parse_string_to_dict(text))

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _parse_preamble(self, tokens: Iterator[Token]) -> str:
        # tokenize() always opens with the comment then the begin marker,
        # or raises MissingBeginOfHeadError
        comment: CommentToken = next(tokens)
        next(tokens)
        return comment.text

    def _parse_header(self, tokens: Iterator[Token]) -> dict[str, Any]:
        store = _HeaderStore()
        for token in tokens:
            if isinstance(token, EndOfHeadToken):
                return store.to_dict()
            if isinstance(token, HeaderToken):
                store.add(token)
        raise MissingEndOfHeadError

    @staticmethod
    def _parse_datum(cell: TextSpan) -> float:
        try:
            return parse_decimal(cell.text)
        except ParseValueError as e:
            raise InvalidDataError(cell.text, cell.location) from e

    def _parse_grid(
        self,
        tokens: Iterator[DataRowToken],
        header: dict[str, Any],
    ) -> list[list[float | None]]:
        """Parse grid rows; cells equal to ``nodata`` become None."""
        nrows: int = header["nrows"]
        ncols: int = header["ncols"]
        nodata: float | None = header["nodata"]

        data: list[list[float | None]] = []
        for row in tokens:
            if len(data) >= nrows:
                raise TooLongDataError(DataAxis.ROW, nrows, SourceLocation(row.line))

            values: list[float | None] = []
            for index, cell in enumerate(row.cells):
                if index >= ncols:
                    raise TooLongDataError(
                        DataAxis.COLUMN, ncols, SourceLocation(row.line)
                    )
                value = self._parse_datum(cell)
                values.append(None if nodata is not None and value == nodata else value)

            if len(values) < ncols:
                raise TooShortDataError(DataAxis.COLUMN, ncols, SourceLocation(row.line))
            data.append(values)

        if len(data) < nrows:
            raise TooShortDataError(DataAxis.ROW, nrows)
        return data

    def _parse_sparse(
        self,
        tokens: Iterator[DataRowToken],
        header: dict[str, Any],
    ) -> list[tuple[Coord, Coord, float]]:
        """Parse (coord, coord, value) rows, checking coordinate variants."""
        nrows: int = header["nrows"]
        coord_units: CoordUnits = header["coord_units"]

        data: list[tuple[Coord, Coord, float]] = []
        for row in tokens:
            if len(data) >= nrows:
                raise TooLongDataError(DataAxis.ROW, nrows, SourceLocation(row.line))

            values: list[Any] = []
            for index, cell in enumerate(row.cells):
                if index >= SPARSE_NCOLS:
                    raise TooLongDataError(
                        DataAxis.COLUMN, SPARSE_NCOLS, SourceLocation(row.line)
                    )
                if index == SPARSE_NCOLS - 1:
                    values.append(self._parse_datum(cell))
                    continue

                try:
                    coord = parse_coord(cell.text)
                except ParseValueError as e:
                    raise InvalidDataError(cell.text, cell.location) from e
                if not coord_units.accepts(coord):
                    raise InvalidDataError(cell.text, cell.location)
                values.append(coord)

            if len(values) < SPARSE_NCOLS:
                raise TooShortDataError(
                    DataAxis.COLUMN, SPARSE_NCOLS, SourceLocation(row.line)
                )
            data.append((values[0], values[1], values[2]))

        if len(data) < nrows:
            raise TooShortDataError(DataAxis.ROW, nrows)
        return data


def parse(text: str) -> ISGDocument:
    """Parse a complete ISG document.

    Args:
        text: ISG text held in memory

    Returns:
        The parsed document

    Raises:
        ISGParseError: On the first syntax or consistency error
    """
    return ISGParser().parse_string(text)
