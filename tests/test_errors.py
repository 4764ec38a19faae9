# -*- coding: utf-8 -*-
"""Tests for parse errors and their messages."""

import pytest

from isg_lib.enums import DataAxis
from isg_lib.enums import HeaderField
from isg_lib.errors import DuplicatedHeaderKeyError
from isg_lib.errors import InvalidDataBoundsError
from isg_lib.errors import InvalidDataError
from isg_lib.errors import InvalidHeaderValueError
from isg_lib.errors import ISGError
from isg_lib.errors import ISGParseError
from isg_lib.errors import MissingBeginOfHeadError
from isg_lib.errors import MissingEndOfHeadError
from isg_lib.errors import MissingHeaderKeyError
from isg_lib.errors import MissingSeparatorError
from isg_lib.errors import ParseValueError
from isg_lib.errors import SourceLocation
from isg_lib.errors import TooLongDataError
from isg_lib.errors import TooShortDataError
from isg_lib.errors import UnknownHeaderKeyError
from isg_lib.parser import parse


def _parse_error(text: str) -> ISGParseError:
    with pytest.raises(ISGParseError) as exc_info:
        parse(text)
    return exc_info.value


class TestSourceLocation:
    """Tests for SourceLocation class."""

    def test_str_line(self):
        """Test a location without span."""
        assert str(SourceLocation(line=3)) == "(line: 3)"

    def test_str_span(self):
        """Test a location with a column span."""
        loc = SourceLocation(line=2, start=1, end=2)
        assert str(loc) == "(line: 2, column: 1 to 2)"

    def test_immutable(self):
        """Test that SourceLocation is immutable (frozen)."""
        loc = SourceLocation(line=2)
        with pytest.raises(AttributeError):
            loc.line = 3

    def test_hierarchy(self):
        """Test every parse error is an ISGError."""
        assert issubclass(ISGParseError, ISGError)
        assert issubclass(TooShortDataError, ISGParseError)


class TestMarkerErrors:
    """Tests for missing header markers."""

    def test_missing_begin_of_head(self, grid_text):
        """Test a header without begin marker."""
        text = grid_text.split("\n", 1)[1]

        error = _parse_error(text)
        assert isinstance(error, MissingBeginOfHeadError)
        assert str(error) == "missing line starts with `begin_of_head`"

    def test_missing_end_of_head(self, grid_text):
        """Test a header that never ends."""
        text = grid_text.split("end_of_head", 1)[0]

        error = _parse_error(text)
        assert isinstance(error, MissingEndOfHeadError)
        assert str(error) == "missing line starts with `end_of_head`"

    def test_missing_separator(self, grid_text):
        """Test a header line without separator."""
        text = grid_text.replace("model year     : 2020", "model year      2020")

        error = _parse_error(text)
        assert isinstance(error, MissingSeparatorError)
        assert str(error) == "missing separator (line: 3)"


class TestHeaderKeyErrors:
    """Tests for unknown, duplicated and missing keys."""

    def test_unknown_key(self, grid_text):
        """Test an unknown key with its trimmed span."""
        text = grid_text.replace("model name     : EXAMPLE", " X             : EXAMPLE")

        error = _parse_error(text)
        assert isinstance(error, UnknownHeaderKeyError)
        assert error.key == "X"
        assert str(error) == "unknown header key: `X` (line: 2, column: 1 to 2)"

    def test_empty_key(self, grid_text):
        """Test a line starting with the separator."""
        text = grid_text.replace("model name     : EXAMPLE", ": EXAMPLE")

        error = _parse_error(text)
        assert str(error) == "unknown header key: `` (line: 2, column: 0 to 0)"

    def test_whitespace_key(self, grid_text):
        """Test a whitespace-only key trims to an empty key."""
        text = grid_text.replace("model name     : EXAMPLE", "               : EXAMPLE")

        error = _parse_error(text)
        assert str(error) == "unknown header key: `` (line: 2, column: 0 to 0)"

    def test_duplicated_key(self, grid_text):
        """Test the second occurrence of a key is reported."""
        text = grid_text.replace("model year     : 2020", "model name     : 2020")

        error = _parse_error(text)
        assert isinstance(error, DuplicatedHeaderKeyError)
        assert error.field is HeaderField.MODEL_NAME
        assert str(error) == (
            "duplicated header key: `model name` (line: 3, column: 0 to 10)"
        )

    def test_duplicated_key_wins_over_bad_values(self, grid_text):
        """Test a duplicate is reported even when other values are invalid."""
        text = grid_text.replace("model type     : gravimetric", "model type     : X")
        text = text.replace("ncols          =", "nrows          =")

        error = _parse_error(text)
        assert isinstance(error, DuplicatedHeaderKeyError)
        assert error.field is HeaderField.NROWS

    def test_missing_key(self, grid_text):
        """Test an absent mandatory key."""
        text = grid_text.replace("nrows          =           4\n", "")

        error = _parse_error(text)
        assert isinstance(error, MissingHeaderKeyError)
        assert str(error) == "missing header key: `nrows`"

    def test_missing_optional_key(self, grid_text):
        """Test keys with optional values must still be present."""
        text = grid_text.replace("height datum   : ---\n", "")

        error = _parse_error(text)
        assert str(error) == "missing header key: `height datum`"

    def test_missing_grid_delta(self, grid_text):
        """Test grid files need their delta keys."""
        text = grid_text.replace("delta lon      =    0°20'00\"\n", "")

        error = _parse_error(text)
        assert str(error) == "missing header key: `delta lon`"


class TestHeaderValueErrors:
    """Tests for malformed and inconsistent header values."""

    def test_unexpected_value(self, grid_text):
        """Test a value outside the vocabulary."""
        text = grid_text.replace("model type     : gravimetric", "model type     :X")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.MODEL_TYPE
        assert error.value == "X"
        assert str(error) == (
            "unexpected value: `X` on `model type` (line: 4, column: 16 to 17)"
        )

    def test_grammar_error_is_chained(self, grid_text):
        """Test the grammar failure is kept as the cause."""
        text = grid_text.replace("model type     : gravimetric", "model type     :X")

        error = _parse_error(text)
        assert isinstance(error.__cause__, ParseValueError)

    def test_empty_value(self, grid_text):
        """Test an empty value."""
        text = grid_text.replace("model type     : gravimetric", "model type     :")

        error = _parse_error(text)
        assert str(error) == (
            "unexpected value: `` on `model type` (line: 4, column: 16 to 16)"
        )

    def test_whitespace_value(self, grid_text):
        """Test a whitespace-only value trims to an empty value."""
        text = grid_text.replace("model type     : gravimetric", "model type     :   ")

        error = _parse_error(text)
        assert str(error) == (
            "unexpected value: `` on `model type` (line: 4, column: 16 to 16)"
        )

    def test_whitespace_textual_value(self, grid_text):
        """Test a blank model name is rejected, not read as spaces."""
        text = grid_text.replace("model name     : EXAMPLE", "model name     :    ")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.MODEL_NAME
        assert error.value == ""

    def test_unsupported_format_version(self, grid_text):
        """Test only ISG format 2.0 is read."""
        text = grid_text.replace("        2.0\n", "        1.0\n")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.ISG_FORMAT
        assert error.value == "1.0"

    def test_format_version_before_other_values(self, grid_text):
        """Test the format version is resolved before any other value."""
        text = grid_text.replace("        2.0\n", "        1.0\n")
        text = text.replace("model type     : gravimetric", "model type     : bogus")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.ISG_FORMAT

    def test_layout_fields_before_other_values(self, grid_text):
        """Test a missing data format is reported before a bad model type."""
        text = grid_text.replace("data format    : grid\n", "")
        text = text.replace("model type     : gravimetric", "model type     : bogus")

        error = _parse_error(text)
        assert isinstance(error, MissingHeaderKeyError)
        assert error.field is HeaderField.DATA_FORMAT

    def test_bounds_before_other_values(self, grid_text):
        """Test data bounds are resolved before the remaining keys."""
        text = grid_text.replace("=   39°50'00\"", "=   39.833333")
        text = text.replace("nodata         =  -9999.0000", "nodata         = x")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.LAT_MIN

    def test_coord_units_mismatch(self, grid_text):
        """Test a decimal bound under dms coordinates."""
        text = grid_text.replace("=   39°50'00\"", "=   39.833333")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.LAT_MIN

    def test_grid_delta_placeholder(self, grid_text):
        """Test grid delta values cannot be absent."""
        text = grid_text.replace("delta lat      =    0°20'00\"", "delta lat      = ---")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.DELTA_LAT

    def test_sparse_ncols(self, sparse_text):
        """Test sparse files have exactly three columns."""
        text = sparse_text.replace("ncols          =           3", "ncols          = 4")

        error = _parse_error(text)
        assert isinstance(error, InvalidHeaderValueError)
        assert error.field is HeaderField.NCOLS


class TestDataBoundsErrors:
    """Tests for keys contradicting the coordinate system."""

    def test_other_coord_type(self, grid_text):
        """Test a projected key in a geodetic header."""
        text = grid_text.replace("lon max        =", "east max       =")

        error = _parse_error(text)
        assert isinstance(error, InvalidDataBoundsError)
        assert error.field is HeaderField.EAST_MAX
        assert error.reason_field is HeaderField.COORD_TYPE
        assert str(error) == (
            "invalid header key: `east max`, although `coord type` is `geodetic` "
            "(line: 20)"
        )

    def test_sparse_delta(self, sparse_text):
        """Test a real delta in a sparse header."""
        text = sparse_text.replace(
            "delta lat      = ---", "delta lat      =    0.333333"
        )

        error = _parse_error(text)
        assert isinstance(error, InvalidDataBoundsError)
        assert str(error) == (
            "invalid header key: `delta lat`, although `data format` is `sparse` "
            "(line: 22)"
        )

    def test_unparseable_other_coord_type(self, grid_text):
        """Test a projected key with a malformed value in a geodetic header."""
        text = grid_text.replace(
            "lat min        =", "north min      = abc\nlat min        ="
        )

        error = _parse_error(text)
        assert isinstance(error, InvalidDataBoundsError)
        assert error.field is HeaderField.NORTH_MIN
        assert error.location == SourceLocation(line=17)

    def test_other_coord_type_placeholder(self, grid_text):
        """Test a projected key set to the placeholder is tolerated."""
        text = grid_text.replace(
            "lat min        =", "north min      = ---\nlat min        ="
        )

        assert parse(text).header.data_bounds == parse(grid_text).header.data_bounds

    def test_unparseable_sparse_delta(self, sparse_text):
        """Test a malformed delta in a sparse header."""
        text = sparse_text.replace("delta lat      = ---", "delta lat      = abc")

        error = _parse_error(text)
        assert isinstance(error, InvalidDataBoundsError)
        assert error.reason_field is HeaderField.DATA_FORMAT


class TestDataErrors:
    """Tests for data body errors."""

    def test_invalid_data(self, grid_text):
        """Test a cell that is not a decimal."""
        text = grid_text.replace("   30.1234", "a", 1)

        error = _parse_error(text)
        assert isinstance(error, InvalidDataError)
        assert str(error) == "invalid data: `a` (line: 29, column: 0 to 1)"

    def test_too_long_column(self, grid_text):
        """Test a grid row with an extra cell."""
        text = grid_text.replace("46.6789\n", "46.6789 1.0\n")

        error = _parse_error(text)
        assert isinstance(error, TooLongDataError)
        assert error.axis is DataAxis.COLUMN
        assert str(error) == "too long data column, expected 6 column(s) (line: 30)"

    def test_too_short_column(self, grid_text):
        """Test a grid row with a missing cell."""
        text = grid_text.replace("    46.6789\n", "\n")

        error = _parse_error(text)
        assert isinstance(error, TooShortDataError)
        assert str(error) == "too short data column, expected 6 column(s) (line: 30)"

    def test_too_long_row(self, grid_text):
        """Test more rows than nrows."""
        text = grid_text.replace("=           4\n", "=           2\n")

        error = _parse_error(text)
        assert isinstance(error, TooLongDataError)
        assert error.axis is DataAxis.ROW
        assert error.location == SourceLocation(line=31)
        assert str(error) == "too long data row, expected 2 row(s) (line: 31)"

    def test_sparse_too_long_row(self, sparse_text):
        """Test the extra sparse row is located."""
        text = sparse_text.replace("=           4\n", "=           1\n")

        error = _parse_error(text)
        assert isinstance(error, TooLongDataError)
        assert error.axis is DataAxis.ROW
        assert error.location == SourceLocation(line=31)

    def test_too_short_row(self, grid_text):
        """Test fewer rows than nrows."""
        text = grid_text.replace("=           4\n", "=          20\n")

        error = _parse_error(text)
        assert str(error) == "too short data row, expected 20 row(s)"

    def test_sparse_too_long_column(self, sparse_text):
        """Test a sparse row with four cells."""
        text = sparse_text.replace("30.1234\n", "30.1234 1.0\n")

        error = _parse_error(text)
        assert str(error) == "too long data column, expected 3 column(s) (line: 30)"

    def test_sparse_too_short_column(self, sparse_text):
        """Test a sparse row with two cells."""
        text = sparse_text.replace("    30.1234\n", "\n")

        error = _parse_error(text)
        assert str(error) == "too short data column, expected 3 column(s) (line: 30)"

    def test_sparse_coord_units_mismatch(self, sparse_text):
        """Test a DMS coordinate in decimal degree data."""
        text = sparse_text.replace("  40.000000  120.000000", "  40°00'00\"  120.000000")

        error = _parse_error(text)
        assert isinstance(error, InvalidDataError)
        assert error.value == "40°00'00\""
        assert error.location == SourceLocation(line=30, start=2, end=12)
