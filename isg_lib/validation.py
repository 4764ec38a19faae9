# -*- coding: utf-8 -*-
"""Validation of ISG documents.

Parsed documents are valid by construction. Documents built or edited in
code (``model_copy(update=...)``, JSON input) can break the invariants
tying the header to the data; this module checks them in a fixed order
and reports the first failure.
"""

from isg_lib.constants import ISG_FORMAT_VERSION
from isg_lib.constants import SPARSE_NCOLS
from isg_lib.enums import DataFormat
from isg_lib.errors import ColumnCountMismatchError
from isg_lib.errors import CoordUnitsMismatchError
from isg_lib.errors import DataBoundsMismatchError
from isg_lib.errors import DataFormatMismatchError
from isg_lib.errors import FormatVersionMismatchError
from isg_lib.errors import ISGValidationError
from isg_lib.errors import RowCountMismatchError
from isg_lib.models import DATA_BOUNDS_TYPES
from isg_lib.models import GridData
from isg_lib.models import Header
from isg_lib.models import ISGDocument
from isg_lib.models import SparseData


def validate_header(header: Header) -> None:
    """Validate the header on its own.

    Checks, in order: ``ISG format``, the data bounds shape against
    ``data format`` and ``coord type``, then every bound coordinate against
    ``coord units``.

    Raises:
        ISGValidationError: The first failed check
    """
    if header.isg_format != ISG_FORMAT_VERSION:
        raise FormatVersionMismatchError(header.isg_format, ISG_FORMAT_VERSION)

    expected = DATA_BOUNDS_TYPES[(header.data_format, header.coord_type)]
    if type(header.data_bounds) is not expected:
        raise DataBoundsMismatchError(header.data_format, header.coord_type)

    for field, coord in header.data_bounds.coordinates():
        if not header.coord_units.accepts(coord):
            raise CoordUnitsMismatchError(header.coord_units, field=field)


def _validate_grid(data: GridData, header: Header) -> None:
    if len(data) != header.nrows:
        raise RowCountMismatchError(header.nrows, len(data))

    for index, row in enumerate(data, start=1):
        if len(row) != header.ncols:
            raise ColumnCountMismatchError(header.ncols, len(row), row=index)


def _validate_sparse(data: SparseData, header: Header) -> None:
    if len(data) != header.nrows:
        raise RowCountMismatchError(header.nrows, len(data))

    if header.ncols != SPARSE_NCOLS:
        raise ColumnCountMismatchError(SPARSE_NCOLS, header.ncols)

    for index, (a, b, _) in enumerate(data, start=1):
        for column, coord in enumerate((a, b), start=1):
            if not header.coord_units.accepts(coord):
                raise CoordUnitsMismatchError(
                    header.coord_units, row=index, column=column
                )


def validate(document: ISGDocument) -> None:
    """Validate a document against the ISG 2.0 invariants.

    Args:
        document: Document to check

    Raises:
        ISGValidationError: The first failed check
    """
    header = document.header
    validate_header(header)

    if header.data_format is DataFormat.GRID:
        if not isinstance(document.data, GridData):
            raise DataFormatMismatchError(header.data_format)
        _validate_grid(document.data, header)
    else:
        if not isinstance(document.data, SparseData):
            raise DataFormatMismatchError(header.data_format)
        _validate_sparse(document.data, header)


def is_valid(document: ISGDocument) -> bool:
    """Check whether a document passes :func:`validate`.

    Args:
        document: Document to check

    Returns:
        True if valid, False otherwise
    """
    try:
        validate(document)
    except ISGValidationError:
        return False
    return True
