# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides shared fixtures for accessing the ISG test artifacts.

Line numbers used across the tests refer to ``empty_comment.isg``:
``begin_of_head`` is line 1, header keys are lines 2 to 27 (``lon max`` is
line 20), ``end_of_head`` is line 28 and the grid rows are lines 29 to 32.
``example.2.isg`` (sparse) has one comment line, so its first data row is
line 30.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from isg_lib.constants import ISG_ENCODING
from isg_lib.models import ISGDocument
from isg_lib.parser import parse

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Path Constants
# =============================================================================

ARTIFACTS_DIR = Path(__file__).parent / "artifacts"

#: Files that serialize back to exactly the same text
CANONICAL_FILES = [
    "example.1.isg",
    "example.2.isg",
    "example.3.isg",
    "empty_comment.isg",
]


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def artifacts_dir() -> Path:
    """Return path to test artifacts directory."""
    return ARTIFACTS_DIR


def _read(name: str) -> str:
    with (ARTIFACTS_DIR / name).open(encoding=ISG_ENCODING) as f:
        return f.read()


# =============================================================================
# Text Fixtures
# =============================================================================


@pytest.fixture
def grid_text() -> str:
    """DMS geodetic grid without comment (``empty_comment.isg``)."""
    return _read("empty_comment.isg")


@pytest.fixture
def commented_grid_text() -> str:
    """DMS geodetic grid with a comment preamble (``example.1.isg``)."""
    return _read("example.1.isg")


@pytest.fixture
def sparse_text() -> str:
    """Sparse geodetic points in decimal degrees (``example.2.isg``)."""
    return _read("example.2.isg")


@pytest.fixture
def projected_text() -> str:
    """Projected grid in meters, without nodata (``example.3.isg``)."""
    return _read("example.3.isg")


@pytest.fixture(params=CANONICAL_FILES)
def canonical_text(request) -> str:
    """Each artifact whose formatting is canonical."""
    return _read(request.param)


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def grid_document(grid_text: str) -> ISGDocument:
    return parse(grid_text)


@pytest.fixture
def sparse_document(sparse_text: str) -> ISGDocument:
    return parse(sparse_text)


@pytest.fixture
def projected_document(projected_text: str) -> ISGDocument:
    return parse(projected_text)
