# -*- coding: utf-8 -*-
"""Token stream for ISG files.

The tokenizer walks the text line by line in three modes, never going
back across a mode boundary:

- comment: everything before the line starting with ``begin_of_head``
- header: ``key : value`` / ``key = value`` lines up to ``end_of_head``
- data: every remaining line, split into space-delimited cells

Tokens only carry text and positions; interpreting values is left to
:mod:`isg_lib.grammar` and :mod:`isg_lib.parser`.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from re import Pattern
from typing import Union

from isg_lib.constants import BEGIN_OF_HEAD
from isg_lib.constants import END_OF_HEAD
from isg_lib.constants import HEADER_SEPARATORS
from isg_lib.errors import MissingBeginOfHeadError
from isg_lib.errors import MissingEndOfHeadError
from isg_lib.errors import MissingSeparatorError
from isg_lib.errors import SourceLocation

# Data cells are separated by runs of spaces only (tabs stay inside cells)
DATA_CELL: Pattern[str] = re.compile(r"[^ ]+")


@dataclass(frozen=True)
class TextSpan:
    """A piece of a source line.

    Attributes:
        text: The (trimmed) text
        line: Line number (1-based)
        start: Start byte offset within the line
        end: End byte offset within the line, exclusive
    """

    text: str
    line: int
    start: int
    end: int

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.line, self.start, self.end)


@dataclass(frozen=True)
class CommentToken:
    """Verbatim text before the header, including its last newline."""

    text: str


@dataclass(frozen=True)
class BeginOfHeadToken:
    line: int


@dataclass(frozen=True)
class HeaderToken:
    """A ``key <sep> value`` header line.

    The separator is kept for diagnostics only; ``:`` and ``=`` are
    interchangeable.
    """

    key: TextSpan
    separator: str
    value: TextSpan
    line: int


@dataclass(frozen=True)
class EndOfHeadToken:
    line: int


@dataclass(frozen=True)
class DataRowToken:
    cells: tuple[TextSpan, ...]
    line: int


Token = Union[  # noqa: UP007
    CommentToken,
    BeginOfHeadToken,
    HeaderToken,
    EndOfHeadToken,
    DataRowToken,
]


class _Mode(Enum):
    COMMENT = "comment"
    HEADER = "header"
    DATA = "data"


def _iter_lines(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield (line number, offset in text, line) for each line.

    Lines end at ``\\n``; one trailing ``\\r`` is dropped. A final newline
    does not open an extra empty line.
    """
    offset = 0
    lineno = 0
    length = len(text)
    while offset < length:
        lineno += 1
        newline = text.find("\n", offset)
        end = length if newline == -1 else newline
        line = text[offset:end]
        if line.endswith("\r"):
            line = line[:-1]
        yield lineno, offset, line
        offset = end + 1


def _byte_offset(line: str, index: int) -> int:
    if line.isascii():
        return index
    return len(line[:index].encode("utf-8"))


def _span(line: str, lineno: int, start: int, end: int) -> TextSpan:
    """Build a trimmed span over ``line[start:end]``.

    A whitespace-only fragment trims to an empty span at its start.
    """
    raw = line[start:end]
    stripped = raw.strip()
    if stripped:
        start += len(raw) - len(raw.lstrip())
    end = start + len(stripped)
    return TextSpan(
        text=stripped,
        line=lineno,
        start=_byte_offset(line, start),
        end=_byte_offset(line, end),
    )


def tokenize_header_line(line: str, lineno: int) -> HeaderToken:
    """Split a header line at the first ``:`` or ``=``.

    Raises:
        MissingSeparatorError: If the line has no separator
    """
    positions = [pos for pos in (line.find(sep) for sep in HEADER_SEPARATORS) if pos >= 0]
    if not positions:
        raise MissingSeparatorError(lineno)

    index = min(positions)
    return HeaderToken(
        key=_span(line, lineno, 0, index),
        separator=line[index],
        value=_span(line, lineno, index + 1, len(line)),
        line=lineno,
    )


def tokenize_data_line(line: str, lineno: int) -> DataRowToken | None:
    """Split a data line into cells; blank lines give None."""
    cells = tuple(
        TextSpan(
            text=match.group(),
            line=lineno,
            start=_byte_offset(line, match.start()),
            end=_byte_offset(line, match.end()),
        )
        for match in DATA_CELL.finditer(line)
    )
    if not cells:
        return None
    return DataRowToken(cells=cells, line=lineno)


def tokenize(text: str) -> Iterator[Token]:
    """Tokenize an ISG document.

    The first token is always a :class:`CommentToken` (possibly empty),
    followed by :class:`BeginOfHeadToken`, the header tokens,
    :class:`EndOfHeadToken` and the data rows.

    Args:
        text: Complete ISG text

    Yields:
        Tokens in source order

    Raises:
        MissingBeginOfHeadError: If no line starts with ``begin_of_head``
        MissingEndOfHeadError: If no line starts with ``end_of_head``
        MissingSeparatorError: If a header line has no separator
    """
    mode = _Mode.COMMENT

    for lineno, offset, line in _iter_lines(text):
        if mode is _Mode.COMMENT:
            if line.startswith(BEGIN_OF_HEAD):
                yield CommentToken(text=text[:offset])
                yield BeginOfHeadToken(line=lineno)
                mode = _Mode.HEADER

        elif mode is _Mode.HEADER:
            if line.startswith(END_OF_HEAD):
                yield EndOfHeadToken(line=lineno)
                mode = _Mode.DATA
            else:
                yield tokenize_header_line(line, lineno)

        elif (row := tokenize_data_line(line, lineno)) is not None:
            yield row

    if mode is _Mode.COMMENT:
        raise MissingBeginOfHeadError
    if mode is _Mode.HEADER:
        raise MissingEndOfHeadError
