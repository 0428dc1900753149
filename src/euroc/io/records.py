"""Lazy iteration over EuRoC data.csv logs.

Every sensor log has the same shape::

    #timestamp [ns],w_RS_S_x [rad s^-1],...
    1403636579758555392,-0.099134701513277898,...

One header row, then one comma-separated row per measurement with the
nanosecond timestamp in column 0. RecordIterator handles the file and the
header; each sensor only supplies a function mapping one row to its record
type.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Iterator, TypeVar

import numpy as np

from ..errors import MalformedError, OutOfRangeError

logger = logging.getLogger(__name__)

MAX_TIMESTAMP_NS = 2**64 - 1

R = TypeVar("R")


def _ascii_literal(text: str) -> str:
    """Return text if it is a plain ASCII literal, else raise ValueError.

    int() and float() also accept digit separators and non-ASCII digits.
    """
    if not text.isascii() or "_" in text:
        raise ValueError(text)
    return text


def _is_utf8(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def frozen_vector(values: list[float]) -> np.ndarray:
    """Return values as a read-only float64 array."""
    array = np.array(values, dtype=np.float64)
    array.flags.writeable = False
    return array


class RowView:
    """Typed access to the fields of one data row.

    Conversion failures raise MalformedError carrying the file, the 0-based
    data row (header excluded) and the column that failed.
    """

    def __init__(self, fields: list[str], row: int, path: Path) -> None:
        self._fields = [field.strip() for field in fields]
        self.row = row
        self.path = path

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def _malformed(self, column: int, reason: str) -> MalformedError:
        return MalformedError(
            f"{self.path}: row {self.row}, column {column}: {reason}",
            path=self.path,
            row=self.row,
            column=column,
        )

    def text(self, column: int) -> str:
        """Return the raw text of a column."""
        if column >= len(self._fields):
            raise self._malformed(column, "missing column")
        return self._fields[column]

    def timestamp(self, column: int = 0) -> int:
        """Parse an unsigned 64-bit nanosecond timestamp."""
        text = self.text(column)
        try:
            value = int(_ascii_literal(text))
        except ValueError:
            raise self._malformed(column, f"invalid timestamp {text!r}") from None
        if not 0 <= value <= MAX_TIMESTAMP_NS:
            raise OutOfRangeError(
                f"{self.path}: row {self.row}, column {column}: "
                f"timestamp {value} is outside the u64 range",
                value=value,
                path=self.path,
            )
        return value

    def number(self, column: int) -> float:
        """Parse a double precision value."""
        text = self.text(column)
        try:
            return float(_ascii_literal(text))
        except ValueError:
            raise self._malformed(column, f"invalid number {text!r}") from None

    def vector(self, start: int, count: int) -> np.ndarray:
        """Parse ``count`` consecutive numeric columns into a read-only array."""
        return frozen_vector([self.number(c) for c in range(start, start + count)])


@dataclass(frozen=True)
class RawRecord:
    """Unparsed row of a log whose column layout is not known.

    Attributes:
        timestamp_ns: Timestamp in nanoseconds (column 0)
        fields: Remaining columns as stripped text
    """

    timestamp_ns: int
    fields: tuple[str, ...]


def parse_raw_row(row: RowView) -> RawRecord:
    return RawRecord(timestamp_ns=row.timestamp(0), fields=row.fields[1:])


class RecordIterator(Generic[R]):
    """Forward-only sequence of records parsed from one data.csv.

    The file is opened on construction, so an unreadable log fails at the
    ``records()`` call rather than at the first ``next()``. The header row is
    consumed right away.

    A row that fails to parse raises from ``next()``, but the cursor has
    already moved past it: calling ``next()`` again continues with the
    following row. A plain ``for`` loop stops at the first error; drive the
    iterator with ``next()`` to inspect every row.

    The file is closed at end of file, by ``close()``, or on leaving a
    ``with`` block. Iteration cannot be restarted; open a new iterator.

    Example:
        >>> with reader.imu().records() as records:
        ...     for m in records:
        ...         print(m.timestamp_ns, m.gyroscope)
    """

    def __init__(
        self,
        csv_path: str | Path,
        parse_row: Callable[[RowView], R],
        num_columns: int = 1,
    ) -> None:
        """Open a log and consume its header.

        Args:
            csv_path: Path to data.csv
            parse_row: Maps one data row to a record
            num_columns: Minimum number of columns a data row must have

        Raises:
            OSError: If the file cannot be opened
            csv.Error: If the header row cannot be read
        """
        self.path = Path(csv_path)
        self._parse_row = parse_row
        self._num_columns = num_columns
        self._row_index = 0

        # Undecodable bytes become lone surrogates and are reported per row
        self._file = open(self.path, "r", newline="", errors="surrogateescape")
        try:
            self._reader = csv.reader(self._file)
            self._header = self._next_fields()
        except BaseException:
            self._file.close()
            raise

        logger.debug("Opened %s (header: %s)", self.path, self._header)

    def _next_fields(self) -> list[str] | None:
        """Return the next non-blank row, or None at end of file."""
        for fields in self._reader:
            if fields and any(field.strip() for field in fields):
                return fields
        return None

    @property
    def header(self) -> tuple[str, ...]:
        """Column names from the header row (empty for an empty file)."""
        return tuple(h.strip() for h in self._header) if self._header else ()

    @property
    def row_index(self) -> int:
        """Number of data rows consumed so far."""
        return self._row_index

    @property
    def closed(self) -> bool:
        return self._file.closed

    def close(self) -> None:
        """Release the file handle. Further ``next()`` calls end the iteration."""
        self._file.close()

    def __iter__(self) -> Iterator[R]:
        return self

    def __next__(self) -> R:
        if self._file.closed:
            raise StopIteration

        try:
            fields = self._next_fields()
        except csv.Error:
            # the reader has already dropped the offending line
            self._row_index += 1
            raise
        if fields is None:
            self.close()
            raise StopIteration

        row = RowView(fields, self._row_index, self.path)
        self._row_index += 1

        for column, field in enumerate(fields):
            if not _is_utf8(field):
                raise MalformedError(
                    f"{self.path}: row {row.row}, column {column}: invalid UTF-8",
                    path=self.path,
                    row=row.row,
                    column=column,
                )

        if self._header is not None and len(row) != len(self._header):
            raise MalformedError(
                f"{self.path}: row {row.row} has {len(row)} columns, "
                f"header has {len(self._header)}",
                path=self.path,
                row=row.row,
            )
        if len(row) < self._num_columns:
            raise MalformedError(
                f"{self.path}: row {row.row} has {len(row)} columns, "
                f"expected {self._num_columns}",
                path=self.path,
                row=row.row,
            )

        return self._parse_row(row)

    def __enter__(self) -> RecordIterator[R]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        file = getattr(self, "_file", None)
        if file is not None:
            file.close()
