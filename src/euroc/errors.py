"""Exception types raised by the EuRoC readers.

Every error carries the offending path in its message. The classes also
derive from the builtin exception a caller would expect (``FileNotFoundError``
for layout problems, ``ValueError`` for bad content), so code written against
plain builtins keeps working.

File open and read failures are not wrapped: they surface as the ``OSError``
raised by ``open()``.
"""

from __future__ import annotations

from pathlib import Path


class EurocError(Exception):
    """Base class for all dataset errors."""


class LayoutError(EurocError, FileNotFoundError):
    """A required directory or file is missing from the dataset layout."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class MalformedError(EurocError, ValueError):
    """A descriptor key or a CSV row does not have the expected shape.

    Attributes:
        path: File the bad content came from
        key: Descriptor key (dotted for nested keys), if any
        row: 0-based data row index in the CSV log (header excluded), if any
        column: 0-based column index in the CSV log, if any
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        key: str | None = None,
        row: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.key = key
        self.row = row
        self.column = column


class ImageDecodeError(MalformedError):
    """OpenCV could not decode an image referenced by a camera log row."""


class OutOfRangeError(EurocError, ValueError):
    """A numeric value does not fit the integer type it is narrowed to."""

    def __init__(
        self,
        message: str,
        value: int | None = None,
        path: str | Path | None = None,
    ) -> None:
        super().__init__(message)
        self.value = value
        self.path = Path(path) if path is not None else None
