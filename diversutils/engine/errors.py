"""Status codes and the exception hierarchy of the measurement engine.

Every engine layer raises one of the exceptions below; only the status-code
surface in ``diversutils.engine.api`` turns them back into ``Status`` values.
Undefined measure values are not errors: measures return ``nan``.
"""

from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    OK = 0
    ALLOCATION_FAILURE = 1
    INVALID_ARGUMENT = 2
    INVALID_HANDLE = 3
    INVALID_STATE = 4
    DIMENSION_MISMATCH = 5
    FILE_FORMAT_ERROR = 6


class DiversityError(Exception):
    """Base class for engine errors."""

    status: Status = Status.INVALID_STATE


class AllocationFailure(DiversityError):
    """A registry is full, or storage for a record could not be obtained."""

    status = Status.ALLOCATION_FAILURE


class InvalidArgument(DiversityError, ValueError):
    """Malformed input: negative count, unknown measure id, bad precision tag."""

    status = Status.INVALID_ARGUMENT


class InvalidHandle(DiversityError, KeyError):
    """Handle never issued, already released, or of the wrong kind."""

    status = Status.INVALID_HANDLE

    def __str__(self) -> str:
        return Exception.__str__(self)


class InvalidState(DiversityError):
    """Operation not allowed in the current state of a record."""

    status = Status.INVALID_STATE


class DimensionMismatch(DiversityError, ValueError):
    """Sizes disagree: embedding dimensionality or distance-matrix length."""

    status = Status.DIMENSION_MISMATCH


class FileFormatError(DiversityError):
    """A vector-space file is unreadable or malformed."""

    status = Status.FILE_FORMAT_ERROR

    def __init__(self, message: str, path=None, offset: int | None = None):
        if offset is not None:
            message = f"{message} (byte offset {offset})"
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path
        self.offset = offset
