"""\
Error and classification
========================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module provides the error classes raised by this package and the
taxonomy used to classify operating system errors.

Filesystem errors are never wrapped by this package. Instead, each
`OSError` is reduced to an `ErrorKind` which the permit policy checks
against an allow-list. Anything that is not allowed is re-raised
unchanged, so callers keep catching the builtin exception types they
already know (`PermissionError`, `IsADirectoryError` and so on).
"""

from __future__ import annotations

import enum
import errno


__all__: tuple[str, ...] = (
    "BaseError",
    "ConfigValidationError",
    "ErrorKind",
    "ValidationError",
    "classify",
)

Error = Exception


class BaseError(Error):
    """Base error class for all exceptions."""


class ValidationError(BaseError):
    """Errors related to validation check failure."""


class ConfigValidationError(ValidationError):
    """Errors related to configuration validation failure."""


class ErrorKind(enum.Enum):
    """Classification of an operating system error."""

    ALREADY_EXISTS = "already-exists"
    NOT_FOUND = "not-found"
    DIRECTORY_NOT_EMPTY = "directory-not-empty"
    OTHER = "other"


def classify(error: OSError) -> ErrorKind:
    """Reduce an operating system error to an `ErrorKind`.

    The builtin `OSError` subclasses are checked first since Python
    maps the platform error codes (including the Windows ones) onto
    them. A non-empty directory has no dedicated subclass, so it is
    recognised by its `errno` value.

    :param error: The error raised by an operating system call.
    :return: The matching error kind, `ErrorKind.OTHER` when the error
        is not one of the recognised kinds.
    """
    if isinstance(error, FileExistsError):
        return ErrorKind.ALREADY_EXISTS
    if isinstance(error, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if error.errno == errno.ENOTEMPTY:
        return ErrorKind.DIRECTORY_NOT_EMPTY
    return ErrorKind.OTHER
