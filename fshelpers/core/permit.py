"""\
Permit policy
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module defines which error kinds each filesystem operation treats
as success. An operation is idempotent with respect to the outcome it
guarantees: if a directory already exists, "create this directory"
already holds, and if a file is already gone, "remove this file"
already holds.

The non-recursive directory removal additionally permits a populated
directory. It never deletes contents, so leaving a populated directory
in place is its expected no-op, unlike the recursive removal which has
to report anything it could not delete.
"""

from __future__ import annotations

import enum
import typing as t

from fshelpers.core.error import ErrorKind


__all__: tuple[str, ...] = (
    "Operation",
    "PERMITTED",
    "is_permitted",
)


class Operation(enum.Enum):
    """Filesystem operations exposed by this package."""

    MKDIR = "mkdir"
    MKF = "mkf"
    MKF_P = "mkf_p"
    MKDIR_P = "mkdir_p"
    RMDIR = "rmdir"
    RMDIR_R = "rmdir_r"
    RMF = "rmf"
    RM = "rm"
    IS_DIR = "is_dir"


# NOTE(xames3): `RM` never calls a primitive itself, it delegates to
# `RMF` or `RMDIR_R`. Its entry lists the kinds it inherits from them so
# the table still describes the observable behaviour of every operation.
PERMITTED: t.Final[dict[Operation, frozenset[ErrorKind]]] = {
    Operation.MKDIR: frozenset({ErrorKind.ALREADY_EXISTS}),
    Operation.MKF: frozenset({ErrorKind.ALREADY_EXISTS}),
    Operation.MKF_P: frozenset({ErrorKind.ALREADY_EXISTS}),
    Operation.MKDIR_P: frozenset({ErrorKind.ALREADY_EXISTS}),
    Operation.RMDIR: frozenset(
        {ErrorKind.NOT_FOUND, ErrorKind.DIRECTORY_NOT_EMPTY}
    ),
    Operation.RMDIR_R: frozenset({ErrorKind.NOT_FOUND}),
    Operation.RMF: frozenset({ErrorKind.NOT_FOUND}),
    Operation.RM: frozenset({ErrorKind.NOT_FOUND}),
    Operation.IS_DIR: frozenset(),
}


def is_permitted(operation: Operation, kind: ErrorKind) -> bool:
    """Check whether an error kind counts as success for an operation.

    :param operation: The operation which raised the error.
    :param kind: The classified error.
    :return: `True` if the error should be absorbed, `False` if it must
        be propagated to the caller.
    """
    return kind in PERMITTED.get(operation, frozenset())
