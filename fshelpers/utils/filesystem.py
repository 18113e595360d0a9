"""\
Filesystem operations
=====================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module provides idempotent filesystem operations. Each operation
delegates to a single operating system call and treats the error kinds
permitted for it in `fshelpers.core.permit` as success.

Every call goes to the operating system, so two sequential calls may
observe different filesystems if something else mutates the same
paths in between. Errors that are not permitted are re-raised without
any wrapping.
"""

from __future__ import annotations

import os
import shutil
import stat
import typing as t

from opentelemetry import trace

from fshelpers.core.error import classify
from fshelpers.core.permit import Operation
from fshelpers.core.permit import is_permitted
from fshelpers.utils.logging import get_logger

__all__: tuple[str, ...] = (
    "is_dir",
    "mkdir",
    "mkdir_p",
    "mkf",
    "mkf_p",
    "rm",
    "rmdir",
    "rmdir_r",
    "rmf",
)

StrPath: t.TypeAlias = "str | os.PathLike[str]"

logger = get_logger(__name__)
_tracer = trace.get_tracer(__name__)


def _permit(
    operation: Operation,
    path: StrPath,
    action: t.Callable[[], t.Any],
) -> None:
    """Run action and absorb the errors permitted for operation.

    :param operation: The operation being performed.
    :param path: The path the operation acts on.
    :param action: Zero-argument callable performing the OS call.
    :raises OSError: If the call fails with an error kind that is not
        permitted for the operation. The original error is re-raised.
    """
    path = os.fspath(path)
    with _tracer.start_as_current_span(f"fshelpers.{operation.value}") as span:
        span.set_attribute("fs.operation", operation.value)
        span.set_attribute("fs.path", path)
        try:
            action()
        except OSError as error:
            kind = classify(error)
            if not is_permitted(operation, kind):
                raise
            span.set_attribute("fs.permitted", kind.value)
            logger.debug(
                f"Permitting {kind.name} for {operation.value}({path!r})",
                extra={
                    "operation": operation.value,
                    "path": path,
                    "permitted": kind.value,
                },
            )


def _create_new(file: StrPath) -> None:
    with open(file, "xb"):
        pass


def _strip_separators(path: StrPath) -> str:
    """Drop trailing separators so a link is not resolved to its target."""
    path = os.fspath(path)
    return path.rstrip(os.sep + (os.altsep or "")) or path


def _remove_tree(path: StrPath) -> None:
    path = _strip_separators(path)
    if os.path.islink(path):
        os.remove(path)
    else:
        shutil.rmtree(path)


def mkdir(path: StrPath) -> None:
    """Create a directory.

    Existing directories are ignored. Does not create parents.
    """
    _permit(Operation.MKDIR, path, lambda: os.mkdir(path))


def mkf(file: StrPath) -> None:
    """Create an empty file.

    Ignores attempts to create a file that already exists, which is
    left untouched. Roughly corresponds to `touch` without updating
    timestamps.
    """
    _permit(Operation.MKF, file, lambda: _create_new(file))


def mkf_p(file: StrPath) -> None:
    """Create an empty file, along with its parents.

    Missing parent directories are created first. The parent step is
    skipped entirely when the parent already exists. Ignores attempts to
    create a file that already exists.
    """
    parent = os.path.dirname(os.fspath(file))
    if parent and not os.path.exists(parent):
        mkdir_p(parent)
    _permit(Operation.MKF_P, file, lambda: _create_new(file))


def mkdir_p(path: StrPath) -> None:
    """Create a directory and all its missing parents.

    Existing directories are ignored.
    """
    _permit(Operation.MKDIR_P, path, lambda: os.makedirs(path))


def rmdir(path: StrPath) -> None:
    """Remove an empty directory.

    Ignores attempts to remove missing or populated directories. A
    populated directory is left in place along with its contents.
    """
    _permit(Operation.RMDIR, path, lambda: os.rmdir(path))


def rmdir_r(path: StrPath) -> None:
    """Remove a directory and everything inside it.

    Ignores attempts to remove missing directories. A symbolic link is
    removed as a link, even when spelled with a trailing separator, and
    the directory it points to is left alone.
    """
    _permit(Operation.RMDIR_R, path, lambda: _remove_tree(path))


def rmf(file: StrPath) -> None:
    """Remove a file or symbolic link.

    Ignores attempts to remove missing files.
    """
    _permit(Operation.RMF, file, lambda: os.remove(file))


def rm(path: StrPath) -> None:
    """Remove a symbolic link, file or directory.

    Symbolic links are never followed: a link to a directory is removed
    as a link and the directory it points to is left alone. Directories
    are removed recursively. A trailing separator does not make a link
    count as its target.

    .. note::

        The type check and the removal are separate calls. If the path
        changes type in between, the wrong removal may be attempted and
        its error propagates.
    """
    path = _strip_separators(path)
    if os.path.islink(path) or os.path.isfile(path):
        rmf(path)
    else:
        rmdir_r(path)


def is_dir(path: StrPath) -> bool:
    """Check whether a path is a directory, following symbolic links.

    A symbolic link is read and its target classified explicitly, with
    relative targets resolved against the directory holding the link.

    :param path: Path to check.
    :return: `True` if path is a directory or a link to one, `False`
        otherwise, including when path does not exist.
    :raises FileNotFoundError: If path is a symbolic link whose target
        is missing.

    .. note::

        Errors raised while checking the path itself, such as a
        `PermissionError` on a parent directory, are not propagated and
        the path is reported as not being a directory. Only the explicit
        lookup of a symbolic link target raises.
    """
    if os.path.isdir(path):
        return True
    if not os.path.islink(path):
        return False
    path = os.fspath(path)
    target = os.path.join(os.path.dirname(path), os.readlink(path))
    return stat.S_ISDIR(os.stat(target).st_mode)
