"""\
fshelpers
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

Idempotent filesystem helpers

This package (fshelpers) provides a thin layer of idempotent filesystem
primitives. Creating something that already exists, or removing
something that is already gone, is treated as success rather than an
error. It is meant for build tools, installers and test harnesses which
want to declare "this path should exist" or "this path should not
exist" without pre-checking the filesystem and racing against it.

Every call goes straight to the operating system, nothing is cached and
errors which do not describe the desired end state are raised as-is.

Read complete documentation at: https://github.com/xames3/fshelpers.
"""

from __future__ import annotations

from .core import *
from .utils import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__

__version__: str = "18.10.2026"
