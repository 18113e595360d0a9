"""\
Utilities
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module acts as an entry point for combining the filesystem
operations exposed by this package.
"""

from __future__ import annotations

from .filesystem import *


__all__: tuple[str, ...] = filesystem.__all__
