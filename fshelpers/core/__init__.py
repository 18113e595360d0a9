"""\
Core
====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module acts as an entry point for combining various core objects,
configurations and the error policy used throughout this package.
"""

from __future__ import annotations

from .config import *
from .error import *
from .permit import *


__all__: tuple[str, ...] = config.__all__ + error.__all__ + permit.__all__
