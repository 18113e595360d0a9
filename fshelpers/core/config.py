"""\
Configurations
==============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module provides the configurations used for logging and tracing
the filesystem operations of this package. The operations themselves
take no configuration.
"""

from __future__ import annotations

import threading
import typing as t
from weakref import WeakKeyDictionary as WKDictionary

from fshelpers.core.error import ConfigValidationError


if t.TYPE_CHECKING:
    from collections.abc import Iterable

__all__: tuple[str, ...] = (
    "Config",
    "ConsoleLoggerConfig",
    "FileLoggerConfig",
    "LoggerConfig",
    "TTYLoggerConfig",
    "TelemetryConfig",
    "config_property",
)

_ALLOWED_LOG_LEVELS: tuple[str, ...] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)
_ALLOWED_EXPORTERS: tuple[str, ...] = ("console", "otlp")
# NOTE(xames3): The default log format uses the special `qualName` and
# `extra` attributes which are populated by the formatters provided in
# `fshelpers.utils.logging`. Plain `logging.Formatter` objects cannot
# render this format.
_DEFAULT_LOG_FMT: t.Final[str] = (
    "%(asctime)s %(levelname)s %(qualName)s:%(lineno)d %(extra)s: %(message)s"
)
_DEFAULT_LOG_DATEFMT: t.Final[str] = "%Y-%m-%dT%H:%M:%SZ"


T = t.TypeVar("T")


class config_property(t.Generic[T]):  # noqa: N801
    """Descriptor for configuration properties.

    This descriptor class creates and provides functionalities like
    Python's built-in `property` object decorator, but with validation
    and immutability checks for configuration values.

    Values are validated against the `allowed`, `check` and `between`
    constraints whenever they are set, including the default which is
    validated once when the owning class is created.

    :param default: Default value of the property.
    :param frozen: Whether the property is read-only, defaults to
        `False`.
    :param description: Optional human-readable description.
    :param allowed: Optional collection of accepted values.
    :param check: Optional predicate the value must satisfy.
    :param between: Optional inclusive `(minimum, maximum)` range.
    """

    __slots__: tuple[str, ...] = (
        "allowed",
        "between",
        "check",
        "default",
        "description",
        "frozen",
        "locks",
        "property",
        "validate",
    )

    _global_lock: threading.RLock = threading.RLock()

    def __init__(
        self,
        default: T,
        *,
        frozen: bool = False,
        description: str | None = None,
        allowed: Iterable[T] | None = None,
        check: t.Callable[[T], bool] | None = None,
        between: tuple[int | float, ...] | None = None,
    ) -> None:
        """Initialise configuration property."""
        self.default = default
        self.frozen = frozen
        self.description = description
        self.allowed = allowed
        self.check = check
        self.between = between
        self.property: str = ""
        self.validate: bool = any([self.between, self.check, self.allowed])
        self.locks: WKDictionary[object, threading.RLock] = WKDictionary()

    def __set_name__(self, owner: type, name: str) -> None:
        """Bind the property to its attribute name on the owner class.

        :param owner: The class where the property is being defined.
        :param name: The attribute name of the property.
        :raises ConfigValidationError: If the default value does not
            satisfy the constraints.
        """
        self.property = f"_{name}"
        if self.default is not None and self.validate:
            try:
                self.__validate__(self.default)
            except ConfigValidationError as error:
                raise ConfigValidationError(
                    f"got invalid value for {name!r}: {error}"
                ) from error
        setattr(owner, self.property, self.default)

    @t.overload
    def __get__(self, instance: None, owner: type) -> config_property[T]: ...

    @t.overload
    def __get__(self, instance: object, owner: type) -> T: ...

    def __get__(
        self,
        instance: object | None,
        owner: type,
    ) -> config_property[T] | T:
        """Get and return the property value from the instance."""
        if instance is None:
            return self
        return getattr(instance, self.property, self.default)

    def __set__(self, instance: object, value: T) -> None:
        """Set the property with validation & immutability checks.

        :param instance: The instance where the property is being set.
        :param value: The value to be set for the property.
        :raises ConfigValidationError: If the property is frozen or the
            value does not satisfy the constraints.
        """
        if self.frozen:
            raise ConfigValidationError(
                f"cannot modify frozen property: {self.property[1:]!r}",
            )
        if self.validate:
            with self._acquire_lock(instance):
                self.__validate__(value)
                setattr(instance, self.property, value)
        else:
            setattr(instance, self.property, value)

    def __validate__(self, value: t.Any) -> None:
        """Validate the property value based on constraints.

        :param value: The value to be validated.
        :raises ConfigValidationError: If the value does not meet the
            validation criteria.
        """
        if self.allowed is not None and value not in self.allowed:
            raise ConfigValidationError(
                f"{value!r} is not one of the allowed values "
                f"({', '.join(str(item) for item in self.allowed)})"
            )
        if self.check is not None:
            try:
                if not self.check(value):
                    raise ConfigValidationError("property validation failed")
            except ConfigValidationError:
                raise
            except Exception as error:
                raise ConfigValidationError(
                    f"property validation failed for {value!r} with "
                    f"message: {error}"
                ) from error
        if self.between is not None and len(self.between) == 2:
            minimum, maximum = self.between
            if not all(
                isinstance(num, int | float) for num in (minimum, maximum)
            ):
                raise ConfigValidationError("must be a tuple of two numbers")
            if not (minimum <= value <= maximum):
                raise ConfigValidationError(
                    f"{value} is not between {minimum} and {maximum}"
                )

    def _acquire_lock(self, instance: object) -> threading.RLock:
        """Return the lock guarding writes to this property on instance.

        :param instance: The instance where the property is being set.
        :return: A re-entrant lock dedicated to the instance, or the
            shared lock when the instance does not support weak
            references.
        """
        # NOTE(xames3): Locks are keyed weakly on the instance so they
        # are dropped together with the configuration object.
        try:
            lock = self.locks.get(instance)
        except TypeError:
            return self._global_lock
        if lock is not None:
            return lock
        with self._global_lock:
            return self.locks.setdefault(instance, threading.RLock())


class FileLoggerConfig:
    """File logger configuration.

    This class provides configuration options for logging to a rotating
    file. File logging is disabled by default since this package is
    usually embedded in other tools which own their log files.
    """

    enable: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "INFO",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    path: config_property[str] = config_property(
        "logs",
        check=lambda x: isinstance(x, str) and bool(x),
    )
    output: config_property[str] = config_property("fshelpers.log")
    encoding: config_property[str] = config_property("utf-8", frozen=True)
    max_size: config_property[str] = config_property("10MB")
    backups: config_property[int] = config_property(5, check=lambda x: x >= 0)


class ConsoleLoggerConfig:
    """Console logger configuration.

    This class provides configuration options for logging to the console
    or the tty.
    """

    enable: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    colour: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )


TTYLoggerConfig = ConsoleLoggerConfig


class LoggerConfig:
    """Logger configuration.

    This class combines the console and file logger configurations into
    a single logging setup. Each instance owns its own sub-configs.
    """

    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    as_json: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )

    def __init__(self) -> None:
        """Initialise logger configuration with fresh sub-configs."""
        self.file = FileLoggerConfig()
        self.tty = TTYLoggerConfig()


class TelemetryConfig:
    """Tracing configuration."""

    enable: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    name: config_property[str | None] = config_property(None)
    exporter: config_property[str] = config_property(
        "console",
        allowed=_ALLOWED_EXPORTERS,
    )


class Config:
    """Configuration.

    This class serves as the main configuration object for the package.
    It groups the logging and tracing configurations.
    """

    name: config_property[str] = config_property("fshelpers", frozen=True)
    version: config_property[str] = config_property("18.10.2026", frozen=True)
    debug: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )

    def __init__(self) -> None:
        """Initialise configuration with fresh sub-configs."""
        self.logger = LoggerConfig()
        self.telemetry = TelemetryConfig()
