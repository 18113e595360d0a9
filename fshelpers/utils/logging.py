"""\
Logging
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module provides logging utilities and configuration helpers for
the fshelpers package. The filesystem operations only ever log at the
`DEBUG` level, when an error is permitted, so nothing is printed unless
the host application asks for it.

It includes custom formatters for coloured and JSON output with
automatic extra field handling, and a `configure` helper which attaches
console and rotating file handlers to the package logger.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import re
import sys
import typing as t

if t.TYPE_CHECKING:
    from fshelpers.core.config import LoggerConfig

__all__: list[str] = [
    "ColouredFormatter",
    "FshelpersFormatter",
    "JSONFormatter",
    "configure",
    "dehumanise",
    "get_logger",
]

_PACKAGE_LOGGER: t.Final[str] = "fshelpers"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs each log record as a single JSON object which
    is easy to ship to log management systems. Extra fields passed via
    `extra=` (for instance the `operation`, `path` and `permitted`
    fields of the filesystem operations) are included as top level keys.

    :param extras: Whether to include extra fields in output, defaults
        to `True`.
    """

    def __init__(self, extras: bool = True):
        """Initialise the JSON formatter instance."""
        super().__init__()
        self.extras = extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        :param record: The log record to format.
        :return: JSON-formatted log message.
        """
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if (
                    key not in payload
                    and key not in FshelpersFormatter.LOG_RECORD_ATTRS
                    and not key.startswith("_")
                ):
                    payload[key] = value
        return json.dumps(payload, default=str)


class FshelpersFormatter(logging.Formatter):
    """Custom formatter that automatically includes extra fields.

    This formatter detects the fields which are not part of a standard
    `LogRecord` and renders them into the `%(extra)s` placeholder of the
    format string.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps, defaults to
        `None`.
    :param extra_format: Format string for individual extra fields.
    :param extra_separator: Separator between multiple extra fields,
        defaults to a single space.
    :var LOG_RECORD_ATTRS: Set of standard `LogRecord` attributes.
    """

    LOG_RECORD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "taskName",
        "qualName",
        "extra",
    }

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        extra_format: str = "{key}: {value}",
        extra_separator: str = " ",
    ) -> None:
        """Initialise the custom formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling.

        :param record: The log record to format.
        :return: Formatted log message with extra fields.
        """
        clone = logging.makeLogRecord(record.__dict__)
        entries = [
            self.extra.format(key=key, value=value)
            for key, value in sorted(record.__dict__.items())
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_")
        ]
        clone.extra = self.extra_separator.join(entries)
        return super().format(clone)


class ColouredFormatter(FshelpersFormatter):
    """Formatter with qualified names and optional colours.

    The `%(qualName)s` placeholder is filled with the logger name and
    the function that emitted the record, for example
    `fshelpers.utils.filesystem._permit`. Colours are only applied when
    `is_tty` is set, so log files stay free of ANSI escape sequences.

    :var COLORS: Dictionary mapping log levels to ANSI colour codes.
    """

    COLORS = {
        "DEBUG": "\x1b[38;5;14m",
        "INFO": "\x1b[38;5;41m",
        "WARNING": "\x1b[38;5;215m",
        "ERROR": "\x1b[38;5;204m",
        "CRITICAL": "\x1b[38;5;197m",
        "QUALNAME": "\x1b[38;5;140m",
        "RESET": "\x1b[0m",
    }

    is_tty: bool = False

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a qualified name and padded level.

        :param record: The log record to format.
        :return: Formatted log message, with colours only for TTY
            output.
        """
        clone = logging.makeLogRecord(record.__dict__)
        qualname = ".".join(
            part for part in (record.name, record.funcName) if part
        )
        if self.is_tty:
            colour = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            clone.levelname = (
                f"{colour}{record.levelname:>8s}{self.COLORS['RESET']}"
            )
            clone.qualName = (
                f"{self.COLORS['QUALNAME']}{qualname}{self.COLORS['RESET']}"
            )
        else:
            clone.levelname = f"{record.levelname:>8s}"
            clone.qualName = qualname
        return super().format(clone)


def configure(config: LoggerConfig) -> logging.Logger:
    """Configure the package logger based on configuration settings.

    Handlers are attached to the `fshelpers` logger rather than the root
    logger, so the host application's logging setup is left alone.
    Calling this function again replaces the handlers it attached
    previously.

    :param config: Logging configuration settings.
    :return: The configured package logger.
    """
    # NOTE(xames3): Imported here since the filesystem operations log
    # through this module.
    from fshelpers.utils.filesystem import mkdir_p

    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers: list[logging.Handler] = []
    levels: list[int] = []
    if config.tty.enable:
        tty = logging.StreamHandler(sys.stdout)
        tty.setLevel(getattr(logging, config.tty.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.tty.fmt,
                datefmt=config.tty.datefmt,
                extra_format="[{key}: {value}]",
            )
            formatter.is_tty = config.tty.colour and sys.stdout.isatty()
        tty.setFormatter(formatter)
        handlers.append(tty)
        levels.append(tty.level)
    if config.file.enable:
        mkdir_p(config.file.path)
        handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(config.file.path, config.file.output),
            maxBytes=dehumanise(config.file.max_size),
            backupCount=config.file.backups,
            encoding=config.file.encoding,
        )
        handler.setLevel(getattr(logging, config.file.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.file.fmt,
                datefmt=config.file.datefmt,
                extra_format="[{key}: {value}]",
            )
        handler.setFormatter(formatter)
        handlers.append(handler)
        levels.append(handler.level)
    logger.setLevel(
        min(levels) if levels else getattr(logging, config.level.upper())
    )
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = not handlers
    return logger


def dehumanise(size: str) -> int:
    """Parse size string to bytes.

    This function converts a human-readable size string (like `10MB`,
    `1GB`, etc.) into an integer representing the size in bytes.

    :param size: Size string like `10MB`, `1GB`, etc.
    :return: Size in bytes.
    :raises ValueError: If the size string cannot be parsed.
    """
    size = size.upper().strip()
    multipliers = {
        "B": 1,
        "K": 1024,
        "KB": 1024,
        "M": 1024**2,
        "MB": 1024**2,
        "G": 1024**3,
        "GB": 1024**3,
        "T": 1024**4,
        "TB": 1024**4,
    }
    matched = re.match(r"^(\d+(?:\.\d+)?)\s*([KMGT]?B?)$", size)
    if not matched:
        raise ValueError(f"Invalid size format: {size}")
    value, unit = matched.groups()
    return int(float(value) * multipliers.get(unit or "B", 1))


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    :param logger_name: Logger name.
    :return: Logger instance.
    """
    return logging.getLogger(logger_name)
