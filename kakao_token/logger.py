# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Structured logging with credential redaction.

Every module in the package logs through a ``Logger`` so entries carry
structured fields (strategy name, path, profile id) instead of formatted
strings. Fields that can hold a Kakao credential are masked before any
backend sees them: ``access_token``, ``refresh_token``, ``authorization`` and
``client_secret`` values are replaced, and the same names are scrubbed from
the query string of a ``url`` field.

Example:
    >>> from kakao_token.logger import create_logger
    >>> logger = create_logger(logger_type="stdout", level="INFO", name="my-service")
    >>> logger.info("Strategy registered", strategy="kakao-token")
"""

import json
import logging
import os
import sys
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Mapping

import httpx

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_NAME = "kakao_token"

SENSITIVE_FIELDS = frozenset({"access_token", "refresh_token", "authorization", "client_secret"})
REDACTED = "REDACTED"


def _scrub_url(url: str) -> str:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return url

    params = parsed.params
    hits = [key for key in params.keys() if key.lower() in SENSITIVE_FIELDS]
    if not hits:
        return url
    for key in hits:
        params = params.set(key, REDACTED)
    return str(parsed.copy_with(params=params))


def redact(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``fields`` with credential values masked.

    Args:
        fields: Structured log fields

    Returns:
        New dict safe to serialize
    """
    cleaned: dict[str, Any] = {}
    for key, value in fields.items():
        if key.lower() in SENSITIVE_FIELDS:
            cleaned[key] = REDACTED
        elif key == "url" and isinstance(value, (str, httpx.URL)):
            cleaned[key] = _scrub_url(str(value))
        else:
            cleaned[key] = value
    return cleaned


class Logger(ABC):
    """Base logger: level filtering and redaction, backends write entries.

    Attributes:
        level: Minimum level written
        name: Logger name
    """

    def __init__(self, level: str = "INFO", name: str | None = None):
        self.level = level.upper()
        if self.level not in LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of {list(LEVELS)}")
        self.name = name or DEFAULT_NAME

    @abstractmethod
    def _write(self, level: str, message: str, fields: dict[str, Any]) -> None:
        """Write one entry whose fields are already redacted."""

    def log(self, level: str, message: str, **fields: Any) -> None:
        if LEVELS[level] < LEVELS[self.level]:
            return
        self._write(level, message, redact(fields))

    def debug(self, message: str, **fields: Any) -> None:
        self.log("DEBUG", message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log("INFO", message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log("WARNING", message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log("ERROR", message, **fields)


class StdoutLogger(Logger):
    """Writes one JSON object per line to stdout.

    Entries are also passed to the stdlib logger of the same name, so
    application handlers and pytest's ``caplog`` receive them.
    """

    def __init__(self, level: str = "INFO", name: str | None = None):
        super().__init__(level, name)
        self._stdlib_logger = logging.getLogger(self.name)

    def _write(self, level: str, message: str, fields: dict[str, Any]) -> None:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }
        if fields:
            entry["extra"] = fields
        sys.stdout.write(json.dumps(entry, default=str) + "\n")
        sys.stdout.flush()

        self._stdlib_logger.log(LEVELS[level], message, extra={"fields": fields})


class SilentLogger(Logger):
    """Keeps entries in memory; used by the test suite.

    Defaults to DEBUG so every call is recorded.
    """

    def __init__(self, level: str = "DEBUG", name: str | None = None):
        super().__init__(level, name)
        self.entries: list[dict[str, Any]] = []

    def _write(self, level: str, message: str, fields: dict[str, Any]) -> None:
        self.entries.append({"level": level, "message": message, "fields": fields})

    def messages(self, level: str | None = None) -> list[str]:
        return [e["message"] for e in self.entries if level is None or e["level"] == level]

    def has_log(self, fragment: str, level: str | None = None) -> bool:
        """True if a recorded message at ``level`` (any level if None) contains ``fragment``."""
        return any(fragment in message for message in self.messages(level))


_LOGGER_TYPES: dict[str, type[Logger]] = {
    "stdout": StdoutLogger,
    "silent": SilentLogger,
}


def create_logger(
    logger_type: str | None = None,
    level: str | None = None,
    name: str | None = None,
) -> Logger:
    """Create a logger, falling back to ``LOG_TYPE``, ``LOG_LEVEL`` and ``LOG_NAME``.

    Args:
        logger_type: "stdout" or "silent" (default "stdout")
        level: DEBUG, INFO, WARNING or ERROR (default "INFO")
        name: Logger name (default "kakao_token")

    Returns:
        Logger instance

    Raises:
        ValueError: If logger_type or level is not recognized
    """
    logger_type = (logger_type or os.getenv("LOG_TYPE") or "stdout").lower()
    try:
        logger_class = _LOGGER_TYPES[logger_type]
    except KeyError:
        raise ValueError(
            f"Unknown logger_type: {logger_type}. Must be one of: {', '.join(_LOGGER_TYPES)}"
        ) from None
    return logger_class(
        level=level or os.getenv("LOG_LEVEL") or "INFO",
        name=name or os.getenv("LOG_NAME") or DEFAULT_NAME,
    )
