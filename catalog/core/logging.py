"""
Logging configuration for the catalog backend.

Everything uses the standard logging library. Services log dotted event names
("space.create.success") and pass structured fields through ``extra=`` built
with :func:`log_context`; the console formatter appends them as key=value.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

ROOT_LOGGER = "catalog"
_CONFIGURED_FLAG = "_catalog_configured"

# Attributes already present on every LogRecord.
_STANDARD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "taskName"}


class ConsoleLogFormatter(logging.Formatter):
    """Single-line console output with extras rendered as key=value pairs."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)-5s %(name)s %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')}.{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS and not k.startswith("_")}
        if not extras:
            return base
        return base + " " + " ".join(f"{key}={extras[key]}" for key in sorted(extras))


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the package logger once per process."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    if getattr(logger, _CONFIGURED_FLAG, False):
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(ConsoleLogFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, _CONFIGURED_FLAG, True)
    return logger


def log_context(
    *,
    space_id: UUID | str | None = None,
    user_id: UUID | str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a consistent ``extra`` payload for structured logs."""
    ctx: dict[str, Any] = {}
    if space_id is not None:
        ctx["space_id"] = str(space_id)
    if user_id is not None:
        ctx["user_id"] = str(user_id)
    ctx.update(extra)
    return ctx
