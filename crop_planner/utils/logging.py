"""
Root logger setup for the crop-planner CLI.

Library modules only ever do ``log = logging.getLogger(__name__)``; the CLI
calls ``configure_logging(config.logging)`` once per command.  Handlers write
to stderr (and optionally a file) because stdout carries command output.

With ``json_format = true`` each record becomes one JSON line::

    {"time": "2025-06-01T09:30:00Z", "level": "DEBUG",
     "logger": "crop_planner.recommendations.engine",
     "message": "Scored 23 crops for field north-bed ...", "field_id": "north-bed"}

Keys passed through ``extra=`` are copied into the object.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crop_planner.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Keys every LogRecord carries; anything else arrived via ``extra=``.
_RESERVED_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "time": stamp.strftime(TIME_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (k, v) for k, v in vars(record).items()
            if k not in _RESERVED_KEYS and not k.startswith("_")
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _build_formatter(config: "LoggingConfig") -> logging.Formatter:
    if config.json_format:
        return _JsonFormatter()
    formatter = logging.Formatter(TEXT_FORMAT, datefmt=TIME_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def _build_handlers(config: "LoggingConfig") -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def configure_logging(config: "LoggingConfig") -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Replaces any handlers installed by an earlier call, so repeated CLI
    invocations in one process do not duplicate output.
    """
    level = logging.getLevelName(config.level)
    formatter = _build_formatter(config)
    handlers = _build_handlers(config)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
