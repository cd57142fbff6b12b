"""Single-line JSON output for the ``csv_table`` logger tree.

Library modules attach table context to their debug records with
:func:`context`::

    logger.debug("Deleted column %r", key, extra=context(key=key, mode=self.mode))

and :class:`JsonFormatter` lifts those values into top-level keys.
"""
from __future__ import annotations

import json
import logging
from logging import Logger
from typing import IO, Any

ROOT_LOGGER = "csv_table"
_PREFIX = "ctx_"


def context(**values: Any) -> dict[str, Any]:
    """``extra=`` mapping for a log call; keys come back unprefixed in the JSON."""
    return {f"{_PREFIX}{name}": value for name, value in values.items()}


class JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, event, then table context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(
            (key.removeprefix(_PREFIX), value) for key, value in vars(record).items() if key.startswith(_PREFIX)
        )
        if record.exc_info:
            payload["traceback"] = self.formatException(record.exc_info)
        # keys, modes and paths are not JSON types
        return json.dumps(payload, default=str, ensure_ascii=False)


def setup_logging(level: int = logging.WARNING, stream: IO[str] | None = None) -> Logger:
    """Attach a JSON handler to the package logger (once) and set its level."""
    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
