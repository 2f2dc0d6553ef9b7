"""Logging helpers for sha2stream."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Union

import orjson

_DEFAULT_LEVEL = os.environ.get("SHA2STREAM_LOG_LEVEL", "WARNING")


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `ctx_*` extras are copied through."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                payload[key] = value
        return orjson.dumps(payload).decode("utf-8")


def configure_logging(level: Union[str, int] = _DEFAULT_LEVEL, use_json: bool = False) -> None:
    """Install a single stderr handler on the package logger."""
    logger = logging.getLogger("sha2stream")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str = "sha2stream") -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "configure_logging", "get_logger"]
