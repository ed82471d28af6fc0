"""Loguru based logging utilities."""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime
from typing import IO, Any

from loguru import logger

from covidtrack.core.logging.config import LogConfig

TEXT_FORMAT = "<level>{level: <8}</level> | {extra[logger_name]} | {message}"


def _patch_record(record: dict[str, Any]) -> None:
    record["extra"].setdefault("logger_name", record.get("name") or "covidtrack")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime,)):
        return value.isoformat()
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    extra = record.get("extra", {})
    context = {k: v for k, v in extra.items() if k != "logger_name"}
    level_value = record.get("level")
    if hasattr(level_value, "name"):
        level_name = getattr(level_value, "name")
    elif level_value is None:
        level_name = "INFO"
    else:
        level_name = str(level_value)
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat() if "time" in record else datetime.now().isoformat(),
        "level": level_name,
        "logger": extra.get("logger_name"),
        "message": record.get("message"),
    }
    if context:
        payload["context"] = context
    exception = record.get("exception")
    if exception:
        payload["exception"] = str(exception)
    return payload


class _StreamJsonSink:
    """Sink writing JSON payloads to a text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        payload = _format_payload(message.record)
        self._stream.write(json.dumps(payload, default=_json_default))
        self._stream.write("\n")
        self._stream.flush()


class _FileJsonSink:
    """Sink appending JSON lines to a file path."""

    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:
        payload = _format_payload(message.record)
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(json.dumps(payload, default=_json_default))
            file.write("\n")


def _configure_from_config(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    level = config.level.upper()
    if config.console_output:
        stream = config.console_stream or sys.stderr
        if config.serialize:
            handlers.append({"sink": _StreamJsonSink(stream), "level": level})
        else:
            handlers.append(
                {"sink": stream, "level": level, "format": TEXT_FORMAT, "colorize": config.colorize}
            )
    if config.file_path:
        handlers.append({"sink": _FileJsonSink(config.file_path), "level": level})

    logger.configure(handlers=handlers, patcher=_patch_record)


def configure_logging(level: str = "WARNING", **kwargs: Any) -> LogConfig:
    """Configure logging with the provided level and options."""

    config = LogConfig(level=level, **kwargs)
    _configure_from_config(config)
    return config


def get_logger(name: str | None = None):
    """Return the global logger, bound to ``name`` when given."""

    if name:
        return logger.bind(logger_name=name)
    return logger


configure_logging()


__all__ = ["configure_logging", "get_logger", "logger"]
