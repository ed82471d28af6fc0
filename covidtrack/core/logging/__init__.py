"""Logging utilities."""

from covidtrack.core.logging.config import LogConfig
from covidtrack.core.logging.logger import configure_logging, get_logger, logger

__all__ = [
    "LogConfig",
    "configure_logging",
    "get_logger",
    "logger",
]
