"""Configuration management module."""

from covidtrack.core.config.settings import (
    DEFAULT_SOURCE_URL,
    LOG_LEVELS,
    ConfigManager,
    CovidTrackConfig,
    DecoderConfig,
    LoggingConfig,
    QueryConfig,
    SourceConfig,
    load_config_from_env,
)

__all__ = [
    "DEFAULT_SOURCE_URL",
    "LOG_LEVELS",
    "ConfigManager",
    "CovidTrackConfig",
    "SourceConfig",
    "DecoderConfig",
    "QueryConfig",
    "LoggingConfig",
    "load_config_from_env",
]
