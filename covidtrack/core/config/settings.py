"""Configuration management for the covidtrack client."""

import os
import tempfile
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from covidtrack.core.exceptions import ConfigError

DEFAULT_SOURCE_URL = "https://pomber.github.io/covid19/timeseries.json"
DEFAULT_CACHE_FILENAME = "covid_19_timeseries.json"
DEFAULT_CONFIG_PATH = Path.home() / ".covidtrack" / "config.toml"

# Levels known to loguru without registering custom ones.
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _default_cache_file() -> str:
    return str(Path(tempfile.gettempdir()) / DEFAULT_CACHE_FILENAME)


def _check_flag(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")


@dataclass
class SourceConfig:
    """Remote endpoint and cache settings."""

    url: str = DEFAULT_SOURCE_URL
    timeout: float = 3.0
    verify_tls: bool = True
    cache_file: str = field(default_factory=_default_cache_file)

    def __post_init__(self) -> None:
        """Validate source settings."""
        if not isinstance(self.url, str) or not self.url.strip():
            raise ValueError("url cannot be empty")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ValueError(f"timeout must be a number, got {self.timeout!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        _check_flag("verify_tls", self.verify_tls)
        if not isinstance(self.cache_file, str) or not self.cache_file:
            raise ValueError("cache_file cannot be empty")


@dataclass
class DecoderConfig:
    """Decoder behaviour."""

    strict: bool = False

    def __post_init__(self) -> None:
        _check_flag("strict", self.strict)


@dataclass
class QueryConfig:
    """Query facade behaviour."""

    skip_short_history: bool = True

    def __post_init__(self) -> None:
        _check_flag("skip_short_history", self.skip_short_history)


@dataclass
class LoggingConfig:
    """Logging settings.

    ``file`` names an optional JSON-lines log file written in addition to stderr.
    """

    level: str = "WARNING"
    serialize: bool = False
    file: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.level, str) or self.level.strip().upper() not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}, got {self.level!r}")
        self.level = self.level.strip().upper()
        _check_flag("serialize", self.serialize)
        if self.file is not None and (not isinstance(self.file, str) or not self.file):
            raise ValueError("file must be a non-empty path")


@dataclass
class CovidTrackConfig:
    """Top level covidtrack configuration."""

    source: SourceConfig = field(default_factory=SourceConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any], path: Path | None = None) -> "CovidTrackConfig":
        """Build a configuration from a nested dictionary.

        Unknown keys and unusable values raise :class:`ConfigError`.
        """
        try:
            return cls(
                source=SourceConfig(**config_dict.get("source", {})),
                decoder=DecoderConfig(**config_dict.get("decoder", {})),
                query=QueryConfig(**config_dict.get("query", {})),
                logging=LoggingConfig(**config_dict.get("logging", {})),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"Invalid configuration: {exc}", path=str(path) if path else None
            ) from exc

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": asdict(self.source),
            "decoder": asdict(self.decoder),
            "query": asdict(self.query),
            "logging": asdict(self.logging),
        }


class ConfigManager:
    """Loads configuration from a TOML file and the environment."""

    def __init__(self, config_path: Path | None = None, environ: dict[str, str] | None = None):
        """Initialise the manager.

        Args:
            config_path: TOML file to read; defaults to ``~/.covidtrack/config.toml``
            environ: environment mapping; defaults to ``os.environ``
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.environ = os.environ if environ is None else environ
        self.config = self._load_config()

    def _load_config(self) -> CovidTrackConfig:
        config_dict: dict[str, Any] = {}
        loaded_from: Path | None = None
        if self.config_path.exists():
            loaded_from = self.config_path
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise ConfigError(
                    f"Failed to load config from {self.config_path}: {exc}", path=str(self.config_path)
                ) from exc

        deep_update(config_dict, load_config_from_env(self.environ))
        return CovidTrackConfig.from_dict(config_dict, loaded_from)

    def get_config(self) -> CovidTrackConfig:
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Apply nested overrides, e.g. ``update_config(source={"timeout": 5})``."""
        config_dict = self.config.to_dict()
        deep_update(config_dict, updates)
        self.config = CovidTrackConfig.from_dict(config_dict)


def deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_config_from_env(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Collect configuration overrides from ``COVIDTRACK_*`` environment variables."""
    env = os.environ if environ is None else environ
    config: dict[str, Any] = {}

    source_config: dict[str, Any] = {}
    if env.get("COVIDTRACK_SOURCE_URL"):
        source_config["url"] = env["COVIDTRACK_SOURCE_URL"]
    timeout = env.get("COVIDTRACK_SOURCE_TIMEOUT")
    if timeout is not None:
        try:
            source_config["timeout"] = float(timeout)
        except ValueError as exc:
            raise ConfigError(f"COVIDTRACK_SOURCE_TIMEOUT must be a number, got {timeout!r}") from exc
    verify_tls = env.get("COVIDTRACK_SOURCE_VERIFY_TLS")
    if verify_tls is not None:
        source_config["verify_tls"] = _as_bool(verify_tls)
    if env.get("COVIDTRACK_CACHE_FILE"):
        source_config["cache_file"] = env["COVIDTRACK_CACHE_FILE"]
    if source_config:
        config["source"] = source_config

    strict = env.get("COVIDTRACK_DECODER_STRICT")
    if strict is not None:
        config["decoder"] = {"strict": _as_bool(strict)}

    skip_short = env.get("COVIDTRACK_QUERY_SKIP_SHORT_HISTORY")
    if skip_short is not None:
        config["query"] = {"skip_short_history": _as_bool(skip_short)}

    logging_config: dict[str, Any] = {}
    if env.get("COVIDTRACK_LOGGING_LEVEL"):
        logging_config["level"] = env["COVIDTRACK_LOGGING_LEVEL"]
    if env.get("COVIDTRACK_LOGGING_FILE"):
        logging_config["file"] = env["COVIDTRACK_LOGGING_FILE"]
    if logging_config:
        config["logging"] = logging_config

    return config
