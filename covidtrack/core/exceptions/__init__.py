"""Exception handling module."""

from covidtrack.core.exceptions.base import (
    ConfigError,
    CountryNotFoundError,
    CovidTrackError,
    DecodeError,
    FetchError,
    InsufficientHistoryError,
    QueryError,
)

__all__ = [
    "CovidTrackError",
    "FetchError",
    "DecodeError",
    "QueryError",
    "CountryNotFoundError",
    "InsufficientHistoryError",
    "ConfigError",
]
