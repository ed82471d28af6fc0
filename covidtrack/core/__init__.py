"""Core ingestion and query pipeline."""

from covidtrack.core.exceptions import (
    CountryNotFoundError,
    CovidTrackError,
    DecodeError,
    FetchError,
    InsufficientHistoryError,
)
from covidtrack.core.services import ALL_COUNTRIES, CovidQueryService, build_service

__all__ = [
    "ALL_COUNTRIES",
    "CountryNotFoundError",
    "CovidQueryService",
    "CovidTrackError",
    "DecodeError",
    "FetchError",
    "InsufficientHistoryError",
    "build_service",
]
