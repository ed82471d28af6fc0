"""covidtrack core exception classes."""

from typing import Any


class CovidTrackError(Exception):
    """Base exception for covidtrack."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: human readable error message
            error_code: stable machine readable code
            details: extra context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class FetchError(CovidTrackError):
    """Retrieving the raw dataset failed (network, timeout, HTTP status or cache I/O)."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if url is not None:
            super_details["url"] = url
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, "FETCH_ERROR", super_details)
        self.url = url
        self.status_code = status_code


class DecodeError(CovidTrackError):
    """Raw bytes could not be decoded into a dataset."""

    def __init__(
        self,
        message: str,
        country: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if country is not None:
            super_details["country"] = country
        super().__init__(message, "DECODE_ERROR", super_details)
        self.country = country


class QueryError(CovidTrackError):
    """A query against a decoded dataset could not be answered."""

    def __init__(
        self,
        message: str,
        error_code: str = "QUERY_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)


class CountryNotFoundError(QueryError):
    """The requested country is not present in the dataset."""

    def __init__(self, country: str, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["country"] = country
        super().__init__(f"Country '{country}' not found in dataset", "COUNTRY_NOT_FOUND", super_details)
        self.country = country


class InsufficientHistoryError(QueryError):
    """A delta was requested for a series with fewer than two records."""

    def __init__(
        self,
        country: str | None,
        available: int,
        required: int = 2,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details.update({"country": country, "available": available, "required": required})
        label = f"'{country}'" if country else "series"
        super().__init__(
            f"Not enough history for {label}: {available} record(s), {required} required",
            "INSUFFICIENT_HISTORY",
            super_details,
        )
        self.country = country
        self.available = available
        self.required = required


class ConfigError(CovidTrackError):
    """Configuration file could not be read or parsed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if path is not None:
            super_details["path"] = path
        super().__init__(message, "CONFIG_ERROR", super_details)
        self.path = path
