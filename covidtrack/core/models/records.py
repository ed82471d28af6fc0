"""Decoded record and dataset models."""

import datetime as dt
from collections.abc import Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_FORMAT = "%Y-%m-%d"


def parse_day(value: str) -> dt.date:
    """Parse a ``YYYY-M-D`` date string; zero padding is optional."""
    return dt.datetime.strptime(value, DATE_FORMAT).date()


class DailyRecord(BaseModel):
    """Cumulative counts for one country on one date."""

    model_config = ConfigDict(frozen=True)

    date: str
    confirmed: int = Field(ge=0)
    deaths: int = Field(ge=0)
    recovered: int = Field(ge=0)

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        value = value.strip()
        parse_day(value)
        return value

    @property
    def day(self) -> dt.date:
        return parse_day(self.date)


CountrySeries = tuple[DailyRecord, ...]


class Dataset(Mapping[str, CountrySeries]):
    """Read-only mapping of country name to its non-empty daily series.

    Iteration follows the order in which countries were decoded.
    """

    def __init__(self, series: Mapping[str, CountrySeries] | None = None):
        self._series: dict[str, CountrySeries] = {}
        for country, records in (series or {}).items():
            records = tuple(records)
            if not records:
                raise ValueError(f"series for '{country}' is empty")
            self._series[country] = records

    def __getitem__(self, country: str) -> CountrySeries:
        return self._series[country]

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def __repr__(self) -> str:
        return f"Dataset(countries={len(self._series)})"

    def latest(self, country: str) -> DailyRecord:
        """Return the most recent record for ``country``."""
        return self._series[country][-1]


__all__ = ["DATE_FORMAT", "CountrySeries", "DailyRecord", "Dataset", "parse_day"]
