"""Data models."""

from .records import CountrySeries, DailyRecord, Dataset, parse_day
from .views import CountrySnapshot, Delta, RankEntry, SeriesPoint, Totals, WindowedSeries

__all__ = [
    "CountrySeries",
    "CountrySnapshot",
    "DailyRecord",
    "Dataset",
    "Delta",
    "RankEntry",
    "SeriesPoint",
    "Totals",
    "WindowedSeries",
    "parse_day",
]
