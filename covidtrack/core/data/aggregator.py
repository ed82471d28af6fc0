"""Indexes and derived metrics over a decoded :class:`Dataset`.

Every function here is pure: no I/O, no mutation of the dataset.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict

from covidtrack.core.exceptions import InsufficientHistoryError
from covidtrack.core.models import (
    CountrySeries,
    Dataset,
    Delta,
    RankEntry,
    SeriesPoint,
    Totals,
)


def build_name_index(dataset: Dataset) -> list[str]:
    """Country names in ascending ordinal (case-sensitive) order."""
    return sorted(dataset.keys())


def build_rank_index(dataset: Dataset) -> list[RankEntry]:
    """Countries ordered by latest confirmed count, highest first.

    The relative order of countries with equal counts is unspecified.
    """
    entries = [RankEntry(country=country, confirmed=dataset.latest(country).confirmed) for country in dataset]
    entries.sort(key=lambda entry: entry.confirmed, reverse=True)
    return entries


def compute_delta(series: CountrySeries, country: str | None = None) -> Delta:
    """Difference between the last two records of ``series``."""
    if len(series) < 2:
        raise InsufficientHistoryError(country, available=len(series))
    last, previous = series[-1], series[-2]
    return Delta(
        new_confirmed=last.confirmed - previous.confirmed,
        new_deaths=last.deaths - previous.deaths,
        new_recovered=last.recovered - previous.recovered,
    )


def latest_totals(dataset: Dataset) -> Totals:
    confirmed = deaths = recovered = 0
    for country in dataset:
        last = dataset.latest(country)
        confirmed += last.confirmed
        deaths += last.deaths
        recovered += last.recovered
    return Totals(confirmed=confirmed, deaths=deaths, recovered=recovered)


def window(series: CountrySeries, window_days: int) -> CountrySeries:
    """The most recent ``window_days`` records, oldest first."""
    _check_window(window_days)
    return series[-window_days:]


def aggregate_across_countries(dataset: Dataset, window_days: int) -> list[SeriesPoint]:
    """Sum each country's last ``window_days`` records, aligned by date string.

    A date contributes from every country that has a record for it, so series
    of different lengths still line up by calendar date. Points come back in
    chronological order.
    """
    _check_window(window_days)
    confirmed: dict[str, int] = defaultdict(int)
    deaths: dict[str, int] = defaultdict(int)
    recovered: dict[str, int] = defaultdict(int)
    days: dict[str, dt.date] = {}

    for series in dataset.values():
        for record in series[-window_days:]:
            if record.date not in days:
                days[record.date] = record.day
            confirmed[record.date] += record.confirmed
            deaths[record.date] += record.deaths
            recovered[record.date] += record.recovered

    return [
        SeriesPoint(date=label, confirmed=confirmed[label], deaths=deaths[label], recovered=recovered[label])
        for label in sorted(days, key=days.__getitem__)
    ]


def _check_window(window_days: int) -> None:
    if window_days < 1:
        raise ValueError(f"window must be at least 1 day, got {window_days}")


__all__ = [
    "aggregate_across_countries",
    "build_name_index",
    "build_rank_index",
    "compute_delta",
    "latest_totals",
    "window",
]
