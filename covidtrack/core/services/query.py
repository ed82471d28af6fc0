"""Read-only queries over one decoded dataset."""

from __future__ import annotations

from covidtrack.core.data.aggregator import (
    aggregate_across_countries,
    build_name_index,
    build_rank_index,
    compute_delta,
    latest_totals,
    window,
)
from covidtrack.core.exceptions import CountryNotFoundError, InsufficientHistoryError
from covidtrack.core.logging import get_logger
from covidtrack.core.models import (
    CountrySeries,
    CountrySnapshot,
    Dataset,
    RankEntry,
    SeriesPoint,
    Totals,
    WindowedSeries,
)

logger = get_logger(__name__)

ALL_COUNTRIES = "all"


class CovidQueryService:
    """Answers summary, detail and windowed-series queries.

    The service owns its dataset for the lifetime of one command; the name and
    rank indexes are built once here and never rebuilt.

    The name ``"all"`` always selects every country, so a dataset key spelled
    exactly ``"all"`` cannot be queried on its own.

    Args:
        dataset: decoded dataset
        skip_short_history: when listing all countries, skip (and log) those
            with a single record instead of raising
            :class:`InsufficientHistoryError`
    """

    def __init__(self, dataset: Dataset, *, skip_short_history: bool = True):
        self.dataset = dataset
        self.skip_short_history = skip_short_history
        self.name_index = build_name_index(dataset)
        self.rank_index = build_rank_index(dataset)

    def summary(self) -> Totals:
        return latest_totals(self.dataset)

    def countries(self, prefix: str = "") -> list[str]:
        """Country names in ascending order, optionally filtered by a case-insensitive prefix."""
        if not prefix:
            return list(self.name_index)
        needle = prefix.lower()
        return [name for name in self.name_index if name.lower().startswith(needle)]

    def ranking(self, limit: int) -> list[RankEntry]:
        _check_limit(limit, "limit")
        return self.rank_index[:limit]

    def country_detail(self, name: str, max_rows: int) -> list[CountrySnapshot]:
        """Latest counts with deltas for ``name`` or, for ``"all"``, the top ``max_rows`` countries."""
        _check_limit(max_rows, "max_rows")
        if name != ALL_COUNTRIES:
            return [self._snapshot(name)]

        rows: list[CountrySnapshot] = []
        for entry in self.rank_index:
            if len(rows) == max_rows:
                break
            try:
                rows.append(self._snapshot(entry.country))
            except InsufficientHistoryError as error:
                if not self.skip_short_history:
                    raise
                logger.warning("Skipping '{}': {}", entry.country, error.message)
        return rows

    def windowed_series(self, name: str, max_days: int) -> WindowedSeries:
        """The last ``max_days`` points for ``name`` (or all countries summed), oldest first."""
        _check_limit(max_days, "max_days")
        if name == ALL_COUNTRIES:
            points = aggregate_across_countries(self.dataset, max_days)
        else:
            points = [
                SeriesPoint(
                    date=record.date,
                    confirmed=record.confirmed,
                    deaths=record.deaths,
                    recovered=record.recovered,
                )
                for record in window(self._series(name), max_days)
            ]
        return WindowedSeries(country=name, points=tuple(points))

    def _series(self, name: str) -> CountrySeries:
        try:
            return self.dataset[name]
        except KeyError as exc:
            raise CountryNotFoundError(name) from exc

    def _snapshot(self, country: str) -> CountrySnapshot:
        delta = compute_delta(self._series(country), country)
        last = self.dataset.latest(country)
        return CountrySnapshot(
            country=country,
            confirmed=last.confirmed,
            deaths=last.deaths,
            recovered=last.recovered,
            new_confirmed=delta.new_confirmed,
            new_deaths=delta.new_deaths,
            new_recovered=delta.new_recovered,
        )


def _check_limit(value: int, name: str) -> None:
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


__all__ = ["ALL_COUNTRIES", "CovidQueryService"]
