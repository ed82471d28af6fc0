"""Derived views handed to presentation code."""

from pydantic import BaseModel, ConfigDict


class Totals(BaseModel):
    """Summed counts across countries."""

    model_config = ConfigDict(frozen=True)

    confirmed: int = 0
    deaths: int = 0
    recovered: int = 0


class Delta(BaseModel):
    """Day-over-day change between the two most recent records."""

    model_config = ConfigDict(frozen=True)

    new_confirmed: int
    new_deaths: int
    new_recovered: int


class RankEntry(BaseModel):
    """A country and its latest confirmed count."""

    model_config = ConfigDict(frozen=True)

    country: str
    confirmed: int


class CountrySnapshot(BaseModel):
    """Latest counts plus deltas for one country."""

    model_config = ConfigDict(frozen=True)

    country: str
    confirmed: int
    deaths: int
    recovered: int
    new_confirmed: int
    new_deaths: int
    new_recovered: int


class SeriesPoint(BaseModel):
    """One dated point of a windowed series."""

    model_config = ConfigDict(frozen=True)

    date: str
    confirmed: int
    deaths: int
    recovered: int


class WindowedSeries(BaseModel):
    """Chronologically ordered points ready for charting."""

    model_config = ConfigDict(frozen=True)

    country: str
    points: tuple[SeriesPoint, ...] = ()

    @property
    def labels(self) -> list[str]:
        return [point.date for point in self.points]

    @property
    def confirmed(self) -> list[int]:
        return [point.confirmed for point in self.points]

    @property
    def deaths(self) -> list[int]:
        return [point.deaths for point in self.points]

    @property
    def recovered(self) -> list[int]:
        return [point.recovered for point in self.points]

    def __len__(self) -> int:
        return len(self.points)


__all__ = ["CountrySnapshot", "Delta", "RankEntry", "SeriesPoint", "Totals", "WindowedSeries"]
