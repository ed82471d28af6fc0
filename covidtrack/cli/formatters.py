"""Table and JSON Lines renderers for query results."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Sequence, TextIO

from pydantic import BaseModel
from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table
from rich.text import Text

EMPTY_MESSAGE = "No data available."


@dataclass(frozen=True, slots=True)
class Column:
    """One output field: the record key, its table header and alignment.

    ``signed`` columns hold day-over-day changes and are printed with an
    explicit ``+``/``-`` in tables.
    """

    key: str
    header: str
    justify: str = "right"
    signed: bool = False


COUNTRY = Column("country", "Country", justify="left")
CONFIRMED = Column("confirmed", "Confirmed")
DEATHS = Column("deaths", "Deaths")
RECOVERED = Column("recovered", "Recovered")

TOTAL_COLUMNS = (CONFIRMED, DEATHS, RECOVERED)
SNAPSHOT_COLUMNS = (
    COUNTRY,
    CONFIRMED,
    DEATHS,
    RECOVERED,
    Column("new_confirmed", "New Cases", signed=True),
    Column("new_deaths", "New Deaths", signed=True),
    Column("new_recovered", "New Recoveries", signed=True),
)
SERIES_COLUMNS = (Column("date", "Date", justify="left"), CONFIRMED, DEATHS, RECOVERED)
COUNTRY_COLUMNS = (COUNTRY,)

Row = BaseModel | Mapping[str, object]


def _as_mapping(row: Row) -> Mapping[str, object]:
    if isinstance(row, BaseModel):
        return row.model_dump()
    return row


class OutputFormatter:
    """Base class for CLI output formatters."""

    name: str

    def render(
        self,
        rows: Iterable[Row],
        *,
        stream: TextIO,
        columns: Sequence[Column],
        title: str | None = None,
    ) -> None:
        """Write ``rows`` restricted to ``columns`` to ``stream``."""

        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render rows as a Rich table with thousands separators."""

    name: str = "table"
    no_color: bool = False

    def render(
        self,
        rows: Iterable[Row],
        *,
        stream: TextIO,
        columns: Sequence[Column],
        title: str | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        records = [_as_mapping(row) for row in rows]
        if not records:
            console.print(EMPTY_MESSAGE)
            return

        table = Table(box=SIMPLE, title=title, header_style="" if self.no_color else "bold")
        for column in columns:
            table.add_column(column.header, justify=column.justify)
        for record in records:
            table.add_row(*(self._cell(column, record.get(column.key)) for column in columns))
        console.print(table)

    def _cell(self, column: Column, value: object) -> Text:
        if value is None:
            return Text("-")
        if isinstance(value, int) and not isinstance(value, bool):
            return Text(f"{value:+,}" if column.signed else f"{value:,}")
        return Text(str(value))


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """Render one JSON object per row, keyed by column."""

    name: str = "jsonl"

    def render(
        self,
        rows: Iterable[Row],
        *,
        stream: TextIO,
        columns: Sequence[Column],
        title: str | None = None,
    ) -> None:
        for row in rows:
            record = _as_mapping(row)
            json.dump({column.key: record.get(column.key) for column in columns}, stream, ensure_ascii=False)
            stream.write("\n")
        stream.flush()


FORMATTERS: dict[str, Callable[[bool], OutputFormatter]] = {
    "table": lambda no_color: TableFormatter(no_color=no_color),
    "jsonl": lambda no_color: JSONLFormatter(),
}


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    factory = FORMATTERS.get(name.strip().lower())
    if factory is None:
        msg = f"Unsupported format '{name}'. Available formats: {', '.join(FORMATTERS)}."
        raise ValueError(msg)
    return factory(no_color)


__all__ = [
    "COUNTRY_COLUMNS",
    "SERIES_COLUMNS",
    "SNAPSHOT_COLUMNS",
    "TOTAL_COLUMNS",
    "Column",
    "JSONLFormatter",
    "OutputFormatter",
    "TableFormatter",
    "create_formatter",
]
