"""Terminal bar and line charts for a :class:`WindowedSeries`, drawn with Rich."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from covidtrack.core.models import WindowedSeries

BAR_CHAR = "█"
LINE_MARKER = "●"
BAR_WIDTH = 40
LINE_HEIGHT = 12

# (attribute, title, colour)
METRICS: tuple[tuple[str, str, str], ...] = (
    ("confirmed", "Confirmed Case", "yellow"),
    ("deaths", "Deaths", "magenta"),
    ("recovered", "Recovered", "green"),
)


class ChartType(str, Enum):
    """Supported chart types."""

    BAR = "bar"
    LINE = "line"


def scale(values: Sequence[int], width: int) -> list[int]:
    """Scale ``values`` to integer lengths in ``[0, width]``, the maximum mapping to ``width``."""
    if width < 1:
        raise ValueError("width must be positive")
    peak = max(values, default=0)
    if peak <= 0:
        return [0 for _ in values]
    return [round(max(value, 0) * width / peak) for value in values]


def bar_chart(series: WindowedSeries, metric: str, title: str, colour: str) -> Panel:
    values: list[int] = getattr(series, metric)
    table = Table.grid(padding=(0, 1))
    table.add_column(style="blue", no_wrap=True)
    table.add_column(no_wrap=True)
    table.add_column(justify="right", no_wrap=True)
    for label, value, length in zip(series.labels, values, scale(values, BAR_WIDTH)):
        table.add_row(label, Text(BAR_CHAR * length, style=colour), f"{value:,}")
    return Panel(table, title=Text(f"{title} Chart [{series.country}]"), border_style=colour)


def line_chart(series: WindowedSeries, height: int = LINE_HEIGHT) -> Panel:
    """Plot all three metrics on one shared vertical scale."""
    columns = len(series)
    grid = [[" "] * columns for _ in range(height)]
    styles: list[list[str | None]] = [[None] * columns for _ in range(height)]
    peak = max([*series.confirmed, *series.deaths, *series.recovered], default=0)

    for metric, _, colour in METRICS:
        values: list[int] = getattr(series, metric)
        for column, value in enumerate(values):
            level = round(value * (height - 1) / peak) if peak > 0 else 0
            row = height - 1 - level
            grid[row][column] = LINE_MARKER
            styles[row][column] = colour

    body = Text()
    for row in range(height):
        for column in range(columns):
            body.append(grid[row][column] + " ", style=styles[row][column] or "")
        body.append("\n")
    if columns:
        body.append(f"{series.labels[0]} .. {series.labels[-1]}  (max {peak:,})", style="blue")

    legend = Text("SERIES ")
    for index, (_, title, colour) in enumerate(METRICS):
        if index:
            legend.append(", ")
        legend.append(title, style=colour)
    return Panel(
        Group(legend, body),
        title=Text(f"Case, Death, Recoveries Chart [{series.country}]"),
        border_style="yellow",
    )


def render_chart(series: WindowedSeries, chart_type: ChartType, console: Console) -> None:
    if not len(series):
        console.print("No data available.")
        return
    if chart_type is ChartType.LINE:
        console.print(line_chart(series))
        return
    for metric, title, colour in METRICS:
        console.print(bar_chart(series, metric, title, colour))


__all__ = ["ChartType", "bar_chart", "line_chart", "render_chart", "scale"]
