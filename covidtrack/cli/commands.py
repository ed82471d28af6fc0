"""Command implementations for the covidtrack CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from covidtrack.core.config import CovidTrackConfig
from covidtrack.core.data.source import SourceClient
from covidtrack.core.exceptions import DecodeError, FetchError, QueryError
from covidtrack.core.services import ALL_COUNTRIES, CovidQueryService, build_service

from .charts import ChartType, render_chart
from .constants import (
    DECODE_EXIT_CODE,
    DEFAULT_CHART_MAX,
    DEFAULT_SUMMARY_MAX,
    FETCH_EXIT_CODE,
    VALIDATION_EXIT_CODE,
)
from .formatters import COUNTRY_COLUMNS, SERIES_COLUMNS, SNAPSHOT_COLUMNS, TOTAL_COLUMNS, TableFormatter
from .utils import fail, prepare_output


def get_source_client(config: CovidTrackConfig) -> SourceClient:
    """Factory hook for obtaining a :class:`SourceClient`."""

    return SourceClient(config.source)


def get_query_service(config: CovidTrackConfig, *, offline: bool = False) -> CovidQueryService:
    """Factory hook for obtaining a :class:`CovidQueryService` for one invocation."""

    return build_service(config, offline=offline, client=get_source_client(config))


def register(app: typer.Typer) -> None:
    """Register commands (and their short aliases) on ``app``."""

    app.command("summary", help="Show per-country cases, deaths and recoveries with daily changes.")(summary_command)
    app.command("s", hidden=True)(summary_command)
    app.command("fetch", help="Fetch the dataset into the temp directory for offline use.")(fetch_command)
    app.command("f", hidden=True)(fetch_command)
    app.command("chart", help="Draw a chart of cases, deaths and recoveries over the last days.")(chart_command)
    app.command("c", hidden=True)(chart_command)
    app.command("countries", help="List country names in alphabetical order.")(countries_command)


def _load_service(ctx: typer.Context) -> CovidQueryService:
    _, _, options = prepare_output(ctx)
    try:
        return get_query_service(options.config, offline=options.offline)
    except FetchError as error:
        raise fail(error, FETCH_EXIT_CODE, fatal=True) from error
    except DecodeError as error:
        raise fail(error, DECODE_EXIT_CODE, fatal=True) from error


def totals_command(ctx: typer.Context) -> None:
    """Print dataset-wide totals of the latest counts."""

    formatter, stream, _ = prepare_output(ctx)
    service = _load_service(ctx)
    totals = service.summary()
    formatter.render([totals], stream=stream, columns=TOTAL_COLUMNS, title="Latest totals")


def summary_command(
    ctx: typer.Context,
    country: str = typer.Option(
        ALL_COUNTRIES,
        "--country",
        "-c",
        help="Country name to summarise, or 'all' for the top countries.",
    ),
    max_rows: int = typer.Option(
        DEFAULT_SUMMARY_MAX,
        "--max",
        "-m",
        min=1,
        help="Maximum number of countries printed for 'all'.",
    ),
) -> None:
    """Show per-country cases, deaths and recoveries with daily changes."""

    formatter, stream, _ = prepare_output(ctx)
    service = _load_service(ctx)
    try:
        rows = service.country_detail(country, max_rows)
    except QueryError as error:
        raise fail(error, VALIDATION_EXIT_CODE) from error
    formatter.render(rows, stream=stream, columns=SNAPSHOT_COLUMNS)


def fetch_command(ctx: typer.Context) -> None:
    """Fetch the dataset into the temp directory for offline use."""

    _, _, options = prepare_output(ctx)
    client = get_source_client(options.config)
    try:
        client.fetch(use_cache=True)
    except FetchError as error:
        raise fail(error, FETCH_EXIT_CODE, fatal=True) from error
    typer.echo(f"File fetched in path: {client.cache_path}")


def chart_command(
    ctx: typer.Context,
    country: str = typer.Option(
        ALL_COUNTRIES,
        "--country",
        "-c",
        help="Country name to chart, or 'all' for every country summed by date.",
    ),
    max_days: int = typer.Option(
        DEFAULT_CHART_MAX,
        "--max",
        "-m",
        min=1,
        help="Number of most recent days to chart.",
    ),
    chart_type: ChartType = typer.Option(
        ChartType.BAR,
        "--type",
        "-t",
        case_sensitive=False,
        help="Chart type.",
    ),
) -> None:
    """Draw a chart of cases, deaths and recoveries over the last days."""

    formatter, stream, options = prepare_output(ctx)
    service = _load_service(ctx)
    try:
        series = service.windowed_series(country, max_days)
    except QueryError as error:
        raise fail(error, VALIDATION_EXIT_CODE) from error

    if not isinstance(formatter, TableFormatter):
        formatter.render(series.points, stream=stream, columns=SERIES_COLUMNS)
        return

    console = Console(
        file=stream,
        color_system=None if options.no_color else "auto",
        no_color=options.no_color,
    )
    render_chart(series, chart_type, console)


def countries_command(
    ctx: typer.Context,
    prefix: str = typer.Option("", "--prefix", "-p", help="Only list names starting with this prefix."),
) -> None:
    """List country names in alphabetical order."""

    formatter, stream, _ = prepare_output(ctx)
    service = _load_service(ctx)
    names = service.countries(prefix)
    formatter.render([{"country": name} for name in names], stream=stream, columns=COUNTRY_COLUMNS)


__all__ = [
    "chart_command",
    "countries_command",
    "fetch_command",
    "get_query_service",
    "get_source_client",
    "register",
    "summary_command",
    "totals_command",
]
