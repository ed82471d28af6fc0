"""Main entry point for the covidtrack command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from covidtrack.core.config import ConfigManager
from covidtrack.core.exceptions import ConfigError
from covidtrack.core.logging import configure_logging, get_logger

from .commands import register as register_commands
from .commands import totals_command
from .constants import VALIDATION_EXIT_CODE
from .formatters import create_formatter
from .utils import fail

logger = get_logger(__name__)


def get_config_manager(config_path: Path | None) -> ConfigManager:
    """Factory hook for obtaining a :class:`ConfigManager`."""

    return ConfigManager(config_path)


def create_app() -> typer.Typer:
    """Create a Typer application instance for covidtrack."""

    app = typer.Typer(
        add_completion=False,
        help="Track COVID-19 cases, deaths and recoveries in the command line.",
    )

    @app.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostic messages."),
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        no_color: bool = typer.Option(False, "--no-color", help="Disable colorized output."),
        offline: bool = typer.Option(
            False,
            "--offline",
            help="Read the copy stored by 'fetch' instead of the network.",
        ),
        insecure: bool = typer.Option(
            False,
            "--insecure",
            help="Skip TLS certificate verification.",
        ),
        strict: bool = typer.Option(
            False,
            "--strict",
            help="Fail on malformed records instead of skipping them.",
        ),
        config_path: Path | None = typer.Option(
            None,
            "--config",
            help="Path to a TOML configuration file.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        overrides: dict[str, dict[str, object]] = {}
        if insecure:
            overrides["source"] = {"verify_tls": False}
        if strict:
            overrides["decoder"] = {"strict": True}
        try:
            manager = get_config_manager(config_path)
            if overrides:
                manager.update_config(**overrides)
        except ConfigError as error:
            raise fail(error, VALIDATION_EXIT_CODE) from error
        config = manager.get_config()

        try:
            configure_logging(
                "DEBUG" if verbose else config.logging.level,
                serialize=config.logging.serialize,
                colorize=not no_color,
                file_path=config.logging.file,
            )
        except OSError as exc:
            error = ConfigError(f"Cannot open log file: {exc}", path=config.logging.file)
            raise fail(error, VALIDATION_EXIT_CODE) from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "no_color": no_color,
                "offline": offline,
                "config": config,
            }
        )

        if ctx.invoked_subcommand is None:
            totals_command(ctx)

    register_commands(app)
    return app


app = create_app()


def run() -> None:
    """Console script entry point."""

    app()
