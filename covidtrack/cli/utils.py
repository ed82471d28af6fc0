"""Helpers shared across CLI commands."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Mapping, Sequence, TextIO

import typer

from covidtrack.core.config import CovidTrackConfig
from covidtrack.core.exceptions import CovidTrackError
from covidtrack.core.logging import get_logger

from .formatters import OutputFormatter, create_formatter

logger = get_logger(__name__)


@dataclass(slots=True)
class CLIOptions:
    """Resolved options derived from the Typer context."""

    format: str = "table"
    no_color: bool = False
    offline: bool = False
    config: CovidTrackConfig = field(default_factory=CovidTrackConfig)


def get_cli_options(ctx: typer.Context) -> CLIOptions:
    """Extract :class:`CLIOptions` from the Typer context object."""

    ctx.ensure_object(dict)
    data = ctx.obj or {}
    return CLIOptions(
        format=str(data.get("format", "table")),
        no_color=bool(data.get("no_color", False)),
        offline=bool(data.get("offline", False)),
        config=data.get("config") or CovidTrackConfig(),
    )


def prepare_output(ctx: typer.Context) -> tuple[OutputFormatter, TextIO, CLIOptions]:
    """Resolve the formatter and output stream for the current command."""

    options = get_cli_options(ctx)
    formatter = create_formatter(options.format, no_color=options.no_color)
    return formatter, sys.stdout, options


def fail(error: CovidTrackError, exit_code: int, *, fatal: bool = False) -> typer.Exit:
    """Report ``error`` on stderr and build the matching :class:`typer.Exit`.

    Fatal errors are also logged; query errors are only reported.
    """

    if fatal:
        logger.error("{} ({})", error.message, error.error_code)
    emit_error(error.message, error.error_code, details=error.details)
    return typer.Exit(code=exit_code)


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


__all__ = ["CLIOptions", "get_cli_options", "prepare_output", "emit_error", "fail"]
