"""Decode the raw JSON document into a :class:`Dataset`."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from covidtrack.core.exceptions import DecodeError
from covidtrack.core.logging import get_logger
from covidtrack.core.models import DailyRecord, Dataset

logger = get_logger(__name__)


def decode(raw: bytes | str, *, strict: bool = False) -> Dataset:
    """Parse ``{country: [{date, confirmed, deaths, recovered}, ...]}``.

    Malformed elements are logged and skipped unless ``strict`` is set, in
    which case the first one raises :class:`DecodeError`. Countries left
    without any record are dropped.
    """
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Invalid JSON document: {exc}") from exc

    if not isinstance(document, dict):
        raise DecodeError(
            f"Expected a JSON object at top level, got {type(document).__name__}",
            details={"type": type(document).__name__},
        )

    series: dict[str, tuple[DailyRecord, ...]] = {}
    skipped = 0
    for country, items in document.items():
        if not isinstance(items, list):
            _reject(strict, country, f"expected an array of records, got {type(items).__name__}")
            continue

        records: list[DailyRecord] = []
        for position, item in enumerate(items):
            record = _decode_record(item, country, position, strict)
            if record is None:
                skipped += 1
                continue
            records.append(record)

        if not records:
            logger.warning("Dropping '{}': no valid records", country)
            continue
        series[country] = tuple(records)

    if skipped:
        logger.warning("Skipped {} malformed record(s)", skipped)
    logger.debug("Decoded {} countries", len(series))
    return Dataset(series)


def _decode_record(item: Any, country: str, position: int, strict: bool) -> DailyRecord | None:
    if not isinstance(item, dict):
        _reject(strict, country, f"record {position} is not an object", position)
        return None
    try:
        return DailyRecord.model_validate(item)
    except ValidationError as exc:
        fields = sorted({".".join(str(loc) for loc in error["loc"]) for error in exc.errors()})
        _reject(strict, country, f"record {position} has invalid field(s): {', '.join(fields)}", position)
        return None


def _reject(strict: bool, country: str, reason: str, position: int | None = None) -> None:
    if strict:
        details: dict[str, Any] = {"reason": reason}
        if position is not None:
            details["position"] = position
        raise DecodeError(f"Malformed data for '{country}': {reason}", country=country, details=details)
    logger.debug("Skipping malformed data for '{}': {}", country, reason)


__all__ = ["decode"]
