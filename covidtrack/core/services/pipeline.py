"""One-shot fetch, decode and query-service construction."""

from __future__ import annotations

from covidtrack.core.config import CovidTrackConfig
from covidtrack.core.data.decoder import decode
from covidtrack.core.data.source import SourceClient
from covidtrack.core.models import Dataset
from covidtrack.core.services.query import CovidQueryService


def load_dataset(
    config: CovidTrackConfig,
    *,
    offline: bool = False,
    client: SourceClient | None = None,
) -> Dataset:
    """Fetch (or read the cached copy of) the raw document and decode it."""
    source = client or SourceClient(config.source)
    raw = source.load_cached() if offline else source.fetch()
    return decode(raw, strict=config.decoder.strict)


def build_service(
    config: CovidTrackConfig,
    *,
    offline: bool = False,
    client: SourceClient | None = None,
) -> CovidQueryService:
    dataset = load_dataset(config, offline=offline, client=client)
    return CovidQueryService(dataset, skip_short_history=config.query.skip_short_history)


__all__ = ["build_service", "load_dataset"]
