"""Data ingestion: source client, decoder and aggregator."""

from covidtrack.core.data.aggregator import (
    aggregate_across_countries,
    build_name_index,
    build_rank_index,
    compute_delta,
    latest_totals,
    window,
)
from covidtrack.core.data.decoder import decode
from covidtrack.core.data.source import SourceClient

__all__ = [
    "SourceClient",
    "aggregate_across_countries",
    "build_name_index",
    "build_rank_index",
    "compute_delta",
    "decode",
    "latest_totals",
    "window",
]
