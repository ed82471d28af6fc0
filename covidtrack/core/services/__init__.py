"""Query services."""

from covidtrack.core.services.pipeline import build_service, load_dataset
from covidtrack.core.services.query import ALL_COUNTRIES, CovidQueryService

__all__ = ["ALL_COUNTRIES", "CovidQueryService", "build_service", "load_dataset"]
