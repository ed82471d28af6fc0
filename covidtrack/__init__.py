"""
covidtrack - track COVID-19 cases, deaths and recoveries from the command line.

Library usage:

    from covidtrack import ConfigManager, build_service

    service = build_service(ConfigManager().get_config())
    service.summary()
    service.country_detail("all", 10)
    service.windowed_series("Italy", 14)
"""

from covidtrack.core.config import ConfigManager, CovidTrackConfig
from covidtrack.core.data import SourceClient, decode
from covidtrack.core.exceptions import (
    CountryNotFoundError,
    CovidTrackError,
    DecodeError,
    FetchError,
    InsufficientHistoryError,
)
from covidtrack.core.models import Dataset, DailyRecord
from covidtrack.core.services import ALL_COUNTRIES, CovidQueryService, build_service, load_dataset

__version__ = "0.1.0"

__all__ = [
    "ALL_COUNTRIES",
    "ConfigManager",
    "CountryNotFoundError",
    "CovidQueryService",
    "CovidTrackConfig",
    "CovidTrackError",
    "DailyRecord",
    "Dataset",
    "DecodeError",
    "FetchError",
    "InsufficientHistoryError",
    "SourceClient",
    "build_service",
    "decode",
    "load_dataset",
    "__version__",
]
