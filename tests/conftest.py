"""Pytest configuration for the covidtrack test suite."""

from __future__ import annotations

import json
from typing import Any

import pytest

from covidtrack.core.logging import configure_logging
from covidtrack.core.models import DailyRecord, Dataset


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--covidtrack-run-integration",
        action="store_true",
        default=False,
        help="Run covidtrack integration tests that require network access.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: marks covidtrack tests requiring network access",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--covidtrack-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --covidtrack-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    # CLI runs point loguru at a stream that is closed after the invocation
    configure_logging("WARNING")


def record(day: str, confirmed: int, deaths: int = 0, recovered: int = 0) -> dict[str, Any]:
    return {"date": day, "confirmed": confirmed, "deaths": deaths, "recovered": recovered}


def make_dataset(raw: dict[str, list[dict[str, Any]]]) -> Dataset:
    return Dataset({country: tuple(DailyRecord(**item) for item in items) for country, items in raw.items()})


SAMPLE_DOCUMENT: dict[str, list[dict[str, Any]]] = {
    "Italy": [
        record("2020-3-1", 1000, 30, 50),
        record("2020-3-2", 1500, 40, 80),
        record("2020-3-3", 2100, 55, 120),
    ],
    "Brazil": [
        record("2020-3-2", 10, 0, 0),
        record("2020-3-3", 25, 1, 2),
    ],
    "China": [
        record("2020-2-29", 79000, 2800, 40000),
        record("2020-3-1", 79500, 2870, 42000),
        record("2020-3-2", 80000, 2900, 45000),
        record("2020-3-3", 80200, 2940, 47000),
    ],
    "Andorra": [
        record("2020-3-3", 1, 0, 0),
    ],
}


@pytest.fixture
def sample_document() -> dict[str, list[dict[str, Any]]]:
    return json.loads(json.dumps(SAMPLE_DOCUMENT))


@pytest.fixture
def sample_bytes(sample_document) -> bytes:
    return json.dumps(sample_document).encode("utf-8")


@pytest.fixture
def sample_dataset(sample_document) -> Dataset:
    return make_dataset(sample_document)


@pytest.fixture
def dataset_factory():
    return make_dataset


@pytest.fixture
def record_factory():
    return record
