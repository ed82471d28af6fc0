from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from covidtrack.cli import commands as commands_module
from covidtrack.cli import main as main_module
from covidtrack.cli.main import create_app
from covidtrack.core.config import ConfigManager, CovidTrackConfig
from covidtrack.core.data.source import SourceClient


class StubEndpoint:
    def __init__(self, body: bytes, status: int = 200) -> None:
        self.body = body
        self.status = status
        self.configs: list[CovidTrackConfig] = []

    def client(self, config: CovidTrackConfig) -> SourceClient:
        self.configs.append(config)
        transport = httpx.MockTransport(lambda request: httpx.Response(self.status, content=self.body))
        return SourceClient(config.source, transport=transport)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cache_file(tmp_path: Path) -> Path:
    return tmp_path / "cache.json"


@pytest.fixture
def endpoint(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, cache_file: Path, sample_bytes: bytes) -> StubEndpoint:
    stub = StubEndpoint(sample_bytes)
    environ = {"COVIDTRACK_CACHE_FILE": str(cache_file)}
    monkeypatch.setattr(
        main_module,
        "get_config_manager",
        lambda path: ConfigManager(path or tmp_path / "missing.toml", environ=environ),
    )
    monkeypatch.setattr(commands_module, "get_source_client", stub.client)
    return stub


def _jsonl(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_default_prints_totals(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), [])

    assert result.exit_code == 0, result.output
    assert "82,326" in result.output
    assert "2,996" in result.output
    assert "47,122" in result.output


def test_default_totals_jsonl(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["--format", "jsonl"])

    assert result.exit_code == 0, result.output
    assert _jsonl(result.output) == [{"confirmed": 82326, "deaths": 2996, "recovered": 47122}]


def test_summary_all_table(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["summary"])

    assert result.exit_code == 0, result.output
    assert "China" in result.output
    assert "80,200" in result.output


def test_summary_all_skips_short_history(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "summary"])

    assert result.exit_code == 0, result.output
    assert [row["country"] for row in _jsonl(result.output)] == ["China", "Italy", "Brazil"]


def test_summary_all_jsonl_rank_order_and_max(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "summary", "--max", "2"])

    assert result.exit_code == 0, result.output
    rows = _jsonl(result.output)
    assert [row["country"] for row in rows] == ["China", "Italy"]
    assert rows[1]["new_confirmed"] == 600


def test_summary_alias_single_country(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "s", "-c", "Brazil"])

    assert result.exit_code == 0, result.output
    assert _jsonl(result.output) == [
        {
            "country": "Brazil",
            "confirmed": 25,
            "deaths": 1,
            "recovered": 2,
            "new_confirmed": 15,
            "new_deaths": 1,
            "new_recovered": 2,
        }
    ]


def test_summary_unknown_country(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["summary", "--country", "Atlantis"])

    assert result.exit_code == 2
    assert "COUNTRY_NOT_FOUND" in result.output
    assert "Atlantis" in result.output


def test_summary_short_history_country(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["summary", "-c", "Andorra"])

    assert result.exit_code == 2
    assert "INSUFFICIENT_HISTORY" in result.output


def test_summary_rejects_zero_max(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["summary", "-m", "0"])

    assert result.exit_code == 2


def test_fetch_error_exit_code(runner: CliRunner, endpoint: StubEndpoint) -> None:
    endpoint.status = 503

    result = runner.invoke(create_app(), ["summary"])

    assert result.exit_code == 3
    assert "FETCH_ERROR" in result.output


def test_decode_error_exit_code(runner: CliRunner, endpoint: StubEndpoint) -> None:
    endpoint.body = b"[1, 2, 3]"

    result = runner.invoke(create_app(), [])

    assert result.exit_code == 4
    assert "DECODE_ERROR" in result.output


def test_strict_flag(runner: CliRunner, endpoint: StubEndpoint) -> None:
    endpoint.body = b'{"A": [{"date": "2020-3-1", "confirmed": 1}]}'

    lenient = runner.invoke(create_app(), ["-f", "jsonl", "countries"])
    strict = runner.invoke(create_app(), ["--strict", "countries"])

    assert lenient.exit_code == 0, lenient.output
    assert _jsonl(lenient.output) == []
    assert strict.exit_code == 4


def test_fetch_writes_cache(runner: CliRunner, endpoint: StubEndpoint, cache_file: Path, sample_bytes: bytes) -> None:
    result = runner.invoke(create_app(), ["fetch"])

    assert result.exit_code == 0, result.output
    assert "File fetched in path:" in result.output
    assert cache_file.read_bytes() == sample_bytes


def test_fetch_failure(runner: CliRunner, endpoint: StubEndpoint, cache_file: Path) -> None:
    endpoint.status = 500

    result = runner.invoke(create_app(), ["f"])

    assert result.exit_code == 3
    assert not cache_file.exists()


def test_offline_reads_cache(runner: CliRunner, endpoint: StubEndpoint, cache_file: Path, sample_bytes: bytes) -> None:
    cache_file.write_bytes(sample_bytes)
    endpoint.status = 500

    result = runner.invoke(create_app(), ["--offline", "-f", "jsonl", "summary", "-c", "Italy"])

    assert result.exit_code == 0, result.output
    assert _jsonl(result.output)[0]["country"] == "Italy"


def test_offline_without_cache(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["--offline"])

    assert result.exit_code == 3
    assert "covidtrack fetch" in result.output


def test_insecure_flag_disables_tls_verification(runner: CliRunner, endpoint: StubEndpoint) -> None:
    runner.invoke(create_app(), ["--insecure", "countries"])
    runner.invoke(create_app(), ["countries"])

    assert endpoint.configs[0].source.verify_tls is False
    assert endpoint.configs[1].source.verify_tls is True


def test_chart_bar_default(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["--no-color", "chart"])

    assert result.exit_code == 0, result.output
    assert "Confirmed Case Chart [all]" in result.output
    assert "Recovered Chart [all]" in result.output


def test_chart_line(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["--no-color", "c", "-c", "China", "-t", "line", "-m", "3"])

    assert result.exit_code == 0, result.output
    assert "Case, Death, Recoveries Chart [China]" in result.output


def test_chart_jsonl_is_chronological(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "chart", "-c", "Italy", "-m", "2"])

    assert result.exit_code == 0, result.output
    assert [row["date"] for row in _jsonl(result.output)] == ["2020-3-2", "2020-3-3"]


def test_chart_unknown_country(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["chart", "-c", "Atlantis"])

    assert result.exit_code == 2
    assert "COUNTRY_NOT_FOUND" in result.output


def test_chart_invalid_type(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["chart", "-t", "pie"])

    assert result.exit_code == 2


def test_countries_prefix(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["-f", "jsonl", "countries", "-p", "b"])

    assert result.exit_code == 0, result.output
    assert _jsonl(result.output) == [{"country": "Brazil"}]


def test_invalid_format(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "summary"])

    assert result.exit_code == 2


def test_invalid_config_file(runner: CliRunner, endpoint: StubEndpoint, tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[source\n", encoding="utf-8")

    result = runner.invoke(create_app(), ["--config", str(config_path), "summary"])

    assert result.exit_code == 2
    assert "CONFIG_ERROR" in result.output


def test_verbose_emits_diagnostics(runner: CliRunner, endpoint: StubEndpoint) -> None:
    result = runner.invoke(create_app(), ["-v", "--no-color", "countries"])

    assert result.exit_code == 0, result.output
    assert "Fetching data from" in result.output


@pytest.mark.parametrize("setting", ["timeout = 0", 'timeout = "3"', "timeout = -2.5"])
def test_unusable_timeout_in_config(runner: CliRunner, endpoint: StubEndpoint, tmp_path: Path, setting: str) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(f"[source]\n{setting}\n", encoding="utf-8")

    result = runner.invoke(create_app(), ["--config", str(config_path), "summary"])

    assert result.exit_code == 2, result.output
    assert "CONFIG_ERROR" in result.output
    assert "timeout" in result.output
    assert endpoint.configs == []


def test_unknown_log_level_in_environment(
    runner: CliRunner, endpoint: StubEndpoint, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    environ = {"COVIDTRACK_LOGGING_LEVEL": "verbose"}
    monkeypatch.setattr(
        main_module,
        "get_config_manager",
        lambda path: ConfigManager(tmp_path / "missing.toml", environ=environ),
    )

    result = runner.invoke(create_app(), ["summary"])

    assert result.exit_code == 2, result.output
    assert "CONFIG_ERROR" in result.output


def test_log_file_setting(runner: CliRunner, endpoint: StubEndpoint, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "covidtrack.log"
    config_path = tmp_path / "config.toml"
    config_path.write_text(f'[logging]\nlevel = "debug"\nfile = "{log_file.as_posix()}"\n', encoding="utf-8")

    result = runner.invoke(create_app(), ["--config", str(config_path), "countries"])

    assert result.exit_code == 0, result.output
    messages = [json.loads(line)["message"] for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert any(message.startswith("Fetching data from") for message in messages)


def test_insecure_flag_reaches_http_client(
    runner: CliRunner, endpoint: StubEndpoint, monkeypatch: pytest.MonkeyPatch
) -> None:
    verify: list[object] = []
    real_client = httpx.Client

    def recording_client(**kwargs):
        verify.append(kwargs["verify"])
        return real_client(**kwargs)

    monkeypatch.setattr(httpx, "Client", recording_client)

    runner.invoke(create_app(), ["countries"])
    runner.invoke(create_app(), ["--insecure", "countries"])

    assert verify == [True, False]
