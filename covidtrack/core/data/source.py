"""HTTP source client for the raw per-country time series."""

from __future__ import annotations

from pathlib import Path

import httpx

from covidtrack.core.config import SourceConfig
from covidtrack.core.exceptions import FetchError
from covidtrack.core.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = "covidtrack/0.1.0"


class SourceClient:
    """Retrieves the raw JSON document from the remote endpoint or the local cache copy.

    The client is synchronous: one request per call, no retries. A timeout or
    non-2xx response fails the call with :class:`FetchError`.
    """

    def __init__(self, config: SourceConfig | None = None, transport: httpx.BaseTransport | None = None):
        self.config = config or SourceConfig()
        self._transport = transport

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def cache_path(self) -> Path:
        return Path(self.config.cache_file)

    def _client(self) -> httpx.Client:
        if not self.config.verify_tls:
            logger.warning("TLS certificate verification is disabled for {}", self.url)
        return httpx.Client(
            timeout=httpx.Timeout(self.config.timeout),
            verify=self.config.verify_tls,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=self._transport,
        )

    def fetch(self, use_cache: bool = False) -> bytes:
        """Download the raw dataset.

        Args:
            use_cache: also persist the body verbatim to :attr:`cache_path`,
                replacing any earlier copy.

        Returns:
            The unparsed response body.
        """
        logger.debug("Fetching data from {}", self.url)
        try:
            with self._client() as client:
                response = client.get(self.url)
                response.raise_for_status()
                raw = response.content
        except httpx.TimeoutException as exc:
            raise FetchError(
                f"Timed out after {self.config.timeout}s fetching {self.url}", url=self.url
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(f"HTTP {status} fetching {self.url}", url=self.url, status_code=status) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {self.url} failed: {exc}", url=self.url) from exc

        logger.debug("Fetched {} bytes", len(raw))
        if use_cache:
            self._write_cache(raw)
        return raw

    def _write_cache(self, raw: bytes) -> None:
        path = self.cache_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(raw)
        except OSError as exc:
            raise FetchError(f"Unable to write cache file '{path}': {exc}", url=self.url) from exc
        logger.info("Cached dataset at {}", path)

    def load_cached(self) -> bytes:
        """Read the copy previously stored by ``fetch(use_cache=True)``."""
        path = self.cache_path
        logger.debug("Reading cached dataset from {}", path)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise FetchError(
                f"No cached dataset at '{path}'. Run 'covidtrack fetch' first.",
                details={"path": str(path)},
            ) from exc
        except OSError as exc:
            raise FetchError(f"Unable to read cache file '{path}': {exc}", details={"path": str(path)}) from exc


__all__ = ["SourceClient", "USER_AGENT"]
