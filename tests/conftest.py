"""Shared test fixtures and configuration."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from opensearchpy import AsyncOpenSearch

from searchlink.config.settings import KafkaSettings, SearchSettings, Settings
from searchlink.deps import set_search_provider
from searchlink.search.client import SearchClient, SearchClientProvider, TransportVariant


class RecordingTransport:
    """Stand-in for ``opensearchpy.AsyncTransport`` that records every request.

    Each request sleeps for ``delay`` seconds so overlapping calls would show up
    in ``max_in_flight``.
    """

    def __init__(self, hosts: Any = None, **kwargs: Any) -> None:
        self.hosts = hosts
        self.calls: list[tuple[str, str, Any]] = []
        self.responses: dict[tuple[str, str], Any] = {}
        self.errors: dict[tuple[str, str], Exception] = {}
        self.delay = 0.01
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def perform_request(
        self,
        method: str,
        url: str,
        params: Any = None,
        body: Any = None,
        timeout: Any = None,
        ignore: Any = (),
        headers: Any = None,
    ) -> Any:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.calls.append((method, url, body))
        try:
            await asyncio.sleep(self.delay)
            if (method, url) in self.errors:
                raise self.errors[(method, url)]
            return self.responses.get((method, url), {})
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def search_settings() -> SearchSettings:
    return SearchSettings(
        host="http://localhost:9200",
        api_version="7.10",
        user_index="users",
        organization_index="organizations",
    )


@pytest.fixture
def settings(search_settings: SearchSettings) -> Settings:
    """Create a test Settings instance without reading a .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        search=search_settings,
        kafka=KafkaSettings(url="kafka:9092", group_id="test-group"),
        observability={"log_level": "debug", "log_format": "console"},
    )


@pytest.fixture
def search_client(search_settings: SearchSettings) -> SearchClient:
    """A search client whose backend is a ``RecordingTransport``."""
    opensearch = AsyncOpenSearch(hosts=[search_settings.host], transport_class=RecordingTransport)
    return SearchClient(
        opensearch,
        host=search_settings.host,
        api_version=search_settings.api_version,
        variant=TransportVariant.STANDARD,
    )


@pytest.fixture
def backend(search_client: SearchClient) -> RecordingTransport:
    """The recording transport behind ``search_client``."""
    return search_client.transport.wrapped


@pytest.fixture
def provider(search_settings: SearchSettings, search_client: SearchClient) -> SearchClientProvider:
    return SearchClientProvider(search_settings, factory=lambda _settings: search_client)


@pytest.fixture
def default_provider(provider: SearchClientProvider):
    """Install ``provider`` as the process-wide default for the test's duration."""
    set_search_provider(provider)
    yield provider
    set_search_provider(None)
