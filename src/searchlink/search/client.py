"""Search client — Lazily built, request-serialized OpenSearch/Elasticsearch client.

The backend is reached through ``opensearch-py``'s ``AsyncOpenSearch``. Two
transport variants exist:

  - ``STANDARD``: plain HTTP(S) to the configured host.
  - ``MANAGED_CLOUD``: AWS-hosted domains (host matches ``amazonaws``), with
    every request signed by SigV4 using credentials resolved by ``boto3``.

Whichever variant is built, its transport is wrapped in a
``SerializedTransport``, so only one request is in flight per client.

``SearchClientProvider`` owns the single client: it builds it on first
``acquire()`` under a one-shot construction lock and hands out the same
instance afterwards. A failed construction is logged, raised to the caller that
triggered it, and not remembered; the next ``acquire()`` tries again.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from opensearchpy import AsyncHttpConnection, AsyncOpenSearch, AWSV4SignerAsyncAuth
from opensearchpy.client.utils import _make_path

from searchlink.core.exceptions import SearchClientConstructionError
from searchlink.search.transport import SerializedTransport

if TYPE_CHECKING:
    import boto3

    from searchlink.config.settings import SearchSettings

logger = logging.getLogger(__name__)

# Service name AWS uses when signing requests to OpenSearch Service domains.
_AWS_SIGNING_SERVICE = "es"


class TransportVariant(str, Enum):
    """How the client reaches the backend."""

    STANDARD = "standard"
    MANAGED_CLOUD = "managed_cloud"


def is_managed_cloud_host(host: str, pattern: str = r"amazonaws") -> bool:
    """Return True when ``host`` points at a managed-cloud search domain."""
    return re.search(pattern, host) is not None


class SearchClient:
    """A search client whose requests are serialized.

    Args:
        opensearch: The underlying ``AsyncOpenSearch`` client. Its transport is
            wrapped in a ``SerializedTransport`` unless it already is one.
        host: Backend host the client was built for.
        api_version: Backend API version from configuration.
        variant: Transport variant used to build the client.
    """

    def __init__(
        self,
        opensearch: AsyncOpenSearch,
        *,
        host: str,
        api_version: str,
        variant: TransportVariant = TransportVariant.STANDARD,
    ) -> None:
        if not isinstance(opensearch.transport, SerializedTransport):
            opensearch.transport = SerializedTransport(opensearch.transport)
        self.opensearch = opensearch
        self.host = host
        self.api_version = api_version
        self.variant = variant

    @property
    def transport(self) -> SerializedTransport:
        return self.opensearch.transport

    @property
    def gate(self) -> asyncio.Lock:
        return self.transport.gate

    @classmethod
    def from_settings(cls, settings: SearchSettings, session: boto3.Session | None = None) -> SearchClient:
        """Build a client for the configured host, picking the transport variant.

        Args:
            settings: Search backend settings.
            session: boto3 session supplying AWS credentials for managed-cloud
                hosts. A session for ``settings.aws_region`` is created if omitted.

        Raises:
            ValueError: If AWS credentials or region cannot be resolved.
        """
        host = settings.host
        # The transport must not retry: each request reaches the backend once.
        client_kwargs: dict[str, Any] = {
            "hosts": [host],
            "verify_certs": settings.verify_certs,
            "ssl_show_warn": False,
            "max_retries": 0,
            "retry_on_timeout": False,
        }

        if is_managed_cloud_host(host, settings.managed_host_pattern):
            if session is None:
                import boto3

                session = boto3.Session(region_name=settings.aws_region)
            client_kwargs["http_auth"] = AWSV4SignerAsyncAuth(
                session.get_credentials(), settings.aws_region, _AWS_SIGNING_SERVICE
            )
            client_kwargs["use_ssl"] = True
            client_kwargs["connection_class"] = AsyncHttpConnection
            variant = TransportVariant.MANAGED_CLOUD
        else:
            variant = TransportVariant.STANDARD

        opensearch = AsyncOpenSearch(**client_kwargs)
        return cls(opensearch, host=host, api_version=settings.api_version, variant=variant)

    # ── Documents ────────────────────────────────────────────────────────

    async def get_source(self, index: str, doc_id: str, doc_type: str | None = None) -> dict[str, Any]:
        """Fetch the stored body of a document.

        Raises:
            opensearchpy.NotFoundError: If the document does not exist.
        """
        if doc_type:
            return await self.transport.perform_request("GET", _make_path(index, doc_type, doc_id, "_source"))
        return await self.opensearch.get_source(index=index, id=doc_id)

    async def update(self, index: str, doc_id: str, body: dict[str, Any], doc_type: str | None = None) -> None:
        """Merge ``body`` into the stored document (partial update)."""
        payload = {"doc": body}
        if doc_type:
            await self.transport.perform_request("POST", _make_path(index, doc_type, doc_id, "_update"), body=payload)
        else:
            await self.opensearch.update(index=index, id=doc_id, body=payload)

    async def close(self) -> None:
        """Close the underlying connections."""
        await self.opensearch.close()


ClientFactory = Callable[["SearchSettings"], "SearchClient | Awaitable[SearchClient]"]


class SearchClientProvider:
    """Owns the single ``SearchClient`` and builds it on first use.

    Args:
        settings: Search backend settings.
        factory: Builds the client from settings; may be sync or async.
            Defaults to ``SearchClient.from_settings``.

    Example:
        >>> provider = SearchClientProvider(settings.search)
        >>> client = await provider.acquire()
        >>> client is await provider.acquire()
        True
    """

    def __init__(self, settings: SearchSettings, factory: ClientFactory | None = None) -> None:
        self._settings = settings
        self._factory: ClientFactory = factory or SearchClient.from_settings
        self._client: SearchClient | None = None
        # Guards construction only; request serialization is the client's own gate.
        self._init_lock = asyncio.Lock()

    @property
    def settings(self) -> SearchSettings:
        return self._settings

    @property
    def client(self) -> SearchClient | None:
        """The committed client, or None before the first successful ``acquire()``."""
        return self._client

    async def acquire(self) -> SearchClient:
        """Return the client, building it on first call.

        Raises:
            SearchClientConstructionError: If building the client failed. The
                failure is not cached.
        """
        if self._client is not None:
            return self._client

        async with self._init_lock:
            if self._client is None:
                self._client = await self._construct()
            return self._client

    async def shutdown(self) -> None:
        """Close the client's connections at process exit."""
        if self._client is not None:
            await self._client.close()
            logger.info("Closed search client for %s", self._client.host)

    async def _construct(self) -> SearchClient:
        host = self._settings.host
        try:
            client = self._factory(self._settings)
            if inspect.isawaitable(client):
                client = await client
        except Exception as e:
            logger.exception("Failed to construct search client for %s", host)
            raise SearchClientConstructionError(f"Failed to construct search client for {host}: {e}", host) from e

        logger.info(
            "Search client ready: host=%s variant=%s api_version=%s",
            client.host,
            client.variant.value,
            client.api_version,
        )
        return client
