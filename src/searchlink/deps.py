"""Default dependencies — The process-wide search client provider.

Host services either inject their own ``SearchClientProvider`` with
``set_search_provider()`` (usually from their lifespan hook) or let the first
caller create one from ``get_settings()``.
"""

from __future__ import annotations

from searchlink.config.settings import get_settings
from searchlink.search.client import SearchClient, SearchClientProvider
from searchlink.search.entities import EntityStore

_provider: SearchClientProvider | None = None
_entity_store: EntityStore | None = None


def set_search_provider(provider: SearchClientProvider | None) -> None:
    """Install the default provider (None clears it)."""
    global _provider, _entity_store
    _provider = provider
    _entity_store = None


def get_search_provider() -> SearchClientProvider:
    """Return the default provider, creating it from settings on first use."""
    global _provider
    if _provider is None:
        _provider = SearchClientProvider(get_settings().search)
    return _provider


def get_entity_store() -> EntityStore:
    """Return the entity store bound to the default provider."""
    global _entity_store
    if _entity_store is None:
        _entity_store = EntityStore(get_search_provider())
    return _entity_store


async def acquire_search_client() -> SearchClient:
    """Return the shared search client, building it on first call."""
    return await get_search_provider().acquire()
