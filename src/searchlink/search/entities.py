"""Entity accessors — Read and partially update user and organization documents.

Each call acquires the shared search client and performs exactly one request.
Nothing is cached, and backend errors (``opensearchpy.NotFoundError``,
``opensearchpy.ConnectionError``, ...) reach the caller unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from searchlink.config.settings import SearchSettings
    from searchlink.search.client import SearchClientProvider


class EntityStore:
    """User and organization documents stored in the search backend.

    Args:
        provider: Supplies the shared, request-serialized search client.
        settings: Index (and optional document type) names. Defaults to the
            provider's settings.
    """

    def __init__(self, provider: SearchClientProvider, settings: SearchSettings | None = None) -> None:
        self._provider = provider
        self._settings = settings or provider.settings

    async def get_user(self, user_id: str) -> dict[str, Any]:
        """Return the stored user document."""
        client = await self._provider.acquire()
        return await client.get_source(self._settings.user_index, user_id, self._settings.user_type)

    async def update_user(self, user_id: str, body: dict[str, Any]) -> None:
        """Merge ``body`` into the stored user document."""
        client = await self._provider.acquire()
        await client.update(self._settings.user_index, user_id, body, self._settings.user_type)

    async def get_organization(self, organization_id: str) -> dict[str, Any]:
        """Return the stored organization document."""
        client = await self._provider.acquire()
        return await client.get_source(
            self._settings.organization_index, organization_id, self._settings.organization_type
        )

    async def update_organization(self, organization_id: str, body: dict[str, Any]) -> None:
        """Merge ``body`` into the stored organization document."""
        client = await self._provider.acquire()
        await client.update(
            self._settings.organization_index, organization_id, body, self._settings.organization_type
        )


# Module-level shortcuts bound to the default provider in ``searchlink.deps``.


async def get_user(user_id: str) -> dict[str, Any]:
    from searchlink.deps import get_entity_store

    return await get_entity_store().get_user(user_id)


async def update_user(user_id: str, body: dict[str, Any]) -> None:
    from searchlink.deps import get_entity_store

    await get_entity_store().update_user(user_id, body)


async def get_organization(organization_id: str) -> dict[str, Any]:
    from searchlink.deps import get_entity_store

    return await get_entity_store().get_organization(organization_id)


async def update_organization(organization_id: str, body: dict[str, Any]) -> None:
    from searchlink.deps import get_entity_store

    await get_entity_store().update_organization(organization_id, body)
