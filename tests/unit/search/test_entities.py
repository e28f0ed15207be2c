"""Tests for the user and organization accessors."""

from __future__ import annotations

import asyncio

import pytest
from opensearchpy import ConnectionError as BackendConnectionError
from opensearchpy import NotFoundError

from searchlink.config.settings import SearchSettings
from searchlink.search import entities
from searchlink.search.client import SearchClient, SearchClientProvider
from searchlink.search.entities import EntityStore

USER_ID = "5f1c9a0e-3b7d-4e2a-9c6f-1a2b3c4d5e6f"
ORG_ID = "0b6f8a2c-9d41-4f3e-8a77-6c5d4e3f2a10"


@pytest.fixture
def store(provider: SearchClientProvider) -> EntityStore:
    return EntityStore(provider)


class TestGet:
    async def test_get_user_returns_source(self, store: EntityStore, backend) -> None:
        backend.responses[("GET", f"/users/_source/{USER_ID}")] = {"handle": "tonyj", "skills": []}

        user = await store.get_user(USER_ID)

        assert user == {"handle": "tonyj", "skills": []}
        assert backend.calls == [("GET", f"/users/_source/{USER_ID}", None)]

    async def test_get_organization_returns_source(self, store: EntityStore, backend) -> None:
        backend.responses[("GET", f"/organizations/_source/{ORG_ID}")] = {"name": "Acme"}

        assert await store.get_organization(ORG_ID) == {"name": "Acme"}

    async def test_not_found_propagates_unchanged(self, store: EntityStore, backend) -> None:
        missing = NotFoundError(404, "not_found", {"found": False})
        backend.errors[("GET", f"/users/_source/{USER_ID}")] = missing

        with pytest.raises(NotFoundError) as exc_info:
            await store.get_user(USER_ID)

        assert exc_info.value is missing
        assert len(backend.calls) == 1

    async def test_connection_error_is_not_retried(self, store: EntityStore, backend) -> None:
        failure = BackendConnectionError("N/A", "connection refused", OSError("refused"))
        backend.errors[("GET", f"/organizations/_source/{ORG_ID}")] = failure

        with pytest.raises(BackendConnectionError):
            await store.get_organization(ORG_ID)
        assert len(backend.calls) == 1

    async def test_reads_are_not_cached(self, store: EntityStore, backend) -> None:
        await store.get_user(USER_ID)
        await store.get_user(USER_ID)
        assert len(backend.calls) == 2


class TestUpdate:
    async def test_update_user_sends_one_partial_merge(self, store: EntityStore, backend) -> None:
        result = await store.update_user(USER_ID, {"handle": "tonyj2"})

        assert result is None
        assert backend.calls == [("POST", f"/users/_update/{USER_ID}", {"doc": {"handle": "tonyj2"}})]

    async def test_update_organization_sends_one_partial_merge(self, store: EntityStore, backend) -> None:
        await store.update_organization(ORG_ID, {"name": "Acme Corp"})

        assert backend.calls == [("POST", f"/organizations/_update/{ORG_ID}", {"doc": {"name": "Acme Corp"}})]


class TestTypedIndices:
    @pytest.fixture
    def typed_store(self, provider: SearchClientProvider) -> EntityStore:
        settings = SearchSettings(
            user_index="user",
            user_type="_doc",
            organization_index="organization",
            organization_type="organization",
        )
        return EntityStore(provider, settings)

    async def test_get_uses_typed_path(self, typed_store: EntityStore, backend) -> None:
        await typed_store.get_user(USER_ID)
        assert backend.calls == [("GET", f"/user/_doc/{USER_ID}/_source", None)]

    async def test_update_uses_typed_path(self, typed_store: EntityStore, backend) -> None:
        await typed_store.update_organization(ORG_ID, {"status": "active"})
        assert backend.calls == [
            ("POST", f"/organization/organization/{ORG_ID}/_update", {"doc": {"status": "active"}})
        ]

    async def test_typed_requests_are_serialized(self, typed_store: EntityStore, backend) -> None:
        await asyncio.gather(typed_store.get_user(USER_ID), typed_store.update_user(USER_ID, {"a": 1}))
        assert backend.max_in_flight == 1


class TestSerialization:
    async def test_concurrent_accessors_do_not_overlap(self, store: EntityStore, backend) -> None:
        await asyncio.gather(
            store.get_user(USER_ID),
            store.update_user(USER_ID, {"handle": "x"}),
            store.get_organization(ORG_ID),
            store.update_organization(ORG_ID, {"name": "y"}),
            *(store.get_user(USER_ID) for _ in range(6)),
        )

        assert len(backend.calls) == 10
        assert backend.max_in_flight == 1

    async def test_stores_sharing_a_provider_share_the_gate(
        self, provider: SearchClientProvider, search_client: SearchClient, backend
    ) -> None:
        first, second = EntityStore(provider), EntityStore(provider)

        await asyncio.gather(*(s.get_user(USER_ID) for s in (first, second, first, second)))

        assert backend.max_in_flight == 1
        assert provider.client is search_client


class TestModuleShortcuts:
    async def test_shortcuts_use_default_provider(self, default_provider: SearchClientProvider, backend) -> None:
        backend.responses[("GET", f"/users/_source/{USER_ID}")] = {"handle": "tonyj"}

        assert await entities.get_user(USER_ID) == {"handle": "tonyj"}
        await entities.update_user(USER_ID, {"handle": "t"})
        await entities.get_organization(ORG_ID)
        await entities.update_organization(ORG_ID, {"name": "n"})

        assert [call[:2] for call in backend.calls] == [
            ("GET", f"/users/_source/{USER_ID}"),
            ("POST", f"/users/_update/{USER_ID}"),
            ("GET", f"/organizations/_source/{ORG_ID}"),
            ("POST", f"/organizations/_update/{ORG_ID}"),
        ]
