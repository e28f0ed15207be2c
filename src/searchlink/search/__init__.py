"""Search backend access — Serialized client, provider and entity accessors."""

from searchlink.search.client import SearchClient, SearchClientProvider, TransportVariant, is_managed_cloud_host
from searchlink.search.entities import (
    EntityStore,
    get_organization,
    get_user,
    update_organization,
    update_user,
)
from searchlink.search.transport import SerializedTransport

__all__ = [
    "EntityStore",
    "SearchClient",
    "SearchClientProvider",
    "SerializedTransport",
    "TransportVariant",
    "get_organization",
    "get_user",
    "is_managed_cloud_host",
    "update_organization",
    "update_user",
]
