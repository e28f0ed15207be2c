"""Kafka options — Connection settings handed to the message-queue client.

The options are rebuilt from configuration on every call. TLS credentials are
included only when both the client certificate and its key are configured.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from searchlink.config.settings import KafkaSettings, get_settings


class KafkaSSLOptions(BaseModel):
    """Client certificate and key for mutual TLS."""

    model_config = ConfigDict(frozen=True)

    cert: str = Field(description="PEM client certificate")
    key: str = Field(description="PEM private key")


class KafkaOptions(BaseModel):
    """Options consumed by the Kafka client.

    Serializes (``to_dict()``) to ``{"connectionString", "groupId", "ssl"?}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    connection_string: str = Field(alias="connectionString", description="Kafka connection string")
    group_id: str = Field(alias="groupId", description="Consumer group ID")
    ssl: KafkaSSLOptions | None = Field(default=None, description="TLS credentials, if configured")

    def to_dict(self) -> dict[str, Any]:
        """Return the wire shape; ``ssl`` is left out entirely when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


def build_kafka_options(settings: KafkaSettings | None = None) -> KafkaOptions:
    """Build Kafka options from configuration.

    Args:
        settings: Kafka settings. Reads ``get_settings().kafka`` if None.

    Returns:
        Fresh options; ``ssl`` is set only when both certificate and key are present.
    """
    kafka = settings if settings is not None else get_settings().kafka

    ssl = None
    if kafka.client_cert and kafka.client_cert_key:
        ssl = KafkaSSLOptions(cert=kafka.client_cert, key=kafka.client_cert_key)

    return KafkaOptions(connection_string=kafka.url, group_id=kafka.group_id, ssl=ssl)
