"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (when loaded through ``Settings.from_yaml``)
  2. Environment variables (SEARCHLINK_ prefix)
  3. Default values
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class SearchSettings(BaseModel):
    """Search backend (Elasticsearch / OpenSearch) configuration."""

    host: str = Field(default="http://localhost:9200", description="Search backend URL")
    api_version: str = Field(default="7.10", description="Backend API version the client targets")
    aws_region: str = Field(default="us-east-1", description="AWS region used to sign managed-cloud requests")
    managed_host_pattern: str = Field(
        default=r"amazonaws",
        description="Regex searched in the host to select the managed-cloud transport",
    )
    verify_certs: bool = Field(default=True, description="Whether to verify TLS certificates")

    user_index: str = Field(default="user", description="Index holding user documents")
    user_type: str | None = Field(default=None, description="Document type of users (legacy typed indices only)")
    organization_index: str = Field(default="organization", description="Index holding organization documents")
    organization_type: str | None = Field(
        default=None,
        description="Document type of organizations (legacy typed indices only)",
    )


class KafkaSettings(BaseModel):
    """Message-queue connection configuration."""

    url: str = Field(default="localhost:9092", description="Kafka connection string")
    group_id: str = Field(default="searchlink", description="Consumer group ID")
    client_cert: str | None = Field(default=None, description="PEM client certificate for TLS")
    client_cert_key: str | None = Field(default=None, description="PEM private key for the client certificate")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the SEARCHLINK_ prefix.
    Nested settings use double underscores: SEARCHLINK_SEARCH__HOST=https://...

    Example:
        SEARCHLINK_SEARCH__HOST=https://search-users.us-east-1.es.amazonaws.com
        SEARCHLINK_KAFKA__URL=kafka-1:9093
        SEARCHLINK_KAFKA__CLIENT_CERT="-----BEGIN CERTIFICATE-----..."
    """

    model_config = {
        "env_prefix": "SEARCHLINK_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    search: SearchSettings = Field(default_factory=SearchSettings)
    kafka: KafkaSettings = Field(default_factory=KafkaSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file win over environment variables; the
        environment still fills in everything the file leaves out.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once from the environment."""
    return Settings()
