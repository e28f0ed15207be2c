"""searchlink — Serialized search-backend access, Kafka options and payload helpers."""

__version__ = "0.1.0"
