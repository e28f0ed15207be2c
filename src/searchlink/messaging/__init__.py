"""Message-queue helpers."""

from searchlink.messaging.kafka import KafkaOptions, KafkaSSLOptions, build_kafka_options

__all__ = ["KafkaOptions", "KafkaSSLOptions", "build_kafka_options"]
