from .configuration import build_kafka_configuration, build_kafka_consumer_configuration
from .consumer import KafkaConsumer, KafkaOffsetCommitter

__all__ = [
    "build_kafka_configuration",
    "build_kafka_consumer_configuration",
    "KafkaConsumer",
    "KafkaOffsetCommitter",
]
