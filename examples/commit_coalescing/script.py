import logging
import signal
from typing import Any

from tributary.backends.kafka import KafkaConsumer, build_kafka_consumer_configuration
from tributary.types import Topic

logger = logging.getLogger(__name__)

TOPIC = Topic("raw-topic")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    consumer = KafkaConsumer(
        build_kafka_consumer_configuration(
            default_config={},
            group_id="coalescing-example",
            bootstrap_servers=["127.0.0.1:9092"],
        ),
        commit_interval_ms=5000,
        commit_next_offset=True,
    )
    consumer.subscribe([TOPIC])

    shutdown_requested = False

    def handler(signum: int, frame: Any) -> None:
        global shutdown_requested
        shutdown_requested = True

    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGTERM, handler)

    try:
        while not shutdown_requested:
            message = consumer.poll(1.0)
            if message is None:
                continue
            logger.info("Processed %r", message.value())
            consumer.ready_to_commit(message)
    finally:
        consumer.close()
