from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, Optional, Sequence, TypeVar, cast

from confluent_kafka import Consumer as ConfluentConsumer
from confluent_kafka import KafkaError, KafkaException
from confluent_kafka import Message as ConfluentMessage
from confluent_kafka import TopicPartition as ConfluentTopicPartition

from tributary.backends.kafka.configuration import KafkaBrokerConfig
from tributary.commit import (
    DEFAULT_COMMIT_INTERVAL_MS,
    CommitManager,
    create_commit_manager,
)
from tributary.errors import ConsumerError
from tributary.types import OffsetDescriptor, Topic
from tributary.utils.clock import Clock
from tributary.utils.logging import handle_internal_error
from tributary.utils.metrics import get_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _rdkafka_callback(f: F) -> F:
    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.time()
        try:
            return f(*args, **kwargs)
        except Exception as e:
            handle_internal_error(e)
            logger.exception(f"{f.__name__} crashed")
            raise
        finally:
            get_metrics().timing(
                "tributary.consumer.run.callback",
                time.time() - start_time,
                tags={"callback_name": f.__name__},
            )

    return cast(F, wrapper)


class KafkaOffsetCommitter:
    """
    Commits batches of offsets synchronously through a confluent-kafka
    consumer.

    Offsets are committed as reported unless ``commit_next_offset`` is set,
    in which case ``offset + 1`` is committed. Kafka treats a committed
    offset as the next offset to consume, so consumers that report the offset
    of the last processed message usually want ``commit_next_offset``.
    """

    def __init__(
        self, consumer: ConfluentConsumer, commit_next_offset: bool = False
    ) -> None:
        self.__consumer = consumer
        self.__commit_next_offset = commit_next_offset

    def commit(self, offsets: Sequence[OffsetDescriptor]) -> None:
        delta = 1 if self.__commit_next_offset else 0
        result = self.__consumer.commit(
            offsets=[
                ConfluentTopicPartition(o.topic, o.partition, o.offset + delta)
                for o in offsets
            ],
            asynchronous=False,
        )

        for partition in result or []:
            if partition.error is not None:
                raise KafkaException(partition.error)


class KafkaConsumer:
    """
    A confluent-kafka consumer whose offsets are committed in batches by a
    ``CommitManager``.

    Call ``ready_to_commit`` for every message once it has been processed.
    Deferred commits run from ``poll``, and everything pending is committed
    when partitions are revoked and when the consumer is closed.
    """

    def __init__(
        self,
        configuration: KafkaBrokerConfig,
        commit_interval_ms: int = DEFAULT_COMMIT_INTERVAL_MS,
        commit_next_offset: bool = False,
        clock: Optional[Clock] = None,
    ) -> None:
        configuration = dict(configuration)

        for key in ("enable.auto.commit", "enable.auto.offset.store"):
            if str(configuration.get(key, "false")).lower() not in ("false", "0"):
                raise ValueError(f"{key} must be disabled")
            configuration[key] = False

        self.__consumer = ConfluentConsumer(configuration)
        self.__commit_manager: CommitManager = create_commit_manager(
            KafkaOffsetCommitter(self.__consumer, commit_next_offset),
            commit_interval_ms,
            clock,
        )
        self.__closed = False

    @property
    def commit_manager(self) -> CommitManager:
        return self.__commit_manager

    def subscribe(self, topics: Sequence[Topic]) -> None:
        if self.__closed:
            raise RuntimeError("consumer is closed")

        @_rdkafka_callback
        def on_partitions_assigned(
            consumer: ConfluentConsumer, partitions: Sequence[ConfluentTopicPartition]
        ) -> None:
            logger.info(
                "New partitions assigned: %r",
                [(p.topic, p.partition) for p in partitions],
            )
            get_metrics().increment(
                "tributary.consumer.partitions_assigned.count", len(partitions)
            )

        @_rdkafka_callback
        def on_partitions_revoked(
            consumer: ConfluentConsumer, partitions: Sequence[ConfluentTopicPartition]
        ) -> None:
            logger.info(
                "Partitions to revoke: %r",
                [(p.topic, p.partition) for p in partitions],
            )
            get_metrics().increment(
                "tributary.consumer.partitions_revoked.count", len(partitions)
            )
            self.__commit_manager.on_rebalance()
            logger.info("Partition revocation complete.")

        self.__consumer.subscribe(
            [topic.name for topic in topics],
            on_assign=on_partitions_assigned,
            on_revoke=on_partitions_revoked,
        )

    def poll(self, timeout: Optional[float] = None) -> Optional[ConfluentMessage]:
        """
        Run any deferred commit that is due, then return the next message or
        ``None`` if no message arrived within ``timeout`` seconds.

        Raises ``ConsumerError`` if the broker reports an error.
        """
        if self.__closed:
            raise RuntimeError("consumer is closed")

        self.__commit_manager.poll()

        message: Optional[ConfluentMessage]
        if timeout is None:
            message = self.__consumer.poll()
        else:
            message = self.__consumer.poll(timeout)
        if message is None:
            return None

        error: Optional[KafkaError] = message.error()
        if error is not None:
            if error.code() == KafkaError._PARTITION_EOF:
                return None
            raise ConsumerError(str(error))

        return message

    def ready_to_commit(self, message: ConfluentMessage) -> None:
        self.__commit_manager.ready_to_commit(
            OffsetDescriptor(message.topic(), message.partition(), message.offset())
        )

    def close(self) -> None:
        """
        Commit everything pending and close the underlying consumer. Safe to
        call more than once.
        """
        if self.__closed:
            return

        try:
            self.__commit_manager.on_rebalance()
        finally:
            self.__closed = True
            self.__consumer.close()
