import json

from tributary.backends.kafka.configuration import (
    build_kafka_configuration,
    build_kafka_consumer_configuration,
    stats_callback,
)
from tests.metrics import Gauge, TestingMetricsBackend


def test_build_kafka_configuration() -> None:
    default_config = {"bootstrap.servers": "default:9092", "client.id": None}

    configuration = build_kafka_configuration(
        default_config,
        bootstrap_servers=["a:9092", "b:9092"],
        override_params={"session.timeout.ms": 10000},
    )

    assert configuration["bootstrap.servers"] == "a:9092,b:9092"
    assert configuration["session.timeout.ms"] == 10000
    assert "client.id" not in configuration
    assert "log_level" in configuration

    # The defaults are not modified.
    assert default_config == {"bootstrap.servers": "default:9092", "client.id": None}


def test_consumer_configuration_disables_auto_commit() -> None:
    configuration = build_kafka_consumer_configuration(
        {"bootstrap.servers": "localhost:9092"},
        group_id="test-group",
        override_params={"enable.auto.commit": True},
    )

    assert configuration["group.id"] == "test-group"
    assert configuration["enable.auto.commit"] is False
    assert configuration["enable.auto.offset.store"] is False
    assert configuration["auto.offset.reset"] == "earliest"
    assert configuration["stats_cb"] is stats_callback


def test_stats_callback() -> None:
    stats_callback(json.dumps({"replyq": 12}))

    assert TestingMetricsBackend.calls == [
        Gauge("tributary.consumer.librdkafka.total_queue_size", 12, None)
    ]
