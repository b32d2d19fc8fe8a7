from typing import Literal

MetricName = Literal[
    # Counter: Number of commit calls issued to the broker client.
    "tributary.commit.count",
    # Counter: Number of flushes, tagged by what triggered them as 'trigger'.
    # Possible values are immediate, timer and rebalance.
    "tributary.commit.trigger",
    # Counter: Number of flushes that found nothing pending and skipped the
    # broker commit call.
    "tributary.commit.empty_flush",
    # Time: Number of partitions in a committed batch.
    "tributary.commit.batch_size",
    # Time: How long the broker client took to commit a batch, in seconds.
    "tributary.commit.time",
    # Time: A regular duration metric where each datapoint is measuring the time it
    # took to execute a single broker callback.
    #
    # The metric is tagged by the name of the internal callback function being
    # executed, as 'callback_name'. Possible values are on_partitions_assigned
    # and on_partitions_revoked.
    "tributary.consumer.run.callback",
    # Counter: How many partitions have been revoked just now.
    "tributary.consumer.partitions_revoked.count",
    # Counter: How many partitions have been assigned just now.
    "tributary.consumer.partitions_assigned.count",
    # Gauge: Queue size of background queue that librdkafka uses to prefetch messages.
    "tributary.consumer.librdkafka.total_queue_size",
]
