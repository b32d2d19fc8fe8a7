from tributary.store import PendingOffsetStore
from tributary.types import OffsetDescriptor, Partition, Topic


def test_record_and_drain() -> None:
    store = PendingOffsetStore()
    assert store.is_empty()
    assert store.drain() == []

    store.record(OffsetDescriptor("abc", 1, 5))
    store.record(OffsetDescriptor("def", 2, 2))
    store.record(OffsetDescriptor("abc", 0, 7))

    assert not store.is_empty()
    assert len(store) == 3
    assert Partition(Topic("abc"), 0) in store
    assert Partition(Topic("abc"), 2) not in store

    # Topics in insertion order, then partitions in insertion order.
    assert store.drain() == [
        OffsetDescriptor("abc", 1, 5),
        OffsetDescriptor("abc", 0, 7),
        OffsetDescriptor("def", 2, 2),
    ]

    assert store.is_empty()
    assert len(store) == 0
    assert store.drain() == []


def test_last_write_wins() -> None:
    store = PendingOffsetStore()

    store.record(OffsetDescriptor("def", 2, 2))
    store.record(OffsetDescriptor("ghi", 3, 4))
    store.record(OffsetDescriptor("def", 2, 3))
    assert len(store) == 2

    # Lower offsets are not rejected.
    store.record(OffsetDescriptor("ghi", 3, 1))

    assert store.drain() == [
        OffsetDescriptor("def", 2, 3),
        OffsetDescriptor("ghi", 3, 1),
    ]


def test_drain_returns_independent_batches() -> None:
    store = PendingOffsetStore()

    store.record(OffsetDescriptor("abc", 1, 5))
    first = store.drain()
    store.record(OffsetDescriptor("abc", 1, 6))
    second = store.drain()

    assert first == [OffsetDescriptor("abc", 1, 5)]
    assert second == [OffsetDescriptor("abc", 1, 6)]
