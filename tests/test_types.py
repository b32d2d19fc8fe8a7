from typing import Any

import pytest

from tributary.types import OffsetDescriptor, Partition, Topic


def test_partition_ordering() -> None:
    assert Partition(Topic("a"), 1) < Partition(Topic("a"), 2)
    assert Partition(Topic("a"), 2) < Partition(Topic("b"), 0)
    assert {Partition(Topic("a"), 1), Partition(Topic("a"), 1)} == {
        Partition(Topic("a"), 1)
    }


def test_offset_descriptor() -> None:
    descriptor = OffsetDescriptor("topic", 1, 5)

    assert descriptor == OffsetDescriptor("topic", 1, 5)
    assert descriptor != OffsetDescriptor("topic", 1, 6)

    # Hashable
    _ = {descriptor}


@pytest.mark.parametrize(
    "topic, partition, offset",
    [
        (b"topic", 0, 0),
        (None, 0, 0),
        ("topic", "0", 0),
        ("topic", 0, 1.5),
        ("topic", True, 0),
        ("topic", 0, False),
    ],
)
def test_offset_descriptor_rejects_wrong_types(
    topic: Any, partition: Any, offset: Any
) -> None:
    with pytest.raises(TypeError):
        OffsetDescriptor(topic, partition, offset)


@pytest.mark.parametrize("partition, offset", [(-1, 0), (0, -1)])
def test_offset_descriptor_rejects_negative_values(partition: int, offset: int) -> None:
    with pytest.raises(ValueError):
        OffsetDescriptor("topic", partition, offset)
