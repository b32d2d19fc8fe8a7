from typing import List, MutableMapping

from tributary.types import OffsetDescriptor, Partition


class PendingOffsetStore:
    """
    Holds the most recently reported, not yet committed offset for each
    (topic, partition) pair.

    A report for a pair that is already pending overwrites the previous
    offset. The store does not compare offsets: callers are expected to
    report offsets in increasing order per partition.
    """

    def __init__(self) -> None:
        self.__offsets: MutableMapping[str, MutableMapping[int, int]] = {}

    def __len__(self) -> int:
        return sum(len(partitions) for partitions in self.__offsets.values())

    def __contains__(self, partition: Partition) -> bool:
        return partition.index in self.__offsets.get(partition.topic.name, {})

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {len(self)} pending>"

    def record(self, descriptor: OffsetDescriptor) -> None:
        self.__offsets.setdefault(descriptor.topic, {})[
            descriptor.partition
        ] = descriptor.offset

    def drain(self) -> List[OffsetDescriptor]:
        """
        Return every pending offset and clear the store.

        Offsets are ordered by the order in which their topics were first
        recorded, then by the order of their partitions within the topic.
        """
        offsets, self.__offsets = self.__offsets, {}
        return [
            OffsetDescriptor(topic, partition, offset)
            for topic, partitions in offsets.items()
            for partition, offset in partitions.items()
        ]

    def is_empty(self) -> bool:
        return not self.__offsets
