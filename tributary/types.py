from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(order=True, unsafe_hash=True)
class Topic:
    __slots__ = ["name"]

    name: str


@dataclass(order=True, unsafe_hash=True)
class Partition:
    __slots__ = ["topic", "index"]

    topic: Topic
    index: int


@dataclass(frozen=True)
class OffsetDescriptor:
    """
    The latest processed position within a single partition of a topic.

    Descriptors are validated on construction so that the commit manager can
    assume well formed input.
    """

    __slots__ = ["topic", "partition", "offset"]

    topic: str
    partition: int
    offset: int

    def __post_init__(self) -> None:
        if not isinstance(self.topic, str):
            raise TypeError("topic must be a str")

        # bool is a subclass of int and is never a valid partition or offset
        for field in ("partition", "offset"):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{field} must be an int")
            if value < 0:
                raise ValueError(f"{field} must not be negative")


class OffsetCommitter(Protocol):
    """
    The broker client side of a commit. ``commit`` is called synchronously
    and only ever with a non-empty sequence of offsets.
    """

    def commit(self, offsets: Sequence[OffsetDescriptor]) -> None:
        pass
