from tributary.commit import CommitManager, CommitManagerState, create_commit_manager
from tributary.types import OffsetCommitter, OffsetDescriptor, Partition, Topic
from tributary.utils.metrics import configure_metrics

__all__ = [
    "CommitManager",
    "CommitManagerState",
    "OffsetCommitter",
    "OffsetDescriptor",
    "Partition",
    "Topic",
    "configure_metrics",
    "create_commit_manager",
]
