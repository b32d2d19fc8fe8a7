from logging import CRITICAL, DEBUG, ERROR, INFO, NOTSET, WARNING
from typing import Callable, Optional, Sequence

from tributary.types import OffsetDescriptor

# librdkafka expects syslog severities for its ``log_level`` setting.
PYTHON_TO_SYSLOG_MAP = {
    NOTSET: 7,
    DEBUG: 7,
    INFO: 6,
    WARNING: 4,
    ERROR: 3,
    CRITICAL: 2,
}

# Batches larger than this are summarized rather than listed in log lines.
MAX_LOGGED_OFFSETS = 10


def pylog_to_syslog_level(level: int) -> int:
    return PYTHON_TO_SYSLOG_MAP.get(level, 7)


def format_offsets(offsets: Sequence[OffsetDescriptor]) -> str:
    """
    Render a commit batch as ``topic[partition]@offset`` items for log output.
    """
    rendered = ", ".join(
        f"{o.topic}[{o.partition}]@{o.offset}" for o in offsets[:MAX_LOGGED_OFFSETS]
    )
    if len(offsets) > MAX_LOGGED_OFFSETS:
        rendered += f", ... ({len(offsets) - MAX_LOGGED_OFFSETS} more)"
    return rendered


# Overwritten by the test suite to assert that no broker callback crashed.
_handle_internal_error: Optional[Callable[[Exception], None]] = None


def handle_internal_error(e: Exception) -> None:
    if _handle_internal_error is not None:
        _handle_internal_error(e)
