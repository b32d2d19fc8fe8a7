from typing import Generator, Iterator, List

import pytest

pytest.register_assert_rewrite("tests.assertions")

from tributary.utils.clock import MockedClock
from tributary.utils.metrics import configure_metrics
from tests.metrics import TestingMetricsBackend


def pytest_configure() -> None:
    configure_metrics(TestingMetricsBackend, force=True)


@pytest.fixture(autouse=True)
def clear_metrics_state() -> Iterator[None]:
    yield
    TestingMetricsBackend.calls.clear()


@pytest.fixture
def clock() -> MockedClock:
    return MockedClock(start=1000.0)


@pytest.fixture(autouse=True)
def assert_no_internal_errors(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    from tributary.utils import logging

    errors: List[Exception] = []
    monkeypatch.setattr(logging, "_handle_internal_error", errors.append)

    yield

    for e in errors:
        raise e
