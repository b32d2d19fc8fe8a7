import time
from typing import Protocol


class Clock(Protocol):
    """
    An abstract clock interface.
    """

    def time(self) -> float:
        raise NotImplementedError

    def sleep(self, duration: float) -> None:
        raise NotImplementedError


class SystemClock(Clock):
    """
    A clock implementation that uses the system clock for the current time.
    """

    def time(self) -> float:
        return time.time()

    def sleep(self, duration: float) -> None:
        time.sleep(duration)


class MockedClock(Clock):
    """
    A mocked clock implementation that uses a provided starting time and does
    not actually sleep, useful for testing.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.__time = start

    def time(self) -> float:
        return self.__time

    def sleep(self, duration: float) -> None:
        self.__time = self.__time + duration
