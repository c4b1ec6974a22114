"""Shared fixtures: a deterministic clock and functions with fixed durations."""

from collections.abc import Callable

import pytest

from eztimer import Options, Timings, run


class FakeClock:
    """Monotonic clock advanced only by the functions under test.

    Time is kept in integer microseconds so accumulated durations are exact.
    """

    def __init__(self) -> None:
        self.ticks = 0

    def __call__(self) -> float:
        return self.ticks / 1_000_000

    def advance_ms(self, ms: int) -> None:
        self.ticks += ms * 1000


def _make_units(clock: FakeClock, durations_ms: list[int], calls: list[int] | None = None) -> list[Callable[[], int]]:
    """Build functions that 'take' a fixed time on ``clock`` and return their index."""

    def make(index: int, ms: int) -> Callable[[], int]:
        def unit() -> int:
            if calls is not None:
                calls.append(index)
            clock.advance_ms(ms)
            return index

        return unit

    return [make(i, ms) for i, ms in enumerate(durations_ms)]


def _index_check(result: int, index: int) -> None:
    if result != index:
        raise RuntimeError("whoops, that shouldn't have happened")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timed_units(clock: FakeClock) -> Callable[..., list[Callable[[], int]]]:
    """Factory for fixed-duration functions running on the ``clock`` fixture."""

    def factory(durations_ms: list[int], calls: list[int] | None = None) -> list[Callable[[], int]]:
        return _make_units(clock, durations_ms, calls)

    return factory


@pytest.fixture(scope="session")
def index_check() -> Callable[[int, int], None]:
    """Check that fails unless a function returned its own index."""
    return _index_check


@pytest.fixture(scope="session")
def fake_run() -> Callable[..., list[Timings]]:
    """Run fixed-duration functions on a fresh fake clock.

    Session scoped so Hypothesis tests can use it; every call gets its own clock.
    """

    def _run(durations_ms: list[int], opt: Options, calls: list[int] | None = None) -> list[Timings]:
        clock = FakeClock()
        return run(_make_units(clock, durations_ms, calls), _index_check, opt, clock=clock)

    return _run
