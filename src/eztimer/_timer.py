"""Single-call timer.

Uses a monotonic clock (time.perf_counter by default). Memory sampling via
psutil happens outside the timed window so it never inflates durations.
"""

import time
from collections.abc import Callable
from typing import Any

import psutil
from beartype import beartype


class CallTimer:
    """Context manager timing one call of a function under test.

    Args:
        track_memory: If True, sample process RSS before and after the call.
        clock: Monotonic clock returning seconds (default: time.perf_counter).

    Attributes:
        elapsed: Duration of the wrapped block in seconds (MUST be >= 0)
        memory_delta: Change in process RSS across the call (GB)
        peak_memory: Process RSS after the call (GB)

    Example:
        with CallTimer() as timer:
            result = fn()
        samples.append(timer.elapsed)
    """

    @beartype
    def __init__(
        self,
        track_memory: bool = False,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.track_memory = track_memory
        self.clock = clock
        self.elapsed: float = 0.0
        self.memory_delta: float = 0.0
        self.peak_memory: float = 0.0
        self._start: float = 0.0
        self._start_memory: float = 0.0
        self._process = psutil.Process() if track_memory else None

    def __enter__(self) -> "CallTimer":
        if self._process is not None:
            self._start_memory = self._process.memory_info().rss / 1024**3  # GB
        self._start = self.clock()
        return self

    def __exit__(self, *args: Any) -> None:
        end = self.clock()
        self.elapsed = end - self._start

        assert self.elapsed >= 0, (
            f"Elapsed time cannot be negative: {self.elapsed:.9f}s. "
            f"Clock is not monotonic."
        )

        if self._process is not None:
            end_memory = self._process.memory_info().rss / 1024**3  # GB
            self.memory_delta = end_memory - self._start_memory
            self.peak_memory = end_memory
