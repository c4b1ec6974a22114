"""Reduction of retained samples into summary statistics."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from beartype import beartype


@dataclass(frozen=True)
class Timings:
    """Timings for one function, in seconds.

    Attributes:
        times: Retained call durations (burn-in removed), in call order.
        mean: Mean of ``times``; 0.0 when no call was timed.
        sd: Sample standard deviation of ``times`` (divisor n - 1);
            0.0 when fewer than two calls were timed.
        peak_memory: Highest process RSS seen after a timed call (GB),
            0.0 unless memory tracking was enabled.
        memory_delta: Sum of RSS changes across timed calls (GB).
    """

    times: tuple[float, ...] = ()
    mean: float = 0.0
    sd: float = 0.0
    peak_memory: float = 0.0
    memory_delta: float = 0.0

    @property
    def count(self) -> int:
        return len(self.times)


@beartype
def summarize(
    samples: Sequence[float],
    peak_memory: float = 0.0,
    memory_delta: float = 0.0,
) -> Timings:
    """Compute mean and standard deviation of ``samples``.

    An empty sample set (function skipped entirely by budgets) gives zero
    mean and sd. A single sample gives that sample as the mean and an sd of
    exactly 0.0, since the n - 1 divisor is undefined there.
    """
    times = tuple(samples)
    for t in times:
        assert t >= 0, f"Sample must be non-negative: {t}"

    n = len(times)
    if n == 0:
        return Timings(peak_memory=peak_memory, memory_delta=memory_delta)

    mean = math.fsum(times) / n
    if n == 1:
        sd = 0.0
    else:
        sd = math.sqrt(math.fsum((t - mean) ** 2 for t in times) / (n - 1))

    return Timings(
        times=times,
        mean=mean,
        sd=sd,
        peak_memory=peak_memory,
        memory_delta=memory_delta,
    )
