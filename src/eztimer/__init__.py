"""eztimer: Easy timing of Python functions.

Provides:
- run: Time several functions over randomly interleaved iterations
- Options: Iterations, burn-in, seed, and optional time budgets for a run
- Timings: Per-function samples, mean, and standard deviation
- CheckFailedError: Raised when the result check rejects a call

Usage:
    from eztimer import Options, run

    def check_sorted(result, i):
        assert result == expected

    timings = run(
        [lambda: sorted(data), lambda: heapsort(data)],
        check_sorted,
        Options(iterations=20, max_time_total=5.0),
    )
    for i, t in enumerate(timings):
        print(i, t.mean, t.sd)
"""

from eztimer._core import CheckFailedError, run
from eztimer._options import Options
from eztimer._stats import Timings, summarize

__all__ = [
    "CheckFailedError",
    "Options",
    "Timings",
    "run",
    "summarize",
]

__version__ = "0.1.0"
