"""Run configuration.

Design by Contract:
- iterations and burn_in MUST be >= 0
- Budgets are either None (unbounded) or finite and >= 0 seconds
- A budget of 0.0 is a real budget (every timed call is skipped), not "unset"
"""

import math
from dataclasses import dataclass

from beartype import BeartypeConf, beartype


# Integer budgets are accepted and stored as float.
@beartype(conf=BeartypeConf(is_pep484_tower=True))
@dataclass(frozen=True)
class Options:
    """Options for :func:`eztimer.run`.

    Args:
        iterations: Maximum number of timed calls per function, excluding burn-in.
        burn_in: Number of untimed warm-up calls per function before timing starts.
        seed: Seed for the per-run random engine that shuffles each iteration.
        max_time_per_function: Ceiling in seconds on the timed elapsed time of a
            single function. Once reached, its remaining calls are skipped.
        max_time_total: Ceiling in seconds on the timed elapsed time summed over
            all functions. Once reached, all remaining calls are skipped.
        track_memory: If True, sample process RSS (psutil) around each timed call.
        disable_gc: If True, the garbage collector is off for the whole run.
    """

    iterations: int = 10
    burn_in: int = 1
    seed: int = 123456
    max_time_per_function: float | None = None
    max_time_total: float | None = None
    track_memory: bool = False
    disable_gc: bool = False

    def __post_init__(self) -> None:
        assert self.iterations >= 0, f"iterations must be non-negative: {self.iterations}"
        assert self.burn_in >= 0, f"burn_in must be non-negative: {self.burn_in}"
        for name in ("max_time_per_function", "max_time_total"):
            budget = getattr(self, name)
            if budget is None:
                continue
            assert math.isfinite(budget), f"{name} must be finite: {budget}"
            assert budget >= 0, f"{name} must be non-negative: {budget}"
            object.__setattr__(self, name, float(budget))

    @property
    def num_blocks(self) -> int:
        """Total passes over the function list, burn-in included."""
        return self.iterations + self.burn_in
