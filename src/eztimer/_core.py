"""Interleaved timing loop.

Design by Contract (P1 - MANDATORY):
- One result per function, in input order
- Retained samples per function <= Options.iterations
- Burn-in calls always run, are never checked, never charged to budgets,
  and never appear in results
- Budgets are checked only before a call starts, never during one
- A failed check aborts the whole run; no partial results are returned

Functions are called strictly one at a time, in the order produced by
generate_order(). Concurrent calls would distort each other's timings.
"""

import gc
import random
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from beartype import beartype
from loguru import logger

from eztimer._budget import BudgetTracker
from eztimer._options import Options
from eztimer._order import generate_order
from eztimer._stats import Timings, summarize
from eztimer._timer import CallTimer


class CheckFailedError(Exception):
    """Raised when the check callback rejects a function's result.

    Attributes:
        unit: Index of the function whose result failed the check.
        iteration: Timed iteration (0-based, burn-in excluded) of the failing call.
    """

    def __init__(self, unit: int, iteration: int, reason: str) -> None:
        super().__init__(f"Check failed for function {unit} at iteration {iteration}: {reason}")
        self.unit = unit
        self.iteration = iteration
        self.reason = reason


@dataclass
class _UnitAccumulator:
    """Per-function state, owned by a single run() call."""

    times: list[float] = field(default_factory=list)
    peak_memory: float = 0.0
    memory_delta: float = 0.0


def _validate(
    check: Callable[[Any, int], Any],
    result: Any,
    unit: int,
    iteration: int,
) -> CheckFailedError | None:
    """Run the check callback and turn a raised exception into an explicit failure value.

    The check's return value is ignored.
    """
    try:
        check(result, unit)
    except Exception as exc:
        failure = CheckFailedError(unit, iteration, f"{type(exc).__name__}: {exc}")
        failure.__cause__ = exc
        return failure
    return None


@beartype
def run(
    units: Sequence[Callable[[], Any]],
    check: Callable[[Any, int], Any],
    config: Options,
    *,
    clock: Callable[[], float] = time.perf_counter,
) -> list[Timings]:
    """Time each function in ``units`` over repeated, randomly interleaved calls.

    Each iteration calls every function once, in an order shuffled per
    iteration by a random engine seeded from ``config.seed``. The first
    ``config.burn_in`` iterations are warm-up: they always run, but are not
    checked, charged, or reported. Remaining calls may be skipped once the
    per-function or total budget is spent, so a function can end up with
    fewer than ``config.iterations`` samples.

    Args:
        units: Functions to time. Each should return a value that depends on
            the computation of interest.
        check: Called as ``check(result, index)`` after every timed call. Its
            runtime is not included in the timings. Its return value is
            ignored; raising aborts the run with :class:`CheckFailedError`.
        config: Run options.
        clock: Monotonic clock returning seconds.

    Returns:
        One :class:`Timings` per function, in the same order as ``units``.

    Raises:
        CheckFailedError: If ``check`` rejects any result.
    """
    num_units = len(units)
    num_blocks = config.num_blocks
    logger.info(
        f"Timing {num_units} functions: iterations={config.iterations}, "
        f"burn_in={config.burn_in}, seed={config.seed}"
    )

    rng = random.Random(config.seed)
    order = generate_order(num_units, num_blocks, rng)
    budget = BudgetTracker(num_units, config.max_time_per_function, config.max_time_total)
    accumulators = [_UnitAccumulator() for _ in range(num_units)]

    gc_was_enabled = gc.isenabled()
    if config.disable_gc:
        gc.disable()
    try:
        for position, unit in enumerate(order):
            iteration = position // num_units
            acc = accumulators[unit]

            if iteration < config.burn_in:
                # Recorded (and later dropped) so the warm-up call has an observable effect.
                with CallTimer(clock=clock) as timer:
                    units[unit]()
                acc.times.append(timer.elapsed)
                continue

            if budget.should_skip(unit):
                continue

            with CallTimer(track_memory=config.track_memory, clock=clock) as timer:
                result = units[unit]()
            acc.times.append(timer.elapsed)

            failure = _validate(check, result, unit, iteration - config.burn_in)
            if failure is not None:
                logger.error(str(failure))
                raise failure from failure.__cause__

            budget.charge(unit, timer.elapsed)
            if config.track_memory:
                acc.peak_memory = max(acc.peak_memory, timer.peak_memory)
                acc.memory_delta += timer.memory_delta
    finally:
        if config.disable_gc and gc_was_enabled:
            gc.enable()

    output: list[Timings] = []
    for unit, acc in enumerate(accumulators):
        retained = acc.times[config.burn_in:]
        assert len(retained) <= config.iterations, (
            f"Function {unit} has {len(retained)} samples, more than {config.iterations} iterations"
        )
        timings = summarize(retained, peak_memory=acc.peak_memory, memory_delta=acc.memory_delta)
        logger.info(
            f"  function {unit}: {timings.count} samples, "
            f"mean={timings.mean * 1000:.3f}ms, sd={timings.sd * 1000:.3f}ms"
        )
        output.append(timings)

    return output
