"""Time budget bookkeeping for a single run."""

from beartype import beartype
from loguru import logger


class BudgetTracker:
    """Live spent-time accumulators consulted before each timed call.

    Only timed (post burn-in) calls are charged. The spent values here are
    running totals for budget checks; final statistics are computed
    separately from the retained samples.

    Design by Contract:
        - charged elapsed MUST be >= 0
        - unit index MUST be in [0, num_units)
        - spent values only grow, so exhaustion is permanent for the run
    """

    @beartype
    def __init__(
        self,
        num_units: int,
        max_time_per_function: float | None,
        max_time_total: float | None,
    ) -> None:
        assert num_units >= 0, f"num_units must be non-negative: {num_units}"
        self.max_time_per_function = max_time_per_function
        self.max_time_total = max_time_total
        self._spent: list[float] = [0.0] * num_units
        self._total: float = 0.0
        self._exhausted_units: set[int] = set()
        self._total_exhausted = False

    @property
    def total(self) -> float:
        return self._total

    def spent(self, unit: int) -> float:
        return self._spent[unit]

    def should_skip(self, unit: int) -> bool:
        """Return True if the next timed call of ``unit`` must not start."""
        assert 0 <= unit < len(self._spent), f"Unit index out of range: {unit}"

        if self.max_time_per_function is not None and self._spent[unit] >= self.max_time_per_function:
            if unit not in self._exhausted_units:
                self._exhausted_units.add(unit)
                logger.debug(
                    f"Function {unit} exhausted its budget "
                    f"({self._spent[unit]:.6f}s >= {self.max_time_per_function:.6f}s)"
                )
            return True

        if self.max_time_total is not None and self._total >= self.max_time_total:
            if not self._total_exhausted:
                self._total_exhausted = True
                logger.debug(
                    f"Total budget exhausted ({self._total:.6f}s >= {self.max_time_total:.6f}s), "
                    f"skipping all remaining calls"
                )
            return True

        return False

    def charge(self, unit: int, elapsed: float) -> None:
        """Add one timed call's duration to ``unit`` and to the total."""
        assert elapsed >= 0, f"Elapsed time must be non-negative: {elapsed}"
        self._spent[unit] += elapsed
        self._total += elapsed
