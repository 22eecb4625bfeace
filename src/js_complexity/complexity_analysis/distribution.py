"""Range distribution builder for complexity histograms."""

from bisect import bisect_right
from typing import Dict, Sequence

from .models import Distribution

FUNCTION_COMPLEXITY_BOTTOM_LIMITS = (1, 2, 4, 6, 8, 10, 12, 20, 30)
FILE_COMPLEXITY_BOTTOM_LIMITS = (0, 5, 10, 20, 30, 60, 90)


class RangeDistributionBuilder:
    """Accumulates values into buckets identified by their bottom limit.

    A value is counted in the bucket with the greatest bottom limit that is
    less than or equal to it. Values below the smallest limit are dropped
    without error.
    """

    def __init__(self, bottom_limits: Sequence[float]):
        limits = tuple(bottom_limits)
        if not limits:
            raise ValueError("At least one bottom limit is required")
        if any(lower >= upper for lower, upper in zip(limits, limits[1:])):
            raise ValueError(f"Bottom limits must be strictly ascending: {list(limits)}")

        self._bottom_limits = limits
        self._counts: Dict[float, int] = {limit: 0 for limit in limits}

    @property
    def bottom_limits(self):
        return self._bottom_limits

    def add(self, value: float) -> "RangeDistributionBuilder":
        """Count one value. Returns the builder for chaining."""
        index = bisect_right(self._bottom_limits, value) - 1
        if index >= 0:
            self._counts[self._bottom_limits[index]] += 1
        return self

    def add_distribution(self, distribution: Distribution) -> "RangeDistributionBuilder":
        """Merge the counts of a snapshot built with the same bottom limits."""
        if tuple(distribution.bottom_limits) != self._bottom_limits:
            raise ValueError(
                f"Cannot merge distribution with limits {list(distribution.bottom_limits)} "
                f"into {list(self._bottom_limits)}"
            )
        for limit in self._bottom_limits:
            self._counts[limit] += distribution.counts[limit]
        return self

    def clear(self) -> None:
        for limit in self._bottom_limits:
            self._counts[limit] = 0

    def build(self) -> Distribution:
        """Return a snapshot of the current counts. Does not reset state."""
        return Distribution(bottom_limits=self._bottom_limits, counts=dict(self._counts))
