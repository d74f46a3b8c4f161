"""
Running statistics that item models push values into.

Item models never hold aggregate state across a bank. Collaborators own
accumulators like these and hand them to increment_mean_sigma() or
increment_mean_mean() for each item.
"""

import math
from typing import Protocol


class Incrementable(Protocol):
    def increment(self, value: float) -> None: ...


class RunningMean:
    """Arithmetic mean updated one observation at a time."""

    def __init__(self) -> None:
        self.n = 0
        self._mean = 0.0

    def increment(self, value: float) -> None:
        self.n += 1
        self._mean += (value - self._mean) / self.n

    def clear(self) -> None:
        self.n = 0
        self._mean = 0.0

    @property
    def result(self) -> float:
        """Mean of the observations, NaN if there are none."""
        if self.n == 0:
            return math.nan
        return self._mean


class RunningStandardDeviation:
    """
    Standard deviation updated one observation at a time (Welford).

    Attributes:
        bias_corrected: Divide by n-1 instead of n. With a single
            observation the corrected value is 0.0.
    """

    def __init__(self, bias_corrected: bool = True) -> None:
        self.bias_corrected = bias_corrected
        self.n = 0
        self._mean = 0.0
        self._m2 = 0.0

    def increment(self, value: float) -> None:
        self.n += 1
        delta = value - self._mean
        self._mean += delta / self.n
        self._m2 += delta * (value - self._mean)

    def clear(self) -> None:
        self.n = 0
        self._mean = 0.0
        self._m2 = 0.0

    @property
    def result(self) -> float:
        """Standard deviation of the observations, NaN if there are none."""
        if self.n == 0:
            return math.nan
        if self.n == 1:
            return 0.0
        denominator = self.n - 1 if self.bias_corrected else self.n
        return math.sqrt(self._m2 / denominator)
