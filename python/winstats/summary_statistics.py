"""Bundle of the common window statistics behind a single ``add_value`` call."""

from __future__ import annotations

from math import sqrt
from typing import Optional

from .location import Maximum, Minimum
from .sums import Length, Sum, power_sum
from .windowing import IncrementalStatistic, SlidingWindow


class WindowSummary:
    """Count, sum, mean, variance, minimum and maximum of the last values.

    With ``window_size=None`` the whole stream is summarised. Otherwise the
    summary keeps the last ``window_size`` values so it can evict them.
    An empty summary has mean and variance ``0.0``; minimum and maximum raise.
    """

    __slots__ = ("_window", "_length", "_sum", "_sum_sq", "_min", "_max")

    def __init__(self, window_size: Optional[int] = None) -> None:
        self._window = SlidingWindow(window_size)
        self._length = IncrementalStatistic(Length())
        self._sum = IncrementalStatistic(Sum())
        self._sum_sq = IncrementalStatistic(power_sum(2))
        self._min = IncrementalStatistic(Minimum())
        self._max = IncrementalStatistic(Maximum())

    def add_value(self, value: float) -> None:
        incoming, outgoing = self._window.admit(value)
        for stat in (self._length, self._sum, self._sum_sq, self._min, self._max):
            stat.push(incoming, outgoing)

    @property
    def window_size(self) -> Optional[int]:
        return self._window.window_size

    # Getters --------------------------------------------------------------

    def get_n(self) -> int:
        return self._length.value()

    def get_sum(self) -> float:
        return self._sum.value()

    def get_mean(self) -> float:
        n = self.get_n()
        if n == 0:
            return 0.0
        return self.get_sum() / n

    def get_variance(self) -> float:
        n = self.get_n()
        if n < 2:
            return 0.0
        total = self.get_sum()
        # Cancellation in the power sums can leave a tiny negative residue.
        variance = (self._sum_sq.value() - total * total / n) / (n - 1)
        return max(0.0, variance)

    def get_standard_deviation(self) -> float:
        return sqrt(self.get_variance())

    def get_min(self) -> float:
        return self._min.value()

    def get_max(self) -> float:
        return self._max.value()

    def get_range(self) -> float:
        return self.get_max() - self.get_min()


__all__ = ["WindowSummary"]
