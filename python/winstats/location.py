"""Location statistics over a sliding window: minimum, maximum, range, mean."""

from __future__ import annotations

import operator
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from .accumulator import Accumulator, TeeAccumulator, tee
from .errors import EmptyWindowError
from .ring_deque import RingDeque
from .sums import Length, Sum


@dataclass
class ExtremumState:
    """Bookkeeping for the monotonic deque.

    ``index`` is the timestamp of the latest event and ``window_len`` the
    inferred window size. ``deque`` holds ``(index, value)`` candidates that
    are monotonic by value and whose front is always inside the window.
    """

    index: int = 0
    window_len: int = 0
    deque: RingDeque = field(default_factory=RingDeque)


class _Extremum(Accumulator[ExtremumState, Any]):
    """Sliding window extremum in amortized O(1) per event.

    Every element is pushed once and popped at most once: from the front when
    it falls out of the window, or from the back when a newer element at least
    as extreme arrives.
    """

    @abstractmethod
    def _dominates(self, incoming: Any, candidate: Any) -> bool:
        """True when ``candidate`` can never be the extremum once ``incoming`` arrived."""

    def initial(self) -> ExtremumState:
        return ExtremumState()

    def step(self, state: ExtremumState, incoming: Any, outgoing: Optional[Any] = None) -> ExtremumState:
        state.index += 1
        if outgoing is None:
            state.window_len += 1

        dq = state.deque
        horizon = state.index - state.window_len
        while dq and dq.front_stamp() <= horizon:
            dq.pop_front()
        while dq and self._dominates(incoming, dq.back_value()):
            dq.pop_back()
        dq.push_back(state.index, incoming)
        return state

    def extract(self, state: ExtremumState) -> Any:
        if not state.deque:
            raise EmptyWindowError(self.name)
        return state.deque.front_value()


class Minimum(_Extremum):
    """Smallest element in the window."""

    name = "minimum"

    def _dominates(self, incoming: Any, candidate: Any) -> bool:
        return candidate >= incoming


class Maximum(_Extremum):
    """Largest element in the window."""

    name = "maximum"

    def _dominates(self, incoming: Any, candidate: Any) -> bool:
        return candidate <= incoming


def value_range() -> TeeAccumulator:
    """Difference between the largest and the smallest element in the window."""

    return tee(operator.sub, Maximum(), Minimum(), name="range")


def mean() -> TeeAccumulator:
    """Arithmetic mean of the window, the simple moving average.

    Used cumulatively this is the cumulative moving average. An empty window
    divides by zero and raises ``ZeroDivisionError``.
    """

    return tee(operator.truediv, Sum(), Length(), name="mean")


__all__ = ["ExtremumState", "Maximum", "Minimum", "mean", "value_range"]
