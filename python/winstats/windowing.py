"""Turn plain value streams into window events and drive accumulators."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Generic, Iterable, Iterator, Optional, TypeVar

from .accumulator import Accumulator, WindowEvent

S = TypeVar("S")
V = TypeVar("V")


def cumulative_events(values: Iterable[Any]) -> Iterator[WindowEvent]:
    """Every value grows the window; the statistic covers the whole stream."""

    for value in values:
        yield WindowEvent(value, None)


class SlidingWindow:
    """Buffer of the last ``window_size`` values that turns values into events.

    With ``window_size=None`` nothing is buffered and every value grows the
    window.
    """

    __slots__ = ("window_size", "_recent")

    def __init__(self, window_size: Optional[int]) -> None:
        if window_size is not None and window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {window_size}")
        self.window_size = window_size
        self._recent: Deque[Any] = deque()

    def __len__(self) -> int:
        return len(self._recent)

    def admit(self, value: Any) -> WindowEvent:
        if self.window_size is None:
            return WindowEvent(value, None)
        if len(self._recent) < self.window_size:
            self._recent.append(value)
            return WindowEvent(value, None)
        evicted = self._recent.popleft()
        self._recent.append(value)
        return WindowEvent(value, evicted)


def sliding_events(values: Iterable[Any], window_size: int) -> Iterator[WindowEvent]:
    """Fixed size sliding window over ``values``.

    The first ``window_size`` values grow the window, every later value
    evicts the oldest one. Only the last ``window_size`` values are buffered.
    """

    if window_size is None or window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")

    window = SlidingWindow(window_size)
    for value in values:
        yield window.admit(value)


class IncrementalStatistic(Generic[S, V]):
    """Hold the state of one accumulator for callers that prefer an object API.

    Example::

        stat = IncrementalStatistic(Minimum())
        stat.push(5)
        stat.push(3)
        stat.push(8, outgoing=5)
        stat.value()  # 3
    """

    __slots__ = ("accumulator", "_state", "count")

    def __init__(self, accumulator: Accumulator[S, V]) -> None:
        self.accumulator = accumulator
        self._state = accumulator.initial()
        self.count = 0

    def push(self, incoming: Any, outgoing: Optional[Any] = None) -> None:
        self._state = self.accumulator.step(self._state, incoming, outgoing)
        self.count += 1

    def push_event(self, event: WindowEvent) -> None:
        self.push(event.incoming, event.outgoing)

    def value(self) -> V:
        return self.accumulator.extract(self._state)

    def reset(self) -> None:
        self._state = self.accumulator.initial()
        self.count = 0

    def __repr__(self) -> str:
        return f"IncrementalStatistic({self.accumulator.name!r}, count={self.count})"


__all__ = ["IncrementalStatistic", "SlidingWindow", "cumulative_events", "sliding_events"]
