"""Accumulator contract shared by every window statistic.

An accumulator is a small state machine over *window events*. Each event is a
pair ``(incoming, outgoing)``: ``outgoing`` is ``None`` when the window grows
by one element, otherwise ``outgoing`` leaves the window as ``incoming``
enters it and the window size stays the same. The window size is never passed
explicitly; it is implied by the history of events and can only grow.

Accumulators do not own their state. Callers create it with ``initial()``,
thread it through ``step()`` and read it with ``extract()``::

    acc = mean()
    state = acc.initial()
    for x in (2.0, 4.0, 6.0):
        state = acc.step(state, x)
    acc.extract(state)  # 4.0

``step`` may update the state object in place; always continue with the
returned value and never share one state between two drivers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, NamedTuple, Optional, Tuple, TypeVar, Union

S = TypeVar("S")
T = TypeVar("T")
V = TypeVar("V")


class WindowEvent(NamedTuple):
    """One step of window evolution."""

    incoming: Any
    outgoing: Optional[Any] = None

    @property
    def grows(self) -> bool:
        return self.outgoing is None


EventLike = Union[WindowEvent, Tuple[Any, Optional[Any]]]


class Accumulator(ABC, Generic[S, V]):
    """Incremental statistic with an externally owned state."""

    name = "accumulator"
    # True when the drivers should feed plain elements instead of events.
    plain_input = False

    @abstractmethod
    def initial(self) -> S:
        ...

    @abstractmethod
    def step(self, state: S, incoming: Any, outgoing: Optional[Any] = None) -> S:
        ...

    @abstractmethod
    def extract(self, state: S) -> V:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


class PremapAccumulator(Accumulator[S, V]):
    """Apply ``func`` to the incoming and outgoing element before delegating."""

    def __init__(self, func: Callable[[Any], Any], inner: Accumulator[S, V], name: Optional[str] = None) -> None:
        self.func = func
        self.inner = inner
        self.name = name or inner.name
        self.plain_input = inner.plain_input

    def initial(self) -> S:
        return self.inner.initial()

    def step(self, state: S, incoming: Any, outgoing: Optional[Any] = None) -> S:
        func = self.func
        if outgoing is None:
            return self.inner.step(state, func(incoming))
        return self.inner.step(state, func(incoming), func(outgoing))

    def extract(self, state: S) -> V:
        return self.inner.extract(state)


@dataclass
class TeeState(Generic[S, T]):
    __slots__ = ("left", "right")

    left: S
    right: T


class TeeAccumulator(Accumulator[TeeState, V]):
    """Run two accumulators on the same events and combine their results."""

    def __init__(
        self,
        combine: Callable[[Any, Any], V],
        left: Accumulator,
        right: Accumulator,
        name: Optional[str] = None,
    ) -> None:
        self.combine = combine
        self.left = left
        self.right = right
        self.name = name or f"{left.name}|{right.name}"
        self.plain_input = left.plain_input and right.plain_input

    def initial(self) -> TeeState:
        return TeeState(self.left.initial(), self.right.initial())

    def step(self, state: TeeState, incoming: Any, outgoing: Optional[Any] = None) -> TeeState:
        state.left = self.left.step(state.left, incoming, outgoing)
        state.right = self.right.step(state.right, incoming, outgoing)
        return state

    def extract(self, state: TeeState) -> V:
        return self.combine(self.left.extract(state.left), self.right.extract(state.right))


class CumulativeAccumulator(Accumulator[S, V]):
    """Treat the whole input stream as one ever-growing window.

    Every element is forwarded as a growth event; an ``outgoing`` element is
    ignored. ``scan`` and ``fold`` feed it plain elements.
    """

    plain_input = True

    def __init__(self, inner: Accumulator[S, V]) -> None:
        self.inner = inner
        self.name = inner.name

    def initial(self) -> S:
        return self.inner.initial()

    def step(self, state: S, incoming: Any, outgoing: Optional[Any] = None) -> S:
        return self.inner.step(state, incoming, None)

    def extract(self, state: S) -> V:
        return self.inner.extract(state)

    def __repr__(self) -> str:
        return f"CumulativeAccumulator({self.inner!r})"


def premap(func: Callable[[Any], Any], acc: Accumulator[S, V], name: Optional[str] = None) -> PremapAccumulator[S, V]:
    return PremapAccumulator(func, acc, name)


def tee(combine: Callable[[Any, Any], V], left: Accumulator, right: Accumulator, name: Optional[str] = None) -> TeeAccumulator[V]:
    return TeeAccumulator(combine, left, right, name)


def cumulative(acc: Accumulator[S, V]) -> CumulativeAccumulator[S, V]:
    return CumulativeAccumulator(acc)


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------


def _unpack(acc: Accumulator, event: Any) -> Tuple[Any, Optional[Any]]:
    if acc.plain_input and not isinstance(event, WindowEvent):
        return event, None
    incoming, outgoing = event
    return incoming, outgoing


def scan(acc: Accumulator[S, V], events: Iterable[EventLike]) -> Iterator[V]:
    """Yield the extracted statistic after every event.

    Cumulative accumulators take plain elements as well as events.
    """

    state = acc.initial()
    for event in events:
        incoming, outgoing = _unpack(acc, event)
        state = acc.step(state, incoming, outgoing)
        yield acc.extract(state)


def fold(acc: Accumulator[S, V], events: Iterable[EventLike]) -> V:
    """Feed all events and return the final statistic."""

    state = acc.initial()
    for event in events:
        incoming, outgoing = _unpack(acc, event)
        state = acc.step(state, incoming, outgoing)
    return acc.extract(state)


__all__ = [
    "Accumulator",
    "CumulativeAccumulator",
    "EventLike",
    "PremapAccumulator",
    "TeeAccumulator",
    "TeeState",
    "WindowEvent",
    "cumulative",
    "fold",
    "premap",
    "scan",
    "tee",
]
