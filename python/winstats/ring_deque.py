"""Array backed double-ended queue of ``(timestamp, value)`` entries."""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Tuple

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 8


class RingDeque:
    """Ring buffer with head/length bookkeeping and capacity doubling.

    Timestamps and values live in two parallel preallocated lists so a push
    does not allocate per element. Windows never shrink, so the buffer only
    ever grows. ``pushes`` and ``pops`` count operations over the lifetime of
    the deque.
    """

    __slots__ = ("_stamps", "_values", "_head", "_size", "pushes", "pops")

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._stamps: List[int] = [0] * capacity
        self._values: List[Any] = [None] * capacity
        self._head = 0
        self._size = 0
        self.pushes = 0
        self.pops = 0

    # ------------------------------------------------------------------
    @property
    def capacity(self) -> int:
        return len(self._stamps)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __iter__(self) -> Iterator[Tuple[int, Any]]:
        capacity = len(self._stamps)
        for offset in range(self._size):
            slot = (self._head + offset) % capacity
            yield self._stamps[slot], self._values[slot]

    def __repr__(self) -> str:
        return f"RingDeque({list(self)!r})"

    # ------------------------------------------------------------------
    def front_stamp(self) -> int:
        self._check_not_empty()
        return self._stamps[self._head]

    def front_value(self) -> Any:
        self._check_not_empty()
        return self._values[self._head]

    def back_value(self) -> Any:
        self._check_not_empty()
        return self._values[self._tail_slot()]

    def push_back(self, stamp: int, value: Any) -> None:
        if self._size == len(self._stamps):
            self._grow()
        slot = (self._head + self._size) % len(self._stamps)
        self._stamps[slot] = stamp
        self._values[slot] = value
        self._size += 1
        self.pushes += 1

    def pop_front(self) -> Tuple[int, Any]:
        self._check_not_empty()
        slot = self._head
        entry = (self._stamps[slot], self._values[slot])
        self._values[slot] = None
        self._head = (slot + 1) % len(self._stamps)
        self._size -= 1
        self.pops += 1
        return entry

    def pop_back(self) -> Tuple[int, Any]:
        self._check_not_empty()
        slot = self._tail_slot()
        entry = (self._stamps[slot], self._values[slot])
        self._values[slot] = None
        self._size -= 1
        self.pops += 1
        return entry

    # ------------------------------------------------------------------
    def _tail_slot(self) -> int:
        return (self._head + self._size - 1) % len(self._stamps)

    def _check_not_empty(self) -> None:
        if self._size == 0:
            raise IndexError("RingDeque is empty")

    def _grow(self) -> None:
        old_capacity = len(self._stamps)
        entries = list(self)
        new_capacity = old_capacity * 2
        self._stamps = [0] * new_capacity
        self._values = [None] * new_capacity
        for slot, (stamp, value) in enumerate(entries):
            self._stamps[slot] = stamp
            self._values[slot] = value
        self._head = 0
        logger.debug("RingDeque grew from %d to %d slots", old_capacity, new_capacity)


__all__ = ["RingDeque", "DEFAULT_CAPACITY"]
