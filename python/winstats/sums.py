"""Sums, counts and power sums over a sliding window.

All floating point sums go through :class:`Sum`, which uses
Kahan-Babuska-Neumaier compensated summation so that the error does not grow
with the length of the stream or the number of evictions.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, Optional

from .accumulator import Accumulator, PremapAccumulator, premap


@dataclass
class SumState:
    """Running total plus the rounding residue not yet folded into it."""

    __slots__ = ("total", "error")

    total: Any
    error: Any


@dataclass
class TotalState:
    __slots__ = ("total",)

    total: Any


@dataclass
class CountState:
    __slots__ = ("count",)

    count: int


def _compensated_add(total, error, value):
    t = total + value
    # The residue is exact when computed relative to the larger operand.
    if abs(total) >= abs(value):
        residue = (total - t) + value
    else:
        residue = (value - t) + total
    # A non-finite total carries no meaningful residue (inf - inf is nan).
    if residue == residue:
        error = error + residue
    return t, error


class Sum(Accumulator[SumState, Any]):
    """Numerically stable sum of the elements in the window.

    Insertion adds ``incoming``; eviction additionally subtracts ``outgoing``.
    Each addition is compensated separately and the accumulated residue is
    added back on extraction, so ``[1e16, 1.0, -1e16]`` sums to ``1.0``
    where naive summation returns ``0.0``.

    The residue is a single number of the input type: when the rounding
    residue itself cannot be represented exactly (totals spanning more than
    about twice the float mantissa), the result is only approximate.
    """

    name = "sum"

    def initial(self) -> SumState:
        return SumState(0, 0)

    def step(self, state: SumState, incoming: Any, outgoing: Optional[Any] = None) -> SumState:
        total, error = _compensated_add(state.total, state.error, incoming)
        if outgoing is not None:
            total, error = _compensated_add(total, error, -outgoing)
        state.total = total
        state.error = error
        return state

    def extract(self, state: SumState) -> Any:
        return state.total + state.error


class SumInt(Accumulator[TotalState, Any]):
    """Plain running total for integral elements.

    No compensation is needed for exact arithmetic. Overflow is not detected:
    Python integers never overflow, fixed width integers (e.g. numpy) wrap.
    """

    name = "sum_int"

    def initial(self) -> TotalState:
        return TotalState(0)

    def step(self, state: TotalState, incoming: Any, outgoing: Optional[Any] = None) -> TotalState:
        if outgoing is None:
            state.total = state.total + incoming
        else:
            state.total = state.total + incoming - outgoing
        return state

    def extract(self, state: TotalState) -> Any:
        return state.total


class Length(Accumulator[CountState, int]):
    """Number of elements in the window; only growth events change it."""

    name = "length"

    def initial(self) -> CountState:
        return CountState(0)

    def step(self, state: CountState, incoming: Any, outgoing: Optional[Any] = None) -> CountState:
        if outgoing is None:
            state.count += 1
        return state

    def extract(self, state: CountState) -> int:
        return state.count


def power_sum(k: int) -> PremapAccumulator[SumState, Any]:
    """Sum of the ``k``-th power of the window elements.

    ``k`` must be a non-negative integer; ``power_sum(0)`` counts elements
    and ``power_sum(1)`` is :class:`Sum`.
    """

    try:
        exponent = operator.index(k)
    except TypeError:
        raise ValueError(f"power_sum exponent must be an integer, got {k!r}") from None
    if exponent < 0:
        raise ValueError(f"power_sum exponent must be non-negative, got {k!r}")

    return premap(lambda x: x ** exponent, Sum(), name=f"power_sum({exponent})")


def power_sum_frac(p: float) -> PremapAccumulator[SumState, float]:
    """Like :func:`power_sum` but ``p`` may be negative or fractional.

    Uses :func:`math.pow`, so a negative element with a fractional exponent,
    or zero with a negative one, raises ``ValueError`` from the math module.
    """

    exponent = float(p)
    return premap(lambda x: math.pow(x, exponent), Sum(), name=f"power_sum_frac({exponent:g})")


__all__ = [
    "CountState",
    "Length",
    "Sum",
    "SumInt",
    "SumState",
    "TotalState",
    "power_sum",
    "power_sum_frac",
]
