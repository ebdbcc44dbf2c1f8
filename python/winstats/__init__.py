"""Incremental running and sliding-window statistics.

Accumulators consume window events ``(incoming, outgoing)`` one at a time and
answer queries in constant (amortized constant for minimum and maximum) time
without buffering the input.
"""

from .accumulator import (
    Accumulator,
    CumulativeAccumulator,
    PremapAccumulator,
    TeeAccumulator,
    WindowEvent,
    cumulative,
    fold,
    premap,
    scan,
    tee,
)
from .errors import EmptyWindowError
from .sums import Length, Sum, SumInt, power_sum, power_sum_frac
from .location import Maximum, Minimum, mean, value_range
from .ring_deque import RingDeque
from .windowing import IncrementalStatistic, SlidingWindow, cumulative_events, sliding_events
from .summary_statistics import WindowSummary
from .value_reader import ValueReader
from .reporting import IncrementalCSVWriter, rolling_apply, rolling_table

__all__ = [
    "Accumulator",
    "CumulativeAccumulator",
    "PremapAccumulator",
    "TeeAccumulator",
    "WindowEvent",
    "cumulative",
    "fold",
    "premap",
    "scan",
    "tee",
    "EmptyWindowError",
    "Length",
    "Sum",
    "SumInt",
    "power_sum",
    "power_sum_frac",
    "Maximum",
    "Minimum",
    "mean",
    "value_range",
    "RingDeque",
    "IncrementalStatistic",
    "SlidingWindow",
    "cumulative_events",
    "sliding_events",
    "WindowSummary",
    "ValueReader",
    "IncrementalCSVWriter",
    "rolling_apply",
    "rolling_table",
]
