"""Collect window statistics into numpy arrays and CSV reports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence, Union

import numpy as np

from .accumulator import Accumulator, scan
from .windowing import cumulative_events, sliding_events

logger = logging.getLogger(__name__)

LINE_SEP = "\n"


def rolling_apply(
    values: Union[Sequence[float], np.ndarray],
    accumulator: Accumulator,
    window_size: Optional[int] = None,
) -> np.ndarray:
    """Return the statistic after every element of ``values``.

    ``window_size=None`` treats the whole input as one growing window.
    """

    data = np.asarray(values, dtype=float)
    if data.ndim != 1:
        raise ValueError("values must be one-dimensional")

    if window_size is None:
        events = cumulative_events(data.tolist())
    else:
        events = sliding_events(data.tolist(), window_size)

    result = np.empty(data.shape[0], dtype=np.float64)
    for position, value in enumerate(scan(accumulator, events)):
        result[position] = value
    return result


def rolling_table(
    values: Union[Sequence[float], np.ndarray],
    accumulators: Mapping[str, Accumulator],
    window_size: Optional[int] = None,
) -> np.ndarray:
    """Stack :func:`rolling_apply` columns; column order follows ``accumulators``."""

    data = np.asarray(values, dtype=float)
    columns = [rolling_apply(data, acc, window_size) for acc in accumulators.values()]
    if not columns:
        return np.empty((data.shape[0], 0), dtype=np.float64)
    return np.column_stack(columns)


def format_row(values: Iterable[float]) -> str:
    return ",".join(repr(float(value)) for value in values)


class IncrementalCSVWriter:
    """Append rows to a CSV file, writing the header only once."""

    def __init__(self, file_path: Union[str, Path], header: Optional[str] = None) -> None:
        self.file_path = Path(file_path)
        self.header = header
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self._header_written = (
            self.file_path.exists() and self.file_path.stat().st_size > 0
        )

    def append_rows(self, rows: Iterable[str]) -> int:
        row_list = [row for row in rows if row]
        if not row_list:
            return 0

        with self.file_path.open("a", encoding="utf-8") as handle:
            if not self._header_written and self.header is not None:
                handle.write(self.header + LINE_SEP)
                self._header_written = True
            for row in row_list:
                handle.write(row + LINE_SEP)

        logger.debug("Appended %d rows to %s", len(row_list), self.file_path)
        return len(row_list)

    def write_table(self, table: np.ndarray) -> int:
        if table.ndim != 2:
            raise ValueError("table must be two-dimensional")
        return self.append_rows(format_row(row) for row in table)


__all__ = [
    "IncrementalCSVWriter",
    "format_row",
    "rolling_apply",
    "rolling_table",
]
