"""Exceptions raised by the window statistics accumulators."""

from __future__ import annotations


class EmptyWindowError(RuntimeError):
    """Raised when an order statistic is extracted before any element arrived."""

    def __init__(self, statistic: str) -> None:
        super().__init__(f"{statistic}: no element has been inserted into the window")
        self.statistic = statistic


__all__ = ["EmptyWindowError"]
