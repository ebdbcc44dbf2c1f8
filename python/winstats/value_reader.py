"""Streaming reader for numeric values stored in text or CSV files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import IO, Iterator, Optional, Union

logger = logging.getLogger(__name__)

MISSING_VALUES = {"", "?", "na", "n/a", "null", "none"}


class ValueReader:
    """Iterates over float values one line or CSV row at a time.

    Without ``column`` every non-empty line holds one value. With ``column``
    the file is read as CSV with a header row and the named column is used.
    Missing markers are skipped; anything else that is not a number raises
    ``ValueError``.
    """

    def __init__(
        self,
        path: Union[str, Path],
        *,
        column: Optional[str] = None,
        delimiter: str = ",",
    ) -> None:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Input file does not exist: {path}")

        self.path = path
        self.column = column
        self.delimiter = delimiter
        self.values_read = 0
        self.rows_skipped = 0

        self._file: Optional[IO[str]] = None
        self._rows: Optional[Iterator[tuple]] = None

    # ------------------------------------------------------------------
    def __enter__(self) -> "ValueReader":
        self._open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()

    def close(self) -> None:
        if self._file is not None:
            try:
                self._file.close()
            except OSError:
                logger.debug("Failed to close %s", self.path, exc_info=True)
            finally:
                self._file = None
        self._rows = None

    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[float]:
        while True:
            value = self.next_value()
            if value is None:
                break
            yield value

    def next_value(self) -> Optional[float]:
        if self._rows is None:
            self._open()
        assert self._rows is not None

        for line_number, raw in self._rows:
            text = raw.strip() if raw is not None else ""
            if text.lower() in MISSING_VALUES:
                self.rows_skipped += 1
                logger.debug("Skipping missing value at %s:%d", self.path, line_number)
                continue
            try:
                value = float(text)
            except ValueError:
                raise ValueError(f"{self.path}:{line_number}: not a number: {text!r}") from None
            self.values_read += 1
            return value
        return None

    # ------------------------------------------------------------------
    def _open(self) -> None:
        if self._file is not None:
            return
        self._file = self.path.open("r", newline="", encoding="utf-8")
        if self.column is None:
            self._rows = self._plain_rows(self._file)
        else:
            self._rows = self._column_rows(self._file)

    def _plain_rows(self, handle: IO[str]) -> Iterator[tuple]:
        for line_number, line in enumerate(handle, 1):
            if not line.strip():
                continue
            yield line_number, line

    def _column_rows(self, handle: IO[str]) -> Iterator[tuple]:
        reader = csv.DictReader(handle, delimiter=self.delimiter)
        if reader.fieldnames is None:
            raise ValueError(f"CSV {self.path} is missing a header row")
        if self.column not in reader.fieldnames:
            raise ValueError(f"CSV {self.path} has no column {self.column!r}")
        for row in reader:
            # Header is line 1.
            yield reader.line_num, row.get(self.column)


__all__ = ["MISSING_VALUES", "ValueReader"]
