"""Command-line entry point computing window statistics over a numeric file."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .accumulator import Accumulator
from .location import Maximum, Minimum, mean, value_range
from .reporting import LINE_SEP, IncrementalCSVWriter, format_row
from .summary_statistics import WindowSummary
from .sums import Length, Sum, SumInt, power_sum
from .value_reader import ValueReader
from .windowing import IncrementalStatistic, cumulative_events, sliding_events

logger = logging.getLogger(__name__)

STATS_SUFFIX = "_Stats.csv"
PARTIAL_SUFFIX = ".part"
CHUNK_ROWS = 1024
DEFAULT_STATS = "mean,minimum,maximum"

STATISTICS: Dict[str, Callable[[], Accumulator]] = {
    "length": Length,
    "sum": Sum,
    "sum_int": SumInt,
    "sum_sq": lambda: power_sum(2),
    "mean": mean,
    "minimum": Minimum,
    "maximum": Maximum,
    "range": value_range,
}


@dataclass
class RunStats:
    values_read: int = 0
    rows_skipped: int = 0
    rows_written: int = 0
    output_path: Optional[Path] = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute running or sliding-window statistics over a numeric file.",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Text file with one value per line, or a CSV file when --column is given.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help=f"Output CSV path (default: <input>{STATS_SUFFIX} next to the input).",
    )
    parser.add_argument(
        "--window",
        type=int,
        metavar="N",
        help="Sliding window size; omit to use the whole stream as one window.",
    )
    parser.add_argument(
        "--column",
        help="Read values from this CSV column instead of one value per line.",
    )
    parser.add_argument(
        "--delimiter",
        default=",",
        help="CSV delimiter used with --column (default: ',').",
    )
    parser.add_argument(
        "--stats",
        default=DEFAULT_STATS,
        help=(
            "Comma separated statistics to compute, any of "
            f"{', '.join(sorted(STATISTICS))} (default: {DEFAULT_STATS})."
        ),
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Log level for diagnostic output.",
    )
    return parser


def parse_stat_names(text: str) -> List[str]:
    names = [name.strip() for name in text.split(",") if name.strip()]
    unknown = [name for name in names if name not in STATISTICS]
    if unknown:
        raise ValueError(f"Unknown statistics: {', '.join(unknown)}")
    if not names:
        raise ValueError("At least one statistic must be requested")
    return names


def process_file(
    input_path: Path,
    output_path: Path,
    stat_names: List[str],
    *,
    window_size: Optional[int],
    column: Optional[str] = None,
    delimiter: str = ",",
) -> RunStats:
    stats = RunStats(output_path=output_path)
    reader = ValueReader(input_path, column=column, delimiter=delimiter)

    partial_path = output_path.with_name(output_path.name + PARTIAL_SUFFIX)
    if partial_path.exists():
        partial_path.unlink()
    writer = IncrementalCSVWriter(partial_path, ",".join(["value"] + stat_names))

    drivers = [IncrementalStatistic(STATISTICS[name]()) for name in stat_names]
    summary = WindowSummary(window_size)
    pending: List[str] = []

    try:
        with reader:
            if window_size is None:
                events = cumulative_events(reader)
            else:
                events = sliding_events(reader, window_size)

            for event in events:
                summary.add_value(event.incoming)
                for driver in drivers:
                    driver.push_event(event)
                pending.append(format_row([event.incoming] + [driver.value() for driver in drivers]))
                if len(pending) >= CHUNK_ROWS:
                    stats.rows_written += writer.append_rows(pending)
                    pending = []

            stats.values_read = reader.values_read
            stats.rows_skipped = reader.rows_skipped

        stats.rows_written += writer.append_rows(pending)
    except Exception:
        if partial_path.exists():
            partial_path.unlink()
        raise
    if not partial_path.exists():
        # No values: the report holds only the header.
        partial_path.write_text(writer.header + LINE_SEP, encoding="utf-8")
    partial_path.replace(output_path)

    if summary.get_n():
        logger.info(
            "Final window: n=%d mean=%g std=%g min=%g max=%g",
            summary.get_n(),
            summary.get_mean(),
            summary.get_standard_deviation(),
            summary.get_min(),
            summary.get_max(),
        )
    return stats


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.window is not None and args.window < 1:
        parser.error("--window must be at least 1.")

    try:
        stat_names = parse_stat_names(args.stats)
    except ValueError as exc:
        parser.error(str(exc))

    output_path = args.output or args.input.with_name(f"{args.input.name}{STATS_SUFFIX}")

    logger.info("Processing %s", args.input)
    try:
        stats = process_file(
            args.input,
            output_path,
            stat_names,
            window_size=args.window,
            column=args.column,
            delimiter=args.delimiter,
        )
    except FileNotFoundError as exc:
        logger.error(str(exc))
        return 1
    except ValueError as exc:
        logger.error("Failed processing %s: %s", args.input, exc)
        return 1

    logger.info(
        "Finished %s: values=%d, skipped=%d, rows=%d -> %s",
        args.input.name,
        stats.values_read,
        stats.rows_skipped,
        stats.rows_written,
        stats.output_path,
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
