from __future__ import annotations

import pytest

from winstats import (
    EmptyWindowError,
    IncrementalStatistic,
    Minimum,
    SlidingWindow,
    WindowEvent,
    WindowSummary,
    cumulative_events,
    mean,
    sliding_events,
)


def test_sliding_events_grow_then_evict_oldest():
    events = list(sliding_events([5, 3, 8, 1, 9], 3))
    assert events == [
        WindowEvent(5, None),
        WindowEvent(3, None),
        WindowEvent(8, None),
        WindowEvent(1, 5),
        WindowEvent(9, 3),
    ]


def test_sliding_events_consume_lazily():
    def endless():
        value = 0
        while True:
            value += 1
            yield value

    events = sliding_events(endless(), 2)
    assert [next(events) for _ in range(4)] == [(1, None), (2, None), (3, 1), (4, 2)]


def test_sliding_events_reject_empty_window():
    with pytest.raises(ValueError):
        list(sliding_events([1, 2], 0))


def test_sliding_window_buffers_only_window_size_values():
    window = SlidingWindow(2)
    assert window.admit(5) == WindowEvent(5, None)
    assert window.admit(3) == WindowEvent(3, None)
    assert window.admit(8) == WindowEvent(8, 5)
    assert window.admit(1) == WindowEvent(1, 3)
    assert len(window) == 2


def test_unbounded_sliding_window_never_evicts():
    window = SlidingWindow(None)
    assert all(window.admit(value).grows for value in range(10))
    assert len(window) == 0

    with pytest.raises(ValueError):
        SlidingWindow(0)


def test_cumulative_events_never_evict():
    assert all(event.grows for event in cumulative_events(range(10)))


def test_incremental_statistic_tracks_state():
    stat = IncrementalStatistic(Minimum())
    stat.push(5)
    stat.push(3)
    stat.push_event(WindowEvent(8, 5))
    assert stat.value() == 3
    assert stat.count == 3

    stat.reset()
    assert stat.count == 0
    with pytest.raises(EmptyWindowError):
        stat.value()


def test_incremental_mean_over_whole_stream():
    stat = IncrementalStatistic(mean())
    for value in (2.0, 4.0, 6.0):
        stat.push(value)
    assert stat.value() == pytest.approx(4.0)


def test_window_summary_over_sliding_window():
    summary = WindowSummary(window_size=3)
    for value in (1.0, 2.0, 3.0, 4.0, 5.0):
        summary.add_value(value)

    assert summary.get_n() == 3
    assert summary.get_sum() == pytest.approx(12.0)
    assert summary.get_mean() == pytest.approx(4.0)
    assert summary.get_variance() == pytest.approx(1.0)
    assert summary.get_standard_deviation() == pytest.approx(1.0)
    assert summary.get_min() == 3.0
    assert summary.get_max() == 5.0
    assert summary.get_range() == 2.0


def test_window_summary_over_whole_stream():
    summary = WindowSummary()
    for value in (2, 4, 4, 4, 5, 5, 7, 9):
        summary.add_value(value)

    assert summary.get_n() == 8
    assert summary.get_mean() == pytest.approx(5.0)
    assert summary.get_variance() == pytest.approx(32 / 7)
    assert summary.get_min() == 2
    assert summary.get_max() == 9


def test_window_summary_degenerate_cases():
    summary = WindowSummary(window_size=4)
    assert summary.get_n() == 0
    assert summary.get_mean() == 0.0
    assert summary.get_variance() == 0.0
    with pytest.raises(EmptyWindowError):
        summary.get_min()

    summary.add_value(3.5)
    assert summary.get_variance() == 0.0
    assert summary.get_range() == 0.0

    with pytest.raises(ValueError):
        WindowSummary(window_size=0)


def test_window_summary_matches_sliding_events():
    values = [4.0, -1.0, 7.5, 2.0, 2.0, 9.0, -3.0]
    summary = WindowSummary(window_size=3)
    means = []
    for value in values:
        summary.add_value(value)
        means.append(summary.get_mean())

    stat = IncrementalStatistic(mean())
    expected = []
    for event in sliding_events(values, 3):
        stat.push_event(event)
        expected.append(stat.value())
    assert means == pytest.approx(expected)
    assert summary.window_size == 3
