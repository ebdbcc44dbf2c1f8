import operator
import unittest

from winstats import (
    IncrementalStatistic,
    Length,
    Minimum,
    Sum,
    SumInt,
    WindowEvent,
    cumulative,
    fold,
    premap,
    scan,
    tee,
)


class PremapTest(unittest.TestCase):
    def test_function_is_applied_to_incoming_and_outgoing(self) -> None:
        seen = []

        def scale(value):
            seen.append(value)
            return value * 10

        acc = premap(scale, SumInt())
        results = list(scan(acc, [(1, None), (2, None), (3, 1)]))

        self.assertEqual(results, [10, 30, 50])
        self.assertEqual(seen, [1, 2, 3, 1])

    def test_missing_outgoing_is_not_mapped(self) -> None:
        acc = premap(lambda value: -value, Minimum())
        # A mapping function that rejects None would fail here otherwise.
        self.assertEqual(fold(acc, [WindowEvent(4), WindowEvent(7)]), -7)

    def test_name_defaults_to_inner_accumulator(self) -> None:
        self.assertEqual(premap(abs, Sum()).name, "sum")
        self.assertEqual(premap(abs, Sum(), name="abs_sum").name, "abs_sum")


class TeeTest(unittest.TestCase):
    def test_both_accumulators_see_every_event(self) -> None:
        acc = tee(lambda total, count: (total, count), SumInt(), Length())
        state = acc.initial()
        for event in [(1, None), (2, None), (5, 1)]:
            state = acc.step(state, *event)

        self.assertEqual(acc.extract(state), (7, 2))
        self.assertEqual(acc.name, "sum_int|length")

    def test_tees_nest(self) -> None:
        spread = tee(operator.sub, SumInt(), Length())
        acc = tee(operator.mul, spread, Length())
        self.assertEqual(fold(acc, [(4, None), (6, None)]), (10 - 2) * 2)


class CumulativeTest(unittest.TestCase):
    def test_cumulative_accepts_plain_elements(self) -> None:
        acc = cumulative(Minimum())
        state = acc.initial()
        for value in (5, 2, 9):
            state = acc.step(state, value)

        self.assertEqual(acc.extract(state), 2)
        self.assertEqual(acc.name, "minimum")

    def test_drivers_feed_plain_elements_to_cumulative(self) -> None:
        self.assertEqual(fold(cumulative(Sum()), [1.0, 2.0, 3.0]), 6.0)
        self.assertEqual(list(scan(cumulative(Minimum()), [5, 2, 9])), [5, 2, 2])

    def test_cumulative_composes_with_tee_and_premap(self) -> None:
        average = tee(operator.truediv, cumulative(Sum()), cumulative(Length()))
        self.assertTrue(average.plain_input)
        self.assertEqual(fold(average, [2.0, 4.0, 6.0]), 4.0)

        squares = premap(lambda value: value * value, cumulative(SumInt()))
        self.assertEqual(fold(squares, [1, 2, 3]), 14)

    def test_cumulative_ignores_outgoing_element(self) -> None:
        acc = cumulative(Length())
        self.assertEqual(fold(acc, [WindowEvent(1, None), WindowEvent(2, 1)]), 2)

        mixed = tee(operator.sub, cumulative(Length()), Length())
        self.assertFalse(mixed.plain_input)
        self.assertEqual(fold(mixed, [(1, None), (2, 1), (3, 2)]), 3 - 1)

    def test_object_wrapper_drives_cumulative(self) -> None:
        stat = IncrementalStatistic(cumulative(Sum()))
        for value in (1.0, 2.0):
            stat.push(value)
        self.assertEqual(stat.value(), 3.0)

    def test_window_event_grows_flag(self) -> None:
        self.assertTrue(WindowEvent(1.0).grows)
        self.assertFalse(WindowEvent(1.0, 0.5).grows)


if __name__ == "__main__":  # pragma: no cover - convenience
    unittest.main()
