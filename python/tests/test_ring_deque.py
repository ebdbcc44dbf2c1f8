import pytest

from winstats import RingDeque


def test_wraparound_and_growth_preserve_order():
    dq = RingDeque(capacity=3)
    for stamp, value in enumerate("abc", 1):
        dq.push_back(stamp, value)

    assert dq.pop_front() == (1, "a")
    dq.push_back(4, "d")
    assert list(dq) == [(2, "b"), (3, "c"), (4, "d")]
    assert dq.capacity == 3

    assert dq.back_value() == "d"
    assert dq.pop_back() == (4, "d")
    dq.push_back(5, "e")
    dq.push_back(6, "f")

    assert dq.capacity == 6
    assert list(dq) == [(2, "b"), (3, "c"), (5, "e"), (6, "f")]
    assert dq.front_stamp() == 2
    assert dq.front_value() == "b"
    assert (dq.pushes, dq.pops) == (6, 2)


def test_empty_deque_operations_raise():
    dq = RingDeque()
    assert not dq
    assert len(dq) == 0
    with pytest.raises(IndexError):
        dq.pop_front()
    with pytest.raises(IndexError):
        dq.pop_back()
    with pytest.raises(IndexError):
        dq.front_value()


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        RingDeque(capacity=0)
