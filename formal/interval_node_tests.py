"""
Concrete test cases for IntervalNode and LinearScanIndex edge cases.
"""

import pytest

from interval_index.interval_node import Interval, IntervalNode, NodeState, UnsortedTreeError
from interval_index.linear_scan import LinearScanIndex


def payloads(intervals):
    return sorted(interval.data for interval in intervals)


def test_example_scenario():
    """Three ranges over [0, 100), two of them overlapping."""
    tree = IntervalNode(0, 100)
    tree.insert(10, 20, "A")
    tree.insert(15, 25, "B")
    tree.insert(50, 60, "C")
    tree.sort()

    assert payloads(tree.query(17)) == ["A", "B"]
    assert payloads(tree.query(55)) == ["C"]
    assert tree.query(99) == []
    assert len(tree) == 3


@pytest.mark.parametrize("x, contained", [
    (4, False),
    (5, True),
    (9, True),
    (10, False),
])
def test_boundary_exactness(x, contained):
    """[5, 10) includes its start and excludes its end."""
    tree = IntervalNode(0, 100)
    tree.insert(5, 10, "r")
    tree.insert(60, 70, "other")
    tree.sort()

    assert (Interval(5, 10, "r") in tree.query(x)) == contained


def test_boundary_exactness_singleton():
    tree = IntervalNode(0, 100)
    tree.insert(5, 10, "r")
    tree.sort()

    assert tree.query(4) == []
    assert tree.query(5) == [(5, 10, "r")]
    assert tree.query(9) == [(5, 10, "r")]
    assert tree.query(10) == []


def test_empty_tree():
    tree = IntervalNode(0, 100)

    assert tree.state is NodeState.EMPTY
    assert len(tree) == 0
    assert list(tree) == []
    assert tree.sort().query(50) == []


@pytest.mark.parametrize("start, end", [(10, 10), (10, 9), (0, -5)])
def test_degenerate_intervals_dropped(start, end):
    tree = IntervalNode(0, 100)
    tree.insert(start, end, "bad")

    assert tree.state is NodeState.EMPTY
    assert len(tree) == 0
    assert list(tree) == []
    # Nothing was stored, so the tree is still queryable
    assert tree.query(start) == []


def test_state_transitions():
    """Empty -> singleton -> branching, and no way back."""
    tree = IntervalNode(0, 100)
    assert tree.state is NodeState.EMPTY

    tree.insert(10, 20, "A")
    assert tree.state is NodeState.SINGLETON
    assert tree.single_interval == (10, 20, "A")
    assert tree.left_subtree is None and tree.right_subtree is None
    assert tree.mid_sorted_by_start == [] and tree.mid_sorted_by_end == []

    tree.insert(40, 60, "B")
    assert tree.state is NodeState.BRANCHING
    assert tree.single_interval is None
    # A is entirely left of center 50, B straddles it
    assert tree.left_subtree is not None
    assert tree.left_subtree.state is NodeState.SINGLETON
    assert tree.right_subtree is None
    assert tree.mid_sorted_by_start == [(40, 60, "B")]
    assert tree.mid_sorted_by_end[0] is tree.mid_sorted_by_start[0]

    tree.insert(70, 80, "C")
    assert tree.state is NodeState.BRANCHING
    assert tree.right_subtree.min == 50 and tree.right_subtree.max == 100


def test_interval_ending_at_center_goes_left():
    tree = IntervalNode(0, 100)
    tree.insert(0, 1, "x")
    tree.insert(40, 50, "left")
    tree.insert(50, 51, "mid")

    assert tree.center == 50
    assert [i.data for i in tree.mid_sorted_by_start] == ["mid"]
    assert payloads(tree.left_subtree) == ["left", "x"]


def test_center_is_floor_midpoint():
    assert IntervalNode(0, 5).center == 2
    assert IntervalNode(-5, 0).center == -3
    assert IntervalNode(-3, 4).center == 0


@pytest.mark.parametrize("low, high", [(10, 10), (10, 5)])
def test_construction_requires_min_below_max(low, high):
    with pytest.raises(ValueError):
        IntervalNode(low, high)
    with pytest.raises(ValueError):
        LinearScanIndex(low, high)


def test_query_before_sort_raises():
    tree = IntervalNode(0, 100)
    tree.insert(10, 20, "A")
    tree.insert(15, 25, "B")

    with pytest.raises(UnsortedTreeError):
        tree.query(17)

    tree.sort()
    assert payloads(tree.query(17)) == ["A", "B"]

    # Inserting again invalidates the previous sort
    tree.insert(16, 18, "C")
    with pytest.raises(UnsortedTreeError):
        tree.query(17)
    assert payloads(tree.sort().query(17)) == ["A", "B", "C"]


def test_linear_scan_query_before_sort_raises():
    index = LinearScanIndex(0, 100)
    index.insert(10, 20, "A")

    with pytest.raises(UnsortedTreeError):
        index.query(15)
    assert index.sort().query(15) == [(10, 20, "A")]


def test_len_and_iter_before_sort():
    tree = IntervalNode(0, 100)
    for start in range(0, 90, 10):
        tree.insert(start, start + 15, start)

    assert len(tree) == 9
    assert sorted(interval.data for interval in tree) == list(range(0, 90, 10))


def test_iteration_restarts():
    tree = IntervalNode(0, 100)
    tree.insert(1, 2, "a")
    tree.insert(3, 90, "b")
    tree.insert(95, 99, "c")
    tree.sort()

    assert list(tree) == list(tree)
    assert len(list(tree)) == 3


def test_left_and_mid_matches_ordering():
    """Left subtree matches come before this node's mid matches for x < center."""
    tree = IntervalNode(0, 100)
    tree.insert(10, 30, "left")
    tree.insert(5, 60, "mid")
    tree.insert(70, 80, "right")
    tree.sort()

    assert [i.data for i in tree.query(20)] == ["left", "mid"]
    assert [i.data for i in tree.query(75)] == ["right"]
    assert [i.data for i in tree.query(55)] == ["mid"]


def test_mid_scans_stop_at_first_miss():
    tree = IntervalNode(0, 100)
    tree.insert(45, 55, "narrow")
    tree.insert(10, 90, "wide")
    tree.insert(30, 70, "medium")
    tree.sort()

    assert [i.data for i in tree.mid_sorted_by_start] == ["wide", "medium", "narrow"]
    assert [i.data for i in tree.mid_sorted_by_end] == ["wide", "medium", "narrow"]
    assert [i.data for i in tree.query(20)] == ["wide"]
    assert [i.data for i in tree.query(40)] == ["wide", "medium"]
    assert [i.data for i in tree.query(60)] == ["wide", "medium"]
    assert [i.data for i in tree.query(89)] == ["wide"]
    assert tree.query(90) == []


def test_intervals_outside_node_range():
    """Ranges sticking out of [min, max) are still stored and found."""
    tree = IntervalNode(0, 10)
    tree.insert(-20, 5, "low")
    tree.insert(8, 30, "high")
    tree.sort()

    assert len(tree) == 2
    assert payloads(tree.query(-15)) == ["low"]
    assert payloads(tree.query(25)) == ["high"]


def test_several_intervals_beyond_each_bound():
    """Intervals entirely below min or at/above max pile up in width-1 leaves."""
    tree = IntervalNode(0, 10)
    tree.insert(-5, -1, "below1")
    tree.insert(-4, -2, "below2")
    tree.insert(20, 30, "above1")
    tree.insert(25, 35, "above2")
    tree.insert(10, 11, "at_max")
    tree.sort()

    assert len(tree) == 5
    assert payloads(tree) == ["above1", "above2", "at_max", "below1", "below2"]
    assert payloads(tree.query(-3)) == ["below1", "below2"]
    assert payloads(tree.query(-5)) == ["below1"]
    assert tree.query(-1) == []
    assert payloads(tree.query(10)) == ["at_max"]
    assert payloads(tree.query(27)) == ["above1", "above2"]
    assert payloads(tree.query(32)) == ["above2"]
    assert tree.query(35) == []


def test_width_one_tree_holds_many_intervals():
    tree = IntervalNode(0, 1)
    reference = LinearScanIndex(0, 1)
    ranges = [(-3, 0), (-2, 5), (0, 1), (1, 4), (2, 3), (-10, -9), (0, 2)]
    for i, (start, end) in enumerate(ranges):
        tree.insert(start, end, i)
        reference.insert(start, end, i)
    tree.sort()
    reference.sort()

    assert len(tree) == len(ranges)
    for x in range(-12, 8):
        assert payloads(tree.query(x)) == payloads(reference.query(x))


def test_repr():
    tree = IntervalNode(0, 100)
    tree.insert(1, 2)
    assert repr(tree) == "IntervalNode(min=0, max=100, state=SINGLETON, size=1)"


def test_default_payload_is_none():
    tree = IntervalNode(0, 100)
    tree.insert(1, 2)
    assert tree.sort().query(1) == [Interval(1, 2, None)]
