"""
Property-based tests for the interval tree using Hypothesis.

Each property is checked against the linear scan reference or against the
plain definition of half-open containment (start <= x < end).
"""

import pytest
from collections import Counter
from hypothesis import given, strategies as st, settings
from hypothesis.strategies import lists, tuples, integers

from interval_index.interval_node import IntervalNode
from interval_index.linear_scan import LinearScanIndex

LOW = -1000
HIGH = 1000


# Strategy for any (start, end) pair inside the index bounds, including
# zero- and negative-length ones
any_range = tuples(integers(min_value=LOW, max_value=HIGH),
                   integers(min_value=LOW, max_value=HIGH))

ranges_strategy = lists(any_range, min_size=0, max_size=100)
points_strategy = lists(integers(min_value=LOW - 5, max_value=HIGH + 5), min_size=1, max_size=50)


def build_tree(ranges, sort=True):
    """Insert ranges with their list position as payload."""
    tree = IntervalNode(LOW, HIGH + 1)
    for i, (start, end) in enumerate(ranges):
        tree.insert(start, end, i)
    if sort:
        tree.sort()
    return tree


def build_reference(ranges):
    index = LinearScanIndex(LOW, HIGH + 1)
    for i, (start, end) in enumerate(ranges):
        index.insert(start, end, i)
    return index.sort()


def valid_ranges(ranges):
    return [(start, end) for start, end in ranges if end > start]


# Property 1: A record is returned iff it contains the point
@given(ranges_strategy, points_strategy)
@settings(max_examples=500)
def test_containment_correctness(ranges, points):
    """
    Property: query(x) returns exactly the inserted ranges with start <= x < end.
    """
    tree = build_tree(ranges)

    for x in points:
        found = sorted(interval.data for interval in tree.query(x))
        expected = [i for i, (start, end) in enumerate(ranges) if start <= x < end]
        assert found == expected, \
            f"Containment mismatch at x={x}: found={found}, expected={expected}"


# Property 2: Tree agrees with the linear scan reference
@given(ranges_strategy, points_strategy)
def test_matches_linear_scan(ranges, points):
    """
    Property: tree and linear scan return the same multiset of records.
    """
    tree = build_tree(ranges)
    reference = build_reference(ranges)

    for x in points:
        assert Counter(tree.query(x)) == Counter(reference.query(x)), \
            f"Tree and linear scan disagree at x={x}"


# Property 3: Degenerate intervals are never stored
@given(ranges_strategy, lists(any_range, min_size=1, max_size=20))
def test_degenerate_rejection(ranges, extra):
    """
    Property: inserting (start, end) with end <= start changes neither
    len() nor iteration.
    """
    tree = build_tree(ranges, sort=False)
    size_before = len(tree)
    records_before = Counter(tree)

    for start, end in extra:
        if end <= start:
            tree.insert(start, end, "degenerate")

    assert len(tree) == size_before
    assert Counter(tree) == records_before
    assert all(interval.data != "degenerate" for interval in tree)


# Property 4: Size counts every valid insertion, duplicates included
@given(ranges_strategy)
def test_size_consistency(ranges):
    """
    Property: len(tree) == number of inserted ranges with end > start.
    """
    tree = build_tree(ranges)
    assert len(tree) == len(valid_ranges(ranges)), \
        f"Size mismatch: tree={len(tree)}, expected={len(valid_ranges(ranges))}"


@given(any_range, integers(min_value=2, max_value=10))
def test_identical_ranges_counted_separately(r, copies):
    """
    Property: the same tuple inserted several times is stored several times.
    """
    start, end = r
    tree = IntervalNode(LOW, HIGH + 1)
    for _ in range(copies):
        tree.insert(start, end, "same")
    tree.sort()

    expected = copies if end > start else 0
    assert len(tree) == expected
    assert len(tree.query(start)) == expected


# Property 5: Iteration yields all valid records as a multiset
@given(ranges_strategy)
def test_enumeration_completeness(ranges):
    """
    Property: iterating the tree yields every stored record exactly once.
    """
    tree = build_tree(ranges)

    enumerated = Counter((interval.start, interval.end, interval.data) for interval in tree)
    expected = Counter((start, end, i) for i, (start, end) in enumerate(ranges) if end > start)

    assert enumerated == expected


# Property 6: Sorting twice changes nothing
@given(ranges_strategy, points_strategy)
def test_idempotent_sort(ranges, points):
    """
    Property: sort(); sort() gives the same query results as a single sort().
    """
    once = build_tree(ranges)
    twice = build_tree(ranges).sort()

    for x in points:
        assert once.query(x) == twice.query(x)


# Property 7: No record is reported twice
@given(ranges_strategy, points_strategy)
def test_no_duplicate_matches(ranges, points):
    """
    Property: query(x) never contains the same stored record object twice.
    """
    tree = build_tree(ranges)

    for x in points:
        found = tree.query(x)
        assert len({id(interval) for interval in found}) == len(found), \
            f"Duplicate match at x={x}"


# Property 8: Insertion order does not affect the answer
@given(ranges_strategy, points_strategy)
def test_order_independence(ranges, points):
    """
    Property: inserting the ranges in reverse gives the same matches.
    """
    if len(ranges) < 2:
        return  # Skip for trivial cases

    forward = build_tree(ranges)
    backward = IntervalNode(LOW, HIGH + 1)
    for i, (start, end) in reversed(list(enumerate(ranges))):
        backward.insert(start, end, i)
    backward.sort()

    for x in points:
        assert sorted(forward.query(x)) == sorted(backward.query(x)), \
            f"Order dependent at x={x}"


# Property 9: Single valid interval answers like the definition
@given(integers(min_value=LOW, max_value=HIGH - 1),
       integers(min_value=1, max_value=100),
       points_strategy)
def test_singleton_tree(start, length, points):
    """
    Property: a tree holding one interval answers queries without any
    children or mid-lists.
    """
    end = min(start + length, HIGH + 1)
    tree = IntervalNode(LOW, HIGH + 1)
    tree.insert(start, end, "only")
    tree.sort()

    for x in points:
        expected = [(start, end, "only")] if start <= x < end else []
        assert tree.query(x) == expected

    assert tree.left_subtree is None
    assert tree.right_subtree is None
    assert tree.mid_sorted_by_start == []
    assert tree.mid_sorted_by_end == []


# Property 10: Mid-lists respect the ordering used by the early-exit scans
@given(ranges_strategy)
def test_mid_lists_sorted(ranges):
    """
    Property: after sort() every branching node has by-start ascending and
    by-end descending mid-lists holding the same records.
    """
    tree = build_tree(ranges)

    stack = [tree]
    while stack:
        node = stack.pop()
        starts = [interval.start for interval in node.mid_sorted_by_start]
        ends = [interval.end for interval in node.mid_sorted_by_end]
        assert starts == sorted(starts)
        assert ends == sorted(ends, reverse=True)
        assert Counter(map(id, node.mid_sorted_by_start)) == Counter(map(id, node.mid_sorted_by_end))
        for interval in node.mid_sorted_by_start:
            assert interval.start <= node.center < interval.end
        stack.extend(child for child in (node.left_subtree, node.right_subtree) if child is not None)


# Property 11: Small trees and intervals beyond the tree bounds
@st.composite
def bounded_tree_input(draw):
    """Draw small tree bounds plus ranges and points reaching well past them."""
    low = draw(integers(min_value=-20, max_value=20))
    width = draw(integers(min_value=1, max_value=4))
    reach = integers(min_value=low - 30, max_value=low + width + 30)
    ranges = draw(lists(tuples(reach, reach), min_size=0, max_size=60))
    points = draw(lists(reach, min_size=1, max_size=30))
    return low, low + width, ranges, points


@given(bounded_tree_input())
@settings(max_examples=500)
def test_out_of_bounds_matches_linear_scan(data):
    """
    Property: with bounds as narrow as one unit, the tree stores every valid
    range and answers like the linear scan reference.
    """
    low, high, ranges, points = data

    tree = IntervalNode(low, high)
    reference = LinearScanIndex(low, high)
    for i, (start, end) in enumerate(ranges):
        tree.insert(start, end, i)
        reference.insert(start, end, i)
    tree.sort()
    reference.sort()

    assert len(tree) == len(reference)
    assert Counter(tree) == Counter(reference)
    for x in points:
        assert Counter(tree.query(x)) == Counter(reference.query(x)), \
            f"Mismatch at x={x} for bounds [{low}, {high})"


if __name__ == "__main__":
    # Run pytest
    pytest.main([__file__, "-v", "--tb=short"])
