"""
Centered Interval Tree - Point Containment Index

Indexes a set of half-open integer intervals [start, end), each carrying an
arbitrary payload, and answers "which intervals contain x" queries.

Algorithm:
    Every node covers a fixed range [min, max) and splits it at
    center = (min + max) // 2. Intervals entirely left of the center go to the
    left child, intervals entirely right of it go to the right child, and the
    rest ("mid" intervals) stay in the node, kept in two orderings:
        - by start, ascending  (scanned when x < center)
        - by end, descending   (scanned when x >= center)
    Both scans stop at the first interval that cannot contain x.

Usage is two-phase:
    1. insert() all intervals
    2. sort() once
    3. query() any number of times

Time Complexity:
    insert: O(depth), depth <= log2(max - min)
    sort:   O(n log n)
    query:  O(depth + k) where k is the number of matches
"""

from enum import Enum
from typing import Any, Iterator, List, NamedTuple, Optional


class Interval(NamedTuple):
    """Stored record: half-open range [start, end) plus its payload."""
    start: int
    end: int
    data: Any = None


class NodeState(Enum):
    EMPTY = 0
    SINGLETON = 1
    BRANCHING = 2


class UnsortedTreeError(RuntimeError):
    """Raised when querying a tree that received intervals after its last sort()."""


class IntervalNode:
    """
    Interval tree node for intervals somewhere in the range [min, max).

    A node with zero or one interval skips the subtree/mid-list machinery
    entirely. The second insertion promotes it to a branching node, which it
    stays for the rest of its life (no removal is supported).

    >>> t = IntervalNode(0, 100)
    >>> t.insert(10, 25, "a")
    >>> t.insert(15, 27, "b")
    >>> t.sort().query(24)
    [Interval(start=10, end=25, data='a'), Interval(start=15, end=27, data='b')]
    >>> t.query(25)
    [Interval(start=15, end=27, data='b')]
    """

    __slots__ = ['min', 'max', 'center', 'state', 'single_interval',
                 'left_subtree', 'right_subtree',
                 'mid_sorted_by_start', 'mid_sorted_by_end', 'unsplit', 'finalized']

    def __init__(self, min: int, max: int):
        """
        Create an empty node covering [min, max).

        Args:
            min: Lower bound of the node range (inclusive)
            max: Upper bound of the node range (exclusive)

        Raises:
            ValueError: if min >= max
        """
        if not min < max:
            raise ValueError(f"node range must satisfy min < max, got [{min}, {max})")

        self.min = min
        self.max = max
        self.center = (min + max) // 2

        self.state = NodeState.EMPTY
        self.single_interval: Optional[Interval] = None

        # Created on first write, never removed
        self.left_subtree: Optional['IntervalNode'] = None
        self.right_subtree: Optional['IntervalNode'] = None

        # Same Interval objects in both lists
        self.mid_sorted_by_start: List[Interval] = []
        self.mid_sorted_by_end: List[Interval] = []

        # Intervals missing the center of a width-1 node, which cannot be
        # split further. Only reachable with intervals outside [min, max).
        self.unsplit: List[Interval] = []

        # Nothing inserted yet, so nothing to sort
        self.finalized = True

    def insert(self, start: int, end: int, data: Any = None):
        """
        Add interval [start, end) to the tree.

        Mid-lists are not kept sorted while inserting, call sort() once all
        intervals are in. Intervals of zero or negative length are dropped.
        """
        if end - start <= 0:
            return

        self.finalized = False

        if self.state is NodeState.EMPTY:
            self.single_interval = Interval(start, end, data)
            self.state = NodeState.SINGLETON
        elif self.state is NodeState.SINGLETON:
            previous = self.single_interval
            self.single_interval = None
            self.state = NodeState.BRANCHING
            self._place(previous)
            self._place(Interval(start, end, data))
        else:
            self._place(Interval(start, end, data))

    def _place(self, interval: Interval):
        """Route one record into this (branching) node or one of its children."""
        straddles = interval.start <= self.center < interval.end
        if not straddles and self.max - self.min == 1:
            self.unsplit.append(interval)
        elif interval.end <= self.center:
            if self.left_subtree is None:
                self.left_subtree = IntervalNode(self.min, self.center)
            self.left_subtree.insert(*interval)
        elif interval.start > self.center:
            if self.right_subtree is None:
                self.right_subtree = IntervalNode(self.center, self.max)
            self.right_subtree.insert(*interval)
        else:
            self.mid_sorted_by_start.append(interval)
            self.mid_sorted_by_end.append(interval)

    def sort(self) -> 'IntervalNode':
        """
        Sort the mid-lists of this node and all its descendants.

        Must be invoked after the last insert() and before the first query().
        Calling it again is harmless.

        Returns:
            IntervalNode: self, ready for queries
        """
        if self.state is NodeState.BRANCHING:
            self.mid_sorted_by_start.sort(key=lambda interval: interval.start)
            self.mid_sorted_by_end.sort(key=lambda interval: interval.end, reverse=True)
            if self.left_subtree is not None:
                self.left_subtree.sort()
            if self.right_subtree is not None:
                self.right_subtree.sort()

        self.finalized = True
        return self

    def query(self, x: int) -> List[Interval]:
        """
        Find all intervals containing point x.

        Args:
            x: Point to look up

        Returns:
            list: Interval records with start <= x < end

        Raises:
            UnsortedTreeError: if intervals were inserted after the last sort()
        """
        if not self.finalized:
            raise UnsortedTreeError(
                f"tree [{self.min}, {self.max}) has unsorted intervals, call sort() before query()")

        result = []
        self._query(x, result)
        return result

    def _query(self, x: int, result: List[Interval]):
        if self.state is NodeState.EMPTY:
            return

        if self.state is NodeState.SINGLETON:
            if self.single_interval.start <= x < self.single_interval.end:
                result.append(self.single_interval)
            return

        if x < self.center:
            if self.left_subtree is not None:
                self.left_subtree._query(x, result)
            # Mid intervals straddle center > x, so end > x always holds here
            for interval in self.mid_sorted_by_start:
                if interval.start > x:
                    break
                result.append(interval)
        else:
            for interval in self.mid_sorted_by_end:
                if interval.end <= x:
                    break
                result.append(interval)
            if self.right_subtree is not None:
                self.right_subtree._query(x, result)

        for interval in self.unsplit:
            if interval.start <= x < interval.end:
                result.append(interval)

    def __len__(self) -> int:
        """
        Number of intervals stored in the tree.

        Zero- or negative-length intervals are never stored, so they are not
        counted.
        """
        if self.state is NodeState.EMPTY:
            return 0
        if self.state is NodeState.SINGLETON:
            return 1

        size = len(self.mid_sorted_by_start) + len(self.unsplit)
        if self.left_subtree is not None:
            size += len(self.left_subtree)
        if self.right_subtree is not None:
            size += len(self.right_subtree)
        return size

    def __iter__(self) -> Iterator[Interval]:
        """Yield every stored interval: left subtree, mid intervals, right subtree, unsplit."""
        if self.state is NodeState.EMPTY:
            return
        if self.state is NodeState.SINGLETON:
            yield self.single_interval
            return

        if self.left_subtree is not None:
            yield from self.left_subtree
        yield from self.mid_sorted_by_start
        if self.right_subtree is not None:
            yield from self.right_subtree
        yield from self.unsplit

    def __repr__(self):
        return (f"IntervalNode(min={self.min}, max={self.max}, "
                f"state={self.state.name}, size={len(self)})")
