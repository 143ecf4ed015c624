"""
Linear Scan Index - Reference Implementation

Brute-force counterpart of IntervalNode with the same contract. Every query
walks the whole interval list, so it is O(n) per lookup, but it is simple
enough to serve as the correctness oracle for the tree and as the baseline in
compare_linear.
"""

from typing import Any, Iterator, List

from interval_index.interval_node import Interval, UnsortedTreeError


class LinearScanIndex:
    """Flat list of intervals in [min, max), answering queries by scanning all of them."""

    def __init__(self, min: int, max: int):
        if not min < max:
            raise ValueError(f"index range must satisfy min < max, got [{min}, {max})")

        self.min = min
        self.max = max
        self.intervals: List[Interval] = []
        self.finalized = True

    def insert(self, start: int, end: int, data: Any = None):
        if end - start <= 0:
            return
        self.intervals.append(Interval(start, end, data))
        self.finalized = False

    def sort(self) -> 'LinearScanIndex':
        # Not needed for correctness, keeps query output ordered by start
        self.intervals.sort(key=lambda interval: interval.start)
        self.finalized = True
        return self

    def query(self, x: int) -> List[Interval]:
        """
        Find all intervals containing point x by checking every stored interval.

        Raises:
            UnsortedTreeError: if intervals were inserted after the last sort()
        """
        if not self.finalized:
            raise UnsortedTreeError(
                f"index [{self.min}, {self.max}) has unsorted intervals, call sort() before query()")

        return [interval for interval in self.intervals
                if interval.start <= x < interval.end]

    def __len__(self) -> int:
        return len(self.intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)
