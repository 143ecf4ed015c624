#!/usr/bin/env python3
"""
Interval Checker - Count Query Points Covered by Any Range

Loads half-open ranges and query points from a text file, indexes the ranges
in an IntervalNode tree and reports how many query points fall inside at
least one range.

Input format:
    10-20            range [10, 20), payload is its index in the range list
    15-25-exon2      range [15, 25) with payload "exon2"
    <blank line>
    17               query point
    55
"""

import re
import sys
from typing import Any, Dict, List, Optional, Tuple

from interval_index.interval_node import IntervalNode, NodeState

RANGE_LINE = re.compile(r'^(-?\d+)-(-?\d+)(?:-(.+))?$')


def parse_input(text: str) -> Tuple[List[Tuple[int, int, Any]], List[int]]:
    """
    Parse ranges and query points.

    Args:
        text: Input text, ranges first, then a blank line, then query points

    Returns:
        tuple: (ranges, checks) where ranges is list of (start, end, data)
               tuples and checks is list of integers to look up

    Raises:
        ValueError: if a line in the range section is not a valid range
    """
    ranges = []
    checks = []
    in_ranges = True

    for line_number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()

        if in_ranges:
            if not line:
                in_ranges = False
                continue
            match = RANGE_LINE.match(line)
            if match is None:
                raise ValueError(f"line {line_number}: expected <start>-<end>[-<label>], got {line!r}")
            start, end, label = match.groups()
            data = label if label is not None else len(ranges)
            ranges.append((int(start), int(end), data))
        elif line:
            checks.append(int(line))

    return ranges, checks


def read_input(filename: str) -> Tuple[List[Tuple[int, int, Any]], List[int]]:
    """Read and parse an input file, see parse_input()."""
    with open(filename) as f:
        return parse_input(f.read())


def index_bounds(ranges, checks) -> Tuple[int, int]:
    """
    Smallest [min, max) covering every stored range and every query point.

    Ranges with end <= start are never stored, so they do not widen the bounds.

    Returns:
        tuple: (min, max) with min < max, (0, 1) when there is nothing to cover
    """
    stored = [(start, end) for start, end, _ in ranges if end > start]
    lows = [start for start, _ in stored] + list(checks)
    highs = [end for _, end in stored] + [x + 1 for x in checks]

    if not lows:
        return 0, 1

    low = min(lows)
    high = max(highs)
    if high <= low:
        high = low + 1
    return low, high


def build_index(ranges, min: Optional[int] = None, max: Optional[int] = None,
                index_class=IntervalNode):
    """
    Insert all ranges into a new index and finalize it.

    Args:
        ranges: List of (start, end, data) tuples
        min, max: Index bounds, derived from the ranges when omitted
        index_class: IntervalNode or any class with the same contract

    Returns:
        Finalized index, ready for queries
    """
    if min is None or max is None:
        low, high = index_bounds(ranges, [])
        min = low if min is None else min
        max = high if max is None else max

    index = index_class(min, max)
    for start, end, data in ranges:
        index.insert(start, end, data)
    return index.sort()


def count_covered(index, checks) -> int:
    """Count how many query points fall within at least one indexed range."""
    return sum(1 for x in checks if index.query(x))


def tree_statistics(tree: IntervalNode) -> Dict[str, int]:
    """
    Walk the tree and collect shape statistics.

    Returns:
        dict: intervals, nodes, branching/singleton node counts, depth and the
              largest mid-list size
    """
    stats = {
        'intervals': len(tree),
        'nodes': 0,
        'branching_nodes': 0,
        'singleton_nodes': 0,
        'depth': 0,
        'max_mid': 0,
    }

    stack = [(tree, 1)]
    while stack:
        node, depth = stack.pop()
        stats['nodes'] += 1
        stats['depth'] = max(stats['depth'], depth)

        if node.state is NodeState.SINGLETON:
            stats['singleton_nodes'] += 1
        elif node.state is NodeState.BRANCHING:
            stats['branching_nodes'] += 1
            stats['max_mid'] = max(stats['max_mid'], len(node.mid_sorted_by_start))

        for child in (node.left_subtree, node.right_subtree):
            if child is not None:
                stack.append((child, depth + 1))

    return stats


def main(argv=None):
    """Command-line interface for the interval checker."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Count query points covered by a set of half-open ranges'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                        default=sys.stdin,
                        help='Input file with ranges and query points (default: stdin)')
    parser.add_argument('--min', type=int, default=None,
                        help='Lower bound of the index (default: smallest coordinate)')
    parser.add_argument('--max', type=int, default=None,
                        help='Upper bound of the index (default: largest coordinate + 1)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print matches per query point and tree statistics')
    args = parser.parse_args(argv)

    try:
        ranges, checks = parse_input(args.input_file.read())
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    valid_ranges = [r for r in ranges if r[1] > r[0]]
    if not valid_ranges:
        print("Error: Need at least 1 range with end > start", file=sys.stderr)
        return 1

    low, high = index_bounds(valid_ranges, checks)
    low = low if args.min is None else args.min
    high = high if args.max is None else args.max

    try:
        tree = build_index(valid_ranges, low, high)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Indexed {len(tree)} ranges in [{low}, {high})", file=sys.stderr)

    covered = 0
    for x in checks:
        matches = tree.query(x)
        if matches:
            covered += 1
        if args.verbose:
            labels = ", ".join(str(interval.data) for interval in matches) or "-"
            print(f"  {x}: {labels}", file=sys.stderr)

    print(covered)

    if args.verbose:
        stats = tree_statistics(tree)
        print("\nStatistics:", file=sys.stderr)
        print(f"  Intervals: {stats['intervals']}", file=sys.stderr)
        print(f"  Nodes: {stats['nodes']}", file=sys.stderr)
        print(f"  Branching nodes: {stats['branching_nodes']}", file=sys.stderr)
        print(f"  Singleton nodes: {stats['singleton_nodes']}", file=sys.stderr)
        print(f"  Depth: {stats['depth']}", file=sys.stderr)
        print(f"  Largest mid-list: {stats['max_mid']}", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
