#!/usr/bin/env python3
"""
Utility to compare the interval tree against the linear scan reference.

Builds both indexes from the same input, runs every query point through
each of them and reports whether the matches agree, along with build and
query timings.
"""

import sys
import time

from interval_index.interval_checker import build_index, index_bounds, read_input
from interval_index.interval_node import IntervalNode
from interval_index.linear_scan import LinearScanIndex


def run_index(index_class, ranges, checks, bounds):
    """
    Build an index of the given class and query every check point.

    Returns:
        dict: 'result' (sorted matches per check point), 'size',
              'build_time' and 'query_time' in seconds
    """
    low, high = bounds

    start_time = time.perf_counter()
    index = build_index(ranges, low, high, index_class=index_class)
    build_time = time.perf_counter() - start_time

    start_time = time.perf_counter()
    matches = [index.query(x) for x in checks]
    query_time = time.perf_counter() - start_time

    return {
        'result': [sorted((m.start, m.end) for m in found) for found in matches],
        'size': len(index),
        'build_time': build_time,
        'query_time': query_time,
    }


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description='Compare interval tree against linear scan reference'
    )
    parser.add_argument('input_file', help='Input file with ranges and query points')
    args = parser.parse_args(argv)

    try:
        ranges, checks = read_input(args.input_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    bounds = index_bounds(ranges, checks)

    print("=" * 70)
    print("Interval Tree vs Linear Scan Comparison")
    print("=" * 70)
    print(f"  Ranges: {len(ranges)}")
    print(f"  Query points: {len(checks)}")
    print(f"  Bounds: [{bounds[0]}, {bounds[1]})")
    print()

    print("Running interval tree...")
    tree_stats = run_index(IntervalNode, ranges, checks, bounds)
    print(f"  Size: {tree_stats['size']}")
    print(f"  Build time: {tree_stats['build_time']:.6f}s")
    print(f"  Query time: {tree_stats['query_time']:.6f}s")
    print()

    print("Running linear scan...")
    scan_stats = run_index(LinearScanIndex, ranges, checks, bounds)
    print(f"  Size: {scan_stats['size']}")
    print(f"  Build time: {scan_stats['build_time']:.6f}s")
    print(f"  Query time: {scan_stats['query_time']:.6f}s")
    print()

    print("=" * 70)
    print("Comparison")
    print("=" * 70)

    mismatches = [x for x, tree_found, scan_found
                  in zip(checks, tree_stats['result'], scan_stats['result'])
                  if tree_found != scan_found]

    if tree_stats['size'] != scan_stats['size']:
        print(f"✗ Sizes differ: tree={tree_stats['size']}, scan={scan_stats['size']}")
        return 1

    if mismatches:
        print(f"✗ Results differ at {len(mismatches)} query points:")
        for x in mismatches[:10]:
            print(f"    {x}")
        return 1

    print(f"✓ Results match for {len(checks)} query points")

    if tree_stats['query_time'] > 0:
        speedup = scan_stats['query_time'] / tree_stats['query_time']
        print(f"  Speed: tree queries {speedup:.2f}x faster than linear scan")

    print()
    print("✓ All checks passed!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
