#!/usr/bin/env python3
"""
Utility to compare interval mode against point-by-point evaluation.

Runs part two twice: once with whole seed intervals split through the
pipeline, once by expanding every seed interval into single values and
scanning each stage's rules for the one that covers the value. The point
scan does not use the interval engine, so the two results are independent.
Both must agree on the lowest location.
"""

import sys
import time

from day_5.software_reference.almanac import (
    lowest_location_for_seed_ranges,
    parse_almanac,
)

DEFAULT_MAX_POINTS = 1_000_000


def map_value(pipeline, value):
    """Follow one value through every stage by direct rule scan."""
    for stage in pipeline:
        for rule in stage.rules:
            if rule.source_start <= value < rule.source_start + rule.length:
                value = rule.dest_start + (value - rule.source_start)
                break
    return value


def run_intervals(almanac):
    """Run the interval engine over the seed ranges."""
    start_time = time.time()
    result = lowest_location_for_seed_ranges(almanac)
    return {'result': result, 'elapsed': time.time() - start_time}


def run_points(almanac, max_points=DEFAULT_MAX_POINTS):
    """
    Map every seed value of every seed range on its own.

    Returns:
        dict with 'result' and 'elapsed', or None if the seed ranges hold
        more than max_points values
    """
    intervals = almanac.seed_intervals()
    total = sum(interval.end - interval.start + 1 for interval in intervals)
    if total > max_points:
        return None

    start_time = time.time()
    points = [
        value
        for interval in intervals
        for value in range(interval.start, interval.end + 1)
    ]
    result = min(map_value(almanac.pipeline, value) for value in points)

    return {'result': result, 'elapsed': time.time() - start_time, 'points': total}


def compare(almanac, max_points=DEFAULT_MAX_POINTS):
    intervals = run_intervals(almanac)
    points = run_points(almanac, max_points)
    return {
        'intervals': intervals,
        'points': points,
        'match': points is None or points['result'] == intervals['result'],
    }


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description='Compare interval and point-by-point almanac evaluation'
    )
    parser.add_argument('input_file', type=argparse.FileType('r'),
                       help='Puzzle input')
    parser.add_argument('--max-points', type=int, default=DEFAULT_MAX_POINTS,
                       help='Skip point mode above this many seed values')
    args = parser.parse_args()

    try:
        almanac = parse_almanac(args.input_file.read())
        report = compare(almanac, args.max_points)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("=" * 60)
    print("Almanac: intervals vs points")
    print("=" * 60)
    print(f"Interval mode: {report['intervals']['result']} "
          f"({report['intervals']['elapsed']:.4f}s)")

    if report['points'] is None:
        print(f"Point mode:    skipped (more than {args.max_points} seed values)")
        return 0

    print(f"Point mode:    {report['points']['result']} "
          f"({report['points']['elapsed']:.4f}s, {report['points']['points']} values)")

    if report['match']:
        print(f"\n✓ Results match: {report['points']['result']}")
        return 0

    print("\n✗ Results differ")
    return 1


if __name__ == '__main__':
    sys.exit(main())
