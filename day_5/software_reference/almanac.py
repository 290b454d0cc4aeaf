#!/usr/bin/env python3
"""
Almanac Remapper - Seed to Location Through Chained Interval Maps

Pushes seed numbers (part one) or seed intervals (part two) through an
ordered list of remapping stages and reports the lowest location reached.

Algorithm:
1. Parse the seed line and every "<source>-to-<destination> map:" block
2. For each stage, apply its rules in order to the not-yet-matched intervals:
   a. The overlap with a rule's source interval is shifted to its destination
   b. The pieces left and right of the source interval stay unmatched
3. Intervals that no rule claims map to themselves
4. Feed the stage output into the next stage, then take the minimum start

Part one is the same pipeline run over length-1 intervals.
"""

import sys
from typing import Iterable, List, NamedTuple, Tuple


class Interval(NamedTuple):
    """Inclusive integer interval [start, end]."""

    start: int
    end: int

    def is_valid(self) -> bool:
        return self.start <= self.end


class RemapRule(NamedTuple):
    """One "dest source length" line of a map block."""

    dest_start: int
    source_start: int
    length: int

    @property
    def source_end(self) -> int:
        return self.source_start + self.length - 1

    @property
    def shift(self) -> int:
        return self.dest_start - self.source_start


class Stage(NamedTuple):
    """A named map block such as "seed-to-soil"."""

    name: str
    rules: Tuple[RemapRule, ...]

    @property
    def source(self) -> str:
        return self.name.split('-to-')[0]

    @property
    def destination(self) -> str:
        return self.name.split('-to-')[-1]


class RuleResult(NamedTuple):
    matched: Tuple[Interval, ...]
    unmatched: Tuple[Interval, ...]


class Almanac(NamedTuple):
    seeds: Tuple[int, ...]
    pipeline: Tuple[Stage, ...]

    def seed_intervals(self) -> Tuple[Interval, ...]:
        """
        Read the seed line as (start, length) pairs.

        Raises:
            ValueError: If the seed values do not come in pairs, or a
                        pair has a length below 1
        """
        if len(self.seeds) % 2:
            raise ValueError(f"Seed ranges need (start, length) pairs, got {len(self.seeds)} values")
        pairs = list(zip(self.seeds[::2], self.seeds[1::2]))
        for start, length in pairs:
            if length < 1:
                raise ValueError(f"Seed range starting at {start}: length must be at least 1, got {length}")
        return tuple(Interval(start, start + length - 1) for start, length in pairs)

    def seed_points(self) -> Tuple[Interval, ...]:
        return tuple(Interval(seed, seed) for seed in self.seeds)


# =============================================================================
# Remapping engine
# =============================================================================

def apply_rule(rule: RemapRule, interval: Interval) -> RuleResult:
    """
    Split an interval against one rule.

    Cases handled by the same arithmetic:

        No overlap        INPUT:   |   |            or        |   |
                          RULE:          |   |          |   |

        Input inside      INPUT:       |       |
                          RULE:    |               |

        Rule inside       INPUT:   |               |
                          RULE:        |       |

        Partial overlap   INPUT:   |      |         or     |      |
                          RULE:       |      |          |      |

    Args:
        rule: Remap rule with a source interval and a shift
        interval: Input interval

    Returns:
        RuleResult with at most one shifted overlap in ``matched`` and at
        most two unshifted remainders in ``unmatched``
    """
    overlap = Interval(max(interval.start, rule.source_start),
                       min(interval.end, rule.source_end))
    before = Interval(interval.start, min(interval.end, rule.source_start - 1))
    after = Interval(max(interval.start, rule.source_end + 1), interval.end)

    matched = tuple(
        Interval(piece.start + rule.shift, piece.end + rule.shift)
        for piece in (overlap,) if piece.is_valid()
    )
    unmatched = tuple(piece for piece in (before, after) if piece.is_valid())

    return RuleResult(matched, unmatched)


def apply_stage(stage: Stage, intervals: Iterable[Interval]) -> Tuple[Interval, ...]:
    """
    Map a set of intervals through every rule of a stage.

    Each rule only sees what earlier rules left unmatched, so a point is
    shifted by the first rule whose source interval contains it. With
    overlapping rules this makes the result depend on rule order; parsed
    stages are checked with check_disjoint() so that never happens.

    Args:
        stage: Stage whose rules are applied in listed order
        intervals: Input intervals

    Returns:
        tuple: Output intervals, in no particular order
    """
    remaining = tuple(intervals)
    outputs: Tuple[Interval, ...] = ()

    for rule in stage.rules:
        results = [apply_rule(rule, interval) for interval in remaining]
        outputs += tuple(piece for result in results for piece in result.matched)
        remaining = tuple(piece for result in results for piece in result.unmatched)

    return outputs + identity_passthrough(remaining)


def identity_passthrough(intervals: Iterable[Interval]) -> Tuple[Interval, ...]:
    """Intervals no rule claimed map to themselves."""
    return tuple(intervals)


def run_pipeline(pipeline: Iterable[Stage], intervals: Iterable[Interval]) -> Tuple[Interval, ...]:
    current = tuple(intervals)
    for stage in pipeline:
        current = apply_stage(stage, current)
    return current


def minimum_lower_bound(intervals: Iterable[Interval]) -> int:
    """
    Smallest start across a set of intervals.

    Raises:
        ValueError: If the set is empty
    """
    starts = [interval.start for interval in intervals]
    if not starts:
        raise ValueError("No intervals reached the end of the pipeline")
    return min(starts)


def lookup(pipeline: Iterable[Stage], points: Iterable[int]) -> Tuple[int, ...]:
    """Map single values through the pipeline as length-1 intervals."""
    pipeline = tuple(pipeline)
    return tuple(
        run_pipeline(pipeline, [Interval(point, point)])[0].start
        for point in points
    )


def check_disjoint(stage: Stage) -> None:
    """
    Verify that no two rule source intervals in a stage overlap.

    Raises:
        ValueError: Naming the first pair of overlapping rules
    """
    ordered = sorted(stage.rules, key=lambda rule: rule.source_start)
    for previous, current in zip(ordered, ordered[1:]):
        if current.source_start <= previous.source_end:
            raise ValueError(
                f"Overlapping rules in {stage.name} map: "
                f"[{previous.source_start}, {previous.source_end}] and "
                f"[{current.source_start}, {current.source_end}]"
            )


# =============================================================================
# Input parsing
# =============================================================================

SEEDS_PREFIX = 'seeds:'
MAP_SUFFIX = ' map:'


def _parse_numbers(text: str, line_number: int) -> List[int]:
    try:
        return [int(field) for field in text.split()]
    except ValueError:
        raise ValueError(f"Line {line_number}: non-numeric field in {text.strip()!r}") from None


def parse_almanac(text: str) -> Almanac:
    """
    Parse the puzzle input.

    Format:
        seeds: 79 14 55 13

        seed-to-soil map:
        50 98 2
        52 50 48

        soil-to-fertilizer map:
        ...

    Args:
        text: Whole input file

    Returns:
        Almanac with the seed values and the stages in file order

    Raises:
        ValueError: On a malformed line, overlapping rules within a stage,
                    or stages that do not chain source to destination
    """
    lines = text.strip().split('\n')
    if not lines[0].startswith(SEEDS_PREFIX):
        raise ValueError(f"Line 1: expected {SEEDS_PREFIX!r}, got {lines[0]!r}")
    seeds = tuple(_parse_numbers(lines[0][len(SEEDS_PREFIX):], 1))

    stages = []
    name = None
    rules: List[RemapRule] = []

    for line_number, line in enumerate(lines[1:], start=2):
        line = line.strip()
        if not line:
            continue

        if line.endswith(MAP_SUFFIX):
            if name is not None:
                stages.append(Stage(name, tuple(rules)))
            name = line[:-len(MAP_SUFFIX)]
            if not name or ' ' in name:
                raise ValueError(f"Line {line_number}: malformed map header {line!r}")
            rules = []
            continue

        if name is None:
            raise ValueError(f"Line {line_number}: rule outside of a map block: {line!r}")

        fields = _parse_numbers(line, line_number)
        if len(fields) != 3:
            raise ValueError(f"Line {line_number}: expected 'dest source length', got {line!r}")
        rule = RemapRule(*fields)
        if rule.length < 1:
            raise ValueError(f"Line {line_number}: rule length must be at least 1, got {rule.length}")
        rules.append(rule)

    if name is not None:
        stages.append(Stage(name, tuple(rules)))

    for stage in stages:
        check_disjoint(stage)
    for previous, current in zip(stages, stages[1:]):
        if '-to-' not in previous.name or '-to-' not in current.name:
            continue
        if previous.destination != current.source:
            raise ValueError(f"Map {current.name!r} does not follow {previous.name!r}")

    return Almanac(seeds, tuple(stages))


def read_input(filename):
    with open(filename) as f:
        return parse_almanac(f.read())


# =============================================================================
# Puzzle answers
# =============================================================================

def lowest_location_for_seeds(almanac: Almanac) -> int:
    """Part one: every seed value on its own."""
    return minimum_lower_bound(run_pipeline(almanac.pipeline, almanac.seed_points()))


def lowest_location_for_seed_ranges(almanac: Almanac) -> int:
    """Part two: the seed line read as (start, length) pairs."""
    return minimum_lower_bound(run_pipeline(almanac.pipeline, almanac.seed_intervals()))


def get_statistics(almanac: Almanac) -> dict:
    """Sizes of the interval sets seen at each stage boundary in part two."""
    boundaries = [len(almanac.seed_intervals())]
    current = almanac.seed_intervals()
    for stage in almanac.pipeline:
        current = apply_stage(stage, current)
        boundaries.append(len(current))
    return {
        'seeds': len(almanac.seeds),
        'stages': len(almanac.pipeline),
        'rules': sum(len(stage.rules) for stage in almanac.pipeline),
        'intervals_per_stage': boundaries,
    }


def main():
    """Command-line interface for the almanac remapper."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Lowest location number reachable from the almanac seeds'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                       default=sys.stdin,
                       help='Puzzle input (default: stdin)')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Print pipeline statistics')
    args = parser.parse_args()

    try:
        almanac = parse_almanac(args.input_file.read())
        part_one = lowest_location_for_seeds(almanac)
        part_two = lowest_location_for_seed_ranges(almanac)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(part_one)
    print(part_two)

    if args.verbose:
        stats = get_statistics(almanac)
        print(f"\nStatistics:", file=sys.stderr)
        print(f"  Seeds: {stats['seeds']}", file=sys.stderr)
        print(f"  Stages: {stats['stages']}", file=sys.stderr)
        print(f"  Rules: {stats['rules']}", file=sys.stderr)
        for stage, count in zip(almanac.pipeline, stats['intervals_per_stage'][1:]):
            print(f"  Intervals after {stage.name}: {count}", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
