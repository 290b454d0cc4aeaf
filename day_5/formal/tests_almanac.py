"""
Property-based tests for the almanac remapping engine using Hypothesis.

Checks that splitting an interval against a rule partitions it exactly,
that stages shift each point by at most one rule, and that the interval
pipeline agrees with mapping every value on its own.
"""

import os

import pytest
from hypothesis import given, strategies as st, assume, settings
from hypothesis.strategies import integers, lists

from day_5.software_reference.almanac import (
    Almanac,
    Interval,
    RemapRule,
    Stage,
    apply_rule,
    apply_stage,
    check_disjoint,
    identity_passthrough,
    lookup,
    lowest_location_for_seed_ranges,
    lowest_location_for_seeds,
    minimum_lower_bound,
    parse_almanac,
    read_input,
    run_pipeline,
)
from day_5.software_reference import almanac as almanac_cli
from day_5.software_reference import compare_modes
from day_5.software_reference.compare_modes import compare, map_value


EXAMPLE_INPUT = os.path.join(os.path.dirname(__file__), '..', 'testcases', 'example_input.txt')


@st.composite
def valid_interval(draw):
    """Generate an interval where start <= end."""
    start = draw(integers(min_value=-500, max_value=500))
    end = draw(integers(min_value=start, max_value=start + 200))
    return Interval(start, end)


@st.composite
def remap_rule(draw):
    """Generate a rule with length >= 1."""
    source = draw(integers(min_value=-500, max_value=500))
    dest = draw(integers(min_value=-5000, max_value=5000))
    length = draw(integers(min_value=1, max_value=200))
    return RemapRule(dest, source, length)


@st.composite
def disjoint_stage(draw):
    """Generate a stage whose rule sources are separated by random gaps."""
    position = draw(integers(min_value=-600, max_value=0))
    rules = []
    for _ in range(draw(integers(min_value=0, max_value=6))):
        position += draw(integers(min_value=0, max_value=40))
        length = draw(integers(min_value=1, max_value=80))
        dest = draw(integers(min_value=-2000, max_value=2000))
        rules.append(RemapRule(dest, position, length))
        position += length
    order = draw(st.permutations(rules))
    return Stage('a-to-b', tuple(order))


def points_of(intervals):
    """Expand intervals into a sorted list of every covered integer, with repeats."""
    return sorted(value for i in intervals for value in range(i.start, i.end + 1))


def map_point(stage, value):
    """Per-point meaning of a stage: first covering rule wins, else identity."""
    for rule in stage.rules:
        if rule.source_start <= value <= rule.source_end:
            return value + rule.shift
    return value


# Property 1: matched (unshifted) plus unmatched rebuild the input exactly
@given(remap_rule(), valid_interval())
@settings(max_examples=1000)
def test_partition(rule, interval):
    """
    Property: The pieces returned by apply_rule cover every input point once.
    """
    result = apply_rule(rule, interval)
    unshifted = [Interval(m.start - rule.shift, m.end - rule.shift) for m in result.matched]

    assert points_of(unshifted + list(result.unmatched)) == points_of([interval]), \
        f"Partition broken: rule={rule}, input={interval}, result={result}"


# Property 2: nothing invalid is ever emitted
@given(remap_rule(), valid_interval())
def test_no_invalid_intervals(rule, interval):
    result = apply_rule(rule, interval)
    assert len(result.matched) <= 1
    assert len(result.unmatched) <= 2
    assert all(piece.start <= piece.end for piece in result.matched + result.unmatched)


# Property 3: disjoint input keeps identity
@given(remap_rule(), valid_interval())
def test_identity_outside_coverage(rule, interval):
    """
    Property: With no overlap, nothing matches and the input is returned.
    """
    assume(interval.end < rule.source_start or interval.start > rule.source_end)

    result = apply_rule(rule, interval)

    assert result.matched == ()
    assert result.unmatched == (interval,)


# Property 4: input fully inside the rule source
@given(remap_rule(), st.data())
def test_full_containment(rule, data):
    start = data.draw(integers(min_value=rule.source_start, max_value=rule.source_end))
    end = data.draw(integers(min_value=start, max_value=rule.source_end))

    result = apply_rule(rule, Interval(start, end))

    assert result.matched == (Interval(start + rule.shift, end + rule.shift),)
    assert result.unmatched == ()


# Property 5: rule source fully inside the input
@given(remap_rule(), integers(min_value=0, max_value=50), integers(min_value=0, max_value=50))
def test_engulfing(rule, left, right):
    """
    Property: The shifted middle slice matches, the flanks stay unmatched.
    """
    interval = Interval(rule.source_start - left, rule.source_end + right)

    result = apply_rule(rule, interval)

    flanks = []
    if left:
        flanks.append(Interval(interval.start, rule.source_start - 1))
    if right:
        flanks.append(Interval(rule.source_end + 1, interval.end))

    assert result.matched == (Interval(rule.dest_start, rule.dest_start + rule.length - 1),)
    assert result.unmatched == tuple(flanks)


# Property 6: a stage maps every point exactly like the per-point definition
@given(disjoint_stage(), lists(valid_interval(), min_size=0, max_size=5))
@settings(max_examples=500)
def test_stage_matches_pointwise(stage, intervals):
    """
    Property: Splitting intervals through a stage gives the same multiset
    of values as mapping every point on its own.
    """
    output = apply_stage(stage, intervals)
    expected = sorted(map_point(stage, value) for value in points_of(intervals))

    assert points_of(output) == expected, \
        f"Stage output differs from pointwise mapping: stage={stage}, input={intervals}"


# Property 7: untouched intervals pass through unchanged
@given(disjoint_stage(), valid_interval())
def test_stage_identity_passthrough(stage, interval):
    assume(all(
        interval.end < rule.source_start or interval.start > rule.source_end
        for rule in stage.rules
    ))

    assert apply_stage(stage, [interval]) == (interval,)


# Property 8: an empty stage changes nothing
@given(disjoint_stage(), lists(valid_interval(), max_size=5))
def test_empty_stage_idempotent(stage, intervals):
    once = apply_stage(stage, intervals)
    assert apply_stage(Stage('empty', ()), once) == once


# Property 9: single values go through the same engine
@given(lists(disjoint_stage(), min_size=1, max_size=4), lists(integers(-700, 700), min_size=1, max_size=10))
def test_lookup_is_pointwise_composition(pipeline, points):
    """
    Property: lookup() equals composing the per-point stage maps.
    """
    expected = []
    for value in points:
        for stage in pipeline:
            value = map_point(stage, value)
        expected.append(value)

    assert list(lookup(pipeline, points)) == expected


# Property 10: the stage validator accepts generated disjoint stages
@given(disjoint_stage())
def test_check_disjoint_accepts_disjoint(stage):
    check_disjoint(stage)


# =============================================================================
# Concrete cases
# =============================================================================

def test_input_after_rule():
    result = apply_rule(RemapRule(1010, 10, 11), Interval(30, 40))
    assert result.matched == ()
    assert result.unmatched == (Interval(30, 40),)


def test_input_before_rule():
    result = apply_rule(RemapRule(1010, 30, 11), Interval(10, 20))
    assert result.matched == ()
    assert result.unmatched == (Interval(10, 20),)


def test_input_inside_rule():
    result = apply_rule(RemapRule(1010, 10, 31), Interval(20, 30))
    assert result.matched == (Interval(1020, 1030),)
    assert result.unmatched == ()


def test_rule_inside_input():
    result = apply_rule(RemapRule(1020, 20, 11), Interval(10, 40))
    assert result.matched == (Interval(1020, 1030),)
    assert result.unmatched == (Interval(10, 19), Interval(31, 40))


def test_partial_overlap_left():
    result = apply_rule(RemapRule(1020, 20, 21), Interval(10, 30))
    assert result.matched == (Interval(1020, 1030),)
    assert result.unmatched == (Interval(10, 19),)


def test_partial_overlap_right():
    result = apply_rule(RemapRule(1010, 10, 21), Interval(20, 40))
    assert result.matched == (Interval(1020, 1030),)
    assert result.unmatched == (Interval(31, 40),)


def test_single_point_rule():
    result = apply_rule(RemapRule(0, 5, 1), Interval(5, 5))
    assert result.matched == (Interval(0, 0),)
    assert result.unmatched == ()


def test_overlapping_rules_first_match_wins():
    """Unvalidated overlapping rules shift each point by the first listed rule only."""
    stage = Stage('x-to-y', (RemapRule(100, 0, 10), RemapRule(205, 5, 10)))

    output = apply_stage(stage, [Interval(0, 14)])

    assert sorted(output) == [Interval(100, 109), Interval(210, 214)]


def test_identity_passthrough_keeps_intervals():
    intervals = (Interval(1, 2), Interval(7, 9))
    assert identity_passthrough(intervals) == intervals


def test_run_pipeline_without_stages():
    assert run_pipeline([], [Interval(3, 4)]) == (Interval(3, 4),)


def test_minimum_lower_bound():
    assert minimum_lower_bound([Interval(9, 12), Interval(-3, 0), Interval(4, 4)]) == -3


def test_minimum_lower_bound_empty():
    with pytest.raises(ValueError):
        minimum_lower_bound([])


def test_check_disjoint_rejects_overlap():
    stage = Stage('seed-to-soil', (RemapRule(0, 10, 5), RemapRule(50, 14, 3)))
    with pytest.raises(ValueError, match="Overlapping rules in seed-to-soil"):
        check_disjoint(stage)


def test_check_disjoint_allows_touching():
    check_disjoint(Stage('seed-to-soil', (RemapRule(0, 10, 5), RemapRule(50, 15, 3))))


# =============================================================================
# Parsing and puzzle answers
# =============================================================================

def test_example_part_one():
    assert lowest_location_for_seeds(read_input(EXAMPLE_INPUT)) == 35


def test_example_part_two():
    assert lowest_location_for_seed_ranges(read_input(EXAMPLE_INPUT)) == 46


def test_example_seed_locations():
    almanac = read_input(EXAMPLE_INPUT)
    assert lookup(almanac.pipeline, almanac.seeds) == (82, 43, 86, 35)


def test_example_structure():
    almanac = read_input(EXAMPLE_INPUT)

    assert almanac.seeds == (79, 14, 55, 13)
    assert [stage.name for stage in almanac.pipeline] == [
        'seed-to-soil',
        'soil-to-fertilizer',
        'fertilizer-to-water',
        'water-to-light',
        'light-to-temperature',
        'temperature-to-humidity',
        'humidity-to-location',
    ]
    assert almanac.pipeline[0].rules == (RemapRule(50, 98, 2), RemapRule(52, 50, 48))
    assert almanac.pipeline[0].source == 'seed'
    assert almanac.pipeline[-1].destination == 'location'
    assert almanac.seed_intervals() == (Interval(79, 92), Interval(55, 67))


def test_example_intervals_agree_with_points():
    report = compare(read_input(EXAMPLE_INPUT))
    assert report['match']
    assert report['points']['result'] == 46


def test_odd_seed_pairs():
    almanac = Almanac((1, 2, 3), ())
    with pytest.raises(ValueError, match="pairs"):
        almanac.seed_intervals()


@pytest.mark.parametrize("text, message", [
    ("seed: 1 2", "expected 'seeds:'"),
    ("seeds: 1 x", "non-numeric"),
    ("seeds: 1\n\n50 98 2", "outside of a map block"),
    ("seeds: 1\n\nseed to soil map:\n1 2 3", "malformed map header"),
    ("seeds: 1\n\nseed-to-soil map:\n1 2", "expected 'dest source length'"),
    ("seeds: 1\n\nseed-to-soil map:\n1 2 0", "at least 1"),
    ("seeds: 1\n\nseed-to-soil map:\n0 10 5\n9 12 5", "Overlapping"),
    ("seeds: 1\n\nseed-to-soil map:\n1 2 3\n\nwater-to-light map:\n1 2 3", "does not follow"),
])
def test_parse_errors(text, message):
    with pytest.raises(ValueError, match=message):
        parse_almanac(text)


def test_parse_empty_stage():
    almanac = parse_almanac("seeds: 7\n\nseed-to-soil map:\n")
    assert almanac.pipeline == (Stage('seed-to-soil', ()),)
    assert lowest_location_for_seeds(almanac) == 7


@pytest.mark.parametrize("seeds", [(5, 0, 100, 1), (100, 1, 5, -3)])
def test_empty_seed_range_rejected(seeds):
    """A (start, length) pair with length below 1 never enters the pipeline."""
    almanac = parse_almanac("seeds: " + " ".join(map(str, seeds)) + "\n\nseed-to-soil map:\n")
    with pytest.raises(ValueError, match="length must be at least 1"):
        almanac.seed_intervals()
    with pytest.raises(ValueError, match="length must be at least 1"):
        lowest_location_for_seed_ranges(almanac)


def test_zero_length_seed_is_still_a_seed_value():
    almanac = parse_almanac("seeds: 5 0\n\nseed-to-soil map:\n1000 500 1\n")
    assert lowest_location_for_seeds(almanac) == 0


# Property 11: the direct rule scan agrees with the engine on single values
@given(lists(disjoint_stage(), min_size=1, max_size=4), lists(integers(-700, 700), min_size=1, max_size=10))
def test_map_value_agrees_with_lookup(pipeline, points):
    assert [map_value(pipeline, value) for value in points] == list(lookup(pipeline, points))


def test_example_map_value():
    almanac = read_input(EXAMPLE_INPUT)
    assert [map_value(almanac.pipeline, seed) for seed in almanac.seeds] == [82, 43, 86, 35]


# =============================================================================
# Command-line interface
# =============================================================================

def test_cli_example(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['almanac', EXAMPLE_INPUT])

    assert almanac_cli.main() == 0

    out = capsys.readouterr().out
    assert out.split() == ['35', '46']


def test_cli_verbose_statistics(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['almanac', '-v', EXAMPLE_INPUT])

    assert almanac_cli.main() == 0

    err = capsys.readouterr().err
    assert "Stages: 7" in err
    assert "Intervals after humidity-to-location" in err


def test_cli_parse_error(monkeypatch, capsys, tmp_path):
    bad = tmp_path / 'bad.txt'
    bad.write_text("seeds: 5 0\n\nseed-to-soil map:\n1 2 3\n")
    monkeypatch.setattr('sys.argv', ['almanac', str(bad)])

    assert almanac_cli.main() == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith("Error: ")


def test_compare_cli_example(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['compare_modes', EXAMPLE_INPUT])

    assert compare_modes.main() == 0

    out = capsys.readouterr().out
    assert "Interval mode: 46" in out
    assert "Point mode:    46" in out
    assert "Results match: 46" in out


def test_compare_cli_skips_large_inputs(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['compare_modes', '--max-points', '10', EXAMPLE_INPUT])

    assert compare_modes.main() == 0

    assert "skipped" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
