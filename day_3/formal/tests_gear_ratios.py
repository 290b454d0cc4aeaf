"""
Property-based tests for the engine schematic scanner using Hypothesis.
"""

import os

import pytest
from hypothesis import assume, given, strategies as st

from day_3.software_reference import gear_ratios as gear_ratios_cli
from day_3.software_reference.gear_ratios import (
    PartNumber,
    Symbol,
    gear_ratios,
    is_adjacent,
    part_numbers,
    read_input,
    scan_schematic,
    sum_of_gear_ratios,
    sum_of_part_numbers,
)


EXAMPLE_INPUT = os.path.join(os.path.dirname(__file__), '..', 'testcases', 'example_input.txt')


@st.composite
def number_and_offset(draw):
    """A 1-3 digit number at a column, plus a symbol offset around it."""
    value = draw(st.integers(min_value=1, max_value=999))
    col = draw(st.integers(min_value=2, max_value=10))
    width = len(str(value))
    d_row = draw(st.integers(min_value=-2, max_value=2))
    d_col = draw(st.integers(min_value=col - 2, max_value=col + width + 1))
    return PartNumber(value, 5, col, col + width - 1), Symbol('#', 5 + d_row, d_col)


# Property 1: adjacency is the one-cell border around the number
@given(number_and_offset())
def test_adjacency_border(case):
    number, symbol = case
    distances = [
        max(abs(symbol.row - number.row), abs(symbol.col - col))
        for col in range(number.col_start, number.col_end + 1)
    ]
    assume(min(distances) > 0)  # a symbol cannot sit on a digit
    assert is_adjacent(symbol, number) == (min(distances) == 1)


# Property 2: a number alone on the grid is never a part number
@given(st.integers(min_value=0, max_value=99999), st.integers(min_value=0, max_value=5))
def test_lonely_number(value, padding):
    rows = ['.' * padding + str(value) + '.' * padding]
    assert part_numbers(rows) == []


def test_example_part_one():
    assert sum_of_part_numbers(read_input(EXAMPLE_INPUT)) == 4361


def test_example_part_two():
    rows = read_input(EXAMPLE_INPUT)
    assert gear_ratios(rows) == [467 * 35, 755 * 598]
    assert sum_of_gear_ratios(rows) == 467835


def test_example_excluded_numbers():
    rows = read_input(EXAMPLE_INPUT)
    numbers, _ = scan_schematic(rows)
    excluded = [n.value for n in numbers if n not in part_numbers(rows)]
    assert excluded == [114, 58]


def test_scan_positions():
    numbers, symbols = scan_schematic(['..12.', '.$...'])
    assert numbers == [PartNumber(12, 0, 2, 3)]
    assert symbols == [Symbol('$', 1, 1)]


def test_number_counted_once_for_two_symbols():
    assert sum_of_part_numbers(['*5#']) == 5


def test_equal_values_counted_separately():
    assert sum_of_part_numbers(['7.7', '.+.']) == 14


def test_gear_needs_exactly_two():
    assert sum_of_gear_ratios(['2*3']) == 6
    assert sum_of_gear_ratios(['2*3', '.4.']) == 0
    assert sum_of_gear_ratios(['2#3']) == 0


def test_cli_example(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['gear_ratios', EXAMPLE_INPUT])

    assert gear_ratios_cli.main() == 0

    assert capsys.readouterr().out.split() == ['4361', '467835']


def test_cli_verbose_statistics(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['gear_ratios', '--verbose', EXAMPLE_INPUT])

    assert gear_ratios_cli.main() == 0

    err = capsys.readouterr().err
    assert "Numbers: 10" in err
    assert "Part numbers: 8" in err
    assert "Gears: 2" in err


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
