"""
Property-based tests for calibration value recovery using Hypothesis.
"""

import os

import pytest
from hypothesis import given, strategies as st

from day_1.software_reference import calibration
from day_1.software_reference.calibration import (
    DIGIT_WORDS,
    calibration_value,
    read_input,
    sum_calibration_values,
)


TESTCASES = os.path.join(os.path.dirname(__file__), '..', 'testcases')

# Filler that can never spell a digit word
noise = st.text(alphabet='abcdfgkpqrstuyz', max_size=6)
digit = st.sampled_from('123456789')


# Property 1: value is built from the first and last digit
@given(noise, digit, noise, digit, noise)
def test_first_and_last_digit(prefix, first, middle, last, suffix):
    line = prefix + first + middle + last + suffix
    assert calibration_value(line) == int(first + last)


# Property 2: a single digit is both first and last
@given(noise, digit, noise)
def test_single_digit_doubles(prefix, d, suffix):
    assert calibration_value(prefix + d + suffix) == int(d * 2)


# Property 3: spelled digits count only when words are enabled
@given(st.sampled_from(sorted(DIGIT_WORDS)), digit)
def test_words_only_with_flag(word, d):
    line = word + d
    assert calibration_value(line) == int(d + d)
    assert calibration_value(line, with_words=True) == int(DIGIT_WORDS[word] + d)


def test_example_part_one():
    lines = read_input(os.path.join(TESTCASES, 'example_input_1.txt'))
    assert sum_calibration_values(lines) == 142


def test_example_part_two():
    lines = read_input(os.path.join(TESTCASES, 'example_input_2.txt'))
    assert [calibration_value(line, True) for line in lines] == [29, 83, 13, 24, 42, 14, 76]
    assert sum_calibration_values(lines, with_words=True) == 281


def test_overlapping_words():
    """Shared letters still count for both words."""
    assert calibration_value('eightwo', with_words=True) == 82
    assert calibration_value('xtwone', with_words=True) == 21


def test_no_digit():
    with pytest.raises(ValueError, match="Unable to parse value"):
        calibration_value('eightwothree')


def test_cli_both_parts(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['calibration', os.path.join(TESTCASES, 'example_input_1.txt')])

    assert calibration.main() == 0

    assert capsys.readouterr().out.split() == ['142', '142']


def test_cli_single_part(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['calibration', '--part', '2',
                                     os.path.join(TESTCASES, 'example_input_2.txt')])

    assert calibration.main() == 0

    assert capsys.readouterr().out.split() == ['281']


def test_cli_line_without_digit(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['calibration', os.path.join(TESTCASES, 'example_input_2.txt')])

    assert calibration.main() == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith("Error: Unable to parse value")


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
