#!/usr/bin/env python3
"""
Calibration Values - First and Last Digit of Each Line

Each line of the calibration document hides a two-digit number made of its
first and last digit. Part two also accepts digits spelled out as words,
which may share letters ("eightwo" reads as 8 first, 2 last).
"""

import re
import sys
from typing import Iterable, List

DIGIT_WORDS = {
    'one': '1',
    'two': '2',
    'three': '3',
    'four': '4',
    'five': '5',
    'six': '6',
    'seven': '7',
    'eight': '8',
    'nine': '9',
}

_DIGIT = r'(\d)'
_DIGIT_OR_WORD = r'(\d|' + '|'.join(DIGIT_WORDS) + ')'

# The greedy ".*" prefix makes the search land on the last occurrence
RE_FIRST_DIGIT = re.compile(_DIGIT)
RE_LAST_DIGIT = re.compile('.*' + _DIGIT)
RE_FIRST_DIGIT_WITH_WORDS = re.compile(_DIGIT_OR_WORD)
RE_LAST_DIGIT_WITH_WORDS = re.compile('.*' + _DIGIT_OR_WORD)


def read_input(filename) -> List[str]:
    with open(filename) as f:
        return f.read().strip().split('\n')


def _find_digit(regex, line: str) -> str:
    match = regex.search(line)
    if not match:
        raise ValueError(f"Unable to parse value: {line!r}")
    return DIGIT_WORDS.get(match.group(1), match.group(1))


def calibration_value(line: str, with_words: bool = False) -> int:
    """
    Recover the calibration value of one line.

    Args:
        line: Corrupted calibration line, e.g. "pqr3stu8vwx"
        with_words: Also accept "one".."nine" as digits

    Returns:
        int: First digit times ten plus last digit

    Raises:
        ValueError: If the line holds no digit at all
    """
    if with_words:
        first, last = RE_FIRST_DIGIT_WITH_WORDS, RE_LAST_DIGIT_WITH_WORDS
    else:
        first, last = RE_FIRST_DIGIT, RE_LAST_DIGIT
    return int(_find_digit(first, line) + _find_digit(last, line))


def sum_calibration_values(lines: Iterable[str], with_words: bool = False) -> int:
    return sum(calibration_value(line, with_words) for line in lines)


def main():
    """Command-line interface for the calibration solver."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Sum of calibration values'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                       default=sys.stdin,
                       help='Puzzle input (default: stdin)')
    parser.add_argument('--part', type=int, choices=(1, 2),
                       help='Solve only one part (default: both)')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Print per-line values')
    args = parser.parse_args()

    lines = args.input_file.read().strip().split('\n')
    parts = [args.part] if args.part else [1, 2]

    try:
        answers = [sum_calibration_values(lines, with_words=(part == 2)) for part in parts]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for answer in answers:
        print(answer)

    if args.verbose:
        print(f"\nLines: {len(lines)}", file=sys.stderr)
        for line in lines:
            values = [str(calibration_value(line, part == 2)) for part in parts]
            print(f"  {line}: {' / '.join(values)}", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
