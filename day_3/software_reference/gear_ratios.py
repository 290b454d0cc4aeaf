#!/usr/bin/env python3
"""
Gear Ratios - Part Numbers in an Engine Schematic

Scans a character grid for numbers and symbols (anything that is neither a
digit nor '.'). A number touching a symbol in any of the eight directions is
a part number. A '*' touching exactly two part numbers is a gear, and its
ratio is the product of the two.
"""

import re
import sys
from typing import List, NamedTuple, Sequence, Tuple

RE_NUMBER = re.compile(r'\d+')
RE_SYMBOL = re.compile(r'[^\d.]')

GEAR = '*'


class PartNumber(NamedTuple):
    """A number and the cells it spans; two equal values at different cells stay distinct."""

    value: int
    row: int
    col_start: int
    col_end: int


class Symbol(NamedTuple):
    character: str
    row: int
    col: int


def scan_schematic(rows: Sequence[str]) -> Tuple[List[PartNumber], List[Symbol]]:
    """
    Collect every number and symbol of the grid.

    Args:
        rows: Schematic lines

    Returns:
        tuple: (numbers, symbols) in reading order
    """
    numbers = []
    symbols = []
    for row_index, row in enumerate(rows):
        row = row.strip()
        for match in RE_NUMBER.finditer(row):
            numbers.append(PartNumber(int(match.group()), row_index, match.start(), match.end() - 1))
        for match in RE_SYMBOL.finditer(row):
            symbols.append(Symbol(match.group(), row_index, match.start()))
    return numbers, symbols


def read_input(filename) -> List[str]:
    with open(filename) as f:
        return f.read().strip().split('\n')


def is_adjacent(symbol: Symbol, number: PartNumber) -> bool:
    # Rows above, same and below; columns one past either end of the number
    return (abs(symbol.row - number.row) <= 1
            and number.col_start - 1 <= symbol.col <= number.col_end + 1)


def part_numbers(rows: Sequence[str]) -> List[PartNumber]:
    numbers, symbols = scan_schematic(rows)
    return [
        number for number in numbers
        if any(is_adjacent(symbol, number) for symbol in symbols)
    ]


def sum_of_part_numbers(rows: Sequence[str]) -> int:
    return sum(number.value for number in part_numbers(rows))


def gear_ratios(rows: Sequence[str]) -> List[int]:
    numbers, symbols = scan_schematic(rows)
    ratios = []
    for symbol in symbols:
        if symbol.character != GEAR:
            continue
        neighbours = [number for number in numbers if is_adjacent(symbol, number)]
        if len(neighbours) == 2:
            ratios.append(neighbours[0].value * neighbours[1].value)
    return ratios


def sum_of_gear_ratios(rows: Sequence[str]) -> int:
    return sum(gear_ratios(rows))


def main():
    """Command-line interface for the gear ratio solver."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Sum of part numbers and gear ratios'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                       default=sys.stdin,
                       help='Puzzle input (default: stdin)')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Print schematic statistics')
    args = parser.parse_args()

    rows = args.input_file.read().strip().split('\n')

    print(sum_of_part_numbers(rows))
    print(sum_of_gear_ratios(rows))

    if args.verbose:
        numbers, symbols = scan_schematic(rows)
        print(f"\nStatistics:", file=sys.stderr)
        print(f"  Numbers: {len(numbers)}", file=sys.stderr)
        print(f"  Symbols: {len(symbols)}", file=sys.stderr)
        print(f"  Part numbers: {len(part_numbers(rows))}", file=sys.stderr)
        print(f"  Gears: {len(gear_ratios(rows))}", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
