#!/usr/bin/env python3
"""
Scratchcards - Winning Numbers and the Copy Waterfall

Part one scores each card 2^(matches - 1). In part two a card with n matches
wins one copy of each of the next n cards, for every copy held of it; the
answer is the total number of cards held at the end.
"""

import re
import sys
from typing import FrozenSet, Iterable, List, NamedTuple, Sequence

RE_CARD = re.compile(r'^Card +(\d+):([\d ]+)\|([\d ]+)$')


class Card(NamedTuple):
    card_id: int
    winning: FrozenSet[int]
    numbers: FrozenSet[int]

    @property
    def matches(self) -> int:
        return len(self.winning & self.numbers)


def parse_card(line: str) -> Card:
    """
    Parse "Card 1: 41 48 83 86 17 | 83 86  6 31 17  9 48 53".

    Raises:
        ValueError: If the line does not look like a card
    """
    match = RE_CARD.match(line.strip())
    if not match:
        raise ValueError(f"Invalid card: {line!r}")
    card_id, winning, numbers = match.groups()
    return Card(
        int(card_id),
        frozenset(int(n) for n in winning.split()),
        frozenset(int(n) for n in numbers.split()),
    )


def read_input(filename) -> List[Card]:
    with open(filename) as f:
        return [parse_card(line) for line in f.read().strip().split('\n')]


def card_points(cards: Iterable[Card]) -> int:
    return sum(2 ** (card.matches - 1) for card in cards if card.matches)


def card_counts(cards: Sequence[Card]) -> List[int]:
    """
    Number of copies held of each card after the waterfall.

    Copies only flow forward, so a single pass in card order settles every
    count. Wins past the last card are dropped.
    """
    counts = []
    for index, card in enumerate(cards):
        won = sum(
            counts[source]
            for source in range(index)
            if index - source <= cards[source].matches
        )
        counts.append(1 + won)
    return counts


def count_cards(cards: Sequence[Card]) -> int:
    return sum(card_counts(cards))


def main():
    """Command-line interface for the scratchcard solver."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Scratchcard points and total card count'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                       default=sys.stdin,
                       help='Puzzle input (default: stdin)')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Print per-card matches and copies')
    args = parser.parse_args()

    try:
        cards = [parse_card(line) for line in args.input_file.read().strip().split('\n')]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(card_points(cards))
    print(count_cards(cards))

    if args.verbose:
        print(f"\nCards: {len(cards)}", file=sys.stderr)
        for card, count in zip(cards, card_counts(cards)):
            print(f"  Card {card.card_id}: {card.matches} matches, {count} copies",
                  file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
