"""
Property-based tests for scratchcard scoring using Hypothesis.
"""

import os

import pytest
from hypothesis import given, strategies as st

from day_4.software_reference import scratchcards
from day_4.software_reference.scratchcards import (
    Card,
    card_counts,
    card_points,
    count_cards,
    parse_card,
    read_input,
)


EXAMPLE_INPUT = os.path.join(os.path.dirname(__file__), '..', 'testcases', 'example_input.txt')


@st.composite
def deck(draw):
    """Cards whose match counts never reach past the end of the deck."""
    size = draw(st.integers(min_value=1, max_value=12))
    cards = []
    for index in range(size):
        matches = draw(st.integers(min_value=0, max_value=size - index - 1))
        winning = frozenset(range(1, matches + 1)) | {100 + index}
        numbers = frozenset(range(1, matches + 1)) | {200 + index}
        cards.append(Card(index + 1, winning, numbers))
    return cards


def waterfall(cards):
    """Card counts by pushing copies forward, one card at a time."""
    counts = [1] * len(cards)
    for i, card in enumerate(cards):
        for j in range(i + 1, min(i + 1 + card.matches, len(cards))):
            counts[j] += counts[i]
    return counts


# Property 1: the pull formulation equals pushing copies forward
@given(deck())
def test_counts_match_waterfall(cards):
    assert card_counts(cards) == waterfall(cards)


# Property 2: every card is held at least once
@given(deck())
def test_at_least_original(cards):
    assert all(count >= 1 for count in card_counts(cards))
    assert count_cards(cards) >= len(cards)


# Property 3: points double per extra match
@given(st.integers(min_value=1, max_value=20))
def test_points_double(matches):
    card = Card(1, frozenset(range(matches)), frozenset(range(matches)))
    assert card_points([card]) == 2 ** (matches - 1)


def test_example_part_one():
    assert card_points(read_input(EXAMPLE_INPUT)) == 13


def test_example_part_two():
    cards = read_input(EXAMPLE_INPUT)
    assert [card.matches for card in cards] == [4, 2, 2, 1, 0, 0]
    assert card_counts(cards) == [1, 2, 4, 8, 14, 1]
    assert count_cards(cards) == 30


def test_parse_card_spacing():
    card = parse_card("Card   3:  1 21 53 59 44 | 69 82 63 16 72 21 14  1")
    assert card.card_id == 3
    assert card.winning == frozenset({1, 21, 53, 59, 44})
    assert card.matches == 2


def test_wins_past_last_card_dropped():
    cards = [Card(1, frozenset({1, 2, 3}), frozenset({1, 2, 3}))]
    assert card_counts(cards) == [1]


def test_invalid_card():
    with pytest.raises(ValueError, match="Invalid card"):
        parse_card("Card 1: 1 2 3")


def test_cli_example(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['scratchcards', EXAMPLE_INPUT])

    assert scratchcards.main() == 0

    assert capsys.readouterr().out.split() == ['13', '30']


def test_cli_parse_error(monkeypatch, capsys, tmp_path):
    bad = tmp_path / 'bad.txt'
    bad.write_text("Card 1: 1 2 3\n")
    monkeypatch.setattr('sys.argv', ['scratchcards', str(bad)])

    assert scratchcards.main() == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith("Error: Invalid card")


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
