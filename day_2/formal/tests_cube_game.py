"""
Property-based tests for the cube game using Hypothesis.
"""

import os

import pytest
from hypothesis import given, strategies as st

from day_2.software_reference import cube_game
from day_2.software_reference.cube_game import (
    COLORS,
    MAXIMUMS,
    Game,
    is_game_possible,
    minimum_set,
    parse_game,
    power,
    read_input,
    sum_of_powers,
    sum_possible_game_ids,
)


EXAMPLE_INPUT = os.path.join(os.path.dirname(__file__), '..', 'testcases', 'example_input.txt')

handful = st.dictionaries(st.sampled_from(COLORS), st.integers(min_value=1, max_value=30), min_size=1)
game = st.builds(Game, st.integers(min_value=1, max_value=100), st.lists(handful, min_size=1, max_size=5).map(tuple))


def format_game(g):
    handfuls = '; '.join(', '.join(f"{n} {c}" for c, n in h.items()) for h in g.handfuls)
    return f"Game {g.game_id}: {handfuls}"


# Property 1: formatting a game and parsing it back gives the same game
@given(game)
def test_parse_formatted_game(g):
    assert parse_game(format_game(g)) == g


# Property 2: a game is always possible with its own minimum set
@given(game)
def test_possible_with_minimum_set(g):
    assert is_game_possible(g, minimum_set(g))


# Property 3: removing one cube from any non-zero colour makes it impossible
@given(game, st.data())
def test_minimum_set_is_minimal(g, data):
    smallest = minimum_set(g)
    color = data.draw(st.sampled_from([c for c in COLORS if smallest[c] > 0]))
    smaller = dict(smallest, **{color: smallest[color] - 1})
    assert not is_game_possible(g, smaller)


def test_example_part_one():
    assert sum_possible_game_ids(read_input(EXAMPLE_INPUT)) == 8


def test_example_part_two():
    games = read_input(EXAMPLE_INPUT)
    assert [power(g) for g in games] == [48, 12, 1560, 630, 36]
    assert sum_of_powers(games) == 2286


def test_example_game():
    g = read_input(EXAMPLE_INPUT)[0]
    assert g.game_id == 1
    assert g.handfuls == ({'blue': 3, 'red': 4}, {'red': 1, 'green': 2, 'blue': 6}, {'green': 2})
    assert minimum_set(g) == {'red': 4, 'green': 2, 'blue': 6}


def test_missing_colour_counts_as_zero():
    g = parse_game("Game 7: 3 red; 5 red, 1 blue")
    assert minimum_set(g) == {'red': 5, 'green': 0, 'blue': 1}
    assert power(g) == 0
    assert is_game_possible(g, MAXIMUMS)


@pytest.mark.parametrize("line, message", [
    ("Game x: 3 red", "Unable to parse line"),
    ("Game 1: 3 purple", "Invalid color"),
    ("Game 1: red 3", "Invalid"),
])
def test_parse_errors(line, message):
    with pytest.raises(ValueError, match=message):
        parse_game(line)


def test_cli_example(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['cube_game', EXAMPLE_INPUT])

    assert cube_game.main() == 0

    assert capsys.readouterr().out.split() == ['8', '2286']


def test_cli_parse_error(monkeypatch, capsys, tmp_path):
    bad = tmp_path / 'bad.txt'
    bad.write_text("Game 1: 3 purple\n")
    monkeypatch.setattr('sys.argv', ['cube_game', str(bad)])

    assert cube_game.main() == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith("Error: Invalid color")


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
