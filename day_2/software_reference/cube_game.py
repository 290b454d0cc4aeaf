#!/usr/bin/env python3
"""
Cube Conundrum - Which Games Fit the Bag

Each game reveals several handfuls of red, green and blue cubes.
Part one sums the ids of games possible with the bag contents in MAXIMUMS;
part two sums the power (red * green * blue) of the smallest bag that could
have produced each game.
"""

import re
import sys
from typing import Dict, Iterable, List, NamedTuple, Tuple

COLORS = ('red', 'green', 'blue')

MAXIMUMS = {
    'red': 12,
    'green': 13,
    'blue': 14,
}

RE_GAME = re.compile(r'^Game (\d+): ([a-z\d,; ]+)$')

Handful = Dict[str, int]


class Game(NamedTuple):
    game_id: int
    handfuls: Tuple[Handful, ...]


def parse_handful(text: str) -> Handful:
    """
    Parse one handful such as "3 blue, 4 red".

    Raises:
        ValueError: On an unknown colour or a malformed count
    """
    handful = {}
    for pair in text.split(', '):
        count, _, color = pair.partition(' ')
        if color not in COLORS:
            raise ValueError(f"Invalid color: {color!r}")
        if not count.isdigit():
            raise ValueError(f"Invalid count: {count!r}")
        handful[color] = int(count)
    return handful


def parse_game(line: str) -> Game:
    """
    Parse "Game 1: 3 blue, 4 red; 1 red, 2 green, 6 blue; 2 green".

    Raises:
        ValueError: If the line does not look like a game record
    """
    match = RE_GAME.match(line.strip())
    if not match:
        raise ValueError(f"Unable to parse line: {line!r}")
    game_id, handfuls = match.groups()
    return Game(int(game_id), tuple(parse_handful(h) for h in handfuls.split('; ')))


def read_input(filename) -> List[Game]:
    with open(filename) as f:
        return [parse_game(line) for line in f.read().strip().split('\n')]


def is_game_possible(game: Game, maximums: Handful = MAXIMUMS) -> bool:
    return all(
        count <= maximums[color]
        for handful in game.handfuls
        for color, count in handful.items()
    )


def sum_possible_game_ids(games: Iterable[Game], maximums: Handful = MAXIMUMS) -> int:
    return sum(game.game_id for game in games if is_game_possible(game, maximums))


def minimum_set(game: Game) -> Handful:
    """Fewest cubes of each colour that make every handful possible."""
    return {
        color: max((handful.get(color, 0) for handful in game.handfuls), default=0)
        for color in COLORS
    }


def power(game: Game) -> int:
    result = 1
    for count in minimum_set(game).values():
        result *= count
    return result


def sum_of_powers(games: Iterable[Game]) -> int:
    return sum(power(game) for game in games)


def main():
    """Command-line interface for the cube game solver."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Possible games and minimum cube set powers'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                       default=sys.stdin,
                       help='Puzzle input (default: stdin)')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Print per-game details')
    args = parser.parse_args()

    try:
        games = [parse_game(line) for line in args.input_file.read().strip().split('\n')]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(sum_possible_game_ids(games))
    print(sum_of_powers(games))

    if args.verbose:
        possible = [game for game in games if is_game_possible(game)]
        print(f"\nGames: {len(games)}, possible: {len(possible)}", file=sys.stderr)
        for game in games:
            print(f"  Game {game.game_id}: minimum set {minimum_set(game)}, power {power(game)}",
                  file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
