import sys
from collections import Counter
from typing import List, Optional

import numpy as np
from loguru import logger
from tqdm import tqdm

from .arguments import PlayConfig, parse_play_args
from .game import Backgammon, Color, DiceRoll
from .notation import format_move
from .players import CommandLinePlayer, Player, RandomPlayer


def roll_dice(rng: np.random.Generator) -> DiceRoll:
    a, b = rng.integers(1, 7, size=2)
    return int(a), int(b)


def play_turn(game: Backgammon, player: Player, rng: np.random.Generator, verbose: bool = True):
    """Rolls for `player` and plays until one legal move has been applied."""
    color = player.color
    roll = roll_dice(rng)
    if not game.list_moves(color, roll):
        logger.debug(f"{color} rolled {roll}, no legal moves")
        if verbose:
            print(f"rolled {roll[0]}-{roll[1]}, no legal moves")
        return

    logger.debug(f"{color} rolled {roll}")
    if verbose:
        print(f"rolled {roll[0]}-{roll[1]}")
    # Retrying is the driver's job, the engine only says yes or no.
    while not game.play_move(roll, player):
        pass


def play_game(
    game: Backgammon,
    first: Player,
    second: Player,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = True,
) -> Color:
    """
    Alternates turns, `first` moving first, until one side has borne off.
    Returns the winning color. `game` must already be set up.
    """
    rng = rng if rng is not None else np.random.default_rng()
    players = [first, second]
    turn = 0
    while not game.is_game_over():
        player = players[turn % 2]
        if verbose:
            print(game.render_ascii())
            print(f"player {player.color} to play")
        play_turn(game, player, rng, verbose)
        turn += 1

    winner = game.winner()
    if verbose:
        print(game.render_ascii())
        print(f"player {winner} won")
    logger.info(f"{winner} won after {turn} turns")
    return winner


def make_player(kind: str, color: Color, rng: np.random.Generator) -> Player:
    if kind == "human":
        return CommandLinePlayer(color)
    return RandomPlayer(color, rng)


def run(config: PlayConfig) -> Counter:
    rng = np.random.default_rng(config.seed)
    red = make_player(config.red, Color.RED, rng)
    white = make_player(config.white, Color.WHITE, rng)

    wins = Counter()
    if config.games == 1:
        game = Backgammon()
        game.init()
        wins[play_game(game, red, white, rng)] += 1
        return wins

    for _ in tqdm(range(config.games), desc="games"):
        game = Backgammon()
        game.init()
        wins[play_game(game, red, white, rng, verbose=False)] += 1
    for color in (Color.RED, Color.WHITE):
        print(f"{color}: {wins[color]} / {config.games}")
    return wins


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_play_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=config.log_level)
    logger.info("gammon - backgammon in the terminal")

    try:
        run(config)
    except (KeyboardInterrupt, EOFError):
        print("\nbye")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
