"""Turn sources: anything that proposes a Move for a roll."""

from typing import Callable, Optional, Protocol, runtime_checkable

import numpy as np
from loguru import logger

from .game import Backgammon, Color, DiceRoll, Move
from .notation import NotationError, format_move, parse_move


@runtime_checkable
class Player(Protocol):
    """Structural interface. The proposed move need not be legal."""

    color: Color

    def make_move(self, game: Backgammon, roll: DiceRoll) -> Move: ...


class RandomPlayer:
    """Plays a uniformly random legal move."""

    def __init__(self, color: Color, rng: Optional[np.random.Generator] = None):
        self.color = color
        self.rng = rng if rng is not None else np.random.default_rng()

    def make_move(self, game: Backgammon, roll: DiceRoll) -> Move:
        moves = game.list_moves(self.color, roll)
        # The game loop only asks when a legal move exists.
        idx = int(self.rng.integers(len(moves)))
        return Move(list(moves[idx].submoves))


class CommandLinePlayer:
    """
    Reads moves typed in backgammon notation.

    Besides moves it understands `list` (print the legal moves) and `show`
    (print the board). Keeps asking until a legal move is entered.
    """

    def __init__(
        self,
        color: Color,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ):
        self.color = color
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print

    def make_move(self, game: Backgammon, roll: DiceRoll) -> Move:
        while True:
            command = self.input_fn(f"rolled {roll[0]}-{roll[1]}, enter move: ")
            try:
                move = self.parse_command(game, roll, command.strip())
            except NotationError as e:
                self.output_fn(str(e))
                continue
            if move is None:
                continue
            if game.can_do_move(self.color, roll, move):
                return move
            logger.debug(f"illegal move from {self.color}: {format_move(move)}")
            self.output_fn("illegal move")

    def parse_command(self, game: Backgammon, roll: DiceRoll, command: str) -> Optional[Move]:
        """Returns the parsed move, or None for commands that only print."""
        if command == "list":
            for move in game.list_moves(self.color, roll):
                self.output_fn(format_move(move))
            return None
        if command == "show":
            self.output_fn(game.render_ascii())
            return None
        return parse_move(command, roll)
