import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

BOARD_SIZE = 26
BAR_POS = 0
BEARING_OFF_POS = BOARD_SIZE - 1
# Positions 0..18 are outside the home board.
END_OF_OUTER_BOARD = 19
CHECKERS_PER_COLOR = 15

DiceRoll = Tuple[int, int]

# Starting layout, identical in both colors' frames:
# 2 on the opponent's home point, 5 mid-point, 3 on the 8-point, 5 on the 6-point.
INITIAL_BOARD = [
    0, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 5,
    0, 0, 0, 0, 3, 0, 5, 0, 0, 0, 0, 0, 0,
]


class Color(enum.Enum):
    RED = 0
    WHITE = 1

    @property
    def opposite(self) -> "Color":
        return Color.WHITE if self is Color.RED else Color.RED

    def __str__(self):
        return self.name.lower()


@dataclass(frozen=True)
class Submove:
    """
    Play of a single die.

    `start` is in the mover's own frame: 0 is the bar, 25 the bearing-off
    position. The destination is derived from the die, never stored.
    """
    start: int
    die: int

    def destination(self) -> int:
        if self.start + self.die >= BOARD_SIZE:
            return BEARING_OFF_POS
        return self.start + self.die


@dataclass
class Move:
    """
    A full turn. `submoves` is a stack: the last element is played first.

    Equality is list equality, so the order dice were played in is part of
    a move's identity even when two moves reach the same position.
    """
    submoves: List[Submove] = field(default_factory=list)

    def played_order(self) -> List[Submove]:
        return list(reversed(self.submoves))

    def __len__(self):
        return len(self.submoves)


class Board:
    """Checker counts for one color, indexed in that color's frame."""

    def __init__(self, counts=None):
        if counts is None:
            self.counts = np.zeros(BOARD_SIZE, dtype=int)
        else:
            self.counts = np.array(counts, dtype=int)

    def get(self, pos: int) -> int:
        return int(self.counts[pos])

    def set(self, pos: int, checkers: int):
        self.counts[pos] = checkers

    def total(self) -> int:
        return int(self.counts.sum())

    def copy(self) -> "Board":
        return Board(self.counts.copy())


class Backgammon:
    """
    Backgammon rules engine.

    Representation:
    - One Board per color, each in that color's own frame.
    - Position 0 is the bar, 1..24 are the points in the order the color
      moves through them, 25 is the bearing-off position.
    - Position p for one color is position 25 - p for the other.

    A fresh instance is empty; call init() for the starting position.
    """

    def __init__(self):
        self.red_board = Board()
        self.white_board = Board()

    def init(self):
        self.red_board = Board(INITIAL_BOARD)
        self.white_board = Board(INITIAL_BOARD)

    def clone(self) -> "Backgammon":
        game = Backgammon()
        game.red_board = self.red_board.copy()
        game.white_board = self.white_board.copy()
        return game

    def board_for(self, color: Color) -> Board:
        return self.red_board if color is Color.RED else self.white_board

    def get_board(self, color: Color, pos: int) -> int:
        return self.board_for(color).get(pos)

    def set_board(self, color: Color, pos: int, checkers: int):
        self.board_for(color).set(pos, checkers)

    def get_opposite_pos(self, pos: int) -> int:
        return BEARING_OFF_POS - pos

    def is_blocked(self, color: Color, pos: int) -> bool:
        # Nothing can block the bearing-off position.
        if pos == BEARING_OFF_POS:
            return False
        # Look at the opponent's board from our side.
        return self.get_board(color.opposite, self.get_opposite_pos(pos)) > 1

    def is_all_home(self, color: Color) -> bool:
        for pos in range(END_OF_OUTER_BOARD):
            if self.get_board(color, pos) > 0:
                return False
        return True

    def can_do_submove(self, color: Color, submove: Submove) -> bool:
        # Need a checker to move.
        if self.get_board(color, submove.start) == 0:
            return False
        # Borne-off checkers stay off.
        if submove.start == BEARING_OFF_POS:
            return False
        # Checkers on the bar must enter first.
        if self.get_board(color, BAR_POS) > 0 and submove.start != BAR_POS:
            return False

        destination = submove.destination()
        if destination == BEARING_OFF_POS:
            if not self.is_all_home(color):
                return False
            # A die may not bear off a lower point while a higher point is occupied.
            for pos in range(BEARING_OFF_POS - submove.die, submove.start):
                if self.get_board(color, pos) > 0:
                    return False

        if self.is_blocked(color, destination):
            return False
        return True

    def list_submoves(self, color: Color, die: int) -> List[Submove]:
        """All legal plays of a single die, ordered by origin."""
        submoves = []
        for pos in range(BEARING_OFF_POS):
            submove = Submove(pos, die)
            if self.can_do_submove(color, submove):
                submoves.append(submove)
        return submoves

    def do_submove(self, color: Color, submove: Submove):
        assert self.can_do_submove(color, submove), f"illegal submove for {color}: {submove}"
        destination = submove.destination()
        opponent = color.opposite
        opposite_pos = self.get_opposite_pos(destination)

        # Hit the blot, but not when bearing off.
        if destination != BEARING_OFF_POS and self.get_board(opponent, opposite_pos) > 0:
            logger.debug(f"{color} hits {opponent} blot at {destination}")
            self.set_board(opponent, BAR_POS, self.get_board(opponent, BAR_POS) + 1)
            self.set_board(opponent, opposite_pos, 0)

        self.set_board(color, submove.start, self.get_board(color, submove.start) - 1)
        self.set_board(color, destination, self.get_board(color, destination) + 1)

    def list_moves_with_ordered_dice_r(self, color: Color, dice: List[int]) -> List[Move]:
        """
        Lists the moves for a fixed order of playing the dice.

        Each returned Move is a stack with the first die's submove on the
        bottom. Sequences stop early only where no further die can be played.
        An empty die list gives no moves.
        """
        if not dice:
            return []
        die, remaining_dice = dice[0], dice[1:]

        moves = []
        for submove in self.list_submoves(color, die):
            # Each branch explores its own copy.
            game = self.clone()
            game.do_submove(color, submove)
            next_moves = game.list_moves_with_ordered_dice_r(color, remaining_dice)
            if not next_moves:
                next_moves = [Move()]
            for next_move in next_moves:
                next_move.submoves.append(submove)
            moves.extend(next_moves)
        return moves

    def list_moves(self, color: Color, roll: DiceRoll) -> List[Move]:
        """
        Returns all legal moves for the roll.

        Both dice must be played if possible. If only one can be played, the
        higher one must be played when it can be.
        Moves reaching the same position through different submoves are all
        kept.
        """
        if roll[0] == roll[1]:
            return self.list_moves_with_ordered_dice_r(color, [roll[0]] * 4)

        high, low = max(roll), min(roll)
        high_moves = self.list_moves_with_ordered_dice_r(color, [high, low])
        low_moves = self.list_moves_with_ordered_dice_r(color, [low, high])

        both_dice_moves = [m for m in high_moves + low_moves if len(m.submoves) == 2]
        if both_dice_moves:
            return both_dice_moves

        # Only one die can be played.
        if high_moves:
            return high_moves
        return low_moves

    def can_do_move(self, color: Color, roll: DiceRoll, move: Move) -> bool:
        return move in self.list_moves(color, roll)

    def do_move(self, color: Color, move: Move):
        for submove in reversed(move.submoves):
            self.do_submove(color, submove)

    def play_move(self, roll: DiceRoll, player) -> bool:
        """Asks `player` for a move and applies it. Returns True if it was legal."""
        color = player.color
        move = player.make_move(self, roll)
        if self.can_do_move(color, roll, move):
            self.do_move(color, move)
            return True
        logger.debug(f"rejected move from {color} for roll {roll}: {move}")
        return False

    def winner(self) -> Optional[Color]:
        for color in (Color.RED, Color.WHITE):
            if self.get_board(color, BEARING_OFF_POS) >= CHECKERS_PER_COLOR:
                return color
        return None

    def is_game_over(self) -> bool:
        return self.winner() is not None

    def pip_count(self, color: Color) -> int:
        # A checker at position p needs 25 - p pips to bear off.
        board = self.board_for(color)
        return sum(board.get(pos) * (BEARING_OFF_POS - pos) for pos in range(BEARING_OFF_POS))

    def render_ascii(self) -> str:
        """
        ASCII board from Red's frame.

        Top: 13 .. 18 || 19 .. 24
        Bot: 12 .. 7 || 6 .. 1
        Red checkers show as R<n>, White checkers as W<n>.
        """
        def cell(pos):
            red = self.get_board(Color.RED, pos)
            if red > 0:
                return f"R{red}"
            white = self.get_board(Color.WHITE, self.get_opposite_pos(pos))
            if white > 0:
                return f"W{white}"
            return ".."

        def row(positions, separator_before):
            parts = []
            for pos in positions:
                if pos == separator_before:
                    parts.append("||")
                parts.append(cell(pos))
            return " ".join(parts)

        def labels(positions, separator_before):
            parts = []
            for pos in positions:
                if pos == separator_before:
                    parts.append("  ")
                parts.append(f"{pos:>2}")
            return " ".join(parts)

        top = range(13, 25)
        bottom = range(12, 0, -1)
        lines = [
            labels(top, 19),
            row(top, 19) + f"\tRed bar: {self.get_board(Color.RED, BAR_POS)}"
                           f"\tRed off: {self.get_board(Color.RED, BEARING_OFF_POS)}",
            row(bottom, 6) + f"\tWhite bar: {self.get_board(Color.WHITE, BAR_POS)}"
                             f"\tWhite off: {self.get_board(Color.WHITE, BEARING_OFF_POS)}",
            labels(bottom, 6),
            f"Pips: red {self.pip_count(Color.RED)}, white {self.pip_count(Color.WHITE)}",
        ]
        return "\n".join(lines)
