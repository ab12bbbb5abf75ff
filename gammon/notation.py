"""
Text notation for moves.

A submove is written `from/to`. `from` is a point number or `bar`, `to` is a
point number or `off`. Points are numbered from the mover's side: 24 is the
farthest point, 1 the deepest point of the home board. A move is one or more
submoves separated by whitespace, in the order they are played, e.g.
`13/7 8/7` or `bar/22 6/off`.
"""
from typing import List, Tuple

from .game import BAR_POS, BEARING_OFF_POS, DiceRoll, Move, Submove

BAR = "bar"
OFF = "off"


class NotationError(ValueError):
    """Input that does not describe a move. The caller should ask again."""


def point_to_pos(point: int) -> int:
    return BEARING_OFF_POS - point


def pos_to_point(pos: int) -> int:
    return BEARING_OFF_POS - pos


def _parse_point(text: str) -> int:
    try:
        point = int(text)
    except ValueError:
        raise NotationError(f"not a point: {text!r}") from None
    if not 1 <= point <= 24:
        raise NotationError(f"point out of range: {point}")
    return point_to_pos(point)


def parse_submove(text: str) -> Tuple[int, int]:
    """Parses `from/to` into (start, end) positions in the mover's frame."""
    parts = text.split("/")
    if len(parts) != 2:
        raise NotationError(f"invalid backgammon notation: {text!r}")
    from_str, to_str = parts[0].lower(), parts[1].lower()

    if from_str == OFF:
        raise NotationError("cannot move a checker that was borne off")
    start = BAR_POS if from_str == BAR else _parse_point(from_str)

    if to_str == BAR:
        raise NotationError("cannot move a checker to the bar")
    end = BEARING_OFF_POS if to_str == OFF else _parse_point(to_str)

    if end <= start:
        raise NotationError(f"move is in the wrong direction: {text!r}")
    return start, end


def _assign_dice(steps: List[Tuple[int, int]], roll: DiceRoll) -> List[int]:
    """
    Picks the die for each (start, end) step.

    A step's exact distance is used when that die is available. Bearing off
    can also use a larger die; the remaining dice go to the unresolved
    bear-off steps, largest die to the farthest checker.
    """
    if roll[0] == roll[1]:
        return [roll[0]] * len(steps)

    distances = [end - start for start, end in steps]
    dice = [None] * len(steps)
    pool = sorted(roll, reverse=True)
    for i, distance in enumerate(distances):
        if distance in pool:
            dice[i] = distance
            pool.remove(distance)

    bearing_off = [i for i, (_, end) in enumerate(steps) if end == BEARING_OFF_POS and dice[i] is None]
    for i in sorted(bearing_off, key=lambda i: distances[i], reverse=True):
        reaching = [d for d in pool if d >= distances[i]]
        if reaching:
            dice[i] = max(reaching)
            pool.remove(dice[i])

    # Anything left keeps its exact distance and fails validation later.
    return [d if d is not None else distances[i] for i, d in enumerate(dice)]


def parse_move(text: str, roll: DiceRoll) -> Move:
    """
    Parses a whole turn for `roll`.

    The result is not checked for legality. Submoves are given in played
    order and stored as a stack, so the returned Move lists them reversed.
    """
    tokens = text.split()
    if not tokens:
        raise NotationError("empty move")
    steps = [parse_submove(token) for token in tokens]
    dice = _assign_dice(steps, roll)
    submoves = [Submove(start, die) for (start, _), die in zip(steps, dice)]
    submoves.reverse()
    return Move(submoves)


def format_submove(submove: Submove) -> str:
    start = BAR if submove.start == BAR_POS else str(pos_to_point(submove.start))
    destination = submove.destination()
    end = OFF if destination == BEARING_OFF_POS else str(pos_to_point(destination))
    return f"{start}/{end}"


def format_move(move: Move) -> str:
    return " ".join(format_submove(s) for s in move.played_order())
