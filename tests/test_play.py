import numpy as np
import pytest

from gammon import play
from gammon.arguments import parse_play_args
from gammon.game import BEARING_OFF_POS, Backgammon, Color
from gammon.players import CommandLinePlayer, RandomPlayer


class EndgameBackgammon(Backgammon):
    """Both sides bearing off, so games finish in a few turns."""

    def init(self):
        super().init()
        for color in (Color.RED, Color.WHITE):
            board = self.board_for(color)
            board.counts[:] = 0
            board.set(22, 2)
            board.set(24, 3)
            board.set(BEARING_OFF_POS, 10)


def test_roll_dice_in_range():
    rng = np.random.default_rng(0)
    for _ in range(200):
        a, b = play.roll_dice(rng)
        assert 1 <= a <= 6
        assert 1 <= b <= 6


def test_roll_dice_is_seeded():
    assert play.roll_dice(np.random.default_rng(5)) == play.roll_dice(np.random.default_rng(5))


def test_play_game_until_bear_off(capsys):
    game = EndgameBackgammon()
    game.init()
    rng = np.random.default_rng(11)
    red = RandomPlayer(Color.RED, rng)
    white = RandomPlayer(Color.WHITE, rng)

    winner = play.play_game(game, red, white, rng)

    assert winner in (Color.RED, Color.WHITE)
    assert game.get_board(winner, BEARING_OFF_POS) == 15
    assert game.get_board(winner.opposite, BEARING_OFF_POS) < 15
    out = capsys.readouterr().out
    assert "player red to play" in out
    assert f"player {winner} won" in out


def test_play_turn_passes_when_closed_out(game, capsys):
    game.red_board.set(0, 1)
    for pos in range(1, 7):
        game.white_board.set(game.get_opposite_pos(pos), 2)
    player = RandomPlayer(Color.RED, np.random.default_rng(0))
    play.play_turn(game, player, np.random.default_rng(0))
    assert "no legal moves" in capsys.readouterr().out
    assert game.get_board(Color.RED, 0) == 1


def test_make_player():
    rng = np.random.default_rng(0)
    assert isinstance(play.make_player("random", Color.RED, rng), RandomPlayer)
    assert isinstance(play.make_player("human", Color.WHITE, rng), CommandLinePlayer)


def test_parse_play_args_defaults():
    config = parse_play_args([])
    assert config.red == "human"
    assert config.white == "random"
    assert config.games == 1
    assert config.seed is None
    assert config.log_level == "WARNING"


def test_parse_play_args_rejects_zero_games():
    with pytest.raises(SystemExit):
        parse_play_args(["--games", "0"])


def test_main_runs_a_tally(monkeypatch, capsys):
    monkeypatch.setattr(play, "Backgammon", EndgameBackgammon)
    status = play.main(["--red", "random", "--white", "random", "--games", "3", "--seed", "1",
                        "--log-level", "error"])
    assert status == 0
    out = capsys.readouterr().out
    red = int(out.split("red: ")[1].split(" /")[0])
    white = int(out.split("white: ")[1].split(" /")[0])
    assert red + white == 3


def test_main_stops_on_end_of_input(monkeypatch, capsys):
    def no_input(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", no_input)
    monkeypatch.setattr(play, "Backgammon", EndgameBackgammon)
    status = play.main(["--red", "human", "--white", "random", "--seed", "2"])
    assert status == 1
    assert "bye" in capsys.readouterr().out
