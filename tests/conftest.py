import pytest

from gammon.game import Backgammon


@pytest.fixture
def game():
    """An empty board; tests place the checkers they need."""
    return Backgammon()


@pytest.fixture
def start_game():
    game = Backgammon()
    game.init()
    return game
