import pytest

from connectfour.game.board import Board

# Full board with no four in a row anywhere: runs of two across,
# alternating down, and no diagonal longer than two.
DRAW_ROWS = [
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
]


class ScriptedPlayer:
    """Plays a fixed list of columns and remembers what it was shown."""

    def __init__(self, token, columns):
        self.token = token
        self.columns = list(columns)
        self.calls = 0
        self.boards = []

    def choose_column(self, board):
        self.calls += 1
        self.boards.append(board)
        return self.columns.pop(0)


@pytest.fixture
def empty_board():
    return Board()


@pytest.fixture
def draw_board():
    return Board.from_rows(DRAW_ROWS)


@pytest.fixture
def scripted_player():
    return ScriptedPlayer
