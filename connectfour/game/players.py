"""
players.py - Move policies for Connect Four

A move policy is anything with a ``token`` and a ``choose_column(board)``
method returning a 1-based column. This module holds the protocol and the
interactive policy that reads columns from a person; the computer policy
lives in connectfour.ai.heuristic.
"""

from typing import Callable, Protocol

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import COLS, Token, parse_column


class MovePolicy(Protocol):
    token: Token

    def choose_column(self, board: Board) -> int:
        ...


INVALID_INPUT_MESSAGE = f"Invalid input. Please enter a number between 1 and {COLS}."
COLUMN_FULL_MESSAGE = "Column is full. Choose another column."


class InteractivePlayer:
    """
    A player whose moves are typed in.

    The actual reading and writing is delegated to the input and output
    functions, so any line-based source can drive it. choose_column keeps
    asking until it gets a column that can be played.
    """

    def __init__(self, token: Token,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print,
                 prompt: str = ""):
        """
        Initialize the interactive player.

        Args:
            token: Token this player places
            input_fn: Function that shows a prompt and returns one line of text
            output_fn: Function used to report rejected input
            prompt: Prompt text; defaults to "Player X's turn (1-7): "
        """
        self.token = token
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.prompt = prompt or f"Player {token}'s turn (1-{COLS}): "

    def choose_column(self, board: Board) -> int:
        while True:
            raw = self.input_fn(self.prompt)
            column = parse_column(raw)
            if column is None:
                debug.debug(f"Rejected input {raw!r} from player {self.token}", "game")
                self.output_fn(INVALID_INPUT_MESSAGE)
                continue
            if board.is_column_full(column):
                self.output_fn(COLUMN_FULL_MESSAGE)
                continue
            return column
