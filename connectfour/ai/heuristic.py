"""
heuristic.py - Rule-based computer player for Connect Four

This module provides a HeuristicPlayer that looks exactly one move ahead.
Each turn it applies these rules in order and stops at the first that
produces a column:

1. Win now: play a column that completes four of its own tokens
2. Block: play a column where the opponent would complete four
3. Prefer the center: first open column in PREFERRED_COLUMNS
4. Random: any open column, drawn from a seedable generator
"""

from typing import Optional, Sequence

import numpy as np

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import COLS, PREFERRED_COLUMNS, Token, is_valid_column


class HeuristicPlayer:
    """
    A Connect Four player that wins, blocks, or plays toward the center.

    The player never changes the board it is given; every candidate move
    is tried on a copy.
    """

    def __init__(self, token: Token,
                 preferred_columns: Sequence[int] = PREFERRED_COLUMNS,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """
        Initialize the heuristic player.

        Args:
            token: Token this player places
            preferred_columns: Column numbers (1-indexed) tried in order when
                there is nothing to win or block
            rng: Random generator for the fallback move
            seed: Seed for a new generator when rng is not given
        """
        if token == Token.EMPTY:
            raise ValueError("A player needs a real token")
        self.token = token
        self.preferred_columns = tuple(preferred_columns)
        for column in self.preferred_columns:
            if not is_valid_column(column):
                raise ValueError(f"Preferred column {column!r} is not a column number (1-{COLS})")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.last_reason: Optional[str] = None

    def find_winning_column(self, board: Board, token: Token) -> Optional[int]:
        """
        Find the lowest column where dropping a token wins for that token.

        Args:
            board: The current game board
            token: Token to try

        Returns:
            Column number (1-indexed), or None if no single move wins
        """
        for column in range(1, COLS + 1):
            if board.is_column_full(column):
                continue
            test_board = board.copy()
            test_board.place_token(token, column)
            if test_board.check_for_win(token):
                return column
        return None

    def choose_column(self, board: Board) -> int:
        """
        Pick the column to play.

        Args:
            board: The current game board

        Returns:
            Column number (1-indexed)
        """
        column = self.find_winning_column(board, self.token)
        if column is not None:
            return self._decide(column, "win")

        column = self.find_winning_column(board, self.token.other())
        if column is not None:
            return self._decide(column, "block")

        for column in self.preferred_columns:
            if not board.is_column_full(column):
                return self._decide(column, "prefer")

        valid_columns = board.valid_columns()
        if not valid_columns:
            raise ValueError("No valid moves.")
        return self._decide(int(self.rng.choice(valid_columns)), "random")

    def _decide(self, column: int, reason: str) -> int:
        self.last_reason = reason
        debug.debug(f"Player {self.token} plays column {column} ({reason})", "ai")
        return column
