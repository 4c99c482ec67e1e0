"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which holds the grid, drops tokens
into columns, and derives wins, draws and the overall game result from the
grid contents alone.

Columns are numbered 1..COLS at every public method that takes a move;
grid coordinates (row, col) are 0-based with row 0 at the top.
"""

from typing import List, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (ROWS, COLS, Token, GameResult, Direction,
                               CellOutOfRangeError, ColumnOutOfRangeError,
                               line_cells, is_valid_column, is_valid_position,
                               parse_position, parse_rows, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    The grid is a ROWS x COLS numpy array of Token values. It is only
    changed by place_token, so occupied cells in a column always form a
    contiguous stack from the bottom row.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((ROWS, COLS), dtype=int)

    @classmethod
    def from_rows(cls, rows: List[str], strict: bool = True) -> 'Board':
        """
        Build a board from row strings, top row first.

        Args:
            rows: ROWS strings of COLS characters ("X", "O", "." or " ")
            strict: Reject positions with tokens floating above empty cells

        Returns:
            A new Board holding the position
        """
        return cls._from_grid(parse_rows(rows), strict)

    @classmethod
    def from_position(cls, position: str, strict: bool = True) -> 'Board':
        """
        Build a board from ROWS*COLS comma-separated cell values (0, 1, 2).
        """
        return cls._from_grid(parse_position(position), strict)

    @classmethod
    def _from_grid(cls, grid: np.ndarray, strict: bool) -> 'Board':
        board = cls()
        board.grid = grid
        if strict and not board.is_gravity_consistent():
            raise ValueError("Position has tokens above empty cells")
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with its own copy of the grid
        """
        debug.trace("Creating board copy", "board")
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        return new_board

    def _column_index(self, column: int) -> int:
        """Validate a 1-based column number and return its grid index."""
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            raise TypeError(f"Column must be an integer, got {type(column).__name__}")
        if not is_valid_column(column):
            raise ColumnOutOfRangeError(column)
        return int(column) - 1

    def is_column_full(self, column: int) -> bool:
        """
        Check whether a column has no room left.

        Args:
            column: Column number (1-indexed)

        Returns:
            True if the top cell of the column is occupied
        """
        col = self._column_index(column)
        return bool(self.grid[0, col] != Token.EMPTY.value)

    def valid_columns(self) -> List[int]:
        """Column numbers (1-indexed, ascending) that can still take a token."""
        return [col + 1 for col in range(COLS) if self.grid[0, col] == Token.EMPTY.value]

    def place_token(self, token: Token, column: int) -> bool:
        """
        Drop a token into the specified column.

        Args:
            token: Token to place (X or O)
            column: Column number (1-indexed)

        Returns:
            True if the token was placed, False if the column is full
        """
        if token == Token.EMPTY:
            raise ValueError("Cannot place an empty token")
        col = self._column_index(column)

        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, col] == Token.EMPTY.value:
                debug.trace(f"Placing {token} at position ({row}, {col})", "board")
                self.grid[row, col] = token.value
                return True

        debug.debug(f"Column {column} is full, {token} not placed", "board")
        return False

    def get_cell(self, row: int, col: int) -> Token:
        """Token at grid coordinates (row, col), both 0-indexed."""
        if not is_valid_position(row, col):
            raise CellOutOfRangeError(row, col)
        return Token(int(self.grid[row, col]))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid
        """
        return self.grid.copy()

    def move_count(self) -> int:
        """Number of tokens on the board."""
        return int(np.count_nonzero(self.grid != Token.EMPTY.value))

    def count(self, token: Token) -> int:
        """Number of cells holding token."""
        return int(np.count_nonzero(self.grid == token.value))

    def side_to_move(self) -> Token:
        """
        Token whose turn it is, read from the token counts.

        X moves first, so X is to move when the counts are equal and O is
        to move when X has exactly one more token.

        Raises:
            ValueError: If the counts cannot come from alternating play
        """
        x_count, o_count = self.count(Token.X), self.count(Token.O)
        if x_count == o_count:
            return Token.X
        if x_count == o_count + 1:
            return Token.O
        raise ValueError(f"Unbalanced position: {x_count} X tokens and {o_count} O tokens")

    def is_full(self) -> bool:
        return bool(np.all(self.grid != Token.EMPTY.value))

    def is_gravity_consistent(self) -> bool:
        """True if no token sits above an empty cell in its column."""
        occupied = self.grid != Token.EMPTY.value
        # Once a column is occupied going down, every cell below must be too
        return bool(np.all(occupied[:-1] <= occupied[1:]))

    def winning_line(self, token: Token) -> List[Tuple[int, int]]:
        """
        Find four consecutive cells holding a token.

        Every starting cell is tried in each direction and the scan stops
        at the first complete line.

        Args:
            token: Token to look for

        Returns:
            List of (row, col) positions forming the line, or empty list if none
        """
        if token == Token.EMPTY:
            return []

        value = token.value
        for direction in Direction:
            for row in range(ROWS):
                for col in range(COLS):
                    cells = line_cells(row, col, direction)
                    if cells is None:
                        continue
                    if all(self.grid[r, c] == value for r, c in cells):
                        return cells
        return []

    def check_for_win(self, token: Token) -> bool:
        """
        Check if a token has four in a row anywhere on the board.

        Args:
            token: Token to check

        Returns:
            True if there is a win for the token, False otherwise
        """
        return bool(self.winning_line(token))

    def is_draw(self) -> bool:
        """True if every cell is occupied and neither side has four in a row."""
        if not self.is_full():
            return False
        return not (self.check_for_win(Token.X) or self.check_for_win(Token.O))

    def outcome(self) -> GameResult:
        """
        Derive the game result from the grid.

        Returns:
            X_WIN, O_WIN, DRAW or IN_PROGRESS
        """
        for token in (Token.X, Token.O):
            if self.check_for_win(token):
                return GameResult.win_for(token)
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def render(self, cell_format=None) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid, cell_format)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()

    def __repr__(self) -> str:
        return f"Board(moves={self.move_count()}, result={self.outcome().name})"
