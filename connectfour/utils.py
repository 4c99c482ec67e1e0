"""
utils.py - Constants, enumerations and helper functions for Connect Four

This module provides the board dimensions, the token and result
enumerations, line directions, column parsing and the plain ASCII
rendering shared by the game, AI and interface packages.
"""

from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of tokens in a row to win

# Center-out column order used by the heuristic player (1-based)
PREFERRED_COLUMNS = (4, 3, 5, 2, 6, 1, 7)


class Token(Enum):
    """Enumeration representing the two sides' tokens and empty cells."""
    EMPTY = 0
    X = 1    # Moves first
    O = 2

    def other(self) -> "Token":
        """Get the opposing token."""
        if self == Token.X:
            return Token.O
        elif self == Token.O:
            return Token.X
        return Token.EMPTY

    def __str__(self):
        return TOKEN_SYMBOLS[self]


TOKEN_SYMBOLS: Dict[Token, str] = {
    Token.EMPTY: " ",
    Token.X: "X",
    Token.O: "O",
}


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    X_WIN = auto()
    O_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    def winner(self) -> Optional[Token]:
        """Token that won, or None for a draw or an unfinished game."""
        if self == GameResult.X_WIN:
            return Token.X
        if self == GameResult.O_WIN:
            return Token.O
        return None

    @staticmethod
    def win_for(token: Token) -> "GameResult":
        if token == Token.X:
            return GameResult.X_WIN
        if token == Token.O:
            return GameResult.O_WIN
        raise ValueError(f"No win result for {token!r}")


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


class ColumnOutOfRangeError(IndexError):
    """Raised when a column number outside 1..COLS reaches the board."""

    def __init__(self, column):
        self.column = column
        super().__init__(f"Column {column} is out of range (1-{COLS})")


class CellOutOfRangeError(IndexError):
    """Raised when grid coordinates fall outside the ROWS x COLS board."""

    def __init__(self, row, col):
        self.row = row
        self.col = col
        super().__init__(f"Cell ({row}, {col}) is outside the {ROWS}x{COLS} board")


class IllegalMoveError(RuntimeError):
    """Raised when a player keeps answering with columns that cannot be played."""

    def __init__(self, token: Token, column):
        self.token = token
        self.column = column
        super().__init__(f"Player {token} chose illegal column {column!r}")


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a grid position is within the board boundaries.

    Args:
        row: Row index (0 is the top row)
        col: Column index (0-indexed)

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(column) -> bool:
    """True for an integer column number in 1..COLS."""
    if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
        return False
    return 1 <= column <= COLS


def parse_column(raw: Optional[str]) -> Optional[int]:
    """
    Parse a line of user input into a column number.

    Args:
        raw: Raw text, possibly None or padded with whitespace

    Returns:
        The column number if the text is an integer in 1..COLS, else None
    """
    if raw is None:
        return None
    try:
        column = int(raw.strip())
    except ValueError:
        return None
    if not is_valid_column(column):
        return None
    return column


def render_board_ascii(grid: np.ndarray,
                       cell_format: Optional[Callable[[Token, int, int], str]] = None) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The board grid (ROWS x COLS of Token values)
        cell_format: Optional function (token, row, col) -> text used to
            draw each cell, e.g. to add color

    Returns:
        ASCII representation of the board with a 1-based column header
    """
    if cell_format is None:
        cell_format = lambda token, row, col: str(token)

    result = [" " + " ".join(str(c + 1) for c in range(COLS))]
    for row in range(ROWS):
        line = "|"
        for col in range(COLS):
            line += cell_format(Token(int(grid[row, col])), row, col) + "|"
        result.append(line)

    return "\n".join(result)


def parse_rows(rows: List[str]) -> np.ndarray:
    """
    Convert row strings ("X", "O", "." or " ") into a grid array.

    Args:
        rows: ROWS strings of COLS characters each, top row first

    Returns:
        Grid array of Token values
    """
    if len(rows) != ROWS:
        raise ValueError(f"Expected {ROWS} rows, got {len(rows)}")

    symbols = {"X": Token.X.value, "O": Token.O.value, ".": Token.EMPTY.value, " ": Token.EMPTY.value}
    grid = np.zeros((ROWS, COLS), dtype=int)
    for row, text in enumerate(rows):
        if len(text) != COLS:
            raise ValueError(f"Row {row} must have {COLS} cells, got {len(text)}")
        for col, char in enumerate(text.upper()):
            if char not in symbols:
                raise ValueError(f"Unknown cell value {char!r} at ({row}, {col})")
            grid[row, col] = symbols[char]
    return grid


def parse_position(position: str) -> np.ndarray:
    """
    Convert ROWS*COLS comma-separated cell values (0, 1, 2) into a grid array.
    """
    values = [int(c) for c in position.split(',')]
    if len(values) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values")
    valid = {token.value for token in Token}
    for value in values:
        if value not in valid:
            raise ValueError(f"Unknown cell value {value}")
    return np.array(values, dtype=int).reshape(ROWS, COLS)


def line_cells(row: int, col: int, direction: Direction) -> Optional[List[Tuple[int, int]]]:
    """
    Cells of the CONNECT_N-long line starting at (row, col) in a direction.

    Returns:
        The list of (row, col) positions, or None if the line leaves the board
    """
    dr, dc = DIRECTION_VECTORS[direction]
    end_row = row + dr * (CONNECT_N - 1)
    end_col = col + dc * (CONNECT_N - 1)
    if not (is_valid_position(row, col) and is_valid_position(end_row, end_col)):
        return None
    return [(row + dr * i, col + dc * i) for i in range(CONNECT_N)]
