"""
display.py - Console rendering for Connect Four

Draws the board with ANSI colors and keeps the mapping from tokens to
player names and colors, which the core game knows nothing about.
"""

import sys
from typing import Dict, Iterable, Optional, Set, TextIO, Tuple

from connectfour.game.board import Board
from connectfour.utils import Token

# ANSI color codes for terminal output
COLORS = {
    "RED": "\033[31m",
    "BLUE": "\033[34m",
    "WHITE": "\033[37m",
    "BOLD": "\033[1m",
    "RESET": "\033[0m"
}

TOKEN_COLORS: Dict[Token, str] = {
    Token.X: COLORS["RED"],
    Token.O: COLORS["BLUE"],
    Token.EMPTY: COLORS["WHITE"],
}

CLEAR_SCREEN = "\033[2J\033[H"


class ConsoleDisplay:
    """Prints boards and messages for one or more games."""

    def __init__(self, names: Optional[Dict[Token, str]] = None,
                 use_color: bool = True,
                 clear_screen: bool = True,
                 stream: Optional[TextIO] = None):
        self.names = {Token.X: "Player 1", Token.O: "Player 2"}
        if names:
            self.names.update(names)
        self.use_color = use_color
        self.clear_screen = clear_screen
        self.stream = stream if stream is not None else sys.stdout

    def name_of(self, token: Token) -> str:
        return self.names.get(token, str(token))

    def format_board(self, board: Board, highlight: Iterable[Tuple[int, int]] = ()) -> str:
        """
        Render a board, coloring tokens and emphasising highlighted cells.

        Args:
            board: Board to draw
            highlight: Grid coordinates (row, col) to draw in bold, e.g. a winning line
        """
        if not self.use_color:
            return board.render()

        marked: Set[Tuple[int, int]] = set(highlight)

        def cell_format(token: Token, row: int, col: int) -> str:
            prefix = TOKEN_COLORS[token]
            if (row, col) in marked:
                prefix = COLORS["BOLD"] + prefix
            return f"{prefix}{token}{COLORS['RESET']}"

        return board.render(cell_format)

    def show_board(self, board: Board, highlight: Iterable[Tuple[int, int]] = ()) -> None:
        if self.clear_screen:
            self.stream.write(CLEAR_SCREEN)
        self.message(self.format_board(board, highlight))

    def message(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def announce_move(self, board: Board, token: Token, column: int) -> None:
        """Move callback for ConnectFourGame: redraw and say what was played."""
        self.show_board(board)
        self.message(f"{self.name_of(token)} ({token}) played column {column}")

    def announce_result(self, board: Board) -> None:
        """Show the final board and who won."""
        winner = board.outcome().winner()
        if winner is None:
            self.show_board(board)
            self.message("It's a draw!")
            return

        self.show_board(board, highlight=board.winning_line(winner))
        self.message("It's a Connect 4!")
        self.message(f"{self.name_of(winner)} wins!")
