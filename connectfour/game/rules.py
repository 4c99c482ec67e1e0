"""
rules.py - Turn management for Connect Four

This module provides ConnectFourGame, which alternates between two move
policies on one board, checks every chosen column against the board
before applying it, and stops at the first win or draw.
"""

from typing import Callable, Dict, List, Optional

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.game.players import MovePolicy
from connectfour.utils import Token, GameResult, IllegalMoveError, is_valid_column

MoveCallback = Callable[[Board, Token, int], None]


class ConnectFourGame:
    """
    Connect Four game manager.

    Player X always moves first. The result is never stored; it is read
    from the board after every move.
    """

    def __init__(self, player_x: MovePolicy, player_o: MovePolicy,
                 board: Optional[Board] = None,
                 on_move: Optional[MoveCallback] = None,
                 max_attempts: int = 3):
        """
        Initialize a new Connect Four game.

        Args:
            player_x: Policy playing the X token
            player_o: Policy playing the O token
            board: Starting board (a new empty board if None); the side to
                move is read from its token counts
            on_move: Called with (board, token, column) after each applied move
            max_attempts: How many times a player may answer with an illegal
                column in one turn before IllegalMoveError is raised
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        debug.debug("Initializing ConnectFourGame", "game")
        self.players: Dict[Token, MovePolicy] = {Token.X: player_x, Token.O: player_o}
        self.on_move = on_move
        self.max_attempts = max_attempts
        self.board = board if board is not None else Board()
        self.current_token = self.board.side_to_move()
        self.moves: List[int] = []

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board = Board()
        self.current_token = Token.X
        self.moves = []

    @property
    def current_player(self) -> MovePolicy:
        return self.players[self.current_token]

    @property
    def result(self) -> GameResult:
        return self.board.outcome()

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def winner(self) -> Optional[Token]:
        """
        Get the winner of the game.

        Returns:
            The winning token, or None if no winner yet or draw
        """
        return self.result.winner()

    def is_legal(self, column) -> bool:
        """True if the column can be played on the live board right now."""
        return is_valid_column(column) and not self.board.is_column_full(column)

    def _request_column(self) -> int:
        token = self.current_token
        player = self.current_player
        column = None
        for attempt in range(1, self.max_attempts + 1):
            column = player.choose_column(self.board.copy())
            if self.is_legal(column):
                return int(column)
            debug.warning(f"Player {token} chose illegal column {column!r} "
                          f"(attempt {attempt}/{self.max_attempts})", "game")
        raise IllegalMoveError(token, column)

    def play_turn(self) -> GameResult:
        """
        Let the current player make one move.

        Returns:
            The game result after the move
        """
        result = self.result
        if result.is_game_over():
            debug.warning(f"Turn requested after game ended ({result.name})", "game")
            return result

        token = self.current_token
        column = self._request_column()
        if not self.board.place_token(token, column):
            raise IllegalMoveError(token, column)

        self.moves.append(column)
        debug.info(f"Move {len(self.moves)}: player {token} plays column {column}", "game")
        if self.on_move is not None:
            self.on_move(self.board, token, column)

        result = self.result
        if not result.is_game_over():
            self.current_token = token.other()
        return result

    def play(self) -> GameResult:
        """
        Play turns until somebody wins or the board fills up.

        Returns:
            The final game result
        """
        result = self.result
        while not result.is_game_over():
            result = self.play_turn()

        if result == GameResult.DRAW:
            debug.info(f"Game ends in a draw after {len(self.moves)} moves", "game")
        else:
            debug.info(f"Player {result.winner()} wins after {len(self.moves)} moves", "game")
        return result
