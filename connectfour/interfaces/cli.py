"""
cli.py - Command-line interface for Connect Four

This module provides a CLI for playing games in the terminal (any mix of
human and computer players), analyzing board positions, and timing the
core board and AI operations.
"""

import argparse
import sys
import time
from typing import Callable, List, Optional, Tuple

import numpy as np

from connectfour.ai.heuristic import HeuristicPlayer
from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.game.players import InteractivePlayer, MovePolicy
from connectfour.game.rules import ConnectFourGame
from connectfour.interfaces.display import ConsoleDisplay
from connectfour.utils import COLS, Token, GameResult

PLAYER_TYPES = ('human', 'computer')


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with play, test and benchmark commands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--debug', action='store_true',
                        help='Enable debug mode (equivalent to --debug-level debug)')
    common.add_argument('--debug-level',
                        choices=[level.name.lower() for level in DebugLevel],
                        default='warning',
                        help='Set debug level: none (silent) through trace (most verbose)')
    common.add_argument('--log-file', type=str, default=None,
                        help='Also write log messages to this file')
    common.add_argument('--seed', type=int, default=None,
                        help='Seed for the computer players\' random fallback moves')

    parser = argparse.ArgumentParser(description='Connect Four CLI')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', parents=[common],
                                        help='Play a game in the terminal')
    play_parser.add_argument('--player1', choices=PLAYER_TYPES,
                             help='Type of Player 1 (X); asked interactively if omitted')
    play_parser.add_argument('--player2', choices=PLAYER_TYPES,
                             help='Type of Player 2 (O); asked interactively if omitted')
    play_parser.add_argument('--name1', type=str, help='Name of Player 1 when human')
    play_parser.add_argument('--name2', type=str, help='Name of Player 2 when human')
    play_parser.add_argument('--delay', type=float, default=0.5,
                             help='Pause in seconds after each computer move')
    play_parser.add_argument('--no-color', action='store_true', help='Disable colored tokens')
    play_parser.add_argument('--no-clear', action='store_true',
                             help='Do not clear the screen between moves')

    test_parser = subparsers.add_parser('test', parents=[common],
                                        help='Analyze a board position')
    position_group = test_parser.add_mutually_exclusive_group(required=True)
    position_group.add_argument('--position', type=str,
                                help='42 comma-separated cell values (0 empty, 1 X, 2 O), top row first')
    position_group.add_argument('--rows', type=str,
                                help='6 rows of X/O/. separated by "/", top row first')

    benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
                                             help='Benchmark performance')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of iterations for benchmarking')

    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Configure debug level based on args.debug or args.debug_level."""
    if getattr(args, 'debug', False):
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(getattr(args, 'debug_level', 'warning'))
    if getattr(args, 'log_file', None):
        debug.configure(log_file=args.log_file)


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, argv: Optional[List[str]] = None,
                 input_fn: Callable[[str], str] = input,
                 display: Optional[ConsoleDisplay] = None):
        """
        Initialize the CLI.

        Args:
            argv: Command-line arguments (sys.argv[1:] if None)
            input_fn: Function used for every line of user input
            display: Output target; built from the parsed options if None
        """
        self.argv = argv
        self.input_fn = input_fn
        self.display = display
        self.args = None
        self.rng = None
        self.computer_tokens = set()

    def parse_args(self) -> None:
        """Parse command-line arguments."""
        self.args = build_parser().parse_args(self.argv)
        configure_debug(self.args)
        self.rng = np.random.default_rng(getattr(self.args, 'seed', None))

        if self.display is None:
            use_color = not getattr(self.args, 'no_color', False)
            clear_screen = not getattr(self.args, 'no_clear', False)
            if not sys.stdout.isatty():
                use_color = clear_screen = False
            self.display = ConsoleDisplay(use_color=use_color, clear_screen=clear_screen)

    def out(self, text: str) -> None:
        self.display.message(text)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'test':
            return self.test_position()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        self.out("Please specify a command. Use --help for options.")
        return 1

    # Playing

    def play_game(self) -> int:
        """Play Connect Four games until the players stop."""
        self.out("Welcome to Connect 4!")

        while True:
            try:
                player_x, player_o = self.create_players()
                game = ConnectFourGame(player_x, player_o, on_move=self._on_move)
                self.display.show_board(game.board)
                game.play()
            except (KeyboardInterrupt, EOFError):
                self.out("\nQuitting game.")
                return 0

            self.display.announce_result(game.board)
            debug.info(f"Game over after {len(game.moves)} moves: {game.result.name}", "cli")

            try:
                if not self.play_again():
                    return 0
            except (KeyboardInterrupt, EOFError):
                return 0

    def create_players(self) -> Tuple[MovePolicy, MovePolicy]:
        """Build both players from the options, asking for anything not given."""
        players = []
        self.computer_tokens = set()
        for index, token in ((1, Token.X), (2, Token.O)):
            kind = getattr(self.args, f'player{index}') or self.ask_player_type(index)
            if kind == 'human':
                name = getattr(self.args, f'name{index}') or self.ask_name(index)
                player = InteractivePlayer(token, input_fn=self.input_fn,
                                           output_fn=self.out,
                                           prompt=f"{name}'s turn ({token}): ")
            else:
                name = f"Player {index} (AI)"
                player = HeuristicPlayer(token, rng=self.rng)
                self.computer_tokens.add(token)
            self.display.names[token] = name
            players.append(player)
        return players[0], players[1]

    def ask_player_type(self, index: int) -> str:
        while True:
            self.out(f"Choose the type of Player {index}: (1) Human or (2) AI")
            try:
                choice = int(self.input_fn("").strip())
            except ValueError:
                choice = None
            if choice == 1:
                return 'human'
            if choice == 2:
                return 'computer'
            self.out("Invalid choice. Please enter 1 or 2.")

    def ask_name(self, index: int) -> str:
        self.out(f"Enter name for Player {index}:")
        return self.input_fn("").strip() or f"Player {index}"

    def play_again(self) -> bool:
        self.out("Do you want to play again? (yes/no)")
        while True:
            answer = self.input_fn("").strip().lower()
            if answer in ('yes', 'no'):
                return answer == 'yes'
            self.out("Invalid input. Please enter 'yes' or 'no'.")

    def _on_move(self, board: Board, token: Token, column: int) -> None:
        self.display.announce_move(board, token, column)
        delay = getattr(self.args, 'delay', 0)
        if delay > 0 and token in self.computer_tokens and not board.outcome().is_game_over():
            time.sleep(delay)

    # Analysis

    def load_position(self) -> Board:
        if self.args.position:
            return Board.from_position(self.args.position)
        return Board.from_rows(self.args.rows.split('/'))

    def test_position(self) -> int:
        """Analyze a specific board position."""
        try:
            board = self.load_position()
        except ValueError as e:
            self.out(f"Error parsing position: {e}")
            return 1

        self.out("Loaded position:")
        self.out(board.render())

        result = board.outcome()
        self.out(f"\nResult: {result.name}")
        winner = result.winner()
        if winner is not None:
            self.out(f"Winning line for {winner}: {board.winning_line(winner)}")
            return 0

        if result == GameResult.DRAW:
            return 0

        self.out(f"Tokens on board: {board.move_count()}")
        self.out(f"Valid moves: {board.valid_columns()}")
        for token in (Token.X, Token.O):
            player = HeuristicPlayer(token, rng=self.rng)
            column = player.choose_column(board)
            self.out(f"Heuristic move for {token}: column {column} ({player.last_reason})")
        return 0

    # Benchmarking

    def random_position(self, max_moves: int) -> Board:
        """Play random legal moves on a fresh board, stopping early at a win or draw."""
        board = Board()
        token = Token.X
        for _ in range(max_moves):
            if board.outcome().is_game_over():
                break
            board.place_token(token, int(self.rng.choice(board.valid_columns())))
            token = token.other()
        return board

    def benchmark(self) -> int:
        """Benchmark the board and heuristic player."""
        iterations = self.args.iterations
        if iterations < 1:
            self.out("Iterations must be at least 1.")
            return 1
        self.out(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board()
        elapsed = debug.end_timer("board_init", "cli")
        self.out(f"Board initialization: {elapsed:.6f} seconds total, "
                 f"{elapsed / iterations * 1000:.6f} ms per board")

        positions = [self.random_position(int(self.rng.integers(7, 21)))
                     for _ in range(iterations)]

        debug.start_timer("placement")
        placed = 0
        for board in positions:
            test_board = board.copy()
            for column in range(1, COLS + 1):
                placed += test_board.place_token(Token.X, column)
        elapsed = debug.end_timer("placement", "cli")
        self.out(f"Placing {placed} tokens: {elapsed:.6f} seconds total, "
                 f"{elapsed / max(placed, 1) * 1000:.6f} ms per token")

        debug.start_timer("win_check")
        for board in positions:
            board.check_for_win(Token.X)
            board.check_for_win(Token.O)
        elapsed = debug.end_timer("win_check", "cli")
        self.out(f"Performing {2 * iterations} win checks: {elapsed:.6f} seconds total, "
                 f"{elapsed / (2 * iterations) * 1000:.6f} ms per check")

        player = HeuristicPlayer(Token.X, rng=self.rng)
        decisions = 0
        debug.start_timer("heuristic")
        for board in positions:
            if not board.outcome().is_game_over():
                player.choose_column(board)
                decisions += 1
        elapsed = debug.end_timer("heuristic", "cli")
        self.out(f"Making {decisions} heuristic decisions: {elapsed:.6f} seconds total, "
                 f"{elapsed / max(decisions, 1) * 1000:.6f} ms per decision")

        game = ConnectFourGame(HeuristicPlayer(Token.X, rng=self.rng),
                               HeuristicPlayer(Token.O, rng=self.rng))
        debug.start_timer("game")
        result = game.play()
        elapsed = debug.end_timer("game", "cli")
        self.out(f"Heuristic vs heuristic: {result.name} after {len(game.moves)} moves "
                 f"in {elapsed:.6f} seconds")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
