"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation, the move policy
protocol with the interactive player, and the turn loop.
"""

from connectfour.game.board import Board
from connectfour.game.players import MovePolicy, InteractivePlayer
from connectfour.game.rules import ConnectFourGame

__all__ = ['Board', 'MovePolicy', 'InteractivePlayer', 'ConnectFourGame']
