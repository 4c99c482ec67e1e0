"""
connectfour - Console Connect Four

This package provides a Connect Four board, a rule-based computer
player, an interactive player and a command-line interface for
playing games in the terminal.
"""

# Version number
__version__ = '0.1.0'
