"""
connectfour.ai - Computer players for Connect Four

This package contains the rule-based heuristic player used for
computer-controlled sides.
"""

from connectfour.ai.heuristic import HeuristicPlayer

__all__ = ['HeuristicPlayer']
