#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Examples:
    python run.py play
    python run.py play --player1 human --player2 computer --name1 Ada
    python run.py play --player1 computer --player2 computer --delay 0
    python run.py test --rows "......./......./......./..X..../..XO.../.XOOO.."
    python run.py benchmark --iterations 500 --seed 7
"""

import sys

from connectfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
