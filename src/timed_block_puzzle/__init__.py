"""Timed Block Puzzle.

A single-board placement puzzle: drop 3x3 pieces anywhere they fit, clear full
rows and columns, and beat a turn timer that speeds up with each level.
"""

__version__ = "0.1.0"
