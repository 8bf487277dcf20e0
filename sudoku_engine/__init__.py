"""Sudoku puzzle engine: generation, solving and game sessions."""

__version__ = "1.0.0"
