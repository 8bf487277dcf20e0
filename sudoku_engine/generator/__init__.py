"""Generator module for creating Sudoku puzzles."""

from .generator import PuzzleGenerator, Puzzle, Difficulty

__all__ = ["PuzzleGenerator", "Puzzle", "Difficulty"]
