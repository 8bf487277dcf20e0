"""Core module for Sudoku grid representation, validation and session cells."""

from .board import SudokuGrid
from .cell import Cell, EmptyCell, FilledCell, check_digit
from .validator import (
    is_placement_valid,
    is_valid_grid,
    is_solution_grid,
    is_puzzle_complete,
    find_conflicts,
    remaining_count,
    validate_solution,
)

__all__ = [
    "SudokuGrid",
    "Cell",
    "EmptyCell",
    "FilledCell",
    "check_digit",
    "is_placement_valid",
    "is_valid_grid",
    "is_solution_grid",
    "is_puzzle_complete",
    "find_conflicts",
    "remaining_count",
    "validate_solution",
]
