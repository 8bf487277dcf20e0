"""Validation utilities for Sudoku grids."""

from __future__ import annotations
from typing import List, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .board import SudokuGrid


def is_placement_valid(grid: SudokuGrid, row: int, col: int, digit: int) -> bool:
    """
    Check if placing a digit at (row, col) keeps the grid consistent.

    The check is done before placement: the digit must not already appear
    in the row, the column, or the containing 3x3 box.

    Args:
        grid: The Sudoku grid.
        row: Row index (0-8).
        col: Column index (0-8).
        digit: Digit to check (1-9).

    Returns:
        True if the placement is valid.
    """
    if digit in grid.get_row(row):
        return False

    if digit in grid.get_col(col):
        return False

    if digit in grid.get_box(row, col):
        return False

    return True


def is_valid_grid(grid: SudokuGrid) -> bool:
    """True if no row, column or box holds the same digit twice."""
    return grid.is_valid()


def is_solution_grid(grid: SudokuGrid) -> bool:
    """True if the grid is full and every unit contains each digit once."""
    return grid.is_solved()


def is_puzzle_complete(values: SudokuGrid, solution: SudokuGrid) -> bool:
    """
    Check whether the played values match the solution everywhere.

    An empty cell never matches, so an unfinished grid is never complete.
    """
    return values == solution


def find_conflicts(grid: SudokuGrid) -> List[Tuple[int, int]]:
    """
    Find filled cells whose digit clashes with one of their peers.

    Returns:
        Row-major list of (row, col) positions involved in a clash.
    """
    conflicts = []
    work = grid.copy()

    for row in range(grid.size):
        for col in range(grid.size):
            value = work.get(row, col)
            if value == 0:
                continue

            # Lift the digit out so it does not collide with itself
            work.clear(row, col)
            if not is_placement_valid(work, row, col, value):
                conflicts.append((row, col))
            work.set(row, col, value)

    return conflicts


def remaining_count(grid: SudokuGrid, digit: int) -> int:
    """How many more copies of a digit can still be placed (9 minus placed)."""
    return grid.size - int((grid.grid == digit).sum())


def validate_solution(puzzle: SudokuGrid, solution: SudokuGrid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is solved and agrees with every clue of the puzzle.
    """
    clues = puzzle.grid != 0
    if not np.array_equal(puzzle.grid[clues], solution.grid[clues]):
        return False
    return solution.is_solved()
