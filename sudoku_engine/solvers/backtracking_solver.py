"""Row-major backtracking solvers."""

from __future__ import annotations
from typing import Optional, List

from .base_solver import BaseSolver
from ..core.board import SudokuGrid, DIGITS
from ..core.validator import is_placement_valid


class BacktrackingSolver(BaseSolver):
    """
    Exhaustive depth-first search over cells in row-major order.

    At the first empty cell the digits 1..9 are tried in increasing order;
    each valid digit is placed and the search recurses, undoing the
    placement on failure. Given the same grid the result is always the same.
    Recursion depth is bounded by the 81 cells.
    """

    name = "Backtracking"

    def _solve(self, grid: SudokuGrid) -> Optional[SudokuGrid]:
        if self._backtrack(grid):
            return grid
        return None

    def _backtrack(self, grid: SudokuGrid) -> bool:
        """Returns True once no empty cell remains."""
        self.stats.iterations += 1

        cell = grid.find_first_empty()
        if cell is None:
            return True

        row, col = cell
        for digit in DIGITS:
            if is_placement_valid(grid, row, col, digit):
                grid.set(row, col, digit)
                if self._backtrack(grid):
                    return True
                grid.clear(row, col)

        self.stats.backtracks += 1
        return False


class StackBacktrackingSolver(BaseSolver):
    """
    The same search as :class:`BacktrackingSolver` driven by an explicit
    stack of ``[row, col, next_digit]`` frames instead of recursion.
    """

    name = "Backtracking (explicit stack)"

    def _solve(self, grid: SudokuGrid) -> Optional[SudokuGrid]:
        cell = grid.find_first_empty()
        if cell is None:
            return grid

        stack: List[List[int]] = [[cell[0], cell[1], 1]]

        while stack:
            self.stats.iterations += 1
            frame = stack[-1]
            row, col, start = frame
            grid.clear(row, col)

            for digit in range(start, 10):
                if is_placement_valid(grid, row, col, digit):
                    grid.set(row, col, digit)
                    frame[2] = digit + 1
                    break
            else:
                stack.pop()
                self.stats.backtracks += 1
                continue

            cell = grid.find_first_empty()
            if cell is None:
                return grid
            stack.append([cell[0], cell[1], 1])

        return None


def solve(grid: SudokuGrid) -> Optional[SudokuGrid]:
    """
    Solve a grid with the recursive backtracking solver.

    Returns:
        A solved copy of the grid, or None if it cannot be completed.
    """
    solution, _ = BacktrackingSolver().solve(grid)
    return solution
