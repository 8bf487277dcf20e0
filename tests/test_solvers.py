"""Unit tests for the backtracking solvers."""

import pytest
from sudoku_engine.core.board import SudokuGrid
from sudoku_engine.solvers import BacktrackingSolver, StackBacktrackingSolver, solve

from conftest import TEST_PUZZLE, TEST_SOLUTION

# Cell (0, 8) has no candidate: 1-8 are in its row and 9 in its box
DEAD_END_PUZZLE = "123456780" + "000000009" + "0" * 63

# Two 5s in the first row
CONFLICTING_PUZZLE = "55" + TEST_PUZZLE[2:]

SOLVERS = [BacktrackingSolver, StackBacktrackingSolver]


@pytest.mark.parametrize("solver_cls", SOLVERS)
class TestBacktrackingSolvers:
    """Behaviour shared by the recursive and explicit-stack solvers."""

    def test_solve_puzzle(self, solver_cls):
        """Test solving a known puzzle."""
        grid = SudokuGrid.from_string(TEST_PUZZLE)
        solution, stats = solver_cls().solve(grid)

        assert stats.solved
        assert solution is not None
        assert solution.is_solved()
        assert solution.to_string() == TEST_SOLUTION

    def test_input_not_modified(self, solver_cls):
        grid = SudokuGrid.from_string(TEST_PUZZLE)
        solver_cls().solve(grid)
        assert grid.to_string() == TEST_PUZZLE

    def test_dead_end_returns_none(self, solver_cls):
        solution, stats = solver_cls().solve(SudokuGrid.from_string(DEAD_END_PUZZLE))
        assert solution is None
        assert not stats.solved
        assert "error" not in stats.extra

    def test_conflicting_givens_return_none(self, solver_cls):
        solution, stats = solver_cls().solve(SudokuGrid.from_string(CONFLICTING_PUZZLE))
        assert solution is None
        assert not stats.solved

    def test_full_grid_is_returned_as_is(self, solver_cls):
        grid = SudokuGrid.from_string(TEST_SOLUTION)
        solution, stats = solver_cls().solve(grid)
        assert solution == grid
        assert stats.backtracks == 0

    def test_empty_grid_first_row_is_ascending(self, solver_cls):
        """Digits are tried in increasing order, so the first row is 1..9."""
        solution, _ = solver_cls().solve(SudokuGrid())
        assert solution.is_solved()
        assert solution.to_string()[:9] == "123456789"

    def test_stats_collected(self, solver_cls):
        _, stats = solver_cls().solve(SudokuGrid.from_string(TEST_PUZZLE))
        assert stats.time_seconds > 0
        assert stats.iterations > 0
        assert stats.algorithm == solver_cls.name


class TestSolveFunction:
    """Tests for the solve() helper."""

    def test_solve(self):
        solution = solve(SudokuGrid.from_string(TEST_PUZZLE))
        assert solution.to_string() == TEST_SOLUTION

    def test_unsolvable(self):
        assert solve(SudokuGrid.from_string(DEAD_END_PUZZLE)) is None

    def test_solvers_agree(self):
        """The two search drivers explore the same tree."""
        grid = SudokuGrid.from_string("1" + "0" * 80)
        recursive, _ = BacktrackingSolver().solve(grid)
        stacked, _ = StackBacktrackingSolver().solve(grid)
        assert recursive == stacked

    def test_memory_tracking(self):
        _, stats = BacktrackingSolver(track_memory=True).solve(SudokuGrid.from_string(TEST_PUZZLE))
        assert stats.memory_bytes > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
