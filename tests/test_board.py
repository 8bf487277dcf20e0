"""Unit tests for the Sudoku grid and validation."""

import pytest
import numpy as np
from sudoku_engine.core.board import SudokuGrid
from sudoku_engine.core.validator import (
    is_placement_valid,
    find_conflicts,
    remaining_count,
    is_puzzle_complete,
    validate_solution,
    is_valid_grid,
    is_solution_grid,
)

from conftest import TEST_PUZZLE, TEST_SOLUTION


class TestSudokuGrid:
    """Tests for SudokuGrid class."""

    def test_create_empty_grid(self):
        """Test creating an empty 9x9 grid."""
        grid = SudokuGrid()
        assert grid.size == 9
        assert grid.box_size == 3
        assert grid.count_empty() == 81
        assert grid.count_filled() == 0

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            SudokuGrid(np.zeros((4, 4), dtype=np.int32))

    def test_set_and_get(self):
        """Test setting and getting values."""
        grid = SudokuGrid()
        grid.set(0, 0, 5)
        assert grid.get(0, 0) == 5
        assert not grid.is_empty(0, 0)

        grid.clear(0, 0)
        assert grid.is_empty(0, 0)

    def test_set_out_of_range(self):
        grid = SudokuGrid()
        with pytest.raises(ValueError):
            grid.set(0, 0, 10)

    def test_box_origin(self):
        assert SudokuGrid.box_origin(4, 7) == (3, 6)
        assert SudokuGrid.box_origin(0, 2) == (0, 0)
        assert SudokuGrid.box_origin(8, 8) == (6, 6)

    def test_get_candidates(self):
        """Test getting valid candidates for a cell."""
        grid = SudokuGrid()
        grid.set(0, 0, 5)
        grid.set(0, 1, 3)

        candidates = grid.get_candidates(0, 2)
        assert 5 not in candidates
        assert 3 not in candidates
        assert len(candidates) == 7

    def test_peers(self):
        peers = SudokuGrid.get_peers(4, 4)
        assert len(peers) == 20
        assert (4, 4) not in peers
        assert (3, 5) in peers
        assert (0, 4) in peers
        assert (4, 0) in peers
        assert (0, 0) not in peers

    def test_find_first_empty_is_row_major(self):
        grid = SudokuGrid.from_string(TEST_PUZZLE)
        assert grid.find_first_empty() == (0, 2)
        assert SudokuGrid.from_string(TEST_SOLUTION).find_first_empty() is None

    def test_is_valid(self):
        """Test grid validation."""
        grid = SudokuGrid()
        assert grid.is_valid()

        grid.set(0, 0, 5)
        grid.set(0, 1, 5)
        assert not grid.is_valid()

    def test_is_solved(self):
        assert SudokuGrid.from_string(TEST_SOLUTION).is_solved()
        assert not SudokuGrid.from_string(TEST_PUZZLE).is_solved()

    def test_from_string(self):
        """Test creating grid from string."""
        grid = SudokuGrid.from_string("." * 80 + "9")
        assert grid.get(8, 8) == 9
        assert grid.count_filled() == 1

    def test_from_string_rejects_bad_input(self):
        with pytest.raises(ValueError):
            SudokuGrid.from_string("123")
        with pytest.raises(ValueError):
            SudokuGrid.from_string("x" * 81)

    def test_to_string(self):
        """Test converting grid to string."""
        grid = SudokuGrid.from_string(TEST_PUZZLE)
        assert grid.to_string() == TEST_PUZZLE

    def test_list_conversion_uses_none_for_holes(self):
        grid = SudokuGrid.from_string(TEST_PUZZLE)
        rows = grid.to_list()
        assert rows[0][:3] == [5, 3, None]
        assert SudokuGrid.from_2d_list(rows) == grid

    def test_copy(self):
        """Test grid copy."""
        grid = SudokuGrid()
        grid.set(4, 4, 7)
        copy = grid.copy()

        assert copy.get(4, 4) == 7

        copy.set(4, 4, 8)
        assert grid.get(4, 4) == 7


class TestValidator:
    """Tests for validation utilities."""

    def test_is_placement_valid(self):
        """Test placement validation."""
        grid = SudokuGrid()
        grid.set(0, 0, 5)

        assert not is_placement_valid(grid, 0, 5, 5)
        assert not is_placement_valid(grid, 5, 0, 5)
        assert not is_placement_valid(grid, 1, 1, 5)
        assert is_placement_valid(grid, 0, 5, 7)
        assert is_placement_valid(grid, 4, 4, 5)

    def test_restoring_solution_digit_is_always_valid(self):
        """Clearing cells of a solution and putting the digit back never conflicts."""
        solution = SudokuGrid.from_string(TEST_SOLUTION)
        grid = solution.copy()
        cells = [(r, c) for r in range(9) for c in range(9) if (r * 9 + c) % 4 == 0]
        for row, col in cells:
            grid.clear(row, col)

        for row, col in cells:
            assert is_placement_valid(grid, row, col, solution.get(row, col))

    def test_find_conflicts(self):
        grid = SudokuGrid.from_string(TEST_PUZZLE)
        assert find_conflicts(grid) == []

        # 5 already sits at (0, 0)
        grid.set(0, 2, 5)
        assert find_conflicts(grid) == [(0, 0), (0, 2)]

    def test_remaining_count(self):
        grid = SudokuGrid.from_string(TEST_PUZZLE)
        assert remaining_count(grid, 5) == 9 - TEST_PUZZLE.count("5")
        assert remaining_count(SudokuGrid.from_string(TEST_SOLUTION), 5) == 0

    def test_is_puzzle_complete(self):
        solution = SudokuGrid.from_string(TEST_SOLUTION)
        assert is_puzzle_complete(solution.copy(), solution)
        assert not is_puzzle_complete(SudokuGrid.from_string(TEST_PUZZLE), solution)

        wrong = solution.copy()
        wrong.set(0, 0, 1)
        assert not is_puzzle_complete(wrong, solution)

    def test_grid_predicates(self):
        puzzle = SudokuGrid.from_string(TEST_PUZZLE)
        assert is_valid_grid(puzzle)
        assert not is_solution_grid(puzzle)
        assert is_solution_grid(SudokuGrid.from_string(TEST_SOLUTION))

    def test_validate_solution(self):
        puzzle = SudokuGrid.from_string(TEST_PUZZLE)
        solution = SudokuGrid.from_string(TEST_SOLUTION)
        assert validate_solution(puzzle, solution)

        other = SudokuGrid.from_string(TEST_SOLUTION)
        other.set(0, 0, 4)
        assert not validate_solution(puzzle, other)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
