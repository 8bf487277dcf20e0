"""Sudoku puzzle generator with fixed clue-removal difficulty levels."""

from __future__ import annotations
import logging
import os
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.board import SudokuGrid, SIZE, BOX_SIZE, DIGITS
from ..solvers.backtracking_solver import solve

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty levels, each tied to a fixed number of removed cells."""
    BEGINNER = "beginner"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"
    EVIL = "evil"

    @property
    def cells_to_remove(self) -> int:
        """Number of cells cleared from the full solution."""
        return _CELLS_TO_REMOVE[self]

    @property
    def clue_count(self) -> int:
        """Number of given cells left in the dealt puzzle."""
        return SIZE * SIZE - self.cells_to_remove

    @classmethod
    def parse(cls, name: str) -> Difficulty:
        if not isinstance(name, str):
            raise ValueError(f"Difficulty name must be a string, got {name!r}")
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {name!r} (expected one of: {choices})") from None


_CELLS_TO_REMOVE = {
    Difficulty.BEGINNER: 25,
    Difficulty.EASY: 35,
    Difficulty.MEDIUM: 45,
    Difficulty.HARD: 55,
    Difficulty.EXPERT: 60,
    Difficulty.EVIL: 65,
}


@dataclass(frozen=True)
class Puzzle:
    """A dealt puzzle and the solution it was carved from."""
    grid: SudokuGrid
    solution: SudokuGrid
    difficulty: Difficulty = Difficulty.MEDIUM

    @classmethod
    def from_strings(cls, puzzle: str, solution: str,
                     difficulty: Difficulty = Difficulty.MEDIUM) -> Puzzle:
        return cls(SudokuGrid.from_string(puzzle), SudokuGrid.from_string(solution), difficulty)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty.value,
            "puzzle": self.grid.to_string(),
            "solution": self.solution.to_string(),
            "clues": self.grid.count_filled(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Puzzle:
        return cls.from_strings(data["puzzle"], data["solution"], Difficulty.parse(data["difficulty"]))


class PuzzleGenerator:
    """
    Generator for Sudoku puzzles.

    Algorithm:
    1. Seed the three diagonal boxes with random permutations of 1-9. These
       boxes share no row, column or box, so the partial grid is consistent.
    2. Complete the grid with the deterministic backtracking solver.
    3. Clear uniformly random filled cells until the difficulty's removal
       count is reached.

    Clue removal does not check for a unique solution. Sessions judge moves
    against the stored solution only, so a puzzle that happens to admit a
    second completion is still played against the first.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            rng: Explicit random source; takes precedence over ``seed``.
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM) -> Puzzle:
        """
        Generate a puzzle along with its solution.

        Args:
            difficulty: Desired difficulty level.

        Returns:
            The puzzle (with holes) and its complete solution.
        """
        solution = self._generate_complete_grid()
        grid = self._remove_cells(solution, difficulty.cells_to_remove)
        logger.debug("Generated %s puzzle with %d clues", difficulty.value, grid.count_filled())
        return Puzzle(grid=grid, solution=solution, difficulty=difficulty)

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM) -> List[Puzzle]:
        """Generate ``count`` puzzles of one difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    def _generate_complete_grid(self) -> SudokuGrid:
        grid = SudokuGrid()
        for box_idx in range(BOX_SIZE):
            start = box_idx * BOX_SIZE
            self._fill_box(grid, start, start)

        solution = solve(grid)
        if solution is None:
            # Independent diagonal boxes always extend to a full grid
            raise RuntimeError("Seeded grid could not be completed")
        return solution

    def _fill_box(self, grid: SudokuGrid, start_row: int, start_col: int) -> None:
        """Fill a single box with a random permutation of 1-9."""
        values = list(DIGITS)
        self.rng.shuffle(values)

        idx = 0
        for i in range(BOX_SIZE):
            for j in range(BOX_SIZE):
                grid.set(start_row + i, start_col + j, values[idx])
                idx += 1

    def _remove_cells(self, solution: SudokuGrid, cells_to_remove: int) -> SudokuGrid:
        """Clear random still-filled cells until exactly ``cells_to_remove`` are empty."""
        puzzle = solution.copy()
        filled = [(i, j) for i in range(SIZE) for j in range(SIZE)]

        for _ in range(cells_to_remove):
            idx = self.rng.randrange(len(filled))
            row, col = filled.pop(idx)
            puzzle.clear(row, col)

        return puzzle

    @staticmethod
    def save_to_folder(puzzles: List[Puzzle], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: Puzzles to write.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.grid.to_string())
                f.write("\n")
                f.write(puzzle.solution.to_string())
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle.grid))
