"""9x9 Sudoku grid representation."""

from __future__ import annotations
import numpy as np
from typing import Iterator, List, Tuple, Optional, Set, Sequence

SIZE = 9
BOX_SIZE = 3
DIGITS = range(1, SIZE + 1)


class SudokuGrid:
    """
    A 9x9 matrix of optional digits.

    Empty cells are stored as 0; digits are 1-9. Row, column and box
    accessors return numpy views/arrays so membership tests stay cheap.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            grid: Optional initial 9x9 array. If None, creates an empty grid.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> SudokuGrid:
        """Create a deep copy of the grid."""
        new_grid = SudokuGrid()
        new_grid.grid = self.grid.copy()
        return new_grid

    def get(self, row: int, col: int) -> int:
        """Digit at (row, col); 0 when empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Write a digit, or 0 to clear. Raises ValueError outside 0-9."""
        if not 0 <= value <= SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        return bool(self.grid[row, col] == 0)

    def get_row(self, row: int) -> np.ndarray:
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        return self.grid[:, col]

    @staticmethod
    def box_origin(row: int, col: int) -> Tuple[int, int]:
        """Top-left coordinate of the box containing (row, col)."""
        return (row // BOX_SIZE) * BOX_SIZE, (col // BOX_SIZE) * BOX_SIZE

    def get_box(self, row: int, col: int) -> np.ndarray:
        """The nine values of the box containing (row, col), flattened."""
        top, left = self.box_origin(row, col)
        return self.grid[top:top + BOX_SIZE, left:left + BOX_SIZE].ravel()

    def units(self) -> Iterator[np.ndarray]:
        """Every row, column and box (27 arrays of nine values)."""
        for i in range(SIZE):
            yield self.get_row(i)
            yield self.get_col(i)
        for top in range(0, SIZE, BOX_SIZE):
            for left in range(0, SIZE, BOX_SIZE):
                yield self.get_box(top, left)

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Digits not yet used by any peer of (row, col).

        Returns:
            Set of digits 1-9; empty if the cell already holds a digit.
        """
        if not self.is_empty(row, col):
            return set()

        used = np.concatenate([self.get_row(row), self.get_col(col), self.get_box(row, col)])
        return set(DIGITS) - set(used.tolist())

    @staticmethod
    def get_peers(row: int, col: int) -> Set[Tuple[int, int]]:
        """
        The 20 cells sharing a row, column or box with (row, col).

        The cell itself is not included.
        """
        top, left = SudokuGrid.box_origin(row, col)
        peers = {(row, i) for i in range(SIZE)}
        peers |= {(i, col) for i in range(SIZE)}
        peers |= {(top + i, left + j) for i in range(BOX_SIZE) for j in range(BOX_SIZE)}
        peers.discard((row, col))
        return peers

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Empty positions in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == 0)]

    def find_first_empty(self) -> Optional[Tuple[int, int]]:
        """First empty cell in row-major order, or None when the grid is full."""
        rows, cols = np.nonzero(self.grid == 0)
        if len(rows) == 0:
            return None
        return int(rows[0]), int(cols[0])

    def count_empty(self) -> int:
        return int(np.count_nonzero(self.grid == 0))

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_complete(self) -> bool:
        """True when no cell is empty."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        True when no row, column or box holds a digit twice. Empty cells are
        ignored, so a partial grid can be valid.
        """
        for unit in self.units():
            # Index 0 counts empty cells
            if np.bincount(unit, minlength=SIZE + 1)[1:].max() > 1:
                return False
        return True

    def is_solved(self) -> bool:
        """Complete and valid."""
        return self.is_complete() and self.is_valid()

    def to_string(self) -> str:
        """Compact 81-character representation, 0 for empty cells."""
        return ''.join(map(str, self.grid.ravel().tolist()))

    def to_list(self) -> List[List[Optional[int]]]:
        """Rows of digits with None for empty cells (JSON friendly)."""
        return [[v or None for v in row] for row in self.grid.tolist()]

    @classmethod
    def from_string(cls, s: str) -> SudokuGrid:
        """
        Parse 81 characters, row by row.

        ``0`` or ``.`` marks an empty cell; any other non-digit raises
        ValueError.
        """
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        values = []
        for idx, c in enumerate(s):
            if c == '.':
                values.append(0)
            elif c in '0123456789':
                values.append(int(c))
            else:
                raise ValueError(f"Invalid character {c!r} at position {idx}")

        return cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[Optional[int]]]) -> SudokuGrid:
        """Create a grid from rows of ints, with 0 or None for empty cells."""
        arr = np.array([[v or 0 for v in row] for row in data], dtype=np.int32)
        return cls(arr)

    def __str__(self) -> str:
        """Pretty-print with box separators; empty cells show as '.'."""
        separator = '+' + ('-' * (BOX_SIZE * 2 + 1) + '+') * BOX_SIZE
        lines = []
        for i, row in enumerate(self.grid.tolist()):
            if i % BOX_SIZE == 0:
                lines.append(separator)
            boxes = [
                ' '.join(str(v) if v else '.' for v in row[j:j + BOX_SIZE])
                for j in range(0, SIZE, BOX_SIZE)
            ]
            lines.append('| ' + ' | '.join(boxes) + ' |')
        lines.append(separator)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuGrid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuGrid):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
