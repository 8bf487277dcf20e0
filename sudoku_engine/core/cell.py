"""Session board cells.

A cell is exactly one of :class:`EmptyCell` (optionally carrying pencil
notes) or :class:`FilledCell` (a digit plus the fixed/valid flags). Both are
frozen, so a board snapshot only needs to copy the row lists.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union


def check_digit(digit: int) -> int:
    """Return ``digit`` unchanged, raising ValueError if it is not 1-9."""
    if isinstance(digit, bool) or not isinstance(digit, int) or not 1 <= digit <= 9:
        raise ValueError(f"Digit must be an integer 1-9, got {digit!r}")
    return digit


@dataclass(frozen=True)
class EmptyCell:
    """A cell without a digit. May hold pencil notes."""
    notes: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        for note in self.notes:
            check_digit(note)

    value = None
    is_fixed = False
    is_valid = True

    def toggle_note(self, digit: int) -> EmptyCell:
        return EmptyCell(self.notes ^ {digit})

    def without_note(self, digit: int) -> EmptyCell:
        if digit not in self.notes:
            return self
        return EmptyCell(self.notes - {digit})

    def sorted_notes(self) -> List[int]:
        return sorted(self.notes)


@dataclass(frozen=True)
class FilledCell:
    """A cell holding a digit. Given clues are ``is_fixed``."""
    digit: int
    is_fixed: bool = False
    is_valid: bool = True

    def __post_init__(self):
        check_digit(self.digit)

    notes = frozenset()

    @property
    def value(self) -> int:
        return self.digit

    def without_note(self, digit: int) -> FilledCell:
        return self

    def sorted_notes(self) -> List[int]:
        return []


Cell = Union[EmptyCell, FilledCell]
Board = List[List[Cell]]


def empty_cell(notes: Iterable[int] = ()) -> EmptyCell:
    return EmptyCell(frozenset(notes))


def cell_to_dict(cell: Cell) -> Dict[str, Any]:
    """Serialize a cell in the shape the saved-game format uses."""
    return {
        "value": cell.value,
        "is_fixed": cell.is_fixed,
        "is_valid": cell.is_valid,
        "notes": cell.sorted_notes(),
    }


def cell_from_dict(data: Dict[str, Any]) -> Cell:
    """
    Rebuild a cell from its saved form.

    A saved cell carrying both a value and notes loads as a filled cell; the
    notes are dropped.

    Raises:
        TypeError: if ``data`` is not a mapping.
    """
    if not isinstance(data, dict):
        raise TypeError(f"Saved cell must be an object, got {type(data).__name__}")
    value: Optional[int] = data.get("value")
    if value is None:
        return empty_cell(data.get("notes") or ())
    return FilledCell(
        digit=value,
        is_fixed=bool(data.get("is_fixed", False)),
        is_valid=bool(data.get("is_valid", True)),
    )


def copy_board(board: Board) -> Board:
    """Snapshot a board. Cells are immutable so copying the rows is enough."""
    return [row[:] for row in board]


def board_to_list(board: Board) -> List[List[Dict[str, Any]]]:
    return [[cell_to_dict(cell) for cell in row] for row in board]


def board_from_list(data: List[List[Dict[str, Any]]]) -> Board:
    board = [[cell_from_dict(cell) for cell in row] for row in data]
    if len(board) != 9 or any(len(row) != 9 for row in board):
        raise ValueError("Saved board must be 9x9")
    return board
