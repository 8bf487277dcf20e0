"""Game-in-progress state machine.

A :class:`GameSession` owns the live board, the solution it is judged
against, the undo history and the session counters. Host input (selection,
digit presses, notes, undo, hints, pause) and a periodic ``tick`` drive it.
Requests that cannot apply (a fixed or off-board cell, an empty history,
a paused or finished game) are ignored without raising; compare state
before and after a call to tell whether it was accepted.
"""

from __future__ import annotations
import logging
import random
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..config import EngineConfig
from ..core.board import SudokuGrid, SIZE
from ..core.cell import (
    Board,
    Cell,
    EmptyCell,
    FilledCell,
    board_from_list,
    board_to_list,
    check_digit,
)
from ..core.validator import find_conflicts, is_puzzle_complete, remaining_count
from ..generator import Difficulty, Puzzle, PuzzleGenerator
from .countdown import CountdownTimer
from .history import BoundedHistory

logger = logging.getLogger(__name__)


class SessionState(Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETE = "complete"


def _empty_board() -> Board:
    return [[EmptyCell() for _ in range(SIZE)] for _ in range(SIZE)]


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def _board_from_grid(grid: SudokuGrid) -> Board:
    return [
        [FilledCell(v, is_fixed=True) if v else EmptyCell() for v in row]
        for row in grid.grid.tolist()
    ]


class GameSession:
    """
    A single Sudoku game.

    Args:
        puzzle: Puzzle to deal straight away. Without one the board stays
            empty until ``new_game`` or ``load_puzzle`` is called.
        generator: Puzzle source for ``new_game``.
        rng: Random source for hints (and the default generator).
        store: Persistence collaborator with ``save(obj)``; the session
            saves a snapshot after every accepted change.
        countdown: Optional time limit, advanced by ``tick``.
        timed: Build a countdown of ``config.time_limit_seconds`` when no
            ``countdown`` is given.
        config: Engine tunables.
    """

    def __init__(
        self,
        puzzle: Optional[Puzzle] = None,
        generator: Optional[PuzzleGenerator] = None,
        rng: Optional[random.Random] = None,
        store=None,
        countdown: Optional[CountdownTimer] = None,
        config: Optional[EngineConfig] = None,
        timed: bool = False,
    ):
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else random.Random()
        self.generator = generator if generator is not None else PuzzleGenerator(rng=self.rng)
        self.store = store
        if countdown is None and timed:
            countdown = CountdownTimer(self.config.time_limit_seconds)
        self.countdown = countdown

        self.board: Board = _empty_board()
        self.solution = SudokuGrid()
        self.difficulty = Difficulty.MEDIUM
        self.history = BoundedHistory(self.config.history_limit)
        self.selected: Optional[Tuple[int, int]] = None
        self.elapsed_seconds = 0
        self.hints_used = 0
        self.paused = False
        self.complete = False
        self.pencil_mode = False

        if puzzle is not None:
            self._deal(puzzle)

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def new_game(self, difficulty: Optional[Difficulty] = None) -> None:
        """Discard the current game and deal a freshly generated puzzle."""
        difficulty = difficulty or self.difficulty
        self._deal(self.generator.generate(difficulty))
        logger.info("New %s game with %d clues", difficulty.value, difficulty.clue_count)
        self._persist()

    def load_puzzle(self, puzzle: Puzzle) -> None:
        """Start a game on a given puzzle, e.g. a progression level."""
        self._deal(puzzle)
        logger.info("Loaded %s puzzle", puzzle.difficulty.value)
        self._persist()

    def restart(self) -> None:
        """Deal the current puzzle again from its clues."""
        givens = SudokuGrid()
        for row in range(SIZE):
            for col in range(SIZE):
                cell = self.board[row][col]
                if cell.is_fixed:
                    givens.set(row, col, cell.value)
        self._deal(Puzzle(givens, self.solution.copy(), self.difficulty))
        self._persist()

    def _deal(self, puzzle: Puzzle) -> None:
        self.board = _board_from_grid(puzzle.grid)
        self.solution = puzzle.solution.copy()
        self.difficulty = puzzle.difficulty
        self.history.clear()
        self.selected = None
        self.elapsed_seconds = 0
        self.hints_used = 0
        self.paused = False
        self.complete = False
        if self.countdown is not None:
            self.countdown.reset()

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self.complete:
            return SessionState.COMPLETE
        if self.paused:
            return SessionState.PAUSED
        return SessionState.ACTIVE

    def is_complete(self) -> bool:
        return self.complete

    def is_paused(self) -> bool:
        return self.paused

    def cell(self, row: int, col: int) -> Cell:
        return self.board[row][col]

    def values(self) -> SudokuGrid:
        """The digits currently on the board."""
        return SudokuGrid.from_2d_list([[cell.value for cell in row] for row in self.board])

    def conflicts(self) -> List[Tuple[int, int]]:
        """Filled cells that clash with a peer."""
        return find_conflicts(self.values())

    def remaining_count(self, digit: int) -> int:
        return remaining_count(self.values(), check_digit(digit))

    def can_undo(self) -> bool:
        return self._can_edit() and bool(self.history)

    def _can_edit(self) -> bool:
        return not self.paused and not self.complete

    # ------------------------------------------------------------------
    # Selection and input
    # ------------------------------------------------------------------

    def select(self, row: int, col: int) -> None:
        """Select a cell for input. Given clues cannot be selected."""
        if not _on_board(row, col) or self.board[row][col].is_fixed:
            return
        self.selected = (row, col)

    def set_pencil_mode(self, enabled: bool) -> None:
        self.pencil_mode = enabled

    def toggle_pencil_mode(self) -> None:
        self.pencil_mode = not self.pencil_mode

    def place(self, digit: int) -> None:
        """Number-pad press on the selected cell; adds a note in pencil mode."""
        if self.pencil_mode:
            self.toggle_note(digit)
            return
        if self.selected is not None:
            self.place_at(*self.selected, digit)

    def toggle_note(self, digit: int) -> None:
        if self.selected is not None:
            self.toggle_note_at(*self.selected, digit)

    def clear_cell(self) -> None:
        if self.selected is not None:
            self.clear_at(*self.selected)

    def place_at(self, row: int, col: int, digit: int) -> None:
        """
        Write a digit into a cell.

        The cell is marked valid only if the digit matches the solution. The
        digit is struck from the notes of every peer, then completion is
        checked.
        """
        check_digit(digit)
        if not self._can_edit() or not _on_board(row, col) or self.board[row][col].is_fixed:
            return

        self.history.push(self.board)
        self.board[row][col] = FilledCell(digit, is_valid=digit == self.solution.get(row, col))
        self._purge_peer_notes(row, col, digit)
        self._check_completion()
        self._persist()

    def toggle_note_at(self, row: int, col: int, digit: int) -> None:
        """Add or remove a pencil note on an empty, non-fixed cell."""
        check_digit(digit)
        if not self._can_edit() or not _on_board(row, col):
            return
        cell = self.board[row][col]
        if not isinstance(cell, EmptyCell):
            return

        self.history.push(self.board)
        self.board[row][col] = cell.toggle_note(digit)
        self._persist()

    def clear_at(self, row: int, col: int) -> None:
        """Erase notes (pencil mode) or the digit of a non-fixed cell."""
        if not self._can_edit() or not _on_board(row, col):
            return
        cell = self.board[row][col]
        if cell.is_fixed:
            return

        if self.pencil_mode and not cell.notes:
            return
        if not self.pencil_mode and cell.value is None:
            return

        self.history.push(self.board)
        self.board[row][col] = EmptyCell()
        self._persist()

    def undo(self) -> None:
        """Restore the board as it was before the last change."""
        if not self._can_edit():
            return
        previous = self.history.pop()
        if previous is None:
            return
        self.board = previous
        self._persist()

    def hint(self) -> Optional[Tuple[int, int, int]]:
        """
        Reveal the solution digit of a random empty cell.

        Returns:
            (row, col, digit) of the revealed cell, or None when the game is
            paused, finished or has no empty cell left.
        """
        if not self._can_edit():
            return None

        empty = [
            (row, col)
            for row in range(SIZE)
            for col in range(SIZE)
            if self.board[row][col].value is None
        ]
        if not empty:
            return None

        row, col = self.rng.choice(empty)
        digit = self.solution.get(row, col)

        self.history.push(self.board)
        self.board[row][col] = FilledCell(digit, is_fixed=False, is_valid=True)
        self.hints_used += 1
        self.selected = (row, col)
        logger.debug("Hint %d: (%d, %d) = %d", self.hints_used, row, col, digit)
        self._check_completion()
        self._persist()
        return row, col, digit

    def _purge_peer_notes(self, row: int, col: int, digit: int) -> None:
        for r, c in SudokuGrid.get_peers(row, col):
            self.board[r][c] = self.board[r][c].without_note(digit)

    def _check_completion(self) -> None:
        if is_puzzle_complete(self.values(), self.solution):
            self.complete = True
            logger.info(
                "Puzzle complete in %ds with %d hints", self.elapsed_seconds, self.hints_used
            )

    # ------------------------------------------------------------------
    # Pause and time
    # ------------------------------------------------------------------

    def pause(self) -> None:
        if not self.complete and not self.paused:
            self.paused = True
            self._persist()

    def resume(self) -> None:
        """Resume play. A timed game that ran out stays paused until extended."""
        if self.countdown is not None and self.countdown.expired:
            return
        if self.paused:
            self.paused = False
            self._persist()

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def tick(self, elapsed_seconds: int = 1) -> bool:
        """
        Advance the clock while the game is active.

        Returns:
            True on the tick where the countdown runs out. The session is
            paused at that point.
        """
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed_seconds must not be negative, got {elapsed_seconds}")
        if self.state is not SessionState.ACTIVE or elapsed_seconds == 0:
            return False

        self.elapsed_seconds += elapsed_seconds
        time_up = self.countdown is not None and self.countdown.tick(elapsed_seconds)
        if time_up:
            self.paused = True
            logger.info("Time up after %ds", self.elapsed_seconds)
        self._persist()
        return time_up

    def extend_time(self, seconds: Optional[int] = None) -> None:
        """Add time to the countdown. A game that had run out resumes; a manual pause is kept."""
        if self.countdown is None or self.complete:
            return
        was_expired = self.countdown.expired
        self.countdown.extend(seconds or self.config.time_extension_seconds)
        if was_expired:
            self.paused = False
        self._persist()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "board": board_to_list(self.board),
            "solution": self.solution.to_list(),
            "difficulty": self.difficulty.value,
            "elapsed_seconds": self.elapsed_seconds,
            "history": [board_to_list(board) for board in self.history.snapshots()],
            "hints_used": self.hints_used,
            "is_complete": self.complete,
            "is_paused": self.paused,
            "pencil_mode": self.pencil_mode,
            "selected": list(self.selected) if self.selected is not None else None,
            "time_remaining": self.countdown.remaining if self.countdown is not None else None,
        }

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any], **kwargs) -> GameSession:
        """
        Rebuild a session from ``to_snapshot`` output.

        Raises:
            KeyError, TypeError, ValueError: if the snapshot is malformed.
        """
        session = cls(**kwargs)
        solution = SudokuGrid.from_2d_list(data["solution"])
        if not solution.is_solved():
            raise ValueError("Saved solution is not a solved grid")

        session.board = board_from_list(data["board"])
        session.solution = solution
        session.difficulty = Difficulty.parse(data["difficulty"])
        session.elapsed_seconds = int(data.get("elapsed_seconds", 0))
        session.history = BoundedHistory(
            session.config.history_limit,
            (board_from_list(board) for board in data.get("history") or []),
        )
        session.hints_used = int(data.get("hints_used", 0))
        session.complete = bool(data.get("is_complete", False))
        session.paused = bool(data.get("is_paused", False))
        session.pencil_mode = bool(data.get("pencil_mode", False))
        selected = data.get("selected")
        session.selected = (int(selected[0]), int(selected[1])) if selected else None

        remaining = data.get("time_remaining")
        if session.countdown is not None and remaining is not None:
            session.countdown.remaining = int(remaining)
            session.countdown.expired = session.countdown.remaining == 0
        return session

    @classmethod
    def resume_or_new(
        cls, store, difficulty: Difficulty = Difficulty.MEDIUM, **kwargs
    ) -> GameSession:
        """Continue the saved game in ``store``, or deal a new one if there is none."""
        data = store.load()
        if data:
            try:
                session = cls.from_snapshot(data, store=store, **kwargs)
                logger.info("Resumed saved %s game", session.difficulty.value)
                return session
            except (KeyError, IndexError, TypeError, ValueError) as e:
                logger.warning("Saved game is unusable, starting fresh: %s", e)

        session = cls(store=store, **kwargs)
        session.new_game(difficulty)
        return session

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.to_snapshot())

    def __repr__(self) -> str:
        return (
            f"GameSession(difficulty={self.difficulty.value}, state={self.state.value}, "
            f"elapsed={self.elapsed_seconds}s, hints={self.hints_used})"
        )
