"""Shared timing and bookkeeping for the backtracking solvers."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple
import logging
import time
import tracemalloc

from ..core.board import SudokuGrid

logger = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Counters for one ``solve`` call."""
    algorithm: str = ""
    solved: bool = False
    time_seconds: float = 0.0
    # Peak traced allocation; 0 unless the solver tracks memory
    memory_bytes: int = 0
    # Search nodes visited
    iterations: int = 0
    # Cells where every digit failed
    backtracks: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)


class BaseSolver(ABC):
    """
    Template for a solver: ``solve`` copies and checks the input, times the
    search, and hands the copy to ``_solve``.
    """

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = False):
        """
        Args:
            track_memory: Record peak allocation with tracemalloc. Off by
                default since tracing slows the search down noticeably.
        """
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, grid: SudokuGrid) -> Tuple[Optional[SudokuGrid], SolverStats]:
        """
        Complete ``grid`` without modifying it.

        A grid whose givens already conflict is reported as unsolvable
        without searching. Errors raised by the search are logged and
        recorded under ``stats.extra["error"]``; they are reported as no
        solution.

        Returns:
            (solved copy or None, stats for this call)
        """
        self.stats = SolverStats(algorithm=self.name)
        if self.track_memory:
            tracemalloc.start()
        started = time.perf_counter()

        solution: Optional[SudokuGrid] = None
        try:
            if grid.is_valid():
                solution = self._solve(grid.copy())
            else:
                logger.debug("%s: givens conflict, nothing to search", self.name)
        except Exception as e:
            logger.exception("%s failed", self.name)
            self.stats.extra["error"] = str(e)
            solution = None

        self.stats.time_seconds = time.perf_counter() - started
        if self.track_memory:
            self.stats.memory_bytes = tracemalloc.get_traced_memory()[1]
            tracemalloc.stop()

        self.stats.solved = solution is not None and solution.is_solved()
        logger.debug(
            "%s finished: solved=%s iterations=%d backtracks=%d in %.4fs",
            self.name, self.stats.solved, self.stats.iterations,
            self.stats.backtracks, self.stats.time_seconds,
        )
        return solution, self.stats

    @abstractmethod
    def _solve(self, grid: SudokuGrid) -> Optional[SudokuGrid]:
        """Search in place on ``grid`` (a private copy); return it solved or None."""
