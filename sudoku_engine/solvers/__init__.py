"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .backtracking_solver import BacktrackingSolver, StackBacktrackingSolver, solve

__all__ = [
    "BaseSolver",
    "SolverStats",
    "BacktrackingSolver",
    "StackBacktrackingSolver",
    "solve",
]
