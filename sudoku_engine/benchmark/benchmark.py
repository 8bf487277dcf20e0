"""Benchmarking puzzle generation and solving across difficulties."""

from __future__ import annotations
import json
import logging
import os
import time
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional

import numpy as np
from tqdm import tqdm

from ..generator import PuzzleGenerator, Puzzle, Difficulty
from ..solvers import BaseSolver, BacktrackingSolver, StackBacktrackingSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single solver run on one generated puzzle."""
    puzzle_id: int
    difficulty: str
    algorithm: str
    solved: bool
    matches_solution: bool
    time_seconds: float
    generation_seconds: float
    iterations: int
    backtracks: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.update(data.pop("extra"))
        return data


class Benchmark:
    """
    Times puzzle generation per difficulty and each solver on every
    generated puzzle.

    ``matches_solution`` records whether the solver found the same grid the
    generator carved the puzzle from; a miss means the puzzle has more than
    one completion.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        solvers: Optional[Dict[str, BaseSolver]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            solvers: Dict of solver_name -> solver_instance (default: both backtracking solvers).
            seed: Random seed for reproducibility.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.seed = seed

        if solvers is None:
            self.solvers = {
                "Recursive": BacktrackingSolver(),
                "Stack": StackBacktrackingSolver(),
            }
        else:
            self.solvers = solvers

        self.puzzles: Dict[str, List[Puzzle]] = {}
        self.generation_times: Dict[str, List[float]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self, show_progress: bool = True) -> None:
        """Generate and time all puzzles for benchmarking."""
        generator = PuzzleGenerator(seed=self.seed)

        for difficulty in tqdm(self.difficulties, desc="Generating", disable=not show_progress):
            puzzles, times = [], []
            for _ in range(self.puzzles_per_difficulty):
                start = time.perf_counter()
                puzzles.append(generator.generate(difficulty))
                times.append(time.perf_counter() - start)
            self.puzzles[difficulty.value] = puzzles
            self.generation_times[difficulty.value] = times
            logger.debug("Generated %d %s puzzles", len(puzzles), difficulty.value)

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles(show_progress)

        self.results = []

        total_tests = sum(len(p) for p in self.puzzles.values()) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for difficulty_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for solver_name, solver in self.solvers.items():
                    result = self._run_single(puzzle, puzzle_id, difficulty_name, solver_name, solver)
                    self.results.append(result)
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: Puzzle,
        puzzle_id: int,
        difficulty: str,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        solution, stats = solver.solve(puzzle.grid)
        gen_times = self.generation_times.get(difficulty, [])
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty,
            algorithm=solver_name,
            solved=stats.solved,
            matches_solution=solution is not None and solution == puzzle.solution,
            time_seconds=stats.time_seconds,
            generation_seconds=gen_times[puzzle_id] if puzzle_id < len(gen_times) else 0.0,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            extra=dict(stats.extra),
        )

    def get_summary(self) -> Dict[str, Any]:
        """
        Aggregate the results.

        Returns:
            Generation times per difficulty, and solve accuracy, timing and
            backtracks per algorithm and per (difficulty, algorithm) pair.
        """
        summary: Dict[str, Any] = {
            "total_puzzles": sum(len(p) for p in self.puzzles.values()),
            "solvers_tested": list(self.solvers),
            "difficulties": [d.value for d in self.difficulties],
            "generation_by_difficulty": {
                name: {"avg_time_seconds": float(np.mean(times)), "max_time_seconds": max(times)}
                for name, times in self.generation_times.items()
                if times
            },
            "results_by_algorithm": {},
            "results_by_difficulty": {},
        }

        for solver_name in self.solvers:
            rows = [r for r in self.results if r.algorithm == solver_name]
            if rows:
                summary["results_by_algorithm"][solver_name] = _aggregate(rows)

        for difficulty in self.difficulties:
            per_solver = {}
            for solver_name in self.solvers:
                rows = [
                    r for r in self.results
                    if r.difficulty == difficulty.value and r.algorithm == solver_name
                ]
                if rows:
                    per_solver[solver_name] = _aggregate(rows)
            if per_solver:
                summary["results_by_difficulty"][difficulty.value] = per_solver

        return summary

    def save_results(self, output_dir: str) -> None:
        """
        Write ``benchmark_results.json``, ``benchmark_summary.json`` and the
        generated puzzles (``puzzles/<difficulty>/``) under ``output_dir``.
        """
        os.makedirs(output_dir, exist_ok=True)

        documents = {
            "benchmark_results.json": [r.to_dict() for r in self.results],
            "benchmark_summary.json": self.get_summary(),
        }
        for filename, document in documents.items():
            with open(os.path.join(output_dir, filename), "w") as f:
                json.dump(document, f, indent=2)

        for difficulty, puzzles in self.puzzles.items():
            PuzzleGenerator.save_to_folder(
                puzzles,
                os.path.join(output_dir, "puzzles", difficulty),
                prefix=f"puzzle_{difficulty}",
            )

        logger.info("Results and puzzles saved to %s", output_dir)


def _aggregate(rows: List[BenchmarkResult]) -> Dict[str, Any]:
    times = np.array([r.time_seconds for r in rows])
    solved = sum(r.solved for r in rows)
    return {
        "accuracy": solved / len(rows) * 100,
        "avg_time_seconds": float(times.mean()),
        "max_time_seconds": float(times.max()),
        "min_time_seconds": float(times.min()),
        "avg_backtracks": float(np.mean([r.backtracks for r in rows])),
        "total_solved": solved,
        "total_tested": len(rows),
        "matched_generator_solution": sum(r.matches_solution for r in rows),
    }
