"""Charts for generation/solve benchmark results."""

from __future__ import annotations
import os
from typing import Callable, List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from ..generator import Difficulty
from .benchmark import BenchmarkResult

FALLBACK_COLOR = "#95a5a6"


class Visualizer:
    """
    Renders benchmark results to PNG charts and a markdown table.

    Every ``plot_*`` method writes one file into ``output_dir`` and returns
    its path.
    """

    COLORS = {
        "Recursive": "#2ecc71",
        "Stack": "#9b59b6",
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        sns.set_theme(style="whitegrid")
        sns.set_palette("husl")

    def _algorithms(self) -> List[str]:
        return sorted({r.algorithm for r in self.results})

    def _difficulties(self) -> List[str]:
        """Difficulties present in the results, easiest first."""
        present = {r.difficulty for r in self.results}
        return [d.value for d in Difficulty if d.value in present]

    def _color(self, algorithm: str) -> str:
        return self.COLORS.get(algorithm, FALLBACK_COLOR)

    def _save(self, fig, name: str) -> str:
        fig.tight_layout()
        path = os.path.join(self.output_dir, name)
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return path

    def generate_all(self) -> List[str]:
        """Render every chart; returns the file paths."""
        return [
            self.plot_time_by_difficulty(),
            self.plot_generation_time(),
            self.plot_backtracks_by_difficulty(),
            self.plot_time_distribution(),
        ]

    def _grouped_bars(
        self,
        value: Callable[[BenchmarkResult], float],
        ylabel: str,
        title: str,
        filename: str,
        log_scale: bool = False,
    ) -> str:
        """One bar per algorithm within each difficulty group, showing the mean of ``value``."""
        algorithms = self._algorithms()
        difficulties = self._difficulties()
        positions = np.arange(len(difficulties))
        width = 0.8 / max(len(algorithms), 1)

        fig, ax = plt.subplots(figsize=(12, 6))
        for i, algo in enumerate(algorithms):
            means = []
            for diff in difficulties:
                values = [value(r) for r in self.results if r.algorithm == algo and r.difficulty == diff]
                mean = float(np.mean(values)) if values else 0.0
                # A log axis cannot draw a zero-height bar
                means.append(max(mean, 1.0) if log_scale else mean)

            ax.bar(positions + (i - (len(algorithms) - 1) / 2) * width, means, width,
                   label=algo, color=self._color(algo), edgecolor='black', linewidth=0.5)

        ax.set_xticks(positions)
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel(ylabel, fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.legend(title='Algorithm', loc='upper left')
        if log_scale:
            ax.set_yscale('log')
        else:
            ax.set_ylim(bottom=0)

        return self._save(fig, filename)

    def plot_time_by_difficulty(self) -> str:
        return self._grouped_bars(
            lambda r: r.time_seconds,
            'Average Solve Time (seconds)',
            'Solve Time by Difficulty',
            "time_by_difficulty.png",
        )

    def plot_backtracks_by_difficulty(self) -> str:
        return self._grouped_bars(
            lambda r: r.backtracks,
            'Average Backtracks (log scale)',
            'Backtracks by Difficulty',
            "backtracks_by_difficulty.png",
            log_scale=True,
        )

    def plot_generation_time(self) -> str:
        """Average time to deal one puzzle per difficulty, labelled bars."""
        difficulties = self._difficulties()
        averages = []
        for diff in difficulties:
            # Each puzzle appears once per algorithm; count its generation once
            per_puzzle = {r.puzzle_id: r.generation_seconds for r in self.results if r.difficulty == diff}
            averages.append(float(np.mean(list(per_puzzle.values()))))

        fig, ax = plt.subplots(figsize=(10, 6))
        bars = ax.bar([d.capitalize() for d in difficulties], averages,
                      color=sns.color_palette("rocket", len(difficulties)),
                      edgecolor='black', linewidth=0.5)
        ax.bar_label(bars, labels=[f'{v * 1000:.1f} ms' for v in averages], padding=3, fontsize=10)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Generation Time (seconds)', fontsize=12)
        ax.set_title('Puzzle Generation Time', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save(fig, "generation_time.png")

    def plot_time_distribution(self) -> str:
        """Box plot of every solve time, one box per algorithm."""
        algorithms = self._algorithms()

        fig, ax = plt.subplots(figsize=(10, 6))
        boxes = ax.boxplot(
            [[r.time_seconds for r in self.results if r.algorithm == algo] for algo in algorithms],
            patch_artist=True,
        )
        for patch, algo in zip(boxes['boxes'], algorithms):
            patch.set_facecolor(self._color(algo))
            patch.set_alpha(0.7)

        ax.set_xticks(range(1, len(algorithms) + 1))
        ax.set_xticklabels(algorithms)
        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Solve Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution', fontsize=14, fontweight='bold')

        return self._save(fig, "time_distribution.png")

    def generate_summary_table(self) -> str:
        """Write ``benchmark_summary.md`` with one row per algorithm."""
        lines = [
            "# Benchmark Summary",
            "",
            "| Algorithm | Solved | Avg Time | Avg Backtracks | Matched Generator |",
            "|-----------|--------|----------|----------------|-------------------|",
        ]
        for algo in self._algorithms():
            rows = [r for r in self.results if r.algorithm == algo]
            solved = sum(r.solved for r in rows)
            matched = sum(r.matches_solution for r in rows)
            avg_time = np.mean([r.time_seconds for r in rows])
            avg_backtracks = np.mean([r.backtracks for r in rows])
            lines.append(
                f"| {algo} | {solved}/{len(rows)} | {avg_time:.4f}s | {int(avg_backtracks):,} | "
                f"{matched}/{len(rows)} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines) + "\n")
        return path
