"""Tests for the benchmark harness and CLI."""

import json

import matplotlib
matplotlib.use("Agg")

import pytest
from sudoku_engine.benchmark import Benchmark, Visualizer
from sudoku_engine.cli import main
from sudoku_engine.generator import Difficulty

from conftest import TEST_PUZZLE, TEST_SOLUTION


@pytest.fixture
def benchmark():
    bench = Benchmark(puzzles_per_difficulty=1, difficulties=[Difficulty.BEGINNER], seed=42)
    bench.run(show_progress=False)
    return bench


class TestBenchmark:

    def test_run(self, benchmark):
        assert len(benchmark.results) == 2
        for result in benchmark.results:
            assert result.solved
            assert result.difficulty == "beginner"
            assert result.generation_seconds > 0

    def test_summary(self, benchmark):
        summary = benchmark.get_summary()
        assert summary["total_puzzles"] == 1
        assert set(summary["results_by_algorithm"]) == {"Recursive", "Stack"}
        assert summary["results_by_algorithm"]["Stack"]["accuracy"] == 100.0
        assert "beginner" in summary["generation_by_difficulty"]

    def test_save_results(self, benchmark, tmp_path):
        benchmark.save_results(str(tmp_path))

        results = json.loads((tmp_path / "benchmark_results.json").read_text())
        assert len(results) == 2
        assert (tmp_path / "benchmark_summary.json").exists()
        assert (tmp_path / "puzzles" / "beginner" / "puzzle_beginner_1.txt").exists()

    def test_visualizer(self, benchmark, tmp_path):
        visualizer = Visualizer(benchmark.results, str(tmp_path))
        charts = visualizer.generate_all()
        table = visualizer.generate_summary_table()

        assert len(charts) == 4
        for chart in charts:
            assert chart.endswith(".png")
        assert "| Recursive |" in open(table).read()


class TestCLI:

    def test_generate_to_json(self, tmp_path, capsys):
        output = tmp_path / "puzzles.json"
        main(["generate", "-n", "2", "-d", "easy", "-s", "7", "-o", str(output)])

        puzzles = json.loads(output.read_text())
        assert len(puzzles) == 2
        assert puzzles[0]["difficulty"] == "easy"
        assert puzzles[0]["clues"] == 46
        assert "Total puzzles generated: 2" in capsys.readouterr().out

    def test_solve(self, capsys):
        main(["solve", "-a", "all", "-p", TEST_PUZZLE])
        out = capsys.readouterr().out
        assert "Solving with Recursive" in out
        assert "Solving with Stack" in out
        assert "No solution" not in out
        assert out.count("✓ Solved") == 2
        assert "| 5 3 4 |" in out

    def test_solve_bad_puzzle(self, capsys):
        with pytest.raises(SystemExit):
            main(["solve", "-p", "123"])
        assert "Error parsing puzzle" in capsys.readouterr().out

    def test_status(self, tmp_path, capsys):
        main(["status", "--data-dir", str(tmp_path)])
        out = capsys.readouterr().out
        assert "No saved game" in out
        assert "Lives: 5/5" in out
        assert "Levels: 0/500 completed" in out

    def test_status_reads_config_file(self, tmp_path, capsys):
        config = tmp_path / "engine.json"
        config.write_text(json.dumps({"max_lives": 3, "level_count": 20}))
        main(["--config", str(config), "status", "--data-dir", str(tmp_path / "data")])
        out = capsys.readouterr().out
        assert "Lives: 3/3" in out
        assert "Levels: 0/20 completed" in out

    def test_status_with_corrupt_cells(self, tmp_path, capsys):
        (tmp_path / "game_state.json").write_text(json.dumps({
            "board": [[1] * 9 for _ in range(9)],
            "solution": [[int(ch) for ch in TEST_SOLUTION[r * 9:r * 9 + 9]] for r in range(9)],
            "difficulty": "easy",
        }))
        main(["status", "--data-dir", str(tmp_path)])
        assert "Saved game is unreadable" in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
