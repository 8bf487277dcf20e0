"""Command-line interface for the Sudoku engine."""

import argparse
import json
import logging
import os
import sys
import time

from .config import EngineConfig
from .core.board import SudokuGrid
from .generator import PuzzleGenerator, Difficulty
from .solvers import BacktrackingSolver, StackBacktrackingSolver
from .game import GameSession, LevelProgress, LivesState, update_lives, time_until_next_life
from .storage import GameStorage

DIFFICULTY_CHOICES = [d.value for d in Difficulty] + ["all"]
DEFAULT_DATA_DIR = os.path.join(os.path.expanduser("~"), ".sudoku_engine")

SOLVERS = {
    "recursive": ("Recursive", BacktrackingSolver),
    "stack": ("Stack", StackBacktrackingSolver),
}

RULE = "=" * 60

logger = logging.getLogger(__name__)

EPILOG = """
Examples:
  # Five medium puzzles written to a JSON file
  sudoku-engine generate -n 5 -d medium -o puzzles.json

  # Solve with both backtracking variants
  sudoku-engine solve -a all -p "530070000600195000098000060..."

  # Time generation and solving for every difficulty, with charts
  sudoku-engine benchmark -n 10 -o results/

  # Saved game and lives
  sudoku-engine status
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="sudoku-engine",
        description="Sudoku puzzle engine: generation, solving and saved-game status",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: WARNING)")
    parser.add_argument("--config", default=None,
                        help="JSON file overriding engine settings")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    generate = commands.add_parser("generate", help="Deal puzzles at a difficulty")
    generate.add_argument("-n", "--count", type=int, default=5,
                          help="Puzzles per difficulty (default: 5)")
    generate.add_argument("-d", "--difficulty", choices=DIFFICULTY_CHOICES, default="medium",
                          help="Difficulty, or 'all' (default: medium)")
    generate.add_argument("-s", "--seed", type=int, default=None,
                          help="Seed for a reproducible batch")
    generate.add_argument("-o", "--output", default=None,
                          help="Write the puzzles and solutions to this JSON file")
    generate.set_defaults(func=cmd_generate)

    solve = commands.add_parser("solve", help="Complete a puzzle by backtracking")
    solve.add_argument("-p", "--puzzle", required=True,
                       help="81 characters, row by row; 0 or . marks a hole")
    solve.add_argument("-a", "--algorithm", choices=list(SOLVERS) + ["all"], default="recursive",
                       help="Search driver (default: recursive)")
    solve.add_argument("-v", "--verbose", action="store_true",
                       help="Print iteration and backtrack counts")
    solve.set_defaults(func=cmd_solve)

    bench = commands.add_parser("benchmark", help="Time generation and solving")
    bench.add_argument("-n", "--puzzles", type=int, default=10,
                       help="Puzzles per difficulty (default: 10)")
    bench.add_argument("-d", "--difficulty", choices=DIFFICULTY_CHOICES, default="all",
                       help="Difficulty, or 'all' (default: all)")
    bench.add_argument("-s", "--seed", type=int, default=42,
                       help="Generator seed (default: 42)")
    bench.add_argument("-o", "--output", default="results",
                       help="Directory for JSON, puzzles and charts (default: results)")
    bench.add_argument("--no-charts", action="store_true",
                       help="Only write the JSON results")
    bench.set_defaults(func=cmd_benchmark)

    status = commands.add_parser("status", help="Show the saved game and lives")
    status.add_argument("--data-dir", default=DEFAULT_DATA_DIR,
                        help=f"Directory holding saved state (default: {DEFAULT_DATA_DIR})")
    status.set_defaults(func=cmd_status)

    return parser


def main(argv=None):
    """Entry point of the ``sudoku-engine`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    args.func(args, EngineConfig.from_file(args.config))


def _difficulties(name):
    if name == "all":
        return list(Difficulty)
    return [Difficulty.parse(name)]


def cmd_generate(args, config):
    generator = PuzzleGenerator(seed=args.seed)
    dealt = []

    for difficulty in _difficulties(args.difficulty):
        print(f"\n{args.count} x {difficulty.value} ({difficulty.clue_count} clues)")
        for index, puzzle in enumerate(generator.generate_batch(args.count, difficulty), 1):
            dealt.append({"index": index, **puzzle.to_dict()})
            print(f"\n#{index}")
            print(puzzle.grid)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(dealt, f, indent=2)
        print(f"\nSaved to {args.output}")

    print(f"\nTotal puzzles generated: {len(dealt)}")


def cmd_solve(args, config):
    try:
        grid = SudokuGrid.from_string(args.puzzle)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print(f"Puzzle ({grid.count_filled()} clues):")
    print(grid)

    keys = list(SOLVERS) if args.algorithm == "all" else [args.algorithm]
    for key in keys:
        label, solver_cls = SOLVERS[key]
        print(f"\nSolving with {label}...")
        solution, stats = solver_cls().solve(grid)

        if solution is not None:
            print(f"✓ Solved in {stats.time_seconds:.4f}s")
        else:
            print(f"✗ No solution ({stats.time_seconds:.4f}s)")
        if args.verbose:
            print(f"  iterations={stats.iterations:,} backtracks={stats.backtracks:,}")
        if solution is not None:
            print(solution)


def cmd_benchmark(args, config):
    # Plotting stack is only needed here
    from .benchmark import Benchmark, Visualizer

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=_difficulties(args.difficulty),
        seed=args.seed,
    )

    print(RULE)
    print(f"{args.puzzles} puzzle(s) x {', '.join(d.value for d in benchmark.difficulties)}")
    print(f"Solvers: {', '.join(benchmark.solvers)}  ->  {args.output}")
    print(RULE)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\nGeneration")
    for name, row in summary["generation_by_difficulty"].items():
        print(f"  {name:<9} avg {row['avg_time_seconds']:.4f}s  max {row['max_time_seconds']:.4f}s")

    print("\nSolving")
    for name, row in summary["results_by_algorithm"].items():
        print(f"  {name:<10} {row['total_solved']}/{row['total_tested']} solved, "
              f"avg {row['avg_time_seconds']:.4f}s, "
              f"{row['matched_generator_solution']} matched the generator")

    benchmark.save_results(args.output)

    if not args.no_charts:
        visualizer = Visualizer(results, args.output)
        written = visualizer.generate_all() + [visualizer.generate_summary_table()]
        print("\nCharts:")
        for path in written:
            print(f"  - {os.path.basename(path)}")

    print(f"\n{RULE}\nDone.")


def _load_lives(storage, config):
    data = storage.lives.load()
    if data:
        try:
            return LivesState.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable lives record: %s", e)
    return LivesState(config.max_lives, config.max_lives)


def _load_levels(storage, config):
    data = storage.levels.load()
    if data:
        try:
            return LevelProgress.from_dict(data, config)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable level progress: %s", e)
    return LevelProgress.from_config(config)


def cmd_status(args, config):
    storage = GameStorage(args.data_dir)

    saved = storage.game_state.load()
    if not saved:
        print("No saved game")
    else:
        try:
            timed = isinstance(saved, dict) and saved.get("time_remaining") is not None
            session = GameSession.from_snapshot(saved, config=config, timed=timed)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            print(f"Saved game is unreadable: {e}")
        else:
            print(f"Saved game: {session.difficulty.value}, {session.state.value}, "
                  f"{session.values().count_filled()}/81 filled, "
                  f"{session.elapsed_seconds}s, {session.hints_used} hints")
            if session.countdown is not None:
                print(f"Time left: {session.countdown.format()}")

    now = time.time()
    lives = update_lives(_load_lives(storage, config), now, config.life_regen_seconds)
    storage.lives.save(lives.to_dict())

    print(f"Lives: {lives.lives}/{lives.max_lives}")
    wait = time_until_next_life(lives, now, config.life_regen_seconds)
    if wait:
        print(f"Next life in {wait // 60}:{wait % 60:02d}")

    levels = _load_levels(storage, config)
    completed = sum(level.completed for level in levels.levels)
    print(f"Levels: {completed}/{len(levels)} completed")


if __name__ == "__main__":
    main()
