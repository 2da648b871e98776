"""Command-line interface for the Sudoku engine."""

import argparse
import json
import logging
import os
import sys

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .config import load_config
from .core.board import board_from_grid, parse_board_string
from .core.errors import ConfigError, FormatError
from .generator import Difficulty, SudokuGenerator, Symmetry
from .hints import HintService
from .rater import rate
from .solvers import BacktrackingSolver

logger = logging.getLogger(__name__)

DIFFICULTY_CHOICES = [d.value for d in Difficulty]
SYMMETRY_CHOICES = [s.value for s in Symmetry]


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku Engine: generator, solver, hints and difficulty rating",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 medium difficulty puzzles
  sudoku-engine generate --count 5 --difficulty medium

  # Show the next human-style step
  sudoku-engine hint --puzzle "0030206..."

  # Benchmark generation and rating
  sudoku-engine benchmark --puzzles 10 --output results/
        """
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file overriding engine settings"
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--symmetry", choices=SYMMETRY_CHOICES, default=None,
        help="Clue symmetry (default: from config, central)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Hint command
    hint_parser = subparsers.add_parser("hint", help="Show the next solving step")
    hint_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    hint_parser.add_argument(
        "--json", action="store_true",
        help="Print the hint as JSON"
    )

    # Rate command
    rate_parser = subparsers.add_parser("rate", help="Rate the difficulty of a puzzle")
    rate_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Benchmark generation and rating")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        args.engine_config = load_config(args.config)
    except ConfigError as e:
        print(f"Error loading config: {e}")
        sys.exit(1)

    commands = {
        "generate": cmd_generate,
        "solve": cmd_solve,
        "hint": cmd_hint,
        "rate": cmd_rate,
        "benchmark": cmd_benchmark,
    }
    logger.debug("Running %s with %s", args.command, args.engine_config)
    commands[args.command](args)


def _parse_puzzle(text):
    try:
        return parse_board_string(text, require_givens=True)
    except FormatError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def _difficulties(choice):
    if choice == "all":
        return list(Difficulty)
    return [Difficulty(choice)]


def cmd_generate(args):
    """Handle the generate command."""
    generator = SudokuGenerator(seed=args.seed, config=args.engine_config)
    difficulties = _difficulties(args.difficulty)

    all_puzzles = []

    for difficulty in difficulties:
        print(f"\nGenerating {args.count} {difficulty.value} puzzles...")
        puzzles = generator.generate_batch(args.count, difficulty, args.symmetry)

        for i, puzzle in enumerate(puzzles, 1):
            all_puzzles.append({
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": puzzle.board.to_string(),
                "clues": puzzle.clues,
                "rating": puzzle.rating.to_dict(),
            })

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} "
                  f"({puzzle.clues} clues, rated {puzzle.rating.bucket.value}) ---")
            print(puzzle.board)

        if not args.output:
            diff_dir = os.path.join("puzzles", difficulty.value)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty.value}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")
    else:
        print("\nPuzzles saved individually in the 'puzzles/' directory")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_solve(args):
    """Handle the solve command."""
    board = _parse_puzzle(args.puzzle)

    print("Input puzzle:")
    print(board)
    print()

    solver = BacktrackingSolver(track_memory=args.verbose)
    print(f"Solving with {solver.name}...")
    solution, stats = solver.solve(board)

    if stats.solved:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
        if args.verbose:
            print(f"  Nodes explored: {stats.nodes_explored:,}")
            print(f"  Backtracks: {stats.backtracks:,}")
            print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
        print(board_from_grid(solution))
    else:
        print("✗ No solution (contradictory givens or unsolvable)")
        sys.exit(1)


def cmd_hint(args):
    """Handle the hint command."""
    board = _parse_puzzle(args.puzzle)
    hint = HintService().find_next_hint(board)

    if args.json:
        print(json.dumps(hint.to_dict() if hint else None, indent=2))
        return

    if hint is None:
        print("No hint found with the available techniques.")
        return

    print(f"{hint.kind.value} (digit {hint.digit})")
    for i, step in enumerate(hint.steps, 1):
        print(f"  {i}. {step.title}: {step.message}")


def cmd_rate(args):
    """Handle the rate command."""
    board = _parse_puzzle(args.puzzle)
    rating = rate(board, args.engine_config)

    print(f"Difficulty: {rating.bucket.value}")
    print(f"Steps: {rating.steps} ({'solved' if rating.solved else 'stuck'})")
    for name, count in sorted(rating.by_technique.items(), key=lambda item: -item[1]):
        print(f"  {name}: {count}")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("SUDOKU GENERATION BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        seed=args.seed,
        config=args.engine_config,
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nBy Difficulty:")
    print("-" * 50)
    for diff, stats in summary["results_by_difficulty"].items():
        print(f"\n{diff}:")
        print(f"  Rated as requested: {stats['match_rate']:.1f}% of {stats['tested']}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.3f}s")
        print(f"  Avg Clues: {stats['avg_clues']:.1f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
