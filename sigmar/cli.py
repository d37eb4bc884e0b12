"""Command-line interface for the board solver."""

import argparse
import json
import logging
import os
import sys

from .generator import BoardGenerator, Difficulty, GenerationError, example_board
from .solvers import DFSSolver
from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .core.board import SigmarBoard


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Hex tile-matching board generator & solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 medium boards
  sigmar generate --count 5 --difficulty medium

  # Solve the built-in example board
  sigmar solve --example --verbose

  # Solve a board saved by 'generate'
  sigmar solve --file boards/medium/board_medium_1.txt

  # Run full benchmark
  sigmar benchmark --boards 10 --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate solvable boards")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of boards to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "expert", "all"],
        default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for boards (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Find a clearing order for a board")
    source = solve_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--board", "-b", type=str,
        help="Board string (91 glyphs, '.' for empty cells)"
    )
    source.add_argument(
        "--file", "-f", type=str,
        help="File whose first line is a board string"
    )
    source.add_argument(
        "--example", action="store_true",
        help="Use the built-in full-size example board"
    )
    solve_parser.add_argument(
        "--metals-taken", type=int, default=0,
        help="Metal ranks already removed from the board (default: 0)"
    )
    solve_parser.add_argument(
        "--no-memo", action="store_true",
        help="Disable the dead-end memo (plain exhaustive search)"
    )
    solve_parser.add_argument(
        "--max-nodes", type=int, default=None,
        help="Give up after exploring this many search nodes"
    )
    solve_parser.add_argument(
        "--time-limit", type=float, default=None,
        help="Give up after this many seconds"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics and debug logging"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--boards", "-n", type=int, default=10,
        help="Boards per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "expert", "all"],
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
        "--timeout", "-t", type=float, default=60.0,
        help="Time limit per board per solver in seconds (default: 60)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _difficulties(name):
    if name == "all":
        return list(Difficulty)
    return [Difficulty(name)]


def cmd_generate(args):
    """Handle the generate command."""
    generator = BoardGenerator(seed=args.seed)
    difficulties = _difficulties(args.difficulty)

    all_boards = []

    for difficulty in difficulties:
        print(f"\nGenerating {args.count} {difficulty.value} boards...")
        try:
            boards = generator.generate_batch(args.count, difficulty)
        except GenerationError as e:
            print(f"Error generating boards: {e}")
            sys.exit(1)

        for i, board in enumerate(boards, 1):
            all_boards.append({
                "difficulty": difficulty.value,
                "index": i,
                "board": board.to_string(),
                "pieces": board.count_pieces()
            })

            print(f"\n--- {difficulty.value.capitalize()} Board {i} ({board.count_pieces()} pieces) ---")
            print(board)

        if not args.output:
            diff_dir = os.path.join("boards", difficulty.value)
            BoardGenerator.save_to_folder(boards, diff_dir, prefix=f"board_{difficulty.value}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_boards, f, indent=2)
        print(f"\nAll boards saved to {args.output}")
    else:
        print("\nBoards also saved individually in the 'boards/' directory")

    print(f"\nTotal boards generated: {len(all_boards)}")


def _load_board(args) -> SigmarBoard:
    if args.example:
        return example_board()
    if args.file:
        with open(args.file) as f:
            text = f.readline()
    else:
        text = args.board
    return SigmarBoard.from_string(text, metals_taken=args.metals_taken)


def cmd_solve(args):
    """Handle the solve command."""
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )

    # Parse board
    try:
        board = _load_board(args)
    except (OSError, ValueError, GenerationError) as e:
        print(f"Error loading board: {e}")
        sys.exit(1)

    print("Input board:")
    print(board)
    print()

    solver = DFSSolver(
        use_memo=not args.no_memo,
        max_nodes=args.max_nodes,
        time_limit=args.time_limit
    )

    print(f"Solving with {solver.name}...")
    moves, stats = solver.solve(board)

    if stats.solved:
        print(f"✓ Solved in {stats.time_seconds:.4f}s ({len(moves)} moves)")
        if args.verbose:
            print(f"  Iterations: {stats.iterations:,}")
            print(f"  Backtracks: {stats.backtracks:,}")
            print(f"  Memo hits: {stats.extra.get('memo_hits', 0):,}")
            print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
        for step, move in enumerate(moves, 1):
            print(f"  {step:2d}. {move}")
    else:
        reason = stats.extra.get("error", "no solution exists")
        print(f"✗ Failed to solve: {reason}")
        if args.verbose:
            print(f"  Time: {stats.time_seconds:.4f}s")
            print(f"  Iterations: {stats.iterations:,}")
        sys.exit(2)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("BOARD SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Boards per difficulty: {args.boards}")
    print(f"Difficulties: {[d.value for d in difficulties]}")

    benchmark = Benchmark(
        boards_per_difficulty=args.boards,
        difficulties=difficulties,
        timeout_seconds=args.timeout,
        seed=args.seed
    )

    print(f"Solvers: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    # Run benchmark
    results = benchmark.run()

    # Print summary
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nBy Solver:")
    print("-" * 50)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Cleared: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    # Save results
    benchmark.save_results(args.output)

    # Generate charts
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
