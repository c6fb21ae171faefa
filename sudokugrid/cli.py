"""Command-line interface for the grid engine."""

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from .core.errors import SudokuGridError
from .core.grid import Grid
from .core.presets import GridConfig, PRESETS, get_preset
from .core.propagator import ConstraintPropagator
from .core.validator import find_conflicts, is_solved_grid, is_valid_grid
from .generator import BacktrackingGenerator, StochasticGenerator
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sudokugrid",
        description="Sudoku-family grid generator and checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 3 classic grids with the backtracking generator
  sudokugrid generate --method backtracking --count 3 --seed 7

  # Generate a 6x6 grid with blocks 3 wide and 2 high
  sudokugrid generate --preset six

  # Show the candidates of every open cell
  sudokugrid candidates --preset mini --board "1004000100000002"

  # Compare both generators
  sudokugrid benchmark --runs 20 --output results/
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Also write log messages to this file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    grid_args = argparse.ArgumentParser(add_help=False)
    grid_args.add_argument(
        "--preset", choices=sorted(PRESETS), default="classic",
        help="Grid preset (default: classic)"
    )
    grid_args.add_argument("--cols", type=int, default=None, help="Number of columns")
    grid_args.add_argument("--rows", type=int, default=None, help="Number of rows")
    grid_args.add_argument("--block-cols", type=int, default=None,
                           help="Number of block sections across")
    grid_args.add_argument("--block-rows", type=int, default=None,
                           help="Number of block sections down")
    grid_args.add_argument("--alphabet", type=str, default=None,
                           help="Symbols to use, e.g. ABCD (default: 1-9 then A-Z)")

    # Generate command
    gen_parser = subparsers.add_parser("generate", parents=[grid_args],
                                       help="Generate complete grids")
    gen_parser.add_argument(
        "--method", "-m", choices=["stochastic", "backtracking"], default="stochastic",
        help="Generation algorithm (default: stochastic)"
    )
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of grids to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--max-attempts", type=int, default=1000,
        help="Attempt budget of the stochastic generator (default: 1000)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for grids (JSON format)"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", parents=[grid_args],
                                         help="Complete a partial board")
    solve_parser.add_argument(
        "--board", "-b", type=str, required=True,
        help="Board string, row-major, 0 or . for empty cells"
    )
    solve_parser.add_argument(
        "--method", "-m", choices=["stochastic", "backtracking"], default="backtracking",
        help="Completion algorithm (default: backtracking)"
    )
    solve_parser.add_argument(
        "--max-attempts", type=int, default=1000,
        help="Attempt budget of the stochastic generator (default: 1000)"
    )
    solve_parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed")

    # Candidates command
    cand_parser = subparsers.add_parser("candidates", parents=[grid_args],
                                        help="Show the candidates of every open cell")
    cand_parser.add_argument("--board", "-b", type=str, required=True,
                             help="Board string, row-major, 0 or . for empty cells")

    # Check command
    check_parser = subparsers.add_parser("check", parents=[grid_args],
                                         help="Validate a board")
    check_parser.add_argument("--board", "-b", type=str, required=True,
                              help="Board string, row-major, 0 or . for empty cells")

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", parents=[grid_args],
                                         help="Compare the generators")
    bench_parser.add_argument(
        "--runs", "-n", type=int, default=10,
        help="Grids per generator (default: 10)"
    )
    bench_parser.add_argument(
        "--max-attempts", type=int, default=1000,
        help="Attempt budget of the stochastic generator (default: 1000)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Base random seed (default: 42)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    bench_parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(getattr(logging, args.log_level), args.log_file)

    commands = {
        "generate": cmd_generate,
        "solve": cmd_solve,
        "candidates": cmd_candidates,
        "check": cmd_check,
        "benchmark": cmd_benchmark,
    }
    try:
        return commands[args.command](args)
    except SudokuGridError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def config_from_args(args) -> GridConfig:
    """Preset overridden by any explicit dimension flags."""
    preset = get_preset(args.preset)
    return GridConfig(
        cols=args.cols if args.cols is not None else preset.cols,
        rows=args.rows if args.rows is not None else preset.rows,
        block_cols=args.block_cols if args.block_cols is not None else preset.block_cols,
        block_rows=args.block_rows if args.block_rows is not None else preset.block_rows,
        alphabet=args.alphabet if args.alphabet is not None else preset.alphabet,
    )


def load_board(args) -> Grid:
    grid = config_from_args(args).build()
    grid.initialize_board("".join(args.board.split()))
    return grid


def cmd_generate(args) -> int:
    """Handle the generate command."""
    rng = random.Random(args.seed)
    config = config_from_args(args)
    all_grids = []

    for i in range(1, args.count + 1):
        grid = config.build()
        if args.method == "backtracking":
            generator = BacktrackingGenerator(grid, rng=rng)
            if not generator.recursive_smart_generator():
                print(f"Grid {i}: no completion found from the seeded cells")
                continue
            attempts = 1
        else:
            generator = StochasticGenerator(grid, rng=rng)
            attempts = generator.generate_completed(args.max_attempts)

        all_grids.append({
            "index": i,
            "method": args.method,
            "attempts": attempts,
            "grid": grid.to_string(),
        })
        print(f"\n--- Grid {i} ({args.method}, {attempts} attempt(s)) ---")
        print(grid)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_grids, f, indent=2)
        print(f"\nAll grids saved to {args.output}")

    print(f"\nTotal grids generated: {len(all_grids)}")
    return 0 if len(all_grids) == args.count else 1


def cmd_solve(args) -> int:
    """Handle the solve command."""
    grid = load_board(args)

    print("Input board:")
    print(grid)
    print()

    if args.method == "backtracking":
        solved = BacktrackingGenerator(grid, seed=args.seed).solve()
    else:
        StochasticGenerator(grid, seed=args.seed).generate_completed(args.max_attempts)
        solved = True

    if solved and is_solved_grid(grid):
        print("✓ Solved")
        print(grid)
        print(grid.to_string())
        return 0

    print("✗ No solution found")
    return 1


def cmd_candidates(args) -> int:
    """Handle the candidates command."""
    grid = load_board(args)
    dead = ConstraintPropagator(grid).recompute_candidates()

    print(grid)
    print()
    for cell in grid.unsolved_cells():
        candidates = "".join(grid.ordered(cell.candidates)) or "-"
        print(f"({cell.x}, {cell.y}) block {cell.z}: {candidates}")

    if dead:
        print(f"\nDead end: {len(dead)} cell(s) without candidates")
        return 1
    return 0


def cmd_check(args) -> int:
    """Handle the check command."""
    grid = load_board(args)
    print(grid)
    print()

    conflicts = find_conflicts(grid)
    for a, b in conflicts:
        print(f"Conflict: {a.value!r} at ({a.x}, {a.y}) and ({b.x}, {b.y})")

    if is_solved_grid(grid):
        print("✓ Complete and valid")
    elif is_valid_grid(grid):
        print(f"✓ Valid, {grid.cell_count - grid.count_filled()} cell(s) open")
    else:
        print(f"✗ Invalid, {len(conflicts)} conflict(s)")
        return 1
    return 0


def cmd_benchmark(args) -> int:
    """Handle the benchmark command."""
    from .benchmark import Benchmark
    from .benchmark.visualizer import Visualizer

    config = config_from_args(args)
    benchmark = Benchmark(
        runs=args.runs,
        config=config,
        max_attempts=args.max_attempts,
        seed=args.seed
    )

    print("=" * 60)
    print("GRID GENERATOR BENCHMARK")
    print("=" * 60)
    print(f"Grid: {config.cols}x{config.rows}, "
          f"{config.block_cols}x{config.block_rows} block sections")
    print(f"Runs per generator: {args.runs}")
    print(f"Generators: {', '.join(benchmark.generators.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run(show_progress=not args.no_progress)
    summary = benchmark.get_summary()

    print("\nBy Generator:")
    print("-" * 50)
    for name, stats in summary["results_by_algorithm"].items():
        print(f"\n{name}:")
        print(f"  Success: {stats['success_rate']:.1f}% "
              f"({stats['total_succeeded']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Attempts: {stats['avg_attempts']:.1f}")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        charts = Visualizer(results, args.output).generate_all()
        for chart in charts:
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
