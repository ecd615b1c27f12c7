"""Command-line interface for the Binairo solver system."""

import argparse
import json
import sys

from .core.board import BinairoBoard
from .core.moves import Role, apply_move, find_invalid_given, parse_moves
from .generator import BinairoGenerator, Difficulty, load_example
from .solvers import CSPSolver, SolverConfig, FULL, find_forced_moves, suggest_move
from .storage import GameStore
from .logging_utils import set_level

DEFAULT_SIZE = 6
DEFAULT_SAVE_DIR = "saves"


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Binairo (Takuzu) CSP Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a 4x4 puzzle with every heuristic
  python -m binairo.cli solve --puzzle "0..1....1..0...." --all -v

  # Ask for a hint on the built-in 6x6 example
  python -m binairo.cli hint --example 6

  # Compare all 32 heuristic configurations on 6x6 puzzles
  python -m binairo.cli benchmark --sizes 6 --puzzles 5 --output results/
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Binairo puzzle")
    _add_grid_arguments(solve_parser)
    _add_heuristic_arguments(solve_parser)
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Hint command
    hint_parser = subparsers.add_parser("hint", help="Suggest a forced move")
    _add_grid_arguments(hint_parser)
    hint_parser.add_argument(
        "--all-moves", action="store_true",
        help="List every forced move instead of the first one"
    )

    # Move command
    move_parser = subparsers.add_parser("move", help="Check moves against the rules")
    _add_grid_arguments(move_parser)
    move_parser.add_argument(
        "moves", type=str,
        help="Moves as 1-based 'row col value' triples, e.g. \"1 2 0 3 1 1\""
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Solve a puzzle by hand")
    _add_grid_arguments(play_parser)

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Binairo puzzles")
    gen_parser.add_argument(
        "--size", type=int, default=DEFAULT_SIZE,
        help=f"Grid size, even and >= 4 (default: {DEFAULT_SIZE})"
    )
    gen_parser.add_argument(
        "--count", "-n", type=int, default=3,
        help="Number of puzzles to generate (default: 3)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty],
        default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--random", action="store_true",
        help="Scatter random clues instead (may be unsolvable)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Saves command
    saves_parser = subparsers.add_parser("saves", help="List or show saved games")
    saves_parser.add_argument(
        "name", nargs="?", default=None,
        help="Saved game to display (lists all saves if omitted)"
    )
    saves_parser.add_argument(
        "--save-dir", type=str, default=DEFAULT_SAVE_DIR,
        help=f"Directory for saved games (default: {DEFAULT_SAVE_DIR})"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Compare heuristic configurations")
    bench_parser.add_argument(
        "--sizes", type=int, nargs="+", default=[4, 6],
        help="Grid sizes to test (default: 4 6)"
    )
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=5,
        help="Puzzles per size (default: 5)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty],
        default="medium",
        help="Difficulty of generated puzzles (default: medium)"
    )
    bench_parser.add_argument(
        "--timeout", type=float, default=30.0,
        help="Seconds allowed per puzzle and configuration (default: 30)"
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
    set_level(args.log_level)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "solve": cmd_solve,
        "hint": cmd_hint,
        "move": cmd_move,
        "play": cmd_play,
        "generate": cmd_generate,
        "saves": cmd_saves,
        "benchmark": cmd_benchmark,
    }
    commands[args.command](args)


def _add_grid_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--puzzle", "-p", type=str,
        help="Row-major puzzle string: 0, 1 and '.' for empty cells"
    )
    source.add_argument(
        "--example", type=int, choices=[6, 8, 10],
        help="Use a built-in example grid of this size"
    )
    source.add_argument(
        "--load", type=str, metavar="NAME",
        help="Use a saved game"
    )
    parser.add_argument(
        "--clues", type=str, default=None,
        help="Extra 1-based 'row col value' triples placed on the grid"
    )
    parser.add_argument(
        "--save-dir", type=str, default=DEFAULT_SAVE_DIR,
        help=f"Directory for saved games (default: {DEFAULT_SAVE_DIR})"
    )


def _add_heuristic_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mrv", action="store_true", help="Minimum Remaining Values")
    parser.add_argument("--degree", action="store_true", help="Degree heuristic tie-break")
    parser.add_argument("--lcv", action="store_true", help="Least Constraining Value")
    parser.add_argument("--ac3", action="store_true", help="Arc-consistency preprocessing")
    parser.add_argument("--fc", action="store_true", help="Forward checking")
    parser.add_argument("--all", action="store_true", help="Enable every heuristic")


def config_from_args(args) -> SolverConfig:
    """Build the solver configuration selected on the command line."""
    if args.all:
        return FULL
    return SolverConfig(
        mrv=args.mrv,
        degree=args.degree,
        lcv=args.lcv,
        ac3=args.ac3,
        forward_checking=args.fc,
    )


def board_from_args(args) -> BinairoBoard:
    """
    Build the starting grid from --puzzle, --example or --load, then --clues.

    Raises:
        ValueError: If the grid or the clues cannot be parsed.
    """
    if args.puzzle is not None:
        board = BinairoBoard.from_string(args.puzzle)
    elif args.example is not None:
        board = load_example(args.example)
    else:
        board = GameStore(args.save_dir).load(args.load)
        if board is None:
            raise ValueError(f"Could not load saved game {args.load!r}")

    if args.clues:
        for move in parse_moves(args.clues, board.size):
            board.set(move.row, move.col, move.value)
    return board


def _load_board_or_exit(args) -> BinairoBoard:
    try:
        return board_from_args(args)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_solve(args):
    """Handle the solve command."""
    board = _load_board_or_exit(args)

    print("Input puzzle:")
    print(board)
    print()

    invalid = find_invalid_given(board)
    if invalid is not None:
        move, rule = invalid
        print(f"✗ Given {move} breaks a rule: {rule.description}")
        sys.exit(1)

    solver = CSPSolver(config_from_args(args))
    print(f"Solving with {solver.config.label}...")
    resolution = solver.check_resolvability(board)
    stats = solver.stats

    if resolution.is_resolvable:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
        if args.verbose:
            print(solver.performance_report())
        print(resolution.solution)
    else:
        print("✗ No solution exists")
        if args.verbose:
            print(solver.performance_report())
        sys.exit(2)


def cmd_hint(args):
    """Handle the hint command."""
    board = _load_board_or_exit(args)
    print(board)
    print()

    if args.all_moves:
        moves = find_forced_moves(board)
        if not moves:
            print("No obvious suggestion was found.")
        for move in moves:
            print(f" - Cell ({move.row + 1}, {move.col + 1}) must be {move.value}")
        return

    move = suggest_move(board)
    if move is None:
        print("No obvious suggestion was found.")
    else:
        print(f"Suggestion: place {move.value} at ({move.row + 1}, {move.col + 1})")


def cmd_move(args):
    """Handle the move command: play moves one by one and report the first rule broken."""
    board = _load_board_or_exit(args)
    try:
        moves = parse_moves(args.moves, board.size)
    except ValueError as e:
        print(f"Invalid move: {e}")
        sys.exit(1)

    for move in moves:
        next_board, rule = apply_move(board, move, Role.HUMAN)
        if rule is not None:
            print(f"✗ Move {move} rejected: {rule.description}")
            print(board)
            sys.exit(2)
        board = next_board
        print(f"✓ Move {move} accepted")

    print(board)
    if board.is_complete():
        print("🎉 The grid is solved!")


def cmd_play(args):
    """Handle the play command: an interactive manual solving session."""
    board = _load_board_or_exit(args)

    print("Checking that the grid can be solved...")
    resolution = CSPSolver(FULL, track_memory=False).check_resolvability(board)
    if not resolution.is_resolvable:
        print("🛑 This grid cannot be solved. Try another one.")
        sys.exit(2)

    store = GameStore(args.save_dir)

    while True:
        print()
        print(board)

        if board.is_complete():
            print("\n🎉 Congratulations! The grid is solved!")
            break

        choice = _prompt("Options: (M)ove, (H)int, (S)ave, (Q)uit: ").strip().upper()
        if choice in ("Q", ""):
            break

        if choice == "M":
            text = _prompt("Move (row col value, e.g. 1 2 0): ")
            try:
                moves = parse_moves(text, board.size)
            except ValueError as e:
                print(f"Invalid entry: {e}")
                continue
            for move in moves:
                next_board, rule = apply_move(board, move, Role.HUMAN)
                if rule is not None:
                    print(f"⚠️ {move} rejected: {rule.description}")
                    break
                board = next_board
        elif choice == "H":
            move = suggest_move(board)
            if move is None:
                print("No obvious suggestion was found.")
            else:
                print(f"💡 Cell ({move.row + 1}, {move.col + 1}) must be {move.value}")
        elif choice == "S":
            print(f"Game saved as {store.save(board)}")
        else:
            print("Invalid choice.")


def _prompt(message: str) -> str:
    try:
        return input(message)
    except EOFError:
        return ""


def cmd_generate(args):
    """Handle the generate command."""
    try:
        generator = BinairoGenerator(size=args.size, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    difficulty = Difficulty(args.difficulty)
    label = "random" if args.random else difficulty.value
    print(f"\nGenerating {args.count} {label} {args.size}x{args.size} puzzles...")

    all_puzzles = []
    for i in range(1, args.count + 1):
        puzzle = generator.generate_random() if args.random else generator.generate(difficulty)
        all_puzzles.append({
            "size": args.size,
            "difficulty": label,
            "index": i,
            "puzzle": puzzle.to_string(),
            "clues": puzzle.count_filled(),
        })

        print(f"\n--- Puzzle {i} ({puzzle.count_filled()} clues) ---")
        print(puzzle)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_saves(args):
    """Handle the saves command."""
    store = GameStore(args.save_dir)

    if args.name is None:
        names = store.list()
        if not names:
            print("No saved games found.")
        for name in names:
            print(name)
        return

    board = store.load(args.name)
    if board is None:
        print(f"Could not load saved game {args.name!r}")
        sys.exit(1)
    print(board)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    from .benchmark import Benchmark

    difficulty = Difficulty(args.difficulty)

    print("=" * 60)
    print("BINAIRO SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Sizes: {args.sizes}")
    print(f"Puzzles per size: {args.puzzles}")
    print(f"Difficulty: {difficulty.value}")

    benchmark = Benchmark(
        sizes=args.sizes,
        puzzles_per_size=args.puzzles,
        difficulty=difficulty,
        timeout_seconds=args.timeout,
        seed=args.seed
    )

    print(f"Configurations: {len(benchmark.configs)}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    ranked = sorted(summary["results_by_configuration"].items(), key=lambda kv: kv[1]["avg_nodes"])
    for label, stats in ranked:
        print(f"\n{label}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds'] * 1000:.2f}ms")
        print(f"  Avg Nodes: {stats['avg_nodes']:,.0f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        from .benchmark.visualizer import Visualizer
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
