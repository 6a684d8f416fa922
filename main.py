"""
Tetonor Solver - Entry Point

Solves a Tetonor puzzle from a JSON file, a freshly generated puzzle, or
the built-in sample, and prints every grid cell's equation.

Example:
    python main.py
    python main.py --puzzle puzzle.json --max-attempts 200000
    python main.py --generate --seed 42 --difficulty hard --debug
"""

import sys
import json
import logging
import argparse
from typing import Optional

from tetonor.settings import load_settings
from tetonor.solver import (
    PuzzleError,
    SolveResult,
    TetonorPuzzle,
    get_strategy_info,
    get_strategy_names,
    grid_options,
    sample_puzzle,
    solve_puzzle,
)
from tetonor.generator import DIFFICULTIES, generate
from tetonor.debug import save_debug_image


logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_BAD_INPUT = 2


def configure_logging(verbose: bool) -> None:
    """Log to both console and solver.log."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def load_puzzle(path: str) -> TetonorPuzzle:
    """
    Load a puzzle from a JSON file.

    Raises:
        PuzzleError: If the file is unreadable or the puzzle malformed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (ValueError, IOError) as e:
        raise PuzzleError(f"Cannot read puzzle file {path}: {e}") from e
    if not isinstance(data, dict):
        raise PuzzleError(f"Puzzle file {path} must contain a JSON object")
    return TetonorPuzzle.from_dict(data)


def format_options(pairs, symbol: str, limit: int) -> str:
    """Join up to `limit` operand pairs, noting how many were left out."""
    text = ", ".join(f"{a}{symbol}{b}" for a, b in pairs[:limit])
    overflow = len(pairs) - limit
    if overflow > 0:
        text += f" ... and {overflow} more"
    return text


def explain_grid(puzzle: TetonorPuzzle, limit: int = 10) -> None:
    """Log every way each grid number could be formed, smaller operand first."""
    logger.info("=== Grid Options ===")
    for options in grid_options(puzzle.grid):
        products = format_options(options.multiplication, "x", limit)
        sums = format_options(options.addition, "+", limit)
        logger.info(f"Cell {options.index} ({options.value}): x[{products}] +[{sums}]")
    logger.info(f"Known strip values: {puzzle.known_values}")


def list_strategies() -> None:
    """Print every registered strategy."""
    for info in get_strategy_info():
        print(info)


def format_result(puzzle: TetonorPuzzle, result: SolveResult) -> str:
    """Render a solve result as text."""
    if not result.found:
        hint = "" if result.is_definitive else " (retry with a larger --max-attempts)"
        return (f"No solution: {result.reason.value}{hint}\n"
                f"Checked {result.metrics.attempts} combinations "
                f"of {result.metrics.candidates_found} candidate pairs")

    lines = ["Strip: " + " ".join(str(n) for n in result.built_strip)]
    lines.append("Pairs: " + " ".join(str(p) for p in result.pairs))
    for index, equation in result.assignment.items():
        lines.append(f"  [{index:2d}] {puzzle.grid[index]:4d} = {equation}")
    lines.append(f"Checked {result.metrics.attempts} combinations "
                 f"in {result.metrics.computation_time_ms:.1f}ms")
    return "\n".join(lines)


def parse_args(argv: Optional[list] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tetonor Solver - recover the 8 hidden pairs behind a Tetonor grid"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--puzzle", "-p",
        help="JSON file with 'grid' and 'strip' (hidden slots as null)"
    )
    source.add_argument(
        "--generate", "-g",
        action="store_true",
        help="Generate a random puzzle instead of reading one"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --generate")
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES.keys()),
        default=None,
        help="Difficulty for --generate (default from config.json)"
    )
    parser.add_argument(
        "--max-attempts", "-m",
        type=int,
        default=None,
        help="Full combinations to check before giving up (default from config.json)"
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=get_strategy_names(),
        default=None,
        help="Solving strategy (default from config.json)"
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="List multiplication and addition options for every grid cell "
             "(each pair once, smaller operand first)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Save an annotated PNG of the result to ./debug"
    )
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="Print the registered solving strategies and exit"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    """Run the solver once and return the exit code."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    if args.list_strategies:
        list_strategies()
        return EXIT_FOUND

    settings = load_settings()
    max_attempts = args.max_attempts if args.max_attempts is not None else settings["max_attempts"]
    strategy_name = args.strategy or settings["strategy_name"]
    difficulty = args.difficulty or settings["difficulty"]
    debug_mode = args.debug or settings.get("debug_enabled", False)

    try:
        if args.puzzle:
            puzzle = load_puzzle(args.puzzle)
        elif args.generate:
            puzzle = generate(seed=args.seed, difficulty=difficulty)
            logger.info(f"Generated {difficulty} puzzle (seed={args.seed})")
        else:
            puzzle = sample_puzzle()
    except PuzzleError as e:
        logger.error(f"Invalid puzzle: {e}")
        return EXIT_BAD_INPUT

    logger.info(f"Grid: {list(puzzle.grid)}")
    logger.info(f"Strip: {list(puzzle.strip)}")

    if args.explain:
        explain_grid(puzzle)

    try:
        result = solve_puzzle(puzzle, max_attempts=max_attempts, strategy_name=strategy_name)
    except ValueError as e:
        logger.error(f"Cannot solve: {e}")
        return EXIT_BAD_INPUT

    print(format_result(puzzle, result))

    if debug_mode:
        path = save_debug_image(puzzle, result)
        logger.info(f"Debug image saved: {path}")

    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
