"""
Solver Package - Pair decomposition search for Tetonor puzzles.

Finds 8 integer pairs whose sums and products fill the 16 grid cells and
whose numbers, sorted, agree with every revealed slot of the strip.

Public API:
    - TetonorPuzzle: Immutable grid + strip representation
    - Pair, Use, CandidatePair: Pairs and their grid bindings
    - Solution, NotFound: Results of a solve call
    - SolutionContext: Per-call budget, cancellation and progress
    - SolverStrategy: Abstract base for strategies
    - solve(): Solve from plain sequences
    - create_strategy(): Factory function

Usage:
    from tetonor.solver import solve

    result = solve(grid, strip, max_attempts=50_000)
    if result.found:
        for index, equation in result.assignment.items():
            print(f"Cell {index}: {equation}")
    else:
        print(f"Not found: {result.reason.value}")
"""

# Core data structures
from .puzzle import (
    GRID_SIZE,
    PAIR_COUNT,
    PuzzleError,
    PuzzleSolution,
    TetonorPuzzle,
    sample_puzzle,
)
from .pair import Pair, Use, CandidatePair
from .solution import (
    CellEquation,
    NotFound,
    NotFoundReason,
    Operator,
    Solution,
    SolutionMetrics,
    SolveResult,
)
from .context import DEFAULT_MAX_ATTEMPTS, SolutionContext

# Algorithms
from .candidates import extract_candidates
from .assignment import assign_cells
from .numeric import build_strip, divisor_pairs, addition_pairs, grid_options

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    StrategyInfo,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

from .runner import solve, solve_puzzle

__all__ = [
    # Data structures
    "GRID_SIZE",
    "PAIR_COUNT",
    "PuzzleError",
    "PuzzleSolution",
    "TetonorPuzzle",
    "sample_puzzle",
    "Pair",
    "Use",
    "CandidatePair",
    "CellEquation",
    "NotFound",
    "NotFoundReason",
    "Operator",
    "Solution",
    "SolutionMetrics",
    "SolveResult",
    "DEFAULT_MAX_ATTEMPTS",
    "SolutionContext",
    # Algorithms
    "extract_candidates",
    "assign_cells",
    "build_strip",
    "divisor_pairs",
    "addition_pairs",
    "grid_options",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "StrategyInfo",
    "get_default_strategy_name",
    "register_strategy",
    # Entry points
    "solve",
    "solve_puzzle",
]
