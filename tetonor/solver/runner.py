"""
Solve entry points used by the CLI, tools and external callers.
"""

import logging
import threading
from typing import Callable, Optional, Sequence

from .context import DEFAULT_MAX_ATTEMPTS, SolutionContext
from .factory import create_strategy, get_default_strategy_name
from .puzzle import TetonorPuzzle
from .solution import SolveResult

logger = logging.getLogger(__name__)


def solve(
    grid: Sequence[int],
    strip: Sequence[Optional[int]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    strategy_name: Optional[str] = None,
    timeout_sec: Optional[float] = None,
    cancel_flag: Optional[threading.Event] = None,
    progress_callback: Optional[Callable[[float, str], None]] = None,
) -> SolveResult:
    """
    Solve a puzzle given as plain sequences.

    Args:
        grid: 16 positive integers
        strip: 16 slots, int where revealed and None where hidden
        max_attempts: Full combinations to evaluate before giving up
        strategy_name: Registered strategy (default "backtrack")
        timeout_sec: Optional wall-clock limit, reported as budget
        cancel_flag: Optional event to stop the search early
        progress_callback: Optional (percent, message) callback

    Returns:
        Solution, or NotFound with reason "exhausted" or "budget"

    Raises:
        PuzzleError: If grid or strip is malformed
        ValueError: If the strategy name is unknown
    """
    puzzle = TetonorPuzzle.from_lists(grid, strip)
    return solve_puzzle(puzzle, max_attempts, strategy_name, timeout_sec,
                        cancel_flag, progress_callback)


def solve_puzzle(
    puzzle: TetonorPuzzle,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    strategy_name: Optional[str] = None,
    timeout_sec: Optional[float] = None,
    cancel_flag: Optional[threading.Event] = None,
    progress_callback: Optional[Callable[[float, str], None]] = None,
) -> SolveResult:
    """Solve an already validated puzzle. See solve() for arguments."""
    strategy = create_strategy(strategy_name or get_default_strategy_name())
    context = SolutionContext(
        puzzle=puzzle,
        max_attempts=max_attempts,
        timeout_sec=timeout_sec,
        progress_callback=progress_callback,
    )
    if cancel_flag is not None:
        context.cancel_flag = cancel_flag

    result = strategy.solve(context)
    outcome = "found" if result.found else result.reason.value
    logger.info(f"{strategy.name} finished ({outcome}) in {context.elapsed_time():.3f}s")
    return result
