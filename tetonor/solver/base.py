"""
Base Strategy Module - Abstract base class for solving strategies.
"""

from abc import ABC, abstractmethod
from typing import List

from .candidates import extract_candidates
from .context import SolutionContext
from .pair import CandidatePair
from .puzzle import TetonorPuzzle
from .solution import SolveResult


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for the CLI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> SolveResult:
        """
        Compute a solution for the puzzle in the context.

        Must stop with a budget result once context.max_attempts
        combinations were evaluated or context.is_cancelled() is True.

        Args:
            context: Solution context with puzzle, budget, cancellation

        Returns:
            Solution, or NotFound with the reason
        """
        pass

    def find_candidate_pairs(self, puzzle: TetonorPuzzle) -> List[CandidatePair]:
        """
        Find all pairs whose product and sum both appear in the grid.

        Args:
            puzzle: Puzzle to scan

        Returns:
            Candidate pairs in extraction order
        """
        return extract_candidates(puzzle.grid)

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solution context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()
