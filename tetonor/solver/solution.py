"""
Solution Module - Results of a solve call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Union

from .pair import Pair, Use


class Operator(Enum):
    """Operation a grid cell is formed with."""
    ADD = "add"
    MULTIPLY = "multiply"

    @property
    def symbol(self) -> str:
        return "+" if self is Operator.ADD else "x"

    def apply(self, a: int, b: int) -> int:
        return a + b if self is Operator.ADD else a * b


@dataclass(frozen=True)
class CellEquation:
    """
    How one grid cell is formed: operand1 <operator> operand2.
    """
    operand1: int
    operator: Operator
    operand2: int

    @property
    def value(self) -> int:
        return self.operator.apply(self.operand1, self.operand2)

    def __str__(self):
        return f"{self.operand1} {self.operator.symbol} {self.operand2}"


@dataclass
class SolutionMetrics:
    """
    Performance metrics for a solve call.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        candidates_found: Candidate pairs produced by extraction
        attempts: Full 8-pair combinations evaluated
        strip_matches: Combinations whose numbers matched the strip
        pruned_branches: Candidates skipped for lack of free cells
        strategy_name: Name of strategy that ran
    """
    computation_time_ms: float = 0.0
    candidates_found: int = 0
    attempts: int = 0
    strip_matches: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Verified decomposition of a puzzle.

    Attributes:
        pairs: The 8 chosen pairs in search order
        uses: Cell binding chosen for each pair (same order as pairs)
        built_strip: The 16 numbers of the pairs, sorted ascending
        assignment: Grid index -> equation forming that cell
        metrics: Performance statistics
    """
    pairs: Tuple[Pair, ...]
    uses: Tuple[Use, ...]
    built_strip: Tuple[int, ...]
    assignment: Dict[int, CellEquation]
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    found = True

    @classmethod
    def create(cls, pairs: Tuple[Pair, ...], uses: Tuple[Use, ...],
               built_strip: Tuple[int, ...],
               metrics: SolutionMetrics) -> 'Solution':
        """
        Build a Solution and its grid assignment from chosen uses.

        Args:
            pairs: Chosen pairs
            uses: One use per pair, cells pairwise distinct
            built_strip: Sorted numbers of the pairs
            metrics: Statistics gathered by the search

        Returns:
            Solution instance
        """
        assignment: Dict[int, CellEquation] = {}
        for pair, use in zip(pairs, uses):
            assignment[use.add] = CellEquation(pair.lo, Operator.ADD, pair.hi)
            assignment[use.mult] = CellEquation(pair.lo, Operator.MULTIPLY, pair.hi)
        return cls(pairs=pairs, uses=uses, built_strip=built_strip,
                   assignment=dict(sorted(assignment.items())), metrics=metrics)

    @property
    def additions(self) -> List[int]:
        """Grid indices formed by addition."""
        return [i for i, eq in self.assignment.items() if eq.operator is Operator.ADD]

    @property
    def multiplications(self) -> List[int]:
        """Grid indices formed by multiplication."""
        return [i for i, eq in self.assignment.items() if eq.operator is Operator.MULTIPLY]

    def equation(self, index: int) -> CellEquation:
        """
        Get the equation for a grid cell.

        Raises:
            KeyError: If index is not assigned
        """
        return self.assignment[index]


class NotFoundReason(Enum):
    """Why a solve call returned no solution."""
    EXHAUSTED = "exhausted"  # whole space searched
    BUDGET = "budget"        # attempt budget, cancel or timeout hit first


@dataclass
class NotFound:
    """
    Negative result of a solve call.

    Attributes:
        reason: Exhausted (definitive) or budget (retry may help)
        metrics: Performance statistics
    """
    reason: NotFoundReason
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    found = False

    @property
    def is_definitive(self) -> bool:
        return self.reason is NotFoundReason.EXHAUSTED


SolveResult = Union[Solution, NotFound]
