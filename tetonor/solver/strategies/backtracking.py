"""
Backtracking Strategy - Depth-bounded subset search over candidate pairs.

Chooses 8 candidate pairs with a strictly increasing cursor so every
unordered subset is visited at most once. Branches are pruned when a
candidate has no use left that fits the cells already claimed, or when
the numbers chosen so far can no longer sort into the revealed strip
slots. Each full
combination is checked against the strip and then handed to the grid
assignment search, which has the final say on cell coverage.

Search state (chosen pairs, claimed cells, counters) lives in immutable
values passed down and returned up the call stack, so the strategy is
reentrant and sibling branches never see each other's claims.
"""

import logging
import time
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import List, Tuple

from ..assignment import assign_cells
from ..base import SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..numeric import build_strip
from ..pair import CandidatePair, Use
from ..puzzle import PAIR_COUNT
from ..solution import NotFound, NotFoundReason, Solution, SolutionMetrics, SolveResult

logger = logging.getLogger(__name__)


class Step(Enum):
    """Signal returned up the recursion."""
    CONTINUE = auto()
    FOUND = auto()
    BUDGET = auto()


@dataclass(frozen=True)
class SearchStats:
    """Counters threaded through the recursion."""
    attempts: int = 0
    strip_matches: int = 0
    pruned: int = 0


@dataclass(frozen=True)
class SearchOutcome:
    """
    Result of exploring one branch.

    Attributes:
        step: Whether to keep searching or stop
        stats: Counters after the branch
        combination: Chosen pairs when step is FOUND
        uses: Assigned use per pair when step is FOUND
    """
    step: Step
    stats: SearchStats
    combination: Tuple[CandidatePair, ...] = ()
    uses: Tuple[Use, ...] = ()


@register_strategy
class BacktrackingStrategy(SolverStrategy):
    """
    Exhaustive-within-budget subset search with cell-availability pruning.

    Parameters:
        progress_interval: Attempts between progress reports (default 5000)
    """
    name = "backtrack"
    description = "Backtracking - subset search with cell pruning and grid assignment"

    def __init__(self, progress_interval: int = 5000):
        self.progress_interval = progress_interval

    def solve(self, context: SolutionContext) -> SolveResult:
        """
        Search for 8 pairs matching the strip and covering the grid.

        Args:
            context: Solution context with puzzle and budget

        Returns:
            First verified Solution in search order, or NotFound
        """
        start_time = time.perf_counter()

        candidates = self.find_candidate_pairs(context.puzzle)
        if len(candidates) < PAIR_COUNT:
            logger.info(f"Only {len(candidates)} candidate pairs, need {PAIR_COUNT}")
            return NotFound(
                reason=NotFoundReason.EXHAUSTED,
                metrics=self._build_metrics(SearchStats(), len(candidates), start_time),
            )

        outcome = self._search(context, candidates, 0, (), frozenset(), SearchStats())
        metrics = self._build_metrics(outcome.stats, len(candidates), start_time)

        if outcome.step is Step.FOUND:
            pairs = tuple(c.pair for c in outcome.combination)
            solution = Solution.create(pairs, outcome.uses, build_strip(pairs), metrics)
            logger.info(f"Solution found after {metrics.attempts} attempts "
                        f"({metrics.computation_time_ms:.1f}ms)")
            return solution

        if outcome.step is Step.BUDGET:
            logger.warning(f"Search stopped after {metrics.attempts} attempts "
                           f"(budget {context.max_attempts})")
            return NotFound(reason=NotFoundReason.BUDGET, metrics=metrics)

        logger.info(f"Search space exhausted after {metrics.attempts} attempts")
        return NotFound(reason=NotFoundReason.EXHAUSTED, metrics=metrics)

    def _search(
        self,
        context: SolutionContext,
        candidates: List[CandidatePair],
        start: int,
        chosen: Tuple[CandidatePair, ...],
        claimed: frozenset,
        stats: SearchStats
    ) -> SearchOutcome:
        """Choose the next pair at or after `start`, depth-first."""
        if len(chosen) == PAIR_COUNT:
            return self._evaluate(context, chosen, stats)

        needed = PAIR_COUNT - len(chosen)
        chosen_numbers = tuple(n for c in chosen for n in c.pair.numbers)
        for index in range(start, len(candidates) - needed + 1):
            candidate = candidates[index]

            # Existence test only: some use must still fit. The cells
            # claimed for it are the ones every fitting use shares.
            if not candidate.available_uses(claimed):
                stats = replace(stats, pruned=stats.pruned + 1)
                continue

            if not context.puzzle.admits(chosen_numbers + candidate.pair.numbers):
                stats = replace(stats, pruned=stats.pruned + 1)
                continue

            outcome = self._search(
                context, candidates, index + 1,
                chosen + (candidate,),
                claimed | candidate.forced_cells(claimed),
                stats,
            )
            if outcome.step is not Step.CONTINUE:
                return outcome
            stats = outcome.stats

        return SearchOutcome(step=Step.CONTINUE, stats=stats)

    def _evaluate(
        self,
        context: SolutionContext,
        chosen: Tuple[CandidatePair, ...],
        stats: SearchStats
    ) -> SearchOutcome:
        """Check one full combination against the strip and the grid."""
        if stats.attempts >= context.max_attempts or self._check_cancelled(context):
            return SearchOutcome(step=Step.BUDGET, stats=stats)

        stats = replace(stats, attempts=stats.attempts + 1)
        if self.progress_interval and stats.attempts % self.progress_interval == 0:
            context.report_progress(
                min(0.99, stats.attempts / context.max_attempts),
                f"{stats.attempts} combinations checked"
            )

        built = build_strip(c.pair for c in chosen)
        if not context.puzzle.strip_matches(built):
            return SearchOutcome(step=Step.CONTINUE, stats=stats)

        stats = replace(stats, strip_matches=stats.strip_matches + 1)
        uses = assign_cells(chosen)
        if uses is None:
            logger.debug("Strip match rejected, no cell assignment: "
                         + " ".join(str(c.pair) for c in chosen))
            return SearchOutcome(step=Step.CONTINUE, stats=stats)

        return SearchOutcome(step=Step.FOUND, stats=stats, combination=chosen, uses=uses)

    def _build_metrics(self, stats: SearchStats, candidate_count: int,
                       start_time: float) -> SolutionMetrics:
        """Build SolutionMetrics from search counters."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        return SolutionMetrics(
            computation_time_ms=elapsed_ms,
            candidates_found=candidate_count,
            attempts=stats.attempts,
            strip_matches=stats.strip_matches,
            pruned_branches=stats.pruned,
            strategy_name=self.name,
        )
