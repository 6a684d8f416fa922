"""
Candidate Extraction Module - Pairs that explain one cell as a product
and another as a sum.
"""

import logging
from typing import Dict, List, Sequence

from .numeric import divisor_pairs
from .pair import CandidatePair, Pair, Use

logger = logging.getLogger(__name__)


def extract_candidates(grid: Sequence[int]) -> List[CandidatePair]:
    """
    Find every pair whose product is one grid cell and sum is another.

    For each ordered pair of distinct cells (i, j), every factorisation
    a * b of grid[i] is tested against grid[j] as a sum. Matches are
    grouped by pair; candidates keep first-encounter order so the search
    that consumes them is deterministic.

    Args:
        grid: Grid numbers (normally 16)

    Returns:
        CandidatePairs with all their uses
    """
    found: Dict[Pair, List[Use]] = {}
    size = len(grid)

    for mult in range(size):
        factorisations = divisor_pairs(grid[mult])
        if not factorisations:
            continue
        for add in range(size):
            if add == mult:
                continue
            target = grid[add]
            for a, b in factorisations:
                if a + b == target:
                    found.setdefault(Pair.of(a, b), []).append(Use(add=add, mult=mult))

    candidates = [CandidatePair.create(pair, uses) for pair, uses in found.items()]
    logger.debug(f"Extracted {len(candidates)} candidate pairs "
                 f"({sum(len(c.uses) for c in candidates)} uses)")
    return candidates
