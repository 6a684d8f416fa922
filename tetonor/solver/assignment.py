"""
Grid Assignment Module - Bind each chosen pair to one of its uses so that
all 16 cells are covered exactly once.
"""

from typing import Optional, Sequence, Tuple

from .pair import CandidatePair, Use
from .puzzle import GRID_SIZE


def assign_cells(combination: Sequence[CandidatePair],
                 grid_size: int = GRID_SIZE) -> Optional[Tuple[Use, ...]]:
    """
    Find one use per pair with all chosen cells distinct.

    Pairs are processed in the given order and their uses tried in
    discovery order, backtracking on conflict. The first complete
    assignment wins.

    Args:
        combination: Chosen candidate pairs
        grid_size: Number of cells that must be covered

    Returns:
        Chosen uses aligned with combination, or None if no assignment
        covers every cell
    """
    if 2 * len(combination) != grid_size:
        return None

    chosen = _assign(combination, 0, frozenset())
    if chosen is None:
        return None

    covered = {cell for use in chosen for cell in use.cells}
    if covered != set(range(grid_size)):
        return None
    return chosen


def _assign(combination: Sequence[CandidatePair], depth: int,
            claimed: frozenset) -> Optional[Tuple[Use, ...]]:
    if depth == len(combination):
        return ()

    for use in combination[depth].uses:
        if not use.fits(claimed):
            continue
        rest = _assign(combination, depth + 1, claimed | {use.add, use.mult})
        if rest is not None:
            return (use,) + rest

    return None
