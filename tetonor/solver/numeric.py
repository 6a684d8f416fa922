"""
Numeric helpers shared by the extractor, search and CLI.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .pair import Pair


def divisor_pairs(n: int) -> List[Tuple[int, int]]:
    """
    Find all factorisations n = a * b with 1 <= a <= b.

    Trial division up to sqrt(n). Returns an empty list for n <= 0.

    Args:
        n: Number to factor

    Returns:
        (a, b) tuples in ascending order of a
    """
    if n <= 0:
        return []
    pairs = []
    for a in range(1, math.isqrt(n) + 1):
        if n % a == 0:
            pairs.append((a, n // a))
    return pairs


def addition_pairs(n: int, max_value: int = 100) -> List[Tuple[int, int]]:
    """
    Find all splits n = a + b with 1 <= a <= b <= max_value.

    Args:
        n: Target sum
        max_value: Upper bound for either member

    Returns:
        (a, b) tuples in ascending order of a
    """
    pairs = []
    for a in range(1, n // 2 + 1):
        b = n - a
        if b <= max_value:
            pairs.append((a, b))
    return pairs


def build_strip(pairs: Iterable[Pair]) -> Tuple[int, ...]:
    """Flatten pairs into their numbers sorted ascending."""
    numbers = []
    for pair in pairs:
        numbers.extend(pair.numbers)
    return tuple(sorted(numbers))


@dataclass(frozen=True)
class CellOptions:
    """
    Every way a single grid number could be formed.

    Attributes:
        index: Grid index
        value: Grid number
        multiplication: Divisor pairs of value
        addition: Splits of value into two positive integers
    """
    index: int
    value: int
    multiplication: Tuple[Tuple[int, int], ...]
    addition: Tuple[Tuple[int, int], ...]


def grid_options(grid: Sequence[int], max_value: int = 100) -> List[CellOptions]:
    """
    List multiplication and addition options for each grid cell.

    Used for the --explain listing; the solver itself only needs
    divisor_pairs.
    """
    return [
        CellOptions(
            index=index,
            value=value,
            multiplication=tuple(divisor_pairs(value)),
            addition=tuple(addition_pairs(value, max_value)),
        )
        for index, value in enumerate(grid)
    ]
