"""
Puzzle Generator Module for Tetonor

Builds puzzles from random pairs: the grid holds each pair's sum and
product in shuffled order, the strip holds the sorted numbers with part
of them hidden. Seeded generation is reproducible.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from tetonor.solver import Pair, PuzzleSolution, TetonorPuzzle
from tetonor.solver.numeric import build_strip
from tetonor.solver.solution import Operator

logger = logging.getLogger(__name__)

# Random draws before giving up on distinct pairs
MAX_PAIR_DRAWS = 1000


@dataclass(frozen=True)
class DifficultyConfig:
    """Number range and reveal ratio for one difficulty level."""
    min_number: int
    max_number: int
    pair_count: int
    revealed_percentage: float


DIFFICULTIES: Dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig(min_number=2, max_number=15, pair_count=8, revealed_percentage=0.6),
    "medium": DifficultyConfig(min_number=1, max_number=30, pair_count=8, revealed_percentage=0.5),
    "hard": DifficultyConfig(min_number=1, max_number=50, pair_count=8, revealed_percentage=0.4),
}

DEFAULT_DIFFICULTY = "medium"


def get_difficulty_config(difficulty: str) -> DifficultyConfig:
    """Get config for a difficulty name, falling back to medium."""
    if difficulty not in DIFFICULTIES:
        logger.warning(f"Unknown difficulty '{difficulty}', using {DEFAULT_DIFFICULTY}")
    return DIFFICULTIES.get(difficulty, DIFFICULTIES[DEFAULT_DIFFICULTY])


def generate(seed: Optional[int] = None, difficulty: str = DEFAULT_DIFFICULTY) -> TetonorPuzzle:
    """
    Generate a Tetonor puzzle with its answer attached.

    Args:
        seed: Seed for reproducible puzzles (None = nondeterministic)
        difficulty: "easy", "medium" or "hard"

    Returns:
        TetonorPuzzle whose solution field holds the full strip and pairs
    """
    puzzle = build_puzzle(get_difficulty_config(difficulty), random.Random(seed))
    logger.debug(f"Generated {difficulty} puzzle (seed={seed}): grid={list(puzzle.grid)}")
    return puzzle


def build_puzzle(config: DifficultyConfig, rng: random.Random) -> TetonorPuzzle:
    """
    Build one puzzle from a difficulty config and a random source.

    Raises:
        PuzzleError: If the config's range cannot supply enough distinct pairs
    """
    pairs = generate_pairs(config, rng)
    strip = build_strip(pairs)
    grid = generate_grid(pairs, rng)
    puzzle_strip = hide_strip_values(strip, config, rng)

    solution = PuzzleSolution(strip=strip, pairs=tuple(p.numbers for p in pairs))
    return TetonorPuzzle.from_lists(grid, puzzle_strip, solution)


def generate_pairs(config: DifficultyConfig, rng: random.Random) -> List[Pair]:
    """
    Draw distinct pairs of distinct numbers within the configured range.

    Args:
        config: Difficulty settings
        rng: Random source

    Returns:
        Up to config.pair_count pairs
    """
    pairs: List[Pair] = []
    seen = set()
    draws = 0

    while len(pairs) < config.pair_count and draws < MAX_PAIR_DRAWS:
        draws += 1
        a = rng.randint(config.min_number, config.max_number)
        b = rng.randint(config.min_number, config.max_number)
        if a == b:
            continue

        pair = Pair.of(a, b)
        if pair in seen:
            continue

        seen.add(pair)
        pairs.append(pair)

    if len(pairs) < config.pair_count:
        logger.warning(f"Could only generate {len(pairs)} of {config.pair_count} unique pairs")

    return pairs


def generate_grid(pairs: List[Pair], rng: random.Random) -> List[int]:
    """Shuffle every pair's product and sum into the grid."""
    items: List[Tuple[int, Operator, Pair]] = []
    for pair in pairs:
        items.append((pair.product, Operator.MULTIPLY, pair))
        items.append((pair.sum, Operator.ADD, pair))

    rng.shuffle(items)
    return [value for value, _, _ in items]


def hide_strip_values(strip: Tuple[int, ...], config: DifficultyConfig,
                      rng: random.Random) -> Tuple[Optional[int], ...]:
    """
    Hide all but floor(len * revealed_percentage) strip slots.

    Args:
        strip: Full sorted strip
        config: Difficulty settings
        rng: Random source

    Returns:
        Strip with hidden slots set to None
    """
    reveal_count = int(len(strip) * config.revealed_percentage)
    positions = list(range(len(strip)))
    rng.shuffle(positions)

    hidden = set(positions[reveal_count:])
    return tuple(None if i in hidden else value for i, value in enumerate(strip))
