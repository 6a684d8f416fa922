"""
Tests for the puzzle generator, and for solving what it generates.

Usage:
    pytest tests/test_generator.py
"""

import random
import sys
from collections import Counter
from dataclasses import replace
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tetonor.generator import (
    DIFFICULTIES,
    DifficultyConfig,
    build_puzzle,
    generate,
    generate_pairs,
    get_difficulty_config,
    hide_strip_values,
)
from tetonor.solver import (
    Pair,
    PuzzleError,
    PuzzleSolution,
    TetonorPuzzle,
    extract_candidates,
    solve_puzzle,
)
from tetonor.validator import inputs_from_solution, validate


def test_seeded_generation_is_reproducible():
    """The same seed gives the same puzzle."""
    assert generate(seed=42) == generate(seed=42)
    assert generate(seed=1, difficulty="hard") != generate(seed=2, difficulty="hard")


@pytest.mark.parametrize("difficulty", sorted(DIFFICULTIES))
def test_generated_puzzle_shape(difficulty):
    """Grid and strip follow the configured ranges and reveal ratio."""
    config = DIFFICULTIES[difficulty]
    puzzle = generate(seed=7, difficulty=difficulty)

    assert len(puzzle.grid) == 16
    assert len(puzzle.strip) == 16
    assert len(puzzle.known_positions) == int(16 * config.revealed_percentage)

    solution = puzzle.solution
    assert list(solution.strip) == sorted(solution.strip)
    assert len(set(solution.pairs)) == 8
    for lo, hi in solution.pairs:
        assert config.min_number <= lo < hi <= config.max_number

    for index in puzzle.known_positions:
        assert puzzle.strip[index] == solution.strip[index]

    # Passes the same validation as external input
    TetonorPuzzle.from_lists(puzzle.grid, puzzle.strip)


def test_grid_holds_every_sum_and_product():
    """The grid is exactly the sums and products of the hidden pairs."""
    puzzle = generate(seed=3)
    expected = Counter()
    for lo, hi in puzzle.solution.pairs:
        expected[lo + hi] += 1
        expected[lo * hi] += 1

    assert Counter(puzzle.grid) == expected


def test_hidden_pairs_are_extracted():
    """Every generated pair shows up as a candidate."""
    for seed in range(5):
        puzzle = generate(seed=seed)
        found = {c.pair for c in extract_candidates(puzzle.grid)}
        for lo, hi in puzzle.solution.pairs:
            assert Pair(lo, hi) in found


def test_unknown_difficulty_falls_back_to_medium():
    """Unrecognised names use the medium settings."""
    assert get_difficulty_config("impossible") == DIFFICULTIES["medium"]
    puzzle = generate(seed=5, difficulty="impossible")
    assert len(puzzle.known_positions) == 8


def test_generate_pairs_gives_up_on_tiny_range():
    """A range too small for 8 pairs yields what it can."""
    config = DifficultyConfig(
        min_number=1, max_number=3, pair_count=8, revealed_percentage=0.5
    )
    pairs = generate_pairs(config, random.Random(0))

    assert sorted(pairs) == [Pair(1, 2), Pair(1, 3), Pair(2, 3)]


def test_hide_strip_values_counts():
    """Exactly floor(16 * ratio) slots remain visible."""
    strip = tuple(range(1, 17))
    hidden = hide_strip_values(strip, DIFFICULTIES["hard"], random.Random(9))

    assert sum(v is not None for v in hidden) == 6
    for original, shown in zip(strip, hidden):
        assert shown is None or shown == original


def test_build_puzzle_rejects_short_pair_set():
    """A range too small for 8 pairs cannot make a valid puzzle."""
    config = DifficultyConfig(
        min_number=1, max_number=3, pair_count=8, revealed_percentage=0.5
    )
    with pytest.raises(PuzzleError):
        build_puzzle(config, random.Random(0))


@pytest.mark.parametrize("difficulty", sorted(DIFFICULTIES))
@pytest.mark.parametrize("seed", range(4))
def test_generated_puzzles_are_solved(seed, difficulty):
    """The solver answers every generated puzzle, and the answer obeys the rules."""
    puzzle = generate(seed=seed, difficulty=difficulty)
    result = solve_puzzle(puzzle)

    assert result.found
    for position in puzzle.known_positions:
        assert result.built_strip[position] == puzzle.strip[position]
    assert sorted(result.assignment) == list(range(16))
    for index, equation in result.assignment.items():
        assert equation.value == puzzle.grid[index]

    # Another decomposition is as good as the generated one, so hidden
    # slots are checked against what the solver built.
    answered = replace(puzzle, solution=PuzzleSolution(
        strip=result.built_strip,
        pairs=tuple(p.numbers for p in result.pairs),
    ))
    strip_inputs, grid_inputs = inputs_from_solution(answered, result)
    assert validate(answered, strip_inputs, grid_inputs).success


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
