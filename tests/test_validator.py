"""
Tests for the player-input validator.

Usage:
    pytest tests/test_validator.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tetonor.solver import TetonorPuzzle, sample_puzzle, solve_puzzle
from tetonor.solver.puzzle import SAMPLE_GRID, SAMPLE_STRIP
from tetonor.validator import (
    CellFeedback,
    GridInput,
    ValidationResult,
    format_error_message,
    inputs_from_solution,
    validate,
)

# Correct answer to the sample puzzle, cell by cell
CORRECT_GRID = [
    GridInput(6, "*", 42),
    GridInput(10, "x", 26),
    GridInput(5, "+", 8),
    GridInput(6, "+", 24),
    GridInput(2, "+", 23),
    GridInput(6, "×", 24),
    GridInput(10, "+", 26),
    GridInput(14, "+", 16),
    GridInput(6, "+", 42),
    GridInput(1, "*", 21),
    GridInput(5, "*", 8),
    GridInput(2, "+", 28),
    GridInput(14, "*", 16),
    GridInput(2, "*", 28),
    GridInput(2, "*", 23),
    GridInput(1, "+", 21),
]

CORRECT_STRIP = {1: 2, 2: 2, 5: 6, 6: 8, 8: 14, 9: 16, 13: 26, 15: 42}


def test_correct_answer_passes():
    """The known answer validates cleanly."""
    result = validate(sample_puzzle(), CORRECT_STRIP, CORRECT_GRID)

    assert result.success
    assert result.errors == []
    assert all(f.correct for f in result.grid_feedback)
    assert [f.index for f in result.strip_feedback] == sorted(CORRECT_STRIP)
    assert format_error_message(result).startswith("Perfect!")


def test_solver_answer_passes():
    """A solver result, entered as player input, passes the same rules."""
    puzzle = sample_puzzle()
    solution = solve_puzzle(puzzle)
    strip_inputs, grid_inputs = inputs_from_solution(puzzle, solution)

    assert strip_inputs == CORRECT_STRIP
    assert validate(puzzle, strip_inputs, grid_inputs).success


def test_wrong_math_is_reported():
    """A cell whose equation misses its value is flagged and unpaired."""
    grid = list(CORRECT_GRID)
    grid[0] = GridInput(6, "*", 41)

    result = validate(sample_puzzle(), CORRECT_STRIP, grid)

    assert not result.success
    assert result.grid_feedback[0] == CellFeedback(index=0, correct=False)
    assert "Cell 1: Math is incorrect (6 * 41 ≠ 252)" in result.errors
    assert "Pair [6,42] used for addition but not for multiplication" in result.errors
    assert "Only 7 complete pairs found (need 8)" in result.errors


def test_missing_input_is_reported():
    """Empty or incomplete cells are errors."""
    grid = list(CORRECT_GRID)
    grid[3] = None
    grid[4] = GridInput(2, None, 23)

    result = validate(sample_puzzle(), CORRECT_STRIP, grid)

    assert not result.success
    assert "Cell 4: Missing or invalid inputs" in result.errors
    assert "Cell 5: Missing or invalid inputs" in result.errors


def test_wrong_strip_value_is_reported():
    """A wrong hidden slot fails its feedback and the number counts."""
    strip = dict(CORRECT_STRIP)
    strip[1] = 3

    result = validate(sample_puzzle(), strip, CORRECT_GRID)

    assert not result.success
    assert CellFeedback(index=1, correct=False) in result.strip_feedback
    assert "Number 3 appears 1 times in strip but is used in 0 pairs" in result.errors
    assert "Number 2 appears 1 times in strip but is used in 2 pairs" in result.errors


def test_correct_cells_with_broken_pairing():
    """Right arithmetic everywhere but unmatched pairs is a rules violation."""
    grid = list(CORRECT_GRID)
    grid[2] = GridInput(2, "+", 11)  # still 13, but (2,11) is never multiplied

    result = validate(sample_puzzle(), CORRECT_STRIP, grid)

    assert not result.success
    assert all(f.correct for f in result.grid_feedback)
    assert "Pair [2,11] used for addition but not for multiplication" in result.errors
    assert "Pair [5,8] used for multiplication but not for addition" in result.errors
    assert result.errors[-1].startswith("Rules violation")


def test_puzzle_without_answer_rejected():
    """Validation needs the known answer."""
    puzzle = TetonorPuzzle.from_lists(SAMPLE_GRID, SAMPLE_STRIP)
    with pytest.raises(ValueError):
        validate(puzzle, CORRECT_STRIP, CORRECT_GRID)


def test_error_message_is_truncated():
    """Only the first six unique errors are shown."""
    result = ValidationResult(success=False, errors=[f"error {i}" for i in range(8)] + ["error 0"])
    message = format_error_message(result)

    assert "error 5" in message
    assert "error 6" not in message
    assert message.endswith("... and 2 more")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
