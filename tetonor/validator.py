"""
Input Validator Module for Tetonor

Checks a player's filled-in strip and grid equations against a puzzle
with a known answer, and against the pairing rules: every pair used for
addition must also be used for multiplication, and the numbers of the 8
matched pairs must be exactly the numbers in the strip.

This is independent of the solver; it never searches.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from tetonor.solver import PAIR_COUNT, Solution, TetonorPuzzle
from tetonor.solver.solution import Operator

logger = logging.getLogger(__name__)

# Error lines shown by format_error_message
MAX_DISPLAYED_ERRORS = 6

_OPERATOR_SYMBOLS = {
    "+": Operator.ADD,
    "*": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "X": Operator.MULTIPLY,
    "×": Operator.MULTIPLY,
}


@dataclass(frozen=True)
class GridInput:
    """
    One grid cell as entered by the player.

    Attributes:
        num1: First operand, None if left empty
        op: Operator symbol ("+", "*", "x", "×"), None if left empty
        num2: Second operand, None if left empty
    """
    num1: Optional[int]
    op: Optional[str]
    num2: Optional[int]

    @property
    def operator(self) -> Optional[Operator]:
        if self.op is None:
            return None
        return _OPERATOR_SYMBOLS.get(self.op)

    @property
    def is_complete(self) -> bool:
        return self.num1 is not None and self.num2 is not None and self.operator is not None


@dataclass(frozen=True)
class CellFeedback:
    """Per-slot or per-cell correctness marker."""
    index: int
    correct: bool


@dataclass
class ValidationResult:
    """
    Outcome of validating player input.

    Attributes:
        success: True only if every check passed
        errors: Human-readable problems, in discovery order
        strip_feedback: One entry per hidden strip slot
        grid_feedback: One entry per grid cell
    """
    success: bool = True
    errors: List[str] = field(default_factory=list)
    strip_feedback: List[CellFeedback] = field(default_factory=list)
    grid_feedback: List[CellFeedback] = field(default_factory=list)

    def fail(self, message: Optional[str] = None) -> None:
        self.success = False
        if message:
            self.errors.append(message)


def validate(puzzle: TetonorPuzzle, strip_inputs: Mapping[int, Optional[int]],
             grid_inputs: Sequence[Optional[GridInput]]) -> ValidationResult:
    """
    Validate a player's answers.

    Args:
        puzzle: Puzzle with a known solution attached
        strip_inputs: Hidden strip index -> entered number
        grid_inputs: One GridInput (or None) per grid cell

    Returns:
        ValidationResult with errors and per-cell feedback

    Raises:
        ValueError: If the puzzle has no known solution
    """
    if puzzle.solution is None:
        raise ValueError("Validation needs a puzzle with a known solution")

    result = ValidationResult()

    strip_counts = _check_strip(puzzle, strip_inputs, result)
    add_pairs, mult_pairs = _check_grid(puzzle, grid_inputs, result)
    matched = _match_pairs(add_pairs, mult_pairs, result)

    if len(matched) != PAIR_COUNT:
        result.fail()
        if len(matched) < PAIR_COUNT:
            result.errors.append(f"Only {len(matched)} complete pairs found (need {PAIR_COUNT})")
    else:
        _check_counts(matched, strip_counts, result)

    all_cells_right = all(f.correct for f in result.grid_feedback)
    all_slots_right = all(f.correct for f in result.strip_feedback)
    if not result.success and all_cells_right and all_slots_right:
        result.errors.append(
            "Rules violation: Each pair from the strip must be used exactly once "
            "for addition and once for multiplication."
        )

    logger.debug(f"Validation {'passed' if result.success else 'failed'} "
                 f"with {len(result.errors)} errors")
    return result


def _check_strip(puzzle: TetonorPuzzle, strip_inputs: Mapping[int, Optional[int]],
                 result: ValidationResult) -> Counter:
    """Compare hidden slots to the answer and count the resulting strip."""
    counts: Counter = Counter()
    for index, value in enumerate(puzzle.strip):
        final_value = value
        if value is None:
            final_value = strip_inputs.get(index)
            correct = final_value == puzzle.solution.strip[index]
            result.strip_feedback.append(CellFeedback(index=index, correct=correct))
            if not correct:
                result.fail()

        if final_value is not None:
            counts[final_value] += 1
    return counts


def _check_grid(puzzle: TetonorPuzzle, grid_inputs: Sequence[Optional[GridInput]],
                result: ValidationResult) -> Tuple[List[Tuple[int, int]], List[Tuple[int, int]]]:
    """Check each equation and collect the add and multiply pairs."""
    add_pairs: List[Tuple[int, int]] = []
    mult_pairs: List[Tuple[int, int]] = []

    for index, grid_value in enumerate(puzzle.grid):
        entry = grid_inputs[index] if index < len(grid_inputs) else None
        correct = False

        if entry is not None and entry.is_complete:
            computed = entry.operator.apply(entry.num1, entry.num2)
            if computed == grid_value:
                correct = True
                pair = tuple(sorted((entry.num1, entry.num2)))
                if entry.operator is Operator.ADD:
                    add_pairs.append(pair)
                else:
                    mult_pairs.append(pair)
            else:
                result.errors.append(
                    f"Cell {index + 1}: Math is incorrect "
                    f"({entry.num1} {entry.op} {entry.num2} ≠ {grid_value})"
                )
        else:
            result.errors.append(f"Cell {index + 1}: Missing or invalid inputs")

        result.grid_feedback.append(CellFeedback(index=index, correct=correct))

    return add_pairs, mult_pairs


def _match_pairs(add_pairs: List[Tuple[int, int]], mult_pairs: List[Tuple[int, int]],
                 result: ValidationResult) -> List[Tuple[int, int]]:
    """Match each add pair with a distinct multiply pair."""
    remaining = list(mult_pairs)
    matched = []

    for pair in add_pairs:
        if pair in remaining:
            remaining.remove(pair)
            matched.append(pair)
        else:
            result.fail(f"Pair [{pair[0]},{pair[1]}] used for addition but not for multiplication")

    for pair in remaining:
        result.fail(f"Pair [{pair[0]},{pair[1]}] used for multiplication but not for addition")

    return matched


def _check_counts(matched: List[Tuple[int, int]], strip_counts: Counter,
                  result: ValidationResult) -> None:
    """Number counts of the matched pairs must equal the strip's counts."""
    used_counts: Counter = Counter()
    for pair in matched:
        used_counts.update(pair)

    for number, count in strip_counts.items():
        used = used_counts.get(number, 0)
        if used != count:
            result.fail(f"Number {number} appears {count} times in strip but is used in {used} pairs")

    for number in used_counts:
        if number not in strip_counts:
            result.fail(f"Number {number} is used in a pair but is not in the strip")


def inputs_from_solution(puzzle: TetonorPuzzle,
                         solution: Solution) -> Tuple[Dict[int, int], List[GridInput]]:
    """
    Turn a solver result into player-style inputs.

    Useful for checking a solver answer with the same rules a player
    is held to.

    Returns:
        (strip_inputs, grid_inputs)
    """
    strip_inputs = {i: solution.built_strip[i] for i in puzzle.hidden_positions}
    grid_inputs = [
        GridInput(eq.operand1, "+" if eq.operator is Operator.ADD else "*", eq.operand2)
        for _, eq in sorted(solution.assignment.items())
    ]
    return strip_inputs, grid_inputs


def format_error_message(result: ValidationResult) -> str:
    """
    Format a validation result for display.

    Args:
        result: Result of validate()

    Returns:
        Multi-line summary with up to MAX_DISPLAYED_ERRORS unique errors
    """
    if result.success:
        return ("Perfect! All answers correct!\n"
                "All pairs used exactly once for + and once for x!")

    message = "Some answers are incorrect or violate rules."

    unique_errors = list(dict.fromkeys(result.errors))
    if unique_errors:
        message += "\n\nErrors/Hints:\n- " + "\n- ".join(unique_errors[:MAX_DISPLAYED_ERRORS])
        if len(unique_errors) > MAX_DISPLAYED_ERRORS:
            message += f"\n... and {len(unique_errors) - MAX_DISPLAYED_ERRORS} more"

    return message
