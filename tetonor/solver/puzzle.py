"""
Puzzle Module - Immutable grid and strip representation for Tetonor puzzles.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

# Fixed puzzle dimensions
GRID_SIZE = 16
PAIR_COUNT = 8


class PuzzleError(ValueError):
    """Raised when a grid or strip is malformed."""


@dataclass(frozen=True)
class PuzzleSolution:
    """
    Known answer attached by the generator.

    Attributes:
        strip: Full sorted strip (16 integers)
        pairs: The 8 pairs as (lo, hi) tuples
    """
    strip: Tuple[int, ...]
    pairs: Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class TetonorPuzzle:
    """
    Immutable puzzle instance.

    Uses tuples for hashability and immutability. Hidden strip slots
    are None.

    Attributes:
        grid: 16 positive integers, each a sum or product of a hidden pair
        strip: 16 slots of the sorted hidden numbers, None where hidden
        solution: Known answer when the puzzle came from the generator
    """
    grid: Tuple[int, ...]
    strip: Tuple[Optional[int], ...]
    solution: Optional[PuzzleSolution] = None

    @classmethod
    def from_lists(cls, grid: Sequence[int], strip: Sequence[Optional[int]],
                   solution: Optional[PuzzleSolution] = None) -> 'TetonorPuzzle':
        """
        Create a puzzle from plain sequences, validating both.

        Args:
            grid: 16 grid numbers
            strip: 16 strip slots (int or None)
            solution: Optional known answer

        Returns:
            TetonorPuzzle instance

        Raises:
            PuzzleError: If grid or strip is malformed
        """
        validate_grid(grid)
        validate_strip(strip)
        return cls(grid=tuple(grid), strip=tuple(strip), solution=solution)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TetonorPuzzle':
        """
        Create a puzzle from a JSON-style dict.

        Expected keys: "grid", "strip" and optionally "solution" with
        "strip" and "pairs".
        """
        if "grid" not in data or "strip" not in data:
            raise PuzzleError("Puzzle data needs 'grid' and 'strip'")

        solution = None
        raw_solution = data.get("solution")
        if raw_solution:
            solution = PuzzleSolution(
                strip=tuple(raw_solution["strip"]),
                pairs=tuple(tuple(p) for p in raw_solution["pairs"]),
            )
        return cls.from_lists(data["grid"], data["strip"], solution)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dict."""
        data: Dict[str, Any] = {
            "grid": list(self.grid),
            "strip": list(self.strip),
        }
        if self.solution is not None:
            data["solution"] = {
                "strip": list(self.solution.strip),
                "pairs": [list(p) for p in self.solution.pairs],
            }
        return data

    @property
    def known_positions(self) -> List[int]:
        """Strip indices that are revealed."""
        return [i for i, v in enumerate(self.strip) if v is not None]

    @property
    def hidden_positions(self) -> List[int]:
        """Strip indices that are hidden."""
        return [i for i, v in enumerate(self.strip) if v is None]

    @property
    def known_values(self) -> List[int]:
        return [v for v in self.strip if v is not None]

    def strip_matches(self, built_strip: Sequence[int]) -> bool:
        """
        Compare a full sorted strip against the revealed slots.

        Args:
            built_strip: 16 numbers sorted ascending

        Returns:
            True if every known slot agrees positionally
        """
        if len(built_strip) != len(self.strip):
            return False
        for known, built in zip(self.strip, built_strip):
            if known is not None and known != built:
                return False
        return True

    def admits(self, numbers: Sequence[int]) -> bool:
        """
        Check whether a partial set of numbers can still sort into the strip.

        A revealed value v at position p leaves room for at most p smaller
        numbers and len(strip) - 1 - p larger ones.

        Args:
            numbers: Numbers chosen so far (any order, up to 16)

        Returns:
            False if no completion can match the revealed slots
        """
        last = len(self.strip) - 1
        for position, known in enumerate(self.strip):
            if known is None:
                continue
            below = sum(1 for n in numbers if n < known)
            above = sum(1 for n in numbers if n > known)
            if below > position or above > last - position:
                return False
        return True


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid puzzle number
    return isinstance(value, int) and not isinstance(value, bool)


def validate_grid(grid: Sequence[Any]) -> None:
    """
    Check grid shape and contents.

    Raises:
        PuzzleError: If not 16 positive integers
    """
    if grid is None or len(grid) != GRID_SIZE:
        size = "None" if grid is None else len(grid)
        raise PuzzleError(f"Grid must have {GRID_SIZE} cells, got {size}")
    for index, value in enumerate(grid):
        if not _is_int(value):
            raise PuzzleError(f"Grid cell {index} is not an integer: {value!r}")
        if value <= 0:
            raise PuzzleError(f"Grid cell {index} must be positive, got {value}")


def validate_strip(strip: Sequence[Any]) -> None:
    """
    Check strip shape and contents.

    Raises:
        PuzzleError: If not 16 slots of non-negative integers or None
    """
    if strip is None or len(strip) != GRID_SIZE:
        size = "None" if strip is None else len(strip)
        raise PuzzleError(f"Strip must have {GRID_SIZE} slots, got {size}")
    for index, value in enumerate(strip):
        if value is None:
            continue
        if not _is_int(value):
            raise PuzzleError(f"Strip slot {index} is not an integer: {value!r}")
        if value < 0:
            raise PuzzleError(f"Strip slot {index} must be non-negative, got {value}")


# Reference puzzle used by the CLI when no input is given
SAMPLE_GRID = (
    252, 260, 13, 30,
    25, 144, 36, 30,
    48, 21, 40, 30,
    224, 56, 46, 22,
)

SAMPLE_STRIP = (
    1, None, None, 5, 6, None, None, 10,
    None, None, 21, 23, 24, None, 28, None,
)

SAMPLE_SOLUTION = PuzzleSolution(
    strip=(1, 2, 2, 5, 6, 6, 8, 10, 14, 16, 21, 23, 24, 26, 28, 42),
    pairs=((6, 42), (10, 26), (5, 8), (6, 24), (2, 23), (14, 16), (1, 21), (2, 28)),
)


def sample_puzzle() -> TetonorPuzzle:
    """Return the built-in sample puzzle with its known answer."""
    return TetonorPuzzle.from_lists(SAMPLE_GRID, SAMPLE_STRIP, SAMPLE_SOLUTION)
