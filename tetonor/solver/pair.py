"""
Pair Module - Integer pairs and the grid cells they can explain.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True, order=True)
class Pair:
    """
    Two positive integers whose sum and product both appear in the grid.

    Pairs are unordered and stored ascending. Equal members are allowed
    (the self-pair case, e.g. (6, 6) for 12 and 36).

    Attributes:
        lo: Smaller member
        hi: Larger member (or equal to lo)
    """
    lo: int
    hi: int

    def __post_init__(self):
        if self.lo < 1 or self.hi < 1:
            raise ValueError(f"Pair members must be positive: ({self.lo}, {self.hi})")
        if self.lo > self.hi:
            raise ValueError(f"Pair must be ascending: ({self.lo}, {self.hi})")

    @classmethod
    def of(cls, a: int, b: int) -> 'Pair':
        """Create a canonical pair from two members in any order."""
        return cls(lo=min(a, b), hi=max(a, b))

    @property
    def sum(self) -> int:
        return self.lo + self.hi

    @property
    def product(self) -> int:
        return self.lo * self.hi

    @property
    def numbers(self) -> Tuple[int, int]:
        return (self.lo, self.hi)

    def __str__(self):
        return f"({self.lo},{self.hi})"


@dataclass(frozen=True)
class Use:
    """
    Binding of a pair to two grid cells.

    Attributes:
        add: Cell index holding the pair's sum
        mult: Cell index holding the pair's product
    """
    add: int
    mult: int

    def __post_init__(self):
        if self.add == self.mult:
            raise ValueError(f"Use cannot explain cell {self.add} twice")

    @property
    def cells(self) -> Tuple[int, int]:
        return (self.add, self.mult)

    def fits(self, claimed: frozenset) -> bool:
        """True if neither cell is in the claimed set."""
        return self.add not in claimed and self.mult not in claimed


@dataclass(frozen=True)
class CandidatePair:
    """
    A pair plus every grid binding found for it.

    Attributes:
        pair: The integer pair
        uses: Uses in discovery order
    """
    pair: Pair
    uses: Tuple[Use, ...]

    @classmethod
    def create(cls, pair: Pair, uses: List[Use]) -> 'CandidatePair':
        return cls(pair=pair, uses=tuple(uses))

    def available_uses(self, claimed: frozenset) -> List[Use]:
        """
        Uses whose cells are both unclaimed.

        Args:
            claimed: Cell indices already taken in the current branch

        Returns:
            Fitting uses, in discovery order
        """
        return [use for use in self.uses if use.fits(claimed)]

    def forced_cells(self, claimed: frozenset) -> frozenset:
        """
        Cells this pair occupies under every use still available.

        Only these cells can be claimed safely during descent; any other
        choice would depend on which use the final assignment picks.
        """
        available = self.available_uses(claimed)
        if not available:
            return frozenset()
        common = set(available[0].cells)
        for use in available[1:]:
            common &= set(use.cells)
        return frozenset(common)

    def __str__(self):
        bindings = ", ".join(f"+{u.add}/x{u.mult}" for u in self.uses)
        return f"{self.pair} [{bindings}]"
