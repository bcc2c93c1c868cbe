"""Per-cell digit sets and per-cage candidate lists, kept in sync.

All mutation goes through :meth:`ConstraintStore.exclude`, which removes a
digit from a cell and then drops the cage candidates that relied on it. The
sibling cells of the cage are recomputed from the surviving candidates, so
the invariant below holds after every call:

    for every cell, its digit set is exactly the set of values that appear
    at the cell's position across the surviving candidates of its cage.
"""

from __future__ import annotations

from typing import List, Sequence

from ..core.digits import DigitSeq, DigitSet
from ..core.models import Puzzle
from ..utils.logger import get_logger
from .candidates import generate_cage_candidates

LOGGER = get_logger(__name__)


def digits_at(candidates: Sequence[DigitSeq], position: int) -> DigitSet:
    """Set of values appearing at ``position`` across ``candidates``."""

    bits = 0
    for seq in candidates:
        bits |= 1 << seq.get(position)
    return DigitSet(bits)


class ConstraintStore:
    """Owns the candidate state of one solve invocation."""

    def __init__(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        self.size = puzzle.size
        self._cells: List[List[DigitSet]] = [
            [DigitSet.full(self.size) for _ in range(self.size)] for _ in range(self.size)
        ]
        self._cage_candidates: List[List[DigitSeq]] = [[] for _ in puzzle.cages]

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    def determine_initial(self) -> None:
        """Generate every cage's candidates and derive the cell digit sets."""

        for cage_idx, cage in enumerate(self.puzzle.cages):
            candidates = generate_cage_candidates(cage, self.size)
            self._cage_candidates[cage_idx] = candidates
            for position, (row, col) in enumerate(cage.cells):
                self._cells[row][col] = digits_at(candidates, position)
            if not candidates:
                LOGGER.debug("Cage %d (%s) has no candidates", cage_idx, cage.operation)
        LOGGER.debug(
            "Seeded %d cages with %d candidate sequences",
            len(self._cage_candidates),
            self.candidate_total(),
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def exclude(self, row: int, col: int, digit: int) -> bool:
        """Remove ``digit`` from cell ``(row, col)``; return True if it was there."""

        if not self._cells[row][col].remove(digit):
            return False
        cage_idx, position = self.puzzle.cell_to_cage[(row, col)]
        survivors = [
            seq for seq in self._cage_candidates[cage_idx] if seq.get(position) != digit
        ]
        self._cage_candidates[cage_idx] = survivors
        for other, (r, c) in enumerate(self.puzzle.cages[cage_idx].cells):
            if other != position:
                self._cells[r][c] = digits_at(survivors, other)
        return True

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> DigitSet:
        """A copy of the digit set of cell ``(row, col)``."""
        return self._cells[row][col].copy()

    def count(self, row: int, col: int) -> int:
        return self._cells[row][col].count()

    def candidates_for_cage(self, cage_idx: int) -> Sequence[DigitSeq]:
        return tuple(self._cage_candidates[cage_idx])

    def candidate_total(self) -> int:
        return sum(len(candidates) for candidates in self._cage_candidates)

    def is_solved(self) -> bool:
        return all(cell.count() == 1 for line in self._cells for cell in line)

    def has_contradiction(self) -> bool:
        return any(not candidates for candidates in self._cage_candidates)

    def snapshot(self) -> List[List[DigitSet]]:
        return [[cell.copy() for cell in line] for line in self._cells]
