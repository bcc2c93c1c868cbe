"""Backtracking search over the pruned cage candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.digits import DigitSeq, DigitSet
from ..core.models import Puzzle
from ..utils.logger import get_logger
from .constraints import ConstraintStore

LOGGER = get_logger(__name__)

Grid = List[List[int]]


class RowColMask:
    """Digits still unused in every row and column of a partial assignment."""

    def __init__(self, size: int) -> None:
        self.rows: List[DigitSet] = [DigitSet.full(size) for _ in range(size)]
        self.cols: List[DigitSet] = [DigitSet.full(size) for _ in range(size)]

    def ok(self, row: int, col: int, digit: int) -> bool:
        return self.rows[row].contains(digit) and self.cols[col].contains(digit)

    def take(self, row: int, col: int, digit: int) -> None:
        self.rows[row].remove(digit)
        self.cols[col].remove(digit)

    def release(self, row: int, col: int, digit: int) -> None:
        self.rows[row].insert(digit)
        self.cols[col].insert(digit)


@dataclass
class SearchOutcome:
    solutions: List[Grid] = field(default_factory=list)
    steps: int = 0


class BacktrackingSearch:
    """Assigns cages in order, trying each surviving candidate sequence.

    ``solution_limit`` of ``None`` keeps searching until every combination
    has been tried.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        store: ConstraintStore,
        solution_limit: Optional[int] = None,
    ) -> None:
        self.puzzle = puzzle
        self.solution_limit = solution_limit
        self._cells = [cage.cells for cage in puzzle.cages]
        self._candidates: List[Sequence[DigitSeq]] = [
            store.candidates_for_cage(idx) for idx in range(len(puzzle.cages))
        ]
        self._work: Grid = []
        self._mask = RowColMask(puzzle.size)
        self._outcome = SearchOutcome()

    def run(self) -> SearchOutcome:
        size = self.puzzle.size
        self._work = [[0] * size for _ in range(size)]
        self._mask = RowColMask(size)
        self._outcome = SearchOutcome()
        if self._cells:
            self._place(0)
        LOGGER.debug(
            "Search finished: %d solution(s) in %d steps",
            len(self._outcome.solutions),
            self._outcome.steps,
        )
        return self._outcome

    def _limit_reached(self) -> bool:
        return (
            self.solution_limit is not None
            and len(self._outcome.solutions) >= self.solution_limit
        )

    def _place(self, cage_idx: int) -> None:
        self._outcome.steps += 1
        cells = self._cells[cage_idx]
        last = cage_idx == len(self._cells) - 1
        work = self._work
        mask = self._mask

        for candidate in self._candidates[cage_idx]:
            if not all(
                mask.ok(*cells[position], digit) for position, digit in candidate.items()
            ):
                continue
            for position, digit in candidate.items():
                row, col = cells[position]
                work[row][col] = digit
                mask.take(row, col, digit)
            try:
                if last:
                    self._outcome.solutions.append([line[:] for line in work])
                else:
                    self._place(cage_idx + 1)
            finally:
                for position, digit in candidate.items():
                    row, col = cells[position]
                    mask.release(row, col, digit)
            if self._limit_reached():
                break

        for row, col in cells:
            work[row][col] = 0


def search(
    puzzle: Puzzle,
    store: ConstraintStore,
    solution_limit: Optional[int] = None,
) -> SearchOutcome:
    """Collect the complete grids reachable from the store's candidates."""

    return BacktrackingSearch(puzzle, store, solution_limit=solution_limit).run()
