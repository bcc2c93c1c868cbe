"""Deterministic rule validation for solved grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..core.exceptions import ValidationError
from ..core.models import Puzzle
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class SolutionValidator:
    """Checks a complete grid against the Latin-square and cage rules."""

    def validate(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> ValidationResult:
        try:
            self._run_checks(puzzle, grid)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def is_valid(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> bool:
        """Quiet variant of :meth:`validate` for bulk checks."""
        try:
            self._run_checks(puzzle, grid)
        except ValidationError:
            return False
        return True

    def _run_checks(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> None:
        self._check_shape(puzzle, grid)
        self._check_digits(puzzle, grid)
        self._check_rows(puzzle, grid)
        self._check_cols(puzzle, grid)
        self._check_cages(puzzle, grid)

    def _check_shape(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> None:
        if len(grid) != puzzle.size or any(len(line) != puzzle.size for line in grid):
            raise ValidationError(f"Grid is not {puzzle.size}x{puzzle.size}")

    def _check_digits(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> None:
        for r, line in enumerate(grid):
            for c, digit in enumerate(line):
                if not 1 <= digit <= puzzle.size:
                    raise ValidationError(f"Invalid digit {digit} at ({r},{c})")

    def _check_rows(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> None:
        expected = set(range(1, puzzle.size + 1))
        for r, line in enumerate(grid):
            if set(line) != expected:
                raise ValidationError(f"Row {r} is not a permutation: {list(line)}")

    def _check_cols(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> None:
        expected = set(range(1, puzzle.size + 1))
        for c in range(puzzle.size):
            column = [grid[r][c] for r in range(puzzle.size)]
            if set(column) != expected:
                raise ValidationError(f"Column {c} is not a permutation: {column}")

    def _check_cages(self, puzzle: Puzzle, grid: Sequence[Sequence[int]]) -> None:
        for idx, cage in enumerate(puzzle.cages):
            values = [grid[r][c] for r, c in cage.cells]
            if not cage.operation.check(values):
                raise ValidationError(
                    f"Cage {idx} ({cage.operation}) not satisfied by {values}"
                )
