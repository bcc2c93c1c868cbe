"""Solve orchestration: seed, propagate to a fixpoint, then search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.exceptions import MultipleSolutionsError, NoSolutionError, SolveError
from ..core.models import Puzzle
from ..utils.logger import get_logger
from .constraints import ConstraintStore
from .propagation import reduce_to_fixpoint
from .search import search
from .validator import SolutionValidator

LOGGER = get_logger(__name__)

Grid = List[List[int]]


@dataclass
class SolverConfig:
    naked_pairs: bool = True
    solution_limit: Optional[int] = None
    validate: bool = False
    cross_check: bool = False
    cross_check_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.solution_limit is not None and self.solution_limit < 2:
            raise ValueError("solution_limit must be at least 2 to detect ambiguity")


@dataclass
class SolveResult:
    steps: int
    grid: Grid
    propagation_passes: int = 0


def _propagate(puzzle: Puzzle, config: SolverConfig) -> Tuple[ConstraintStore, int]:
    store = ConstraintStore(puzzle)
    store.determine_initial()
    passes = reduce_to_fixpoint(store, naked_pairs=config.naked_pairs)
    LOGGER.debug(
        "Propagation reached a fixpoint after %d passes (%d candidates, solved=%s)",
        passes,
        store.candidate_total(),
        store.is_solved(),
    )
    return store, passes


def prepare_store(puzzle: Puzzle, config: Optional[SolverConfig] = None) -> ConstraintStore:
    """Seed a constraint store and propagate it to a fixpoint."""

    store, _ = _propagate(puzzle, config or SolverConfig())
    return store


def solve(
    puzzle: Puzzle,
    config: Optional[SolverConfig] = None,
    store: Optional[ConstraintStore] = None,
) -> SolveResult:
    """Return the unique solution of ``puzzle``.

    ``store`` may be a store already returned by :func:`prepare_store`; the
    search then starts from it without propagating again, and the result
    reports zero propagation passes.

    Raises:
        NoSolutionError: no complete grid satisfies the puzzle.
        MultipleSolutionsError: more than one complete grid does.
        SolveError: the CP-SAT cross-check disagrees with the search, or the
            found grid fails validation.
    """

    config = config or SolverConfig()
    LOGGER.info("Solving %dx%d puzzle with %d cages", puzzle.size, puzzle.size, len(puzzle.cages))

    passes = 0
    if store is None:
        store, passes = _propagate(puzzle, config)
    outcome = search(puzzle, store, solution_limit=config.solution_limit)
    if config.cross_check:
        _cross_check(puzzle, outcome.solutions, config)

    if len(outcome.solutions) > 1:
        LOGGER.info("Puzzle is ambiguous (%d solutions found)", len(outcome.solutions))
        raise MultipleSolutionsError(len(outcome.solutions))
    if not outcome.solutions:
        LOGGER.info("Puzzle has no solution (%d steps)", outcome.steps)
        raise NoSolutionError()

    grid = outcome.solutions[0]
    if config.validate or config.cross_check:
        validation = SolutionValidator().validate(puzzle, grid)
        if not validation.ok:
            raise SolveError(f"solution failed validation: {validation.messages[0]}")

    LOGGER.info("Solved in %d steps", outcome.steps)
    return SolveResult(steps=outcome.steps, grid=grid, propagation_passes=passes)


def _cross_check(puzzle: Puzzle, solutions: List[Grid], config: SolverConfig) -> None:
    from .cpsat import cross_check

    reference = cross_check(puzzle, limit=2, timeout=config.cross_check_timeout)
    if reference.status == "UNKNOWN":
        LOGGER.warning("CP-SAT cross-check timed out; skipping comparison")
        return
    ours = min(len(solutions), 2)
    theirs = len(reference.solutions)
    if ours != theirs:
        raise SolveError(
            f"cross-check mismatch: search found {ours} solution(s), CP-SAT found {theirs}"
        )
    if ours == 1 and solutions[0] != reference.solutions[0]:
        raise SolveError("cross-check mismatch: CP-SAT found a different solution")
