"""Independent CP-SAT model of a puzzle, used to cross-check the search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ortools.sat.python import cp_model

from ..core.constants import Operator
from ..core.models import Cage, Puzzle
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

Grid = List[List[int]]


@dataclass
class CrossCheckResult:
    status: str
    solutions: List[Grid] = field(default_factory=list)

    @property
    def unique(self) -> bool:
        return len(self.solutions) == 1


class _SolutionCollector(cp_model.CpSolverSolutionCallback):
    """Records grids and stops once ``limit`` have been found."""

    def __init__(self, cell_vars: Dict[Tuple[int, int], cp_model.IntVar], size: int, limit: int) -> None:
        super().__init__()
        self._cell_vars = cell_vars
        self._size = size
        self._limit = limit
        self.solutions: List[Grid] = []

    def on_solution_callback(self) -> None:
        grid = [
            [self.value(self._cell_vars[(r, c)]) for c in range(self._size)]
            for r in range(self._size)
        ]
        self.solutions.append(grid)
        if len(self.solutions) >= self._limit:
            self.stop_search()


def build_model(puzzle: Puzzle) -> Tuple[cp_model.CpModel, Dict[Tuple[int, int], cp_model.IntVar]]:
    """Translate the puzzle into a CP-SAT model with one variable per cell."""

    model = cp_model.CpModel()
    n = puzzle.size
    cell_vars = {
        (r, c): model.new_int_var(1, n, f"x_{r}_{c}") for r in range(n) for c in range(n)
    }
    for i in range(n):
        model.add_all_different([cell_vars[(i, c)] for c in range(n)])
        model.add_all_different([cell_vars[(r, i)] for r in range(n)])

    for idx, cage in enumerate(puzzle.cages):
        _add_cage(model, cell_vars, cage, idx, n)
    return model, cell_vars


def _add_cage(model: cp_model.CpModel, cell_vars, cage: Cage, idx: int, n: int) -> None:
    xs = [cell_vars[cell] for cell in cage.cells]
    goal = cage.operation.goal
    operator = cage.operation.operator

    if operator == Operator.CONST:
        model.add(xs[0] == goal)
    elif operator == Operator.ADD:
        model.add(sum(xs) == goal)
    elif operator == Operator.MUL:
        product = xs[0]
        for step, x in enumerate(xs[1:], start=1):
            partial = model.new_int_var(1, n ** (step + 1), f"p_{idx}_{step}")
            model.add_multiplication_equality(partial, [product, x])
            product = partial
        model.add(product == goal)
    elif operator == Operator.SUB:
        a, b = xs
        if goal == 0:
            model.add(a == b)
            return
        a_larger = model.new_bool_var(f"sub_{idx}")
        model.add(a - b == goal).only_enforce_if(a_larger)
        model.add(b - a == goal).only_enforce_if(~a_larger)
    elif operator == Operator.DIV:
        a, b = xs
        if goal == 1:
            model.add(a == b)
            return
        a_larger = model.new_bool_var(f"div_{idx}")
        model.add(a == goal * b).only_enforce_if(a_larger)
        model.add(b == goal * a).only_enforce_if(~a_larger)
    else:
        raise ValueError(f"Unsupported operator: {operator!r}")


def cross_check(puzzle: Puzzle, limit: int = 2, timeout: float = 30.0) -> CrossCheckResult:
    """Enumerate up to ``limit`` solutions with CP-SAT."""

    model, cell_vars = build_model(puzzle)
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.num_workers = 1

    collector = _SolutionCollector(cell_vars, puzzle.size, limit)
    status = solver.solve(model, collector)
    status_name = solver.status_name(status)
    LOGGER.info(
        "CP-SAT cross-check: status=%s, %d solution(s) in %.2fs",
        status_name,
        len(collector.solutions),
        solver.wall_time,
    )
    return CrossCheckResult(status=status_name, solutions=collector.solutions)
