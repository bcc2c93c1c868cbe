"""Data models describing a KenKen puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import Operator

Cell = Tuple[int, int]
CageRef = Tuple[int, int]


@dataclass(frozen=True)
class Operation:
    """Arithmetic goal of a cage."""

    operator: Operator
    goal: int

    def check(self, values: Sequence[int]) -> bool:
        """Return whether a complete cage assignment reaches the goal."""

        if self.operator == Operator.CONST:
            return len(values) == 1 and values[0] == self.goal
        if self.operator == Operator.ADD:
            return sum(values) == self.goal
        if self.operator == Operator.MUL:
            product = 1
            for value in values:
                product *= value
            return product == self.goal
        if len(values) != 2:
            return False
        low, high = sorted(values)
        if self.operator == Operator.SUB:
            return high - low == self.goal
        return low * self.goal == high

    def __str__(self) -> str:
        if self.operator == Operator.CONST:
            return str(self.goal)
        return f"{self.goal}{self.operator.value}"


@dataclass
class Cage:
    """A group of cells sharing one operation.

    The order of ``cells`` defines the positions used to index candidate
    sequences.
    """

    cells: List[Cell]
    operation: Operation
    key: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.cells)

    def shares_line(self, first: int, second: int) -> bool:
        (r1, c1), (r2, c2) = self.cells[first], self.cells[second]
        return r1 == r2 or c1 == c2


@dataclass
class Puzzle:
    """A complete puzzle: grid size, cages and the cell-to-cage index."""

    size: int
    cages: List[Cage]
    cell_to_cage: Dict[Cell, CageRef] = field(default_factory=dict)

    def cage_at(self, row: int, col: int) -> CageRef:
        return self.cell_to_cage[(row, col)]

    def cells(self) -> List[Cell]:
        return [(r, c) for r in range(self.size) for c in range(self.size)]


def index_cages(cages: Sequence[Cage]) -> Dict[Cell, CageRef]:
    """Map every cell to ``(cage_index, position_within_cage)``."""

    index: Dict[Cell, CageRef] = {}
    for cage_idx, cage in enumerate(cages):
        for position, cell in enumerate(cage.cells):
            index[cell] = (cage_idx, position)
    return index


def build_puzzle(
    size: int,
    cages: Sequence[Cage],
    cell_to_cage: Optional[Dict[Cell, CageRef]] = None,
) -> Puzzle:
    """Assemble a puzzle from already validated parts.

    The cell-to-cage index is derived from the cages when not supplied.
    """

    cages = list(cages)
    if cell_to_cage is None:
        cell_to_cage = index_cages(cages)
    return Puzzle(size=size, cages=cages, cell_to_cage=dict(cell_to_cage))
