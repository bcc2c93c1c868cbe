"""Pretty-print helpers for puzzles, candidate tables and solutions."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ..core.models import Puzzle
    from ..engine.constraints import ConstraintStore

_NO_CAGE = -1


def format_solution(grid: Sequence[Sequence[int]]) -> str:
    """ASCII table of a solved grid."""

    size = len(grid)
    width = max((len(str(d)) for line in grid for d in line), default=1)
    sep = ("+" + "-" * (width + 2)) * size + "+"
    lines = []
    for line in grid:
        lines.append(sep)
        lines.append("".join(f"| {d:>{width}} " for d in line) + "|")
    lines.append(sep)
    return "\n".join(lines) + "\n"


def _junction(a: int, b: int, c: int, d: int) -> str:
    """Inner junction between four cells: a b on top, c d below."""

    if a == b == c == d:
        return "┼"
    if a == b and c == d:
        return "┿"
    if a == c and b == d:
        return "╂"
    if a == b == c:
        return "╆"
    if a == b == d:
        return "╅"
    if a == c == d:
        return "╄"
    if b == c == d:
        return "╃"
    if a == b:
        return "╈"
    if a == c:
        return "╊"
    if b == d:
        return "╉"
    if c == d:
        return "╇"
    return "╋"


def format_square(puzzle: Puzzle, contents: Sequence[str], cell_width: int = 3) -> str:
    """Render ``contents`` (row-major, one entry per cell) inside the cage outline.

    Borders between different cages are drawn heavy, borders inside a cage
    light.
    """

    n = puzzle.size
    last = n - 1

    def cage(i: int, j: int) -> int:
        if i <= last and j <= last:
            return puzzle.cage_at(i, j)[0]
        return _NO_CAGE

    def bar(ch: str) -> str:
        return ch * cell_width

    out: List[str] = ["┏"]
    for j in range(n):
        out.append(bar("━"))
        out.append(("┳" if cage(0, j) != cage(0, j + 1) else "┯") if j < last else "┓\n")

    for i in range(n):
        out.append("┃")
        for j in range(n):
            out.append(f"{contents[i * n + j]:^{cell_width}}")
            out.append("┃" if cage(i, j) != cage(i, j + 1) else "│")
        out.append("\n")
        if i < last:
            out.append("┣" if cage(i, 0) != cage(i + 1, 0) else "┠")
            for j in range(n):
                a, b = cage(i, j), cage(i, j + 1)
                c, d = cage(i + 1, j), cage(i + 1, j + 1)
                out.append(bar("━" if a != c else "─"))
                if j < last:
                    out.append(_junction(a, b, c, d))
                else:
                    out.append(("┫" if a != c else "┨") + "\n")
        else:
            out.append("┗")
            for j in range(n):
                out.append(bar("━"))
                out.append(("┻" if cage(i, j) != cage(i, j + 1) else "┷") if j < last else "┛\n")
    return "".join(out)


def format_candidates(puzzle: Puzzle, store: ConstraintStore) -> str:
    """Candidate table: each cell shows its remaining digits."""

    contents = [str(store.cell(r, c)) for r, c in puzzle.cells()]
    width = max(3, max(len(text) for text in contents) + 2)
    return format_square(puzzle, contents, cell_width=width)


def format_cage_summary(puzzle: Puzzle) -> str:
    lines = []
    for idx, cage in enumerate(puzzle.cages):
        label = cage.key or "#"
        cells = " ".join(f"({r},{c})" for r, c in cage.cells)
        lines.append(f"{idx:>3} {label} {str(cage.operation):>6}  {cells}")
    return "\n".join(lines)


def pretty_print_solution(
    grid: Sequence[Sequence[int]],
    puzzle: Optional[Puzzle] = None,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print a solved grid, inside the cage outline when the puzzle is given."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    if puzzle is None:
        print(format_solution(grid), end="", file=stream)
    else:
        contents = [str(grid[r][c]) for r, c in puzzle.cells()]
        print(format_square(puzzle, contents), end="", file=stream)
