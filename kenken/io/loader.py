"""Parser for the textual puzzle format.

A puzzle file starts with the cage layout, one line per row::

    aabb
    cddd
    ceef
    gg1f

A digit is a single-cell cage with that constant value; any other character
labels a cage shared by all cells carrying it. After a blank line, every
label gets its goal and operator::

    a: 5+
    b: 1-
    c: 8*
    e: 2/
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..core.constants import (
    MAX_CAGE_CELLS,
    MAX_SIZE,
    MIN_SIZE,
    MULTI_CELL_OPERATORS,
    TWO_CELL_OPERATORS,
    Operator,
)
from ..core.exceptions import PuzzleLoadError
from ..core.models import Cage, Operation, Puzzle, build_puzzle
from ..utils.logger import get_logger
from .fetch import PuzzleFetcher, is_url

LOGGER = get_logger(__name__)

_OPERATORS = {op.value: op for op in (Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV)}


def _split_blocks(text: str) -> Tuple[List[str], List[str]]:
    lines = [line.rstrip("\r") for line in text.split("\n")]
    layout: List[str] = []
    index = 0
    while index < len(lines) and lines[index]:
        layout.append(lines[index])
        index += 1
    definitions: List[str] = []
    index += 1
    while index < len(lines) and lines[index]:
        definitions.append(lines[index])
        index += 1
    return layout, definitions


def _parse_definition(line: str) -> Tuple[str, Operation]:
    parts = line.split(": ")
    if len(parts) != 2 or len(parts[0]) != 1:
        raise PuzzleLoadError(f"invalid line with cage: {line}")
    key, spec = parts
    if len(spec) < 2:
        raise PuzzleLoadError(f"invalid line with cage: {line}")
    number, symbol = spec[:-1], spec[-1]
    if not (number.isascii() and number.isdigit()):
        raise PuzzleLoadError(f"invalid number: {number}")
    operator = _OPERATORS.get(symbol)
    if operator is None:
        raise PuzzleLoadError(f"invalid operator: {symbol}")
    return key, Operation(operator, int(number))


def _check_cage(key: str, cage: Cage) -> None:
    operator = cage.operation.operator
    count = cage.size
    if operator in TWO_CELL_OPERATORS:
        if count != 2:
            raise PuzzleLoadError(f"sub/div cages must have 2 cells, not {count}")
    elif operator in MULTI_CELL_OPERATORS and not 2 <= count <= MAX_CAGE_CELLS:
        raise PuzzleLoadError(
            f"add/mul cages must have between 2 and {MAX_CAGE_CELLS} cells, not {count} (cage {key})"
        )
    if cage.operation.goal < 1:
        raise PuzzleLoadError(f"cage {key} has a goal below 1")


def parse_puzzle(text: str) -> Puzzle:
    """Parse puzzle text into a :class:`Puzzle`."""

    layout, definitions = _split_blocks(text)
    size = len(layout[0]) if layout else 0
    if size < MIN_SIZE or size > MAX_SIZE:
        raise PuzzleLoadError(f"kenken size must be between {MIN_SIZE} and {MAX_SIZE} (found {size})")
    if len(layout) != size:
        raise PuzzleLoadError(f"expected {size} rows, found {len(layout)}")

    const_cages: List[Cage] = []
    labelled: Dict[str, List[Tuple[int, int]]] = {}
    for row, line in enumerate(layout):
        if len(line) != size:
            raise PuzzleLoadError(
                f"unequal line lengths (expected {size}, found {len(line)})"
            )
        for col, ch in enumerate(line):
            if ch in "0123456789":
                value = int(ch)
                if not 1 <= value <= size:
                    raise PuzzleLoadError(f"constant {value} at ({row},{col}) is outside 1..{size}")
                const_cages.append(Cage(cells=[(row, col)], operation=Operation(Operator.CONST, value)))
            else:
                labelled.setdefault(ch, []).append((row, col))

    operations: Dict[str, Operation] = {}
    for line in definitions:
        key, operation = _parse_definition(line)
        if key not in labelled:
            LOGGER.debug("Ignoring definition for unused label %r", key)
            continue
        operations[key] = operation

    cages: List[Cage] = list(const_cages)
    for key in sorted(labelled):
        defined = operations.get(key)
        if defined is None:
            raise PuzzleLoadError(f"found cage ({key}) without defined goal")
        cage = Cage(cells=labelled[key], operation=defined, key=key)
        _check_cage(key, cage)
        cages.append(cage)

    puzzle = build_puzzle(size, cages)
    LOGGER.debug("Parsed %dx%d puzzle with %d cages", size, size, len(cages))
    return puzzle


def load_puzzle(source: Path | str, fetcher: Optional[PuzzleFetcher] = None) -> Puzzle:
    """Load a puzzle from a file path or an ``http(s)`` URL."""

    if isinstance(source, str) and is_url(source):
        return parse_puzzle((fetcher or PuzzleFetcher()).fetch(source))
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PuzzleLoadError(f"cannot read {path}: {exc}") from exc
    return parse_puzzle(text)
