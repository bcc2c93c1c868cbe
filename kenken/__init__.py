"""KenKen puzzle solver.

This package exposes the public API surface via:

- ``kenken.io.loader.load_puzzle`` / ``parse_puzzle``: read the text format.
- ``kenken.core.models.build_puzzle``: assemble a puzzle programmatically.
- ``kenken.engine.solver.solve``: propagate, search and return the unique grid.
"""

from .core.exceptions import (
    KenKenError,
    MultipleSolutionsError,
    NoSolutionError,
    PuzzleLoadError,
    SolveError,
)
from .core.models import Cage, Operation, Puzzle, build_puzzle
from .engine.solver import SolveResult, SolverConfig, solve
from .io.loader import load_puzzle, parse_puzzle

__all__ = [
    "Cage",
    "KenKenError",
    "MultipleSolutionsError",
    "NoSolutionError",
    "Operation",
    "Puzzle",
    "PuzzleLoadError",
    "SolveError",
    "SolveResult",
    "SolverConfig",
    "build_puzzle",
    "load_puzzle",
    "parse_puzzle",
    "solve",
]

__version__ = "0.1.0"
