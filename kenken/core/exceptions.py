"""Custom exception hierarchy for the KenKen solver."""


class KenKenError(Exception):
    """Base exception for solver failures."""


class PuzzleLoadError(KenKenError):
    """Raised when a puzzle definition cannot be parsed."""


class PuzzleFetchError(PuzzleLoadError):
    """Raised when a remote puzzle definition cannot be retrieved."""


class SolveError(KenKenError):
    """Raised when a puzzle does not have exactly one solution."""


class NoSolutionError(SolveError):
    """Raised when the search exhausts every candidate without a solution."""

    def __init__(self, message: str = "found no solution") -> None:
        super().__init__(message)


class MultipleSolutionsError(SolveError):
    """Raised when the puzzle, as given, admits more than one solution."""

    def __init__(self, count: int, message: str = "found more than 1 solution") -> None:
        super().__init__(message)
        self.count = count


class ValidationError(KenKenError):
    """Raised when a solved grid violates a puzzle rule."""
