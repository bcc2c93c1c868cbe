"""CLI entrypoint for the KenKen solver."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from kenken.core.exceptions import PuzzleLoadError, SolveError
from kenken.engine.solver import SolverConfig, prepare_store, solve
from kenken.io.fetch import PuzzleFetcher
from kenken.io.loader import load_puzzle
from kenken.utils.logger import configure_logging, level_from_name
from kenken.utils.pretty import format_candidates, pretty_print_solution


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve KenKen puzzles")
    parser.add_argument("puzzles", nargs="+", metavar="PUZZLE", help="Puzzle file path or URL")
    show = parser.add_mutually_exclusive_group()
    show.add_argument(
        "--show",
        dest="show",
        action="store_true",
        default=None,
        help="Print the solved grid (default when a single puzzle is given)",
    )
    show.add_argument("--no-show", dest="show", action="store_false", help="Never print grids")
    parser.add_argument(
        "--candidates",
        action="store_true",
        help="Print the candidate table left after propagation",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Re-check the solved grid against the row, column and cage rules",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Verify every result against an independent CP-SAT model",
    )
    parser.add_argument(
        "--solution-limit",
        type=int,
        default=None,
        help="Stop searching after this many solutions (default: exhaustive)",
    )
    parser.add_argument(
        "--no-naked-pairs",
        action="store_true",
        help="Propagate with the naked-single rule only",
    )
    parser.add_argument("--timeout", type=float, default=30.0, help="HTTP and CP-SAT timeout in seconds")
    parser.add_argument("--output", type=Path, help="Optional path to a JSON summary")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def solve_one(
    source: str,
    config: SolverConfig,
    fetcher: PuzzleFetcher,
    *,
    show: bool,
    candidates: bool,
) -> Dict[str, Any]:
    """Load, solve and report one puzzle; never raises for puzzle errors."""

    record: Dict[str, Any] = {"puzzle": source, "status": "error"}
    try:
        puzzle = load_puzzle(source, fetcher=fetcher)
    except PuzzleLoadError as exc:
        print(f"*** Error loading {source}: {exc}")
        record["error"] = str(exc)
        return record

    store = None
    propagated = 0.0
    if candidates:
        start = time.perf_counter()
        store = prepare_store(puzzle, config)
        propagated = time.perf_counter() - start
        print(format_candidates(puzzle, store), end="")

    start = time.perf_counter()
    try:
        result = solve(puzzle, config, store=store)
    except SolveError as exc:
        print(f"*** Error solving {source}: {exc}")
        record["error"] = str(exc)
        return record
    took = propagated + time.perf_counter() - start

    if show:
        pretty_print_solution(result.grid)
    print(f"{source:<20} {result.steps:8} steps {took * 1000:10.4f} ms")
    record.update(
        status="solved",
        steps=result.steps,
        millis=round(took * 1000, 4),
        grid=result.grid,
    )
    return record


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level_from_name(args.log_level))

    if args.solution_limit is not None and args.solution_limit < 2:
        parser.error("--solution-limit must be at least 2")

    config = SolverConfig(
        naked_pairs=not args.no_naked_pairs,
        solution_limit=args.solution_limit,
        validate=args.validate,
        cross_check=args.cross_check,
        cross_check_timeout=args.timeout,
    )
    fetcher = PuzzleFetcher(timeout_seconds=args.timeout)
    show = args.show if args.show is not None else len(args.puzzles) == 1

    records = [
        solve_one(source, config, fetcher, show=show, candidates=args.candidates)
        for source in args.puzzles
    ]

    if args.output:
        args.output.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return 0 if all(record["status"] == "solved" for record in records) else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
