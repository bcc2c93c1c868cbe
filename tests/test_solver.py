import unittest
from unittest.mock import patch

from kenken.core.constants import Operator
from kenken.core.exceptions import MultipleSolutionsError, NoSolutionError, SolveError
from kenken.core.models import build_puzzle
from kenken.engine.constraints import ConstraintStore
from kenken.engine.search import BacktrackingSearch, RowColMask, SearchOutcome, search
from kenken.engine.solver import SolverConfig, prepare_store, solve
from kenken.io.loader import parse_puzzle
from oracle import (
    FOUR_BY_FOUR,
    FOUR_BY_FOUR_SOLUTION,
    NAKED_PAIR_3X3,
    ROWS_ONLY_3X3,
    THREE_BY_THREE,
    THREE_BY_THREE_SOLUTION,
    brute_force_solutions,
    cage,
    two_by_two,
)


class RowColMaskTests(unittest.TestCase):
    def test_take_and_release(self) -> None:
        mask = RowColMask(4)
        self.assertTrue(mask.ok(1, 2, 3))
        mask.take(1, 2, 3)
        self.assertFalse(mask.ok(1, 0, 3))
        self.assertFalse(mask.ok(0, 2, 3))
        self.assertTrue(mask.ok(0, 0, 3))
        mask.release(1, 2, 3)
        self.assertTrue(mask.ok(1, 0, 3))


class SearchTests(unittest.TestCase):
    def test_search_without_propagation_finds_all_solutions(self) -> None:
        puzzle = parse_puzzle(ROWS_ONLY_3X3)
        store = ConstraintStore(puzzle)
        store.determine_initial()
        outcome = search(puzzle, store)
        self.assertEqual(len(outcome.solutions), 12)
        self.assertEqual(
            sorted(outcome.solutions), sorted(brute_force_solutions(puzzle))
        )

    def test_steps_count_every_invocation(self) -> None:
        puzzle = parse_puzzle(FOUR_BY_FOUR)
        store = prepare_store(puzzle)
        outcome = search(puzzle, store)
        # fully propagated: one candidate per cage, one call per cage
        self.assertEqual(outcome.steps, len(puzzle.cages))
        self.assertEqual(outcome.solutions, [FOUR_BY_FOUR_SOLUTION])

    def test_rerun_starts_from_clean_state(self) -> None:
        puzzle = parse_puzzle(NAKED_PAIR_3X3)
        runner = BacktrackingSearch(puzzle, prepare_store(puzzle))
        first = runner.run()
        second = runner.run()
        self.assertEqual(first.solutions, second.solutions)
        self.assertEqual(first.steps, second.steps)

    def test_solution_limit_stops_early(self) -> None:
        puzzle = parse_puzzle(ROWS_ONLY_3X3)
        store = ConstraintStore(puzzle)
        store.determine_initial()
        exhaustive = search(puzzle, store)
        limited = search(puzzle, store, solution_limit=2)
        self.assertEqual(len(limited.solutions), 2)
        self.assertLess(limited.steps, exhaustive.steps)


class SolveTests(unittest.TestCase):
    def test_four_by_four_end_to_end(self) -> None:
        result = solve(parse_puzzle(FOUR_BY_FOUR))
        self.assertEqual(result.grid, FOUR_BY_FOUR_SOLUTION)
        self.assertGreater(result.steps, 0)
        self.assertGreaterEqual(result.propagation_passes, 1)

    def test_three_by_three_end_to_end(self) -> None:
        self.assertEqual(solve(parse_puzzle(THREE_BY_THREE)).grid, THREE_BY_THREE_SOLUTION)

    def test_zero_solutions(self) -> None:
        puzzle = two_by_two(cage(Operator.CONST, 1, (1, 0)), cage(Operator.CONST, 1, (1, 1)))
        with self.assertRaises(NoSolutionError):
            solve(puzzle)

    def test_one_solution(self) -> None:
        puzzle = two_by_two(cage(Operator.CONST, 2, (1, 0)), cage(Operator.CONST, 1, (1, 1)))
        self.assertEqual(solve(puzzle).grid, [[1, 2], [2, 1]])

    def test_two_solutions(self) -> None:
        puzzle = build_puzzle(
            2,
            [
                cage(Operator.ADD, 3, (0, 0), (0, 1)),
                cage(Operator.ADD, 3, (1, 0), (1, 1)),
            ],
        )
        with self.assertRaises(MultipleSolutionsError) as ctx:
            solve(puzzle)
        self.assertEqual(ctx.exception.count, 2)

    def test_matches_brute_force_outcome(self) -> None:
        for text in (FOUR_BY_FOUR, THREE_BY_THREE, NAKED_PAIR_3X3, ROWS_ONLY_3X3):
            with self.subTest(puzzle=text.splitlines()[0]):
                puzzle = parse_puzzle(text)
                expected = brute_force_solutions(puzzle)
                if len(expected) == 1:
                    self.assertEqual(solve(puzzle).grid, expected[0])
                else:
                    with self.assertRaises(MultipleSolutionsError) as ctx:
                        solve(puzzle)
                    self.assertEqual(ctx.exception.count, len(expected))

    def test_singles_only_agrees_with_full_propagation(self) -> None:
        config = SolverConfig(naked_pairs=False)
        self.assertEqual(solve(parse_puzzle(FOUR_BY_FOUR), config).grid, FOUR_BY_FOUR_SOLUTION)

    def test_solution_limit_caps_reported_count(self) -> None:
        with self.assertRaises(MultipleSolutionsError) as ctx:
            solve(parse_puzzle(ROWS_ONLY_3X3), SolverConfig(solution_limit=2))
        self.assertEqual(ctx.exception.count, 2)

    def test_solution_limit_must_detect_ambiguity(self) -> None:
        with self.assertRaises(ValueError):
            SolverConfig(solution_limit=1)

    def test_cross_check_accepts_agreeing_result(self) -> None:
        result = solve(parse_puzzle(FOUR_BY_FOUR), SolverConfig(cross_check=True))
        self.assertEqual(result.grid, FOUR_BY_FOUR_SOLUTION)

    def test_validate_accepts_found_solution(self) -> None:
        result = solve(parse_puzzle(FOUR_BY_FOUR), SolverConfig(validate=True))
        self.assertEqual(result.grid, FOUR_BY_FOUR_SOLUTION)

    def test_validate_rejects_broken_search_result(self) -> None:
        puzzle = parse_puzzle(FOUR_BY_FOUR)
        broken = [FOUR_BY_FOUR_SOLUTION[i][:] for i in (1, 0, 2, 3)]
        outcome = SearchOutcome(solutions=[broken], steps=1)
        with patch("kenken.engine.solver.search", return_value=outcome):
            self.assertEqual(solve(puzzle).grid, broken)
            with self.assertRaises(SolveError) as ctx:
                solve(puzzle, SolverConfig(validate=True))
        self.assertIn("failed validation", str(ctx.exception))

    def test_prepared_store_skips_propagation(self) -> None:
        puzzle = parse_puzzle(THREE_BY_THREE)
        store = prepare_store(puzzle)
        with patch("kenken.engine.solver.reduce_to_fixpoint") as reducer:
            result = solve(puzzle, store=store)
        reducer.assert_not_called()
        self.assertEqual(result.grid, THREE_BY_THREE_SOLUTION)
        self.assertEqual(result.propagation_passes, 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
