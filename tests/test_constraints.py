import unittest

from kenken.core.constants import Operator
from kenken.core.digits import DigitSet
from kenken.core.models import build_puzzle
from kenken.engine.constraints import ConstraintStore, digits_at
from kenken.io.loader import parse_puzzle
from oracle import FOUR_BY_FOUR, cage


def _assert_synchronized(test: unittest.TestCase, store: ConstraintStore) -> None:
    for cage_idx, current in enumerate(store.puzzle.cages):
        candidates = store.candidates_for_cage(cage_idx)
        for position, (row, col) in enumerate(current.cells):
            test.assertEqual(store.cell(row, col), digits_at(candidates, position))


class ConstraintStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.puzzle = parse_puzzle(FOUR_BY_FOUR)
        self.store = ConstraintStore(self.puzzle)
        self.store.determine_initial()

    def test_const_cage_is_fixed_before_propagation(self) -> None:
        self.assertEqual(self.store.cell(3, 2), DigitSet.of([1]))
        puzzle = build_puzzle(
            4,
            [
                cage(Operator.CONST, 3, (0, 0)),
                cage(Operator.ADD, 7, (0, 1), (0, 2), (0, 3)),
            ]
            + [cage(Operator.ADD, 10, (r, 0), (r, 1), (r, 2), (r, 3)) for r in range(1, 4)],
        )
        store = ConstraintStore(puzzle)
        store.determine_initial()
        self.assertEqual(list(store.cell(0, 0)), [3])

    def test_initial_sets_follow_candidates(self) -> None:
        self.assertEqual(list(self.store.cell(1, 0)), [2, 4])
        self.assertEqual(list(self.store.cell(1, 1)), [1, 3, 4])
        self.assertEqual(list(self.store.cell(2, 1)), [1, 2, 4])
        _assert_synchronized(self, self.store)

    def test_exclude_updates_sibling_cells(self) -> None:
        cage_idx, _ = self.puzzle.cage_at(1, 0)
        self.assertTrue(self.store.exclude(1, 0, 2))
        self.assertEqual(list(self.store.cell(1, 0)), [4])
        # the sibling loses 4, not the excluded digit
        self.assertEqual(list(self.store.cell(2, 0)), [2])
        self.assertEqual([list(s) for s in self.store.candidates_for_cage(cage_idx)], [[4, 2]])
        _assert_synchronized(self, self.store)

    def test_exclude_is_idempotent(self) -> None:
        self.assertTrue(self.store.exclude(1, 2, 1))
        cells = self.store.snapshot()
        candidates = [self.store.candidates_for_cage(i) for i in range(len(self.puzzle.cages))]

        self.assertFalse(self.store.exclude(1, 2, 1))
        self.assertEqual(self.store.snapshot(), cells)
        self.assertEqual(
            [self.store.candidates_for_cage(i) for i in range(len(self.puzzle.cages))],
            candidates,
        )

    def test_exclude_absent_digit_is_noop(self) -> None:
        before = self.store.candidate_total()
        self.assertFalse(self.store.exclude(1, 0, 3))
        self.assertEqual(self.store.candidate_total(), before)

    def test_cell_returns_copy(self) -> None:
        digits = self.store.cell(0, 0)
        digits.remove(1)
        self.assertIn(1, self.store.cell(0, 0))

    def test_contradiction_when_cage_runs_dry(self) -> None:
        self.assertFalse(self.store.has_contradiction())
        self.store.exclude(3, 2, 1)
        self.assertTrue(self.store.has_contradiction())
        self.assertFalse(self.store.is_solved())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
