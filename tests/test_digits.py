import unittest

from kenken.core.digits import DigitSeq, DigitSet


class DigitSetTests(unittest.TestCase):
    def test_full_holds_one_to_size(self) -> None:
        digits = DigitSet.full(6)
        self.assertEqual(list(digits), [1, 2, 3, 4, 5, 6])
        self.assertFalse(digits.contains(0))
        self.assertFalse(digits.contains(7))
        self.assertEqual(digits.count(), 6)

    def test_full_supports_fifteen(self) -> None:
        self.assertEqual(list(DigitSet.full(15)), list(range(1, 16)))

    def test_remove_reports_presence(self) -> None:
        digits = DigitSet.of([2, 5])
        self.assertTrue(digits.remove(2))
        self.assertFalse(digits.remove(2))
        self.assertEqual(list(digits), [5])

    def test_insert_and_membership(self) -> None:
        digits = DigitSet.empty()
        self.assertFalse(digits)
        digits.insert(9)
        self.assertIn(9, digits)
        self.assertNotIn(8, digits)
        self.assertEqual(len(digits), 1)

    def test_sole_and_pair(self) -> None:
        self.assertEqual(DigitSet.of([7]).sole(), 7)
        self.assertEqual(DigitSet.of([12, 3]).pair(), (3, 12))

    def test_copy_is_independent(self) -> None:
        original = DigitSet.of([1, 2, 3])
        clone = original.copy()
        clone.remove(2)
        self.assertEqual(list(original), [1, 2, 3])
        self.assertNotEqual(original, clone)

    def test_str_uses_symbol_alphabet(self) -> None:
        self.assertEqual(str(DigitSet.of([1, 9, 10, 15])), "19AF")


class DigitSeqTests(unittest.TestCase):
    def test_constructors(self) -> None:
        self.assertEqual(list(DigitSeq.of(4)), [4])
        self.assertEqual(list(DigitSeq.of_two(3, 15)), [3, 15])
        self.assertEqual(DigitSeq.of_two(3, 15), DigitSeq.from_digits([3, 15]))

    def test_appended_returns_new_sequence(self) -> None:
        base = DigitSeq.of(1)
        longer = base.appended(2)
        self.assertEqual(len(base), 1)
        self.assertEqual(len(longer), 2)
        self.assertEqual(longer.get(1), 2)

    def test_items_yield_positions(self) -> None:
        seq = DigitSeq.from_digits([5, 1, 5])
        self.assertEqual(list(seq.items()), [(0, 5), (1, 1), (2, 5)])
        self.assertEqual(seq[2], 5)
        with self.assertRaises(IndexError):
            seq[3]

    def test_capacity_is_fifteen(self) -> None:
        seq = DigitSeq.from_digits([15] * 15)
        self.assertEqual(len(seq), 15)
        self.assertEqual(list(seq), [15] * 15)
        with self.assertRaises(IndexError):
            seq.appended(1)

    def test_hashable_value_semantics(self) -> None:
        seen = {DigitSeq.of_two(1, 2), DigitSeq.from_digits([1, 2]), DigitSeq.of_two(2, 1)}
        self.assertEqual(len(seen), 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
