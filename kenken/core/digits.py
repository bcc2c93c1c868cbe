"""Bit-packed digit sets and digit sequences.

Both types keep their state in a single Python int. A :class:`DigitSet`
uses bit ``d`` for digit ``d`` (bit 0 is never set, digits start at 1). A
:class:`DigitSeq` packs up to 15 digits of 4 bits each, with the length in
the top 4 bits of a 64-bit word.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from .constants import MAX_CAGE_CELLS, digit_symbol

_LEN_SHIFT = 60
_DIGIT_BITS = 4
_DIGIT_MASK = 0xF


class DigitSet:
    """Mutable set of digits backed by a bit mask."""

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0) -> None:
        self._bits = bits

    @classmethod
    def empty(cls) -> "DigitSet":
        return cls(0)

    @classmethod
    def full(cls, size: int) -> "DigitSet":
        """Set holding every digit ``1..size``."""
        return cls((1 << (size + 1)) - 2)

    @classmethod
    def of(cls, digits: Iterable[int]) -> "DigitSet":
        bits = 0
        for digit in digits:
            bits |= 1 << digit
        return cls(bits)

    @property
    def bits(self) -> int:
        return self._bits

    def contains(self, digit: int) -> bool:
        return self._bits & (1 << digit) != 0

    def insert(self, digit: int) -> None:
        self._bits |= 1 << digit

    def remove(self, digit: int) -> bool:
        """Remove ``digit``; return True iff it was present."""
        mask = 1 << digit
        if self._bits & mask:
            self._bits &= ~mask
            return True
        return False

    def count(self) -> int:
        return self._bits.bit_count()

    def sole(self) -> int:
        """The only member. Caller guarantees ``count() == 1``."""
        return self._bits.bit_length() - 1

    def pair(self) -> Tuple[int, int]:
        """The two members, smaller first. Caller guarantees ``count() == 2``."""
        low = (self._bits & -self._bits).bit_length() - 1
        return low, self._bits.bit_length() - 1

    def copy(self) -> "DigitSet":
        return DigitSet(self._bits)

    def __contains__(self, digit: object) -> bool:
        return isinstance(digit, int) and self.contains(digit)

    def __iter__(self) -> Iterator[int]:
        bits = self._bits
        while bits:
            low = bits & -bits
            yield low.bit_length() - 1
            bits ^= low

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self._bits != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigitSet):
            return NotImplemented
        return self._bits == other._bits

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(digit_symbol(d) for d in self)

    def __repr__(self) -> str:
        return f"DigitSet({{{', '.join(str(d) for d in self)}}})"


class DigitSeq:
    """Immutable ordered tuple of up to 15 digits packed into one int."""

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0) -> None:
        self._bits = bits

    @classmethod
    def of(cls, digit: int) -> "DigitSeq":
        return cls((1 << _LEN_SHIFT) | digit)

    @classmethod
    def of_two(cls, first: int, second: int) -> "DigitSeq":
        return cls((2 << _LEN_SHIFT) | first | (second << _DIGIT_BITS))

    @classmethod
    def from_digits(cls, digits: Iterable[int]) -> "DigitSeq":
        seq = cls()
        for digit in digits:
            seq = seq.appended(digit)
        return seq

    def appended(self, digit: int) -> "DigitSeq":
        """Return a new sequence with ``digit`` added at the end."""
        length = self._bits >> _LEN_SHIFT
        if length >= MAX_CAGE_CELLS:
            raise IndexError("digit sequence is full")
        shift = length * _DIGIT_BITS
        body = self._bits & ((1 << shift) - 1)
        return DigitSeq(body | (digit << shift) | ((length + 1) << _LEN_SHIFT))

    def get(self, index: int) -> int:
        return (self._bits >> (index * _DIGIT_BITS)) & _DIGIT_MASK

    def items(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(position, digit)`` pairs in sequence order."""
        bits = self._bits
        for position in range(len(self)):
            yield position, bits & _DIGIT_MASK
            bits >>= _DIGIT_BITS

    def __len__(self) -> int:
        return self._bits >> _LEN_SHIFT

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < len(self):
            raise IndexError(index)
        return self.get(index)

    def __iter__(self) -> Iterator[int]:
        for _, digit in self.items():
            yield digit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigitSeq):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"DigitSeq({list(self)})"
