"""Enumeration of the digit sequences a single cage can hold."""

from __future__ import annotations

from typing import List

from ..core.constants import Operator
from ..core.digits import DigitSeq
from ..core.models import Cage


def generate_sums(max_digit: int, goal: int, length: int) -> List[DigitSeq]:
    """All sequences of ``length`` digits in ``1..max_digit`` adding up to ``goal``."""

    results: List[DigitSeq] = []

    def inner(prefix: DigitSeq, remaining: int, left: int) -> None:
        if left == 1:
            if 1 <= remaining <= max_digit:
                results.append(prefix.appended(remaining))
            return
        # every later digit is at least 1
        upper = min(max_digit, remaining - left + 1)
        for digit in range(1, upper + 1):
            inner(prefix.appended(digit), remaining - digit, left - 1)

    inner(DigitSeq(), goal, length)
    return results


def generate_products(max_digit: int, goal: int, length: int) -> List[DigitSeq]:
    """All sequences of ``length`` digits in ``1..max_digit`` multiplying to ``goal``."""

    results: List[DigitSeq] = []

    def inner(prefix: DigitSeq, remaining: int, left: int) -> None:
        if left == 1:
            if 1 <= remaining <= max_digit:
                results.append(prefix.appended(remaining))
            return
        for digit in range(1, max_digit + 1):
            if remaining % digit == 0:
                inner(prefix.appended(digit), remaining // digit, left - 1)

    if goal >= 1:
        inner(DigitSeq(), goal, length)
    return results


def generate_differences(max_digit: int, goal: int) -> List[DigitSeq]:
    results: List[DigitSeq] = []
    for low in range(1, max_digit - goal + 1):
        results.append(DigitSeq.of_two(low, low + goal))
        if goal:
            results.append(DigitSeq.of_two(low + goal, low))
    return results


def generate_quotients(max_digit: int, goal: int) -> List[DigitSeq]:
    results: List[DigitSeq] = []
    if goal < 1:
        return results
    for low in range(1, max_digit // goal + 1):
        results.append(DigitSeq.of_two(low, low * goal))
        if goal != 1:
            results.append(DigitSeq.of_two(low * goal, low))
    return results


def exclude_line_repeats(cage: Cage, sequences: List[DigitSeq]) -> List[DigitSeq]:
    """Drop sequences repeating a digit in two cells of one row or column."""

    conflicts = [
        (i, j)
        for i in range(cage.size)
        for j in range(i + 1, cage.size)
        if cage.shares_line(i, j)
    ]
    if not conflicts:
        return sequences
    return [
        seq
        for seq in sequences
        if all(seq.get(i) != seq.get(j) for i, j in conflicts)
    ]


def generate_cage_candidates(cage: Cage, size: int) -> List[DigitSeq]:
    """Every admissible assignment of digits to ``cage``, in generation order."""

    operator = cage.operation.operator
    goal = cage.operation.goal
    if operator == Operator.CONST:
        return [DigitSeq.of(goal)] if 1 <= goal <= size else []
    if operator == Operator.ADD:
        return exclude_line_repeats(cage, generate_sums(size, goal, cage.size))
    if operator == Operator.MUL:
        return exclude_line_repeats(cage, generate_products(size, goal, cage.size))
    if operator == Operator.SUB:
        return exclude_line_repeats(cage, generate_differences(size, goal))
    if operator == Operator.DIV:
        return exclude_line_repeats(cage, generate_quotients(size, goal))
    raise ValueError(f"Unsupported operator: {operator!r}")
