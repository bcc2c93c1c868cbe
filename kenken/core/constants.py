"""Shared constants and enumerations for the KenKen solver."""

from __future__ import annotations

from enum import Enum


class Operator(str, Enum):
    """Arithmetic operators a cage can carry."""

    CONST = "="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


MIN_SIZE = 2
MAX_SIZE = 15

# Digit sequences pack 4 bits per cell, so a cage holds at most 15 cells.
MAX_CAGE_CELLS = 15

# One symbol per digit, so candidate tables stay aligned for sizes above 9.
DIGIT_SYMBOLS = "123456789ABCDEF"

TWO_CELL_OPERATORS = frozenset({Operator.SUB, Operator.DIV})
MULTI_CELL_OPERATORS = frozenset({Operator.ADD, Operator.MUL})


def digit_symbol(digit: int) -> str:
    if 1 <= digit <= len(DIGIT_SYMBOLS):
        return DIGIT_SYMBOLS[digit - 1]
    return "?"
