"""Row/column exclusion rules applied to a :class:`ConstraintStore`."""

from __future__ import annotations

from ..utils.logger import get_logger
from .constraints import ConstraintStore

LOGGER = get_logger(__name__)


def _naked_singles(store: ConstraintStore) -> bool:
    """A cell holding a single digit removes it from its row and column peers."""

    size = store.size
    changed = False
    for row in range(size):
        for col in range(size):
            if store.count(row, col) != 1:
                continue
            digit = store.cell(row, col).sole()
            for other in range(size):
                if other != col:
                    changed |= store.exclude(row, other, digit)
                if other != row:
                    changed |= store.exclude(other, col, digit)
    return changed


def _naked_pairs(store: ConstraintStore) -> bool:
    """Two cells of a line sharing the same two digits own them in that line."""

    size = store.size
    changed = False
    for row in range(size):
        for col in range(size):
            pair = store.cell(row, col)
            if pair.count() != 2:
                continue
            first, second = pair.pair()
            for partner in range(col + 1, size):
                if store.cell(row, partner) != pair:
                    continue
                for other in range(size):
                    if other in (col, partner):
                        continue
                    changed |= store.exclude(row, other, first)
                    changed |= store.exclude(row, other, second)
            for partner in range(row + 1, size):
                if store.cell(partner, col) != pair:
                    continue
                for other in range(size):
                    if other in (row, partner):
                        continue
                    changed |= store.exclude(other, col, first)
                    changed |= store.exclude(other, col, second)
    return changed


def reduce(store: ConstraintStore, naked_pairs: bool = True) -> bool:
    """Run one pass of every rule; return True if any digit was excluded."""

    changed = _naked_singles(store)
    if naked_pairs:
        changed |= _naked_pairs(store)
    return changed


def reduce_to_fixpoint(store: ConstraintStore, naked_pairs: bool = True) -> int:
    """Repeat :func:`reduce` until nothing changes; return the pass count."""

    passes = 0
    while True:
        passes += 1
        changed = reduce(store, naked_pairs=naked_pairs)
        LOGGER.debug(
            "Propagation pass %d: %d candidates left", passes, store.candidate_total()
        )
        if not changed:
            return passes
