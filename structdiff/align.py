"""
structdiff.align — Minimal edit scripts between two sequences
=============================================================

Given two sequences and an equality predicate, produce the shortest list
of range operations that turns the old sequence into the new one:

    DELETE   (old_start, old_len)                 elements only in old
    INSERT   (new_start, new_len)                 elements only in new
    REPLACE  (old_start, old_len, new_start, new_len)
                                                  a run of deletions and
                                                  insertions with nothing
                                                  matched in between

§1  ALIGNMENT
─────────────

The alignment is a longest common subsequence.  With L[i][j] the LCS
length of old[:i] and new[:j]:

    L[0][j] = L[i][0] = 0
    L[i][j] = L[i-1][j-1] + 1               if old[i-1] == new[j-1]
            = max(L[i-1][j], L[i][j-1])     otherwise

Every element outside the LCS is deleted or inserted exactly once, so
the number of edited elements, m + n - 2·L[m][n], is minimal.

§2  DETERMINISM
───────────────

The trace-back starts at (m, n) and walks towards (0, 0):

    • equal elements are always matched (this is always optimal);
    • otherwise the step that keeps the LCS length is taken;
    • when both a deletion and an insertion keep it, the element that
      sorts LATER in the canonical order (ordering.py) is dropped,
      deletion winning only if the two compare equal.

So among equally short scripts the one matching elements as LATE as
possible is chosen, and the same inputs always give the same script.
The value-based tie-break makes the trace mirror itself when old and
new are swapped: deletions become insertions at the same positions.

§3  COST
────────

O(m·n) time and memory for the table, over the UNTRIMMED MIDDLE only.
The common suffix and the common prefix are matched first without a
table, so arrays that differ in a few neighbouring places cost little
more than one pass over them.

Prefix matching is greedy and matches equal elements as EARLY as
possible, against §2.  A leading pure insertion or deletion is therefore
slid back over the prefix for as long as the elements allow:

    ["a", "b", "c"]  →  ["a", "a", "b", "d"]
                         Insert(new=0), not Insert(new=1)

Both sides slide under the same condition, so the script still mirrors
itself when old and new are swapped.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Sequence

from .logger import get_logger
from .ordering import compare_values, values_equal

logger = get_logger(__name__)


class EditOp(Enum):
    """Types of edit operations."""
    DELETE = auto()     # Range only in old
    INSERT = auto()     # Range only in new
    REPLACE = auto()    # Old range stands where new range stands


@dataclass(frozen=True, slots=True)
class Edit:
    """A single range operation of an edit script."""
    op: EditOp
    old_start: int
    old_len: int
    new_start: int
    new_len: int

    def __repr__(self) -> str:
        if self.op == EditOp.DELETE:
            return f"Delete(old={self.old_start}, len={self.old_len})"
        if self.op == EditOp.INSERT:
            return f"Insert(new={self.new_start}, len={self.new_len})"
        return (f"Replace(old={self.old_start}, len={self.old_len}, "
                f"new={self.new_start}, len={self.new_len})")


# Single-element steps produced by the trace-back
_MATCH, _DEL, _INS = 0, 1, 2


def edit_script(
    old: Sequence[Any],
    new: Sequence[Any],
    eq: Callable[[Any, Any], bool] = values_equal,
    order: Callable[[Any, Any], int] = compare_values,
) -> list[Edit]:
    """
    Compute the minimal edit script transforming `old` into `new`.

    Operations are ordered by position and never overlap.  An empty list
    means the sequences are equal under `eq`.  `order` only breaks ties
    between equally short scripts.
    """
    m = len(old)
    n = len(new)

    # Trim the common suffix, then the common prefix
    while m > 0 and n > 0 and eq(old[m - 1], new[n - 1]):
        m -= 1
        n -= 1
    prefix = 0
    while prefix < m and prefix < n and eq(old[prefix], new[prefix]):
        prefix += 1

    steps = _trace(old[prefix:m], new[prefix:n], m - prefix, n - prefix, eq, order)
    script = _group(steps, prefix)
    if prefix:
        script = _slide(script, old, new, eq)
    logger.debug(
        "Aligned %d vs %d elements into %d edits (%d x %d table)",
        len(old), len(new), len(script), m - prefix, n - prefix,
    )
    return script


def _trace(old, new, m: int, n: int, eq, order) -> list[int]:
    """LCS table plus trace-back over old[:m] and new[:n], in forward order."""
    if m == 0:
        return [_INS] * n
    if n == 0:
        return [_DEL] * m

    same = [[eq(old[i], new[j]) for j in range(n)] for i in range(m)]

    lcs = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = lcs[i]
        above = lcs[i - 1]
        for j in range(1, n + 1):
            if same[i - 1][j - 1]:
                row[j] = above[j - 1] + 1
            else:
                row[j] = max(above[j], row[j - 1])

    steps: list[int] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and same[i - 1][j - 1]:
            steps.append(_MATCH)
            i -= 1
            j -= 1
        elif j == 0:
            steps.append(_DEL)
            i -= 1
        elif i == 0:
            steps.append(_INS)
            j -= 1
        else:
            up = lcs[i - 1][j]
            left = lcs[i][j - 1]
            if up > left or (up == left and order(old[i - 1], new[j - 1]) >= 0):
                steps.append(_DEL)
                i -= 1
            else:
                steps.append(_INS)
                j -= 1

    steps.reverse()
    return steps


def _group(steps: list[int], offset: int = 0) -> list[Edit]:
    """Collapse single-element steps into range operations, starting at `offset`."""
    script: list[Edit] = []
    i = j = offset
    gap_i = gap_j = offset

    def flush() -> None:
        deleted = i - gap_i
        inserted = j - gap_j
        if deleted and inserted:
            script.append(Edit(EditOp.REPLACE, gap_i, deleted, gap_j, inserted))
        elif deleted:
            script.append(Edit(EditOp.DELETE, gap_i, deleted, gap_j, 0))
        elif inserted:
            script.append(Edit(EditOp.INSERT, gap_i, 0, gap_j, inserted))

    for step in steps:
        if step == _MATCH:
            flush()
            i += 1
            j += 1
            gap_i, gap_j = i, j
        elif step == _DEL:
            i += 1
        else:
            j += 1
    flush()

    return script


def _slide(script: list[Edit], old, new, eq) -> list[Edit]:
    """Move a leading pure insertion or deletion back over the matched prefix (§3)."""
    if not script:
        return script
    first = script[0]
    start = first.old_start
    if first.op == EditOp.INSERT:
        length = first.new_len
        while start > 0 and eq(old[start - 1], new[start - 1 + length]):
            start -= 1
        moved = Edit(EditOp.INSERT, start, 0, start, length)
    elif first.op == EditOp.DELETE:
        length = first.old_len
        while start > 0 and eq(old[start - 1 + length], new[start - 1]):
            start -= 1
        moved = Edit(EditOp.DELETE, start, length, start, 0)
    else:
        return script
    return [moved] + script[1:]
