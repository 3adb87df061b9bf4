"""
structdiff.core — Three-way structural diff of JSON documents
==============================================================

§1  THE RESULT
──────────────

Comparing two documents L and R yields a Mismatch of three diff trees:

    left_only        what only L has
    right_only       what only R has
    both_different   positions both have, holding different values

Each tree mirrors the shape of the documents: object keys become
KeyedSubtree children, array positions become IndexedSubtree children,
and the differences themselves sit at Leaf nodes.  See tree.py.


§2  THE MATCHER
───────────────

match(L, R) dispatches on the SHAPES of the two values:

CASE 1: object / object
    The keys are split into a Map Difference, after dropping every key
    that matches an exclusion pattern:

        left_only   = keys(L) \\ keys(R)     →  left_only[k]  = KeyPresent
        right_only  = keys(R) \\ keys(L)     →  right_only[k] = KeyPresent
        shared      = keys(L) ∩ keys(R)     →  match(L[k], R[k]) (RECURSIVE)

    The three sub-results of every shared key are merged into the three
    parent trees under k.

CASE 2: array / array
    The arrays are aligned with a minimal edit script (align.py):

        DELETE  old[i..]   →  left_only[i]  = Leaf(old[i], old[i])
        INSERT  new[j..]   →  right_only[j] = Leaf(new[j], new[j])
        REPLACE (o, ol, n, nl)
                           →  for i in range(max(ol, nl)):
                                  match(old[o+i], new[n+i])  (RECURSIVE)
                              merged under index o+i

    Inside a REPLACE an index past the end of either ARRAY reads as null.
    With sorting, both documents are canonicalized first (ordering.py),
    so alignment becomes insensitive to element order.

CASE 3: anything else (scalars, or two different shapes)
    Equal     →  empty Mismatch
    Unequal   →  both_different = Leaf(L, R)


§3  MERGING
───────────

Sub-results are merged bottom-up.  A plain Empty child is dropped, so
subtrees never hold one.  Merging a child under a key requires the parent
to be Empty or a KeyedSubtree, under an index an Empty or an
IndexedSubtree.  Anything else means the matcher broke its own contract
and raises InconsistentTreeError.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

from .align import EditOp, edit_script
from .formats import from_json, load_file
from .errors import InconsistentTreeError
from .logger import get_logger
from .options import CompareOptions, PatternLike, compile_patterns
from .ordering import canonicalize, is_excluded, values_equal
from .tree import (
    EMPTY, KEY_PRESENT,
    DiffTree, Empty, IndexedSubtree, KeyedSubtree, Leaf, Mismatch,
)

logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  ENTRY POINTS
# ═══════════════════════════════════════════════════════════════════

def compare(
    left: Any,
    right: Any,
    sort_arrays: bool = False,
    exclude_keys: Iterable[PatternLike] = (),
) -> Mismatch:
    """
    Compare two parsed JSON values.

    Arguments:
        left, right:   Values as produced by json.loads
        sort_arrays:   Compare arrays regardless of element order
        exclude_keys:  Regular expressions (strings or compiled); object
                       keys matching any of them are ignored everywhere

    Raises PatternError before comparing if a pattern does not compile.
    """
    exclusions = compile_patterns(exclude_keys)
    logger.debug(
        "Comparing %s with %s (sort_arrays=%s, %d exclusions)",
        type(left).__name__, type(right).__name__, sort_arrays, len(exclusions),
    )
    return match(left, right, sort_arrays, exclusions)


def compare_serialized(
    left_text: str,
    right_text: str,
    sort_arrays: bool = False,
    exclude_keys: Iterable[PatternLike] = (),
) -> Mismatch:
    """
    Parse two JSON texts and compare them.

    Raises InputError naming the side ("first" or "second") that fails
    to parse; nothing is compared in that case.
    """
    left = from_json(left_text, side="first")
    right = from_json(right_text, side="second")
    return compare(left, right, sort_arrays, exclude_keys)


def compare_files(
    left_path: Union[str, Path],
    right_path: Union[str, Path],
    options: Optional[CompareOptions] = None,
) -> Mismatch:
    """Read, parse and compare two JSON files."""
    options = options or CompareOptions()
    left_text = load_file(left_path)
    right_text = load_file(right_path)
    return compare_serialized(left_text, right_text, options.sort_arrays, options.exclude_keys)


def match(
    left: Any,
    right: Any,
    sort_arrays: bool = False,
    exclusions: Sequence[re.Pattern] = (),
) -> Mismatch:
    """
    The value matcher over compiled exclusion patterns.

    Arrays are canonicalized when sorting is requested or when there are
    exclusions: the sort must ignore the same keys the matcher ignores.
    """
    if sort_arrays or exclusions:
        left = canonicalize(left, exclusions)
        right = canonicalize(right, exclusions)
    return _match(left, right, exclusions)


# ═══════════════════════════════════════════════════════════════════
#  SHAPE DISPATCH
# ═══════════════════════════════════════════════════════════════════

def _match(left: Any, right: Any, exclusions: Sequence[re.Pattern]) -> Mismatch:
    if isinstance(left, dict) and isinstance(right, dict):
        return _match_objects(left, right, exclusions)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return _match_arrays(left, right, exclusions)
    return _match_values(left, right)


def _match_values(left: Any, right: Any) -> Mismatch:
    if values_equal(left, right):
        return Mismatch.empty()
    return Mismatch(EMPTY, EMPTY, Leaf(left, right))


@dataclass(frozen=True, slots=True)
class MapDifference:
    """Keys of two objects, split three ways after exclusion filtering."""
    left_only: list[str]
    right_only: list[str]
    shared: list[str]


def map_difference(left: dict, right: dict, exclusions: Sequence[re.Pattern] = ()) -> MapDifference:
    """
    Split the keys of two objects.

    Left-only and shared keys keep the left object's order, right-only
    keys the right object's order.
    """
    left_only: list[str] = []
    shared: list[str] = []
    for key in left:
        if is_excluded(key, exclusions):
            continue
        if key in right:
            shared.append(key)
        else:
            left_only.append(key)
    right_only = [k for k in right if k not in left and not is_excluded(k, exclusions)]
    return MapDifference(left_only, right_only, shared)


def _key_presence(keys: list[str]) -> DiffTree:
    if not keys:
        return EMPTY
    return KeyedSubtree({key: KEY_PRESENT for key in keys})


def _match_objects(left: dict, right: dict, exclusions: Sequence[re.Pattern]) -> Mismatch:
    keys = map_difference(left, right, exclusions)
    left_only = _key_presence(keys.left_only)
    right_only = _key_presence(keys.right_only)
    both = EMPTY

    for key in keys.shared:
        sub = _match(left[key], right[key], exclusions)
        left_only = insert_keyed(left_only, sub.left_only, key)
        right_only = insert_keyed(right_only, sub.right_only, key)
        both = insert_keyed(both, sub.both_different, key)

    return Mismatch(left_only, right_only, both)


def _one_sided(values: Sequence[Any], edits, start_attr: str, len_attr: str) -> DiffTree:
    children = []
    for edit in edits:
        start = getattr(edit, start_attr)
        for index in range(start, start + getattr(edit, len_attr)):
            children.append((index, Leaf(values[index], values[index])))
    if not children:
        return EMPTY
    return IndexedSubtree(children)


def _match_arrays(left: Sequence[Any], right: Sequence[Any], exclusions: Sequence[re.Pattern]) -> Mismatch:
    script = edit_script(left, right)

    deleted = [e for e in script if e.op == EditOp.DELETE]
    inserted = [e for e in script if e.op == EditOp.INSERT]
    replaced = [e for e in script if e.op == EditOp.REPLACE]

    left_only = _one_sided(left, deleted, "old_start", "old_len")
    right_only = _one_sided(right, inserted, "new_start", "new_len")
    both = EMPTY

    for edit in replaced:
        for i in range(max(edit.old_len, edit.new_len)):
            old_index = edit.old_start + i
            new_index = edit.new_start + i
            inner_left = left[old_index] if old_index < len(left) else None
            inner_right = right[new_index] if new_index < len(right) else None

            sub = _match(inner_left, inner_right, exclusions)
            left_only = insert_indexed(left_only, sub.left_only, old_index)
            right_only = insert_indexed(right_only, sub.right_only, old_index)
            both = insert_indexed(both, sub.both_different, old_index)

    return Mismatch(left_only, right_only, both)


# ═══════════════════════════════════════════════════════════════════
#  MERGING
# ═══════════════════════════════════════════════════════════════════

def insert_keyed(parent: DiffTree, child: DiffTree, key: str) -> DiffTree:
    """Merge `child` into `parent` under object key `key`."""
    if type(child) is Empty:
        return parent
    if isinstance(parent, KeyedSubtree):
        parent.children[key] = child
        return parent
    if type(parent) is Empty:
        return KeyedSubtree({key: child})
    raise InconsistentTreeError(key, parent, child)


def insert_indexed(parent: DiffTree, child: DiffTree, index: int) -> DiffTree:
    """Merge `child` into `parent` under array position `index`."""
    if type(child) is Empty:
        return parent
    if isinstance(parent, IndexedSubtree):
        parent.children.append((index, child))
        return parent
    if type(parent) is Empty:
        return IndexedSubtree([(index, child)])
    raise InconsistentTreeError(index, parent, child)
