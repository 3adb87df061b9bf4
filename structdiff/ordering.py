"""
structdiff.ordering — Canonical ordering of JSON values
=======================================================

Array comparison can be made order-insensitive by sorting both arrays
before aligning them.  That needs a TOTAL order over every JSON value,
including objects and nested arrays.

§1  TYPE PRECEDENCE
───────────────────

Values of different shapes are ordered by shape alone:

    null  <  object  <  boolean  <  number  <  string  <  array

§2  SAME-SHAPE ORDER
────────────────────

    boolean   False < True
    number    exact numeric comparison (int vs int is exact, mixed
              int/float is exact, float vs float by value).  Pairs that
              are not comparable (NaN) compare EQUAL.
    string    lexicographic by code point
    object    keys sorted, excluded keys dropped, then pairwise by key
              name and then key value; finally by number of remaining keys
    array     both sides sorted with the same exclusions, then element-wise,
              then by length

Excluded keys are invisible to the order, so two objects that differ only
in an excluded key compare equal and keep their relative order in a stable
sort.  That is what lets the matcher ignore the same keys when it walks
the sorted arrays afterwards.

§3  EQUALITY
────────────

values_equal() is the equality used to align array elements.  It is plain
structural JSON equality with one Python-specific fix: bool is a subclass
of int, so True == 1 holds in Python but not in JSON.
"""

import functools
import re
from typing import Any, Iterable, Sequence

# Shape ranks, see §1
_NULL, _OBJECT, _BOOL, _NUMBER, _STRING, _ARRAY = range(6)


def _rank(value: Any) -> int:
    if value is None:
        return _NULL
    # bool before number: bool is a subclass of int
    if isinstance(value, bool):
        return _BOOL
    if isinstance(value, (int, float)):
        return _NUMBER
    if isinstance(value, str):
        return _STRING
    if isinstance(value, dict):
        return _OBJECT
    if isinstance(value, (list, tuple)):
        return _ARRAY
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_excluded(key: str, exclusions: Sequence[re.Pattern]) -> bool:
    """True if any exclusion pattern matches anywhere in `key`."""
    return any(pattern.search(key) for pattern in exclusions)


def _cmp(a: Any, b: Any) -> int:
    # Never raises; NaN and other incomparable pairs fall through to 0.
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_values(a: Any, b: Any, exclusions: Sequence[re.Pattern] = ()) -> int:
    """
    Compare two JSON values under the canonical order.

    Returns -1, 0 or 1.  Keys matching any pattern in `exclusions` are
    ignored when comparing objects, at every depth.
    """
    rank_a = _rank(a)
    rank_b = _rank(b)
    if rank_a != rank_b:
        return -1 if rank_a < rank_b else 1

    if rank_a == _NULL:
        return 0
    if rank_a in (_BOOL, _NUMBER, _STRING):
        return _cmp(a, b)

    if rank_a == _OBJECT:
        keys_a = [k for k in sorted(a) if not is_excluded(k, exclusions)]
        keys_b = [k for k in sorted(b) if not is_excluded(k, exclusions)]
        for key_a, key_b in zip(keys_a, keys_b):
            order = _cmp(key_a, key_b)
            if order:
                return order
            order = compare_values(a[key_a], b[key_b], exclusions)
            if order:
                return order
        return _cmp(len(keys_a), len(keys_b))

    sorted_a = sort_array(a, exclusions)
    sorted_b = sort_array(b, exclusions)
    for item_a, item_b in zip(sorted_a, sorted_b):
        order = compare_values(item_a, item_b, exclusions)
        if order:
            return order
    return _cmp(len(sorted_a), len(sorted_b))


def sort_array(items: Iterable[Any], exclusions: Sequence[re.Pattern] = ()) -> list:
    """Stable sort of one array level by the canonical order."""
    key = functools.cmp_to_key(lambda a, b: compare_values(a, b, exclusions))
    return sorted(items, key=key)


def canonicalize(value: Any, exclusions: Sequence[re.Pattern] = ()) -> Any:
    """
    Return a copy of `value` with every array, at every depth, sorted.

    Objects keep their key order and their excluded keys; only the order
    of array elements changes.  Sorting an array whose elements were
    canonicalized first gives the same order as sorting the raw elements,
    because compare_values already sorts nested arrays while comparing.
    """
    if isinstance(value, dict):
        return {k: canonicalize(v, exclusions) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return sort_array((canonicalize(item, exclusions) for item in value), exclusions)
    return value


def values_equal(a: Any, b: Any) -> bool:
    """
    Structural JSON equality.

    Differs from Python's == only in keeping booleans apart from numbers,
    at every depth.
    """
    if a is b:
        return True

    a_is_bool = isinstance(a, bool)
    b_is_bool = isinstance(b, bool)
    if a_is_bool or b_is_bool:
        return a_is_bool and b_is_bool and a == b

    if isinstance(a, dict):
        if not isinstance(b, dict) or len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not values_equal(value, b[key]):
                return False
        return True

    if isinstance(a, (list, tuple)):
        if not isinstance(b, (list, tuple)) or len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))

    if isinstance(b, (dict, list, tuple)):
        return False
    return a == b
