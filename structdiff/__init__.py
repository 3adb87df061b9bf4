"""
structdiff — Three-way structural diff for JSON
===============================================

Compares two JSON documents and sorts every difference into one of three
trees: what only the left side has, what only the right side has, and
what both have but with different values.

    >>> m = compare_serialized('["a","b","c"]', '["a","b","d"]')
    >>> [f"{kind}: {entry}" for kind, entry in m.all_diffs()]
    ['Mismatched: .[2].("c" != "d")']

Arrays can be compared regardless of element order (sort_arrays=True) and
object keys can be hidden from the comparison with regular expressions
(exclude_keys=[...]), at every depth.
"""

from structdiff.core import (
    compare,
    compare_serialized,
    compare_files,
    match,
    map_difference,
    MapDifference,
)
from structdiff.tree import (
    # Trees
    DiffTree, Empty, KeyPresent, Leaf, KeyedSubtree, IndexedSubtree,
    EMPTY, KEY_PRESENT,
    # Results
    Mismatch, DiffKind, DiffEntry,
    # Paths
    ObjectKey, ArrayEntry, PathElement,
    flatten, resolve,
)
from structdiff.ordering import canonicalize, compare_values, sort_array, values_equal
from structdiff.align import Edit, EditOp, edit_script
from structdiff.options import CompareOptions, compile_patterns
from structdiff.errors import (
    StructDiffError, InputError, ReadError, PatternError, InconsistentTreeError,
)

__version__ = "0.1.0"
__all__ = [
    "compare", "compare_serialized", "compare_files", "match",
    "map_difference", "MapDifference",
    "DiffTree", "Empty", "KeyPresent", "Leaf", "KeyedSubtree", "IndexedSubtree",
    "EMPTY", "KEY_PRESENT",
    "Mismatch", "DiffKind", "DiffEntry",
    "ObjectKey", "ArrayEntry", "PathElement", "flatten", "resolve",
    "canonicalize", "compare_values", "sort_array", "values_equal",
    "Edit", "EditOp", "edit_script",
    "CompareOptions", "compile_patterns",
    "StructDiffError", "InputError", "ReadError", "PatternError",
    "InconsistentTreeError",
]
