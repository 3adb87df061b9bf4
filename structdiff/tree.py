"""
structdiff.tree — The diff tree and its flat views
==================================================

A comparison produces a Mismatch: three diff trees partitioning every
difference by where it lives.

    left_only        values (or keys) present only in the left document
    right_only       values (or keys) present only in the right document
    both_different   positions present in both, holding different values

§1  DIFF TREES
──────────────

    Empty                     no difference here
    KeyPresent                key exists on one side, nothing to compare
    Leaf(left, right)         the two values at this position
    KeyedSubtree({k: tree})   differences under object keys
    IndexedSubtree([(i, tree)])
                              differences under array positions, in
                              insertion order (indices may repeat)

KeyPresent is a subclass of Empty: consumers see a single "nothing here"
shape, but the merge functions in core.py elide only the plain Empty
sentinel, never the presence marker.

Subtrees never contain a plain Empty child.

§2  DIFF ENTRIES
────────────────

flatten() walks a tree depth-first and yields one DiffEntry per
difference, each carrying its path from the root:

    .b.c.e.(5 != 6)               Leaf under object keys
    .[0].c.[1].("f" != "e")       Leaf under array positions
    .b.c.f                        key present on one side only

An Empty reached through an array index yields nothing: a missing array
element is already reported as a one-sided Leaf by the matcher.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union

from .formats import to_json


# ═══════════════════════════════════════════════════════════════════
#  PATHS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class ObjectKey:
    """Path step into an object field."""
    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True, slots=True)
class ArrayEntry:
    """Path step into an array position."""
    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


PathElement = Union[ObjectKey, ArrayEntry]

_MISSING = object()


def resolve(path: tuple[PathElement, ...], value: Any, default: Any = None) -> Any:
    """
    Follow `path` inside `value`.

    Returns the value found, or `default` at the first step that does
    not apply (missing key, index out of range, wrong container type).
    Pass a sentinel as `default` to tell a failed lookup from a JSON null.
    """
    current = value
    for element in path:
        if isinstance(element, ObjectKey):
            if not isinstance(current, dict):
                return default
            current = current.get(element.key, _MISSING)
        elif isinstance(element, ArrayEntry):
            if not isinstance(current, (list, tuple)) or not 0 <= element.index < len(current):
                return default
            current = current[element.index]
        else:
            return default
        if current is _MISSING:
            return default
    return current


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """A single difference, addressed by its path from the document root."""
    path: tuple[PathElement, ...]
    values: Optional[tuple[Any, Any]] = None

    def resolve(self, left: Any, right: Any, default: Any = None) -> tuple[Any, Any]:
        """Look this entry's path up in both documents."""
        return resolve(self.path, left, default), resolve(self.path, right, default)

    def path_parts(self) -> list[Union[str, int]]:
        return [e.key if isinstance(e, ObjectKey) else e.index for e in self.path]

    def __str__(self) -> str:
        text = "".join(f".{element}" for element in self.path)
        if self.values is not None:
            left = to_json(self.values[0])
            right = to_json(self.values[1])
            if left != right:
                text += f".({left} != {right})"
            else:
                text += f".({left})"
        return text


# ═══════════════════════════════════════════════════════════════════
#  DIFF TREES
# ═══════════════════════════════════════════════════════════════════

class DiffTree:
    """Base class for diff tree nodes.  Not instantiated directly."""
    __slots__ = ()

    def get_diffs(self) -> list[DiffEntry]:
        """All differences below this node, flattened."""
        return list(flatten(self))


@dataclass(frozen=True, slots=True)
class Empty(DiffTree):
    """No difference at this position."""

    def __repr__(self) -> str:
        return "Empty"


@dataclass(frozen=True, slots=True)
class KeyPresent(Empty):
    """The key exists on this side only; there is no value to show."""

    def __repr__(self) -> str:
        return "KeyPresent"


EMPTY = Empty()
KEY_PRESENT = KeyPresent()


@dataclass(frozen=True, slots=True)
class Leaf(DiffTree):
    """The two values found at this position."""
    left: Any
    right: Any

    def __repr__(self) -> str:
        return f"Leaf({self.left!r}, {self.right!r})"


@dataclass(frozen=True, slots=True)
class KeyedSubtree(DiffTree):
    """
    Differences below object keys.

    Example:
        KeyedSubtree({"port": Leaf(443, 8080)})
    """
    children: dict[str, DiffTree] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"KeyedSubtree({self.children!r})"


@dataclass(frozen=True, slots=True)
class IndexedSubtree(DiffTree):
    """
    Differences below array positions, in insertion order.

    Example:
        IndexedSubtree([(2, Leaf("c", "d"))])
    """
    children: list[tuple[int, DiffTree]] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"IndexedSubtree({self.children!r})"


def flatten(tree: DiffTree, prefix: tuple[PathElement, ...] = ()) -> Iterator[DiffEntry]:
    """
    Walk `tree` depth-first, yielding one DiffEntry per difference.

    Lazy; call again for a fresh pass.  Entry order follows the
    insertion order of the subtrees, which the matcher derives from the
    key order of the documents.
    """
    if isinstance(tree, Empty):
        if prefix and isinstance(prefix[-1], ObjectKey):
            yield DiffEntry(prefix)
    elif isinstance(tree, Leaf):
        yield DiffEntry(prefix, (tree.left, tree.right))
    elif isinstance(tree, KeyedSubtree):
        for key, child in tree.children.items():
            yield from flatten(child, prefix + (ObjectKey(key),))
    elif isinstance(tree, IndexedSubtree):
        for index, child in tree.children:
            yield from flatten(child, prefix + (ArrayEntry(index),))
    else:
        raise TypeError(f"Not a diff tree: {type(tree).__name__}")


# ═══════════════════════════════════════════════════════════════════
#  MISMATCH
# ═══════════════════════════════════════════════════════════════════

class DiffKind(Enum):
    """Which of the three trees a flattened entry came from."""
    ROOT_MISMATCH = "Mismatch at root."
    LEFT_ONLY = "Extra on left"
    RIGHT_ONLY = "Extra on right"
    BOTH_DIFFERENT = "Mismatched"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Mismatch:
    """The full result of one comparison."""
    left_only: DiffTree
    right_only: DiffTree
    both_different: DiffTree

    @classmethod
    def empty(cls) -> "Mismatch":
        return cls(EMPTY, EMPTY, EMPTY)

    def is_empty(self) -> bool:
        """True if the documents were equal."""
        return (type(self.left_only) is Empty
                and type(self.right_only) is Empty
                and type(self.both_different) is Empty)

    def all_diffs(self) -> list[tuple[DiffKind, DiffEntry]]:
        """Every difference: mismatched values first, then left, then right."""
        diffs = [(DiffKind.BOTH_DIFFERENT, e) for e in flatten(self.both_different)]
        diffs.extend((DiffKind.LEFT_ONLY, e) for e in flatten(self.left_only))
        diffs.extend((DiffKind.RIGHT_ONLY, e) for e in flatten(self.right_only))
        return diffs

    def __repr__(self) -> str:
        if self.is_empty():
            return "Mismatch(empty)"
        return (f"Mismatch(left_only={self.left_only!r}, "
                f"right_only={self.right_only!r}, "
                f"both_different={self.both_different!r})")
