"""
structdiff.errors — Exception classes.

Two families:

    • StructDiffError and its subclasses describe bad DATA: unparsable
      JSON, unreadable files, exclusion patterns that do not compile.
      Callers are expected to catch these and report them.

    • InconsistentTreeError describes a bug in the matcher itself: a
      subtree was merged into a parent of the wrong shape.  It is a
      RuntimeError, not a StructDiffError, so that a handler written for
      bad input never swallows it.
"""

from typing import Any, Optional, Union


class StructDiffError(Exception):
    """Base exception for all data-level structdiff errors."""


class InputError(StructDiffError):
    """
    Malformed JSON text on one side of a comparison.

    `side` is "first" or "second", matching the argument order of
    compare_serialized.
    """

    def __init__(
        self,
        side: str,
        message: str,
        lineno: Optional[int] = None,
        colno: Optional[int] = None,
    ) -> None:
        self.side = side
        self.message = message
        self.lineno = lineno
        self.colno = colno

        location = ""
        if lineno is not None:
            location = f" (line {lineno}"
            if colno is not None:
                location += f", column {colno}"
            location += ")"
        super().__init__(f"Error parsing {side} json{location}: {message}")


class ReadError(StructDiffError):
    """A document could not be read from disk."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"Error opening file {path}: {message}")


class PatternError(StructDiffError):
    """An exclusion pattern is not a valid regular expression."""

    def __init__(self, pattern: str, message: str) -> None:
        self.pattern = pattern
        self.message = message
        super().__init__(f"Invalid exclusion pattern {pattern!r}: {message}")


class InconsistentTreeError(RuntimeError):
    """
    A child subtree was merged into a parent tree of an incompatible shape.

    Raised only when the matcher breaks its own contract, never because of
    what the documents contain.

    Attributes:
        location: Object key or array index the child was merged under
        parent: Name of the parent tree variant
        child: Name of the child tree variant
    """

    def __init__(self, location: Union[str, int], parent: Any, child: Any) -> None:
        self.location = location
        self.parent = type(parent).__name__
        self.child = type(child).__name__
        expected = "KeyedSubtree" if isinstance(location, str) else "IndexedSubtree"
        super().__init__(
            f"Tried to insert {self.child} at {location!r} into {self.parent}, "
            f"expected Empty or {expected}: diff tree structure is incoherent"
        )
