"""Comparison configuration for structdiff.

CompareOptions bundles the two knobs of a comparison: whether arrays are
compared order-insensitively, and which object keys are ignored.

Usage:
    options = CompareOptions.from_patterns(["^_", "timestamp"], sort_arrays=True)
    mismatch = compare(left, right, options.sort_arrays, options.exclude_keys)

    # From an external config mapping (YAML, TOML, CLI namespace, ...)
    options = CompareOptions.from_dict({"sort_arrays": True, "exclude_keys": ["id"]})

"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from .errors import PatternError
from .logger import get_logger

logger = get_logger(__name__)

PatternLike = Union[str, re.Pattern]


def compile_patterns(patterns: Iterable[PatternLike]) -> tuple[re.Pattern, ...]:
    """Compile exclusion patterns, passing already compiled ones through.

    Raises:
        PatternError: for the first pattern that does not compile
    """
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise PatternError(pattern, str(exc)) from exc
    return tuple(compiled)


@dataclass(frozen=True, slots=True)
class CompareOptions:
    """Immutable comparison configuration.

    Attributes:
        sort_arrays: Sort arrays (deeply) before aligning them
        exclude_keys: Compiled patterns; object keys matching any of them
            are ignored everywhere, including in array sorting

    """

    sort_arrays: bool = False
    exclude_keys: tuple[re.Pattern, ...] = ()

    @classmethod
    def from_patterns(
        cls,
        patterns: Iterable[PatternLike] = (),
        sort_arrays: bool = False,
        lenient: bool = False,
    ) -> "CompareOptions":
        """Create CompareOptions from raw exclusion patterns.

        With lenient=True an invalid pattern does not fail: a warning is
        logged and the whole pattern list is dropped.
        """
        try:
            exclude_keys = compile_patterns(patterns)
        except PatternError as exc:
            if not lenient:
                raise
            logger.warning("%s; ignoring all exclusion patterns", exc)
            exclude_keys = ()
        return cls(sort_arrays=sort_arrays, exclude_keys=exclude_keys)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "CompareOptions":
        """Create CompareOptions from a dictionary.

        Recognized keys: "sort_arrays" and "exclude_keys".  Unknown keys
        are ignored so that the mapping can be a larger config section.
        """
        patterns = config_dict.get("exclude_keys") or ()
        if isinstance(patterns, (str, re.Pattern)):
            patterns = (patterns,)
        return cls.from_patterns(
            patterns,
            sort_arrays=bool(config_dict.get("sort_arrays", False)),
        )
