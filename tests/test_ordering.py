"""
Tests for the canonical value order and the array aligner.

    §1  Type precedence and same-type order
    §2  Sorting and canonicalization
    §3  Equality
    §4  Edit scripts
"""

import sys
import os
import re

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from structdiff.ordering import compare_values, sort_array, canonicalize, values_equal, is_excluded
from structdiff.align import Edit, EditOp, edit_script


# ═══════════════════════════════════════════════════════════════════
#  §1  ORDER
# ═══════════════════════════════════════════════════════════════════

class TestCompareValues:

    # Ascending by shape: null, object, bool, number, string, array
    LADDER = [None, {"a": 1}, False, 0, "", []]

    def test_type_precedence(self):
        for i, low in enumerate(self.LADDER):
            for high in self.LADDER[i + 1:]:
                assert compare_values(low, high) == -1
                assert compare_values(high, low) == 1

    @pytest.mark.parametrize("a,b,expected", [
        (None, None, 0),
        (False, True, -1),
        (True, True, 0),
        (1, 2, -1),
        (2, 1.5, 1),
        (1, 1.0, 0),
        (-3, 10 ** 20, -1),
        ("a", "b", -1),
        ("b", "a", 1),
        ("B", "a", -1),
        ("ab", "a", 1),
        ([1], [1, 1], -1),
        ([2, 1], [1, 2], 0),
        ([3], [1, 2], 1),
        ({"a": 1}, {"b": 0}, -1),
        ({"a": 1}, {"a": 2}, -1),
        ({"a": 1}, {"a": 1, "b": 1}, -1),
        ({"b": 1, "a": 2}, {"a": 2, "b": 1}, 0),
    ])
    def test_same_type(self, a, b, expected):
        assert compare_values(a, b) == expected

    def test_bool_is_not_a_number(self):
        assert compare_values(True, 0) == -1
        assert compare_values(1, True) == 1

    def test_nan_compares_equal(self):
        assert compare_values(float("nan"), 1.0) == 0

    def test_exclusions_hide_keys(self):
        exclusions = [re.compile("^id$")]
        assert compare_values({"id": 1, "v": 2}, {"id": 9, "v": 2}, exclusions) == 0
        assert compare_values({"id": 1}, {}, exclusions) == 0
        assert compare_values({"id": 1, "v": 1}, {"id": 0, "v": 2}, exclusions) == -1

    def test_not_json(self):
        with pytest.raises(TypeError):
            compare_values(object(), 1)

    def test_is_excluded(self):
        patterns = [re.compile("time"), re.compile("^_")]
        assert is_excluded("updated_time", patterns)
        assert is_excluded("_rev", patterns)
        assert not is_excluded("name", patterns)
        assert not is_excluded("name", [])


# ═══════════════════════════════════════════════════════════════════
#  §2  SORTING
# ═══════════════════════════════════════════════════════════════════

class TestSorting:

    def test_mixed_types(self):
        items = [[1], "s", 2, True, {"k": 0}, None]
        assert sort_array(items) == [None, {"k": 0}, True, 2, "s", [1]]

    def test_stable_for_excluded_keys(self):
        items = [{"id": 2, "v": 1}, {"id": 1, "v": 1}, {"id": 3, "v": 0}]
        result = sort_array(items, [re.compile("id")])
        assert result == [{"id": 3, "v": 0}, {"id": 2, "v": 1}, {"id": 1, "v": 1}]

    def test_canonicalize_is_deep(self):
        doc = {"b": [3, 1, 2], "a": [{"x": ["z", "y"]}, None]}
        assert canonicalize(doc) == {"b": [1, 2, 3], "a": [None, {"x": ["y", "z"]}]}

    def test_canonicalize_keeps_key_order(self):
        assert list(canonicalize({"z": 1, "a": 2})) == ["z", "a"]

    def test_canonicalize_copies(self):
        doc = [[2, 1]]
        result = canonicalize(doc)
        assert result == [[1, 2]]
        assert doc == [[2, 1]]

    def test_canonicalize_is_idempotent(self):
        doc = [{"c": ["e", "d"]}, "b", [3, [2, 1]], None]
        once = canonicalize(doc)
        assert canonicalize(once) == once


# ═══════════════════════════════════════════════════════════════════
#  §3  EQUALITY
# ═══════════════════════════════════════════════════════════════════

class TestValuesEqual:

    @pytest.mark.parametrize("a,b", [
        (None, None),
        (1, 1.0),
        ("x", "x"),
        ({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]}),
        ({"a": 1, "b": 2}, {"b": 2, "a": 1}),
        ([], []),
    ])
    def test_equal(self, a, b):
        assert values_equal(a, b)

    @pytest.mark.parametrize("a,b", [
        (True, 1),
        (0, False),
        ([True], [1]),
        ({"a": 1}, {"a": True}),
        ({"a": 1}, {"b": 1}),
        ([1, 2], [2, 1]),
        ([1], [1, 1]),
        ({}, []),
        ("1", 1),
        (None, 0),
    ])
    def test_not_equal(self, a, b):
        assert not values_equal(a, b)


# ═══════════════════════════════════════════════════════════════════
#  §4  EDIT SCRIPTS
# ═══════════════════════════════════════════════════════════════════

def _apply(old, new, script):
    """Rebuild `new` from `old` using only the script and new's values."""
    result = []
    cursor = 0
    for edit in script:
        result.extend(old[cursor:edit.old_start])
        result.extend(new[edit.new_start:edit.new_start + edit.new_len])
        cursor = edit.old_start + edit.old_len
    result.extend(old[cursor:])
    return result


class TestEditScript:

    @pytest.mark.parametrize("old,new,expected", [
        ("abc", "abc", []),
        ("", "", []),
        ("abc", "abd", [Edit(EditOp.REPLACE, 2, 1, 2, 1)]),
        ("abc", "ab", [Edit(EditOp.DELETE, 2, 1, 2, 0)]),
        ("ab", "abc", [Edit(EditOp.INSERT, 2, 0, 2, 1)]),
        ("abc", "aabd", [Edit(EditOp.INSERT, 0, 0, 0, 1), Edit(EditOp.REPLACE, 2, 1, 3, 1)]),
        ("aba", "accca", [Edit(EditOp.REPLACE, 1, 1, 1, 3)]),
        ("", "xy", [Edit(EditOp.INSERT, 0, 0, 0, 2)]),
        ("xy", "", [Edit(EditOp.DELETE, 0, 2, 0, 0)]),
        ("aab", "ab", [Edit(EditOp.DELETE, 0, 1, 0, 0)]),
        ("aac", "ab", [Edit(EditOp.REPLACE, 1, 1, 1, 1)]),
        ("a", "aab", [Edit(EditOp.INSERT, 1, 0, 1, 2)]),
        ("abc", "abab", [Edit(EditOp.REPLACE, 2, 1, 2, 2)]),
        ("abxab", "ab", [Edit(EditOp.DELETE, 0, 3, 0, 0)]),
    ])
    def test_scripts(self, old, new, expected):
        assert edit_script(list(old), list(new)) == expected

    def test_prefix_slides_to_earliest_insert(self):
        """A leading insertion after a shared prefix matches as late as possible."""
        assert edit_script(list("xab"), list("xxac")) == [
            Edit(EditOp.INSERT, 0, 0, 0, 1), Edit(EditOp.REPLACE, 2, 1, 3, 1),
        ]
        assert edit_script(list("xxac"), list("xab")) == [
            Edit(EditOp.DELETE, 0, 1, 0, 0), Edit(EditOp.REPLACE, 3, 1, 2, 1),
        ]

    def test_long_arrays_differing_at_the_end(self):
        n = 3000
        calls = 0

        def counting_eq(a, b):
            nonlocal calls
            calls += 1
            return values_equal(a, b)

        old = list(range(n)) + ["x"]
        new = list(range(n)) + ["y"]
        assert edit_script(old, new, eq=counting_eq) == [Edit(EditOp.REPLACE, n, 1, n, 1)]
        # One pass over the shared prefix, no table over it
        assert calls < 2 * n

    def test_long_arrays_with_insert_in_the_middle(self):
        n = 3000
        calls = 0

        def counting_eq(a, b):
            nonlocal calls
            calls += 1
            return values_equal(a, b)

        old = list(range(n))
        new = old[:n // 2] + ["new"] + old[n // 2:]
        assert edit_script(old, new, eq=counting_eq) == [Edit(EditOp.INSERT, n // 2, 0, n // 2, 1)]
        assert calls < 2 * n

    def test_swap_mirrors(self):
        forward = edit_script(["x", "y"], ["y", "x"])
        backward = edit_script(["y", "x"], ["x", "y"])
        assert forward == [Edit(EditOp.INSERT, 0, 0, 0, 1), Edit(EditOp.DELETE, 1, 1, 2, 0)]
        assert backward == [Edit(EditOp.DELETE, 0, 1, 0, 0), Edit(EditOp.INSERT, 2, 0, 1, 1)]

    def test_deterministic(self):
        old = [1, 2, 3, 2, 1]
        new = [2, 1, 3, 1, 2]
        assert edit_script(old, new) == edit_script(old, new)

    @pytest.mark.parametrize("old,new", [
        ("kitten", "sitting"),
        ("abcabba", "cbabac"),
        ("", "abc"),
        ("aaaa", "a"),
        ("abcdef", "fedcba"),
    ])
    def test_script_rebuilds_new(self, old, new):
        script = edit_script(list(old), list(new))
        assert _apply(list(old), list(new), script) == list(new)

    @pytest.mark.parametrize("old,new", [
        ("kitten", "sitting"),
        ("abcabba", "cbabac"),
        ("abcdef", "fedcba"),
    ])
    def test_minimal(self, old, new):
        """Edited element count equals m + n - 2 * LCS."""
        lcs = [[0] * (len(new) + 1) for _ in range(len(old) + 1)]
        for i in range(1, len(old) + 1):
            for j in range(1, len(new) + 1):
                if old[i - 1] == new[j - 1]:
                    lcs[i][j] = lcs[i - 1][j - 1] + 1
                else:
                    lcs[i][j] = max(lcs[i - 1][j], lcs[i][j - 1])
        script = edit_script(list(old), list(new))
        edited = sum(e.old_len + e.new_len for e in script)
        assert edited == len(old) + len(new) - 2 * lcs[-1][-1]

    def test_operations_ordered_and_disjoint(self):
        script = edit_script(list("abcabba"), list("cbabac"))
        for a, b in zip(script, script[1:]):
            assert a.old_start + a.old_len < b.old_start or a.new_start + a.new_len < b.new_start

    def test_custom_equality(self):
        script = edit_script(["A", "b"], ["a", "B"], eq=lambda x, y: x.lower() == y.lower())
        assert script == []

    def test_bools_and_numbers_differ(self):
        assert edit_script([True], [1]) == [Edit(EditOp.REPLACE, 0, 1, 0, 1)]

    def test_repr(self):
        assert repr(Edit(EditOp.DELETE, 2, 1, 2, 0)) == "Delete(old=2, len=1)"
        assert repr(Edit(EditOp.INSERT, 2, 0, 2, 1)) == "Insert(new=2, len=1)"
        assert repr(Edit(EditOp.REPLACE, 1, 1, 1, 3)) == "Replace(old=1, len=1, new=1, len=3)"
