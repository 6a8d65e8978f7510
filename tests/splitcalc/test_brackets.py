"""
Tests for bracket substitution.
"""

import pytest

from splitcalc import (
    BracketHeap,
    ExpressionLimits,
    InvalidPlaceholderError,
    LimitExceededError,
    UnmatchedBracketError,
    substitute_brackets,
)
from splitcalc.brackets import find_closing_bracket, make_placeholder, split_placeholder


class TestFindClosingBracket:
    """Tests for the depth-counting bracket matcher."""

    def test_simple(self):
        assert find_closing_bracket("(a)", 0) == 2

    def test_nested(self):
        assert find_closing_bracket("(a(b)c)d", 0) == 6

    def test_inner_start(self):
        assert find_closing_bracket("(a(b)c)d", 2) == 4

    def test_unmatched(self):
        assert find_closing_bracket("(a(b)", 0) == -1


class TestSubstitution:
    """Tests for replacing groups with placeholders."""

    def test_replaces_each_top_level_group(self):
        heap = BracketHeap()
        assert substitute_brackets("(1+2)*(3)", heap) == "&0;*&1;"
        assert heap[0] == "1+2"
        assert heap[1] == "3"

    def test_keeps_inner_groups_in_heap_entry(self):
        heap = BracketHeap()
        assert substitute_brackets("((1))", heap) == "&0;"
        assert heap[0] == "(1)"
        assert len(heap) == 1

    def test_empty_group(self):
        heap = BracketHeap()
        assert substitute_brackets("f()", heap) == "f&0;"
        assert heap[0] == ""

    def test_text_without_brackets_is_unchanged(self):
        heap = BracketHeap()
        assert substitute_brackets("1+2", heap) == "1+2"
        assert len(heap) == 0

    def test_unclosed_bracket(self):
        with pytest.raises(UnmatchedBracketError) as exc_info:
            substitute_brackets("1+(2", BracketHeap())
        assert exc_info.value.position == 2
        assert exc_info.value.expression == "1+(2"

    def test_unopened_bracket(self):
        with pytest.raises(UnmatchedBracketError) as exc_info:
            substitute_brackets("(1))", BracketHeap())
        assert exc_info.value.position == 3

    def test_error_context_points_at_bracket(self):
        with pytest.raises(UnmatchedBracketError) as exc_info:
            substitute_brackets("1+(2", BracketHeap())
        assert exc_info.value.format_with_context().endswith("\n  1+(2\n    ^")


class TestBracketHeap:
    """Tests for heap storage and placeholder resolution."""

    def test_resolve(self):
        heap = BracketHeap()
        heap.push("a+b")
        assert heap.resolve("0") == "a+b"

    @pytest.mark.parametrize("index_text", ["1", "-1", "x", "", " 0"])
    def test_resolve_rejects_invalid_index(self, index_text):
        heap = BracketHeap()
        heap.push("a+b")
        with pytest.raises(InvalidPlaceholderError) as exc_info:
            heap.resolve(index_text)
        assert exc_info.value.placeholder == index_text

    def test_clear(self):
        heap = BracketHeap()
        heap.push("1")
        heap.clear()
        assert len(heap) == 0

    def test_group_limit(self):
        heap = BracketHeap(ExpressionLimits(max_bracket_groups=1))
        heap.push("1")
        with pytest.raises(LimitExceededError):
            heap.push("2")


class TestPlaceholders:
    """Tests for placeholder formatting and detection."""

    def test_make_placeholder(self):
        assert make_placeholder(12) == "&12;"

    def test_split_placeholder(self):
        assert split_placeholder("sqrt&12;") == "12"

    def test_split_placeholder_requires_later_semicolon(self):
        assert split_placeholder("a;b&") is None
        assert split_placeholder("&1") is None
        assert split_placeholder("x") is None
