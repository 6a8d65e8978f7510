"""
Tests for node types and tree utilities.
"""

import dataclasses
import math

import pytest

from splitcalc import (
    FunctionCallNode,
    PowerNode,
    ScalarNode,
    SumNode,
    VariableNode,
    calculate_depth,
    count_nodes,
    parse,
)
from splitcalc.nodes import children, format_number


class TestTreeUtilities:
    """Tests for counting and depth."""

    def test_count_nodes(self):
        assert count_nodes(parse("1+2*3").root) == 5

    def test_calculate_depth(self):
        assert calculate_depth(parse("1").root) == 1
        assert calculate_depth(parse("1+2*3").root) == 3

    def test_constants_are_leaves(self):
        root = parse("PI").root
        assert count_nodes(root) == 1
        assert children(root) == ()

    def test_children_in_evaluation_order(self):
        node = PowerNode(base=ScalarNode(value=2.0), exponent=ScalarNode(value=3.0))
        assert children(node) == (ScalarNode(value=2.0), ScalarNode(value=3.0))

    def test_leaf_children(self):
        assert children(VariableNode(handle=0, name="x")) == ()


class TestNodeModel:
    """Tests for node value semantics."""

    def test_nodes_are_immutable(self):
        node = ScalarNode(value=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = 2.0

    def test_structural_equality(self):
        assert parse("1+x").root == SumNode(
            terms=(ScalarNode(value=1.0), VariableNode(handle=0, name="x"))
        )

    def test_call_equality_ignores_callable(self):
        first = FunctionCallNode(name="f", args=None, function=lambda args: 1.0)
        second = FunctionCallNode(name="f", args=None, function=lambda args: 2.0)
        assert first == second


class TestFormatNumber:
    """Tests for scalar rendering."""

    @pytest.mark.parametrize(
        "value,text",
        [
            (2.0, "2"),
            (-3.0, "-3"),
            (0.5, "0.5"),
            (1e20, "1e+20"),
            (math.inf, "inf"),
            (math.nan, "nan"),
        ],
    )
    def test_format(self, value, text):
        assert format_number(value) == text
