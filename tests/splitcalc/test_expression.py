"""
Tests for parsed expressions, variable cells and bound callables.
"""

# pyright: reportAttributeAccessIssue=false

import math

import pytest

from splitcalc import BoundExpression, Variable, VariableTable, parse


class TestBinding:
    """Tests for bind() and invoke()."""

    def test_rebinding_without_reparsing(self):
        bound = parse("x*x").bind(["x"])
        assert bound.invoke([5.0]) == 25.0
        assert bound.invoke([7.0]) == 49.0

    def test_positional_assignment(self):
        bound = parse("x - y").bind(["y", "x"])
        assert bound.invoke([1.0, 10.0]) == 9.0

    def test_multi_value(self):
        bound = parse("x, 2*x").bind(["x"])
        assert bound.invoke_multi([3.0]) == [3.0, 6.0]

    def test_invoke_multi_on_scalar_tree_is_none(self):
        bound = parse("x+1").bind(["x"])
        assert bound.invoke_multi([1.0]) is None

    def test_unknown_name_is_discard_slot(self):
        bound = parse("x+y").bind(["z", "y"])
        assert bound.invoke([100.0, 2.0]) == 2.0

    def test_extra_arguments_are_ignored(self):
        bound = parse("x").bind(["x"])
        assert bound.invoke([1.0, 2.0, 3.0]) == 1.0

    def test_missing_arguments_keep_previous_values(self):
        bound = parse("x+y").bind(["x", "y"])
        bound.invoke([1.0, 2.0])
        assert bound.invoke([10.0]) == 12.0

    def test_call_syntax(self):
        bound = parse("sqrt(x)").bind(["x"])
        assert bound(4.0) == 2.0

    def test_bound_callables_share_cells(self):
        expression = parse("a*b")
        first = expression.bind(["a"])
        second = expression.bind(["b"])
        second.invoke([3.0])
        assert first.invoke([2.0]) == 6.0

    def test_binding_is_visible_through_expression(self):
        expression = parse("x+1")
        expression.bind(["x"]).invoke([4.0])
        assert expression.get("x").value == 4.0
        assert expression.value() == 5.0

    def test_bound_properties(self):
        expression = parse("x")
        bound = expression.bind(["x", "q"])
        assert isinstance(bound, BoundExpression)
        assert bound.expression is expression
        assert bound.names == ["x", "q"]

    def test_nan_argument_propagates(self):
        bound = parse("x+1").bind(["x"])
        assert math.isnan(bound.invoke([math.nan]))


class TestNamedAccess:
    """Tests for get() and set()."""

    def test_set_and_get(self):
        expression = parse("x+y")
        expression.set("y", 2.5)
        assert expression.get("y").value == 2.5
        assert expression.value() == 2.5

    def test_unknown_name_raises_key_error(self):
        expression = parse("x")
        with pytest.raises(KeyError):
            expression.get("y")
        with pytest.raises(KeyError):
            expression.set("y", 1.0)

    def test_variables_start_at_zero(self):
        assert parse("x").get("x").value == 0.0


class TestVariableCells:
    """Tests for bounds and the variable table."""

    def test_bounds_clamp_assignments(self):
        expression = parse("x")
        expression.get("x").set_bounds(0.0, 10.0)
        expression.set("x", 20.0)
        assert expression.value() == 10.0
        expression.set("x", -5.0)
        assert expression.value() == 0.0

    def test_set_bounds_clamps_current_value(self):
        variable = Variable("x", value=50.0)
        variable.set_bounds(maximum=10.0)
        assert variable.value == 10.0
        assert variable.is_bounded

    def test_inverted_bounds_raise(self):
        with pytest.raises(ValueError):
            Variable("x").set_bounds(5.0, 1.0)

    def test_nan_is_not_clamped(self):
        variable = Variable("x")
        variable.set_bounds(0.0, 1.0)
        assert math.isnan(variable.assign(math.nan))

    def test_unbounded_by_default(self):
        assert not Variable("x").is_bounded

    def test_str(self):
        assert str(Variable("x", value=1.5)) == "x[1.5]"

    def test_table_interns_names(self):
        table = VariableTable()
        assert table.intern("a") == 0
        assert table.intern("b") == 1
        assert table.intern("a") == 0
        assert len(table) == 2
        assert "a" in table
        assert table.handle_of("c") is None
        assert [v.name for v in table] == ["a", "b"]


class TestRendering:
    """Tests for the string and dump renderings."""

    @pytest.mark.parametrize(
        "source,rendered",
        [
            ("a+b+c", "( a + b + c )"),
            ("2*x", "( 2 * x )"),
            ("-x", "( -x )"),
            ("1/x", "( 1 * ( 1/x ) )"),
            ("x^2", "( x^2 )"),
            ("x%2", "( x%2 )"),
            ("min(1,2)", "min( 1, 2 )"),
            ("PI", "PI"),
            ("1,2", "1, 2"),
            ("0.5", "0.5"),
        ],
    )
    def test_str(self, source, rendered):
        assert str(parse(source)) == rendered

    def test_dump(self):
        assert parse("1+x").dump() == "Sum:\n  Scalar: 1\n  Variable: x (#0)"

    def test_dump_constant_and_call(self):
        assert parse("sqrt(PI)").dump() == "FunctionCall: sqrt\n  Constant: PI"

    def test_repr(self):
        assert repr(parse("x")) == "Expression('x')"


class TestExpressionProperties:
    """Tests for expression metadata."""

    def test_variable_names_in_first_appearance_order(self):
        assert parse("b*a+b").variable_names == ["b", "a"]

    def test_is_multi_value(self):
        assert parse("1,2").is_multi_value
        assert not parse("1+2").is_multi_value

    def test_source(self):
        assert parse(" x + 1 ").source == " x + 1 "
