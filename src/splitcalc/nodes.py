"""
Node types for parsed arithmetic expressions.

The tree is produced by the parser and consumed by the evaluator.
Every node is immutable; the only mutable state a tree can reach is
the variable table, which VariableNode refers to by handle.
"""

import math
from abc import ABC
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional, Sequence, Union

# Signature shared by registered functions and constant adapters.
NodeFunction = Callable[[Sequence[float]], float]


# ============================================================
# Node Types
# ============================================================


@dataclass(frozen=True)
class NodeBase(ABC):
    """Base class for all expression nodes."""


@dataclass(frozen=True)
class ScalarNode(NodeBase):
    """Numeric literal node."""

    value: float

    @property
    def type(self) -> Literal["Scalar"]:
        return "Scalar"


@dataclass(frozen=True)
class VariableNode(NodeBase):
    """Reference to a variable cell in the owning variable table."""

    handle: int
    name: str

    @property
    def type(self) -> Literal["Variable"]:
        return "Variable"


@dataclass(frozen=True)
class SumNode(NodeBase):
    """Left-to-right sum of one or more terms."""

    terms: Sequence["Node"]

    @property
    def type(self) -> Literal["Sum"]:
        return "Sum"


@dataclass(frozen=True)
class ProductNode(NodeBase):
    """Left-to-right product of one or more factors."""

    factors: Sequence["Node"]

    @property
    def type(self) -> Literal["Product"]:
        return "Product"


@dataclass(frozen=True)
class NegateNode(NodeBase):
    """Arithmetic negation."""

    operand: "Node"

    @property
    def type(self) -> Literal["Negate"]:
        return "Negate"


@dataclass(frozen=True)
class ReciprocalNode(NodeBase):
    """Multiplicative inverse (1/x)."""

    operand: "Node"

    @property
    def type(self) -> Literal["Reciprocal"]:
        return "Reciprocal"


@dataclass(frozen=True)
class PowerNode(NodeBase):
    """Exponentiation (base^exponent)."""

    base: "Node"
    exponent: "Node"

    @property
    def type(self) -> Literal["Power"]:
        return "Power"


@dataclass(frozen=True)
class ModulusNode(NodeBase):
    """Floating-point remainder (left % right)."""

    left: "Node"
    right: "Node"

    @property
    def type(self) -> Literal["Modulus"]:
        return "Modulus"


@dataclass(frozen=True)
class FunctionCallNode(NodeBase):
    """
    Call of a registered function or constant.

    Constants are calls with ``args`` set to None.
    """

    name: str
    args: Optional[Sequence["Node"]]
    function: NodeFunction = field(compare=False, repr=False)

    @property
    def type(self) -> Literal["FunctionCall"]:
        return "FunctionCall"


@dataclass(frozen=True)
class TupleNode(NodeBase):
    """Comma-separated list of values; its scalar value is the first element."""

    elements: Sequence["Node"]

    @property
    def type(self) -> Literal["Tuple"]:
        return "Tuple"


# Union type for all nodes
Node = Union[
    ScalarNode,
    VariableNode,
    SumNode,
    ProductNode,
    NegateNode,
    ReciprocalNode,
    PowerNode,
    ModulusNode,
    FunctionCallNode,
    TupleNode,
]


# ============================================================
# Tree Utilities
# ============================================================


def children(node: Node) -> Sequence[Node]:
    """Returns the direct children of a node in evaluation order."""
    if node.type in ("Scalar", "Variable"):
        return ()

    if node.type == "Sum":
        return tuple(node.terms)

    if node.type == "Product":
        return tuple(node.factors)

    if node.type in ("Negate", "Reciprocal"):
        return (node.operand,)

    if node.type == "Power":
        return (node.base, node.exponent)

    if node.type == "Modulus":
        return (node.left, node.right)

    if node.type == "FunctionCall":
        return tuple(node.args or ())

    if node.type == "Tuple":
        return tuple(node.elements)

    return ()


def count_nodes(node: Node) -> int:
    """Counts the total number of nodes in a tree."""
    return 1 + sum(count_nodes(child) for child in children(node))


def calculate_depth(node: Node) -> int:
    """Calculates the maximum depth of a tree."""
    max_child_depth = 0
    for child in children(node):
        max_child_depth = max(max_child_depth, calculate_depth(child))
    return 1 + max_child_depth


def format_number(value: float) -> str:
    """Formats a float the way scalars are rendered: no trailing '.0'."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(float(value))


def node_to_string(node: Node) -> str:
    """Returns the parenthesised one-line rendering of a tree."""
    if node.type == "Scalar":
        return format_number(node.value)

    if node.type == "Variable":
        return node.name

    if node.type == "Sum":
        return "( " + " + ".join(node_to_string(t) for t in node.terms) + " )"

    if node.type == "Product":
        return "( " + " * ".join(node_to_string(f) for f in node.factors) + " )"

    if node.type == "Negate":
        return f"( -{node_to_string(node.operand)} )"

    if node.type == "Reciprocal":
        return f"( 1/{node_to_string(node.operand)} )"

    if node.type == "Power":
        return f"( {node_to_string(node.base)}^{node_to_string(node.exponent)} )"

    if node.type == "Modulus":
        return f"( {node_to_string(node.left)}%{node_to_string(node.right)} )"

    if node.type == "FunctionCall":
        if node.args is None:
            return node.name
        args_str = ", ".join(node_to_string(a) for a in node.args)
        return f"{node.name}( {args_str} )"

    if node.type == "Tuple":
        return ", ".join(node_to_string(e) for e in node.elements)

    return f"<unknown {node!r}>"


def dump_tree(node: Node, indent: int = 0) -> str:
    """Returns a human-readable multi-line representation for debugging."""
    prefix = "  " * indent

    if node.type == "Scalar":
        return f"{prefix}Scalar: {format_number(node.value)}"

    if node.type == "Variable":
        return f"{prefix}Variable: {node.name} (#{node.handle})"

    if node.type == "FunctionCall":
        if node.args is None:
            return f"{prefix}Constant: {node.name}"
        header = f"{prefix}FunctionCall: {node.name}"
    else:
        header = f"{prefix}{node.type}:"

    lines = [header]
    lines.extend(dump_tree(child, indent + 1) for child in children(node))
    return "\n".join(lines)
