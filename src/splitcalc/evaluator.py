"""
Expression evaluator.

Evaluates a node tree against a variable table and returns a float.

Numeric semantics follow IEEE-754 double arithmetic:
- Division by zero yields +/-inf (or NaN for 0/0).
- A negative base with a fractional exponent yields NaN.
- Modulus is the C-style remainder (sign of the dividend); x % 0 is NaN.
- NaN and infinity propagate silently; nothing here raises for them.
"""

from typing import List, Optional

import numpy as np

from .nodes import Node
from .variables import VariableTable


class Evaluator:
    """Evaluates nodes against the variable cells of one table."""

    def __init__(self, variables: Optional[VariableTable] = None):
        self._variables = variables if variables is not None else VariableTable()

    def evaluate(self, node: Node) -> float:
        """Evaluates a node and returns its scalar value."""
        with np.errstate(all="ignore"):
            return float(self._evaluate(node))

    def evaluate_all(self, node: Node) -> Optional[List[float]]:
        """
        Evaluates every element of a Tuple node.

        Returns None when the node is not a Tuple.
        """
        if node.type != "Tuple":
            return None
        with np.errstate(all="ignore"):
            return [float(self._evaluate(element)) for element in node.elements]

    def _evaluate(self, node: Node) -> np.float64:
        node_type = node.type

        if node_type == "Scalar":
            return np.float64(node.value)

        if node_type == "Variable":
            return np.float64(self._variables.value_of(node.handle))

        if node_type == "Sum":
            total = self._evaluate(node.terms[0])
            for term in node.terms[1:]:
                total = total + self._evaluate(term)
            return total

        if node_type == "Product":
            product = self._evaluate(node.factors[0])
            for factor in node.factors[1:]:
                product = product * self._evaluate(factor)
            return product

        if node_type == "Negate":
            return -self._evaluate(node.operand)

        if node_type == "Reciprocal":
            return np.float64(1.0) / self._evaluate(node.operand)

        if node_type == "Power":
            return np.power(self._evaluate(node.base), self._evaluate(node.exponent))

        if node_type == "Modulus":
            return np.fmod(self._evaluate(node.left), self._evaluate(node.right))

        if node_type == "FunctionCall":
            args = [float(self._evaluate(arg)) for arg in node.args or ()]
            return np.float64(node.function(args))

        if node_type == "Tuple":
            if not node.elements:
                return np.float64(0.0)
            return self._evaluate(node.elements[0])

        # Should never happen, but keep the result numeric
        return np.float64(np.nan)


def evaluate_all(
    node: Node, variables: Optional[VariableTable] = None
) -> Optional[List[float]]:
    """Evaluates every element of a Tuple tree, or returns None."""
    return Evaluator(variables).evaluate_all(node)
