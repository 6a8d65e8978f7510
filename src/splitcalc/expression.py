"""
Parsed expressions and bound callables.

An Expression owns the root node of a parsed tree and the variable
table discovered while parsing it. Variables are rebound by writing
into the table, after which the tree is evaluated again; nothing is
re-parsed.

Binding semantics:
- bind(names) resolves each name to a variable handle once.
- Unknown names become discard slots that still consume an argument.
- invoke(args) assigns positionally up to the shorter of names/args.
"""

from typing import List, Optional, Sequence

from .evaluator import Evaluator
from .nodes import Node, dump_tree, node_to_string
from .variables import Variable, VariableTable


class Expression:
    """A parsed tree together with its variables."""

    def __init__(self, root: Node, variables: VariableTable, source: str = ""):
        self._root = root
        self._variables = variables
        self._source = source
        self._evaluator = Evaluator(variables)

    @property
    def root(self) -> Node:
        return self._root

    @property
    def source(self) -> str:
        return self._source

    @property
    def variables(self) -> VariableTable:
        return self._variables

    @property
    def variable_names(self) -> List[str]:
        """Distinct variable names in order of first appearance."""
        return self._variables.names()

    @property
    def is_multi_value(self) -> bool:
        return self._root.type == "Tuple"

    def value(self) -> float:
        """Evaluates the tree; a tuple yields its first element."""
        return self._evaluator.evaluate(self._root)

    def multi_value(self) -> Optional[List[float]]:
        """Evaluates every tuple element, or returns None for a scalar tree."""
        return self._evaluator.evaluate_all(self._root)

    def get(self, name: str) -> Variable:
        """Returns the variable called name; raises KeyError when unknown."""
        return self._variables[name]

    def set(self, name: str, value: float) -> None:
        """Assigns a variable by name; raises KeyError when unknown."""
        self._variables[name].assign(value)

    def bind(self, names: Sequence[str]) -> "BoundExpression":
        """Creates a callable that assigns its arguments to names in order."""
        return BoundExpression(self, names)

    def dump(self) -> str:
        return dump_tree(self._root)

    def __str__(self) -> str:
        return node_to_string(self._root)

    def __repr__(self) -> str:
        return f"Expression({node_to_string(self._root)!r})"


class BoundExpression:
    """An Expression paired with a positional name-to-variable binding."""

    def __init__(self, expression: Expression, names: Sequence[str]):
        self._expression = expression
        self._names = list(names)
        table = expression.variables
        self._slots: List[Optional[Variable]] = []
        for name in self._names:
            handle = table.handle_of(name)
            self._slots.append(None if handle is None else table.record(handle))

    @property
    def expression(self) -> Expression:
        return self._expression

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def _assign(self, args: Sequence[float]) -> None:
        for slot, arg in zip(self._slots, args):
            if slot is not None:
                slot.assign(arg)

    def invoke(self, args: Sequence[float]) -> float:
        """Assigns args to the bound variables and returns the value."""
        self._assign(args)
        return self._expression.value()

    def invoke_multi(self, args: Sequence[float]) -> Optional[List[float]]:
        """Assigns args and returns every tuple element, or None for a scalar tree."""
        self._assign(args)
        return self._expression.multi_value()

    def __call__(self, *args: float) -> float:
        return self.invoke(args)

    def __repr__(self) -> str:
        return f"BoundExpression({self._names!r}, {str(self._expression)!r})"
