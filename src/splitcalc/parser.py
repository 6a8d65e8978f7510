"""
Split-based parser for arithmetic expressions.

There is no tokenizer. Each call works on a trimmed fragment: bracket
groups are first replaced by placeholders, then the fragment is tested
against the forms below in this fixed order. The first form that
applies wins and its pieces are parsed recursively.

1. ','  split on every comma            -> Tuple
2. '+'  split on every plus             -> Sum
3. '-'  split on every minus            -> Sum of first piece and Negates
4. '*'  split on every star             -> Product
5. '/'  split on every slash            -> Product of first piece and Reciprocals
6. '%'  split at the first percent      -> Modulus
7. '^'  split at the last caret         -> Power
8. registered function name prefix      -> FunctionCall
9. registered constant name prefix      -> FunctionCall without arguments
10. '&N;' placeholder                    -> parse of bracket group N
11. numeric literal                      -> Scalar
12. identifier                           -> Variable
13. anything else                        -> UnexpectedEndError

Testing from the loosest-binding operator to the tightest yields the
usual precedence. '%' and '^' split only once. Splitting at the last
caret groups powers left to right: ``2^3^2`` is ``(2^3)^2``.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .brackets import BracketHeap, split_placeholder, substitute_brackets
from .config import DEFAULT_PARSER_CONFIG, ParserConfig
from .errors import ExpressionError, UnexpectedEndError
from .expression import Expression
from .limits import (
    ExpressionLimits,
    check_expression_length,
    check_function_arg_count,
    check_parse_depth,
    check_tree_depth,
    check_tree_node_count,
)
from .nodes import (
    FunctionCallNode,
    ModulusNode,
    NegateNode,
    Node,
    NodeFunction,
    PowerNode,
    ProductNode,
    ReciprocalNode,
    ScalarNode,
    SumNode,
    TupleNode,
    VariableNode,
    calculate_depth,
    count_nodes,
)
from .registry import Registry, create_default_registry
from .variables import VariableTable

logger = logging.getLogger("splitcalc.parser")

_NUMBER = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_EMPTY_GROUP = re.compile(r"&([0-9]+);")


class _ParseSession:
    """State scoped to one top-level parse."""

    def __init__(self, source: str, limits: ExpressionLimits):
        self.source = source
        self.limits = limits
        self.heap = BracketHeap(limits)
        self.variables = VariableTable()
        self.depth = 0


class Parser:
    """
    Parser for expression strings.

    A Parser holds a registry and a configuration and may be reused:
    every parse() call gets its own bracket heap and variable table.
    """

    def __init__(
        self,
        registry: Optional[Registry] = None,
        config: Optional[ParserConfig] = None,
    ):
        self._config = config or DEFAULT_PARSER_CONFIG
        if registry is None:
            registry = create_default_registry(self._config.random_seed)
        self._registry = registry
        self._limits = self._config.resolve_limits()

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def config(self) -> ParserConfig:
        return self._config

    def parse(self, source: str) -> Expression:
        """Parses an expression string into an Expression."""
        check_expression_length(source, self._limits)

        session = _ParseSession(source, self._limits)
        try:
            root = self._parse(source, session)
        finally:
            session.heap.clear()

        node_count = count_nodes(root)
        check_tree_node_count(node_count, self._limits)
        check_tree_depth(calculate_depth(root), self._limits)

        logger.debug(
            "expression_parsed",
            extra={
                "source": source,
                "variable_count": len(session.variables),
                "node_count": node_count,
                "root_type": root.type,
            },
        )
        return Expression(root, session.variables, source)

    def evaluate(self, source: str) -> float:
        """Parses an expression string and returns its value."""
        return self.parse(source).value()

    # ============================================================
    # Recursive split
    # ============================================================

    def _parse(self, fragment: str, session: _ParseSession) -> Node:
        session.depth += 1
        try:
            check_parse_depth(session.depth, session.limits)
            fragment = substitute_brackets(fragment.strip(), session.heap)
            return self._parse_fragment(fragment, session)
        finally:
            session.depth -= 1

    def _parse_fragment(self, fragment: str, session: _ParseSession) -> Node:
        if "," in fragment:
            elements = self._parse_pieces(fragment.split(","), session)
            if len(elements) == 1:
                return elements[0]
            return TupleNode(elements=tuple(elements))

        if "+" in fragment:
            terms = self._parse_pieces(fragment.split("+"), session)
            if len(terms) == 1:
                return terms[0]
            return SumNode(terms=tuple(terms))

        if "-" in fragment:
            return self._parse_difference(fragment, session)

        if "*" in fragment:
            # Empty pieces are parsed too and fail as UnexpectedEndError
            factors = [self._parse(piece, session) for piece in fragment.split("*")]
            return ProductNode(factors=tuple(factors))

        if "/" in fragment:
            return self._parse_quotient(fragment, session)

        if "%" in fragment:
            left, right = fragment.split("%", 1)
            return ModulusNode(
                left=self._parse(left, session), right=self._parse(right, session)
            )

        if "^" in fragment:
            base, exponent = fragment.rsplit("^", 1)
            return PowerNode(
                base=self._parse(base, session),
                exponent=self._parse(exponent, session),
            )

        node = self._parse_function(fragment, session)
        if node is not None:
            return node

        node = self._parse_constant(fragment)
        if node is not None:
            return node

        index_text = split_placeholder(fragment)
        if index_text is not None:
            inner = session.heap.resolve(index_text, fragment)
            return self._parse(inner, session)

        if _NUMBER.fullmatch(fragment):
            return ScalarNode(value=float(fragment))

        if self._is_identifier(fragment):
            handle = session.variables.intern(fragment)
            return VariableNode(handle=handle, name=fragment)

        raise UnexpectedEndError(expression=fragment or session.source)

    def _parse_pieces(self, pieces: List[str], session: _ParseSession) -> List[Node]:
        """Parses the non-empty pieces of a split."""
        nodes = [self._parse(piece, session) for piece in pieces if piece.strip()]
        if not nodes:
            raise UnexpectedEndError(
                "Operator without operands", expression=session.source
            )
        return nodes

    def _parse_difference(self, fragment: str, session: _ParseSession) -> Node:
        first, *rest = fragment.split("-")
        terms: List[Node] = []
        # An empty first piece is a leading unary minus
        if first.strip():
            terms.append(self._parse(first, session))
        for piece in rest:
            if piece.strip():
                terms.append(NegateNode(operand=self._parse(piece, session)))
        if not terms:
            raise UnexpectedEndError(
                "Operator without operands", expression=session.source
            )
        if len(terms) == 1:
            return terms[0]
        return SumNode(terms=tuple(terms))

    def _parse_quotient(self, fragment: str, session: _ParseSession) -> Node:
        first, *rest = fragment.split("/")
        factors: List[Node] = []
        if first.strip():
            factors.append(self._parse(first, session))
        for piece in rest:
            if piece.strip():
                factors.append(ReciprocalNode(operand=self._parse(piece, session)))
        if not factors:
            raise UnexpectedEndError(
                "Operator without operands", expression=session.source
            )
        return ProductNode(factors=tuple(factors))

    # ============================================================
    # Names, placeholders, literals
    # ============================================================

    def _parse_function(
        self, fragment: str, session: _ParseSession
    ) -> Optional[FunctionCallNode]:
        candidates = self._registry.function_candidates(fragment)
        if not candidates:
            return None

        name = candidates[0]
        if len(candidates) > 1:
            # The earliest registered match is ambiguous and yields to the next
            name = candidates[1]
            logger.debug(
                "ambiguous_function_prefix",
                extra={"fragment": fragment, "candidates": candidates, "chosen": name},
            )

        function = self._registry.get_function(name)
        remainder = fragment[len(name) :].strip()

        if self._config.allow_empty_call and self._is_empty_group(remainder, session):
            return FunctionCallNode(name=name, args=(), function=function)

        argument = self._parse(remainder, session)
        if isinstance(argument, TupleNode):
            args = tuple(argument.elements)
        else:
            args = (argument,)
        check_function_arg_count(len(args), session.limits)
        return FunctionCallNode(name=name, args=args, function=function)

    def _parse_constant(self, fragment: str) -> Optional[FunctionCallNode]:
        name = self._registry.match_constant(fragment)
        if name is None:
            return None
        constant = self._registry.get_constant(name)

        def call(_args, constant=constant):
            return constant()

        function: NodeFunction = call
        return FunctionCallNode(name=name, args=None, function=function)

    def _is_empty_group(self, text: str, session: _ParseSession) -> bool:
        match = _EMPTY_GROUP.fullmatch(text)
        if match is None:
            return False
        index = int(match.group(1))
        return index < len(session.heap) and not session.heap[index].strip()

    def _is_identifier(self, fragment: str) -> bool:
        if not fragment:
            return False
        if any(ch.isspace() for ch in fragment):
            return False
        first = fragment[0]
        symbols = self._config.identifier_symbols
        if not ((first.isascii() and first.isalpha()) or first in symbols):
            return False
        return not self._registry.is_reserved(fragment)


@dataclass
class ParseResult:
    """Result of parsing with error information instead of an exception."""

    expression: Optional[Expression]
    """The parsed expression, when parsing succeeded."""

    success: bool
    """Whether parsing succeeded."""

    error: Optional[ExpressionError] = None
    """The error that stopped parsing."""


def parse(
    source: str,
    registry: Optional[Registry] = None,
    config: Optional[ParserConfig] = None,
) -> Expression:
    """
    Parses an expression string into an Expression.

    Args:
        source: The expression string to parse
        registry: Optional registry (defaults to a fresh default registry)
        config: Optional parser configuration

    Returns:
        The parsed expression

    Raises:
        ParseError: If the expression is structurally invalid
        LimitExceededError: If the expression exceeds the configured limits
    """
    return Parser(registry, config).parse(source)


def try_parse(
    source: str,
    registry: Optional[Registry] = None,
    config: Optional[ParserConfig] = None,
) -> ParseResult:
    """
    Parses an expression string and reports failure in the result.

    Returns:
        The parse result with the expression or the error
    """
    try:
        expression = Parser(registry, config).parse(source)
        return ParseResult(expression=expression, success=True)
    except ExpressionError as error:
        logger.debug(
            "expression_parse_failed",
            extra={"source": source, "error": error.message},
        )
        return ParseResult(expression=None, success=False, error=error)


def evaluate(
    source: str,
    registry: Optional[Registry] = None,
    config: Optional[ParserConfig] = None,
) -> float:
    """Parses an expression string and returns its value."""
    return Parser(registry, config).evaluate(source)
