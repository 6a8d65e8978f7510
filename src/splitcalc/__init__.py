"""
Split-based arithmetic expression parser.

This package parses arithmetic text into a node tree by splitting on
operators in precedence order, then evaluates the tree repeatedly with
rebound variable values without re-parsing.
"""

# Core types and utilities
from .brackets import BracketHeap, substitute_brackets
from .builtins import (
    ConstantFunction,
    MathFunction,
    default_constants,
    default_functions,
)
from .config import DEFAULT_PARSER_CONFIG, ParserConfig
from .errors import (
    ExpressionError,
    InvalidPlaceholderError,
    LimitExceededError,
    ParseError,
    UnexpectedEndError,
    UnmatchedBracketError,
)

# Evaluator
from .evaluator import Evaluator, evaluate_all

# Expressions
from .expression import BoundExpression, Expression
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .nodes import (
    FunctionCallNode,
    ModulusNode,
    NegateNode,
    Node,
    NodeBase,
    PowerNode,
    ProductNode,
    ReciprocalNode,
    ScalarNode,
    SumNode,
    TupleNode,
    VariableNode,
    calculate_depth,
    count_nodes,
    dump_tree,
    node_to_string,
)

# Parser
from .parser import ParseResult, Parser, evaluate, parse, try_parse

# Registry
from .registry import Registry, create_default_registry
from .variables import Variable, VariableTable

__all__ = [
    # Nodes
    "Node",
    "NodeBase",
    "ScalarNode",
    "VariableNode",
    "SumNode",
    "ProductNode",
    "NegateNode",
    "ReciprocalNode",
    "PowerNode",
    "ModulusNode",
    "FunctionCallNode",
    "TupleNode",
    "count_nodes",
    "calculate_depth",
    "node_to_string",
    "dump_tree",
    # Variables
    "Variable",
    "VariableTable",
    # Errors
    "ExpressionError",
    "ParseError",
    "UnmatchedBracketError",
    "InvalidPlaceholderError",
    "UnexpectedEndError",
    "LimitExceededError",
    # Limits and configuration
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "ParserConfig",
    "DEFAULT_PARSER_CONFIG",
    # Brackets
    "BracketHeap",
    "substitute_brackets",
    # Registry
    "MathFunction",
    "ConstantFunction",
    "Registry",
    "create_default_registry",
    "default_functions",
    "default_constants",
    # Parser
    "Parser",
    "ParseResult",
    "parse",
    "try_parse",
    "evaluate",
    # Evaluation
    "Evaluator",
    "evaluate_all",
    "Expression",
    "BoundExpression",
]
