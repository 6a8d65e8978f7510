"""
Resource limits for expression parsing.

The defaults only stop inputs that would exhaust the interpreter. Parse
depth is additionally capped by the current recursion limit, so a
configured depth larger than the stack allows still fails with
LimitExceededError instead of RecursionError.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError

logger = logging.getLogger("splitcalc.limits")


@dataclass(frozen=True)
class ExpressionLimits:
    """Expression limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 1_000_000

    # Maximum nesting of recursive parse calls, capped by safe_parse_depth()
    max_parse_depth: int = 100_000

    # Maximum depth of the finished node tree
    max_tree_depth: int = 100_000

    # Maximum number of nodes in the finished tree
    max_tree_nodes: int = 1_000_000

    # Maximum function call arguments
    max_function_args: int = 4096

    # Maximum parenthesised groups per parse
    max_bracket_groups: int = 100_000


# Default expression limits.
DEFAULT_EXPRESSION_LIMITS = ExpressionLimits()

# Python frames held on the stack per level of parse recursion, worst case.
FRAMES_PER_PARSE_LEVEL = 3

# Frames reserved for the caller and for walks over the finished tree.
RECURSION_HEADROOM = 200


def safe_parse_depth() -> int:
    """Returns the deepest parse nesting the recursion limit allows."""
    available = sys.getrecursionlimit() - RECURSION_HEADROOM
    return max(1, available // FRAMES_PER_PARSE_LEVEL)


def effective_parse_depth(limits: Optional[ExpressionLimits] = None) -> int:
    """Returns the configured parse depth clamped to safe_parse_depth()."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    return min(limits.max_parse_depth, safe_parse_depth())


def _exceeded(limit_name: str, limit: int, actual: int) -> LimitExceededError:
    logger.debug(
        "expression_limit_exceeded",
        extra={"limit_name": limit_name, "limit": limit, "actual": actual},
    )
    return LimitExceededError(limit_name, limit, actual)


def check_expression_length(
    expression: str, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if len(expression) > limits.max_expression_length:
        raise _exceeded(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def check_parse_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates recursion depth while parsing."""
    limit = effective_parse_depth(limits)
    if depth > limit:
        raise _exceeded("max_parse_depth", limit, depth)


def check_tree_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates the depth of a parsed tree."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if depth > limits.max_tree_depth:
        raise _exceeded("max_tree_depth", limits.max_tree_depth, depth)


def check_tree_node_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates the node count of a parsed tree."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_tree_nodes:
        raise _exceeded("max_tree_nodes", limits.max_tree_nodes, count)


def check_function_arg_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates function argument count."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_function_args:
        raise _exceeded("max_function_args", limits.max_function_args, count)


def check_bracket_group_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates the number of bracket groups substituted in one parse."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_bracket_groups:
        raise _exceeded("max_bracket_groups", limits.max_bracket_groups, count)
