"""
Error types for the split-based expression parser.

All parser errors extend ExpressionError for consistent handling.
Evaluation never raises for numeric problems; NaN and infinity
propagate as ordinary float results.
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None:
            return self.message

        if self.position is None:
            return f"{self.message}\n  {self.expression}"

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class ParseError(ExpressionError):
    """
    Structural error found while parsing.
    """

    pass


class UnmatchedBracketError(ParseError):
    """
    A bracket without a partner at the same nesting depth.
    """

    pass


class InvalidPlaceholderError(ParseError):
    """
    A '&N;' token whose interior is not a valid bracket heap index.
    """

    def __init__(
        self,
        placeholder: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(
            f"Invalid bracket placeholder: &{placeholder};", position, expression
        )
        self.placeholder = placeholder


class UnexpectedEndError(ParseError):
    """
    A fragment that matches none of the recognised forms.
    """

    def __init__(
        self,
        message: str = "Unexpected end of expression",
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message, position, expression)


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
