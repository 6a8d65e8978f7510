"""
Parser configuration.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits

# Characters besides ASCII letters that may start a variable name.
DEFAULT_IDENTIFIER_SYMBOLS = "§$"


class ParserConfig(BaseModel):
    """Configuration for creating a Parser."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # Extra characters allowed as the first character of a variable name
    identifier_symbols: str = Field(
        default=DEFAULT_IDENTIFIER_SYMBOLS, alias="identifierSymbols"
    )

    # Expression limits for parsing
    expression_limits: ExpressionLimits | dict[str, Any] | None = Field(
        default=None, alias="expressionLimits"
    )

    # Whether name() parses as a call with no arguments
    allow_empty_call: bool = Field(default=True, alias="allowEmptyCall")

    # Seed for the rnd sampler of the default registry
    random_seed: Optional[int] = Field(default=None, alias="randomSeed")

    @field_validator("identifier_symbols")
    @classmethod
    def _check_identifier_symbols(cls, value: str) -> str:
        for ch in value:
            if ch.isspace() or ch.isdigit() or ch in "+-*/%^,();&":
                raise ValueError(f"Character {ch!r} cannot start an identifier")
        return value

    def resolve_limits(self) -> ExpressionLimits:
        """Returns the configured limits as an ExpressionLimits instance."""
        limits = self.expression_limits
        if limits is None:
            return DEFAULT_EXPRESSION_LIMITS
        if isinstance(limits, ExpressionLimits):
            return limits

        # Support both snake_case and camelCase keys
        known = {f.name for f in fields(ExpressionLimits)}
        normalized: dict[str, Any] = {}
        for key, value in limits.items():
            snake = "".join(f"_{c.lower()}" if c.isupper() else c for c in key)
            if snake not in known:
                raise ValueError(f"Unknown expression limit: {key}")
            normalized[snake] = value
        return ExpressionLimits(**normalized)


DEFAULT_PARSER_CONFIG = ParserConfig()
