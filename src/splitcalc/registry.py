"""
Name registries for functions and constants.

The parser only reads a registry; registering and removing names is a
configuration-time operation of the embedding application. Names are
case-sensitive and matched by prefix during parsing, so registering
one name as a strict prefix of two or more others makes parsing
ambiguous (see Parser for the resolution rule).
"""

import logging
from typing import Dict, List, Optional

from .builtins import (
    ConstantFunction,
    MathFunction,
    default_constants,
    default_functions,
)

logger = logging.getLogger("splitcalc.registry")


def _validate_name(name: str, kind: str) -> str:
    if not isinstance(name, str) or not name:
        raise ValueError(f"{kind} name must be a non-empty string, got {name!r}")
    return name


class Registry:
    """Mutable name -> callable maps for constants and n-ary functions."""

    def __init__(
        self,
        constants: Optional[Dict[str, ConstantFunction]] = None,
        functions: Optional[Dict[str, MathFunction]] = None,
    ):
        self._constants: Dict[str, ConstantFunction] = dict(constants or {})
        self._functions: Dict[str, MathFunction] = dict(functions or {})

    # ============================================================
    # Constants
    # ============================================================

    def register_constant(self, name: str, constant: ConstantFunction) -> None:
        """Inserts or replaces a constant; a replacement keeps its position."""
        self._constants[_validate_name(name, "Constant")] = constant
        logger.debug("constant_registered", extra={"constant_name": name})

    def remove_constant(self, name: str) -> None:
        """Removes a constant; unknown names are ignored."""
        if self._constants.pop(name, None) is not None:
            logger.debug("constant_removed", extra={"constant_name": name})

    def get_constant(self, name: str) -> Optional[ConstantFunction]:
        return self._constants.get(name)

    def has_constant(self, name: str) -> bool:
        return name in self._constants

    def constant_names(self) -> List[str]:
        """Constant names in registration order."""
        return list(self._constants)

    # ============================================================
    # Functions
    # ============================================================

    def register_function(self, name: str, function: MathFunction) -> None:
        """Inserts or replaces a function; a replacement keeps its position."""
        self._functions[_validate_name(name, "Function")] = function
        logger.debug("function_registered", extra={"function_name": name})

    def remove_function(self, name: str) -> None:
        """Removes a function; unknown names are ignored."""
        if self._functions.pop(name, None) is not None:
            logger.debug("function_removed", extra={"function_name": name})

    def get_function(self, name: str) -> Optional[MathFunction]:
        return self._functions.get(name)

    def has_function(self, name: str) -> bool:
        return name in self._functions

    def function_names(self) -> List[str]:
        """Function names in registration order."""
        return list(self._functions)

    # ============================================================
    # Parser lookups
    # ============================================================

    def function_candidates(self, fragment: str) -> List[str]:
        """Registered function names the fragment starts with, in order."""
        return [name for name in self._functions if fragment.startswith(name)]

    def match_constant(self, fragment: str) -> Optional[str]:
        """The first registered constant name the fragment starts with."""
        for name in self._constants:
            if fragment.startswith(name):
                return name
        return None

    def is_reserved(self, name: str) -> bool:
        """Whether name is exactly a registered constant or function."""
        return name in self._constants or name in self._functions

    def copy(self) -> "Registry":
        return Registry(self._constants, self._functions)

    def __repr__(self) -> str:
        return (
            f"Registry(constants={len(self._constants)}, "
            f"functions={len(self._functions)})"
        )


def create_default_registry(seed: Optional[int] = None) -> Registry:
    """
    Creates a registry pre-populated with the default tables.

    Args:
        seed: Optional seed for the ``rnd`` sampler

    Returns:
        A new, independent registry
    """
    return Registry(default_constants(), default_functions(seed))
