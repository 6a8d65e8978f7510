"""
Bracket substitution.

Before a fragment is split on operators, every parenthesised group in
it is moved to a BracketHeap and replaced by a placeholder token
``&N;``, where N is the group's heap index. Placeholders contain no
operator characters, so each group behaves as a single opaque operand
until the parser reaches it and parses the stored text.
"""

import re
from typing import List, Optional

from .errors import InvalidPlaceholderError, UnmatchedBracketError
from .limits import ExpressionLimits, check_bracket_group_count

OPEN_BRACKET = "("
CLOSE_BRACKET = ")"
PLACEHOLDER_START = "&"
PLACEHOLDER_END = ";"

_PLACEHOLDER_INDEX = re.compile(r"[0-9]+")


def find_closing_bracket(text: str, start: int) -> int:
    """
    Finds the bracket closing the one at ``start``.

    Returns:
        The index of the matching ')' or -1 when there is none
    """
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == OPEN_BRACKET:
            depth += 1
        elif ch == CLOSE_BRACKET:
            depth -= 1
        if depth == 0:
            return i
    return -1


def make_placeholder(index: int) -> str:
    return f"{PLACEHOLDER_START}{index}{PLACEHOLDER_END}"


class BracketHeap:
    """Append-only store of group texts for one top-level parse."""

    def __init__(self, limits: Optional[ExpressionLimits] = None):
        self._groups: List[str] = []
        self._limits = limits

    def push(self, inner: str) -> int:
        """Stores a group's inner text and returns its index."""
        check_bracket_group_count(len(self._groups) + 1, self._limits)
        self._groups.append(inner)
        return len(self._groups) - 1

    def resolve(self, index_text: str, fragment: Optional[str] = None) -> str:
        """
        Returns the group text for a placeholder interior.

        Raises:
            InvalidPlaceholderError: If the interior is not an in-range index
        """
        if _PLACEHOLDER_INDEX.fullmatch(index_text):
            index = int(index_text)
            if index < len(self._groups):
                return self._groups[index]
        position = None
        if fragment is not None:
            position = fragment.find(PLACEHOLDER_START)
        raise InvalidPlaceholderError(index_text, position, fragment)

    def clear(self) -> None:
        self._groups.clear()

    def __getitem__(self, index: int) -> str:
        return self._groups[index]

    def __len__(self) -> int:
        return len(self._groups)


def substitute_brackets(fragment: str, heap: BracketHeap) -> str:
    """
    Replaces every top-level bracket group in fragment with a placeholder.

    Raises:
        UnmatchedBracketError: If a '(' has no partner, or a ')' is left over
    """
    index = fragment.find(OPEN_BRACKET)
    while index >= 0:
        closing = find_closing_bracket(fragment, index)
        if closing < 0:
            raise UnmatchedBracketError("Bracket not closed", index, fragment)
        slot = heap.push(fragment[index + 1 : closing])
        fragment = fragment[:index] + make_placeholder(slot) + fragment[closing + 1 :]
        index = fragment.find(OPEN_BRACKET)

    stray = fragment.find(CLOSE_BRACKET)
    if stray >= 0:
        raise UnmatchedBracketError("Bracket not opened", stray, fragment)
    return fragment


def split_placeholder(fragment: str) -> Optional[str]:
    """
    Returns the interior of the first '&...;' in fragment.

    Returns None when the fragment has no '&' followed later by ';'.
    """
    start = fragment.find(PLACEHOLDER_START)
    if start < 0:
        return None
    end = fragment.find(PLACEHOLDER_END, start + 1)
    if end < 0:
        return None
    return fragment[start + 1 : end]
