"""
Variable cells and the per-parse variable table.

A VariableTable is an arena: each distinct name gets exactly one
Variable record and a stable integer handle. Tree nodes keep the
handle, so assigning a value through the table is seen by every
place in the tree that mentions the name.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional


@dataclass
class Variable:
    """A named, mutable float cell with optional inclusive bounds."""

    name: str
    value: float = 0.0
    minimum: float = -math.inf
    maximum: float = math.inf

    @property
    def is_bounded(self) -> bool:
        return self.minimum != -math.inf or self.maximum != math.inf

    def set_bounds(
        self, minimum: Optional[float] = None, maximum: Optional[float] = None
    ) -> None:
        """
        Sets the inclusive bounds; None leaves that side unbounded.

        The current value is clamped into the new range.
        """
        low = -math.inf if minimum is None else float(minimum)
        high = math.inf if maximum is None else float(maximum)
        if low > high:
            raise ValueError(
                f"Variable {self.name!r}: minimum {low} exceeds maximum {high}"
            )
        self.minimum = low
        self.maximum = high
        self.assign(self.value)

    def assign(self, value: float) -> float:
        """Stores value clamped into the bounds and returns what was stored."""
        value = float(value)
        # NaN passes through unclamped
        if value < self.minimum:
            value = self.minimum
        elif value > self.maximum:
            value = self.maximum
        self.value = value
        return value

    def __str__(self) -> str:
        return f"{self.name}[{self.value!r}]"


class VariableTable:
    """Name-interning arena of Variable records, in insertion order."""

    def __init__(self) -> None:
        self._records: List[Variable] = []
        self._handles: Dict[str, int] = {}

    def intern(self, name: str) -> int:
        """Returns the handle for name, creating the variable on first sight."""
        handle = self._handles.get(name)
        if handle is None:
            handle = len(self._records)
            self._records.append(Variable(name))
            self._handles[name] = handle
        return handle

    def handle_of(self, name: str) -> Optional[int]:
        """Returns the handle for name, or None when the name is unknown."""
        return self._handles.get(name)

    def record(self, handle: int) -> Variable:
        return self._records[handle]

    def value_of(self, handle: int) -> float:
        return self._records[handle].value

    def names(self) -> List[str]:
        """Variable names in order of first appearance."""
        return [record.name for record in self._records]

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __getitem__(self, name: str) -> Variable:
        handle = self._handles.get(name)
        if handle is None:
            raise KeyError(name)
        return self._records[handle]

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        cells = ", ".join(str(record) for record in self._records)
        return f"VariableTable({cells})"
