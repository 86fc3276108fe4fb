"""
Typed operations of a date-math expression.

Each raw token produced by the tokenizer (``-1d``, ``+3M``, ``/y``) becomes
one immutable Operation:

- Add(unit, amount)       ``+<digits><unit>``
- Subtract(unit, amount)  ``-<digits><unit>``
- Round(unit)             ``/<unit>``

Operations are pure: ``op.apply(instant)`` returns a new instant and
never touches the clock.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class Unit(Enum):
    """Calendar units, keyed by their expression character (case-sensitive)."""
    SECOND = "s"
    MINUTE = "m"
    HOUR = "h"
    DAY = "d"
    WEEK = "w"
    MONTH = "M"
    YEAR = "y"


class Operator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    ROUND = "/"


UNIT_CHARS = "".join(unit.value for unit in Unit)

# Units with a fixed length in milliseconds; months and years depend on the calendar.
FIXED_LENGTH_UNITS = "wdhms"


# =============================================================================
# Operations
# =============================================================================

class Operation(ABC):
    """Base class for a single parsed date-math operation."""

    operator: Operator
    unit: Unit

    @abstractmethod
    def apply(self, instant: datetime) -> datetime:
        """
        Apply this operation to ``instant``.

        Args:
            instant: Aware UTC datetime at millisecond resolution

        Returns:
            The resulting instant
        """

    @classmethod
    def from_token(cls, token: str) -> "Operation":
        """
        Build an Operation from a raw token.

        The operator is the first character, the unit the last one and the
        amount whatever digits sit between them. Round tokens are exactly
        ``/<unit>``. Token shape is guaranteed by the tokenizer.
        """
        operator = Operator(token[0])
        unit = Unit(token[-1])

        if operator is Operator.ROUND:
            return Round(unit=unit)

        amount = int(token[1:-1])
        if operator is Operator.ADD:
            return Add(unit=unit, amount=amount)
        return Subtract(unit=unit, amount=amount)


@dataclass(frozen=True)
class Add(Operation):
    """Move an instant forward by ``amount`` units."""
    unit: Unit
    amount: int

    operator = Operator.ADD

    def apply(self, instant: datetime) -> datetime:
        from .arithmetic import shift
        return shift(instant, self)

    def __str__(self) -> str:
        return f"+{self.amount}{self.unit.value}"


@dataclass(frozen=True)
class Subtract(Operation):
    """Move an instant backward by ``amount`` units."""
    unit: Unit
    amount: int

    operator = Operator.SUBTRACT

    def apply(self, instant: datetime) -> datetime:
        from .arithmetic import shift
        return shift(instant, self)

    def __str__(self) -> str:
        return f"-{self.amount}{self.unit.value}"


@dataclass(frozen=True)
class Round(Operation):
    """Snap an instant to the nearer boundary of its enclosing ``unit`` period."""
    unit: Unit

    operator = Operator.ROUND

    def apply(self, instant: datetime) -> datetime:
        from .rounding import round_to
        return round_to(instant, self.unit)

    def __str__(self) -> str:
        return f"/{self.unit.value}"
