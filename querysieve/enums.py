"""
Canonical, backend-independent vocabulary for predicates and ordering.
"""

from enum import Enum
from typing import Optional


class Operator(Enum):
    """Comparison, membership and null-check operators."""
    EQUAL = "equal"
    DIFF = "diff"
    GREATER = "greater"
    GREATER_OR_EQUAL = "greater_or_equal"
    LESS = "less"
    LESS_OR_EQUAL = "less_or_equal"
    LIKE = "like"
    NOT_LIKE = "not_like"
    IN = "in"
    NOT_IN = "not_in"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    BETWEEN = "between"

    @property
    def needs_value(self) -> bool:
        return self not in {Operator.IS_NULL, Operator.IS_NOT_NULL}

    @property
    def is_list(self) -> bool:
        return self in {Operator.IN, Operator.NOT_IN}

    @classmethod
    def from_string(cls, value: str) -> Optional['Operator']:
        """Look an operator up by name, case-insensitively."""
        return _lookup(cls, value)


class Combinator(Enum):
    """How a predicate joins the ones before it."""
    AND = "and"
    OR = "or"

    @classmethod
    def from_string(cls, value: str) -> Optional['Combinator']:
        return _lookup(cls, value)


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_string(cls, value: str) -> Optional['SortDirection']:
        return _lookup(cls, value)


class LikeStrategy(Enum):
    """Where wildcards go around a LIKE value."""
    FINAL = "final"        # value%
    START = "start"        # %value
    COMPLETE = "complete"  # %value%

    def apply(self, value: str) -> str:
        if self is LikeStrategy.FINAL:
            return f"{value}%"
        if self is LikeStrategy.START:
            return f"%{value}"
        return f"%{value}%"


def _lookup(enum_cls, value):
    if value is None:
        return None
    key = str(value).strip().upper()
    return enum_cls.__members__.get(key)
