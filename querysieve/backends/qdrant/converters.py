#!/usr/bin/env python3
"""
Mapping between the canonical enums and Qdrant filter models.

Qdrant has no pattern matching, so LIKE/NOT_LIKE fall back to full-text
MatchText with the % wildcards removed. Negated operators (DIFF, NOT_IN,
NOT_LIKE, IS_NOT_NULL) are returned with negated=True and belong in must_not.
Equality on a numeric string matches the string or the number.
"""

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Tuple, Union

from qdrant_client.models import (
    DatetimeRange, Direction, FieldCondition, Filter, IsNullCondition,
    MatchAny, MatchText, MatchValue, PayloadField, Range
)

from ...enums import Combinator, Operator, SortDirection
from ...exceptions import UnsupportedOperatorError

QdrantCondition = Union[FieldCondition, IsNullCondition, Filter]

_RANGE_KEYS = {
    Operator.GREATER: "gt",
    Operator.GREATER_OR_EQUAL: "gte",
    Operator.LESS: "lt",
    Operator.LESS_OR_EQUAL: "lte",
}


class OperatorConverter:

    NEGATED = {Operator.DIFF, Operator.NOT_IN, Operator.NOT_LIKE, Operator.IS_NOT_NULL}

    @classmethod
    def to_qdrant(cls, field: str, operator: Operator, value: Any) -> Tuple[QdrantCondition, bool]:
        """
        Convert one predicate.

        Returns:
            Tuple of (condition, negated)

        Raises:
            UnsupportedOperatorError: If the value shape can't be expressed
        """
        negated = operator in cls.NEGATED

        if operator in {Operator.IS_NULL, Operator.IS_NOT_NULL}:
            return IsNullCondition(is_null=PayloadField(key=field)), negated

        if operator in {Operator.EQUAL, Operator.DIFF}:
            value = _payload_value(value)
            if value is None:
                # EQUAL None is a null check, DIFF None the opposite
                return IsNullCondition(is_null=PayloadField(key=field)), negated
            if isinstance(value, (float, date)):
                return _range(field, operator, {"gte": value, "lte": value}), negated
            if isinstance(value, str) and _as_number(value) is not None:
                return _text_or_number(field, value), negated
            return FieldCondition(key=field, match=MatchValue(value=value)), negated

        if operator in {Operator.LIKE, Operator.NOT_LIKE}:
            text = str(value).strip("%")
            return FieldCondition(key=field, match=MatchText(text=text)), negated

        if operator in {Operator.IN, Operator.NOT_IN}:
            values = [_payload_value(item) for item in _as_list(value, operator)]
            return FieldCondition(key=field, match=MatchAny(any=values)), negated

        if operator is Operator.BETWEEN:
            bounds = _as_list(value, operator)
            if len(bounds) != 2:
                raise UnsupportedOperatorError(operator, "Qdrant", "BETWEEN requires exactly 2 values")
            return _range(field, operator, {"gte": bounds[0], "lte": bounds[1]}), negated

        if operator in _RANGE_KEYS:
            return _range(field, operator, {_RANGE_KEYS[operator]: value}), negated

        raise UnsupportedOperatorError(operator, "Qdrant")

    @staticmethod
    def operator_of(condition: QdrantCondition, negated: bool = False) -> Operator:
        """
        Canonical operator for a Qdrant condition.
        Two-sided ranges read back as BETWEEN.
        """
        if isinstance(condition, IsNullCondition):
            return Operator.IS_NOT_NULL if negated else Operator.IS_NULL

        if isinstance(condition, Filter):
            return Operator.DIFF if negated else Operator.EQUAL

        if condition.match is not None:
            match = condition.match
            if isinstance(match, MatchValue):
                return Operator.DIFF if negated else Operator.EQUAL
            if isinstance(match, MatchAny):
                return Operator.NOT_IN if negated else Operator.IN
            if isinstance(match, MatchText):
                return Operator.NOT_LIKE if negated else Operator.LIKE

        bounds = condition.range
        if bounds is not None and not negated:
            present = {key for key in ("gt", "gte", "lt", "lte") if getattr(bounds, key) is not None}
            if present == {"gte", "lte"}:
                return Operator.BETWEEN
            if len(present) == 1:
                key = present.pop()
                return next(op for op, name in _RANGE_KEYS.items() if name == key)

        raise ValueError(f"No canonical operator for Qdrant condition: {condition}")


class CombinatorConverter:

    @staticmethod
    def to_qdrant(combinator: Combinator) -> str:
        return "should" if combinator is Combinator.OR else "must"

    @staticmethod
    def from_qdrant(clause: str) -> Combinator:
        if clause == "must":
            return Combinator.AND
        if clause == "should":
            return Combinator.OR
        raise ValueError(f"Unknown Qdrant clause: {clause}")


class SortConverter:

    @staticmethod
    def to_qdrant(direction: SortDirection) -> Direction:
        return Direction.DESC if direction is SortDirection.DESC else Direction.ASC

    @staticmethod
    def from_qdrant(direction: Direction) -> SortDirection:
        return SortDirection.DESC if direction == Direction.DESC else SortDirection.ASC


def _range(field: str, operator: Operator, bounds: dict) -> FieldCondition:
    values = list(bounds.values())
    if all(isinstance(v, (date, datetime)) for v in values):
        return FieldCondition(key=field, range=DatetimeRange(**{k: _as_datetime(v) for k, v in bounds.items()}))

    numeric = {}
    for key, bound in bounds.items():
        number = _as_number(bound)
        if number is None:
            raise UnsupportedOperatorError(operator, "Qdrant", f"range bound {bound!r} is not a number or date")
        numeric[key] = number
    return FieldCondition(key=field, range=Range(**numeric))


def _as_number(value: Any):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _text_or_number(field: str, value: str) -> Filter:
    """Match a numeric string against both string and numeric payloads."""
    number = _as_number(value)
    return Filter(should=[
        FieldCondition(key=field, match=MatchValue(value=value)),
        FieldCondition(key=field, range=Range(gte=number, lte=number)),
    ])


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def _as_list(value: Any, operator: Operator) -> List[Any]:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise UnsupportedOperatorError(operator, "Qdrant", f"expected a collection, got {type(value).__name__}")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return list(value)


def _payload_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value
