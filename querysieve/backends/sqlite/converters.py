"""
Mapping tables between the canonical enums and SQLite SQL tokens.
Every canonical value has an exact SQL counterpart.
"""

from typing import Dict

from ...enums import Combinator, Operator, SortDirection


class OperatorConverter:
    TO_SQL: Dict[Operator, str] = {
        Operator.EQUAL: "=",
        Operator.DIFF: "<>",
        Operator.GREATER: ">",
        Operator.GREATER_OR_EQUAL: ">=",
        Operator.LESS: "<",
        Operator.LESS_OR_EQUAL: "<=",
        Operator.LIKE: "LIKE",
        Operator.NOT_LIKE: "NOT LIKE",
        Operator.IN: "IN",
        Operator.NOT_IN: "NOT IN",
        Operator.IS_NULL: "IS NULL",
        Operator.IS_NOT_NULL: "IS NOT NULL",
        Operator.BETWEEN: "BETWEEN",
    }
    FROM_SQL: Dict[str, Operator] = {token: operator for operator, token in TO_SQL.items()}
    # Accepted spellings that don't round-trip
    FROM_SQL["!="] = Operator.DIFF
    FROM_SQL["=="] = Operator.EQUAL

    @classmethod
    def to_sqlite(cls, operator: Operator) -> str:
        return cls.TO_SQL[operator]

    @classmethod
    def from_sqlite(cls, token: str) -> Operator:
        key = " ".join(token.upper().split())
        try:
            return cls.FROM_SQL[key]
        except KeyError:
            raise ValueError(f"Unknown SQLite operator: {token}") from None


class CombinatorConverter:

    @staticmethod
    def to_sqlite(combinator: Combinator) -> str:
        return "OR" if combinator is Combinator.OR else "AND"

    @staticmethod
    def from_sqlite(token: str) -> Combinator:
        normalized = token.strip().upper()
        if normalized == "AND":
            return Combinator.AND
        if normalized == "OR":
            return Combinator.OR
        raise ValueError(f"Unknown SQLite combinator: {token}")


class SortConverter:

    @staticmethod
    def to_sqlite(direction: SortDirection) -> str:
        return "DESC" if direction is SortDirection.DESC else "ASC"

    @staticmethod
    def from_sqlite(token: str) -> SortDirection:
        normalized = token.strip().upper()
        if normalized == "ASC":
            return SortDirection.ASC
        if normalized == "DESC":
            return SortDirection.DESC
        raise ValueError(f"Unknown SQLite sort direction: {token}")
