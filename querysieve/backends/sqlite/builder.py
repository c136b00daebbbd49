#!/usr/bin/env python3
"""
SQLite query builder.
Compiles canonical conditions to a parameterised WHERE clause and runs it on a
sqlite3 connection. Fields outside the known columns can be read from a JSON
column with json_extract.
"""

import logging
import re
import sqlite3
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ...enums import Combinator, Operator, SortDirection
from ...exceptions import BackendError, UnsupportedOperatorError
from ...models import Condition, Page
from ...query import QueryBuilder, QueryBuilderProvider
from .converters import CombinatorConverter, OperatorConverter, SortConverter

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class SQLiteQueryBuilder(QueryBuilder):
    """
    QueryBuilder over one SQLite table.

    Conditions are joined left to right with their combinators and SQL
    precedence applies, so "a AND b OR c" means "(a AND b) OR c".
    """

    def __init__(self,
                 connection: sqlite3.Connection,
                 table: str,
                 columns: Optional[Iterable[str]] = None,
                 json_column: Optional[str] = None):
        """
        Initialize the builder.

        Args:
            connection: Open sqlite3 connection; the builder never closes it
            table: Table to query
            columns: Direct columns; when json_column is set, any other field
                is read from the JSON column
            json_column: Name of a JSON column holding extra fields
        """
        self.connection = connection
        self.table = _quote(table)
        self.columns = set(columns) if columns is not None else None
        self.json_column = json_column
        self.conditions: List[Condition] = []
        self._clauses: List[Tuple[Combinator, str, List[Any]]] = []
        self._orders: List[str] = []
        self._selects: List[str] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self.logger = logging.getLogger(__name__)

    def where(self, field: str, operator: Operator, value: Any,
              combinator: Combinator = Combinator.AND) -> 'SQLiteQueryBuilder':
        sql, params = self._convert_condition(field, operator, value)
        self.conditions.append(Condition(field, operator, value, combinator))
        self._clauses.append((combinator, sql, params))
        return self

    def order_by(self, field: str,
                 direction: SortDirection = SortDirection.ASC) -> 'SQLiteQueryBuilder':
        self._orders.append(f"{self._field_reference(field)} {SortConverter.to_sqlite(direction)}")
        return self

    def select(self, *fields: str) -> 'SQLiteQueryBuilder':
        self._selects = list(fields)
        return self

    def add_select(self, *fields: str) -> 'SQLiteQueryBuilder':
        self._selects.extend(fields)
        return self

    def limit(self, limit: int) -> 'SQLiteQueryBuilder':
        self._limit = limit
        return self

    def offset(self, offset: int) -> 'SQLiteQueryBuilder':
        self._offset = offset
        return self

    def get_where_conditions(self) -> Tuple[str, List[Any]]:
        """
        Compiled WHERE clause.

        Returns:
            Tuple of (where_clause, params); "1=1" when there are no conditions
        """
        if not self._clauses:
            return "1=1", []

        parts: List[str] = []
        params: List[Any] = []
        for index, (combinator, sql, clause_params) in enumerate(self._clauses):
            if index > 0:
                parts.append(CombinatorConverter.to_sqlite(combinator))
            parts.append(sql)
            params.extend(clause_params)
        return " ".join(parts), params

    def to_sql(self, limit: Optional[int] = None, offset: Optional[int] = None) -> Tuple[str, List[Any]]:
        """SELECT statement and params for the current state."""
        where_clause, params = self.get_where_conditions()
        if self._selects:
            select_fields = ", ".join(self._select_reference(field) for field in self._selects)
        else:
            select_fields = "*"

        sql = f"SELECT {select_fields} FROM {self.table} WHERE {where_clause}"
        if self._orders:
            sql += f" ORDER BY {', '.join(self._orders)}"

        limit = self._limit if limit is None else limit
        offset = self._offset if offset is None else offset
        if limit is not None or offset:
            sql += " LIMIT ?"
            params.append(limit if limit is not None else -1)
            if offset:
                sql += " OFFSET ?"
                params.append(offset)
        return sql, params

    def get(self) -> List[dict]:
        sql, params = self.to_sql()
        rows = self._fetch(sql, params)
        self.logger.info(f"Query on {self.table} returned {len(rows)} rows")
        return rows

    def page(self, limit: int, offset: int) -> Page:
        where_clause, params = self.get_where_conditions()
        count_sql = f"SELECT COUNT(*) AS total FROM {self.table} WHERE {where_clause}"
        total = self._fetch(count_sql, params)[0]["total"]

        sql, params = self.to_sql(limit=limit, offset=offset)
        content = self._fetch(sql, params)
        self.logger.info(f"Page of {self.table} (limit={limit}, offset={offset}): "
                         f"{len(content)} of {total} rows")
        return Page(content=content, total_elements=total, limit=limit, offset=offset)

    def find_first(self) -> Optional[dict]:
        sql, params = self.to_sql(limit=1)
        rows = self._fetch(sql, params)
        return rows[0] if rows else None

    def _fetch(self, sql: str, params: Sequence[Any]) -> List[dict]:
        self.logger.debug(f"SQL: {sql} params={list(params)}")
        try:
            cursor = self.connection.execute(sql, list(params))
            names = [column[0] for column in cursor.description]
            return [dict(zip(names, row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            self.logger.error(f"Query on {self.table} failed: {e}")
            raise BackendError(f"SQLite query failed: {e}") from e

    def _field_reference(self, field: str) -> str:
        """
        SQL reference for a field.
        Returns either a quoted column or a json_extract on the JSON column.
        """
        if not _IDENTIFIER.match(field):
            raise BackendError(f"Invalid field name: {field!r}")

        if self.json_column and self.columns is not None and field not in self.columns:
            return f"json_extract({_quote(self.json_column)}, '$.{field}')"
        return _quote(field)

    def _select_reference(self, field: str) -> str:
        reference = self._field_reference(field)
        if reference != _quote(field):
            return f'{reference} AS "{field}"'
        return reference

    def _convert_condition(self, field: str, operator: Operator, value: Any) -> Tuple[str, List[Any]]:
        field_ref = self._field_reference(field)
        token = OperatorConverter.to_sqlite(operator)

        if operator in {Operator.IS_NULL, Operator.IS_NOT_NULL}:
            return f"{field_ref} {token}", []

        if operator in {Operator.EQUAL, Operator.DIFF} and value is None:
            null_token = OperatorConverter.to_sqlite(
                Operator.IS_NULL if operator is Operator.EQUAL else Operator.IS_NOT_NULL
            )
            return f"{field_ref} {null_token}", []

        if operator in {Operator.EQUAL, Operator.DIFF} and field_ref.startswith("json_extract") \
                and isinstance(value, str) and _as_number(value) is not None:
            # JSON payloads may hold the number or its text
            token = OperatorConverter.to_sqlite(Operator.IN if operator is Operator.EQUAL else Operator.NOT_IN)
            return f"{field_ref} {token} (?, ?)", [value, _as_number(value)]

        if operator in {Operator.IN, Operator.NOT_IN}:
            values = [_sql_value(item) for item in _as_list(value, operator)]
            if not values:
                return ("0=1", []) if operator is Operator.IN else ("1=1", [])
            placeholders = ",".join("?" for _ in values)
            return f"{field_ref} {token} ({placeholders})", values

        if operator is Operator.BETWEEN:
            bounds = _as_list(value, operator)
            if len(bounds) != 2:
                raise UnsupportedOperatorError(operator, "SQLite", "BETWEEN requires exactly 2 values")
            field_ref, params = _numeric(field_ref, bounds)
            return f"{field_ref} BETWEEN ? AND ?", params

        if operator in {Operator.GREATER, Operator.GREATER_OR_EQUAL,
                        Operator.LESS, Operator.LESS_OR_EQUAL}:
            field_ref, params = _numeric(field_ref, [value])
            return f"{field_ref} {token} ?", params

        return f"{field_ref} {token} ?", [_sql_value(value)]


class SQLiteQueryBuilderProvider(QueryBuilderProvider):
    """Creates SQLiteQueryBuilder instances for table names on one connection."""

    def __init__(self, connection: sqlite3.Connection, json_column: Optional[str] = None):
        self.connection = connection
        self.json_column = json_column

    @property
    def name(self) -> str:
        return "sqlite"

    def supports(self, model: Any) -> bool:
        return isinstance(model, str)

    def create(self, model: Any) -> SQLiteQueryBuilder:
        columns = None
        if self.json_column:
            cursor = self.connection.execute(f"PRAGMA table_info({_quote(model)})")
            columns = [row[1] for row in cursor.fetchall()]
        return SQLiteQueryBuilder(self.connection, model, columns=columns, json_column=self.json_column)


def _quote(identifier: str) -> str:
    return ".".join(f'"{part}"' for part in identifier.split("."))


def _as_list(value: Any, operator: Operator) -> List[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise UnsupportedOperatorError(operator, "SQLite", f"expected a collection, got {type(value).__name__}")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return list(value)


def _sql_value(value: Any) -> Any:
    """Bindable form of a typed value."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        # SQLite stores booleans as 0/1
        return 1 if value else 0
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _numeric(field_ref: str, bounds: List[Any]) -> Tuple[str, List[Any]]:
    """
    Range comparison on a JSON field.
    Numeric bounds, numeric strings included, are bound as numbers against the
    field cast to REAL. SQLite ranks any number below any text.
    """
    if not field_ref.startswith("json_extract"):
        return field_ref, [_sql_value(bound) for bound in bounds]

    numbers = [_as_number(bound) for bound in bounds]
    if any(number is None for number in numbers):
        return field_ref, [_sql_value(bound) for bound in bounds]
    return f"CAST({field_ref} AS REAL)", numbers


def _as_number(value: Any):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None
