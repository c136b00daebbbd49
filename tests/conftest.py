"""
Shared pytest fixtures for querysieve tests.
Provides a recording query builder and a populated in-memory SQLite database.
"""

import json
import logging
import sqlite3
import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from querysieve.enums import Combinator, SortDirection
from querysieve.models import Condition, Page
from querysieve.query import QueryBuilder

logging.basicConfig(level=logging.CRITICAL)


class RecordingQueryBuilder(QueryBuilder):
    """
    QueryBuilder test double.
    Records every call and serves a fixed row list.
    """

    def __init__(self, rows: Optional[List[Any]] = None):
        self.rows = list(rows or [])
        self.wheres: List[Condition] = []
        self.orders: List[tuple] = []
        self.selects: List[str] = []
        self.limit_value: Optional[int] = None
        self.offset_value: Optional[int] = None
        self.page_calls: List[tuple] = []

    def where(self, field, operator, value, combinator=Combinator.AND):
        self.wheres.append(Condition(field, operator, value, combinator))
        return self

    def order_by(self, field, direction=SortDirection.ASC):
        self.orders.append((field, direction))
        return self

    def select(self, *fields):
        self.selects = list(fields)
        return self

    def add_select(self, *fields):
        self.selects.extend(fields)
        return self

    def limit(self, limit):
        self.limit_value = limit
        return self

    def offset(self, offset):
        self.offset_value = offset
        return self

    def get(self):
        return list(self.rows)

    def page(self, limit, offset):
        self.page_calls.append((limit, offset))
        return Page(self.rows[offset:offset + limit], len(self.rows), limit, offset)

    def find_first(self):
        return self.rows[0] if self.rows else None

    def get_where_conditions(self):
        return list(self.wheres)

    def triples(self):
        """(field, operator, value) of every recorded where() call."""
        return [(c.field, c.operator, c.value) for c in self.wheres]


@pytest.fixture
def builder():
    """Provide a fresh RecordingQueryBuilder."""
    return RecordingQueryBuilder()


USERS = [
    (1, "Ann", "ann@x.io", 30, "BR", "ACTIVE", "2024-01-10", None, {"score": 7, "tier": "gold"}),
    (2, "Bob", "bob@x.io", 17, "US", "BLOCKED", "2024-03-05", "2024-04-01", {"score": 3, "tier": "silver"}),
    (3, "Carla", "carla@y.io", 45, "BR", "ACTIVE", "2023-12-31", None, {"score": 12, "tier": "gold"}),
    (4, "Dan", "dan@y.io", 65, "AR", "PENDING", "2024-06-15", None, {"score": 9, "tier": "bronze"}),
    (5, "Eve", "eve@x.io", 22, "UK", "ACTIVE", "2024-02-29", None, {"score": 1, "tier": "silver"}),
]

USER_COLUMNS = ["id", "name", "email", "age", "country", "status", "created_at", "deleted_at", "meta"]


@pytest.fixture
def users_db():
    """In-memory SQLite database with a populated users table."""
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT,
            age INTEGER,
            country TEXT,
            status TEXT,
            created_at TEXT,
            deleted_at TEXT,
            meta TEXT
        )
    """)
    conn.executemany(
        "INSERT INTO users VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
        [row[:-1] + (json.dumps(row[-1]),) for row in USERS]
    )
    conn.commit()
    yield conn
    conn.close()
