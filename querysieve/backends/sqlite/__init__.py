"""
SQLite backend built on the standard sqlite3 module.
"""

from .builder import SQLiteQueryBuilder, SQLiteQueryBuilderProvider
from .converters import CombinatorConverter, OperatorConverter, SortConverter

__all__ = [
    'SQLiteQueryBuilder',
    'SQLiteQueryBuilderProvider',
    'OperatorConverter',
    'CombinatorConverter',
    'SortConverter',
]
