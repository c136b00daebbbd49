"""
Qdrant backend built on qdrant-client.
"""

from .builder import QdrantQueryBuilder, QdrantQueryBuilderProvider
from .converters import CombinatorConverter, OperatorConverter, SortConverter

__all__ = [
    'QdrantQueryBuilder',
    'QdrantQueryBuilderProvider',
    'OperatorConverter',
    'CombinatorConverter',
    'SortConverter',
]
