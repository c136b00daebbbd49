#!/usr/bin/env python3
"""
Qdrant query builder.
Turns canonical conditions into a Qdrant Filter and reads points with scroll.
"""

import logging
from typing import Any, List, Optional, Tuple

from qdrant_client import QdrantClient
from qdrant_client.http.exceptions import ApiException
from qdrant_client.models import Filter, OrderBy

from ...enums import Combinator, Operator, SortDirection
from ...exceptions import BackendError
from ...models import Condition, Page
from ...query import QueryBuilder, QueryBuilderProvider
from .converters import OperatorConverter, QdrantCondition, SortConverter


class QdrantQueryBuilder(QueryBuilder):
    """
    QueryBuilder over one Qdrant collection.

    Conditions follow SQL precedence: each OR starts a new AND-chain and the
    chains go into a should clause. "a AND b OR c" becomes
    Filter(should=[Filter(must=[a, b]), Filter(must=[c])]).
    """

    def __init__(self, client: QdrantClient, collection_name: str):
        self.client = client
        self.collection_name = collection_name
        self.conditions: List[Condition] = []
        self._chains: List[List[Tuple[QdrantCondition, bool]]] = []
        self._orders: List[Tuple[str, SortDirection]] = []
        self._selects: List[str] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self.logger = logging.getLogger(__name__)

    def where(self, field: str, operator: Operator, value: Any,
              combinator: Combinator = Combinator.AND) -> 'QdrantQueryBuilder':
        converted = OperatorConverter.to_qdrant(field, operator, value)
        if not self._chains or combinator is Combinator.OR:
            self._chains.append([])
        self._chains[-1].append(converted)
        self.conditions.append(Condition(field, operator, value, combinator))
        return self

    def order_by(self, field: str,
                 direction: SortDirection = SortDirection.ASC) -> 'QdrantQueryBuilder':
        self._orders.append((field, direction))
        return self

    def select(self, *fields: str) -> 'QdrantQueryBuilder':
        self._selects = list(fields)
        return self

    def add_select(self, *fields: str) -> 'QdrantQueryBuilder':
        self._selects.extend(fields)
        return self

    def limit(self, limit: int) -> 'QdrantQueryBuilder':
        self._limit = limit
        return self

    def offset(self, offset: int) -> 'QdrantQueryBuilder':
        self._offset = offset
        return self

    def get_where_conditions(self) -> Optional[Filter]:
        """
        Accumulated Qdrant Filter.

        Returns:
            Filter object or None when nothing was added
        """
        if not self._chains:
            return None
        if len(self._chains) == 1:
            return _chain_filter(self._chains[0])
        return Filter(should=[_chain_filter(chain) for chain in self._chains])

    def get(self) -> List[dict]:
        points = self._scroll(self._limit, self._offset or 0)
        self.logger.info(f"Query on {self.collection_name} returned {len(points)} points")
        return points

    def page(self, limit: int, offset: int) -> Page:
        total = self._count()
        content = self._scroll(limit, offset) if limit > 0 else []
        self.logger.info(f"Page of {self.collection_name} (limit={limit}, offset={offset}): "
                         f"{len(content)} of {total} points")
        return Page(content=content, total_elements=total, limit=limit, offset=offset)

    def find_first(self) -> Optional[dict]:
        points = self._scroll(1, self._offset or 0)
        return points[0] if points else None

    def _count(self) -> int:
        try:
            result = self.client.count(
                collection_name=self.collection_name,
                count_filter=self.get_where_conditions(),
                exact=True
            )
        except (ApiException, ValueError) as e:
            raise BackendError(f"Qdrant count failed: {e}") from e
        return result.count

    def _scroll(self, limit: Optional[int], offset: int) -> List[dict]:
        """
        Read points with scroll.
        The offset is applied client-side since scroll pages by point id.
        """
        fetch = self._count() if limit is None else offset + limit
        if fetch <= 0:
            return []

        order_by = None
        if self._orders:
            field, direction = self._orders[0]
            if len(self._orders) > 1:
                self.logger.warning(
                    f"Qdrant orders by a single key; ignoring {[f for f, _ in self._orders[1:]]}"
                )
            order_by = OrderBy(key=field, direction=SortConverter.to_qdrant(direction))

        try:
            points, _ = self.client.scroll(
                collection_name=self.collection_name,
                scroll_filter=self.get_where_conditions(),
                limit=fetch,
                with_payload=self._selects or True,
                with_vectors=False,
                order_by=order_by
            )
        except (ApiException, ValueError) as e:
            self.logger.error(f"Scroll on {self.collection_name} failed: {e}")
            raise BackendError(f"Qdrant scroll failed: {e}") from e

        return [{"id": point.id, **(point.payload or {})} for point in points[offset:]]


class QdrantQueryBuilderProvider(QueryBuilderProvider):
    """Creates QdrantQueryBuilder instances for collection names."""

    def __init__(self, client: QdrantClient):
        self.client = client

    @property
    def name(self) -> str:
        return "qdrant"

    def supports(self, model: Any) -> bool:
        return isinstance(model, str)

    def create(self, model: Any) -> QdrantQueryBuilder:
        return QdrantQueryBuilder(self.client, model)


def _chain_filter(chain: List[Tuple[QdrantCondition, bool]]) -> Filter:
    must = [condition for condition, negated in chain if not negated]
    must_not = [condition for condition, negated in chain if negated]
    return Filter(must=must or None, must_not=must_not or None)
