"""
Filter catalog: the whitelist of filters one endpoint accepts, and the three
ways of applying it (request parameters, a parameter map, a body tree).
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..enums import Operator
from ..exceptions import (
    ConfigurationError, FieldNotAllowedError, FilterNotBodyCapableError, InvalidValueError
)
from ..models import FilterNode
from .base import Filter

logger = logging.getLogger(__name__)


class Filterable:
    """
    Ordered whitelist of filters.
    Insertion order is the order where() calls are made in.
    """

    def __init__(self, *filters: Union[Filter, Iterable[Filter]]):
        self.allowed_filters: List[Filter] = []
        self.add_filters(*filters)

    def add_filters(self, *filters: Union[Filter, Iterable[Filter]]) -> 'Filterable':
        for item in filters:
            if isinstance(item, Filter):
                self.allowed_filters.append(item)
            else:
                self.allowed_filters.extend(item)
        return self

    def find(self, param: Optional[str]) -> Optional[Filter]:
        for filter_def in self.allowed_filters:
            if filter_def.param == param:
                return filter_def
        return None

    def apply_request(self, query, request) -> None:
        """Apply every filter whose parameter the request carries (or that has a default)."""
        for filter_def in self.allowed_filters:
            filter_def.apply_request(query, request)

    def apply_params(self, query, params: Mapping[str, Any]) -> None:
        for filter_def in self.allowed_filters:
            filter_def.apply_params(query, params)

    def apply_body(self, query, nodes: Iterable[FilterNode]) -> None:
        """
        Apply a structured filter tree.

        Grouping nodes only contribute their children; each leaf joins its
        siblings with its own combinator.
        """
        for node in nodes:
            self._apply_node(query, node)

    def _apply_node(self, query, node: FilterNode) -> None:
        if not node.children and node.field is None:
            raise ConfigurationError("The field and subFilters cannot be empty at the same time")

        if node.children:
            for child in node.children:
                self._apply_node(query, child)
            return

        self._apply_leaf(query, node)

    def _apply_leaf(self, query, node: FilterNode) -> None:
        filter_def = self.find(node.field)
        if filter_def is None:
            raise FieldNotAllowedError(node.field)

        if not filter_def.supports_body:
            raise FilterNotBodyCapableError(type(filter_def).__name__)

        operator = node.operator
        value = node.value

        if not operator.needs_value:
            final_value = None
        else:
            value = _required(value, operator)
            if filter_def.ignores(value):
                return
            if operator.is_list:
                final_value = [filter_def.transform(item) for item in value.split(",")]
            else:
                final_value = filter_def.transform(value)

        logger.debug(f"Body filter {node.field}: {operator.name} {final_value!r} ({node.combinator.name})")
        query.where(filter_def.internal_name, operator, final_value, node.combinator)


def _required(value: Optional[str], operator: Operator) -> str:
    if value is None:
        raise InvalidValueError(f"The value cannot be null for: {operator.name}")
    return value
