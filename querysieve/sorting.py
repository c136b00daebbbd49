"""
Sort catalog and the compact sort language.

    sort=name,-createdAt  ->  name ASC, createdAt DESC
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import DEFAULT_SORT_PARAM
from .enums import SortDirection
from .exceptions import ConfigurationError
from .models import OrderRequest, OrderSpec
from .requests import param_value

logger = logging.getLogger(__name__)


class Sortable:
    """Whitelist mapping external sort keys to backend fields."""

    def __init__(self, *sorts: Union[str, OrderSpec], param: str = DEFAULT_SORT_PARAM):
        self.param = param
        self.allowed_sorts: List[OrderSpec] = []
        self.add_sorts(*sorts)

    def add_sorts(self, *sorts: Union[str, OrderSpec, Iterable[Union[str, OrderSpec]]]) -> 'Sortable':
        for item in sorts:
            if isinstance(item, (str, OrderSpec)):
                self.allowed_sorts.append(_spec(item))
            else:
                self.allowed_sorts.extend(_spec(sort) for sort in item)
        return self

    def find(self, name: Optional[str]) -> Optional[OrderSpec]:
        for spec in self.allowed_sorts:
            if spec.name == name:
                return spec
        return None

    @staticmethod
    def parse(text: str) -> List[OrderRequest]:
        """
        Parse "a,-b,c".

        A leading dash means DESC. All leading dashes are dropped before the
        lookup, so "--a" is still "a" DESC.
        """
        orders = []
        for token in text.strip().split(","):
            token = token.strip()
            if not token:
                continue
            direction = SortDirection.DESC if token.startswith("-") else SortDirection.ASC
            orders.append(OrderRequest(token.lstrip("-"), direction))
        return orders

    def apply_request(self, query, request) -> None:
        text = request.find_param(self.param)
        if text is None:
            return
        self.apply(query, self.parse(text))

    def apply_params(self, query, params: Mapping[str, Any]) -> None:
        text = param_value(params, self.param)
        if text is None:
            return
        self.apply(query, self.parse(text))

    def apply(self, query, orders: Iterable[OrderRequest]) -> None:
        """
        Emit order_by() calls in list order; the first entry is the primary key.

        Raises:
            ConfigurationError: For a missing or unknown field
        """
        resolved = []
        for order in orders:
            if order.field is None:
                raise ConfigurationError("The sort list is not valid, one element has a null field")
            spec = self.find(order.field)
            if spec is None:
                raise ConfigurationError(f"The field '{order.field}' is not valid")
            resolved.append((spec.internal_name, order.direction))

        for field, direction in resolved:
            logger.debug(f"Sort by {field} {direction.name}")
            query.order_by(field, direction)


def _spec(sort: Union[str, OrderSpec]) -> OrderSpec:
    return sort if isinstance(sort, OrderSpec) else OrderSpec(sort)
