"""
QuerySieve: binds one query builder to one filter catalog and one sort catalog
for a single logical query.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .config import DEFAULT_LIMIT_PARAM, DEFAULT_OFFSET_PARAM, DEFAULT_SORT_PARAM
from .exceptions import ConfigurationError
from .filters import Filter, Filterable
from .models import OrderSpec, Page
from .query import QueryBuilder, get_provider
from .requests import BasicRequest
from .sorting import Sortable


class QuerySieve:
    """
    Per-request orchestrator.

    Input sources are used in this priority:
        1. parameters given with with_params() / with_param()
        2. the request body, when body mode is on and the request is a POST
        3. the request's query parameters (rejected in body-only mode)

    Example:
        sieve = (QuerySieve(builder, request)
                 .allowed_filters(ExactFilter("country"), IntervalFilter("age"))
                 .allowed_sorts("name", OrderSpec("created", "created_at")))
        page = sieve.page(20)
    """

    def __init__(self,
                 query_builder: QueryBuilder,
                 request: Optional[BasicRequest] = None,
                 sort_param: str = DEFAULT_SORT_PARAM,
                 limit_param: str = DEFAULT_LIMIT_PARAM,
                 offset_param: str = DEFAULT_OFFSET_PARAM):
        """
        Args:
            query_builder: Backend query builder this query runs on
            request: Request the filter and sort values come from
            sort_param: Parameter holding the sort string
            limit_param: Instance parameter overriding page() limit
            offset_param: Instance parameter overriding page() offset
        """
        self._query_builder = query_builder
        self.request = request
        self.filterable = Filterable()
        self.sortable = Sortable(param=sort_param)
        self.limit_param = limit_param
        self.offset_param = offset_param
        self._use_body = False
        self._only_body = False
        self._instance_params: Optional[Dict[str, Any]] = None
        self._applied = False
        self.logger = logging.getLogger(__name__)

    @classmethod
    def make(cls,
             model: Any,
             provider: Optional[str] = None,
             request: Optional[BasicRequest] = None,
             **kwargs) -> 'QuerySieve':
        """
        Create a QuerySieve with a builder from a registered provider.

        Args:
            model: What the provider builds a query for (table name, collection...)
            provider: Provider name; the first one supporting model when omitted

        Raises:
            ConfigurationError: If no provider matches
        """
        builder = get_provider(provider, model).create(model)
        return cls(builder, request, **kwargs)

    @property
    def query_builder(self) -> QueryBuilder:
        return self._query_builder

    def with_params(self, params: Mapping[str, Any]) -> 'QuerySieve':
        """Use these parameters instead of the request."""
        self._instance_params = dict(params)
        return self

    def with_param(self, key: str, value: Any) -> 'QuerySieve':
        params = dict(self._instance_params or {})
        params[key] = value
        self._instance_params = params
        return self

    def allowed_filters(self, *filters: Union[Filter, List[Filter]]) -> 'QuerySieve':
        self.filterable.add_filters(*filters)
        return self

    def allowed_sorts(self, *sorts: Union[str, OrderSpec, List[Union[str, OrderSpec]]]) -> 'QuerySieve':
        self.sortable.add_sorts(*sorts)
        return self

    def select(self, *fields: str) -> 'QuerySieve':
        """Replace the selected fields."""
        self._query_builder.select(*fields)
        return self

    def add_select(self, *fields: str) -> 'QuerySieve':
        self._query_builder.add_select(*fields)
        return self

    def use_body(self) -> 'QuerySieve':
        """Read filters and sorts from the body on POST, from query parameters otherwise."""
        self._use_body = True
        return self

    def use_only_body(self) -> 'QuerySieve':
        """Only accept POST requests with a body."""
        self._use_body = True
        self._only_body = True
        return self

    def builder(self, fn: Callable[[QueryBuilder], Any]) -> 'QuerySieve':
        """Run fn against the underlying builder for backend-specific tweaks."""
        fn(self._query_builder)
        return self

    def apply(self) -> 'QuerySieve':
        """
        Apply filters and sorts from the selected input source.
        Runs at most once; terminal calls invoke it implicitly.
        """
        if self._applied:
            return self

        builder = self._query_builder
        request = self.request

        if self._instance_params is not None:
            self.logger.debug("Applying instance parameters")
            self.filterable.apply_params(builder, self._instance_params)
            self.sortable.apply_params(builder, self._instance_params)
        elif self._use_body and request is not None and request.is_body_request():
            self.logger.debug("Applying request body")
            body = request.get_body()
            self.filterable.apply_body(builder, body.filters)
            self.sortable.apply(builder, body.sorts)
        elif request is not None:
            if self._only_body:
                raise ConfigurationError("Body can only be used with POST requests")
            self.logger.debug("Applying request parameters")
            self.filterable.apply_request(builder, request)
            self.sortable.apply_request(builder, request)
        else:
            self.logger.debug("No input source, running query unfiltered")

        self._applied = True
        return self

    def get(self) -> List[Any]:
        self.apply()
        return self._query_builder.get()

    def page(self, limit: int, offset: int = 0) -> Page:
        """
        Fetch one page.

        Instance parameters named limit/offset override the arguments. A value
        that does not parse as an integer is ignored and the argument is used;
        it never raises.
        """
        self.apply()
        actual_limit = self._override(self.limit_param, limit)
        actual_offset = self._override(self.offset_param, offset)
        return self._query_builder.page(actual_limit, actual_offset)

    def find_first(self) -> Optional[Any]:
        self.apply()
        return self._query_builder.find_first()

    def get_where_conditions(self) -> Any:
        return self._query_builder.get_where_conditions()

    def _override(self, name: str, default: int) -> int:
        if not self._instance_params or self._instance_params.get(name) is None:
            return default
        raw = self._instance_params[name]
        try:
            return int(str(raw).strip())
        except ValueError:
            self.logger.debug(f"Ignoring unparsable {name}={raw!r}, using {default}")
            return default
