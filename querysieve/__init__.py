"""
querysieve
Whitelisted filtering and sorting of untyped request input, forwarded to
pluggable query builders.
"""

from .config import Config
from .enums import Combinator, LikeStrategy, Operator, SortDirection
from .exceptions import (
    BackendError, ConfigurationError, FieldNotAllowedError,
    FilterNotBodyCapableError, InvalidValueError, QuerySieveError,
    UnsupportedOperatorError
)
from .filters import (
    CustomFilter, DateFilter, DateType, EmptyFilter, EnumFilter, ExactFilter, Filter,
    Filterable, GreaterFilter, InFilter, IntervalFilter, IsNullFilter,
    LessFilter, ComparisonFilter, NotEmptyFilter, PartialFilter, SearchFilter
)
from .models import BodyRequest, Condition, FilterNode, OrderRequest, OrderSpec, Page
from .query import QueryBuilder, QueryBuilderProvider, get_provider, register_provider
from .requests import BasicRequest, ParamsRequest
from .sieve import QuerySieve
from .sorting import Sortable

__version__ = "1.0.0"

__all__ = [
    "QuerySieve",
    "Filterable",
    "Sortable",
    "Filter",
    "ExactFilter",
    "PartialFilter",
    "SearchFilter",
    "ComparisonFilter",
    "GreaterFilter",
    "LessFilter",
    "IntervalFilter",
    "InFilter",
    "EnumFilter",
    "IsNullFilter",
    "EmptyFilter",
    "NotEmptyFilter",
    "DateFilter",
    "DateType",
    "CustomFilter",
    "Operator",
    "Combinator",
    "SortDirection",
    "LikeStrategy",
    "Condition",
    "FilterNode",
    "BodyRequest",
    "OrderSpec",
    "OrderRequest",
    "Page",
    "QueryBuilder",
    "QueryBuilderProvider",
    "register_provider",
    "get_provider",
    "BasicRequest",
    "ParamsRequest",
    "Config",
    "QuerySieveError",
    "ConfigurationError",
    "FieldNotAllowedError",
    "FilterNotBodyCapableError",
    "InvalidValueError",
    "BackendError",
    "UnsupportedOperatorError"
]
