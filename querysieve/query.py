"""
Backend-agnostic query builder contract.

The engine only ever talks to QueryBuilder; each storage backend implements
it and converts the canonical enums to its own vocabulary.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .enums import Combinator, Operator, SortDirection
from .exceptions import ConfigurationError
from .models import Page

logger = logging.getLogger(__name__)


class QueryBuilder(ABC):
    """
    Abstract base class for query builders.
    Builder state belongs entirely to the implementation.
    """

    @abstractmethod
    def where(self,
              field: str,
              operator: Operator,
              value: Any,
              combinator: Combinator = Combinator.AND) -> 'QueryBuilder':
        """
        Add a predicate.

        Args:
            field: Backend field path
            operator: Canonical operator
            value: Typed value (a list for IN/NOT_IN, None for null checks)
            combinator: How the predicate joins the ones before it
        """
        pass

    def where_equal(self, field: str, value: Any) -> 'QueryBuilder':
        return self.where(field, Operator.EQUAL, value)

    @abstractmethod
    def order_by(self, field: str, direction: SortDirection = SortDirection.ASC) -> 'QueryBuilder':
        pass

    @abstractmethod
    def select(self, *fields: str) -> 'QueryBuilder':
        """Replace the selected fields."""
        pass

    @abstractmethod
    def add_select(self, *fields: str) -> 'QueryBuilder':
        pass

    @abstractmethod
    def limit(self, limit: int) -> 'QueryBuilder':
        pass

    @abstractmethod
    def offset(self, offset: int) -> 'QueryBuilder':
        pass

    @abstractmethod
    def get(self) -> List[Any]:
        pass

    @abstractmethod
    def page(self, limit: int, offset: int) -> Page:
        pass

    @abstractmethod
    def find_first(self) -> Optional[Any]:
        pass

    @abstractmethod
    def get_where_conditions(self) -> Any:
        """Backend-specific handle on the accumulated predicates."""
        pass


class QueryBuilderProvider(ABC):
    """Factory creating query builders for a model."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used to pick this provider (e.g. 'sqlite', 'qdrant')."""
        pass

    @abstractmethod
    def create(self, model: Any) -> QueryBuilder:
        pass

    def supports(self, model: Any) -> bool:
        return True


_providers: Dict[str, QueryBuilderProvider] = {}


def register_provider(provider: QueryBuilderProvider) -> QueryBuilderProvider:
    """Register a provider under its name, replacing any previous one."""
    _providers[provider.name] = provider
    logger.debug(f"Registered query builder provider '{provider.name}'")
    return provider


def unregister_provider(name: str) -> None:
    _providers.pop(name, None)


def registered_providers() -> List[QueryBuilderProvider]:
    return list(_providers.values())


def get_provider(name: Optional[str] = None, model: Any = None) -> QueryBuilderProvider:
    """
    Resolve a provider by name, or the first one supporting model.

    Raises:
        ConfigurationError: If nothing matches
    """
    if name is not None:
        provider = _providers.get(name)
        if provider is None:
            available = ", ".join(_providers) or "none"
            raise ConfigurationError(
                f"Query builder provider '{name}' not found. Available providers: {available}"
            )
        return provider

    for provider in _providers.values():
        if provider.supports(model):
            return provider

    raise ConfigurationError(
        "No query builder provider found. Register one with register_provider() "
        "(e.g. querysieve.backends.sqlite.SQLiteQueryBuilderProvider)."
    )
