"""
Base filter definition.

A filter turns one raw request value into zero or more conditions against a
backend field. Filters are configuration: built once, shared by every request,
never holding request data.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Mapping, Optional

from ..enums import Combinator, Operator
from ..grammar import clean_value, parse_operator
from ..models import Condition
from ..requests import param_value

logger = logging.getLogger(__name__)


class Filter(ABC):
    """
    Abstract base class for filters.

    Subclasses implement conditions(); apply() emits them only after all of
    them were built, so a bad value never leaves a half-applied filter.
    """

    supports_body = True

    def __init__(self,
                 param: str,
                 internal_name: Optional[str] = None,
                 default_value: Optional[str] = None):
        """
        Args:
            param: Name clients send
            internal_name: Backend field path (defaults to param)
            default_value: Raw value used when the request has none
        """
        self._param = param
        self.internal_name = internal_name if internal_name is not None else param
        self.default_value = default_value
        self._ignored: List[str] = []

    @property
    def param(self) -> str:
        return self._param

    @property
    def ignored(self) -> List[str]:
        return list(self._ignored)

    def add_ignore(self, *values: str) -> 'Filter':
        """Values that turn the filter into a no-op."""
        self._ignored.extend(values)
        return self

    def set_default_value(self, value: Optional[str]) -> 'Filter':
        self.default_value = value
        return self

    def ignores(self, value: str) -> bool:
        return value.strip() in self._ignored

    def transform(self, value: str) -> Any:
        """Typed value for a single raw token. Used by body filtering."""
        return value

    @abstractmethod
    def conditions(self, value: str) -> List[Condition]:
        """Conditions for a raw request value."""
        pass

    def apply(self, query, value: str) -> None:
        for condition in self.conditions(value):
            logger.debug(f"{type(self).__name__}({self.param}): {condition!r}")
            query.where(condition.field, condition.operator, condition.value, condition.combinator)

    def resolve(self, lookup: Callable[[str], Optional[str]]) -> Optional[str]:
        """
        Raw value for this filter, or None when it should not run.
        Falls back to the default value; ignored values resolve to None.
        """
        value = lookup(self.param)
        if value is None:
            value = self.default_value
        if value is None or self.ignores(value):
            return None
        return value

    def apply_request(self, query, request) -> None:
        value = self.resolve(request.find_param)
        if value is not None:
            self.apply(query, value)

    def apply_params(self, query, params: Mapping[str, Any]) -> None:
        value = self.resolve(lambda name: param_value(params, name))
        if value is not None:
            self.apply(query, value)

    def condition(self,
                  operator: Operator,
                  value: Any,
                  field: Optional[str] = None,
                  combinator: Combinator = Combinator.AND) -> Condition:
        return Condition(field or self.internal_name, operator, value, combinator)

    # Prefix grammar shared by every filter kind.
    get_operator = staticmethod(parse_operator)
    clean_value = staticmethod(clean_value)

    def __repr__(self):
        return f"{type(self).__name__}(param={self.param!r}, internal_name={self.internal_name!r})"

