"""
Request sources.

A request is handed to QuerySieve explicitly for the duration of one query;
nothing here is process-wide.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from .models import BodyRequest


class BasicRequest(ABC):
    """
    What the engine needs from an incoming request.
    Framework adapters implement this on top of their own request objects.
    """

    @property
    @abstractmethod
    def method(self) -> str:
        """HTTP verb of the request."""
        pass

    @abstractmethod
    def find_param(self, name: str) -> Optional[str]:
        """Raw query-string value for name, or None when it is absent."""
        pass

    @abstractmethod
    def get_body(self) -> BodyRequest:
        pass

    def has_param(self, name: str) -> bool:
        return self.find_param(name) is not None

    def is_body_request(self) -> bool:
        """Only POST requests carry a filter body."""
        return self.method.upper() == "POST"


class ParamsRequest(BasicRequest):
    """Request backed by an already-parsed parameter mapping and optional body."""

    def __init__(self,
                 params: Optional[Mapping[str, Any]] = None,
                 body: Optional[Any] = None,
                 method: str = "GET"):
        """
        Args:
            params: Query parameters; list values use their first item
            body: A BodyRequest, or the decoded JSON dict it is built from
            method: HTTP verb
        """
        self._params = dict(params or {})
        if body is not None and not isinstance(body, BodyRequest):
            body = BodyRequest.from_dict(body)
        self._body = body
        self._method = method

    @property
    def method(self) -> str:
        return self._method

    def find_param(self, name: str) -> Optional[str]:
        return param_value(self._params, name)

    def get_body(self) -> BodyRequest:
        return self._body if self._body is not None else BodyRequest()


def param_value(params: Mapping[str, Any], name: str) -> Optional[str]:
    """
    Single string value of a query parameter.
    Repeated parameters arrive as lists; the first occurrence wins.
    """
    value = params.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)
