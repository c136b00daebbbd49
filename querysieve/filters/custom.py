"""
Escape hatch for filtering logic the built-in grammar can't express.
"""

from typing import Any, Callable, List, Optional

from ..models import Condition
from .base import Filter


class CustomFilter(Filter):
    """
    Hands the raw value to a caller-supplied function.

        CustomFilter("adult", lambda query, value: query.where("age", Operator.GREATER_OR_EQUAL, 18))

    The function talks to the query builder directly, so it only runs from
    query parameters, never from a body tree.
    """

    supports_body = False

    def __init__(self,
                 param: str,
                 fn: Callable[[Any, str], None],
                 internal_name: Optional[str] = None,
                 **kwargs):
        super().__init__(param, internal_name, **kwargs)
        self.fn = fn

    def conditions(self, value: str) -> List[Condition]:
        return []

    def apply(self, query, value: str) -> None:
        self.fn(query, value)
