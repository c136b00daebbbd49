"""
Equality and text-matching filters.
"""

from typing import Any, List, Optional, Sequence

from ..enums import Combinator, LikeStrategy, Operator
from ..grammar import like_pattern, sniff
from ..models import Condition
from .base import Filter


class ExactFilter(Filter):
    """
    Exact match with type sniffing.

    "true"/"false" become booleans, integer and decimal strings become numbers,
    anything else stays a string (backends handle enum columns).
    """

    def transform(self, value: str) -> Any:
        return sniff(value)

    def conditions(self, value: str) -> List[Condition]:
        return [self.condition(Operator.EQUAL, self.transform(value))]


class PartialFilter(Filter):
    """
    LIKE filter; the strategy decides where wildcards go.
    A value that already contains % is used as-is.
    """

    def __init__(self,
                 param: str,
                 internal_name: Optional[str] = None,
                 strategy: LikeStrategy = LikeStrategy.FINAL,
                 **kwargs):
        super().__init__(param, internal_name, **kwargs)
        self.strategy = strategy

    def set_strategy(self, strategy: LikeStrategy) -> 'PartialFilter':
        self.strategy = strategy
        return self

    def transform(self, value: str) -> str:
        return like_pattern(value, self.strategy)

    def conditions(self, value: str) -> List[Condition]:
        return [self.condition(Operator.LIKE, self.transform(value))]


class SearchFilter(Filter):
    """
    LIKE across several fields joined with OR.

    The first field joins the surrounding predicates with AND, the rest with OR:

        SearchFilter("q", "username", "email")
        # ?q=ann -> username LIKE %ann% OR email LIKE %ann%
    """

    supports_body = False

    def __init__(self,
                 param: str,
                 *fields: str,
                 strategy: LikeStrategy = LikeStrategy.COMPLETE,
                 **kwargs):
        super().__init__(param, "", **kwargs)
        self.internal_names: List[str] = list(fields)
        self.strategy = strategy

    @classmethod
    def of(cls, *fields: str) -> 'SearchFilter':
        """Search filter reading the 'search' parameter."""
        return cls("search", *fields)

    def set_internal_names(self, names: Sequence[str]) -> 'SearchFilter':
        self.internal_names = list(names)
        return self

    def set_strategy(self, strategy: LikeStrategy) -> 'SearchFilter':
        self.strategy = strategy
        return self

    def conditions(self, value: str) -> List[Condition]:
        pattern = self.strategy.apply(value)
        return [
            self.condition(
                Operator.LIKE,
                pattern,
                field=name,
                combinator=Combinator.AND if index == 0 else Combinator.OR,
            )
            for index, name in enumerate(self.internal_names)
        ]
