"""
Interval and list filters.
"""

from typing import List, Optional

from ..enums import Operator
from ..exceptions import InvalidValueError
from ..grammar import split_interval, split_list
from ..models import Condition
from .base import Filter


class IntervalFilter(Filter):
    """
    Numeric ranges.

        "18-65"  -> field >= 18 AND field <= 65
        "18,65"  -> same (legacy separator)
        "18-"    -> field >= 18
        "50"     -> field = 50
    """

    def conditions(self, value: str) -> List[Condition]:
        bounds = split_interval(value)
        if bounds is None:
            return [self.condition(Operator.EQUAL, self.transform(value))]

        low, high = bounds
        conditions = []
        if low:
            conditions.append(self.condition(Operator.GREATER_OR_EQUAL, self.transform(low)))
        if high:
            conditions.append(self.condition(Operator.LESS_OR_EQUAL, self.transform(high)))
        return conditions


class InFilter(Filter):
    """Delimited list -> IN, e.g. "USA,UK,CA"."""

    def __init__(self,
                 param: str,
                 internal_name: Optional[str] = None,
                 delimiter: str = ",",
                 **kwargs):
        super().__init__(param, internal_name, **kwargs)
        self.delimiter = delimiter

    def transform(self, value: str) -> str:
        return value.strip()

    def values(self, value: str) -> List[str]:
        return [self.transform(item) for item in split_list(value, self.delimiter)]

    def conditions(self, value: str) -> List[Condition]:
        values = self.values(value)
        if not values:
            raise InvalidValueError(f"Value list cannot be empty for IN filter '{self.param}'")
        return [self.condition(Operator.IN, values)]
