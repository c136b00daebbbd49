"""
Comparison filters.

    ComparisonFilter("age")               # ?age=>=18  -> age >= "18"
    GreaterFilter("minAge", "age")        # ?minAge=18 -> age > 18
    LessFilter("age", or_equal=True)      # ?age=65    -> age <= 65
"""

from typing import Any, List, Optional

from ..enums import Operator
from ..exceptions import InvalidValueError
from ..grammar import COMPARISON_PREFIXES, coerce_number, match_prefix
from ..models import Condition
from .base import Filter


# "!=" is accepted as an alias of "<>"; two-character markers stay first.
COMPARISON_FILTER_PREFIXES = COMPARISON_PREFIXES[:3] + (("!=", Operator.DIFF),) + COMPARISON_PREFIXES[3:]


class ComparisonFilter(Filter):
    """
    Operator taken from the value prefix (>=, <=, <>, !=, >, <), EQUAL otherwise.
    The value is passed on as a string.
    """

    def parse(self, value: str):
        operator, token = match_prefix(value, COMPARISON_FILTER_PREFIXES)
        return operator, value[len(token):].strip()

    def conditions(self, value: str) -> List[Condition]:
        operator, cleaned = self.parse(value)
        if not cleaned:
            raise InvalidValueError(f"Value cannot be empty for comparison filter '{self.param}'")
        return [self.condition(operator, cleaned)]


class _BoundFilter(Filter):
    """Shared body of GreaterFilter and LessFilter."""

    strict_operator: Operator
    inclusive_operator: Operator
    label = ""

    def __init__(self,
                 param: str,
                 internal_name: Optional[str] = None,
                 or_equal: bool = False,
                 **kwargs):
        super().__init__(param, internal_name, **kwargs)
        self.or_equal = or_equal

    @property
    def operator(self) -> Operator:
        return self.inclusive_operator if self.or_equal else self.strict_operator

    def transform(self, value: str) -> Any:
        """Numbers where possible, the original string otherwise."""
        number = coerce_number(value.strip())
        return value if number is None else number

    def conditions(self, value: str) -> List[Condition]:
        if not value or not value.strip():
            raise InvalidValueError(f"Value cannot be empty for {self.label} filter '{self.param}'")
        return [self.condition(self.operator, self.transform(value))]


class GreaterFilter(_BoundFilter):
    strict_operator = Operator.GREATER
    inclusive_operator = Operator.GREATER_OR_EQUAL
    label = "greater"


class LessFilter(_BoundFilter):
    strict_operator = Operator.LESS
    inclusive_operator = Operator.LESS_OR_EQUAL
    label = "less"
