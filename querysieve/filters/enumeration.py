"""
Enum, null-check and blank-check filters.
"""

from enum import Enum
from typing import List, Optional, Type

from ..enums import Combinator, Operator
from ..exceptions import InvalidValueError
from ..grammar import split_list
from ..models import Condition
from .base import Filter


class EnumFilter(Filter):
    """
    Values restricted to the member names of an Enum class.

        EnumFilter("status", Status)
        # ?status=ACTIVE          -> status = Status.ACTIVE
        # ?status=ACTIVE,PENDING  -> status IN {Status.ACTIVE, Status.PENDING}
    """

    def __init__(self,
                 param: str,
                 enum_class: Type[Enum],
                 internal_name: Optional[str] = None,
                 **kwargs):
        super().__init__(param, internal_name, **kwargs)
        self.enum_class = enum_class

    @property
    def allowed(self) -> List[str]:
        return list(self.enum_class.__members__)

    def transform(self, value: str) -> Enum:
        try:
            return self.enum_class[value.strip()]
        except KeyError:
            raise InvalidValueError(
                f"Invalid value '{value}' for {self.param}. Allowed values: {', '.join(self.allowed)}"
            ) from None

    def conditions(self, value: str) -> List[Condition]:
        if "," not in value:
            return [self.condition(Operator.EQUAL, self.transform(value))]

        members = {self.transform(item) for item in split_list(value)}
        if not members:
            return []
        return [self.condition(Operator.IN, members)]


NULL_TOKENS = frozenset({"null", "true", "1", "yes"})
NOT_NULL_TOKENS = frozenset({"not_null", "false", "0", "no"})


class IsNullFilter(Filter):
    """
    NULL / NOT NULL checks.

    "null", "true", "1", "yes"     -> IS NULL
    "not_null", "false", "0", "no" -> IS NOT NULL
    """

    def transform(self, value: str) -> bool:
        token = value.strip().lower()
        if token in NULL_TOKENS:
            return True
        if token in NOT_NULL_TOKENS:
            return False
        raise InvalidValueError(f"Invalid value for IsNullFilter '{self.param}'. Use 'null' or 'not_null'")

    def conditions(self, value: str) -> List[Condition]:
        operator = Operator.IS_NULL if self.transform(value) else Operator.IS_NOT_NULL
        return [self.condition(operator, None)]


class EmptyFilter(Filter):
    """
    Blank check; any value, even an empty one, triggers it.

        ?noEmail  -> email IS NULL OR email = ''
    """

    supports_body = False

    def conditions(self, value: str) -> List[Condition]:
        return [
            self.condition(Operator.IS_NULL, None),
            self.condition(Operator.EQUAL, "", combinator=Combinator.OR),
        ]


class NotEmptyFilter(Filter):
    """
    Non-blank check; any value, even an empty one, triggers it.

        ?hasEmail  -> email IS NOT NULL AND email <> ''
    """

    supports_body = False

    def conditions(self, value: str) -> List[Condition]:
        return [
            self.condition(Operator.IS_NOT_NULL, None),
            self.condition(Operator.DIFF, ""),
        ]
