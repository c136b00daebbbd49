"""
Date filter.

Supports three value forms:
    "2024-01-01|2024-12-31"   range, either side optional -> >= start, <= end
    ">2024-01-01"             comparison prefix (>=, <=, <>, >, <)
    "2024-01-01"              exact match

and three target types:
    DateType.DATE       datetime.date (default pattern: ISO yyyy-mm-dd)
    DateType.DATETIME   datetime.datetime (default pattern: ISO 8601)
    DateType.TIMESTAMP  Unix timestamp as float; naive input is read as UTC

Examples:
    DateFilter("createdAt", "created_at")
    DateFilter.for_datetime("updatedAt", "%d/%m/%Y %H:%M:%S")
    DateFilter.builder("eventDate").use_date().with_pattern("%Y/%m/%d").build()
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from ..enums import Operator
from ..exceptions import InvalidValueError
from ..grammar import match_prefix, split_date_range
from ..models import Condition
from .base import Filter


class DateType(Enum):
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"


DEFAULT_PATTERNS = {
    DateType.DATE: "%Y-%m-%d (ISO)",
    DateType.DATETIME: "%Y-%m-%dT%H:%M:%S (ISO)",
    DateType.TIMESTAMP: "%Y-%m-%dT%H:%M:%S (ISO)",
}


class DateFilter(Filter):

    def __init__(self,
                 param: str,
                 internal_name: Optional[str] = None,
                 date_type: DateType = DateType.DATE,
                 pattern: Optional[str] = None,
                 **kwargs):
        """
        Args:
            param: Name clients send
            internal_name: Backend field path (defaults to param)
            date_type: Type values are parsed into
            pattern: strptime pattern; ISO parsing when omitted
        """
        super().__init__(param, internal_name, **kwargs)
        self.date_type = date_type
        self.pattern = pattern

    @classmethod
    def builder(cls, param: str) -> 'DateFilterBuilder':
        return DateFilterBuilder(param)

    @classmethod
    def for_date(cls, param: str, pattern: Optional[str] = None,
                 internal_name: Optional[str] = None) -> 'DateFilter':
        return cls(param, internal_name, DateType.DATE, pattern)

    @classmethod
    def for_datetime(cls, param: str, pattern: Optional[str] = None,
                     internal_name: Optional[str] = None) -> 'DateFilter':
        return cls(param, internal_name, DateType.DATETIME, pattern)

    @classmethod
    def for_timestamp(cls, param: str, pattern: Optional[str] = None,
                      internal_name: Optional[str] = None) -> 'DateFilter':
        return cls(param, internal_name, DateType.TIMESTAMP, pattern)

    def conditions(self, value: str) -> List[Condition]:
        bounds = split_date_range(value)
        if bounds is not None:
            start, end = bounds
            conditions = []
            if start:
                conditions.append(self.condition(Operator.GREATER_OR_EQUAL, self.transform(start)))
            if end:
                conditions.append(self.condition(Operator.LESS_OR_EQUAL, self.transform(end)))
            return conditions

        operator, token = match_prefix(value)
        return [self.condition(operator, self.transform(value[len(token):]))]

    def transform(self, value: str) -> Any:
        """
        Parse a date string into the configured type.

        Raises:
            InvalidValueError: If the value does not match the pattern
        """
        try:
            return self._parse(value.strip())
        except (ValueError, TypeError):
            expected = self.pattern or DEFAULT_PATTERNS[self.date_type]
            raise InvalidValueError(
                f"Invalid date format for '{value}' in filter '{self.param}'. "
                f"Expected pattern: {expected}, Date type: {self.date_type.name}"
            ) from None

    def _parse(self, value: str) -> Any:
        if self.date_type is DateType.DATE:
            if self.pattern:
                return datetime.strptime(value, self.pattern).date()
            return date.fromisoformat(value)

        parsed = datetime.strptime(value, self.pattern) if self.pattern else datetime.fromisoformat(value)
        if self.date_type is DateType.DATETIME:
            return parsed
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()


class DateFilterBuilder:
    """Fluent configuration for DateFilter."""

    def __init__(self, param: str):
        self._param = param
        self._internal_name: Optional[str] = None
        self._date_type = DateType.DATE
        self._pattern: Optional[str] = None

    def with_internal_name(self, name: str) -> 'DateFilterBuilder':
        self._internal_name = name
        return self

    def use_date(self) -> 'DateFilterBuilder':
        self._date_type = DateType.DATE
        return self

    def use_datetime(self) -> 'DateFilterBuilder':
        self._date_type = DateType.DATETIME
        return self

    def use_timestamp(self) -> 'DateFilterBuilder':
        self._date_type = DateType.TIMESTAMP
        return self

    def with_pattern(self, pattern: str) -> 'DateFilterBuilder':
        self._pattern = pattern
        return self

    def build(self) -> DateFilter:
        return DateFilter(self._param, self._internal_name, self._date_type, self._pattern)
