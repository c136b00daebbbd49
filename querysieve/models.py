"""
Data carried between request sources, catalogs and query builders.
"""

from dataclasses import dataclass, field as dc_field
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from .enums import Combinator, Operator, SortDirection
from .exceptions import InvalidValueError

T = TypeVar("T")


@dataclass(frozen=True)
class Condition:
    """A single pending where() call."""
    field: str
    operator: Operator
    value: Any
    combinator: Combinator = Combinator.AND

    def __repr__(self):
        return f"{self.combinator.name} {self.field} {self.operator.name} {self.value!r}"


@dataclass
class FilterNode:
    """
    One element of a structured body filter tree.
    A node without a field is a grouping node and only its children count.
    """
    field: Optional[str] = None
    value: Optional[str] = None
    operator: Operator = Operator.EQUAL
    combinator: Combinator = Combinator.AND
    children: List['FilterNode'] = dc_field(default_factory=list)

    @property
    def is_group(self) -> bool:
        return bool(self.children)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FilterNode':
        """
        Build a node from decoded JSON.

        Accepts the keys field, value, operator, type (the combinator) and
        subFilters. Scalar values are turned back into the raw strings a
        query string would have carried.
        """
        if not isinstance(data, Mapping):
            raise InvalidValueError(f"Filter entries must be objects, got {type(data).__name__}")

        operator = Operator.EQUAL
        if data.get("operator") is not None:
            operator = Operator.from_string(data["operator"])
            if operator is None:
                raise InvalidValueError(f"Unknown operator: {data['operator']}")

        combinator = Combinator.AND
        if data.get("type") is not None:
            combinator = Combinator.from_string(data["type"])
            if combinator is None:
                raise InvalidValueError(f"Unknown filter type: {data['type']}")

        children = data.get("subFilters") or []
        return cls(
            field=data.get("field"),
            value=raw_string(data.get("value")),
            operator=operator,
            combinator=combinator,
            children=[cls.from_dict(child) for child in children],
        )


@dataclass(frozen=True)
class OrderSpec:
    """Whitelisted sort key and the field it sorts by."""
    name: str
    internal_name: Optional[str] = None

    def __post_init__(self):
        if self.internal_name is None:
            object.__setattr__(self, "internal_name", self.name)


@dataclass(frozen=True)
class OrderRequest:
    field: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'OrderRequest':
        direction = SortDirection.ASC
        if data.get("sort") is not None:
            direction = SortDirection.from_string(data["sort"])
            if direction is None:
                raise InvalidValueError(f"Unknown sort direction: {data['sort']}")
        return cls(field=data.get("field"), direction=direction)


@dataclass
class BodyRequest:
    filters: List[FilterNode] = dc_field(default_factory=list)
    sorts: List[OrderRequest] = dc_field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'BodyRequest':
        """
        Materialize the body shape
        {filters: [{field, value, operator, type, subFilters}], sorts: [{field, sort}]}.
        """
        if not data:
            return cls()
        return cls(
            filters=[FilterNode.from_dict(item) for item in data.get("filters") or []],
            sorts=[OrderRequest.from_dict(item) for item in data.get("sorts") or []],
        )


@dataclass
class Page(Generic[T]):
    """Pagination result container."""
    content: List[T]
    total_elements: int
    limit: int
    offset: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total_elements + self.limit - 1) // self.limit

    @property
    def current_page(self) -> int:
        if self.limit <= 0:
            return 0
        return self.offset // self.limit

    @property
    def has_next(self) -> bool:
        return (self.current_page + 1) * self.limit < self.total_elements

    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "total_elements": self.total_elements,
            "limit": self.limit,
            "offset": self.offset,
            "total_pages": self.total_pages,
            "current_page": self.current_page,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
        }


def raw_string(value: Any) -> Optional[str]:
    """Render a decoded JSON scalar (or list) as a raw request string."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(raw_string(item) or "" for item in value)
    return str(value)
