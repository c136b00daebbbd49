"""
Filter definitions and the filter catalog.

Example usage:
    from querysieve.filters import Filterable, ExactFilter, IntervalFilter, EnumFilter

    filterable = Filterable(
        ExactFilter("country"),
        IntervalFilter("age"),
        EnumFilter("status", Status),
    )
    filterable.apply_params(builder, {"age": "18-65", "status": "ACTIVE,PENDING"})
"""

from .base import Filter
from .comparison import ComparisonFilter, GreaterFilter, LessFilter
from .custom import CustomFilter
from .date import DateFilter, DateFilterBuilder, DateType
from .enumeration import EmptyFilter, EnumFilter, IsNullFilter, NotEmptyFilter
from .filterable import Filterable
from .ranges import InFilter, IntervalFilter
from .text import ExactFilter, PartialFilter, SearchFilter

__all__ = [
    # Core classes
    'Filter',
    'Filterable',

    # Filter kinds
    'ExactFilter',
    'PartialFilter',
    'SearchFilter',
    'ComparisonFilter',
    'GreaterFilter',
    'LessFilter',
    'IntervalFilter',
    'InFilter',
    'EnumFilter',
    'IsNullFilter',
    'EmptyFilter',
    'NotEmptyFilter',
    'DateFilter',
    'DateFilterBuilder',
    'DateType',
    'CustomFilter',
]
