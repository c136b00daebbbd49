#!/usr/bin/env python3
"""
Tests for the filter kinds.
"""

from datetime import date, datetime, timezone
from enum import Enum

import pytest

from querysieve.enums import Combinator, LikeStrategy, Operator
from querysieve.exceptions import InvalidValueError
from querysieve.filters import (
    ComparisonFilter, CustomFilter, DateFilter, DateType, EmptyFilter, EnumFilter,
    ExactFilter, GreaterFilter, InFilter, IntervalFilter, IsNullFilter,
    LessFilter, NotEmptyFilter, PartialFilter, SearchFilter
)


class Status(Enum):
    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"


class TestFilterBase:
    """Test behavior shared by every filter."""

    def test_internal_name_defaults_to_param(self):
        assert ExactFilter("country").internal_name == "country"
        assert ExactFilter("country", "c.code").internal_name == "c.code"

    def test_param_is_read_only(self):
        f = ExactFilter("country")
        with pytest.raises(AttributeError):
            f.param = "other"

    def test_ignored_value_is_a_no_op(self, builder):
        f = ExactFilter("country").add_ignore("ALL", "*")
        f.apply_params(builder, {"country": " ALL "})
        assert builder.wheres == []

    def test_default_value_used_when_absent(self, builder):
        f = ExactFilter("country").set_default_value("BR")
        f.apply_params(builder, {})
        assert builder.triples() == [("country", Operator.EQUAL, "BR")]

    def test_absent_without_default_is_skipped(self, builder):
        ExactFilter("country").apply_params(builder, {"other": "x"})
        assert builder.wheres == []

    def test_repeated_param_uses_first_value(self, builder):
        ComparisonFilter("age").apply_params(builder, {"age": [">=18", "<65"]})
        assert builder.triples() == [("age", Operator.GREATER_OR_EQUAL, "18")]

    def test_empty_repeated_param_is_absent(self, builder):
        ExactFilter("country").set_default_value("BR").apply_params(builder, {"country": []})
        assert builder.triples() == [("country", Operator.EQUAL, "BR")]

    def test_prefix_helpers(self):
        assert ExactFilter.get_operator("<=3") == Operator.LESS_OR_EQUAL
        assert ExactFilter.clean_value("<=3") == "3"

    def test_filter_holds_no_request_state(self, builder):
        """Applying a filter leaves its configuration untouched."""
        f = IntervalFilter("age")
        before = dict(vars(f))
        f.apply_params(builder, {"age": "18-65"})
        assert vars(f) == before


class TestExactFilter:
    """Test exact matches with type sniffing."""

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("42", 42),
        ("9876543210", 9876543210),
        ("2.5", 2.5),
        ("BR", "BR"),
    ])
    def test_sniffed_values(self, builder, raw, expected):
        ExactFilter("field").apply(builder, raw)
        assert builder.triples() == [("field", Operator.EQUAL, expected)]


class TestPartialFilter:
    """Test LIKE filters."""

    def test_default_strategy_is_final(self, builder):
        PartialFilter("name").apply(builder, "ann")
        assert builder.triples() == [("name", Operator.LIKE, "ann%")]

    def test_configured_strategy(self, builder):
        PartialFilter("name").set_strategy(LikeStrategy.COMPLETE).apply(builder, "ann")
        assert builder.triples() == [("name", Operator.LIKE, "%ann%")]

    def test_explicit_wildcard_is_verbatim(self, builder):
        PartialFilter("name", strategy=LikeStrategy.START).apply(builder, "a%n")
        assert builder.triples() == [("name", Operator.LIKE, "a%n")]


class TestSearchFilter:
    """Test multi-field search."""

    def test_or_across_fields(self, builder):
        SearchFilter("q", "username", "email").apply(builder, "ann")
        assert builder.triples() == [
            ("username", Operator.LIKE, "%ann%"),
            ("email", Operator.LIKE, "%ann%"),
        ]
        assert [c.combinator for c in builder.wheres] == [Combinator.AND, Combinator.OR]

    def test_of_reads_search_param(self, builder):
        f = SearchFilter.of("name")
        assert f.param == "search"
        f.apply_params(builder, {"search": "x"})
        assert builder.triples() == [("name", Operator.LIKE, "%x%")]

    def test_not_body_capable(self):
        assert SearchFilter("q", "a").supports_body is False


class TestComparisonFilters:
    """Test comparison, greater and less filters."""

    def test_prefix_operator_keeps_string(self, builder):
        ComparisonFilter("age").apply(builder, ">=18")
        assert builder.triples() == [("age", Operator.GREATER_OR_EQUAL, "18")]

    def test_bang_equals_alias(self, builder):
        ComparisonFilter("age").apply(builder, "!=3")
        assert builder.triples() == [("age", Operator.DIFF, "3")]

    def test_no_prefix_is_equal(self, builder):
        ComparisonFilter("age").apply(builder, "30")
        assert builder.triples() == [("age", Operator.EQUAL, "30")]

    def test_blank_after_prefix_rejected(self, builder):
        with pytest.raises(InvalidValueError):
            ComparisonFilter("age").apply(builder, ">= ")
        assert builder.wheres == []

    def test_greater(self, builder):
        GreaterFilter("minAge", "age").apply(builder, "18")
        assert builder.triples() == [("age", Operator.GREATER, 18)]

    def test_greater_or_equal(self, builder):
        GreaterFilter("minAge", "age", or_equal=True).apply(builder, "18.5")
        assert builder.triples() == [("age", Operator.GREATER_OR_EQUAL, 18.5)]

    def test_less_falls_back_to_string(self, builder):
        LessFilter("before", "name").apply(builder, "M")
        assert builder.triples() == [("name", Operator.LESS, "M")]

    def test_less_or_equal(self, builder):
        LessFilter("age", or_equal=True).apply(builder, "65")
        assert builder.triples() == [("age", Operator.LESS_OR_EQUAL, 65)]

    def test_blank_rejected(self, builder):
        with pytest.raises(InvalidValueError, match="greater"):
            GreaterFilter("age").apply(builder, "  ")


class TestIntervalFilter:
    """Test numeric intervals."""

    def test_closed_interval(self, builder):
        IntervalFilter("age").apply(builder, "18-65")
        assert sorted(builder.triples(), key=lambda t: t[1].value) == sorted([
            ("age", Operator.GREATER_OR_EQUAL, "18"),
            ("age", Operator.LESS_OR_EQUAL, "65"),
        ], key=lambda t: t[1].value)
        assert len(builder.wheres) == 2

    def test_legacy_comma(self, builder):
        IntervalFilter("age").apply(builder, "18,65")
        assert builder.triples() == [
            ("age", Operator.GREATER_OR_EQUAL, "18"),
            ("age", Operator.LESS_OR_EQUAL, "65"),
        ]

    def test_open_ended(self, builder):
        IntervalFilter("age").apply(builder, "18-")
        assert builder.triples() == [("age", Operator.GREATER_OR_EQUAL, "18")]

    def test_single_value(self, builder):
        IntervalFilter("age").apply(builder, "50")
        assert builder.triples() == [("age", Operator.EQUAL, "50")]


class TestInFilter:
    """Test IN lists."""

    def test_list(self, builder):
        InFilter("country").apply(builder, "USA, UK,CA")
        assert builder.triples() == [("country", Operator.IN, ["USA", "UK", "CA"])]

    def test_custom_delimiter(self, builder):
        InFilter("country", delimiter=";").apply(builder, "USA;UK")
        assert builder.triples() == [("country", Operator.IN, ["USA", "UK"])]

    def test_empty_list_rejected(self, builder):
        with pytest.raises(InvalidValueError, match="empty"):
            InFilter("country").apply(builder, " , ")


class TestEnumFilter:
    """Test enum filters."""

    def test_single_member(self, builder):
        EnumFilter("status", Status).apply(builder, "ACTIVE")
        assert builder.triples() == [("status", Operator.EQUAL, Status.ACTIVE)]

    def test_multiple_members(self, builder):
        EnumFilter("status", Status).apply(builder, "ACTIVE,PENDING")
        assert builder.triples() == [("status", Operator.IN, {Status.ACTIVE, Status.PENDING})]

    def test_invalid_member_lists_allowed_values(self, builder):
        with pytest.raises(InvalidValueError) as exc_info:
            EnumFilter("status", Status).apply(builder, "BOGUS")
        message = str(exc_info.value)
        for name in ("ACTIVE", "PENDING", "INACTIVE"):
            assert name in message

    def test_invalid_member_is_a_value_error(self, builder):
        with pytest.raises(ValueError):
            EnumFilter("status", Status).apply(builder, "ACTIVE,BOGUS")
        assert builder.wheres == []


class TestIsNullFilter:
    """Test null checks."""

    @pytest.mark.parametrize("raw", ["null", "true", "1", "YES"])
    def test_null_tokens(self, builder, raw):
        IsNullFilter("deletedAt", "deleted_at").apply(builder, raw)
        assert builder.triples() == [("deleted_at", Operator.IS_NULL, None)]

    @pytest.mark.parametrize("raw", ["not_null", "false", "0", "no"])
    def test_not_null_tokens(self, builder, raw):
        IsNullFilter("deletedAt", "deleted_at").apply(builder, raw)
        assert builder.triples() == [("deleted_at", Operator.IS_NOT_NULL, None)]

    def test_unknown_token(self, builder):
        with pytest.raises(InvalidValueError, match="not_null"):
            IsNullFilter("deletedAt").apply(builder, "maybe")


class TestDateFilter:
    """Test date filters."""

    def test_exact_date(self, builder):
        DateFilter("created").apply(builder, "2024-01-15")
        assert builder.triples() == [("created", Operator.EQUAL, date(2024, 1, 15))]

    def test_range(self, builder):
        DateFilter("created", "created_at").apply(builder, "2024-01-01|2024-12-31")
        assert builder.triples() == [
            ("created_at", Operator.GREATER_OR_EQUAL, date(2024, 1, 1)),
            ("created_at", Operator.LESS_OR_EQUAL, date(2024, 12, 31)),
        ]

    def test_open_range(self, builder):
        DateFilter("created").apply(builder, "|2024-12-31")
        assert builder.triples() == [("created", Operator.LESS_OR_EQUAL, date(2024, 12, 31))]

    def test_prefix_operator(self, builder):
        DateFilter("created").apply(builder, ">2024-01-01")
        assert builder.triples() == [("created", Operator.GREATER, date(2024, 1, 1))]

    def test_custom_pattern(self, builder):
        DateFilter.for_date("created", "%d/%m/%Y").apply(builder, "15/01/2024")
        assert builder.triples() == [("created", Operator.EQUAL, date(2024, 1, 15))]

    def test_datetime(self, builder):
        DateFilter.for_datetime("updated").apply(builder, "<=2024-01-15T10:30:00")
        assert builder.triples() == [
            ("updated", Operator.LESS_OR_EQUAL, datetime(2024, 1, 15, 10, 30))
        ]

    def test_timestamp_reads_naive_input_as_utc(self, builder):
        DateFilter.for_timestamp("ts").apply(builder, "2024-01-01T00:00:00")
        expected = datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp()
        assert builder.triples() == [("ts", Operator.EQUAL, expected)]

    def test_builder(self):
        f = (DateFilter.builder("eventDate")
             .with_internal_name("event_date")
             .use_datetime()
             .with_pattern("%Y/%m/%d %H:%M")
             .build())
        assert f.internal_name == "event_date"
        assert f.date_type is DateType.DATETIME
        assert f.transform("2024/03/01 08:00") == datetime(2024, 3, 1, 8, 0)

    def test_parse_error_names_field_pattern_and_type(self, builder):
        with pytest.raises(InvalidValueError) as exc_info:
            DateFilter.for_date("created", "%d/%m/%Y").apply(builder, "2024-01-15")
        message = str(exc_info.value)
        assert "created" in message
        assert "%d/%m/%Y" in message
        assert "DATE" in message

    def test_bad_range_side_applies_nothing(self, builder):
        with pytest.raises(InvalidValueError):
            DateFilter("created").apply(builder, "2024-01-01|nope")
        assert builder.wheres == []


class TestCustomFilter:
    """Test the escape hatch."""

    def test_function_receives_query_and_value(self, builder):
        def adults(query, value):
            if value == "true":
                query.where("age", Operator.GREATER_OR_EQUAL, 18)

        CustomFilter("adult", adults).apply_params(builder, {"adult": "true"})
        assert builder.triples() == [("age", Operator.GREATER_OR_EQUAL, 18)]

    def test_not_body_capable(self):
        assert CustomFilter("x", lambda q, v: None).supports_body is False


class TestBlankFilters:
    """Test empty and not-empty checks."""

    def test_empty(self, builder):
        EmptyFilter("noEmail", "email").apply_params(builder, {"noEmail": ""})
        assert builder.triples() == [
            ("email", Operator.IS_NULL, None),
            ("email", Operator.EQUAL, ""),
        ]
        assert [c.combinator for c in builder.wheres] == [Combinator.AND, Combinator.OR]

    def test_not_empty(self, builder):
        NotEmptyFilter("hasEmail", "email").apply_params(builder, {"hasEmail": "whatever"})
        assert builder.triples() == [
            ("email", Operator.IS_NOT_NULL, None),
            ("email", Operator.DIFF, ""),
        ]
        assert all(c.combinator == Combinator.AND for c in builder.wheres)

    def test_absent_param_is_skipped(self, builder):
        EmptyFilter("noEmail", "email").apply_params(builder, {})
        assert builder.wheres == []

    def test_not_body_capable(self):
        assert EmptyFilter("a").supports_body is False
        assert NotEmptyFilter("a").supports_body is False
