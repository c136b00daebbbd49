#!/usr/bin/env python3
"""
Tests for the value mini-languages and the canonical enums.
"""

import pytest

from querysieve.enums import Combinator, LikeStrategy, Operator, SortDirection
from querysieve.grammar import (
    clean_value, coerce_number, like_pattern, parse_operator, sniff,
    split_date_range, split_interval, split_list
)


class TestComparisonPrefix:
    """Test the comparison prefix grammar."""

    @pytest.mark.parametrize("raw,operator,cleaned", [
        (">=18", Operator.GREATER_OR_EQUAL, "18"),
        ("<=65", Operator.LESS_OR_EQUAL, "65"),
        ("<>0", Operator.DIFF, "0"),
        (">5", Operator.GREATER, "5"),
        ("<5", Operator.LESS, "5"),
        ("42", Operator.EQUAL, "42"),
    ])
    def test_prefixes(self, raw, operator, cleaned):
        """Each marker maps to its operator and is stripped exactly."""
        assert parse_operator(raw) == operator
        assert clean_value(raw) == cleaned

    def test_two_character_marker_wins(self):
        """'>=' must never be read as '>' followed by '=18'."""
        assert parse_operator(">=18") == Operator.GREATER_OR_EQUAL
        assert clean_value(">=18") == "18"
        assert parse_operator("<>x") == Operator.DIFF

    def test_only_the_matched_marker_is_stripped(self):
        """A second marker stays part of the value."""
        assert clean_value(">>5") == ">5"
        assert clean_value("5>") == "5>"


class TestRanges:
    """Test the range mini-languages."""

    def test_date_range(self):
        assert split_date_range("2024-01-01|2024-12-31") == ("2024-01-01", "2024-12-31")

    def test_date_range_open_sides(self):
        assert split_date_range("2024-01-01|") == ("2024-01-01", "")
        assert split_date_range(" | 2024-12-31") == ("", "2024-12-31")

    def test_date_without_pipe_is_not_a_range(self):
        assert split_date_range("2024-01-01") is None

    def test_interval(self):
        assert split_interval("18-65") == ("18", "65")
        assert split_interval("18 - 65") == ("18", "65")

    def test_interval_legacy_comma(self):
        """The comma is an alias for the hyphen."""
        assert split_interval("18,65") == ("18", "65")

    def test_interval_open_sides(self):
        assert split_interval("18-") == ("18", "")
        assert split_interval("-65") == ("", "65")

    def test_single_value_is_not_an_interval(self):
        assert split_interval("50") is None

    def test_list(self):
        assert split_list("USA, UK ,,CA") == ["USA", "UK", "CA"]
        assert split_list("a;b", ";") == ["a", "b"]
        assert split_list(" , ") == []


class TestLikePattern:
    """Test LIKE wildcard placement."""

    def test_strategies(self):
        assert like_pattern("ann", LikeStrategy.FINAL) == "ann%"
        assert like_pattern("ann", LikeStrategy.START) == "%ann"
        assert like_pattern("ann", LikeStrategy.COMPLETE) == "%ann%"

    def test_explicit_wildcard_wins(self):
        assert like_pattern("a%n", LikeStrategy.COMPLETE) == "a%n"
        assert like_pattern("%ann", LikeStrategy.FINAL) == "%ann"


class TestSniff:
    """Test type sniffing for exact matches."""

    def test_booleans(self):
        assert sniff("true") is True
        assert sniff("FALSE") is False

    def test_integers_either_side_of_the_length_threshold(self):
        assert sniff("123456789") == 123456789
        assert sniff("1234567890") == 1234567890
        assert isinstance(sniff("1234567890123"), int)

    def test_negative_integer(self):
        assert sniff("-5") == -5

    def test_decimal(self):
        assert sniff("3.14") == 3.14
        assert sniff("-0.5") == -0.5

    def test_strings_stay_strings(self):
        assert sniff("abc") == "abc"
        assert sniff("1e5") == "1e5"
        assert sniff("1.2.3") == "1.2.3"
        assert sniff("") == ""

    def test_boolean_checked_before_numbers(self):
        """'1' is a number, not a boolean."""
        assert sniff("1") == 1
        assert sniff("1") is not True


class TestCoerceNumber:
    """Test numeric coercion for bound filters."""

    def test_numbers(self):
        assert coerce_number("7") == 7
        assert coerce_number("7.5") == 7.5

    def test_non_numbers(self):
        assert coerce_number("seven") is None
        assert coerce_number("1.2.3") is None


class TestEnums:
    """Test the canonical vocabulary."""

    def test_operator_count(self):
        assert len(Operator) == 13

    def test_from_string_is_case_insensitive(self):
        assert Operator.from_string("greater_or_equal") == Operator.GREATER_OR_EQUAL
        assert Combinator.from_string(" or ") == Combinator.OR
        assert SortDirection.from_string("Desc") == SortDirection.DESC

    def test_from_string_unknown(self):
        assert Operator.from_string("bogus") is None
        assert Combinator.from_string(None) is None

    def test_null_checks_need_no_value(self):
        assert not Operator.IS_NULL.needs_value
        assert not Operator.IS_NOT_NULL.needs_value
        assert all(op.needs_value for op in Operator
                   if op not in {Operator.IS_NULL, Operator.IS_NOT_NULL})

    def test_list_operators(self):
        assert {op for op in Operator if op.is_list} == {Operator.IN, Operator.NOT_IN}
