"""
Mini-languages embedded in raw request values.

    >=18, <=65, <>0, >5, <5     comparison prefixes (else EQUAL)
    2024-01-01|2024-12-31       date range, either side optional
    18-65 (legacy 18,65)        numeric interval
    a,b,c                       IN-lists and multi-value enum selection
"""

import re
from typing import Any, List, Optional, Tuple

from .enums import LikeStrategy, Operator


# Two-character markers come first so ">=" is never read as ">".
COMPARISON_PREFIXES: Tuple[Tuple[str, Operator], ...] = (
    (">=", Operator.GREATER_OR_EQUAL),
    ("<=", Operator.LESS_OR_EQUAL),
    ("<>", Operator.DIFF),
    (">", Operator.GREATER),
    ("<", Operator.LESS),
)

NARROW_INT_MAX_LENGTH = 9

_INTEGER = re.compile(r"^-?\d+$")
_DECIMAL = re.compile(r"^-?\d+\.\d+$")


def match_prefix(value: str, prefixes=COMPARISON_PREFIXES) -> Tuple[Operator, str]:
    """Return the operator for the leading marker and the matched token ('' if none)."""
    for token, operator in prefixes:
        if value.startswith(token):
            return operator, token
    return Operator.EQUAL, ""


def parse_operator(value: str) -> Operator:
    return match_prefix(value)[0]


def clean_value(value: str) -> str:
    """Strip exactly the comparison marker found by parse_operator."""
    token = match_prefix(value)[1]
    return value[len(token):]


def split_date_range(value: str) -> Optional[Tuple[str, str]]:
    """'a|b' -> ('a', 'b') trimmed; None when the value is not a range."""
    if "|" not in value:
        return None
    parts = value.split("|")
    return parts[0].strip(), parts[1].strip()


def split_interval(value: str) -> Optional[Tuple[str, str]]:
    """'a-b' or legacy 'a,b' -> ('a', 'b') trimmed; None for a single value."""
    normalized = value.replace(",", "-")
    if "-" not in normalized:
        return None
    parts = normalized.split("-")
    return parts[0].strip(), parts[1].strip()


def split_list(value: str, delimiter: str = ",") -> List[str]:
    """Split, trim and drop empty items."""
    return [item.strip() for item in value.split(delimiter) if item.strip()]


def like_pattern(value: str, strategy: LikeStrategy) -> str:
    """An explicit % in the value wins over the configured strategy."""
    if "%" in value:
        return value
    return strategy.apply(value)


def sniff(value: str) -> Any:
    """
    Guess the scalar type of a raw string.

    Order matters: boolean literal, short integer, long integer, decimal,
    then the string itself. Python has a single int type, so the narrow and
    wide integer branches both produce int; the length threshold is kept so
    the boundary between them stays where it always was.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INTEGER.match(value) and len(value) <= NARROW_INT_MAX_LENGTH:
        return int(value)
    if _INTEGER.match(value):
        return int(value)
    if _DECIMAL.match(value):
        return float(value)
    return value


def coerce_number(value: str) -> Optional[Any]:
    """int or float for numeric strings, None otherwise."""
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        return None
