"""
Contract tests for threshold triplet parsing

A single bare number must apply to all three periods; anything beyond the
third value is ignored rather than rejected.
"""

import pytest

from loadcheck.errors import InvalidThreshold
from loadcheck.thresholds import ThresholdTriplet, parse_threshold


def test_full_triplet() -> None:
    assert parse_threshold("5,4,3") == ThresholdTriplet(5.0, 4.0, 3.0)


def test_single_value_fills_all_periods() -> None:
    """
    "2.5" -> (2.5, 2.5, 2.5)
    """
    assert tuple(parse_threshold("2.5")) == (2.5, 2.5, 2.5)


def test_two_values_fill_forward_last() -> None:
    """
    "1,2" -> (1, 2, 2)
    """
    assert tuple(parse_threshold("1,2")) == (1.0, 2.0, 2.0)


def test_fill_uses_last_successfully_parsed_value() -> None:
    """
    A bad second token stops the scan; the first value fills forward
    """
    assert tuple(parse_threshold("3,abc")) == (3.0, 3.0, 3.0)


def test_extra_tokens_are_ignored() -> None:
    assert tuple(parse_threshold("1,2,3,4,junk")) == (1.0, 2.0, 3.0)


def test_trailing_garbage_after_number_is_ignored() -> None:
    assert tuple(parse_threshold("7.5abc")) == (7.5, 7.5, 7.5)


def test_whitespace_and_exponent_accepted() -> None:
    assert tuple(parse_threshold(" 1e1, .5, 2.")) == (10.0, 0.5, 2.0)


def test_negative_values_parse_and_are_left_to_validation() -> None:
    assert tuple(parse_threshold("-1")) == (-1.0, -1.0, -1.0)


@pytest.mark.parametrize("text", ["", "abc", ",1,2", " "])
def test_no_leading_number_is_invalid(text: str) -> None:
    with pytest.raises(InvalidThreshold, match="Critical threshold must be float"):
        parse_threshold(text, "Critical")


def test_triplet_is_immutable() -> None:
    triplet = parse_threshold("1,2,3")
    with pytest.raises(AttributeError):
        triplet.one = 9.0  # type: ignore[misc]
