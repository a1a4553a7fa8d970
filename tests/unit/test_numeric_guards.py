"""Unit tests for numeric guard helpers."""

import math

import pytest

from zipquote.utils.numeric_guards import (
    finite_or,
    first_present,
    is_finite,
    money,
    non_negative_or,
    positive_or,
    to_number,
)


class TestToNumber:

    @pytest.mark.parametrize("value,expected", [
        (3, 3.0),
        (2.5, 2.5),
        ("42", 42.0),
        (" 1.5 ", 1.5),
    ])
    def test_number_like(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", True, [], {}])
    def test_not_number_like(self, value):
        assert to_number(value) is None

    def test_nan_string(self):
        assert math.isnan(to_number("nan"))


class TestGuards:

    @pytest.mark.parametrize("value", [None, 0, -1, float("nan"), float("inf"), "x"])
    def test_positive_or_neutral(self, value):
        assert positive_or(value) == 1.0

    def test_positive_or_keeps_valid(self):
        assert positive_or("1.15") == 1.15

    @pytest.mark.parametrize("value", [None, -5, float("nan"), float("-inf"), "x"])
    def test_non_negative_or_neutral(self, value):
        assert non_negative_or(value) == 0.0

    def test_non_negative_or_keeps_zero(self):
        assert non_negative_or(0, neutral=9.0) == 0.0

    def test_finite_or_keeps_negative(self):
        assert finite_or(-50) == -50.0
        assert finite_or("-12.5") == -12.5

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf"), "x"])
    def test_finite_or_neutral(self, value):
        assert finite_or(value) == 0.0

    def test_is_finite(self):
        assert is_finite("3")
        assert not is_finite(float("nan"))
        assert not is_finite(None)


def test_first_present_skips_only_none():
    assert first_present(None, 0, 5) == 0
    assert first_present(None, None) is None


def test_money():
    assert money(87.8864) == 87.89
    assert money(-60.004) == -60.0
