"""
Tests for decimal amount parsing.
"""

import random

import pytest

from moneytransfer.core.amounts import MAX_AMOUNT_CENTS, format_amount, parse_amount
from moneytransfer.core.errors import AmountParseError


class TestParseAmount:
    @pytest.mark.parametrize(
        "text, cents",
        [
            ("100", 10000),
            ("100.5", 10050),
            ("100.50", 10050),
            ("100.05", 10005),
            ("0", 0),
            ("0.01", 1),
            (".5", 50),
            ("14.5", 1450),
            ("61238", 6123800),
        ],
    )
    def test_valid_amounts(self, text, cents):
        assert parse_amount(text) == cents

    @pytest.mark.parametrize(
        "text",
        ["", "abc", "-5", "1.2.3", "1.234", "1.", "1.a", "1,50", " 1", "1_000", "-0.5", "١٢"],
    )
    def test_invalid_amounts(self, text):
        with pytest.raises(AmountParseError):
            parse_amount(text)

    def test_negative_message(self):
        with pytest.raises(AmountParseError, match="negative"):
            parse_amount("-5")

    def test_out_of_range(self):
        with pytest.raises(AmountParseError, match="range"):
            parse_amount(str(MAX_AMOUNT_CENTS))

    @pytest.mark.parametrize("text", ["1" * 5000, "9" * 5000 + ".5", "-" + "1" * 5000, "1" * 18])
    def test_oversized_amounts(self, text):
        with pytest.raises(AmountParseError, match="range"):
            parse_amount(text)

    def test_leading_zeros_do_not_count_towards_length(self):
        assert parse_amount("0" * 5000 + "1.5") == 150

    def test_parse_error_is_validation_error(self):
        with pytest.raises(AmountParseError) as exc_info:
            parse_amount("abc")
        assert exc_info.value.kind == "parse"
        assert exc_info.value.value == "abc"


class TestFormatAmount:
    @pytest.mark.parametrize("cents", [0, 1, 50, 10050, 123456789, MAX_AMOUNT_CENTS])
    def test_parse_inverts_format(self, cents):
        assert parse_amount(format_amount(cents)) == cents

    def test_parse_inverts_format_across_magnitudes(self):
        rng = random.Random(20261019)
        for _ in range(500):
            cents = rng.randrange(min(10 ** rng.randint(1, 19), MAX_AMOUNT_CENTS + 1))
            assert parse_amount(format_amount(cents)) == cents

    @pytest.mark.parametrize("units", [0, 1, 99, 100, 12345, 10**16])
    def test_parse_inverts_format_for_every_cent_value(self, units):
        for rest in range(100):
            cents = units * 100 + rest
            assert parse_amount(format_amount(cents)) == cents

    def test_two_fractional_digits(self):
        assert format_amount(10050) == "100.50"
        assert format_amount(7) == "0.07"

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            format_amount(-1)
