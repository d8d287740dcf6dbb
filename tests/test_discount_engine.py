import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import math

import pytest

from discount_calc.pricing.engine import calculate_discount, parse_decimal, ratio


@pytest.mark.parametrize("price, pct", [(100.0, 20.0), (59.99, 15.0), (1.0, 0.0), (80.0, 100.0)])
def test_percentage_discount(price, pct):
    result = calculate_discount(price, f"{pct}%")
    assert result.final_price == pytest.approx(price - price * pct / 100)
    assert result.savings_percentage == pytest.approx(pct)


@pytest.mark.parametrize("price, amount", [(100.0, 20.0), (50.0, 10.0), (12.5, 0.5)])
def test_absolute_discount(price, amount):
    result = calculate_discount(price, str(amount))
    assert result.savings_amount == pytest.approx(amount)
    assert result.final_price == pytest.approx(price - amount)


def test_discount_larger_than_price_gives_negative_final_price():
    result = calculate_discount(10.0, "15")
    assert result.final_price == pytest.approx(-5.0)
    assert result.savings_percentage == pytest.approx(150.0)


def test_same_inputs_same_outputs():
    assert calculate_discount(200.0, "25%") == calculate_discount(200.0, "25%")


def test_zero_price_gives_non_finite_percentage():
    result = calculate_discount(0.0, "10")
    assert math.isinf(result.savings_percentage)
    assert result.final_price == pytest.approx(-10.0)
    assert not result.is_finite

    result = calculate_discount(0.0, "10%")
    assert math.isnan(result.savings_percentage)


def test_unparseable_discount_propagates_nan():
    result = calculate_discount(100.0, "abc")
    assert math.isnan(result.savings_amount)
    assert math.isnan(result.final_price)
    assert math.isnan(result.savings_percentage)

    result = calculate_discount(100.0, "%20")
    assert math.isnan(result.final_price)


def test_percentage_with_trailing_text():
    result = calculate_discount(100.0, "20% off")
    assert result.final_price == pytest.approx(80.0)


@pytest.mark.parametrize("text, expected", [
    ("20", 20.0),
    ("20%", 20.0),
    (" 12.5", 12.5),
    ("10abc", 10.0),
    ("-3", -3.0),
    (".5", 0.5),
    ("5.", 5.0),
    ("1e2", 100.0),
    ("1.5e", 1.5),
    ("Infinity", math.inf),
    ("-Infinity", -math.inf),
    ("\ufeff100", 100.0),
    ("\ufeff 7.5%", 7.5),
])
def test_parse_decimal(text, expected):
    assert parse_decimal(text) == expected


@pytest.mark.parametrize("text", ["", "abc", ".", "-", "€10", ",5", "\u0661\u0660\u0660", "\uff11\uff10\uff10"])
def test_parse_decimal_invalid(text):
    assert math.isnan(parse_decimal(text))


def test_ratio_follows_ieee_division():
    assert ratio(6.0, 3.0) == 2.0
    assert math.isnan(ratio(0.0, 0.0))
    assert ratio(1.0, 0.0) == math.inf
    assert ratio(-1.0, 0.0) == -math.inf
