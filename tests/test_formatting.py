import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import math

from discount_calc.formatting import (
    describe_product,
    describe_savings,
    format_currency,
    format_discount,
    format_percentage,
)
from discount_calc.importer import parse_csv_to_products


def test_format_currency():
    assert format_currency(80) == "€80.00"
    assert format_currency(12.5) == "€12.50"
    assert format_currency(-5.0) == "€-5.00"
    assert format_currency(-0.0) == "€0.00"
    assert format_currency(3, symbol="$") == "$3.00"


def test_format_non_finite():
    assert format_currency(math.nan) == "€NaN"
    assert format_percentage(math.inf) == "Infinity%"
    assert format_percentage(-math.inf) == "-Infinity%"


def test_format_percentage():
    assert format_percentage(22.857142) == "22.86%"


def test_format_discount():
    assert format_discount("20%") == "20%"
    assert format_discount("10") == "€10.00"
    assert format_discount("abc") == "€NaN"


def test_describe_product():
    product = parse_csv_to_products("h\nShoes,100,20%").products[0]
    assert describe_product(product) == "da €100.00 a €80.00 (sconto: 20%)"
    assert describe_savings(product.savings_amount, product.savings_percentage) == "€20.00 (20.00%)"


def test_half_cent_rounds_away_from_zero():
    assert format_currency(0.125) == "€0.13"
    assert format_currency(-0.125) == "€-0.13"
    assert format_currency(1.005) == "€1.00"
    assert format_percentage(-0.001) == "-0.00%"


def test_half_cent_savings_from_percentage_discount():
    product = parse_csv_to_products("h\nGomma,0.25,50%").products[0]
    assert describe_savings(product.savings_amount, product.savings_percentage) == "€0.13 (50.00%)"
