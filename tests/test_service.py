import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from discount_calc.service import CalculationService, ImportService


def test_single_calculation():
    product = CalculationService().calculate_single("Scarpe", "100", "20%")
    assert product.name == "Scarpe"
    assert product.original_price == 100.0
    assert product.discount == "20%"
    assert product.final_price == pytest.approx(80.0)


def test_single_calculation_default_name():
    product = CalculationService().calculate_single("", "50", "10")
    assert product.name == "Prodotto"
    assert product.final_price == pytest.approx(40.0)


@pytest.mark.parametrize("price, discount", [("", "10"), ("100", "")])
def test_single_calculation_requires_price_and_discount(price, discount):
    assert CalculationService().calculate_single("x", price, discount) is None


def test_new_import_replaces_previous_batch():
    import_service = ImportService()
    first = import_service.import_from_csv(b"h\nShoes,100,20%\nHat,50,10")
    second = import_service.import_from_csv(b"h\nBag,200,25%")
    assert len(first.products) == 2
    assert [p.name for p in second.products] == ["Bag"]


def test_quick_report():
    products = ImportService().import_from_text("h\nShoes,100,20%\nHat,5,10\nBag,200,gratis").products
    report = CalculationService().get_quick_report(products)
    assert report == {
        "totale_prodotti": 3,
        "risultati_non_validi": 1,
        "prezzi_finali_negativi": 1,
    }
