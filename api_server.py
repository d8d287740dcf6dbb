import math
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

from discount_calc.models import Product
from discount_calc.service import CalculationService, ImportService
from discount_calc.settings import configure_logging, settings

app = FastAPI(title="Calcolatore di Sconti")


class CalculateRequest(BaseModel):
    price: str
    discount: str
    name: str = ""


class IngestRequest(BaseModel):
    csv: str


def _number(value: float) -> Optional[float]:
    # JSON 不支持 nan / inf
    return value if math.isfinite(value) else None


def _product_payload(product: Product) -> Dict[str, Any]:
    return {
        "name": product.name,
        "originalPrice": _number(product.original_price),
        "discount": product.discount,
        "finalPrice": _number(product.final_price),
        "savingsAmount": _number(product.savings_amount),
        "savingsPercentage": _number(product.savings_percentage),
    }


@app.post("/calculate")
def calculate(req: CalculateRequest):
    product = CalculationService().calculate_single(req.name, req.price, req.discount)
    if product is None:
        return {"code": 1, "error": "Prezzo e sconto sono obbligatori"}
    return {"code": 0, "data": _product_payload(product)}


@app.post("/ingest")
def ingest(req: IngestRequest):
    result = ImportService().import_from_text(req.csv)
    if not result.ok:
        return {"code": 1, "error": result.error}

    calc_service = CalculationService()
    totals = calc_service.calculate_totals(result.products)
    return {
        "code": 0,
        "data": {
            "products": [_product_payload(p) for p in result.products],
            "totals": {
                "totalOriginal": _number(totals.total_original),
                "totalFinal": _number(totals.total_final),
                "totalSavings": _number(totals.total_savings),
                "totalSavingsPercentage": _number(totals.total_savings_percentage),
            },
            "report": calc_service.get_quick_report(result.products),
        }
    }


if __name__ == "__main__":
    configure_logging()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
