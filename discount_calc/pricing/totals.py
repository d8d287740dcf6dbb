"""
批量汇总模块。
"""
from typing import Iterable

from discount_calc.models import Product, Totals
from discount_calc.pricing.engine import ratio


def aggregate_totals(products: Iterable[Product]) -> Totals:
    """
    汇总当前批次的原价与折后价。
    每次调用都从头计算；原价合计为 0 (包括空列表) 时百分比为 nan/inf。
    """
    products = list(products)
    total_original = sum((p.original_price for p in products), 0.0)
    total_final = sum((p.final_price for p in products), 0.0)
    total_savings = total_original - total_final

    return Totals(
        total_original=total_original,
        total_final=total_final,
        total_savings=total_savings,
        total_savings_percentage=ratio(total_savings, total_original) * 100,
    )
