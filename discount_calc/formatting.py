"""
展示格式化工具：货币、百分比、折扣文本。
网页、命令行和导出共用同一套格式。
"""
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from discount_calc.models import Product
from discount_calc.pricing.engine import parse_decimal
from discount_calc.settings import settings


def _fixed2(value: float) -> str:
    # 与浏览器中的 toFixed(2) 输出保持一致：nan / inf 的写法，以及恰好一半时向远离 0 的方向舍入
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"

    # 按浮点数的精确二进制值舍入 (1.005 实际略小于 1.005，结果为 1.00)
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(abs(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    # -0.0 显示为 0.00
    sign = "-" if value < 0 else ""
    return f"{sign}{rounded}"


def format_currency(value: float, symbol: str = "") -> str:
    return f"{symbol or settings.CURRENCY_SYMBOL}{_fixed2(value)}"


def format_percentage(value: float) -> str:
    return f"{_fixed2(value)}%"


def format_discount(discount: str) -> str:
    """百分比折扣原样展示，固定金额折扣按货币格式展示。"""
    if "%" in discount:
        return discount
    return format_currency(parse_decimal(discount))


def describe_product(product: Product) -> str:
    """批量结果中每个商品的一行摘要。"""
    return (
        f"da {format_currency(product.original_price)} a {format_currency(product.final_price)} "
        f"(sconto: {format_discount(product.discount)})"
    )


def describe_savings(savings_amount: float, savings_percentage: float) -> str:
    return f"{format_currency(savings_amount)} ({format_percentage(savings_percentage)})"
