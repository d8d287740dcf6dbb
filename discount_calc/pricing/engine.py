"""
折扣计算引擎模块。
提供折扣文本解析和单件商品折扣计算的核心逻辑。
"""
import math
import re

from discount_calc.models import CalculationResult

# 宽松的小数解析：跳过前导空白 (含 BOM)，读取最长的数字前缀，遇到第一个非数字字符即停止
# 只接受 ASCII 数字，全角数字、阿拉伯-印度数字等一律视为无法解析
_DECIMAL_PREFIX = re.compile(
    r"[\s\ufeff]*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)


def parse_decimal(text: str) -> float:
    """
    解析文本开头的十进制数字。

    示例:
    - "20%"   -> 20.0
    - " 12.5" -> 12.5
    - "10abc" -> 10.0
    - "abc"   -> nan (无法解析)
    """
    match = _DECIMAL_PREFIX.match(str(text))
    if not match:
        return math.nan

    value = match.group(1)
    if value.endswith("Infinity"):
        return -math.inf if value.startswith("-") else math.inf
    return float(value)


def ratio(numerator: float, denominator: float) -> float:
    """按 IEEE 规则相除：除以 0 时返回 nan 或 ±inf，而不是抛出异常。"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        negative = (numerator < 0) != (math.copysign(1.0, denominator) < 0)
        return -math.inf if negative else math.inf
    return numerator / denominator


def calculate_discount(price: float, discount_spec: str) -> CalculationResult:
    """
    计算单件商品的折扣结果。

    参数:
    - price: 原价 (调用方负责保证是有效数字)
    - discount_spec: 折扣文本。包含 "%" 时按百分比计算，否则按固定金额计算。

    返回:
    - CalculationResult: 最终价格、节省金额、节省百分比。
      折扣大于原价时最终价格为负数；原价为 0 时百分比为 nan/inf。
    """
    if "%" in discount_spec:
        percentage = parse_decimal(discount_spec)
        savings_amount = price * percentage / 100
    else:
        savings_amount = parse_decimal(discount_spec)

    final_price = price - savings_amount
    savings_percentage = ratio(savings_amount, price) * 100

    return CalculationResult(
        final_price=final_price,
        savings_amount=savings_amount,
        savings_percentage=savings_percentage,
    )
