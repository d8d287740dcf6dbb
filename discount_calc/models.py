"""
数据模型定义模块。
定义了项目中使用的核心数据结构：CalculationResult、Product、Totals 和 IngestResult。
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class CalculationResult:
    """
    单次折扣计算的结果。
    价格为 0 或折扣无法解析时，字段可能为 NaN / inf。
    """
    final_price: float
    savings_amount: float
    savings_percentage: float

    @property
    def is_finite(self) -> bool:
        return all(
            math.isfinite(v)
            for v in (self.final_price, self.savings_amount, self.savings_percentage)
        )


@dataclass(frozen=True)
class Product:
    """
    代表一个已计算折扣的商品 (单个计算或 CSV 的一行)。
    discount 保留用户输入的原始文本，用于展示。
    """
    name: str
    original_price: float
    discount: str              # 原始折扣文本，例如 "20%" 或 "20"

    # 计算后的字段
    final_price: float
    savings_amount: float
    savings_percentage: float

    @classmethod
    def from_result(cls, name: str, original_price: float, discount: str,
                    result: CalculationResult) -> "Product":
        return cls(
            name=name,
            original_price=original_price,
            discount=discount,
            final_price=result.final_price,
            savings_amount=result.savings_amount,
            savings_percentage=result.savings_percentage,
        )

    @property
    def is_finite(self) -> bool:
        return all(
            math.isfinite(v)
            for v in (self.final_price, self.savings_amount, self.savings_percentage)
        )


@dataclass(frozen=True)
class Totals:
    """批量结果的汇总，每次按需重新计算，不做缓存。"""
    total_original: float
    total_final: float
    total_savings: float
    total_savings_percentage: float


@dataclass
class IngestResult:
    """
    CSV 导入结果。
    成功时 products 为完整列表；失败时 error 为错误信息且 products 为空。
    """
    products: List[Product] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
