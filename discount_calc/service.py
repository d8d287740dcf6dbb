"""
业务服务层，遵循单一职责原则拆分为独立服务。
网页、命令行和 API 都只通过这里调用计算核心。
"""
import logging
from io import BytesIO
from typing import Dict, List, Optional, Tuple

from discount_calc.exporter import export_to_excel, generate_excel_bytes, quick_check
from discount_calc.importer import parse_csv_bytes, parse_csv_to_products
from discount_calc.models import IngestResult, Product, Totals
from discount_calc.pricing.engine import calculate_discount, parse_decimal
from discount_calc.pricing.totals import aggregate_totals
from discount_calc.settings import settings

logger = logging.getLogger(__name__)


class CalculationService:
    """
    计算服务：单件计算与批量汇总。
    纯内存操作。
    """
    def calculate_single(self, name: str, price_text: str, discount: str) -> Optional[Product]:
        """
        单件商品计算。
        原价或折扣为空时不计算 (返回 None)，商品名为空时使用默认名称。
        """
        if not price_text or not discount:
            return None

        price = parse_decimal(price_text)
        result = calculate_discount(price, discount)
        if not result.is_finite:
            logger.info("单件计算结果包含无效数值: price=%r discount=%r", price_text, discount)

        return Product.from_result(
            name or settings.DEFAULT_PRODUCT_NAME, price, discount, result
        )

    def calculate_totals(self, products: List[Product]) -> Totals:
        return aggregate_totals(products)

    def get_quick_report(self, products: List[Product]) -> Dict[str, int]:
        """生成简单的核对报告"""
        return quick_check(products)


class ImportService:
    """
    导入服务：将上传的 CSV 转换为 Product 列表。
    每次导入的结果整体替换上一批，不做合并。
    """
    def import_from_csv(self, file_content: bytes) -> IngestResult:
        """从 CSV 字节流导入"""
        return parse_csv_bytes(file_content)

    def import_from_text(self, raw_text: str) -> IngestResult:
        return parse_csv_to_products(raw_text)


class ExportService:
    """
    导出服务：将批量结果导出为文件或字节流。
    """
    def export_data(
        self,
        products: List[Product],
        output_path: str = "output.xlsx",
        base_name: str = ""
    ) -> str:
        """导出到本地文件"""
        return export_to_excel(products, output_path, base_name)

    def get_excel_bytes(
        self,
        products: List[Product],
        base_name: str = ""
    ) -> Tuple[BytesIO, str]:
        """
        生成 Excel 文件字节流，用于 Web 下载。
        返回: (excel_bytes, suggested_filename)
        """
        return generate_excel_bytes(products, base_name)
