"""
数据导入模块。
负责解析上传的 CSV 文件，将每一行转换为已计算折扣的 Product。

文件格式: 第一行为表头 (内容不检查，直接跳过)，之后每行为
    nome_prodotto,prezzo_originale,sconto
不支持引号转义。遇到第一行错误即终止整批导入，不返回部分结果。
"""
import logging
import math
from typing import List

from discount_calc.models import IngestResult, Product
from discount_calc.pricing.engine import calculate_discount, parse_decimal

logger = logging.getLogger(__name__)

FORMAT_ERROR = "Formato CSV non valido. Usa: nome_prodotto,prezzo_originale,sconto"
PRICE_ERROR = "Prezzo non valido per {name}: {price}"
GENERIC_ERROR = "Errore durante l'elaborazione del file CSV"


class IngestError(ValueError):
    """CSV 数据行校验失败，消息可直接展示给用户。"""


class CsvFormatError(IngestError):
    def __init__(self, line_no: int):
        super().__init__(FORMAT_ERROR)
        self.line_no = line_no


class InvalidPriceError(IngestError):
    def __init__(self, name: str, price_text: str, line_no: int):
        super().__init__(PRICE_ERROR.format(name=name, price=price_text))
        self.name = name
        self.price_text = price_text
        self.line_no = line_no


def parse_csv_to_products(raw_text: str) -> IngestResult:
    """
    解析 CSV 文本为 Product 列表。
    成功返回完整列表；任何错误只返回错误信息，之前已处理的行全部丢弃。
    """
    try:
        products = _parse_rows(raw_text)
    except IngestError as e:
        logger.warning("CSV 导入失败 (第 %s 行): %s", e.line_no, e)
        return IngestResult(error=str(e))
    except Exception:
        logger.exception("CSV 导入发生未知错误")
        return IngestResult(error=GENERIC_ERROR)

    logger.info("CSV 导入完成，共 %d 个商品", len(products))
    return IngestResult(products=products)


def parse_csv_bytes(content: bytes) -> IngestResult:
    """从上传文件的字节流导入 (UTF-8，允许 BOM)。"""
    try:
        raw_text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("CSV 文件编码无法识别: %s", e)
        return IngestResult(error=GENERIC_ERROR)
    return parse_csv_to_products(raw_text)


def _parse_rows(raw_text: str) -> List[Product]:
    lines = raw_text.split("\n")
    products: List[Product] = []

    # 第一行为表头，无条件跳过
    for line_no, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()
        if not line:
            continue

        fields = line.split(",")
        # 多余的列忽略
        name, price_text, discount_text = (fields + ["", ""])[:3]
        if not name or not price_text or not discount_text:
            raise CsvFormatError(line_no)

        price = parse_decimal(price_text)
        if math.isnan(price):
            raise InvalidPriceError(name, price_text, line_no)

        result = calculate_discount(price, discount_text)
        products.append(Product.from_result(name, price, discount_text, result))

    return products
