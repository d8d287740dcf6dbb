"""
导出与快速核对模块。
负责将批量折扣结果导出为 Excel 文件（支持本地文件和内存流），并生成简要的数据核对报告。
"""
import math
import os
import re
from datetime import datetime
from io import BytesIO
from typing import Dict, List, Tuple, Union

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from discount_calc.formatting import format_discount
from discount_calc.models import Product
from discount_calc.pricing.totals import aggregate_totals

SHEET_NAME = "Sconti"


def generate_excel_bytes(
    products: List[Product],
    base_name: str = ""
) -> Tuple[BytesIO, str]:
    """
    生成 Excel 文件的内存流和建议文件名。
    """
    file_name = _generate_filename(products, base_name)
    output = BytesIO()

    _write_excel_data(products, output)

    # 指针回到开头
    output.seek(0)

    return output, file_name


def export_to_excel(
    products: List[Product],
    path: str = "output.xlsx",
    base_name: str = ""
) -> str:
    """
    将结果导出为本地 Excel 文件。
    path 为默认值或以目录分隔符结尾时，自动生成文件名。
    """
    if path == "output.xlsx" or path.endswith("/") or path.endswith("\\"):
        file_name = _generate_filename(products, base_name)
        if path.endswith("/") or path.endswith("\\"):
            path = os.path.join(path, file_name)
        else:
            path = file_name

    _write_excel_data(products, path)
    return path


def quick_check(products: List[Product]) -> Dict[str, int]:
    """
    生成快速核对报告，统计关键指标。
    """
    return {
        "totale_prodotti": len(products),
        "risultati_non_validi": sum(1 for p in products if not p.is_finite),
        "prezzi_finali_negativi": sum(1 for p in products if p.final_price < 0),
    }


# ==========================================
# 内部辅助函数
# ==========================================

def _generate_filename(products: List[Product], base_name: str = "") -> str:
    """根据导入的文件名或商品名生成文件名。"""
    file_name = None

    # 1. 如果提供了基础文件名 (来自导入)，则优先使用
    if base_name:
        file_name = f"{os.path.splitext(os.path.basename(base_name))[0]}_scontato"

    # 2. 否则使用第一个商品名称
    elif products and products[0].name:
        file_name = products[0].name.strip()

    # 3. 默认文件名
    if not file_name:
        file_name = "sconti"

    # 清理非法字符
    safe_filename = re.sub(r'[\\/:*?"<>|]', '_', file_name)
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

    return f"{safe_filename}_{timestamp}.xlsx"


def _cell_value(value: float):
    # nan / inf 无法写入 Excel，留空
    return round(value, 2) if math.isfinite(value) else None


def _write_excel_data(products: List[Product], target: Union[str, BytesIO]):
    """核心导出逻辑：写入数据并调用格式化。"""
    rows = []
    for product in products:
        rows.append({
            "Prodotto": product.name,
            "Prezzo originale": _cell_value(product.original_price),
            "Sconto": format_discount(product.discount),
            "Prezzo finale": _cell_value(product.final_price),
            "Risparmio": _cell_value(product.savings_amount),
            "Risparmio %": _cell_value(product.savings_percentage),
        })

    # 多于一个商品时追加汇总行
    if len(products) > 1:
        totals = aggregate_totals(products)
        rows.append({
            "Prodotto": "Totale",
            "Prezzo originale": _cell_value(totals.total_original),
            "Sconto": "",
            "Prezzo finale": _cell_value(totals.total_final),
            "Risparmio": _cell_value(totals.total_savings),
            "Risparmio %": _cell_value(totals.total_savings_percentage),
        })

    columns = ["Prodotto", "Prezzo originale", "Sconto", "Prezzo finale", "Risparmio", "Risparmio %"]
    df = pd.DataFrame(rows, columns=columns)
    df.to_excel(target, index=False, sheet_name=SHEET_NAME)

    _format_excel(target, has_totals=len(products) > 1)


def _format_excel(target: Union[str, BytesIO], has_totals: bool):
    """对 Excel 文件进行美化格式化。"""
    if isinstance(target, BytesIO):
        target.seek(0)
    wb = load_workbook(target)
    ws = wb.active

    # 样式定义
    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=11)
    border = Border(
        left=Side(style='thin'), right=Side(style='thin'),
        top=Side(style='thin'), bottom=Side(style='thin')
    )
    center_align = Alignment(horizontal="center", vertical="center", wrap_text=True)
    left_align = Alignment(horizontal="left", vertical="center", wrap_text=True)

    # 格式化表头
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = center_align
        cell.border = border

    # 格式化数据行
    for row in ws.iter_rows(min_row=2, max_row=ws.max_row):
        for cell in row:
            cell.border = border
            cell.alignment = left_align
            if isinstance(cell.value, (int, float)):
                cell.number_format = "0.00"

    # 汇总行加粗
    if has_totals:
        for cell in ws[ws.max_row]:
            cell.font = Font(bold=True)

    # 自动调整列宽
    for column in ws.columns:
        max_length = max(len(str(cell.value or "")) for cell in column)
        ws.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)

    ws.freeze_panes = "A2"

    if isinstance(target, BytesIO):
        target.seek(0)
        target.truncate()
    wb.save(target)
