"""
简单的命令行入口：读取 CSV 文件，计算折扣并 (可选) 导出 Excel。
用法示例：
    python cli_app.py --input prodotti.csv --out risultati.xlsx
    python cli_app.py --price 100 --discount 20% --name Scarpe
"""
import argparse
import sys
from typing import List, Optional

from discount_calc.formatting import (
    describe_product,
    describe_savings,
    format_currency,
    format_discount,
)
from discount_calc.service import CalculationService, ExportService, ImportService
from discount_calc.settings import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calcolatore di Sconti")
    parser.add_argument(
        "--input", help="File CSV: nome_prodotto,prezzo_originale,sconto (prima riga = intestazione)"
    )
    parser.add_argument("--out", help="Esporta i risultati in un file Excel")

    # 单件计算参数
    parser.add_argument("--price", help="Prezzo originale (calcolo singolo)")
    parser.add_argument("--discount", help='Sconto, es. "20%%" o "20" (calcolo singolo)')
    parser.add_argument("--name", default="", help="Nome prodotto (opzionale)")

    parser.add_argument("--log-level", dest="log_level", default="", help="Livello di log")
    return parser


def run_single(args) -> int:
    calc_service = CalculationService()
    product = calc_service.calculate_single(args.name, args.price or "", args.discount or "")
    if product is None:
        print("Specificare sia --price che --discount.")
        return 1

    print(product.name)
    print(f"  Prezzo originale: {format_currency(product.original_price)}")
    print(f"  Sconto: {format_discount(product.discount)} ({format_currency(product.savings_amount)})")
    print(f"  Prezzo finale: {format_currency(product.final_price)}")
    print(f"  Risparmio: {describe_savings(product.savings_amount, product.savings_percentage)}")
    return 0


def run_batch(args) -> int:
    try:
        with open(args.input, "rb") as f:
            content = f.read()
    except OSError as e:
        print(f"Impossibile leggere il file: {e}")
        return 1

    # 1. 导入 (使用 ImportService)
    result = ImportService().import_from_csv(content)
    if not result.ok:
        print(result.error)
        return 1

    products = result.products
    if not products:
        print("Nessun prodotto trovato nel file.")
        return 0

    # 2. 输出结果
    print("Risultati")
    for product in products:
        print(f"- {product.name}: {describe_product(product)}")
        print(f"    Risparmio: {describe_savings(product.savings_amount, product.savings_percentage)}")

    calc_service = CalculationService()
    if len(products) > 1:
        totals = calc_service.calculate_totals(products)
        print("Riepilogo")
        print(f"  Totale originale: {format_currency(totals.total_original)}")
        print(f"  Totale scontato: {format_currency(totals.total_final)}")
        print(f"  Risparmio totale: {describe_savings(totals.total_savings, totals.total_savings_percentage)}")

    # 3. 导出 (使用 ExportService)
    if args.out:
        out_path = ExportService().export_data(products, args.out, base_name=args.input)
        print(f"Risultati esportati in: {out_path}")

    # 4. 核对
    report = calc_service.get_quick_report(products)
    print("Report:", report)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or "WARNING")

    if args.input:
        return run_batch(args)
    if args.price or args.discount:
        return run_single(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
