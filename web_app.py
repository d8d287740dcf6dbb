"""
Streamlit Web 应用程序入口。
负责 UI 渲染和用户交互，调用底层服务进行业务处理。
"""
import streamlit as st

from discount_calc.formatting import (
    describe_product,
    describe_savings,
    format_currency,
    format_discount,
)
from discount_calc.service import CalculationService, ExportService, ImportService
from discount_calc.settings import configure_logging

# ==========================================
# UI 辅助函数
# ==========================================

def init_session_state():
    """初始化 Session State 变量。"""
    if 'single_product' not in st.session_state:
        st.session_state.single_product = None
    if 'products' not in st.session_state:
        st.session_state.products = []
    if 'csv_error' not in st.session_state:
        st.session_state.csv_error = ""
    if 'import_filename' not in st.session_state:
        st.session_state.import_filename = ""
    if 'upload_id' not in st.session_state:
        st.session_state.upload_id = None


def render_single_tab():
    """渲染单件计算表单及结果。"""
    st.subheader("Calcola Prezzo Scontato")
    st.caption("Inserisci i dettagli del prodotto per calcolare il prezzo finale dopo lo sconto.")

    with st.form("single_form"):
        product_name = st.text_input("Nome Prodotto (opzionale)", placeholder="Nome del prodotto")
        original_price = st.number_input(
            "Prezzo Originale (€)", min_value=0.0, step=0.01, value=None, placeholder="100.00"
        )
        discount = st.text_input(
            "Sconto (% o valore fisso)",
            placeholder="20% o 20",
            help='Inserisci una percentuale (es. "20%") o un valore fisso (es. "20")'
        )
        submitted = st.form_submit_button("Calcola", type="primary", use_container_width=True)

    if submitted:
        if original_price is None or not discount:
            st.warning("Compila il prezzo originale e lo sconto.")
        else:
            calc_service = CalculationService()
            st.session_state.single_product = calc_service.calculate_single(
                product_name, str(original_price), discount
            )

    product = st.session_state.single_product
    if product is not None:
        with st.container(border=True):
            st.markdown(f"#### {product.name}")
            st.write(f"Prezzo originale: {format_currency(product.original_price)}")
            st.write(
                f"Sconto: {format_discount(product.discount)} "
                f"({format_currency(product.savings_amount)})"
            )
            st.divider()
            st.markdown(f"**Prezzo finale: {format_currency(product.final_price)}**")
            st.write(f"Risparmio: {describe_savings(product.savings_amount, product.savings_percentage)}")


def render_batch_tab():
    """渲染 CSV 上传区域及批量结果。"""
    st.subheader("Calcolo Multiplo da CSV")
    st.caption(
        "Carica un file CSV con i dettagli dei prodotti per calcolare più prezzi scontati contemporaneamente."
    )

    uploaded_file = st.file_uploader("File CSV", type=["csv"])
    st.caption("Formato CSV: nome_prodotto,prezzo_originale,sconto")

    if uploaded_file is not None and uploaded_file.file_id != st.session_state.upload_id:
        _handle_upload(uploaded_file)

    if st.session_state.csv_error:
        st.error(st.session_state.csv_error)

    products = st.session_state.products
    if not products:
        return

    st.markdown("### Risultati")
    for product in products:
        with st.container(border=True):
            st.markdown(f"**{product.name}**")
            st.write(describe_product(product))
            st.caption(f"Risparmio: {describe_savings(product.savings_amount, product.savings_percentage)}")

    calc_service = CalculationService()
    if len(products) > 1:
        totals = calc_service.calculate_totals(products)
        with st.container(border=True):
            st.markdown("#### Riepilogo")
            st.write(f"Totale originale: {format_currency(totals.total_original)}")
            st.write(f"Totale scontato: {format_currency(totals.total_final)}")
            st.markdown(
                f"**Risparmio totale: "
                f"{describe_savings(totals.total_savings, totals.total_savings_percentage)}**"
            )

    report = calc_service.get_quick_report(products)
    if report["risultati_non_validi"]:
        st.warning(f"⚠️ {report['risultati_non_validi']} prodotti con sconto non valido.")

    export_service = ExportService()
    excel_bytes, file_name = export_service.get_excel_bytes(
        products, base_name=st.session_state.import_filename
    )
    st.download_button(
        label="📥 Scarica Excel",
        data=excel_bytes,
        file_name=file_name,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


def _handle_upload(uploaded_file):
    """处理新上传的文件：整批替换上一次的结果，出错时保留上一批结果。"""
    st.session_state.upload_id = uploaded_file.file_id

    import_service = ImportService()
    result = import_service.import_from_csv(uploaded_file.getvalue())

    if result.ok:
        st.session_state.products = result.products
        st.session_state.import_filename = uploaded_file.name
        st.session_state.csv_error = ""
    else:
        st.session_state.csv_error = result.error


# ==========================================
# 主程序
# ==========================================

def main():
    st.set_page_config(page_title="Calcolatore di Sconti", page_icon="🏷️", layout="centered")
    init_session_state()

    st.title("Calcolatore di Sconti")

    tab_single, tab_batch = st.tabs(["🧮 Calcolo Singolo", "📂 Carica CSV"])
    with tab_single:
        render_single_tab()
    with tab_batch:
        render_batch_tab()


if __name__ == "__main__":
    configure_logging()
    main()
