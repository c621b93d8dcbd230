# app.py
# ------------------------------------------------------------
# 九九（かけ算・わり算）の表プリント自動生成アプリ（Streamlit）
# ・見出し：タイトル／名前／レベル
# ・表：1 行 = 1 つの表（固定の数 + 開始数）、1 表は 10 行固定
# ・順番：straight（開始数から）／reverse（開始数+9 から）
# ・PDF：A4 横・問題用と解答用の 2 種類をダウンロード
#
# たし算のプリントは pages/sums.py
#
# 起動：
#   streamlit run app.py
# ------------------------------------------------------------

from __future__ import annotations

import logging

import streamlit as st

from mathdrill import ui
from mathdrill.config import get_settings, setup_logging
from mathdrill.forms import validate_tables_form
from mathdrill.layout import build_tables_document
from mathdrill.models import OperationMode, OrderMode

setup_logging()
logger = logging.getLogger("mathdrill.app")

TABLE_COLUMNS = {"number": "Number", "startingNumber": "Starting number"}

settings = get_settings()

# ====== Streamlit UI ======
st.set_page_config(page_title="Math Tools · Tables", page_icon="🧮", layout="wide")

st.title("Multiplication / Division Tables")

with st.form("tables_form"):
    meta = ui.meta_inputs(settings, "tables")

    col1, col2 = st.columns(2)
    with col1:
        order = st.radio(
            "Order",
            options=[m.value for m in OrderMode],
            horizontal=True,
            help="straight: starting number upward / reverse: starting number + 9 downward",
        )
    with col2:
        operation = st.radio(
            "Operation",
            options=[m.value for m in OperationMode],
            horizontal=True,
        )

    st.subheader("Tables")
    tables = ui.rows_editor("tables_rows", TABLE_COLUMNS)
    rows_slot = st.empty()

    submitted = st.form_submit_button("Generate PDF", type="primary")

if submitted:
    raw = dict(meta["values"], order=order, operation=operation, tables=tables)
    result = validate_tables_form(raw)
    st.session_state["tables_result"] = result
    if result.ok:
        logger.info("tables worksheet accepted: %d table(s)", len(result.value.tables))

result = st.session_state.get("tables_result")

st.markdown("---")

if result is None:
    st.info("Fill the form and press \"Generate PDF\" to preview and download the worksheet.")
elif not result.ok:
    ui.show_errors(result, meta["slots"], rows_slot, "tables", TABLE_COLUMNS)
    st.warning("Fill the form")
else:
    snapshot = result.value

    st.subheader("Preview (answers)")
    st.dataframe(ui.preview_frame(build_tables_document(snapshot, show_answers=True)))

    ui.download_buttons("tables", lambda show: build_tables_document(snapshot, show_answers=show))
