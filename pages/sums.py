# sums.py
# ------------------------------------------------------------
# たし算（縦に並べた数の合計）プリント
# ・1 行 = 1 問（カンマ区切りの数、例："2, -2, 12 ,-27"）
# ・合計は小数第3位まで表示
# ・PDF：A4 縦・問題用（sums.pdf）と解答用（sums-answers.pdf）
# ------------------------------------------------------------

from __future__ import annotations

import logging

import streamlit as st

from mathdrill import ui
from mathdrill.config import get_settings, setup_logging
from mathdrill.forms import validate_sums_form
from mathdrill.layout import build_sums_document

setup_logging()
logger = logging.getLogger("mathdrill.sums")

SUM_COLUMNS = {"value": "Numbers (comma separated)"}

settings = get_settings()

st.set_page_config(page_title="Math Tools · Sums", page_icon="➕", layout="wide")

st.title("Sums")

with st.form("sums_form"):
    meta = ui.meta_inputs(settings, "sums")

    st.subheader("Sums Rows")
    sums = ui.rows_editor("sums_rows", SUM_COLUMNS)
    rows_slot = st.empty()

    submitted = st.form_submit_button("Generate PDF", type="primary")

if submitted:
    result = validate_sums_form(dict(meta["values"], sums=sums))
    st.session_state["sums_result"] = result
    if result.ok:
        logger.info("sums worksheet accepted: %d sum(s)", len(result.value.sums))

result = st.session_state.get("sums_result")

st.markdown("---")

if result is None:
    st.info("Fill the form and press \"Generate PDF\" to preview and download the worksheet.")
elif not result.ok:
    ui.show_errors(result, meta["slots"], rows_slot, "sums", SUM_COLUMNS)
    st.warning("Fill the form")
else:
    snapshot = result.value

    st.subheader("Preview (answers)")
    st.dataframe(ui.preview_frame(build_sums_document(snapshot, show_answers=True)))

    ui.download_buttons("sums", lambda show: build_sums_document(snapshot, show_answers=show))
