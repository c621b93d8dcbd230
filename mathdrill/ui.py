# ui.py
# ------------------------------------------------------------
# 2 つのページ（表／たし算）で共通の Streamlit 部品
# ・見出し入力（タイトル・名前・レベル）
# ・行の追加／削除ができる入力表（st.data_editor）
# ・項目ごとのエラー表示
# ・プレビューと PDF ダウンロード（問題／解答）
# ------------------------------------------------------------

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping

import pandas as pd
import streamlit as st

from .config import Settings
from .errors import RenderError
from .forms import FormResult
from .layout import SumBlock, TableBlock, WorksheetDocument
from .pdf import render_pdf

PDF_MIME = "application/pdf"


# ====== 入力 ======

def meta_inputs(settings: Settings, key: str) -> Dict[str, Any]:
    """タイトル・名前・レベルの入力欄。各欄の下にエラー表示用の枠を置く。"""
    values: Dict[str, Any] = {}
    slots: Dict[str, Any] = {}
    col1, col2, col3 = st.columns(3)
    with col1:
        values["title"] = st.text_input(
            "Title",
            value=settings.default_title,
            placeholder="6th Day homework",
            help="Title for the PDF",
            key=f"{key}_title",
        )
        slots["title"] = st.empty()
    with col2:
        values["name"] = st.text_input(
            "Name",
            value=settings.default_name,
            placeholder="Farhan Shaik",
            help="Name for the PDF",
            key=f"{key}_name",
        )
        slots["name"] = st.empty()
    with col3:
        values["level"] = st.text_input(
            "Level",
            value=settings.default_level,
            placeholder="5th Seniors",
            help="Level for the PDF",
            key=f"{key}_level",
        )
        slots["level"] = st.empty()
    return {"values": values, "slots": slots}


def editor_records(frame: pd.DataFrame, columns: List[str]) -> List[Dict[str, Any]]:
    """data_editor の結果を行ごとの dict に。空セル（NaN）は None にする。"""
    records = []
    for row in frame.to_dict("records"):
        records.append({c: (None if pd.isna(row.get(c)) else row.get(c)) for c in columns})
    return records


def rows_editor(key: str, columns: Mapping[str, str]) -> List[Dict[str, Any]]:
    empty = pd.DataFrame({name: pd.Series(dtype="object") for name in columns})
    edited = st.data_editor(
        empty,
        key=key,
        num_rows="dynamic",
        column_config={name: st.column_config.TextColumn(label) for name, label in columns.items()},
    )
    return editor_records(edited, list(columns))


# ====== エラー表示 ======

def row_error_lines(result: FormResult, collection: str, labels: Mapping[str, str]) -> List[str]:
    """"tables.1.startingNumber" → "Row 2 · Starting number: ..." """
    lines = []
    for error in result.errors:
        parts = error.field.split(".")
        if parts[0] != collection or len(parts) < 2:
            continue
        label = labels.get(parts[2], parts[2]) if len(parts) > 2 else ""
        prefix = f"Row {int(parts[1]) + 1}" + (f" · {label}" if label else "")
        lines.append(f"{prefix}: {error.message}")
    return lines


def show_errors(result: FormResult, slots: Mapping[str, Any], rows_slot: Any,
                collection: str, labels: Mapping[str, str]) -> None:
    for name, slot in slots.items():
        messages = result.errors_for(name)
        if messages:
            slot.error(messages[0])
    lines = row_error_lines(result, collection, labels)
    other = [e for e in result.errors
             if e.field not in slots and not e.field.startswith(f"{collection}.")]
    lines.extend(f"{e.field}: {e.message}" for e in other)
    if lines:
        rows_slot.error("\n\n".join(lines))


# ====== プレビュー ======

def preview_frame(document: WorksheetDocument) -> pd.DataFrame:
    """表は列ごと、たし算は 1 行ずつ"""
    columns: Dict[str, List[str]] = {}
    for block in document.blocks:
        if isinstance(block, TableBlock):
            columns[f"Table {block.index}"] = [row.text() for row in block.rows]
    if columns:
        return pd.DataFrame(columns)
    records = [
        {"Sum": block.index, "Numbers": ", ".join(block.operands), "Total": block.total}
        for block in document.blocks
        if isinstance(block, SumBlock)
    ]
    return pd.DataFrame(records, columns=["Sum", "Numbers", "Total"])


# ====== ダウンロード ======

def download_buttons(key: str, build: Callable[[bool], WorksheetDocument]) -> None:
    col_q, col_a = st.columns(2)
    for col, show_answers, label in (
        (col_q, False, "Download Questions"),
        (col_a, True, "Download Answers"),
    ):
        document = build(show_answers)
        with col:
            try:
                data = render_pdf(document)
            except RenderError as exc:
                st.error(str(exc))
                continue
            st.download_button(
                label=label,
                data=data,
                file_name=document.filename,
                mime=PDF_MIME,
                key=f"{key}_download_{int(show_answers)}",
            )
