# mathdrill
# ------------------------------------------------------------
# 計算練習プリント（九九の表・たし算）の生成
#
# - models:     フォーム入力のモデル
# - forms:      フォーム検証（項目ごとのエラー）
# - generators: 数列・解答の計算
# - layout:     プリントのレイアウト木
# - pdf:        reportlab による PDF 描画
# - ui:         Streamlit の共通部品
# ------------------------------------------------------------

from .errors import RenderError, WorksheetError, ZeroDivisorError
from .forms import FieldError, FormResult, validate_sums_form, validate_tables_form
from .layout import build_sums_document, build_tables_document
from .models import OperationMode, OrderMode, SumSpec, SumsWorksheet, TableSpec, TablesWorksheet
from .pdf import render_pdf

__version__ = "0.1.0"

__all__ = [
    "FieldError",
    "FormResult",
    "OperationMode",
    "OrderMode",
    "RenderError",
    "SumSpec",
    "SumsWorksheet",
    "TableSpec",
    "TablesWorksheet",
    "WorksheetError",
    "ZeroDivisorError",
    "build_sums_document",
    "build_tables_document",
    "render_pdf",
    "validate_sums_form",
    "validate_tables_form",
]
