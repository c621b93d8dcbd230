# errors.py
# ------------------------------------------------------------
# プリント生成で使う例外
# ------------------------------------------------------------

from __future__ import annotations


class WorksheetError(Exception):
    """プリント生成の基底例外"""


class ZeroDivisorError(WorksheetError, ZeroDivisionError):
    """わり算の表で、わる数が 0 になった"""

    def __init__(self, number: float, operand: float) -> None:
        super().__init__(f"cannot divide {number} by {operand}")
        self.number = number
        self.operand = operand


class RenderError(WorksheetError):
    """PDF 描画に失敗した"""
