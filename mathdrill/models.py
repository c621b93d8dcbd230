# models.py
# ------------------------------------------------------------
# フォーム入力のモデル（pydantic）
# ・入力はすべて文字列で受け取り、ここで数値として妥当か検査する
# ・エラーメッセージは画面にそのまま出すので英語で定義
# ------------------------------------------------------------

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

Number = Union[int, float]

TITLE_MAX_LENGTH = 100

# 入力できる数の絶対値の上限（これ以上は不正な数として扱う）
MAX_MAGNITUDE = 10 ** 15

# 符号・小数・指数を許す（inf / nan / 16進などは不可）
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")


def parse_number(text: str) -> Number:
    """数値文字列を int / float に変換する。整数表記なら int を返す。"""
    s = text.strip()
    if not _NUMBER_RE.fullmatch(s):
        raise ValueError(f"not a number: {text!r}")
    if _INTEGER_RE.fullmatch(s):
        value: Number = int(s)
    else:
        value = float(s)
        if not math.isfinite(value):
            raise ValueError(f"not a finite number: {text!r}")
    if abs(value) >= MAX_MAGNITUDE:
        raise ValueError(f"number out of range: {text!r}")
    return value


def split_numbers(text: str) -> List[Number]:
    """"2, -2, 12 ,-27" → [2, -2, 12, -27]"""
    return [parse_number(part) for part in text.split(",")]


def _as_text(value: Any) -> Any:
    # data_editor の空セルは None、数値列なら float で来る
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class OrderMode(str, Enum):
    STRAIGHT = "straight"
    REVERSE = "reverse"


class OperationMode(str, Enum):
    MULTIPLICATION = "multiplication"
    DIVISION = "division"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ====== 見出し（名前・タイトル・レベル） ======

class WorksheetMeta(_Record):
    title: str
    name: str
    level: str

    @field_validator("title", "name", "level", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("blank", "Please enter a title")
        if len(value) > TITLE_MAX_LENGTH:
            raise PydanticCustomError("too_long", "Title must be less than 100 characters")
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("blank", "Please enter a name")
        return value

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("blank", "Please enter a level")
        return value


# ====== 九九の表（かけ算・わり算） ======

class TableSpec(_Record):
    number: str
    starting_number: str = Field(alias="startingNumber")

    @field_validator("number", "starting_number", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("number", "starting_number")
    @classmethod
    def _check_numeric(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("blank", "Please enter a number")
        try:
            parse_number(value)
        except ValueError:
            raise PydanticCustomError("not_a_number", "Please enter a valid number") from None
        return value

    @property
    def number_value(self) -> Number:
        return parse_number(self.number)

    @property
    def starting_value(self) -> Number:
        return parse_number(self.starting_number)


class TablesWorksheet(WorksheetMeta):
    order: OrderMode = OrderMode.STRAIGHT
    operation: OperationMode = OperationMode.MULTIPLICATION
    tables: Tuple[TableSpec, ...] = ()


# ====== たし算（縦に並べた数の合計） ======

class SumSpec(_Record):
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("value")
    @classmethod
    def _check_numbers(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("blank", "Please enter a value")
        try:
            split_numbers(value)
        except ValueError:
            raise PydanticCustomError(
                "not_numbers", "Please enter valid numbers (comma separated)"
            ) from None
        return value

    @property
    def numbers(self) -> List[Number]:
        return split_numbers(self.value)


class SumsWorksheet(WorksheetMeta):
    sums: Tuple[SumSpec, ...] = ()
