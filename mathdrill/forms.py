# forms.py
# ------------------------------------------------------------
# フォーム送信の検証
# ・入力（dict）→ 検証済みモデル or 項目ごとのエラー一覧
# ・項目名は "tables.0.startingNumber" / "sums.2.value" の形
# ・1 つでもエラーがあれば PDF は作らない
# ------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .generators import generate_sequence
from .models import OperationMode, SumsWorksheet, TablesWorksheet

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

ZERO_DIVISOR_MESSAGE = "Division tables cannot include 0 as a divisor"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class FormResult(Generic[T]):
    value: Optional[T] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def errors_for(self, name: str) -> List[str]:
        return [e.message for e in self.errors if e.field == name]


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def _validate(model: Type[T], raw: Mapping[str, Any]) -> FormResult[T]:
    try:
        value = model.model_validate(dict(raw))
    except ValidationError as exc:
        errors = [FieldError(_field_name(e["loc"]), e["msg"]) for e in exc.errors()]
        logger.info("%s rejected: %d field error(s)", model.__name__, len(errors))
        return FormResult(errors=errors)
    return FormResult(value=value)


def zero_divisor_errors(worksheet: TablesWorksheet) -> List[FieldError]:
    """わり算の表で、わる数の並びに 0 が入る行を探す"""
    if worksheet.operation is not OperationMode.DIVISION:
        return []
    errors = []
    for i, spec in enumerate(worksheet.tables):
        if 0 in generate_sequence(spec.starting_value, worksheet.order):
            errors.append(FieldError(f"tables.{i}.startingNumber", ZERO_DIVISOR_MESSAGE))
    return errors


def validate_tables_form(raw: Mapping[str, Any]) -> FormResult[TablesWorksheet]:
    result = _validate(TablesWorksheet, raw)
    if not result.ok:
        return result
    errors = zero_divisor_errors(result.value)
    if errors:
        logger.info("TablesWorksheet rejected: zero divisor in %d table(s)", len(errors))
        return FormResult(errors=errors)
    return result


def validate_sums_form(raw: Mapping[str, Any]) -> FormResult[SumsWorksheet]:
    return _validate(SumsWorksheet, raw)
