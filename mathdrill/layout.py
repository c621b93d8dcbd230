# layout.py
# ------------------------------------------------------------
# プリントの中身（レイアウト木）を組み立てる
# ・描画ライブラリに依存しない素のデータだけを作る
# ・見出し（名前／タイトル／レベル）＋ 表・たし算ブロックの並び
# ・描画は pdf.py が担当
# ------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Union

from .generators import (
    division_answer,
    format_number,
    generate_sequence,
    multiplication_answer,
    sum_answer,
)
from .models import Number, OperationMode, SumsWorksheet, TablesWorksheet, WorksheetMeta

MULTIPLICATION_SIGN = "x"
DIVISION_SIGN = "÷"


@dataclass(frozen=True)
class Header:
    name: str
    title: str
    level: str

    @classmethod
    def from_meta(cls, meta: WorksheetMeta) -> Header:
        return cls(name=meta.name, title=meta.title, level=meta.level)


@dataclass(frozen=True)
class MultiplicationRow:
    number: str
    operand: str
    product: str

    @property
    def question(self) -> str:
        return f"{self.number} {MULTIPLICATION_SIGN} {self.operand} ="

    def text(self) -> str:
        return f"{self.question} {self.product}".rstrip()


@dataclass(frozen=True)
class DivisionRow:
    number: str
    operand: str
    quotient: str
    remainder: str

    @property
    def question(self) -> str:
        return f"{self.number} {DIVISION_SIGN} {self.operand}"

    def text(self) -> str:
        return f"{self.question} Q={self.quotient} R={self.remainder}"


Row = Union[MultiplicationRow, DivisionRow]


@dataclass(frozen=True)
class TableBlock:
    index: int
    operation: OperationMode
    rows: Tuple[Row, ...]


@dataclass(frozen=True)
class SumBlock:
    index: int
    operands: Tuple[str, ...]
    total: str


Block = Union[TableBlock, SumBlock]


@dataclass(frozen=True)
class WorksheetDocument:
    header: Header
    blocks: Tuple[Block, ...]
    landscape: bool
    show_answers: bool
    filename: str


# ====== ファイル名 ======

def tables_filename(operation: OperationMode, show_answers: bool) -> str:
    suffix = "-answers" if show_answers else ""
    return f"{operation.value}-tables{suffix}.pdf"


def sums_filename(show_answers: bool) -> str:
    return "sums-answers.pdf" if show_answers else "sums.pdf"


# ====== 組み立て ======

def build_table_rows(
    number: Number,
    start: Number,
    worksheet: TablesWorksheet,
    show_answers: bool,
) -> Tuple[Row, ...]:
    rows: List[Row] = []
    shown_number = format_number(number)
    for operand in generate_sequence(start, worksheet.order):
        shown_operand = format_number(operand)
        if worksheet.operation is OperationMode.DIVISION:
            q, r = division_answer(number, operand, show_answers)
            rows.append(DivisionRow(shown_number, shown_operand, q, r))
        else:
            rows.append(
                MultiplicationRow(
                    shown_number,
                    shown_operand,
                    multiplication_answer(number, operand, show_answers),
                )
            )
    return tuple(rows)


def build_tables_document(worksheet: TablesWorksheet, show_answers: bool) -> WorksheetDocument:
    blocks = tuple(
        TableBlock(
            index=i,
            operation=worksheet.operation,
            rows=build_table_rows(spec.number_value, spec.starting_value, worksheet, show_answers),
        )
        for i, spec in enumerate(worksheet.tables, start=1)
    )
    return WorksheetDocument(
        header=Header.from_meta(worksheet),
        blocks=blocks,
        landscape=True,
        show_answers=show_answers,
        filename=tables_filename(worksheet.operation, show_answers),
    )


def build_sums_document(worksheet: SumsWorksheet, show_answers: bool) -> WorksheetDocument:
    blocks = []
    for i, spec in enumerate(worksheet.sums, start=1):
        numbers = spec.numbers
        blocks.append(
            SumBlock(
                index=i,
                operands=tuple(format_number(n) for n in numbers),
                total=sum_answer(numbers, show_answers),
            )
        )
    return WorksheetDocument(
        header=Header.from_meta(worksheet),
        blocks=tuple(blocks),
        landscape=False,
        show_answers=show_answers,
        filename=sums_filename(show_answers),
    )
