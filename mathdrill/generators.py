# generators.py
# ------------------------------------------------------------
# 出題・解答の計算
# ・表は 1 つにつき 10 行固定
# ・順番：straight = 開始数から +1 ずつ／reverse = 開始数+9 から -1 ずつ
# ・わり算：商は floor、あまりは (わられる数 - 商×わる数)
# ・たし算：合計を小数第3位まで（四捨五入）
# ・show_answers=False のときは空欄を返す
# ------------------------------------------------------------

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, List, Tuple

from .errors import ZeroDivisorError
from .models import Number, OrderMode

ROWS_PER_TABLE = 10
SUM_DECIMAL_PLACES = 3

BLANK = ""


# ====== 数列 ======

def generate_sequence(start: Number, order: OrderMode) -> List[Number]:
    seq = [start + i for i in range(ROWS_PER_TABLE)]
    if order is OrderMode.REVERSE:
        seq.reverse()
    return seq


# ====== 表示用フォーマット ======

def format_number(value: Number) -> str:
    """整数値の float は小数点なしで表示する（2.0 → 2、2.5 → 2.5）"""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def format_fixed(value: Number, places: int = SUM_DECIMAL_PLACES) -> str:
    # 0.5 は切り上げ（負数は絶対値で切り上げ）
    with localcontext() as ctx:
        ctx.prec = 400
        quantum = Decimal(1).scaleb(-places)
        return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


# ====== 計算 ======

def product(number: Number, operand: Number) -> Number:
    return number * operand


def quotient_remainder(number: Number, operand: Number) -> Tuple[Number, Number]:
    if operand == 0:
        raise ZeroDivisorError(number, operand)
    quotient = number // operand
    return quotient, number - quotient * operand


def sum_numbers(numbers: Iterable[Number]) -> Number:
    # 左から順に足す（sum() は float で補正加算になるため使わない）
    total: Number = 0
    for n in numbers:
        total += n
    return total


# ====== 解答欄 ======

def multiplication_answer(number: Number, operand: Number, show_answers: bool) -> str:
    if not show_answers:
        return BLANK
    return format_number(product(number, operand))


def division_answer(number: Number, operand: Number, show_answers: bool) -> Tuple[str, str]:
    if not show_answers:
        return BLANK, BLANK
    q, r = quotient_remainder(number, operand)
    return format_number(q), format_number(r)


def sum_answer(numbers: Iterable[Number], show_answers: bool) -> str:
    if not show_answers:
        return BLANK
    return format_fixed(sum_numbers(numbers))
