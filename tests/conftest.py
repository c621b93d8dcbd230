"""
pytest 共通 fixtures

使い方：
    def test_something(tables_worksheet):
        assert len(tables_worksheet.tables) == 2
"""

from __future__ import annotations

import pytest

from mathdrill.config import Settings
from mathdrill.models import (
    OperationMode,
    OrderMode,
    SumSpec,
    SumsWorksheet,
    TableSpec,
    TablesWorksheet,
)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """存在しないフォントを指定（Helvetica で描画される）"""
    return Settings(font_path=str(tmp_path / "missing.ttf"), font_name="Missing")


@pytest.fixture
def meta() -> dict:
    return {"title": "6th Day homework", "name": "Farhan Shaik", "level": "5th Seniors"}


@pytest.fixture
def tables_worksheet(meta) -> TablesWorksheet:
    return TablesWorksheet(
        **meta,
        order=OrderMode.STRAIGHT,
        operation=OperationMode.MULTIPLICATION,
        tables=[
            TableSpec(number="5", startingNumber="1"),
            TableSpec(number="7", startingNumber="11"),
        ],
    )


@pytest.fixture
def division_worksheet(meta) -> TablesWorksheet:
    return TablesWorksheet(
        **meta,
        order=OrderMode.REVERSE,
        operation=OperationMode.DIVISION,
        tables=[TableSpec(number="20", startingNumber="1")],
    )


@pytest.fixture
def sums_worksheet(meta) -> SumsWorksheet:
    return SumsWorksheet(
        **meta,
        sums=[SumSpec(value="2,-2,12,-27"), SumSpec(value="229.128, 42.114, -112.143")],
    )
