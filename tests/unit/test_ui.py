"""
Streamlit 共通部品のうち、画面に依存しない部分のテスト
"""

import math

import pandas as pd

from mathdrill.forms import FieldError, FormResult, validate_tables_form
from mathdrill.layout import build_sums_document, build_tables_document
from mathdrill.ui import editor_records, preview_frame, row_error_lines


class TestEditorRecords:

    def test_empty_cells_become_none(self):
        frame = pd.DataFrame({"number": ["5", None], "startingNumber": [math.nan, "3"]})
        assert editor_records(frame, ["number", "startingNumber"]) == [
            {"number": "5", "startingNumber": None},
            {"number": None, "startingNumber": "3"},
        ]

    def test_records_validate(self, meta):
        frame = pd.DataFrame({"number": ["5"], "startingNumber": ["1"]})
        result = validate_tables_form(dict(meta, tables=editor_records(frame, ["number", "startingNumber"])))
        assert result.ok

    def test_blank_cell_reports_missing_number(self, meta):
        frame = pd.DataFrame({"number": [None], "startingNumber": ["1"]})
        result = validate_tables_form(dict(meta, tables=editor_records(frame, ["number", "startingNumber"])))
        assert result.errors_for("tables.0.number") == ["Please enter a number"]


class TestRowErrorLines:

    def test_lines(self):
        result = FormResult(errors=[
            FieldError("title", "Please enter a title"),
            FieldError("tables.1.startingNumber", "Please enter a valid number"),
        ])
        lines = row_error_lines(result, "tables", {"startingNumber": "Starting number"})
        assert lines == ["Row 2 · Starting number: Please enter a valid number"]

    def test_other_collection_ignored(self):
        result = FormResult(errors=[FieldError("sums.0.value", "Please enter a value")])
        assert row_error_lines(result, "tables", {}) == []


class TestPreviewFrame:

    def test_tables(self, tables_worksheet):
        frame = preview_frame(build_tables_document(tables_worksheet, True))
        assert list(frame.columns) == ["Table 1", "Table 2"]
        assert len(frame) == 10
        assert frame.iloc[0]["Table 1"] == "5 x 1 = 5"

    def test_sums(self, sums_worksheet):
        frame = preview_frame(build_sums_document(sums_worksheet, True))
        assert list(frame.columns) == ["Sum", "Numbers", "Total"]
        assert frame.iloc[0]["Total"] == "-15.000"
        assert frame.iloc[0]["Numbers"] == "2, -2, 12, -27"

    def test_empty(self, meta):
        from mathdrill.models import SumsWorksheet

        frame = preview_frame(build_sums_document(SumsWorksheet(**meta), True))
        assert frame.empty
