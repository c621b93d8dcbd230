"""
フォーム入力モデル・検証の単元テスト
"""

import pytest
from pydantic import ValidationError

from mathdrill.forms import ZERO_DIVISOR_MESSAGE, validate_sums_form, validate_tables_form
from mathdrill.layout import build_sums_document, build_tables_document
from mathdrill.models import (
    OperationMode,
    OrderMode,
    SumSpec,
    TableSpec,
    TablesWorksheet,
    parse_number,
    split_numbers,
)


class TestParseNumber:

    @pytest.mark.parametrize(
        "text, expected",
        [("12", 12), (" -2 ", -2), ("+7", 7), ("1.5", 1.5), (".5", 0.5), ("5.", 5.0), ("1e3", 1000.0)],
    )
    def test_valid(self, text, expected):
        assert parse_number(text) == expected

    def test_integer_literal_is_int(self):
        assert isinstance(parse_number("12"), int)
        assert isinstance(parse_number("12.0"), float)

    @pytest.mark.parametrize("text", ["", " ", "abc", "1,5", "inf", "nan", "0x10", "1e999", "--1"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_number(text)

    def test_split_numbers(self):
        assert split_numbers("2, -2, 12 ,-27") == [2, -2, 12, -27]

    def test_split_numbers_rejects_empty_entry(self):
        with pytest.raises(ValueError):
            split_numbers("2,,3")


class TestModels:

    def test_table_spec_alias(self):
        spec = TableSpec(number="5", startingNumber="1")
        assert spec.starting_number == "1"
        assert spec.number_value == 5
        assert spec.starting_value == 1

    def test_table_spec_by_name(self):
        assert TableSpec(number="5", starting_number="3").starting_value == 3

    def test_numeric_cells_are_accepted(self):
        assert TableSpec(number=5, startingNumber=1.5).starting_value == 1.5

    def test_frozen(self, tables_worksheet: TablesWorksheet):
        with pytest.raises(ValidationError):
            tables_worksheet.title = "changed"

    def test_defaults(self, meta):
        ws = TablesWorksheet(**meta)
        assert ws.order is OrderMode.STRAIGHT
        assert ws.operation is OperationMode.MULTIPLICATION
        assert ws.tables == ()

    def test_sum_spec_numbers(self):
        assert SumSpec(value="1.5,2").numbers == [1.5, 2]


class TestValidateTablesForm:

    def test_valid(self, meta):
        result = validate_tables_form(
            dict(meta, order="reverse", operation="division",
                 tables=[{"number": "20", "startingNumber": "1"}])
        )
        assert result.ok
        assert result.errors == []
        assert result.value.order is OrderMode.REVERSE
        assert result.value.tables[0].number_value == 20

    def test_meta_errors(self):
        result = validate_tables_form({"title": "", "name": "", "level": None})
        assert not result.ok
        assert result.value is None
        assert result.errors_for("title") == ["Please enter a title"]
        assert result.errors_for("name") == ["Please enter a name"]
        assert result.errors_for("level") == ["Please enter a level"]

    def test_title_length(self, meta):
        assert validate_tables_form(dict(meta, title="x" * 100)).ok
        result = validate_tables_form(dict(meta, title="x" * 101))
        assert result.errors_for("title") == ["Title must be less than 100 characters"]

    def test_row_errors(self, meta):
        result = validate_tables_form(
            dict(meta, tables=[
                {"number": "5", "startingNumber": "1"},
                {"number": "", "startingNumber": "abc"},
            ])
        )
        assert not result.ok
        assert result.errors_for("tables.1.number") == ["Please enter a number"]
        assert result.errors_for("tables.1.startingNumber") == ["Please enter a valid number"]
        assert result.errors_for("tables.0.number") == []

    def test_unknown_order(self, meta):
        result = validate_tables_form(dict(meta, order="sideways"))
        assert [e.field for e in result.errors] == ["order"]

    @pytest.mark.parametrize("start", ["0", "-9", "-3"])
    def test_zero_divisor_rejected(self, meta, start):
        result = validate_tables_form(
            dict(meta, operation="division", tables=[
                {"number": "20", "startingNumber": "1"},
                {"number": "20", "startingNumber": start},
            ])
        )
        assert not result.ok
        assert result.errors_for("tables.1.startingNumber") == [ZERO_DIVISOR_MESSAGE]
        assert result.errors_for("tables.0.startingNumber") == []

    def test_zero_divisor_checked_in_reverse_order(self, meta):
        result = validate_tables_form(
            dict(meta, order="reverse", operation="division",
                 tables=[{"number": "20", "startingNumber": "-9"}])
        )
        assert result.errors_for("tables.0.startingNumber") == [ZERO_DIVISOR_MESSAGE]

    @pytest.mark.parametrize("start", ["-10", "1", "-0.5"])
    def test_nonzero_divisors_accepted(self, meta, start):
        result = validate_tables_form(
            dict(meta, operation="division", tables=[{"number": "20", "startingNumber": start}])
        )
        assert result.ok

    def test_zero_allowed_for_multiplication(self, meta):
        result = validate_tables_form(dict(meta, tables=[{"number": "0", "startingNumber": "-5"}]))
        assert result.ok


class TestValidateSumsForm:

    def test_valid(self, meta):
        result = validate_sums_form(dict(meta, sums=[{"value": "2, -2, 12 ,-27"}]))
        assert result.ok
        assert result.value.sums[0].numbers == [2, -2, 12, -27]

    def test_empty_value(self, meta):
        result = validate_sums_form(dict(meta, sums=[{"value": ""}]))
        assert result.errors_for("sums.0.value") == ["Please enter a value"]

    @pytest.mark.parametrize("value", ["2,abc", "2,,3", "1;2", "2,"])
    def test_invalid_numbers(self, meta, value):
        result = validate_sums_form(dict(meta, sums=[{"value": "1"}, {"value": value}]))
        assert result.errors_for("sums.1.value") == ["Please enter valid numbers (comma separated)"]

    def test_no_rows(self, meta):
        assert validate_sums_form(meta).ok


class TestNumberRange:

    @pytest.mark.parametrize("text", ["1" + "0" * 15, "-" + "9" * 16, "9" * 2300, "1" + "0" * 5000, "1e15", "-2.5e20"])
    def test_out_of_range(self, text):
        with pytest.raises(ValueError):
            parse_number(text)

    def test_largest_accepted(self):
        assert parse_number("9" * 15) == 10 ** 15 - 1
        assert parse_number("-999999999999999.5") == -999999999999999.5

    def test_huge_sum_entry_rejected(self, meta):
        result = validate_sums_form(dict(meta, sums=[{"value": "1" + "0" * 450 + ",1"}]))
        assert result.errors_for("sums.0.value") == ["Please enter valid numbers (comma separated)"]

    def test_huge_table_numbers_rejected(self, meta):
        result = validate_tables_form(
            dict(meta, tables=[{"number": "9" * 2300, "startingNumber": "9" * 2300}])
        )
        assert result.errors_for("tables.0.number") == ["Please enter a valid number"]
        assert result.errors_for("tables.0.startingNumber") == ["Please enter a valid number"]

    def test_largest_values_build_documents(self, meta):
        big = "9" * 15
        tables = validate_tables_form(dict(meta, tables=[{"number": big, "startingNumber": big}]))
        doc = build_tables_document(tables.value, show_answers=True)
        assert doc.blocks[0].rows[0].product == str((10 ** 15 - 1) ** 2)

        sums = validate_sums_form(dict(meta, sums=[{"value": ",".join([big] * 40)}]))
        doc = build_sums_document(sums.value, show_answers=True)
        assert doc.blocks[0].total == f"{(10 ** 15 - 1) * 40}.000"
