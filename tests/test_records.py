from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import pytest

from gwsrecords import BaseRecord, SheetField, SheetFieldType, get_sheet_fields, sheet_field
from gwsrecords.fields import min_column_id, max_column_id
from gwsrecords.sheets.resources import CellData

from sample_records import *

@pytest.fixture
def row():
    return ["Steve",
            "+1(703)-999-2222",
            "$ 100.00",
            "33.625",  # serial for February 1, 1900 at 3:00 PM
            "1,234.56"]

def test_sheet_fields_in_column_order():
    fields = get_sheet_fields(SampleRecord)
    assert(list(fields) == ["name", "phone_number", "price_amount", "date_time", "quantity"])
    assert(fields["price_amount"] == SheetField("Price Amount", 3, SheetFieldType.CURRENCY, "$#,##0.00"))
    assert(min_column_id(SampleRecord) == 1)
    assert(max_column_id(SampleRecord) == 5)

    offset = get_sheet_fields(SampleRecordOffset)
    assert([sf.column_id for sf in offset.values()] == [3, 4, 5, 6, 7])
    assert(min_column_id(SampleRecordOffset) == 3)
    assert(SheetField("A", 1) < SheetField("B", 2))

def test_sheet_fields_reject_bad_declarations():
    with pytest.raises(ValueError):
        sheet_field("Bad", 0)
    with pytest.raises(ValueError):
        sheet_field("Bad", "1A")

    @dataclass
    class Clash(BaseRecord):
        a: str|None = sheet_field("A", 1)
        b: str|None = sheet_field("B", "A")

    with pytest.raises(ValueError):
        get_sheet_fields(Clash)
    with pytest.raises(TypeError):
        get_sheet_fields(object)

def test_record_creation(row, en_locale):
    record = SampleRecord.from_row(row, 1, number_locale=en_locale)
    assert(record.row_id == 1)
    assert(record.name == "Steve")
    assert(record.phone_number == 7039992222)
    assert(record.price_amount == 100)
    assert(record.quantity == 1234.56)
    assert(record.date_time == datetime(1900, 2, 1, 15, 0, 0))

def test_record_creation_other_culture(de_locale):
    row = ["Steve", "+1(703)-999-2222", "100,00 €", "33,625", "1.234,56"]
    record = SampleRecord.from_row(row, 1, number_locale=de_locale)
    assert(record.price_amount == Decimal("100.00"))
    assert(record.quantity == 1234.56)
    assert(record.date_time == datetime(1900, 2, 1, 15, 0, 0))

def test_record_creation_unformatted_values(en_locale):
    # what UNFORMATTED_VALUE/SERIAL_NUMBER rendering hands back
    row = ["Steve", 7039992222, 100, 33.625, 1234.56]
    record = SampleRecord.from_row(row, 7, number_locale=en_locale)
    assert(record.row_id == 7)
    assert(record.phone_number == 7039992222)
    assert(record.price_amount == Decimal("100"))
    assert(record.date_time == datetime(1900, 2, 1, 15, 0, 0))

def test_record_creation_column_offset(row, en_locale):
    first = min_column_id(SampleRecordOffset)
    record = SampleRecordOffset.from_row(row, 1, first, en_locale)
    assert(record.name == "Steve")
    assert(record.phone_number == 7039992222)
    assert(record.price_amount == 100)
    assert(record.quantity == 1234.56)
    assert(record.date_time == datetime(1900, 2, 1, 15, 0, 0))

def test_record_creation_empty_phone_number(row, en_locale):
    row[1] = ""
    record = SampleRecord.from_row(row, 1, number_locale=en_locale)
    assert(record.phone_number is None)

def test_record_creation_empty_currency(row, en_locale):
    row[2] = ""
    record = SampleRecord.from_row(row, 1, number_locale=en_locale)
    assert(record.price_amount is None)

def test_record_creation_empty_date_time(row, en_locale):
    row[3] = ""
    record = SampleRecord.from_row(row, 1, number_locale=en_locale)
    assert(record.date_time is None)

def test_record_creation_empty_date_time_non_nullable(row, en_locale):
    row[3] = ""
    record = SampleRecordNonNullableDateTime.from_row(row, 1, number_locale=en_locale)
    assert(record.name == "Steve")
    assert(record.phone_number == 7039992222)
    assert(record.price_amount == 100)
    assert(record.quantity == 1234.56)
    assert(record.date_time == datetime.min)

def test_record_creation_short_row(en_locale):
    # the API drops trailing empty cells
    record = SampleRecord.from_row(["Steve"], 3, number_locale=en_locale)
    assert(record.name == "Steve")
    assert(record.phone_number is None)
    assert(record.quantity is None)

def test_record_creation_bad_cell_names_the_column(row, en_locale):
    row[4] = "lots"
    with pytest.raises(ValueError, match="Quantity"):
        SampleRecord.from_row(row, 9, number_locale=en_locale)

@pytest.mark.parametrize("serial", [3000000, -700000, "3000000"])
def test_record_creation_serial_out_of_range(row, serial, en_locale):
    row[3] = serial
    with pytest.raises(ValueError, match="row 4 column 'Date'"):
        SampleRecord.from_row(row, 4, number_locale=en_locale)

def test_record_creation_empty_cells_keep_defaults():
    @dataclass
    class Defaulted(BaseRecord):
        name: str = sheet_field("Name", 1, default="unknown")
        qty: float = sheet_field("Qty", 2, SheetFieldType.NUMBER, default=0.0)

    record = Defaulted.from_row(["", " "], 2)
    assert(record.name == "unknown")
    assert(record.qty == 0.0)
    assert(Defaulted.from_row(["Widget"], 3).name == "Widget")

def test_to_row(row, en_locale):
    record = SampleRecord.from_row(row, 1, number_locale=en_locale)
    assert(record.to_row() == ["Steve", 7039992222, 100.0, 33.625, 1234.56])

    record.phone_number = None
    assert(record.to_row()[1] == "")

def test_to_row_fills_gaps():
    record = SparseRecord(label="Widget", active=True, note="not in the sheet")
    assert(record.to_row() == ["Widget", "", True])

def test_cell_data(row, en_locale):
    record = SampleRecord.from_row(row, 1, number_locale=en_locale)
    assert(record.field_cell_data("name").to_base() == {"userEnteredValue": {"stringValue": "Steve"}})
    assert(record.field_cell_data("price_amount").to_base() ==
           {"userEnteredValue": {"numberValue": 100.0},
            "userEnteredFormat": {"numberFormat": {"type": "CURRENCY", "pattern": "$#,##0.00"}}})
    assert(record.field_cell_data("date_time").to_base() ==
           {"userEnteredValue": {"numberValue": 33.625},
            "userEnteredFormat": {"numberFormat": {"type": "DATE_TIME", "pattern": "M/d/yyyy H:mm:ss"}}})
    # no pattern declared, no format sent
    assert(record.field_cell_data("quantity").to_base() == {"userEnteredValue": {"numberValue": 1234.56}})

    record.quantity = None
    assert(record.field_cell_data("quantity").to_base() == {})
    with pytest.raises(KeyError):
        record.field_cell_data("row_id")

def test_to_cell_data_positions():
    cells = SparseRecord(label="Widget", active=False).to_cell_data()
    assert(len(cells) == 3)
    assert(cells[0].value == "Widget")
    assert(cells[1] == CellData())
    assert(cells[2].to_base() == {"userEnteredValue": {"boolValue": False}})

def test_update_requests(row, en_locale):
    record = SampleRecordOffset.from_row(row, 12, 3, en_locale)
    updates = record.update_requests("Items", ["quantity", "name"])
    assert([u.range.a1_notation for u in updates] == ["Items!G12", "Items!C12"])
    assert(updates[0].data.value == 1234.56)
    grid = updates[0].grid_range(42).to_base()
    assert(grid == {"sheetId": 42, "startRowIndex": 11, "endRowIndex": 12,
                    "startColumnIndex": 6, "endColumnIndex": 7})

    assert(len(record.update_requests("Items")) == 5)
    with pytest.raises(KeyError):
        record.update_requests("Items", ["nope"])
    with pytest.raises(ValueError):
        SampleRecord(name="new").update_requests("Items")
