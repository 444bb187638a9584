from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from gwsrecords import BaseRecord, SheetFieldType, sheet_field

@dataclass
class SampleRecord(BaseRecord):
    name: str|None = sheet_field("Name", 1)
    phone_number: int|None = sheet_field("Number", 2, SheetFieldType.PHONE_NUMBER)
    price_amount: Decimal|None = sheet_field("Price Amount", 3, SheetFieldType.CURRENCY, "$#,##0.00")
    date_time: datetime|None = sheet_field("Date", 4, SheetFieldType.DATE_TIME, "M/d/yyyy H:mm:ss")
    quantity: float|None = sheet_field("Quantity", 5, SheetFieldType.NUMBER)

@dataclass
class SampleRecordOffset(BaseRecord):
    """Same columns shifted to start at C"""
    name: str|None = sheet_field("Name", "C")
    phone_number: int|None = sheet_field("Number", "D", SheetFieldType.PHONE_NUMBER)
    price_amount: Decimal|None = sheet_field("Price Amount", "E", SheetFieldType.CURRENCY)
    date_time: datetime|None = sheet_field("Date", "F", SheetFieldType.DATE_TIME)
    quantity: float|None = sheet_field("Quantity", "G", SheetFieldType.NUMBER)

@dataclass
class SampleRecordNonNullableDateTime(BaseRecord):
    name: str|None = sheet_field("Name", 1)
    phone_number: int|None = sheet_field("Number", 2, SheetFieldType.PHONE_NUMBER)
    price_amount: Decimal|None = sheet_field("Price Amount", 3, SheetFieldType.CURRENCY)
    date_time: datetime = sheet_field("Date", 4, SheetFieldType.DATE_TIME, default=datetime.min)
    quantity: float|None = sheet_field("Quantity", 5, SheetFieldType.NUMBER)

@dataclass
class SparseRecord(BaseRecord):
    """Columns B and D with a gap, plus a boolean and a non sheet attribute"""
    label: str|None = sheet_field("Label", 2)
    active: bool|None = sheet_field("Active", 4, SheetFieldType.BOOLEAN)
    note: str = ""
