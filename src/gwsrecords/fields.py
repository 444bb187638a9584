"""
Declarative mapping of record attributes to sheet columns.

A record is a dataclass and each attribute that lives in a column is
declared with sheet_field(), which parks a SheetField in the dataclass
field metadata:

    @dataclass
    class Contact(BaseRecord):
        name: str|None = sheet_field("Name", 1)
        phone: int|None = sheet_field("Phone", "B", SheetFieldType.PHONE_NUMBER)
"""
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
import functools

from .sheets.a1 import column_to_int

SHEET_FIELD_KEY = "sheet_field"

class SheetFieldType(Enum):
    STRING = "STRING"
    NUMBER = "NUMBER"
    CURRENCY = "CURRENCY"
    DATE_TIME = "DATE_TIME"
    PHONE_NUMBER = "PHONE_NUMBER"
    BOOLEAN = "BOOLEAN"

@functools.total_ordering
@dataclass(frozen=True)
class SheetField():
    """
    Where an attribute lives in the sheet and how it is typed.
    column_id is 1-based, ordering is by column.
    number_format_pattern is a sheets number format pattern like '$#,##0.00'
    applied when the value is written back.
    """
    display_name: str
    column_id: int
    field_type: SheetFieldType = SheetFieldType.STRING
    number_format_pattern: str = ""

    def __post_init__(self) -> None:
        col = self.column_id
        if not isinstance(col, int):
            col = column_to_int(str(col))
            object.__setattr__(self, 'column_id', col)
        if col < 1:
            raise ValueError(f"column_id for {self.display_name!r} must be 1 or greater or a column label")
        if not isinstance(self.field_type, SheetFieldType):
            object.__setattr__(self, 'field_type', SheetFieldType(str(self.field_type).upper()))

    def __lt__(self, other: "SheetField") -> bool:
        if not isinstance(other, SheetField):
            return NotImplemented
        return self.column_id < other.column_id

def sheet_field(display_name: str, column_id: int|str,
                field_type: SheetFieldType|str = SheetFieldType.STRING,
                number_format_pattern: str = "",
                default=None):
    """
    Declare a record attribute as a sheet column.
    default is what the attribute holds when the cell is empty, leave it None
    for a nullable field or give e.g. datetime.min for a non-nullable one.
    """
    meta = SheetField(display_name, column_id, field_type, number_format_pattern)
    return field(default=default, metadata={SHEET_FIELD_KEY: meta})

def get_sheet_fields(record_type) -> dict[str, SheetField]:
    """
    All the sheet fields declared on a record type (or instance), attribute name
    to SheetField, in column order.
    """
    if not is_dataclass(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass record")
    found = [(f.name, f.metadata[SHEET_FIELD_KEY]) for f in fields(record_type) if SHEET_FIELD_KEY in f.metadata]
    found.sort(key=lambda item: item[1])
    seen = {}
    for name, sf in found:
        if sf.column_id in seen:
            raise ValueError(f"{name} and {seen[sf.column_id]} are both mapped to column {sf.column_id}")
        seen[sf.column_id] = name
    return dict(found)

def min_column_id(record_type) -> int:
    """First column the record occupies, 1 if it declares no sheet fields"""
    return min((sf.column_id for sf in get_sheet_fields(record_type).values()), default=1)

def max_column_id(record_type) -> int:
    return max((sf.column_id for sf in get_sheet_fields(record_type).values()), default=1)
