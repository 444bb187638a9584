from dataclasses import dataclass, field
from typing import Self

from .coerce import (NumberLocale, parse_boolean, parse_currency, parse_datetime,
                     parse_number, parse_phone_number, parse_string, to_serial_number)
from .fields import SheetField, SheetFieldType, get_sheet_fields, min_column_id, max_column_id
from .sheets.a1 import SheetRange
from .sheets.resources import CellData, CellFormat, ExtendedValue, NumberFormat
from .sheets.requests import BatchUpdateRequestObject

_PARSERS = {
    SheetFieldType.STRING: lambda v, nl: parse_string(v),
    SheetFieldType.NUMBER: parse_number,
    SheetFieldType.CURRENCY: parse_currency,
    SheetFieldType.DATE_TIME: parse_datetime,
    SheetFieldType.PHONE_NUMBER: lambda v, nl: parse_phone_number(v),
    SheetFieldType.BOOLEAN: lambda v, nl: parse_boolean(v),
}

# sheets number format type applied for a field type when a pattern is declared
_FORMAT_TYPES = {
    SheetFieldType.NUMBER: "NUMBER",
    SheetFieldType.CURRENCY: "CURRENCY",
    SheetFieldType.DATE_TIME: "DATE_TIME",
    SheetFieldType.PHONE_NUMBER: "NUMBER",
}

def _raw_value(sf: SheetField, value) -> str|float|int|bool|None:
    """Typed attribute value to what goes on the wire"""
    if value is None:
        return None
    ftype = sf.field_type
    if ftype == SheetFieldType.STRING:
        return str(value)
    elif ftype in (SheetFieldType.NUMBER, SheetFieldType.CURRENCY):
        return float(value)
    elif ftype == SheetFieldType.DATE_TIME:
        return to_serial_number(value)
    elif ftype == SheetFieldType.PHONE_NUMBER:
        return int(value)
    elif ftype == SheetFieldType.BOOLEAN:
        return bool(value)
    raise ValueError(f"unhandled field type {ftype}")

def cell_data_for(sf: SheetField, value) -> CellData:
    """
    CellData for one typed value.  None is an empty CellData which clears
    the cell when written with fields '*'.
    """
    raw = _raw_value(sf, value)
    if raw is None:
        return CellData()
    if isinstance(raw, bool):
        ev = ExtendedValue(boolValue=raw)
    elif isinstance(raw, str):
        ev = ExtendedValue(stringValue=raw)
    else:
        ev = ExtendedValue(numberValue=raw)
    fmt = None
    ftype = _FORMAT_TYPES.get(sf.field_type)
    if ftype and sf.number_format_pattern:
        fmt = CellFormat(NumberFormat(ftype, sf.number_format_pattern))
    return CellData(ev, fmt)

@dataclass
class BaseRecord():
    """
    Base for typed records mapped onto sheet rows.
    Subclass as a dataclass and declare the column attributes with sheet_field().
    row_id is the 1-based sheet row the record came from, 0 if it isnt in the sheet yet.
    """
    row_id: int = field(default=0, kw_only=True)

    @classmethod
    def sheet_fields(cls) -> dict[str, SheetField]:
        return get_sheet_fields(cls)

    @classmethod
    def from_row(cls, row: list, row_id: int,
                 min_column_id: int = 1,
                 number_locale: NumberLocale|None = None) -> Self:
        """
        Build a record from a raw row of cell values.
        min_column_id is the sheet column row[0] came from, so a record whose
        columns start at C and was read with a C:... range passes 3.
        Empty or missing cells leave the attribute at its declared default.
        """
        nl = number_locale or NumberLocale.current()
        values = {}
        for name, sf in cls.sheet_fields().items():
            idx = sf.column_id - min_column_id
            if idx < 0 or idx >= len(row):
                continue
            cell = row[idx]
            if cell is None or (isinstance(cell, str) and not cell.strip()):
                continue
            try:
                values[name] = _PARSERS[sf.field_type](cell, nl)
            except ValueError as e:
                raise ValueError(f"row {row_id} column {sf.display_name!r}: {e}") from e
        return cls(row_id=row_id, **values)

    def _positioned(self) -> list[tuple[SheetField|None, object]]:
        """(field, value) for every column from the first to the last, gaps as (None, None)"""
        sfields = {sf.column_id: (sf, getattr(self, name)) for name, sf in self.sheet_fields().items()}
        first, last = min_column_id(self), max_column_id(self)
        return [sfields.get(c, (None, None)) for c in range(first, last + 1)]

    def to_row(self) -> list:
        """
        The record as raw values, first column to last, ready for a values write.
        Date times are serial numbers and empty values/gaps are ''.
        """
        row = []
        for sf, value in self._positioned():
            raw = None if sf is None else _raw_value(sf, value)
            row.append("" if raw is None else raw)
        return row

    def field_cell_data(self, name: str) -> CellData:
        sfields = self.sheet_fields()
        if name not in sfields:
            raise KeyError(f"{name} is not a sheet field of {self.__class__.__name__}")
        return cell_data_for(sfields[name], getattr(self, name))

    def to_cell_data(self) -> list[CellData]:
        return [CellData() if sf is None else cell_data_for(sf, value) for sf, value in self._positioned()]

    def update_requests(self, tab_name: str = "",
                        field_names: list[str]|None = None) -> list[BatchUpdateRequestObject]:
        """
        Single cell updates for the given fields, all of them if field_names is None,
        addressed at this record's row.
        """
        if self.row_id < 1:
            raise ValueError(f"{self.__class__.__name__} has no row in the sheet (row_id {self.row_id})")
        sfields = self.sheet_fields()
        names = list(sfields) if field_names is None else list(field_names)
        updates = []
        for name in names:
            if name not in sfields:
                raise KeyError(f"{name} is not a sheet field of {self.__class__.__name__}")
            sf = sfields[name]
            updates.append(BatchUpdateRequestObject(SheetRange(tab_name, sf.column_id, self.row_id),
                                                    cell_data_for(sf, getattr(self, name))))
        return updates
