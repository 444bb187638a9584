from collections.abc import Iterable
from typing import ClassVar
import logging

from .coerce import NumberLocale
from .fields import min_column_id, max_column_id
from .records import BaseRecord
from .schema import SchemaValidationResult, validate_schema
from .sheets.a1 import SheetRange
from .sheets.helper import SheetHelper
from .sheets.requests import GoogleSheetsUpdateRequestResponse
from .sheets.resources import CellData

logger = logging.getLogger(__name__)

class BaseRepository():
    """
    Reads and writes one record type on the tab a SheetHelper points at.

    Either subclass and set record_type or pass it in.  The record's columns
    define the range, rows start at first_row and when has_header_row is set
    that first row is the header and the data starts right under it.
    """
    record_type: ClassVar[type[BaseRecord]|None] = None

    def __init__(self, sheet_helper: SheetHelper,
                 record_type: type[BaseRecord]|None = None,
                 has_header_row: bool = True,
                 first_row: int = 1,
                 number_locale: NumberLocale|None = None) -> None:
        self.sheet_helper = sheet_helper
        if record_type is not None:
            self.record_type = record_type
        if self.record_type is None:
            raise ValueError(f"{self.__class__.__name__} needs a record_type")
        if first_row < 1:
            raise ValueError("first_row must be 1 or greater")
        self.has_header_row = has_header_row
        self.first_row = first_row
        self.number_locale = number_locale

    def __repr__(self) -> str:
        return f"{self.__class__}:{self.record_type.__name__}@{self.sheet_helper}"

    @property
    def sheet_range(self) -> SheetRange:
        """Header (if any) and all data rows in the record's columns"""
        return SheetRange(self.sheet_helper.tab_name,
                          min_column_id(self.record_type), self.first_row,
                          max_column_id(self.record_type))

    @property
    def header_range(self) -> SheetRange:
        return SheetRange(self.sheet_helper.tab_name,
                          min_column_id(self.record_type), self.first_row,
                          max_column_id(self.record_type), self.first_row)

    @property
    def data_start_row(self) -> int:
        return self.first_row + 1 if self.has_header_row else self.first_row

    def validate_schema(self, header: list|None = None) -> SchemaValidationResult:
        """Check a header row, fetching it from the sheet if not given"""
        if header is None:
            rows = self.sheet_helper.get_rows(self.header_range)
            header = rows[0] if rows else []
        return validate_schema(header, self.record_type)

    def get_all_records(self, validate: bool = True) -> list[BaseRecord]:
        """
        Every non-empty row under the header as a record.
        With validate set a header that doesnt match the record raises ValueError.
        """
        rows = self.sheet_helper.get_rows(self.sheet_range)
        if self.has_header_row:
            header = rows[0] if rows else []
            rows = rows[1:]
            if validate:
                result = self.validate_schema(header)
                if not result:
                    raise ValueError(f"{self.sheet_helper.tab_name} does not match "
                                     f"{self.record_type.__name__}: {result.error_message}")
        first_col = min_column_id(self.record_type)
        records = []
        for offset, row in enumerate(rows):
            if all(c is None or (isinstance(c, str) and not c.strip()) for c in row):
                continue
            records.append(self.record_type.from_row(row, self.data_start_row + offset,
                                                     first_col, self.number_locale))
        logger.debug("read %d %s records", len(records), self.record_type.__name__)
        return records

    def add_record(self, record: BaseRecord) -> GoogleSheetsUpdateRequestResponse:
        return self.add_records([record])

    def add_records(self, records: Iterable[BaseRecord]) -> GoogleSheetsUpdateRequestResponse:
        """
        Append records after the last row with data, one API call.
        appendCells always starts at column A so anything before the record's
        first column is padded with empty cells.
        """
        padding = [CellData() for _ in range(min_column_id(self.record_type) - 1)]
        rows = [padding + r.to_cell_data() for r in records]
        return self.sheet_helper.append_rows(rows)

    def save_field(self, record: BaseRecord, name: str) -> GoogleSheetsUpdateRequestResponse:
        return self.save_fields(record, [name])

    def save_fields(self, record: BaseRecord, names: Iterable[str]) -> GoogleSheetsUpdateRequestResponse:
        """Write the named attributes of a record already in the sheet back to their cells"""
        return self.sheet_helper.batch_update(record.update_requests(self.sheet_helper.tab_name, list(names)))

    def save_record(self, record: BaseRecord) -> GoogleSheetsUpdateRequestResponse:
        return self.save_records([record])

    def save_records(self, records: Iterable[BaseRecord]) -> GoogleSheetsUpdateRequestResponse:
        """Write every field of every record, one API call"""
        updates = []
        for r in records:
            updates.extend(r.update_requests(self.sheet_helper.tab_name))
        return self.sheet_helper.batch_update(updates)

    def delete_record(self, record: BaseRecord) -> GoogleSheetsUpdateRequestResponse:
        """
        Delete the record's row.  Rows below shift up so any other records
        read before this are stale afterwards.
        """
        if record.row_id < 1:
            raise ValueError(f"{record.__class__.__name__} has no row in the sheet (row_id {record.row_id})")
        response = self.sheet_helper.delete_row(record.row_id)
        logger.debug("deleted row %d", record.row_id)
        record.row_id = 0
        return response
