from dataclasses import dataclass, field
from typing import List
import re

from ..resources import GoogleWorkSpaceResourceBase
from .resources import *
from .a1 import SheetRange

class GoogleSheetsUpdateRequestBase(GoogleWorkSpaceResourceBase):
    """
    Base class for sheet batchUpdate requests to get the actual
    request dict into the right format.
    """
    def to_request(self) -> dict[str,dict]:
        name = self.__class__.__name__
        # need to strip off the trailing 'Request' class name and
        # set the first letter to lower case.
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", name)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        key = m.group(1).lower() + m.group(2)
        return {key: self.to_base()}

# the request name on the wire is pulled out via self.__class__.__name__

@dataclass
class DeleteDimensionRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#deletedimensionrequest
    The 'range' indirection makes this a bit complicated, we want the DimensionRange
    initializer but park it in the range object.
    """
    range: DimensionRange = field(init=False)

    def __init__(self, sheetId: int, dimension: str,
                 startIndex: int|None = None,
                 endIndex: int|None = None) -> None:
        self.range = DimensionRange(sheetId, dimension, startIndex, endIndex)

@dataclass
class InsertDimensionRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#insertdimensionrequest
    inheritFromBefore True takes formatting from the row/col before the insert.
    """
    range: DimensionRange = field(init=False)
    inheritFromBefore: bool = field(default=True)

    def __init__(self, sheetId: int, dimension: str,
                 startIndex: int, endIndex: int,
                 inheritFromBefore: bool = True) -> None:
        self.range = DimensionRange(sheetId, dimension, startIndex, endIndex)
        self.inheritFromBefore = inheritFromBefore

@dataclass
class RepeatCellRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#repeatcellrequest
    Used as a single cell write, range covers exactly one cell.
    fields '*' replaces everything in the cell with what is in cell.
    """
    range: GridRange
    cell: CellData
    fields: str = field(default="*")

@dataclass
class AppendCellsRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#appendcellsrequest
    Rows land after the last row with data in the sheet.
    """
    sheetId: int
    rows: List[RowData]
    fields: str = field(default="*")

@dataclass
class BatchUpdateRequestObject():
    """
    One pending single cell write, addressed by a 1-based SheetRange whose
    start cell is the target.
    """
    range: SheetRange
    data: CellData

    def grid_range(self, sheet_id: int) -> GridRange:
        """Translate the 1-based start cell into the 0-based, end exclusive grid range"""
        return GridRange(sheetId=sheet_id,
                         startRowIndex=self.range.start_row - 1,
                         endRowIndex=self.range.start_row,
                         startColumnIndex=self.range.start_column - 1,
                         endColumnIndex=self.range.start_column)

    def to_request(self, sheet_id: int) -> RepeatCellRequest:
        return RepeatCellRequest(self.grid_range(sheet_id), self.data)

@dataclass
class GoogleSheetsUpdateRequest(GoogleSheetsUpdateRequestBase):
    """
    Generate a GSheet Batch Update request body.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    requests: List[GoogleSheetsUpdateRequestBase|dict]
    includeSpreadsheetInResponse: bool = field(default=False)

    def to_base(self) -> dict:
        return {
            'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else r for r in self.requests],
            'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse
        }

    def __len__(self) -> int:
        return len(self.requests)

@dataclass
class GoogleSheetsUpdateRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body
    """
    spreadsheetId: str = field(default="")
    replies: List[dict] = field(default_factory=list)
    updatedSpreadsheet: Spreadsheet|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        if not isinstance(self.updatedSpreadsheet, Spreadsheet):
            self.updatedSpreadsheet = Spreadsheet(**dict(self.updatedSpreadsheet))
