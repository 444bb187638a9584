import logging
from pathlib import Path

from googleapiclient.discovery import Resource

from .a1 import SheetRange, column_to_int
from .resources import CellData, RowData, Spreadsheet
from .requests import *
from . import ops
from ..access import service_account_credentials, build_service

logger = logging.getLogger(__name__)

class SheetHelper():
    """
    Session wrapper for one tab of one spreadsheet.
    Holds the service, the tab name and its sheet ID and hands the raw
    row/column calls straight through to the Sheets API.  Rows and columns
    are 1-based here like they are in the sheets UI.

    Either call init() with a service account key or pass in an already built
    service, if neither the shared gws session gets used.
    """
    def __init__(self, spreadsheet_id: str,
                 service_account_email: str = "",
                 tab_name: str = "",
                 service: Resource|None = None) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.service_account_email = service_account_email
        self.scopes = ["sheets"]
        self.service = service
        self._tab_name = tab_name
        self.sheet_id: int|None = None

    def __str__(self) -> str:
        return f"{self.spreadsheet_id}:{self._tab_name}({self.sheet_id})"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def tab_name(self) -> str:
        return self._tab_name

    def init(self, json_credentials: str|dict|Path) -> None:
        """
        Authenticate as the service account and resolve the tab.
        json_credentials is the service account key, either the text, parsed dict or a path.
        """
        creds = service_account_credentials(json_credentials,
                                            self.service_account_email or None,
                                            self.scopes)
        self.service = build_service("sheets", "v4", creds)
        self.update_tab_name(self._tab_name)

    def _spreadsheet(self) -> Spreadsheet:
        ss = ops.get(self.spreadsheet_id, service=self.service)
        if not ss:
            raise RuntimeError(f"Spreadsheet {self.spreadsheet_id} could not be retrieved")
        return ss

    def update_tab_name(self, new_tab_name: str) -> None:
        """
        Set the tab to the specified new_tab_name value, looking up its sheet ID.
        Title match is case insensitive and an empty name means the first tab.
        """
        ss = self._spreadsheet()
        if not ss.sheets:
            raise KeyError(f"{self.spreadsheet_id} has no sheets")
        if new_tab_name:
            wanted = new_tab_name.casefold()
            matches = [s for s in ss.sheets if s.properties.title.casefold() == wanted]
            if not matches:
                raise KeyError(f"{new_tab_name} not in sheets[]")
            sheet = matches[0]
        else:
            sheet = ss.sheets[0]
        self.sheet_id = sheet.properties.sheetId
        self._tab_name = new_tab_name
        logger.debug("tab %r resolved to sheet id %s", new_tab_name, self.sheet_id)

    def get_all_tab_names(self) -> list[str]:
        """Returns a list of all tab names in the spreadsheet"""
        return self._spreadsheet().titles

    def get_rows(self, range: SheetRange|str) -> list[list]:
        """Rows of raw values, numbers as numbers and date times as serial numbers"""
        return ops.getValues(self.spreadsheet_id, range, "UNFORMATTED", "SERIAL", service=self.service)

    def get_rows_formatted(self, range: SheetRange|str) -> list[list]:
        """Rows as displayed in the sheet, everything a string"""
        return ops.getValues(self.spreadsheet_id, range, "FORMATTED", "FORMATTED", service=self.service)

    def _execute(self, requests: list) -> GoogleSheetsUpdateRequestResponse:
        """Send a list of requests as one batchUpdate, empty means nothing to do"""
        if not requests:
            return GoogleSheetsUpdateRequestResponse(self.spreadsheet_id)
        return ops.batchUpdate(self.spreadsheet_id, GoogleSheetsUpdateRequest(requests), service=self.service)

    def delete_row(self, row: int) -> GoogleSheetsUpdateRequestResponse:
        """Deletes a specified row"""
        if row < 1:
            raise ValueError("row index value must be 1 or greater")
        return self._execute([DeleteDimensionRequest(self.sheet_id, "ROWS", row - 1, row)])

    def insert_blank_column(self, column: int|str) -> GoogleSheetsUpdateRequestResponse:
        """
        Inserts a blank new column before the given column, either the 1-based
        index or its letters (i.e. 'B').  The new column takes the formatting of
        the one before it.
        """
        col = column if isinstance(column, int) else column_to_int(column)
        if col < 1:
            raise ValueError("column index value must be 1 or greater")
        return self._execute([InsertDimensionRequest(self.sheet_id, "COLUMNS", col - 1, col, col > 1)])

    def insert_blank_row(self, row: int) -> GoogleSheetsUpdateRequestResponse:
        """Inserts a new blank row"""
        if row < 1:
            raise ValueError("row index value must be 1 or greater")
        return self._execute([InsertDimensionRequest(self.sheet_id, "ROWS", row - 1, row, row > 1)])

    def batch_update(self, updates: list[BatchUpdateRequestObject]) -> GoogleSheetsUpdateRequestResponse:
        """
        Runs a collection of single cell updates as a batch operation in a single call.
        This is useful to avoid throttling limits with the Google Sheets API
        """
        return self._execute([u.to_request(self.sheet_id) for u in updates])

    def append_rows(self, rows: list[list[CellData]]) -> GoogleSheetsUpdateRequestResponse:
        """Append rows of cells after the last row with data on the tab"""
        if not rows:
            return self._execute([])
        return self._execute([AppendCellsRequest(self.sheet_id, [RowData(list(r)) for r in rows])])
