import logging

from googleapiclient.discovery import Resource

from .resources import Spreadsheet, GoogleSheetsEnum
from .requests import GoogleSheetsUpdateRequest, GoogleSheetsUpdateRequestResponse
from .a1 import SheetRange
from ..access import service

logger = logging.getLogger(__name__)

# thin wrappers over the discovery client, an explicit service= keyword wins
# otherwise the shared gws session is used

@service("sheets", "v4")
def get(spreadsheetid: str,
        ranges: list[SheetRange|str]|None = None,
        includeGridData: bool = False,
        service: Resource|None = None) -> Spreadsheet:
    """
    Wrapper for calling the get() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
    This is for retrieving spreadsheet properties like the tabs.
    """
    ret = Spreadsheet()
    if spreadsheetid:
        logger.debug("spreadsheets.get %s", spreadsheetid)
        response = service.spreadsheets().get(spreadsheetId=spreadsheetid,
                                              ranges=[str(r) for r in ranges or []],
                                              includeGridData=includeGridData).execute()
        if response:
            ret = Spreadsheet(**response)
    return ret

@service("sheets", "v4")
def batchUpdate(spreadsheetid: str,
                request: GoogleSheetsUpdateRequest|dict,
                service: Resource|None = None) -> GoogleSheetsUpdateRequestResponse:
    """
    Wrapper for calling the batchUpdate() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
    All the row/column/cell writes go through here as one call per batch,
    which keeps us clear of the per minute request quota.
    """
    body = request.to_base() if isinstance(request, GoogleSheetsUpdateRequest) else request
    logger.debug("spreadsheets.batchUpdate %s with %d requests", spreadsheetid, len(body.get('requests', [])))
    response = service.spreadsheets().batchUpdate(spreadsheetId=spreadsheetid, body=body).execute()
    if response:
        return GoogleSheetsUpdateRequestResponse(**response)
    return GoogleSheetsUpdateRequestResponse()

@service("sheets", "v4")
def getValues(spreadsheetId: str,
              range: SheetRange|str,
              valueRenderOption: str = "UNFORMATTED",
              dateTimeRenderOption: str = "SERIAL",
              service: Resource|None = None) -> list[list]:
    """
    Wrapper for calling the get() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
    Returns the rows as lists of cell values.  Trailing empty rows and cells
    are not returned by the API so rows can be ragged or the whole list empty.
    """
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    if not value_render:
        raise ValueError(f"Invalid valueRenderOption value: {valueRenderOption}")
    date_time_render = GoogleSheetsEnum.dateTimeRenderOption(dateTimeRenderOption)
    if not date_time_render:
        raise ValueError(f"Invalid dateTimeRenderOption value: {dateTimeRenderOption}")
    rng = range.notation if isinstance(range, SheetRange) else str(range)
    logger.debug("spreadsheets.values.get %s %s", spreadsheetId, rng)
    r = service.spreadsheets().values().get(spreadsheetId=spreadsheetId,
                                            range=rng,
                                            majorDimension="ROWS",
                                            valueRenderOption=value_render,
                                            dateTimeRenderOption=date_time_render).execute()
    return r.get('values', []) if r else []
