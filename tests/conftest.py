from unittest.mock import MagicMock

import pytest

from gwsrecords import NumberLocale, SheetHelper

@pytest.fixture
def en_locale():
    return NumberLocale(".", ",", "$")

@pytest.fixture
def de_locale():
    return NumberLocale(",", ".", "€")

SPREADSHEET = {
    "spreadsheetId": "abc123",
    "properties": {"title": "Inventory"},
    "sheets": [
        {"properties": {"sheetId": 0, "title": "Summary", "index": 0, "sheetType": "GRID"}},
        {"properties": {"sheetId": 42, "title": "Items", "index": 1, "sheetType": "GRID"}},
    ],
}

@pytest.fixture
def service():
    """Stand in for the discovery client, execute() results set per test"""
    svc = MagicMock()
    svc.spreadsheets().get().execute.return_value = SPREADSHEET
    svc.spreadsheets().batchUpdate().execute.return_value = {"spreadsheetId": "abc123", "replies": [{}]}
    svc.spreadsheets().values().get().execute.return_value = {}
    svc.reset_mock()
    return svc

@pytest.fixture
def helper(service):
    h = SheetHelper("abc123", "robot@example.iam.gserviceaccount.com", "Items", service=service)
    h.update_tab_name("Items")
    return h

@pytest.fixture
def batch_body(service):
    """The body of the last batchUpdate call"""
    return lambda: service.spreadsheets().batchUpdate.call_args.kwargs["body"]
