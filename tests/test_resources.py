from gwsrecords.resources import _prune
from gwsrecords.sheets.resources import CellData, ExtendedValue, RowData

def test_prune_drops_unset_members():
    assert(_prune({"a": None, "b": {"c": None, "d": 1}}) == {"b": {"d": 1}})

def test_prune_keeps_list_positions():
    assert(_prune({"values": [1, None, {"c": None}]}) == {"values": [1, None, {}]})

def test_row_data_keeps_empty_cells():
    row = RowData([CellData(ExtendedValue(stringValue="a")), CellData(), CellData(ExtendedValue(numberValue=2.0))])
    assert(row.to_base() == {"values": [{"userEnteredValue": {"stringValue": "a"}}, {},
                                        {"userEnteredValue": {"numberValue": 2.0}}]})
