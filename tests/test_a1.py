import pytest

from gwsrecords.sheets.a1 import SheetRange, column_to_int, int_to_column, quote_sheet

def test_column_letters():
    assert(column_to_int('A') == 1)
    assert(column_to_int('c') == 3)
    assert(column_to_int('Z') == 26)
    assert(column_to_int('AA') == 27)
    assert(column_to_int('BX') == 76)
    assert(column_to_int('ZZZ') == 18278)
    assert(column_to_int('') == 0)
    assert(column_to_int('A1') == 0)
    assert(column_to_int('AAAA') == 0)

    assert(int_to_column(1) == 'A')
    assert(int_to_column(26) == 'Z')
    assert(int_to_column(27) == 'AA')
    assert(int_to_column(702) == 'ZZ')
    assert(int_to_column(703) == 'AAA')
    assert(int_to_column(18278) == 'ZZZ')
    assert(int_to_column(0) == '')
    assert(int_to_column(18279) == '')

def test_letters_round_trip_through_every_column():
    for i in range(1, 18279):
        assert(column_to_int(int_to_column(i)) == i)

def test_bounded():
    r = SheetRange("Items", 'C', 4, 'BX', 20)
    assert(r.dimensions == (3, 4, 76, 20))
    assert(r.start_column_letter == 'C')
    assert(r.end_column_letter == 'BX')
    assert(r.a1_notation == "Items!C4:BX20")
    assert(r.r1c1_notation == "Items!R4C3:R20C76")
    assert(r.can_support_a1_notation)
    assert(str(r) == "Items!C4:BX20")

def test_unbounded_rows():
    r = SheetRange("Items", 1, 1, 5)
    assert(r.a1_notation == "Items!A1:E")
    assert(r.r1c1_notation == "Items!R1C1:C5")
    assert(r.end_row is None)

def test_single_cell_and_no_tab():
    r = SheetRange("", 2, 7)
    assert(r.a1_notation == "B7")
    assert(r.r1c1_notation == "R7C2")
    assert(r == SheetRange(start_column='B', start_row=7))
    assert(r == "B7")

def test_quoted_tab_names():
    assert(quote_sheet("Items") == "Items")
    assert(quote_sheet("Price List") == "'Price List'")
    assert(quote_sheet("Bob's") == "'Bob''s'")
    assert(SheetRange("Price List", 1, 1, 2, 2).a1_notation == "'Price List'!A1:B2")

def test_past_zzz_falls_back_to_r1c1():
    r = SheetRange("Wide", 18000, 1, 18300, 3)
    assert(not r.can_support_a1_notation)
    assert(r.a1_notation == "")
    assert(r.notation == "Wide!R1C18000:R3C18300")

def test_invalid():
    with pytest.raises(ValueError):
        SheetRange("Items", 0, 1)
    with pytest.raises(ValueError):
        SheetRange("Items", 1, 0)
    with pytest.raises(ValueError):
        SheetRange("Items", 'A1', 1)
    with pytest.raises(ValueError):
        SheetRange("Items", 'F', 2, 'A', 3)
    with pytest.raises(ValueError):
        SheetRange("Items", 'A', 5, 'B', 2)
