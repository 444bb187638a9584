from gwsrecords import validate_schema

from sample_records import SampleRecord, SampleRecordOffset, SparseRecord

def test_schema_matches():
    header = ["Name", "Number", "Price Amount", "Date", "Quantity"]
    result = validate_schema(header, SampleRecord)
    assert(result.is_valid)
    assert(result)
    assert(result.error_message == "")
    assert(result.mismatches == [])

def test_schema_ignores_padding_and_trailing_columns():
    header = [" Name ", "Number", "Price Amount", "Date", "Quantity", "Notes"]
    assert(validate_schema(header, SampleRecord))

def test_schema_does_not_match():
    header = ["Name", "Price Amount"]
    result = validate_schema(header, SampleRecord)
    assert(not result.is_valid)
    assert(not result)
    # Number in the wrong place, then Date and Quantity missing
    assert(len(result.mismatches) == 4)
    assert("'Number'" in result.mismatches[0])
    assert("missing column 'Quantity'" in result.error_message)

def test_schema_offset_record_starts_at_first_column():
    header = ["Name", "Number", "Price Amount", "Date", "Quantity"]
    assert(validate_schema(header, SampleRecordOffset))

def test_schema_gap_column_is_not_checked():
    assert(validate_schema(["Label", "anything", "Active"], SparseRecord))
    result = validate_schema(["Label", "Active"], SparseRecord)
    assert(result.mismatches == ["missing column 'Active' for active (column 4)"])

def test_schema_empty_header():
    result = validate_schema([], SampleRecord)
    assert(len(result.mismatches) == 5)
