from dataclasses import dataclass, field
import logging

from .fields import get_sheet_fields, min_column_id

logger = logging.getLogger(__name__)

@dataclass
class SchemaValidationResult():
    """Outcome of checking a header row against a record's display names"""
    is_valid: bool = field(default=True)
    error_message: str = field(default="")
    mismatches: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

def validate_schema(header: list, record_type) -> SchemaValidationResult:
    """
    Compare the header cells with the expected display names in column order.
    header[0] is the record's first column.  Extra cells past the last
    expected column are not an error.
    """
    first = min_column_id(record_type)
    mismatches = []
    for name, sf in get_sheet_fields(record_type).items():
        idx = sf.column_id - first
        if idx >= len(header):
            mismatches.append(f"missing column {sf.display_name!r} for {name} (column {sf.column_id})")
            continue
        actual = "" if header[idx] is None else str(header[idx]).strip()
        if actual != sf.display_name:
            mismatches.append(f"expected {sf.display_name!r} for {name} (column {sf.column_id}) but found {actual!r}")
    result = SchemaValidationResult(not mismatches, "; ".join(mismatches), mismatches)
    if not result:
        logger.warning("%s schema mismatch: %s", getattr(record_type, '__name__', record_type), result.error_message)
    return result
