"""
Typed records on top of Google Sheets rows.

A record is a dataclass whose attributes are declared as sheet columns with
sheet_field().  Rows read through the Sheets API are coerced into those
attributes (phone numbers, currency, serial date times, locale aware numbers)
and records are written back as batched cell updates.  A repository ties a
record type to a tab and checks the header row against the declared names.

Python dataclasses are also used for the API request/response structs and
most of the remaining logic is translating between those and the raw dicts
the Google client wants.
"""
from .fields import SheetField, SheetFieldType, sheet_field, get_sheet_fields
from .records import BaseRecord
from .schema import SchemaValidationResult, validate_schema
from .repository import BaseRepository
from .sheets.a1 import SheetRange
from .sheets.helper import SheetHelper
from .coerce import NumberLocale
