"""
Class implementations of sheets request resources.
As these are just logical groupings of data fields we use dataclasses
to implement.  The nested aspect does cause some headaches as there
is a handy dataclass.asdict() method to get a dict translation of the
class fields, which is exactly what that request client needs, but
there's no inverse support, as in initializing a dataclass from a dict.
So dataclasses with dataclasses as fields convert in fixup().
Only the resources the record layer needs are implemented, and members
default to None so unset members are dropped from the request body.
"""
from dataclasses import dataclass, field
from typing import ClassVar, List

from ..resources import GoogleWorkSpaceResourceBase

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_VALUE_RENDER_OPTIONS = {
        "FORMATTED": "FORMATTED_VALUE",
        "FORMATTED_VALUE": "FORMATTED_VALUE",
        "UNFORMATTED": "UNFORMATTED_VALUE",
        "UNFORMATTED_VALUE": "UNFORMATTED_VALUE",
        "FORMULA": "FORMULA"
    }
    _VALID_DATE_TIME_RENDER_OPTIONS = {
        "SERIAL": "SERIAL_NUMBER",
        "SERIAL_NUMBER": "SERIAL_NUMBER",
        "FORMATTED": "FORMATTED_STRING",
        "FORMATTED_STRING": "FORMATTED_STRING"
    }
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }

    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._VALID_VALUE_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dateTimeRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/DateTimeRenderOption"""
        return cls._VALID_DATE_TIME_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._VALID_DIMENSION_OPTIONS.get(str(dim).upper(), "")

@dataclass
class NumberFormat(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#numberformat
    """
    type: str = field(default="")
    pattern: str|None = field(default=None)

    valid_values: ClassVar[List[str]] = ['TEXT', 'NUMBER', 'PERCENT',
                                         'CURRENCY', 'DATE', 'TIME',
                                         'DATE_TIME', 'SCIENTIFIC']

    def __post_init__(self):
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.type) and self.type in self.valid_values

    def fixup(self) -> None:
        if self.type and self.type not in self.valid_values:
            t = str(self.type).upper()
            if t not in self.valid_values:
                raise ValueError('Invalid number format type: ' + t)
            self.type = t
        if not self.pattern:
            self.pattern = None

@dataclass
class CellFormat(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#cellformat
    Only the number format is used here.
    """
    numberFormat: NumberFormat|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.numberFormat)

    def fixup(self) -> None:
        if self.numberFormat is not None and not isinstance(self.numberFormat, NumberFormat):
            self.numberFormat = NumberFormat(**dict(self.numberFormat))

@dataclass
class ExtendedValue(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#ExtendedValue
    This is a oneof on the wire, only one member should be set.
    """
    numberValue: float|None = field(default=None)
    stringValue: str|None = field(default=None)
    boolValue: bool|None = field(default=None)
    formulaValue: str|None = field(default=None)

    def __bool__(self) -> bool:
        return any(v is not None for v in (self.numberValue, self.stringValue,
                                           self.boolValue, self.formulaValue))

    @property
    def value(self) -> float|str|bool|None:
        for v in (self.numberValue, self.stringValue, self.boolValue, self.formulaValue):
            if v is not None:
                return v
        return None

@dataclass
class CellData(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#celldata
    An empty CellData written with fields '*' clears the cell.
    """
    userEnteredValue: ExtendedValue|dict|None = field(default=None)
    userEnteredFormat: CellFormat|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.userEnteredValue)

    def fixup(self) -> None:
        if self.userEnteredValue is not None and not isinstance(self.userEnteredValue, ExtendedValue):
            self.userEnteredValue = ExtendedValue(**dict(self.userEnteredValue))
        if self.userEnteredFormat is not None and not isinstance(self.userEnteredFormat, CellFormat):
            self.userEnteredFormat = CellFormat(**dict(self.userEnteredFormat))

    @property
    def value(self) -> float|str|bool|None:
        return self.userEnteredValue.value if self.userEnteredValue else None

@dataclass
class RowData(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#rowdata"""
    values: List[CellData|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.values = [c if isinstance(c, CellData) else CellData(**dict(c)) for c in self.values]

@dataclass
class GridRange(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#gridrange
    Indexes here are 0-based and the end is exclusive, unlike A1.
    """
    sheetId: int = field(default=-1)
    startRowIndex: int|None = field(default=None)
    endRowIndex: int|None = field(default=None)
    startColumnIndex: int|None = field(default=None)
    endColumnIndex: int|None = field(default=None)

    def __bool__(self) -> bool:
        return self.sheetId >= 0

@dataclass
class DimensionRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/DimensionRange"""
    sheetId: int = field(default=-1)
    dimension: str = field(default="")
    startIndex: int|None = field(default=None)
    endIndex: int|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.dimension:
            d = str(self.dimension)
            self.dimension = GoogleSheetsEnum.dimension(d)
            if not self.dimension:
                raise ValueError(f"Invalid dimension value: {d}")

    def __bool__(self) -> bool:
        return self.sheetId >= 0 and bool(self.dimension)

@dataclass
class SheetProperties(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties
    Anything beyond identification is left as the raw dict.
    """
    sheetId: int = field(default=-1)
    title: str = field(default="")
    index: int = field(default=-1)
    sheetType: str = field(default="")
    gridProperties: dict = field(default_factory=dict)
    hidden: bool = field(default=False)

    def __bool__(self) -> bool:
        return self.sheetId >= 0 and bool(self.title)

    def __str__(self) -> str:
        if self:
            return f"{self.title}({self.sheetId}[{self.index}])"
        return "<invalid sheet>"

@dataclass
class Sheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Representation of a sheet (tab) within a spreadsheet.
    """
    properties: SheetProperties|dict = field(default_factory=dict)

    def __init__(self, properties: SheetProperties|dict|None = None, **kwargs) -> None:
        # a full spreadsheet get() carries lots of members we have no use for
        self.properties = properties if properties is not None else {}
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SheetProperties):
            known = {k: v for k, v in dict(self.properties).items() if k in SheetProperties.__dataclass_fields__}
            self.properties = SheetProperties(**known)

    def __bool__(self) -> bool:
        return bool(self.properties)

    def __str__(self) -> str:
        return str(self.properties)

@dataclass
class Spreadsheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    The representation of a spreadsheet, trimmed to what is used for tab lookup.
    """
    spreadsheetId: str = field(default="")
    properties: dict = field(default_factory=dict)
    sheets: List[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __init__(self, spreadsheetId: str = "", properties: dict|None = None,
                 sheets: List[Sheet|dict]|None = None, spreadsheetUrl: str = "", **kwargs) -> None:
        self.spreadsheetId = spreadsheetId
        self.properties = dict(properties or {})
        self.sheets = list(sheets or [])
        self.spreadsheetUrl = spreadsheetUrl
        self.fixup()

    def fixup(self) -> None:
        self.sheets = [s if isinstance(s, Sheet) else Sheet(**dict(s)) for s in self.sheets]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def __str__(self) -> str:
        if not self.spreadsheetId:
            return 'unconnected'
        title = self.properties.get('title', self.spreadsheetId)
        return f"{title}[{','.join(str(s) for s in self.sheets)}]"

    @property
    def titles(self) -> list[str]:
        return [s.properties.title for s in self.sheets]
