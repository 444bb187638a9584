import re

from . import GoogleSheetsMaxColumns

# just trying to catch A-ZZZ for a valid column label
_A1COLREGEXSTR = r"^[A-Z]{1,3}$"
# a tab title that can go into a range without quoting
_PLAINSHEETREGEXSTR = r"^[A-Za-z_][A-Za-z0-9_]*$"

_a1_col_re = re.compile(_A1COLREGEXSTR)
_plain_sheet_re = re.compile(_PLAINSHEETREGEXSTR)

def column_to_int(column: str) -> int:
    """
    Convert a sheet column A-ZZZ indexing to its integer equivalent.
    Note that this is 1-based, so 'A' goes to 1.
    A return value of 0 means invalid column.
    """
    c = str(column).strip().upper()
    num = 0
    if _a1_col_re.match(c):
        for v in c:
            num = num * 26 + (ord(v) - 64)
    return num

def int_to_column(index: int) -> str:
    """
    Translate an int column index to its A1 equivalent, A-ZZZ
    Note this is 1-based and an empty string signals invalid index.
    """
    i = int(index)
    if i < 1 or i > GoogleSheetsMaxColumns:
        return ""
    col = ""
    while i:
        i, r = divmod(i - 1, 26)
        col = chr(r + 65) + col
    return col

def quote_sheet(title: str) -> str:
    """Tab titles with spaces or punctuation need single quotes in a range, with ' doubled."""
    t = str(title)
    if not t or _plain_sheet_re.match(t):
        return t
    return "'" + t.replace("'", "''") + "'"

def _column_index(value: int|str|None, what: str) -> int|None:
    if value is None:
        return None
    idx = value if isinstance(value, int) else column_to_int(value)
    if idx < 1:
        raise ValueError(f"{what} must be a 1 based index or A-ZZZ label, not: {value}")
    return idx

class SheetRange():
    """
    A rectangular block of cells on one tab, all indexes 1-based.

    <tab>!<start col><start row>:<end col><end row>

    end_column/end_row of None means 'unbounded', for example a start at A1
    with end column E and no end row is every row of columns A through E.
    Columns can be handed in as ints or letters but are stored as ints.
    A1 notation tops out at 'ZZZ', past that the range falls back to R1C1.
    """
    def __init__(self, tab_name: str = "",
                 start_column: int|str = 1, start_row: int = 1,
                 end_column: int|str|None = None, end_row: int|None = None) -> None:
        self.tab_name = str(tab_name or "")
        self.start_column = _column_index(start_column, "start_column")
        self.end_column = _column_index(end_column, "end_column")
        self.start_row = int(start_row)
        self.end_row = None if end_row is None else int(end_row)
        if self.start_row < 1:
            raise ValueError(f"start_row must be 1 or greater, not: {start_row}")
        if self.end_row is not None and self.end_row < self.start_row:
            raise ValueError(f"end_row {end_row} is before start_row {start_row}")
        if self.end_column is not None and self.end_column < self.start_column:
            raise ValueError(f"end_column {end_column} is before start_column {start_column}")

    def __str__(self) -> str:
        return self.notation

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __eq__(self, value) -> bool:
        if isinstance(value, SheetRange):
            return self.dimensions == value.dimensions and self.tab_name == value.tab_name
        return self.notation == str(value)

    @property
    def dimensions(self) -> tuple[int,int,int|None,int|None]:
        """Easy access to the coordinates as ints"""
        return (self.start_column, self.start_row, self.end_column, self.end_row)

    @property
    def start_column_letter(self) -> str:
        return int_to_column(self.start_column)

    @property
    def end_column_letter(self) -> str:
        return "" if self.end_column is None else int_to_column(self.end_column)

    @property
    def can_support_a1_notation(self) -> bool:
        """A1 can only address columns through 'ZZZ'"""
        return (self.start_column <= GoogleSheetsMaxColumns and
                (self.end_column is None or self.end_column <= GoogleSheetsMaxColumns))

    def _prefix(self) -> str:
        return quote_sheet(self.tab_name) + '!' if self.tab_name else ""

    @property
    def a1_notation(self) -> str:
        """Empty if the range is not expressible in A1"""
        if not self.can_support_a1_notation:
            return ""
        a1 = f"{self._prefix()}{self.start_column_letter}{self.start_row}"
        if self.end_column is not None or self.end_row is not None:
            # an unbounded end column runs to the last column of the end row
            ec = self.end_column_letter if self.end_column is not None else int_to_column(GoogleSheetsMaxColumns)
            a1 += ':' + ec
            if self.end_row is not None:
                a1 += str(self.end_row)
        return a1

    @property
    def r1c1_notation(self) -> str:
        r1c1 = f"{self._prefix()}R{self.start_row}C{self.start_column}"
        if self.end_column is not None or self.end_row is not None:
            r1c1 += ':'
            if self.end_row is not None:
                r1c1 += f"R{self.end_row}"
            if self.end_column is not None:
                r1c1 += f"C{self.end_column}"
        return r1c1

    @property
    def notation(self) -> str:
        """Whatever the API call should use, A1 when possible"""
        return self.a1_notation if self.can_support_a1_notation else self.r1c1_notation
