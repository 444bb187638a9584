"""
Conversions between a single untyped cell value and a typed value.

Cells come back from the API as str, int, float or bool depending on the
render option so every parse accepts any of those.  Empty cells (None or
blank strings) parse to None and garbage raises ValueError.

Decimal and thousands separators follow the process locale (whatever
locale.setlocale() last set for LC_NUMERIC/LC_MONETARY) unless a
NumberLocale is handed in.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
import locale
import math
import re

# Sheets (like Lotus and Excel after the 1900 leap year bug) counts days from here
SERIAL_EPOCH = datetime(1899, 12, 30)

_COMMON_CURRENCY_SYMBOLS = "$€£¥₹"
_PHONE_EXTRA_CHARS_RE = re.compile(r"[\s().\-]")
_US_INTERNATIONAL_CODE = "+1"

@dataclass(frozen=True)
class NumberLocale():
    """Separators and currency symbol used to read numbers typed into cells"""
    decimal_point: str = "."
    thousands_sep: str = ","
    currency_symbol: str = "$"

    def __post_init__(self) -> None:
        if not self.decimal_point:
            object.__setattr__(self, 'decimal_point', ".")
        if not self.thousands_sep:
            # the C locale has no grouping at all but sheets users still type it
            object.__setattr__(self, 'thousands_sep', "," if self.decimal_point == "." else ".")
        if self.thousands_sep == self.decimal_point:
            raise ValueError(f"thousands separator and decimal point are both {self.decimal_point!r}")

    @classmethod
    def current(cls) -> "NumberLocale":
        conv = locale.localeconv()
        return cls(conv.get('decimal_point', ""),
                   conv.get('thousands_sep', ""),
                   conv.get('currency_symbol', ""))

def _is_empty(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def _normalize_number(text: str, number_locale: NumberLocale|None) -> str:
    """Turn a locale formatted number into something float()/Decimal() will take"""
    nl = number_locale or NumberLocale.current()
    t = "".join(text.split())
    t = t.replace(nl.thousands_sep, "").replace(nl.decimal_point, ".")
    return t

def parse_string(value) -> str|None:
    return None if value is None else str(value)

def parse_number(value, number_locale: NumberLocale|None = None) -> float|None:
    if _is_empty(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        result = float(value)
    else:
        t = _normalize_number(str(value), number_locale)
        try:
            result = float(t)
        except ValueError:
            raise ValueError(f"not a number: {value!r}") from None
    # NaN and inf are not valid JSON for numberValue
    if not math.isfinite(result):
        raise ValueError(f"not a number: {value!r}")
    return result

def parse_currency(value, number_locale: NumberLocale|None = None) -> Decimal|None:
    """
    Read an amount like '$ 1,234.50', '(12.00)' or '-€3'.
    Parentheses and a leading/trailing minus mean negative.
    """
    if _is_empty(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a currency amount: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if not amount.is_finite():
            raise ValueError(f"not a currency amount: {value!r}")
        return amount
    nl = number_locale or NumberLocale.current()
    t = "".join(str(value).split())
    for symbol in set(_COMMON_CURRENCY_SYMBOLS) | {nl.currency_symbol}:
        if symbol:
            t = t.replace(symbol, "")
    negative = False
    if t.startswith("(") and t.endswith(")"):
        negative = True
        t = t[1:-1]
        if "-" in t:
            raise ValueError(f"not a currency amount: {value!r}")
    elif t.startswith("-"):
        negative = True
        t = t[1:]
    elif t.endswith("-"):
        negative = True
        t = t[:-1]
    try:
        amount = Decimal(_normalize_number(t, nl))
    except InvalidOperation:
        raise ValueError(f"not a currency amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"not a currency amount: {value!r}")
    return -amount if negative else amount

def from_serial_number(serial: float) -> datetime:
    """Sheets serial number (days since 1899-12-30, fraction is time of day) to a datetime"""
    try:
        return SERIAL_EPOCH + timedelta(days=float(serial))
    except OverflowError:
        raise ValueError(f"serial number out of range: {serial!r}") from None

def to_serial_number(value: datetime|date) -> float:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return (value.replace(tzinfo=None) - SERIAL_EPOCH) / timedelta(days=1)

def parse_datetime(value, number_locale: NumberLocale|None = None) -> datetime|None:
    """
    Serial numbers are the norm (dateTimeRenderOption SERIAL_NUMBER), either as
    numbers or as locale formatted numeric strings.  ISO-8601 text is also taken.
    """
    if _is_empty(value):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise ValueError(f"not a date time: {value!r}")
    if isinstance(value, (int, float)):
        return from_serial_number(value)
    try:
        return from_serial_number(parse_number(value, number_locale))
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise ValueError(f"not a date time: {value!r}") from None

def remove_extra_characters_from_phone_number(value: str) -> str:
    """'(703)111-2222' -> '7031112222'"""
    return _PHONE_EXTRA_CHARS_RE.sub("", str(value))

def remove_us_international_phone_code(value: str) -> str:
    """'+1(703)111-2222' -> '7031112222'"""
    t = remove_extra_characters_from_phone_number(value)
    if t.startswith(_US_INTERNATIONAL_CODE):
        t = t[len(_US_INTERNATIONAL_CODE):]
    return t

def parse_phone_number(value) -> int|None:
    """US phone number as its 10 digits, international code dropped"""
    if _is_empty(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a phone number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not a phone number: {value!r}")
        return int(value)
    t = remove_us_international_phone_code(str(value))
    if not (t.isascii() and t.isdigit()):
        raise ValueError(f"not a phone number: {value!r}")
    return int(t)

_TRUE_STRINGS = {"true", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "no", "n", "0"}

def parse_boolean(value) -> bool|None:
    if _is_empty(value):
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    t = str(value).strip().lower()
    if t in _TRUE_STRINGS:
        return True
    if t in _FALSE_STRINGS:
        return False
    raise ValueError(f"not a boolean: {value!r}")
