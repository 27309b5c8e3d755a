"""Value types stored in tree nodes and their text encoding."""

from __future__ import annotations

import datetime as dt
import enum
import re
from typing import Any

from .errors import ErrorCode, TreeDBError

UINT64_MAX = 2**64 - 1

_UNSIGNED_PREFIX = re.compile(r"\s*\+?(\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)


class DataType(enum.Enum):
    """The data types a node value can have, named as in the file format."""

    NULL = "null"
    UNSIGNED_INT_64BIT = "unsigned-int-64bits"
    IEEE754_BINARY64 = "ieee-754-binary64"
    UNICODE_STRING = "unicode-string"
    DATE = "date"
    TIME_OF_DAY = "time-of-day"


def data_type_of(value: Any) -> DataType:
    """Return the data type of a Python value, raising for unsupported ones."""
    if value is None:
        return DataType.NULL
    if isinstance(value, bool):
        raise TypeError("boolean values are not supported")
    if isinstance(value, int):
        if not 0 <= value <= UINT64_MAX:
            raise ValueError(f"integer out of unsigned 64-bit range: {value}")
        return DataType.UNSIGNED_INT_64BIT
    if isinstance(value, float):
        return DataType.IEEE754_BINARY64
    if isinstance(value, str):
        return DataType.UNICODE_STRING
    if isinstance(value, dt.datetime):
        raise TypeError("datetime values are not supported; use a date or a time")
    if isinstance(value, dt.date):
        return DataType.DATE
    if isinstance(value, dt.time):
        return DataType.TIME_OF_DAY
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def encode_value(value: Any) -> tuple[DataType, str | None]:
    """Return the data type of a value and its text form (None for null)."""
    data_type = data_type_of(value)
    if data_type is DataType.NULL:
        return data_type, None
    if data_type is DataType.UNSIGNED_INT_64BIT:
        return data_type, str(value)
    if data_type is DataType.IEEE754_BINARY64:
        return data_type, f"{value:.8f}"
    if data_type is DataType.UNICODE_STRING:
        return data_type, value
    return data_type, value.isoformat()


def decode_value(type_name: str, text: str | None) -> Any:
    """Decode the text of a node given the name of its data type."""
    try:
        data_type = DataType(type_name)
    except ValueError:
        raise TreeDBError(
            "Unknown data type encountered while loading child node", ErrorCode.GENERIC_ERROR
        ) from None
    text = text or ""
    if data_type is DataType.NULL:
        return None
    if data_type is DataType.UNSIGNED_INT_64BIT:
        match = _UNSIGNED_PREFIX.match(text)
        return int(match.group(1)) & UINT64_MAX if match else 0
    if data_type is DataType.IEEE754_BINARY64:
        match = _FLOAT_PREFIX.match(text)
        return float(match.group()) if match else 0.0
    if data_type is DataType.UNICODE_STRING:
        return text
    try:
        if data_type is DataType.DATE:
            return dt.date.fromisoformat(text.strip())
        return dt.time.fromisoformat(text.strip())
    except ValueError:
        raise TreeDBError(f"Invalid {data_type.value} value: {text!r}") from None