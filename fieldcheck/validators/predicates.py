"""Predicate catalogue — small, stateless checks looked up by name.

Every predicate takes the value first and any extra parameters after it, and
returns a bool. None of them raise for odd input; a value of the wrong shape
simply fails the check.

Numeric checks are loose: numbers and numeric strings ("4", " 4.0", "1e3")
are treated alike, the way form input arrives.
"""

import math
import numbers
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Iterator, Optional

from email_validator import validate_email, EmailNotValidError
from pydantic import AnyUrl, TypeAdapter, ValidationError

from fieldcheck.config import get_settings
from fieldcheck.validators.reference_data import DATE_FORMAT_TOKENS

NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

_URL_ADAPTER = TypeAdapter(AnyUrl)


# ── Shape helpers ──

def is_array(value: Any) -> bool:
    """True for lists, tuples and mappings; strings are scalars."""
    return isinstance(value, (list, tuple, Mapping))


def iterate_array(values: Any) -> Iterator[Any]:
    """Yield the elements of an array in their natural order."""
    if isinstance(values, Mapping):
        yield from values.values()
    else:
        yield from values


def _flatten(values: Any) -> Iterator[Any]:
    for value in iterate_array(values):
        if is_array(value):
            yield from _flatten(value)
        else:
            yield value


def _stringify(value: Any) -> str:
    # None and False join as nothing, True as "1"
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


# ── Numeric ──

def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Real):
        return True
    if isinstance(value, str):
        return NUMERIC_STRING.match(value) is not None
    return False


def _to_number(value: Any) -> numbers.Real:
    # numbers pass through untouched so big ints never meet float()
    if isinstance(value, numbers.Real):
        return value
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def is_integer(value: Any) -> bool:
    """Integral by floor-equality, so 4.0 and "4.0" count as integers."""
    if not is_number(value):
        return False
    number = _to_number(value)
    try:
        return math.floor(number) == number
    except (OverflowError, ValueError):
        # infinities and NaN
        return False


def is_float(value: Any) -> bool:
    return is_number(value) and not is_integer(value)


def is_positive(value: Any) -> bool:
    return is_number(value) and _to_number(value) > 0


def is_negative(value: Any) -> bool:
    return is_number(value) and _to_number(value) < 0


def is_zero(value: Any) -> bool:
    return is_number(value) and _to_number(value) == 0


def is_non_zero(value: Any) -> bool:
    return is_number(value) and _to_number(value) != 0


# ── Strings and collections ──

def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_not_too_long(value: Any, max_length: int) -> bool:
    return len(_stringify(value)) <= max_length


def is_empty_string(value: Any) -> bool:
    """Whitespace-only strings are empty."""
    return _stringify(value).strip() == ""


def is_empty_array(values: Any) -> bool:
    """Empty when nothing but whitespace remains after flattening and joining.

    [] and ["", " "] are empty; [0] is not, since 0 joins as "0".
    """
    if not is_array(values):
        return is_empty_string(values)
    return "".join(_stringify(value) for value in _flatten(values)).strip() == ""


def is_empty(value: Any) -> bool:
    return is_empty_array(value) if is_array(value) else is_empty_string(value)


def is_not_empty(value: Any) -> bool:
    return not is_empty(value)


# ── Dates and times ──

def _render(moment: datetime, token: str) -> str:
    if token == "j":
        return str(moment.day)
    if token == "n":
        return str(moment.month)
    if token == "G":
        return str(moment.hour)
    if token == "g":
        return str(int(moment.strftime("%I")))
    if token == "a":
        return moment.strftime("%p").lower()
    return moment.strftime(DATE_FORMAT_TOKENS[token])


def _parse_format(fmt: str) -> list[tuple[bool, str]]:
    """Split a letter-token format into (is_token, text) parts; backslash escapes."""
    parts = []
    escaped = False
    for char in fmt:
        if escaped:
            parts.append((False, char))
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in DATE_FORMAT_TOKENS:
            parts.append((True, char))
        else:
            parts.append((False, char))
    return parts


def _round_trips(value: Any, fmt: str) -> bool:
    if not isinstance(value, str):
        return False

    # strftime-style formats are used as they are
    if "%" in fmt:
        try:
            return datetime.strptime(value, fmt).strftime(fmt) == value
        except ValueError:
            return False

    parts = _parse_format(fmt)
    directives = "".join(
        DATE_FORMAT_TOKENS[text] if is_token else text.replace("%", "%%")
        for is_token, text in parts
    )
    try:
        moment = datetime.strptime(value, directives)
    except ValueError:
        return False

    rendered = "".join(_render(moment, text) if is_token else text for is_token, text in parts)
    return rendered == value


def is_date(value: Any, fmt: Optional[str] = None) -> bool:
    """True when value parses under fmt and reformats to the identical string.

    "02/30/2021" fails under "m/d/Y" (no such day); "3/1/2021" fails too
    because the format pads to "03/01/2021".
    """
    return _round_trips(value, fmt or get_settings().DEFAULT_DATE_FORMAT)


def is_time(value: Any, fmt: Optional[str] = None) -> bool:
    return _round_trips(value, fmt or get_settings().DEFAULT_TIME_FORMAT)


# ── Formats ──

def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True
