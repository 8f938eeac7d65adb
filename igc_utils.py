#!/usr/bin/env python3
"""
Utility functions for IGC to CSV converter

Strict fixed-column digit parsing, extension value normalization and
the date/time formatting used by the writer and the summary.
"""

import re
import math
from datetime import datetime, date, timezone
from typing import Optional, Union

from igc_model import ExtensionValue, ValueKind, ABSENT
from igc_constants import (
    YEAR_PIVOT,
    INT64_MIN,
    INT64_MAX,
    TIMESTAMP_FORMAT_ISO_Z,
    DATE_FORMAT_YMD,
    TIME_FORMAT_HM
)

_DIGITS = re.compile(r'[0-9]+')
_INTEGER = re.compile(r'[+-]?[0-9]+')
_REAL = re.compile(r'[+-]?([0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)([eE][+-]?[0-9]+)?')
_TRAILING_PADDING = re.compile(r'[-\s]+$')


def parseDigits(text: str) -> Optional[int]:
    """Parse a fixed-width run of ASCII digits, None if anything else is present"""
    if text and _DIGITS.fullmatch(text):
        return int(text)
    return None


def expandYear(two_digit_year: int) -> int:
    """Map a two-digit IGC year to a four-digit one (<80 is 20xx, else 19xx)"""
    if two_digit_year < YEAR_PIVOT:
        return 2000 + two_digit_year
    return 1900 + two_digit_year


def normalizeValue(raw: str) -> ExtensionValue:
    """
    Classify a raw fixed-width field as absent, integer, real or literal.

    Surrounding whitespace is trimmed. Empty or all-dash fields are absent.
    A trailing run of dashes is dropped (sensors pad missing low-order digits
    with '-') together with any blanks mixed into it, a leading dash is kept
    so negative numbers still parse.
    """
    value = _TRAILING_PADDING.sub('', raw.strip()).strip()
    if not value:
        return ABSENT

    if _INTEGER.fullmatch(value):
        number = int(value)
        if INT64_MIN <= number <= INT64_MAX:
            return ExtensionValue(ValueKind.INTEGER, number)
        return _realOrLiteral(value)

    if _REAL.fullmatch(value):
        return _realOrLiteral(value)

    return ExtensionValue(ValueKind.LITERAL, value)


def _realOrLiteral(value: str) -> ExtensionValue:
    number = float(value)
    if math.isfinite(number):
        return ExtensionValue(ValueKind.REAL, number)
    return ExtensionValue(ValueKind.LITERAL, value)


def formatValue(raw: str) -> str:
    """Normalize a raw field and return its canonical string ('' when absent)"""
    return normalizeValue(raw).render()


def toIsoZ(timestamp: datetime) -> str:
    """Render an instant as ISO-8601 UTC without fractional seconds"""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(TIMESTAMP_FORMAT_ISO_Z)


def toYMD(time_input: Union[datetime, date, str]) -> str:
    """Convert a date or time to YYYY/MM/DD format"""
    if isinstance(time_input, str):
        try:
            time_input = datetime.fromisoformat(time_input)
        except ValueError:
            return time_input  # Return original if cannot convert

    if isinstance(time_input, (datetime, date)):
        return time_input.strftime(DATE_FORMAT_YMD)

    return str(time_input)


def toHM(time_input: Union[datetime, str]) -> str:
    """Convert a time to HH:MM format"""
    if isinstance(time_input, str):
        try:
            time_input = datetime.fromisoformat(time_input)
        except ValueError:
            return time_input

    if isinstance(time_input, datetime):
        return time_input.strftime(TIME_FORMAT_HM)

    return str(time_input)
