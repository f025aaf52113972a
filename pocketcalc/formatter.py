"""Display formatting for pocketcalc.

Pure functions only: nothing here reads or mutates session state, so the
presentation layer may call them as often as it likes.
"""

from __future__ import annotations

import decimal
import math
import re

from pocketcalc.config import (
    DIVIDE_BY_ZERO,
    EMPTY_MEMORY,
    ERROR_SENTINELS,
    EXPONENTIAL_DIGITS,
    EXPONENTIAL_LOWER,
    EXPONENTIAL_UPPER,
)
from pocketcalc.models import MemoryBank

# Optional sign, digits, optional "." with optional trailing digits.
_NUMERIC_ENTRY_RE = re.compile(r"^-?\d+(\.\d*)?$")


def is_numeric_entry(entry: str) -> bool:
    """True if entry is a number under construction (commas ignored).

    "12." counts; error sentinels and exponential text do not.
    """
    return bool(_NUMERIC_ENTRY_RE.match(entry.replace(",", "")))


def parse_display_value(entry: str) -> float:
    """Parse entry text into a float. Never raises.

    Sentinels and anything unparsable give NaN, so callers detect every
    error with a single math.isfinite() check.
    """
    if entry in ERROR_SENTINELS:
        return math.nan
    try:
        return float(entry.replace(",", ""))
    except ValueError:
        return math.nan


def _group(integer_digits: str) -> str:
    """'1234567' → '1,234,567'."""
    return f"{int(integer_digits):,}"


def _positional(value: float) -> str:
    """Shortest round-trip text for value, without scientific notation."""
    return format(decimal.Decimal(repr(abs(value))), "f")


def format_number(value: float) -> str:
    """Format a committed value for display.

    Non-finite values become the divide-by-zero sentinel. Very large or very
    small magnitudes switch to exponential notation with six fractional
    digits and no '+' in the exponent (1.234568e12). Everything else gets
    comma-grouped integer digits; fractional digits are shown as-is.
    """
    value = float(value)
    if not math.isfinite(value):
        return DIVIDE_BY_ZERO

    magnitude = abs(value)
    if magnitude != 0 and (magnitude >= EXPONENTIAL_UPPER or magnitude < EXPONENTIAL_LOWER):
        return f"{value:.{EXPONENTIAL_DIGITS}e}".replace("+", "")

    sign = "-" if value < 0 else ""
    if value.is_integer():
        return sign + _group(_positional(value).split(".")[0])

    integer_part, _, decimal_part = _positional(value).partition(".")
    return f"{sign}{_group(integer_part)}.{decimal_part}"


def format_entry_for_display(entry: str) -> str:
    """Format the raw entry buffer while the user is typing.

    Groups the integer digits but keeps the decimal part verbatim, trailing
    '.' included, so "1234." shows as "1,234." and no typed digit is lost.
    Sentinels and exponential text pass through unchanged.
    """
    if entry in ERROR_SENTINELS or not is_numeric_entry(entry):
        return entry

    raw = entry.replace(",", "")
    sign = ""
    if raw.startswith("-"):
        sign, raw = "-", raw[1:]
    integer_part, dot, decimal_part = raw.partition(".")
    return f"{sign}{_group(integer_part)}{dot}{decimal_part}"


def format_memory_entries(bank: MemoryBank) -> list[str]:
    """Render the memory list, head first."""
    if not bank.entries:
        return [EMPTY_MEMORY]
    return [format_number(entry.value) for entry in bank.entries]
