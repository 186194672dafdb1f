"""Tolerant coercion of raw document values.

Documents come from a schemaless store or from spreadsheets, so any field may
be absent, NaN or of the wrong type. Each helper returns a fallback instead of
raising and, when given an ``IssueCollector``, records what it had to do.
"""

import math
import numbers
from datetime import date, datetime, timezone
from typing import Any

import pandas as pd

from .issues import IssueCollector

TRUE_STRINGS = {"true", "yes", "y", "1"}
FALSE_STRINGS = {"false", "no", "n", "0", ""}


def is_missing(value: Any) -> bool:
    """Check if a raw value counts as absent (None, NaN, NaT, pd.NA)."""
    if value is None:
        return True
    if pd.api.types.is_scalar(value):
        try:
            return bool(pd.isna(value))
        except (TypeError, ValueError):
            return False
    return False


def as_record(value: Any) -> dict[str, Any]:
    """Return value if it is a mapping, else an empty dict."""
    if isinstance(value, dict):
        return value
    return {}


def as_string(
    value: Any,
    fallback: str = "",
    *,
    required: bool = False,
    issues: IssueCollector | None = None,
    field: str | None = None,
) -> str:
    """Coerce a raw value to a string.

    Args:
        value: Raw value
        fallback: Returned when the value is missing
        required: Record a missing-field error when the value is absent or blank
        issues: Optional issue collector
        field: Field name used in issue messages

    Returns:
        String value (never None)
    """
    name = field or "value"
    if is_missing(value):
        if required and issues is not None:
            issues.missing(name)
        return fallback

    if isinstance(value, str):
        if required and not value.strip() and issues is not None:
            issues.missing(name)
        return value

    if issues is not None:
        issues.type_fallback(name, value, "string")
    # Whole floats from spreadsheets ("12.0") read as their integer text
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_number(
    value: Any,
    fallback: float | int | None = None,
    *,
    issues: IssueCollector | None = None,
    field: str | None = None,
) -> float | int | None:
    """Coerce a raw value to a finite number.

    Integral values are returned as ``int``. Non-finite or unparseable values
    return the fallback.
    """
    if is_missing(value):
        return fallback

    number: float | None = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            number = None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            number = None

    if number is None or not math.isfinite(number):
        if issues is not None:
            issues.type_fallback(field or "value", value, "number")
        return fallback

    if number.is_integer():
        return int(number)
    return number


def as_bool(
    value: Any,
    fallback: bool | None = False,
    *,
    issues: IssueCollector | None = None,
    field: str | None = None,
) -> bool | None:
    """Coerce a raw value to a boolean.

    Accepts real booleans and the usual spreadsheet spellings ("TRUE", "no").
    """
    if is_missing(value):
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False

    if issues is not None:
        issues.type_fallback(field or "value", value, "boolean")
    return fallback


def as_string_list(
    value: Any,
    fallback: list[str] | None = None,
    *,
    issues: IssueCollector | None = None,
    field: str | None = None,
) -> list[str]:
    """Coerce a raw value to a list of strings.

    Spreadsheet cells hold comma-separated text and are split accordingly.
    """
    if fallback is None:
        fallback = []
    if is_missing(value):
        return list(fallback)
    if isinstance(value, (list, tuple)):
        return [as_string(item) for item in value]
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]

    if issues is not None:
        issues.type_fallback(field or "value", value, "list")
    return list(fallback)


def _date_from_epoch(value: Any, scale: int = 1) -> date | None:
    """UTC calendar date of an epoch timestamp, None when out of range."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return None
    try:
        seconds = value / scale
        if not math.isfinite(seconds):
            return None
        return datetime.fromtimestamp(seconds, tz=timezone.utc).date()
    except (OverflowError, OSError, ValueError):
        return None


def as_date(
    value: Any,
    fallback: date | None = None,
    *,
    required: bool = False,
    issues: IssueCollector | None = None,
    field: str | None = None,
) -> date | None:
    """Coerce a raw value to a calendar date.

    Handles date/datetime objects, ISO strings, epoch milliseconds and the
    ``{"_seconds": ...}`` shape produced by document store exports.
    """
    name = field or "value"
    if is_missing(value):
        if required and issues is not None:
            issues.missing(name)
        return fallback

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    stamp_date = None
    if isinstance(value, dict):
        stamp_date = _date_from_epoch(value.get("_seconds", value.get("seconds")))
    elif isinstance(value, numbers.Real) and not isinstance(value, bool):
        stamp_date = _date_from_epoch(value, scale=1000)
    if stamp_date is not None:
        return stamp_date

    if isinstance(value, str):
        try:
            stamp = pd.Timestamp(value.strip())
        except (OverflowError, ValueError):
            stamp = pd.NaT
        if not pd.isna(stamp):
            return stamp.date()

    if issues is not None:
        issues.type_fallback(name, value, "date")
    return fallback
