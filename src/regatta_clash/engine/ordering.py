"""Deterministic display ordering for clashes."""

import re
from collections.abc import Sequence
from datetime import date, timedelta
from typing import TypeVar

from ..constants import DAY_LABEL_FORMAT, UNKNOWN_DAY_INDEX
from ..models import BladeClash, BoatClash

ClashT = TypeVar("ClashT", BoatClash, BladeClash)

_DIGITS = re.compile(r"(\d+)")


def natural_key(text: str) -> tuple:
    """Sort key comparing digit runs by value and text case-insensitively.

    "J9" sorts before "J10", and "eight a" next to "Eight A". The raw text is
    the final tie-break so the order is total.

    Args:
        text: String to build a key for

    Returns:
        Tuple usable as a sort key
    """
    parts = []
    for chunk in _DIGITS.split(text):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk), ""))
        else:
            parts.append((1, 0, chunk.casefold()))
    return (tuple(parts), text)


def day_positions(day_order: Sequence[str]) -> dict[str, int]:
    """Map each day label to its position; the first occurrence wins."""
    positions: dict[str, int] = {}
    for i, day in enumerate(day_order):
        positions.setdefault(day, i)
    return positions


def sort_clashes(
    clashes: list[ClashT], day_order: Sequence[str], name_attr: str
) -> list[ClashT]:
    """Order clashes by day position, then group, then item name.

    Days missing from ``day_order`` sort last.

    Args:
        clashes: Boat or blade clashes
        day_order: Day labels in race order
        name_attr: "boat" or "blade"

    Returns:
        New sorted list
    """
    positions = day_positions(day_order)
    return sorted(
        clashes,
        key=lambda c: (
            positions.get(c.day, UNKNOWN_DAY_INDEX),
            natural_key(c.group),
            natural_key(getattr(c, name_attr)),
        ),
    )


def format_day_label(day: date) -> str:
    """Format a date the way entry days are labelled, e.g. "Sat 14 Jun"."""
    return day.strftime(DAY_LABEL_FORMAT)


def enumerate_days(start: date, end: date | None = None) -> list[date]:
    """List every date from start to end inclusive (start only if end is unset)."""
    if end is None or end < start:
        return [start]
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def race_day_order(start: date | None, end: date | None = None) -> list[str]:
    """Day labels of a race in calendar order.

    Args:
        start: First race day; an empty order is returned when unknown
        end: Last race day, optional

    Returns:
        Day labels such as ["Sat 14 Jun", "Sun 15 Jun"]
    """
    if start is None:
        return []
    return [format_day_label(day) for day in enumerate_days(start, end)]
