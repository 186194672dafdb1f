"""Boat clash detection."""

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from ..models import BoatClash, BoatSilence, DayGroup, Entry
from .ordering import sort_clashes
from .silences import silence_keys


def count_boats(entries: Iterable[Entry]) -> Counter[str]:
    """Count entries per boat name, ignoring blank names."""
    counts: Counter[str] = Counter()
    for entry in entries:
        boat = (entry.boat or "").strip()
        if boat:
            counts[boat] += 1
    return counts


def detect_boat_clashes(
    buckets: Mapping[DayGroup, list[Entry]],
    silences: Iterable[BoatSilence],
    day_order: Sequence[str] | None = None,
    race_id: str | None = None,
) -> list[BoatClash]:
    """Find boats used by more than one entry in the same bucket.

    Silenced clashes are returned too, flagged ``silenced=True``.

    Args:
        buckets: Entries partitioned by (day, group)
        silences: Boat silences
        day_order: Day labels in race order; discovery order when None
        race_id: Only apply silences of this race

    Returns:
        List of BoatClash
    """
    silenced = silence_keys(silences, "boat", race_id)
    clashes: list[BoatClash] = []
    for key, entries in buckets.items():
        for boat, count in count_boats(entries).items():
            if count < 2:
                continue
            clashes.append(
                BoatClash(
                    day=key.day,
                    group=key.group,
                    boat=boat,
                    count=count,
                    silenced=(key.day, key.group, boat) in silenced,
                )
            )

    if day_order is None:
        return clashes
    return sort_clashes(clashes, day_order, "boat")
